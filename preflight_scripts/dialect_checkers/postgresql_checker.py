"""
PostgreSQL Data Source Checker
==============================
Logical decoding needs a superuser or a role with REPLICATION, and a server
running with wal_level = logical.
"""

import logging
from contextlib import closing
from typing import Optional, Tuple

from preflight_scripts.connection_providers import ConnectionProvider, borrow_connection
from preflight_scripts.dialect_registry import register_dialect_checker
from preflight_scripts.error_handling import (
    CheckPrivilegeFailedError,
    CheckVariableFailedError,
    MissingRequiredPrivilegeError,
    UnexpectedVariableValueError,
)


logger = logging.getLogger(__name__)

SHOW_ROLE_SQL = "SELECT rolsuper, rolreplication FROM pg_roles WHERE rolname = current_user"

SHOW_WAL_LEVEL_SQL = "SHOW wal_level"

REQUIRED_WAL_LEVEL = 'logical'


@register_dialect_checker('PostgreSQL')
class PostgreSQLDataSourceChecker:
    """Privilege and variable checks for PostgreSQL logical replication."""

    def check_privilege(self, data_source: ConnectionProvider) -> None:
        try:
            role = self._fetch_one(data_source, SHOW_ROLE_SQL)
        except Exception as e:
            raise CheckPrivilegeFailedError(e) from e

        is_super_role, is_replication_role = (False, False) if role is None else (bool(role[0]), bool(role[1]))
        if not (is_super_role or is_replication_role):
            raise MissingRequiredPrivilegeError(['REPLICATION'])

        logger.info("✓ PostgreSQL replication privileges present")

    def check_variable(self, data_source: ConnectionProvider) -> None:
        try:
            row = self._fetch_one(data_source, SHOW_WAL_LEVEL_SQL)
        except Exception as e:
            raise CheckVariableFailedError(e) from e

        wal_level = None if row is None else str(row[0])
        if wal_level is None or wal_level.lower() != REQUIRED_WAL_LEVEL:
            raise UnexpectedVariableValueError('wal_level', REQUIRED_WAL_LEVEL, wal_level)

        logger.info("✓ PostgreSQL wal_level is logical")

    @staticmethod
    def _fetch_one(data_source: ConnectionProvider, sql: str) -> Optional[Tuple]:
        with borrow_connection(data_source) as connection:
            with closing(connection.cursor()) as cursor:
                cursor.execute(sql)
                return cursor.fetchone()
