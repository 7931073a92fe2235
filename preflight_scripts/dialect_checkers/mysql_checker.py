"""
MySQL Data Source Checker
=========================
Binlog-based incremental capture needs a user that can read the binlog and a
server that writes full row images.

Required grants (any one set, on *.*):
    - ALL PRIVILEGES
    - SELECT, REPLICATION SLAVE, REPLICATION CLIENT

Required variables:
    - LOG_BIN = ON
    - BINLOG_FORMAT = ROW
    - BINLOG_ROW_IMAGE = FULL
"""

import logging
from contextlib import closing
from typing import Dict, FrozenSet, List, Optional, Tuple

from preflight_scripts.connection_providers import ConnectionProvider, borrow_connection
from preflight_scripts.dialect_registry import register_dialect_checker
from preflight_scripts.error_handling import (
    CheckPrivilegeFailedError,
    CheckVariableFailedError,
    MissingRequiredPrivilegeError,
    UnexpectedVariableValueError,
)


logger = logging.getLogger(__name__)

SHOW_GRANTS_SQL = "SHOW GRANTS"

SHOW_VARIABLES_SQL = "SHOW VARIABLES LIKE '{}'"

GLOBAL_SCOPE = 'ON *.*'

REPLICATION_PRIVILEGES: Tuple[str, ...] = ('SELECT', 'REPLICATION SLAVE', 'REPLICATION CLIENT')

# Each set must appear in a single grant line together with GLOBAL_SCOPE
REQUIRED_PRIVILEGES: List[FrozenSet[str]] = [
    frozenset(['ALL PRIVILEGES']),
    frozenset(REPLICATION_PRIVILEGES),
]

REQUIRED_VARIABLES: Dict[str, str] = {
    'LOG_BIN': 'ON',
    'BINLOG_FORMAT': 'ROW',
    'BINLOG_ROW_IMAGE': 'FULL',
}


@register_dialect_checker('MySQL')
class MySQLDataSourceChecker:
    """Privilege and variable checks for MySQL binlog replication."""

    def check_privilege(self, data_source: ConnectionProvider) -> None:
        try:
            grants = self._fetch_grants(data_source)
        except Exception as e:
            raise CheckPrivilegeFailedError(e) from e

        for grant in grants:
            if self._matches_required_privileges(grant):
                logger.info("✓ MySQL replication privileges present")
                return

        raise MissingRequiredPrivilegeError(REPLICATION_PRIVILEGES)

    def _fetch_grants(self, data_source: ConnectionProvider) -> List[str]:
        with borrow_connection(data_source) as connection:
            with closing(connection.cursor()) as cursor:
                cursor.execute(SHOW_GRANTS_SQL)
                return [str(row[0]) for row in cursor.fetchall()]

    @staticmethod
    def _matches_required_privileges(grant: str) -> bool:
        grant = grant.upper()
        if GLOBAL_SCOPE not in grant:
            return False
        return any(
            all(privilege in grant for privilege in required)
            for required in REQUIRED_PRIVILEGES
        )

    def check_variable(self, data_source: ConnectionProvider) -> None:
        try:
            actual_values = self._fetch_variables(data_source)
        except Exception as e:
            raise CheckVariableFailedError(e) from e

        for variable_name, expected_value in REQUIRED_VARIABLES.items():
            actual_value = actual_values.get(variable_name)
            if actual_value is None or actual_value.upper() != expected_value:
                raise UnexpectedVariableValueError(variable_name, expected_value, actual_value)

        logger.info("✓ MySQL binlog variables are compatible")

    def _fetch_variables(self, data_source: ConnectionProvider) -> Dict[str, Optional[str]]:
        result: Dict[str, Optional[str]] = {}
        with borrow_connection(data_source) as connection:
            with closing(connection.cursor()) as cursor:
                for variable_name in REQUIRED_VARIABLES:
                    cursor.execute(SHOW_VARIABLES_SQL.format(variable_name))
                    row = cursor.fetchone()
                    result[variable_name] = None if row is None else str(row[1])
        return result
