"""
Check Engine Module
===================
Runs the pre-flight checks on the source and target data sources of a
migration job.

Every check is fail-fast: it raises for the first violated precondition in
caller order and contacts nothing after that. Callers get one precise
diagnosis rather than a list; this is the contract, not a shortcut.

Classes:
    - DataSourceCheckEngine: Connection, emptiness, privilege and variable checks
"""

import logging
from contextlib import closing
from typing import Iterable, Optional

from preflight_scripts.connection_providers import ConnectionProvider, borrow_connection
from preflight_scripts.database_types import DatabaseType
from preflight_scripts.dialect_registry import NoRulesDialectChecker, find_dialect_checker
from preflight_scripts.error_handling import (
    PrepareJobWithInvalidConnectionError,
    PrepareJobWithTargetTableNotEmptyError,
)
from preflight_scripts.importer_config import ImporterConfiguration, TableAndSchemaNameMapper
from preflight_scripts.sql_builder import PipelineSQLBuilder


logger = logging.getLogger(__name__)


class DataSourceCheckEngine:
    """
    Pre-flight checks for one database type.

    The dialect checker is resolved once here; dialects without registered
    rules get a checker whose checks do nothing.

    Example:
        >>> engine = DataSourceCheckEngine(get_database_type('MySQL'))
        >>> engine.check_source_data_source(source)
        >>> engine.check_target_data_source(target, importer_config)
    """

    def __init__(self, database_type: DatabaseType):
        self.database_type = database_type
        self.checker = find_dialect_checker(database_type) or NoRulesDialectChecker()
        self.sql_builder = PipelineSQLBuilder(database_type)

    def check_source_data_source(self, data_source: ConnectionProvider) -> None:
        """
        Check source data source: connection, privileges, then variables.

        Raises:
            PrepareJobWithInvalidConnectionError: If the source is unreachable
            DialectCheckError: If a dialect privilege or variable check fails
        """
        data_sources = [data_source]
        self.check_connection(data_sources)
        self.check_privilege(data_sources)
        self.check_variable(data_sources)

    def check_target_data_source(
        self,
        data_source: ConnectionProvider,
        importer_config: ImporterConfiguration
    ) -> None:
        """
        Check target data source: connection, then every target table is empty.

        Raises:
            PrepareJobWithInvalidConnectionError: If the target is unreachable
            PrepareJobWithTargetTableNotEmptyError: If a target table has rows
        """
        data_sources = [data_source]
        self.check_connection(data_sources)
        self.check_target_table(
            data_sources,
            importer_config.table_and_schema_name_mapper,
            importer_config.logic_table_names
        )

    def check_connection(self, data_sources: Iterable[ConnectionProvider]) -> None:
        """
        Open and immediately release a connection on each data source.

        Raises:
            PrepareJobWithInvalidConnectionError: On the first data source that fails
        """
        for each in data_sources:
            try:
                with borrow_connection(each):
                    pass
            except Exception as e:
                logger.error(f"✗ Connection check failed for {each!r}: {e}")
                raise PrepareJobWithInvalidConnectionError(e) from e

            logger.info(f"✓ Connection check passed for {each!r}")

    def check_target_table(
        self,
        data_sources: Iterable[ConnectionProvider],
        table_and_schema_name_mapper: TableAndSchemaNameMapper,
        logic_table_names: Iterable[str]
    ) -> None:
        """
        Check that every logical table is empty on every data source.

        Args:
            data_sources: Target data sources
            table_and_schema_name_mapper: Resolves each table's schema
            logic_table_names: Tables to check, in order

        Raises:
            PrepareJobWithTargetTableNotEmptyError: On the first non-empty table
            PrepareJobWithInvalidConnectionError: If connecting or probing fails
        """
        logic_table_names = list(logic_table_names)
        for each in data_sources:
            for table_name in logic_table_names:
                schema_name = table_and_schema_name_mapper.get_schema_name(table_name)
                if not self._check_empty(each, schema_name, table_name):
                    logger.error(f"✗ Target table {table_name} is not empty")
                    raise PrepareJobWithTargetTableNotEmptyError(table_name)

                logger.info(f"✓ Target table {table_name} is empty")

    def _check_empty(
        self,
        data_source: ConnectionProvider,
        schema_name: Optional[str],
        table_name: str
    ) -> bool:
        sql = self.sql_builder.build_check_empty_sql(schema_name, table_name)
        try:
            with borrow_connection(data_source) as connection:
                with closing(connection.cursor()) as cursor:
                    cursor.execute(sql)
                    return cursor.fetchone() is None
        except Exception as e:
            logger.error(f"✗ Emptiness probe failed for {table_name}: {e}")
            raise PrepareJobWithInvalidConnectionError(e) from e

    def check_privilege(self, data_sources: Iterable[ConnectionProvider]) -> None:
        """
        Run the dialect privilege check on each data source.

        Dialect failures propagate unchanged.
        """
        for each in data_sources:
            self.checker.check_privilege(each)

    def check_variable(self, data_sources: Iterable[ConnectionProvider]) -> None:
        """
        Run the dialect variable check on each data source.

        Dialect failures propagate unchanged.
        """
        for each in data_sources:
            self.checker.check_variable(each)
