"""
SQL Builder Module
==================
Builds the dialect-correct SQL used by the pre-flight checks.

The emptiness probe selects a constant from at most one row, so running it
against a large table costs one index/heap lookup and never ships row
content back to the caller.

Classes:
    - PipelineSQLBuilder: Quote identifiers and build check queries
"""

import logging
import re
from typing import Optional

from preflight_scripts.database_types import (
    DatabaseType,
    FETCH_FIRST_PROBE,
    LOWER_CASE,
    ROWNUM_PROBE,
    TOP_PROBE,
    UPPER_CASE,
)


logger = logging.getLogger(__name__)

REGULAR_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_$]*")


class PipelineSQLBuilder:
    """
    Build pipeline check SQL for one database type.

    Example:
        >>> builder = PipelineSQLBuilder(get_database_type('PostgreSQL'))
        >>> builder.build_check_empty_sql('s', 'orders')
        'SELECT 1 FROM "s"."orders" LIMIT 1'
    """

    def __init__(self, database_type: DatabaseType):
        self.database_type = database_type

    def quote_identifier(self, identifier: str) -> str:
        """
        Quote a single identifier, doubling any embedded closing quote.

        A regular identifier (letters, digits, '_' and '$', not starting
        with a digit) is first folded to the case the dialect stores
        unquoted names in, so 'orders' resolves to a table created as
        orders on Oracle or Snowflake. Any other identifier is quoted as
        written.

        Args:
            identifier: Raw identifier text

        Returns:
            str: Quoted identifier safe to embed in SQL

        Example:
            >>> PipelineSQLBuilder(get_database_type('Snowflake')).quote_identifier('orders')
            '"ORDERS"'
        """
        identifier = self.fold_identifier(str(identifier))
        quote_start = self.database_type.quote_start
        quote_end = self.database_type.quote_end
        escaped = identifier.replace(quote_end, quote_end * 2)
        return f"{quote_start}{escaped}{quote_end}"

    def fold_identifier(self, identifier: str) -> str:
        """Fold a regular identifier the way the dialect folds unquoted names."""
        if not REGULAR_IDENTIFIER.fullmatch(identifier):
            return identifier
        if self.database_type.identifier_case == UPPER_CASE:
            return identifier.upper()
        if self.database_type.identifier_case == LOWER_CASE:
            return identifier.lower()
        return identifier

    def build_qualified_table_name(self, schema_name: Optional[str], table_name: str) -> str:
        """
        Build the quoted, optionally schema-qualified, table name.

        The schema is only used when the dialect has a schema level and the
        schema name is non-empty.

        Raises:
            ValueError: If table_name is empty
        """
        if not table_name:
            raise ValueError("Table name must not be empty")

        quoted_table = self.quote_identifier(table_name)
        if self.database_type.supports_schema and schema_name:
            return f"{self.quote_identifier(schema_name)}.{quoted_table}"
        return quoted_table

    def build_check_empty_sql(self, schema_name: Optional[str], table_name: str) -> str:
        """
        Build a query returning one row if the table has data, zero otherwise.

        Args:
            schema_name: Physical schema, None or empty if not applicable
            table_name: Table name

        Returns:
            str: Single-row-bounded existence probe

        Example:
            >>> PipelineSQLBuilder(get_database_type('SQLServer')).build_check_empty_sql('dbo', 't_order')
            'SELECT TOP 1 1 FROM [dbo].[t_order]'
        """
        qualified_table_name = self.build_qualified_table_name(schema_name, table_name)
        probe_style = self.database_type.probe_style

        if probe_style == TOP_PROBE:
            sql = f"SELECT TOP 1 1 FROM {qualified_table_name}"
        elif probe_style == ROWNUM_PROBE:
            sql = f"SELECT 1 FROM {qualified_table_name} WHERE ROWNUM < 2"
        elif probe_style == FETCH_FIRST_PROBE:
            sql = f"SELECT 1 FROM {qualified_table_name} FETCH FIRST 1 ROWS ONLY"
        else:
            sql = f"SELECT 1 FROM {qualified_table_name} LIMIT 1"

        logger.debug(f"Check empty SQL for {self.database_type.name}: {sql}")
        return sql
