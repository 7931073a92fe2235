"""
Database Types Module
=====================
Identifies the database dialects the pre-flight checks know about.

A DatabaseType carries only what the checks need to talk to a dialect:
how identifiers are quoted and case-folded, whether tables live under a
schema, how a single-row probe is bounded, and which trunk dialect it
branches from.

Functions:
    - get_database_type: Look up a registered database type by name
    - list_database_types: Names of all registered database types
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


# Probe styles understood by the SQL builder
LIMIT_PROBE = 'limit'
TOP_PROBE = 'top'
ROWNUM_PROBE = 'rownum'
FETCH_FIRST_PROBE = 'fetch_first'

# How a dialect stores unquoted identifiers; None keeps them as written
UPPER_CASE = 'upper'
LOWER_CASE = 'lower'


@dataclass(frozen=True)
class DatabaseType:
    """
    Immutable description of a database dialect.

    Attributes:
        name: Canonical dialect name (e.g. 'MySQL')
        quote_start: Opening identifier quote character
        quote_end: Closing identifier quote character
        supports_schema: True if tables are qualified by a schema name
        probe_style: How the emptiness probe is bounded to one row
        identifier_case: UPPER_CASE or LOWER_CASE if unquoted identifiers are
            folded to that case, None if they are kept as written
        trunk_name: Dialect this one branches from, if any
    """

    name: str
    quote_start: str = '"'
    quote_end: str = '"'
    supports_schema: bool = True
    probe_style: str = LIMIT_PROBE
    identifier_case: Optional[str] = None
    trunk_name: Optional[str] = None

    @property
    def trunk(self) -> Optional['DatabaseType']:
        """Trunk database type, or None for a root dialect."""
        if self.trunk_name is None:
            return None
        return get_database_type(self.trunk_name)

    def __str__(self) -> str:
        return self.name


_DATABASE_TYPES: Dict[str, DatabaseType] = {}


def _register(database_type: DatabaseType) -> DatabaseType:
    _DATABASE_TYPES[database_type.name.lower()] = database_type
    return database_type


MYSQL = _register(DatabaseType('MySQL', quote_start='`', quote_end='`', supports_schema=False))
MARIADB = _register(DatabaseType(
    'MariaDB', quote_start='`', quote_end='`', supports_schema=False, trunk_name='MySQL'
))
POSTGRESQL = _register(DatabaseType('PostgreSQL', identifier_case=LOWER_CASE))
OPENGAUSS = _register(DatabaseType('openGauss', identifier_case=LOWER_CASE))
ORACLE = _register(DatabaseType('Oracle', probe_style=ROWNUM_PROBE, identifier_case=UPPER_CASE))
SQLSERVER = _register(DatabaseType('SQLServer', quote_start='[', quote_end=']', probe_style=TOP_PROBE))
DB2 = _register(DatabaseType('DB2', probe_style=FETCH_FIRST_PROBE, identifier_case=UPPER_CASE))
H2 = _register(DatabaseType('H2', identifier_case=UPPER_CASE))
SQLITE = _register(DatabaseType('SQLite'))
SNOWFLAKE = _register(DatabaseType('Snowflake', identifier_case=UPPER_CASE))


def get_database_type(name: str) -> DatabaseType:
    """
    Look up a registered database type by name (case-insensitive).

    Args:
        name: Dialect name, e.g. 'mysql' or 'PostgreSQL'

    Returns:
        DatabaseType: The registered type

    Raises:
        ValueError: If no database type is registered under that name

    Example:
        >>> get_database_type('mariadb').trunk.name
        'MySQL'
    """
    database_type = _DATABASE_TYPES.get(str(name).strip().lower())
    if database_type is None:
        raise ValueError(
            f"Unsupported database type '{name}'. "
            f"Valid types: {', '.join(list_database_types())}"
        )
    return database_type


def list_database_types() -> List[str]:
    """Return the canonical names of all registered database types."""
    return [each.name for each in _DATABASE_TYPES.values()]
