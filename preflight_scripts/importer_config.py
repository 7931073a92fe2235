"""
Importer Configuration Module
=============================
Read-only description of what the migration job will write: the logical
target tables and the schema each one lives in.

Classes:
    - TableAndSchemaNameMapper: Resolve a logical table name to its schema
    - ImporterConfiguration: Logical table names plus the name mapper
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Tuple


class TableAndSchemaNameMapper:
    """
    Map logical table names to schema names.

    Lookups are case-insensitive. Tables without a mapping resolve to None.

    Example:
        >>> mapper = TableAndSchemaNameMapper.from_qualified_names(["s.orders", "items"])
        >>> mapper.get_schema_name("ORDERS")
        's'
        >>> mapper.get_schema_name("items") is None
        True
    """

    def __init__(self, table_schema_map: Optional[Mapping[str, Optional[str]]] = None):
        self._mapping: Dict[str, Optional[str]] = {
            table.lower(): schema for table, schema in (table_schema_map or {}).items()
        }

    @classmethod
    def from_qualified_names(cls, qualified_names: Iterable[str]) -> 'TableAndSchemaNameMapper':
        """
        Build from 'schema.table' or bare 'table' names.

        Table names are compared case-insensitively, so 'S.Orders' and
        's.orders' are the same entry.

        Raises:
            ValueError: If a name has more than one '.' or an empty part, or if
                one table name is listed under two different schemas
        """
        table_schema_map: Dict[str, Optional[str]] = {}
        for qualified_name in qualified_names:
            schema_name, table_name = split_qualified_name(qualified_name)
            key = table_name.lower()
            if key in table_schema_map and not _same_schema(table_schema_map[key], schema_name):
                raise ValueError(
                    f"Table '{table_name}' is listed under more than one schema: "
                    f"{table_schema_map[key]!r} and {schema_name!r}"
                )
            table_schema_map[key] = schema_name
        return cls(table_schema_map)

    def get_schema_name(self, logic_table_name: str) -> Optional[str]:
        """Return the schema of logic_table_name, or None if unmapped."""
        return self._mapping.get(logic_table_name.lower())

    def __repr__(self) -> str:
        return f"TableAndSchemaNameMapper({self._mapping!r})"


def _same_schema(left: Optional[str], right: Optional[str]) -> bool:
    if left is None or right is None:
        return left is right
    return left.lower() == right.lower()


def split_qualified_name(qualified_name: str) -> Tuple[Optional[str], str]:
    """
    Split 'schema.table' into (schema, table); bare names give (None, table).

    Example:
        >>> split_qualified_name("s.orders")
        ('s', 'orders')
    """
    parts = [part.strip() for part in qualified_name.split('.')]
    if len(parts) > 2 or any(part == '' for part in parts):
        raise ValueError(f"Expected 'table' or 'schema.table', got: {qualified_name!r}")
    if len(parts) == 1:
        return None, parts[0]
    return parts[0], parts[1]


@dataclass(frozen=True)
class ImporterConfiguration:
    """
    Target-side tables of a migration job.

    Attributes:
        logic_table_names: Logical table names in job order, without duplicates
        table_and_schema_name_mapper: Schema resolution for those names
    """

    logic_table_names: Tuple[str, ...]
    table_and_schema_name_mapper: TableAndSchemaNameMapper = field(
        default_factory=TableAndSchemaNameMapper
    )

    def __post_init__(self):
        # Same case policy as the mapper; the first spelling seen is kept
        unique_names: Dict[str, str] = {}
        for logic_table_name in self.logic_table_names:
            unique_names.setdefault(logic_table_name.lower(), logic_table_name)
        object.__setattr__(self, 'logic_table_names', tuple(unique_names.values()))

    @classmethod
    def from_qualified_names(cls, qualified_names: Iterable[str]) -> 'ImporterConfiguration':
        """
        Build from a list of 'schema.table' / 'table' names.

        Raises:
            ValueError: If a name is malformed or one table is listed under
                two different schemas

        Example:
            >>> config = ImporterConfiguration.from_qualified_names(["s.orders", "s.items"])
            >>> config.logic_table_names
            ('orders', 'items')
        """
        qualified_names = list(qualified_names)
        logic_table_names = tuple(split_qualified_name(each)[1] for each in qualified_names)
        return cls(logic_table_names, TableAndSchemaNameMapper.from_qualified_names(qualified_names))
