"""
Dialect Registry Module
=======================
Registry of per-dialect privilege and variable checks.

Adding a dialect means writing one checker class and decorating it with
register_dialect_checker; the check engine never names a dialect.

Classes:
    - DialectDataSourceChecker: Protocol for a dialect's checks
    - NoRulesDialectChecker: Checker for dialects without extra rules

Functions:
    - register_dialect_checker: Class decorator registering a checker
    - find_dialect_checker: Look up the checker for a database type
"""

import importlib
import logging
from typing import Callable, Dict, Optional, Protocol, Type

from preflight_scripts.connection_providers import ConnectionProvider
from preflight_scripts.database_types import DatabaseType


logger = logging.getLogger(__name__)

_BUILTIN_CHECKERS_PACKAGE = 'preflight_scripts.dialect_checkers'

DIALECT_CHECKER_REGISTRY: Dict[str, Type['DialectDataSourceChecker']] = {}


class DialectDataSourceChecker(Protocol):
    """Dialect-specific checks run against a source data source."""

    def check_privilege(self, data_source: ConnectionProvider) -> None:
        """Raise a DialectCheckError if the user lacks required privileges."""
        ...

    def check_variable(self, data_source: ConnectionProvider) -> None:
        """Raise a DialectCheckError if a server variable has an unsupported value."""
        ...


class NoRulesDialectChecker:
    """Checker for dialects with no privilege or variable requirements."""

    def check_privilege(self, data_source: ConnectionProvider) -> None:
        pass

    def check_variable(self, data_source: ConnectionProvider) -> None:
        pass


def register_dialect_checker(
    database_type_name: str
) -> Callable[[Type[DialectDataSourceChecker]], Type[DialectDataSourceChecker]]:
    """
    Register a checker class for a database type name.

    Example:
        >>> @register_dialect_checker('MySQL')
        >>> class MySQLDataSourceChecker:
        >>>     ...
    """
    def decorator(checker_class: Type[DialectDataSourceChecker]) -> Type[DialectDataSourceChecker]:
        DIALECT_CHECKER_REGISTRY[database_type_name.lower()] = checker_class
        logger.debug(f"Registered dialect checker {checker_class.__name__} for {database_type_name}")
        return checker_class

    return decorator


def find_dialect_checker(database_type: DatabaseType) -> Optional[DialectDataSourceChecker]:
    """
    Find the checker for a database type, falling back to its trunk type.

    Args:
        database_type: Database type to look up

    Returns:
        DialectDataSourceChecker or None if no checker is registered
    """
    importlib.import_module(_BUILTIN_CHECKERS_PACKAGE)

    current: Optional[DatabaseType] = database_type
    while current is not None:
        checker_class = DIALECT_CHECKER_REGISTRY.get(current.name.lower())
        if checker_class is not None:
            return checker_class()
        current = current.trunk

    return None
