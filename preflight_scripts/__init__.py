"""
Preflight Scripts Package
=========================
Pre-flight validation for data-migration jobs.

Modules:
    - database_types: Dialect identity and quoting rules
    - sql_builder: Dialect-correct check queries
    - connection_providers: Borrowing connections from data sources
    - importer_config: Target tables and their schemas
    - dialect_registry: Per-dialect privilege/variable checks
    - error_handling: Failure taxonomy and diagnosis formatting
    - check_engine: Pre-flight check orchestration
"""

from preflight_scripts.database_types import (
    DatabaseType,
    get_database_type,
    list_database_types
)

from preflight_scripts.sql_builder import PipelineSQLBuilder

from preflight_scripts.connection_providers import (
    ConnectionProvider,
    DBAPIConnectionProvider,
    SnowflakeConnectionProvider,
    borrow_connection
)

from preflight_scripts.importer_config import (
    ImporterConfiguration,
    TableAndSchemaNameMapper
)

from preflight_scripts.dialect_registry import (
    DialectDataSourceChecker,
    NoRulesDialectChecker,
    register_dialect_checker,
    find_dialect_checker
)

from preflight_scripts.error_handling import (
    PipelineError,
    PrepareJobWithInvalidConnectionError,
    PrepareJobWithTargetTableNotEmptyError,
    DialectCheckError,
    CheckPrivilegeFailedError,
    MissingRequiredPrivilegeError,
    CheckVariableFailedError,
    UnexpectedVariableValueError,
    ConfigurationError,
    handle_check_error,
    create_error_message,
    classify_error
)

from preflight_scripts.check_engine import DataSourceCheckEngine

__all__ = [
    # database_types
    'DatabaseType',
    'get_database_type',
    'list_database_types',

    # sql_builder
    'PipelineSQLBuilder',

    # connection_providers
    'ConnectionProvider',
    'DBAPIConnectionProvider',
    'SnowflakeConnectionProvider',
    'borrow_connection',

    # importer_config
    'ImporterConfiguration',
    'TableAndSchemaNameMapper',

    # dialect_registry
    'DialectDataSourceChecker',
    'NoRulesDialectChecker',
    'register_dialect_checker',
    'find_dialect_checker',

    # error_handling
    'PipelineError',
    'PrepareJobWithInvalidConnectionError',
    'PrepareJobWithTargetTableNotEmptyError',
    'DialectCheckError',
    'CheckPrivilegeFailedError',
    'MissingRequiredPrivilegeError',
    'CheckVariableFailedError',
    'UnexpectedVariableValueError',
    'ConfigurationError',
    'handle_check_error',
    'create_error_message',
    'classify_error',

    # check_engine
    'DataSourceCheckEngine',
]

__version__ = '1.0.0'
