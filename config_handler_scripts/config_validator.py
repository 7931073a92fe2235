"""
Configuration Validator Module
==============================
Validates migration job configuration for correctness and completeness.

Functions:
    - validate_config: Validate complete configuration
    - validate_job_metadata: Check job metadata section
    - validate_data_source: Check a source/target data source section
    - validate_importer: Check the target table list
    - create_config_template: Skeleton configuration
"""

import logging
from typing import Dict, Any, List, Tuple

from preflight_scripts.database_types import get_database_type, list_database_types
from preflight_scripts.importer_config import TableAndSchemaNameMapper, split_qualified_name


logger = logging.getLogger(__name__)


def validate_config(config: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """
    Validate complete job configuration.

    Args:
        config: Job configuration dictionary

    Returns:
        tuple: (is_valid: bool, errors: list of error messages)

    Example:
        >>> is_valid, errors = validate_config(config)
        >>> if not is_valid:
        >>>     for error in errors:
        >>>         print(f"ERROR: {error}")
    """
    logger.info("Validating job configuration...")

    errors = []

    required_sections = [
        'job_metadata',
        'database_type',
        'source_data_source',
        'target_data_source',
        'importer'
    ]

    for section in required_sections:
        if section not in config:
            errors.append(f"Missing required section: {section}")

    if errors:
        return False, errors

    errors.extend(validate_job_metadata(config.get('job_metadata', {})))
    errors.extend(validate_database_type(config.get('database_type')))
    errors.extend(validate_data_source('source_data_source', config.get('source_data_source', {})))
    errors.extend(validate_data_source('target_data_source', config.get('target_data_source', {})))
    errors.extend(validate_importer(config.get('importer', {})))

    is_valid = len(errors) == 0

    if is_valid:
        logger.info("✓ Configuration validation passed")
    else:
        logger.error(f"✗ Configuration validation failed with {len(errors)} error(s)")
        for error in errors:
            logger.error(f"  - {error}")

    return is_valid, errors


def validate_job_metadata(metadata: Dict[str, Any]) -> List[str]:
    """Validate job metadata section."""
    errors = []

    if not metadata.get('job_name'):
        errors.append("job_metadata.job_name is required")

    if 'owner_email' in metadata and '@' not in str(metadata['owner_email']):
        errors.append(f"job_metadata.owner_email is invalid: {metadata['owner_email']}")

    return errors


def validate_database_type(database_type: Any) -> List[str]:
    """Validate the database type name."""
    if not database_type:
        return ["database_type is required"]

    try:
        get_database_type(database_type)
    except ValueError:
        return [
            f"database_type '{database_type}' is not valid. "
            f"Valid types: {', '.join(list_database_types())}"
        ]

    return []


def validate_data_source(section_name: str, data_source: Dict[str, Any]) -> List[str]:
    """
    Validate a data source section.

    A data source is either {'type': 'snowflake', 'connection': {...}} or
    {'driver': '<dbapi module>', 'connect_args': {...}}.
    """
    errors = []

    if not isinstance(data_source, dict):
        return [f"{section_name} must be an object"]

    if data_source.get('type') == 'snowflake':
        connection = data_source.get('connection')
        if not isinstance(connection, dict) or not connection.get('account'):
            errors.append(f"{section_name}.connection.account is required for snowflake")
    elif not data_source.get('driver'):
        errors.append(f"{section_name}.driver is required")
    elif not isinstance(data_source.get('connect_args', {}), dict):
        errors.append(f"{section_name}.connect_args must be an object")

    return errors


def validate_importer(importer: Dict[str, Any]) -> List[str]:
    """Validate the target table list."""
    errors = []

    tables = importer.get('tables') if isinstance(importer, dict) else None
    if not tables or not isinstance(tables, list):
        return ["importer.tables must be a non-empty list"]

    for table in tables:
        if not isinstance(table, str):
            errors.append(f"importer.tables entries must be strings, got {type(table).__name__}")
            continue
        try:
            split_qualified_name(table)
        except ValueError as e:
            errors.append(f"importer.tables: {e}")

    if not errors:
        try:
            TableAndSchemaNameMapper.from_qualified_names(tables)
        except ValueError as e:
            errors.append(f"importer.tables: {e}")

    return errors


def create_config_template() -> Dict[str, Any]:
    """
    Create a configuration template with all required fields.

    Returns:
        dict: Configuration template
    """
    return {
        'job_metadata': {
            'job_name': 'REQUIRED: your_job_name',
            'owner_email': 'your.email@company.com'
        },
        'database_type': 'MySQL',
        'source_data_source': {
            'driver': 'pymysql',
            'connect_args': {
                'host': 'source-host',
                'port': 3306,
                'user': 'REQUIRED',
                'password': 'REQUIRED',
                'database': 'REQUIRED'
            }
        },
        'target_data_source': {
            'driver': 'pymysql',
            'connect_args': {
                'host': 'target-host',
                'port': 3306,
                'user': 'REQUIRED',
                'password': 'REQUIRED',
                'database': 'REQUIRED'
            }
        },
        'importer': {
            'tables': ['REQUIRED: table_name or schema.table_name']
        }
    }
