"""
Configuration Handler Scripts Package
=====================================
Configuration management for migration pre-flight checks.

Modules:
    - config_loader: Load and access configuration
    - config_validator: Validate configuration correctness
"""

from config_handler_scripts.config_loader import (
    load_config,
    get_config_value,
    validate_config_exists
)

from config_handler_scripts.config_validator import (
    validate_config,
    validate_job_metadata,
    validate_database_type,
    validate_data_source,
    validate_importer,
    create_config_template
)

__all__ = [
    # config_loader
    'load_config',
    'get_config_value',
    'validate_config_exists',

    # config_validator
    'validate_config',
    'validate_job_metadata',
    'validate_database_type',
    'validate_data_source',
    'validate_importer',
    'create_config_template',
]

__version__ = '1.0.0'
