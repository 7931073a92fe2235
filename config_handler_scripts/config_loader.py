"""
Configuration Loader Module
===========================
Loads and provides access to migration job configuration.

Functions:
    - load_config: Load configuration from JSON file
    - get_config_value: Get nested configuration value
    - validate_config_exists: Check if config file exists
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any


logger = logging.getLogger(__name__)


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load job configuration from JSON file.

    Args:
        config_path: Path to config.json file

    Returns:
        dict: Parsed configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        json.JSONDecodeError: If config file is invalid JSON

    Example:
        >>> config = load_config('projects/example_migration/config.json')
        >>> database_type = config['database_type']
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = json.load(f)

        logger.info(f"Job: {config.get('job_metadata', {}).get('job_name', 'Unknown')}")

        return config

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in configuration file: {e}")
        raise


def get_config_value(
    config: Dict[str, Any],
    key_path: str,
    default: Any = None
) -> Any:
    """
    Get nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        key_path: Dot-separated path (e.g., 'importer.tables')
        default: Default value if key not found

    Returns:
        Configuration value or default

    Example:
        >>> driver = get_config_value(config, 'source_data_source.driver', 'pymysql')
    """
    keys = key_path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def validate_config_exists(config_path: str) -> bool:
    """
    Check if configuration file exists.

    Args:
        config_path: Path to config file

    Returns:
        bool: True if exists, False otherwise
    """
    return Path(config_path).exists()
