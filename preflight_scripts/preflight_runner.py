"""
Pre-flight Runner Module
========================
Runs the pre-flight checks for a migration job described by a JSON config.

The source is checked first (connection, privileges, variables), then the
target (connection, empty target tables). The first failure stops the run
and is returned as a diagnosis for the operator.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict

from config_handler_scripts import config_loader, config_validator
from preflight_scripts.check_engine import DataSourceCheckEngine
from preflight_scripts.connection_providers import (
    ConnectionProvider,
    DBAPIConnectionProvider,
    SnowflakeConnectionProvider,
)
from preflight_scripts.database_types import get_database_type
from preflight_scripts.error_handling import ConfigurationError, PipelineError, handle_check_error
from preflight_scripts.importer_config import ImporterConfiguration


logger = logging.getLogger(__name__)


def build_connection_provider(data_source_config: Dict[str, Any]) -> ConnectionProvider:
    """
    Build a connection provider from a data source config section.

    Args:
        data_source_config: {'type': 'snowflake', 'connection': {...}} or
            {'driver': '<module>', 'connect_args': {...}}

    Returns:
        ConnectionProvider: Provider for that data source

    Raises:
        ConfigurationError: If neither form is given
    """
    if data_source_config.get('type') == 'snowflake':
        return SnowflakeConnectionProvider(data_source_config.get('connection', {}))

    driver = data_source_config.get('driver')
    if not driver:
        raise ConfigurationError("Data source needs either type 'snowflake' or a driver")

    try:
        return DBAPIConnectionProvider.from_driver(driver, **data_source_config.get('connect_args', {}))
    except ImportError as e:
        raise ConfigurationError(f"Driver '{driver}' cannot be imported: {e}") from e


def run_preflight_checks(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Run all pre-flight checks for a migration job.

    Args:
        config: Job configuration dictionary

    Returns:
        dict: {
            'abort_job': bool,              # True if any check failed
            'passed': bool,                 # True if all checks passed
            'error_message': str or None,   # Diagnosis of the first failure
            'error_type': str or None,      # Failure kind
            'checks': dict                  # Per-side results
        }
    """
    logger.info("=" * 80)
    logger.info("Starting pre-flight checks...")
    logger.info("=" * 80)

    overall_result = {
        'abort_job': False,
        'passed': True,
        'error_message': None,
        'error_type': None,
        'checks': {}
    }

    is_valid, errors = config_validator.validate_config(config)
    if not is_valid:
        error = ConfigurationError("; ".join(errors))
        return _fail(overall_result, 'configuration', handle_check_error('configuration', error))

    try:
        engine = DataSourceCheckEngine(get_database_type(config['database_type']))
        source = build_connection_provider(config['source_data_source'])
        target = build_connection_provider(config['target_data_source'])
        importer_config = ImporterConfiguration.from_qualified_names(config['importer']['tables'])
    except ConfigurationError as e:
        return _fail(overall_result, 'configuration', handle_check_error('configuration', e))
    except ValueError as e:
        return _fail(overall_result, 'configuration', handle_check_error('configuration', ConfigurationError(str(e))))

    logger.info("\n[1/2] Checking source data source...")
    try:
        engine.check_source_data_source(source)
        overall_result['checks']['source'] = {'passed': True}
        logger.info("  ✓ Source check PASSED")
    except PipelineError as e:
        return _fail(overall_result, 'source', handle_check_error('source', e))

    logger.info("\n[2/2] Checking target data source...")
    try:
        engine.check_target_data_source(target, importer_config)
        overall_result['checks']['target'] = {'passed': True}
        logger.info("  ✓ Target check PASSED")
    except PipelineError as e:
        return _fail(overall_result, 'target', handle_check_error('target', e))

    logger.info("\n" + "=" * 80)
    logger.info("All pre-flight checks PASSED ✓")
    logger.info("=" * 80)

    return overall_result


def _fail(overall_result: Dict[str, Any], check_name: str, check_result: Dict[str, Any]) -> Dict[str, Any]:
    overall_result['checks'][check_name] = check_result
    overall_result['abort_job'] = True
    overall_result['passed'] = False
    overall_result['error_message'] = check_result['error_message']
    overall_result['error_type'] = check_result['error_type']

    logger.error("Pre-flight checks FAILED")
    logger.info("=" * 80)
    return overall_result


def main(argv=None) -> int:
    """Run pre-flight checks for a config file given on the command line."""
    parser = argparse.ArgumentParser(
        description='Run migration pre-flight checks'
    )
    parser.add_argument(
        'config_path',
        help='Path to config.json file'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Verbose output'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = config_loader.load_config(args.config_path)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Cannot load config: {e}")
        return 1

    result = run_preflight_checks(config)

    print("\n" + "=" * 80)
    print("PRE-FLIGHT CHECK RESULTS")
    print("=" * 80)
    print(json.dumps(result, indent=2))

    return 0 if result['passed'] else 1


if __name__ == "__main__":
    sys.exit(main())
