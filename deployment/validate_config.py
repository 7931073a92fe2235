#!/usr/bin/env python3
"""
Configuration Validation Script
================================
Validates a migration job configuration before running pre-flight checks.

Usage:
    python deployment/validate_config.py projects/example_migration/config.json
"""

import sys
import json
import argparse

from config_handler_scripts import config_loader, config_validator


def main(argv=None):
    """Main validation function."""
    parser = argparse.ArgumentParser(
        description='Validate migration job configuration'
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

    print("=" * 80)
    print("Migration Job Configuration Validation")
    print("=" * 80)
    print(f"Config file: {args.config_path}")
    print()

    if not config_loader.validate_config_exists(args.config_path):
        print(f"ERROR: Configuration file not found: {args.config_path}")
        sys.exit(1)

    try:
        config = config_loader.load_config(args.config_path)
    except json.JSONDecodeError as e:
        print(f"ERROR: Configuration file is not valid JSON: {e}")
        sys.exit(1)

    job_name = config_loader.get_config_value(config, 'job_metadata.job_name', 'Unknown')
    print(f"Job name: {job_name}")
    print()

    is_valid, errors = config_validator.validate_config(config)

    if not is_valid:
        print("=" * 80)
        print("✗ VALIDATION FAILED")
        print("=" * 80)
        print()
        print(f"Found {len(errors)} error(s):")
        print()

        for i, error in enumerate(errors, 1):
            print(f"{i}. {error}")

        print()
        sys.exit(1)

    print("=" * 80)
    print("✓ VALIDATION PASSED")
    print("=" * 80)

    if args.verbose:
        print()
        print("Configuration summary:")
        print(f"  Job: {job_name}")
        print(f"  Database type: {config.get('database_type')}")
        print(f"  Target tables: {', '.join(config_loader.get_config_value(config, 'importer.tables', []))}")
        print()

    sys.exit(0)


if __name__ == '__main__':
    main()
