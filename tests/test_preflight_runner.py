"""
Pre-flight Runner Tests
=======================
End-to-end runs of run_preflight_checks against SQLite files.
"""

import json
import sqlite3

import pytest

from preflight_scripts import preflight_runner
from preflight_scripts.connection_providers import DBAPIConnectionProvider, SnowflakeConnectionProvider
from preflight_scripts.error_handling import ConfigurationError


@pytest.fixture
def sqlite_config(tmp_path):
    """Config pointing source and target at SQLite files."""
    source_path = tmp_path / 'source.db'
    target_path = tmp_path / 'target.db'

    target = sqlite3.connect(str(target_path))
    target.execute("CREATE TABLE orders (id INTEGER)")
    target.execute("CREATE TABLE items (id INTEGER)")
    target.commit()
    target.close()

    return {
        'job_metadata': {'job_name': 'sqlite_job', 'owner_email': 'team@example.com'},
        'database_type': 'SQLite',
        'source_data_source': {'driver': 'sqlite3', 'connect_args': {'database': str(source_path)}},
        'target_data_source': {'driver': 'sqlite3', 'connect_args': {'database': str(target_path)}},
        'importer': {'tables': ['orders', 'items']}
    }


class TestBuildConnectionProvider:
    """Test provider construction from config sections."""

    def test_snowflake_section(self):
        """Test type snowflake builds a Snowflake provider."""
        provider = preflight_runner.build_connection_provider(
            {'type': 'snowflake', 'connection': {'account': 'acme'}}
        )
        assert isinstance(provider, SnowflakeConnectionProvider)

    def test_driver_section(self):
        """Test a driver name builds a DB-API provider."""
        provider = preflight_runner.build_connection_provider({'driver': 'sqlite3'})
        assert isinstance(provider, DBAPIConnectionProvider)

    def test_unknown_driver(self):
        """Test an unimportable driver is a configuration error."""
        with pytest.raises(ConfigurationError):
            preflight_runner.build_connection_provider({'driver': 'no_such_driver_module'})


class TestRunPreflightChecks:
    """Test full pre-flight runs."""

    def test_all_checks_pass(self, sqlite_config):
        """Test empty target tables pass."""
        result = preflight_runner.run_preflight_checks(sqlite_config)

        assert result['passed'] is True
        assert result['abort_job'] is False
        assert result['error_message'] is None
        assert result['checks'] == {'source': {'passed': True}, 'target': {'passed': True}}

    def test_non_empty_target_fails(self, sqlite_config):
        """Test a non-empty target table stops the job."""
        connection = sqlite3.connect(sqlite_config['target_data_source']['connect_args']['database'])
        connection.execute("INSERT INTO items VALUES (1)")
        connection.commit()
        connection.close()

        result = preflight_runner.run_preflight_checks(sqlite_config)

        assert result['passed'] is False
        assert result['abort_job'] is True
        assert result['error_type'] == 'target_not_empty'
        assert 'items' in result['error_message']
        assert result['checks']['source'] == {'passed': True}

    def test_unreachable_source_skips_target(self, sqlite_config, tmp_path):
        """Test a source connection failure is reported and the target is not checked."""
        sqlite_config['source_data_source']['connect_args']['database'] = str(tmp_path / 'missing' / 'x.db')

        result = preflight_runner.run_preflight_checks(sqlite_config)

        assert result['error_type'] == 'connection'
        assert 'source' in result['checks']
        assert 'target' not in result['checks']

    def test_invalid_config(self, sqlite_config):
        """Test an invalid config is reported without contacting data sources."""
        sqlite_config['database_type'] = 'Cobol'

        result = preflight_runner.run_preflight_checks(sqlite_config)

        assert result['passed'] is False
        assert result['error_type'] == 'configuration'
        assert 'Cobol' in result['error_message']

    def test_table_under_two_schemas_is_configuration_error(self, sqlite_config):
        """Test one table listed under two schemas is rejected before any check runs."""
        sqlite_config['importer']['tables'] = ['s1.orders', 's2.orders']

        result = preflight_runner.run_preflight_checks(sqlite_config)

        assert result['passed'] is False
        assert result['error_type'] == 'configuration'
        assert 'more than one schema' in result['error_message']
        assert 'source' not in result['checks']



class TestMain:
    """Test the command-line entry point."""

    def test_exit_code_zero_on_pass(self, sqlite_config, tmp_path, capsys):
        """Test a passing run returns 0 and prints the result."""
        config_path = tmp_path / 'config.json'
        config_path.write_text(json.dumps(sqlite_config))

        assert preflight_runner.main([str(config_path)]) == 0
        assert 'PRE-FLIGHT CHECK RESULTS' in capsys.readouterr().out

    def test_exit_code_one_on_missing_file(self, tmp_path):
        """Test a missing config file returns 1."""
        assert preflight_runner.main([str(tmp_path / 'nope.json')]) == 1
