"""
Error Handling Unit Tests
=========================
Tests for the failure taxonomy and diagnosis formatting.
"""

import pytest

from preflight_scripts.error_handling import (
    CheckPrivilegeFailedError,
    CheckVariableFailedError,
    ConfigurationError,
    DialectCheckError,
    MissingRequiredPrivilegeError,
    PipelineError,
    PrepareJobWithInvalidConnectionError,
    PrepareJobWithTargetTableNotEmptyError,
    UnexpectedVariableValueError,
    classify_error,
    create_error_message,
    handle_check_error,
)


class TestTaxonomy:
    """Test exception attributes and hierarchy."""

    def test_invalid_connection_carries_cause(self):
        """Test the cause is kept on the exception."""
        cause = OSError("refused")
        error = PrepareJobWithInvalidConnectionError(cause)
        assert error.cause is cause
        assert 'refused' in str(error)

    def test_not_empty_carries_table_name(self):
        """Test the offending table name is kept."""
        error = PrepareJobWithTargetTableNotEmptyError('orders')
        assert error.table_name == 'orders'
        assert 'orders' in str(error)

    def test_kinds_are_distinct(self):
        """Test not-empty and invalid-connection never overlap."""
        assert not issubclass(PrepareJobWithTargetTableNotEmptyError, PrepareJobWithInvalidConnectionError)
        assert not issubclass(PrepareJobWithInvalidConnectionError, PrepareJobWithTargetTableNotEmptyError)

    @pytest.mark.parametrize('error', [
        CheckPrivilegeFailedError(RuntimeError("x")),
        MissingRequiredPrivilegeError(['REPLICATION']),
        CheckVariableFailedError(RuntimeError("x")),
        UnexpectedVariableValueError('wal_level', 'logical', 'replica'),
    ])
    def test_dialect_errors_share_base(self, error):
        """Test all dialect failures derive from DialectCheckError and PipelineError."""
        assert isinstance(error, DialectCheckError)
        assert isinstance(error, PipelineError)

    def test_unexpected_variable_message(self):
        """Test the message names expected and actual values."""
        error = UnexpectedVariableValueError('BINLOG_FORMAT', 'ROW', 'MIXED')
        assert str(error) == "Source data source required `BINLOG_FORMAT = ROW`, now is `BINLOG_FORMAT = MIXED`"


class TestClassifyError:
    """Test failure classification."""

    @pytest.mark.parametrize('error, expected', [
        (PrepareJobWithInvalidConnectionError(OSError("x")), 'connection'),
        (PrepareJobWithTargetTableNotEmptyError('t'), 'target_not_empty'),
        (MissingRequiredPrivilegeError(['REPLICATION']), 'privilege'),
        (CheckPrivilegeFailedError(OSError("x")), 'privilege'),
        (UnexpectedVariableValueError('LOG_BIN', 'ON', 'OFF'), 'variable'),
        (CheckVariableFailedError(OSError("x")), 'variable'),
        (ConfigurationError("bad"), 'configuration'),
        (ValueError("other"), 'unknown'),
    ])
    def test_classification(self, error, expected):
        """Test each kind maps to its classification."""
        assert classify_error(error) == expected


class TestHandleCheckError:
    """Test diagnosis formatting."""

    def test_result_shape(self):
        """Test the standard result dict."""
        result = handle_check_error('target', PrepareJobWithTargetTableNotEmptyError('orders'))

        assert result['abort_job'] is True
        assert result['passed'] is False
        assert result['error_type'] == 'target_not_empty'
        assert result['check_name'] == 'target'
        assert 'orders' in result['error_message']
        assert 'timestamp' in result

    def test_message_has_recommendation(self):
        """Test the message carries an operator recommendation."""
        message = create_error_message(MissingRequiredPrivilegeError(['REPLICATION']), 'source', 'privilege')
        assert message.startswith("[PRIVILEGE] source check failed: MissingRequiredPrivilegeError")
        assert 'Recommendation' in message
