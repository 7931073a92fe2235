"""
Error Handling Module
=====================
Exception taxonomy for the pre-flight checks, plus helpers that turn a
failure into an operator-facing diagnosis.

Exceptions:
    - PipelineError: Base for all pre-flight failures
    - PrepareJobWithInvalidConnectionError: Data source unreachable or unusable
    - PrepareJobWithTargetTableNotEmptyError: Target table already holds rows
    - DialectCheckError: Base for dialect privilege/variable failures
    - ConfigurationError: Job configuration is invalid

Functions:
    - handle_check_error: Log a failure and build a standard result dict
    - create_error_message: Format error details
    - classify_error: Map a failure to its kind
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional


logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Base exception for pre-flight failures."""
    pass


class PrepareJobWithInvalidConnectionError(PipelineError):
    """A data source could not be connected to, or a probe query failed on it."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Data source connection is invalid: {cause}")


class PrepareJobWithTargetTableNotEmptyError(PipelineError):
    """A target table that should receive migrated rows already has data."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Target table `{table_name}` is not empty")


class DialectCheckError(PipelineError):
    """Base for failures raised by a dialect's privilege or variable check."""
    pass


class CheckPrivilegeFailedError(DialectCheckError):
    """The privilege query itself could not be executed."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Check privileges failed: {cause}")


class MissingRequiredPrivilegeError(DialectCheckError):
    """The connecting user lacks the privileges the migration needs."""

    def __init__(self, required_privileges: Iterable[str]):
        self.required_privileges = tuple(required_privileges)
        super().__init__(
            f"Source data source is lack of {', '.join(self.required_privileges)} privileges"
        )


class CheckVariableFailedError(DialectCheckError):
    """A server variable could not be read."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Check variables failed: {cause}")


class UnexpectedVariableValueError(DialectCheckError):
    """A server variable is set to a value incompatible with incremental capture."""

    def __init__(self, variable_name: str, expected_value: str, actual_value: Optional[str]):
        self.variable_name = variable_name
        self.expected_value = expected_value
        self.actual_value = actual_value
        super().__init__(
            f"Source data source required `{variable_name} = {expected_value}`, "
            f"now is `{variable_name} = {actual_value}`"
        )


class ConfigurationError(PipelineError):
    """Configuration error."""
    pass


def handle_check_error(check_name: str, error: Exception) -> Dict[str, Any]:
    """
    Log a pre-flight failure and build a standardized result.

    Args:
        check_name: Name of the check that failed (e.g. 'source')
        error: Exception raised by the check

    Returns:
        dict: Standardized error response

    Example:
        >>> try:
        >>>     engine.check_source_data_source(source)
        >>> except PipelineError as e:
        >>>     return handle_check_error("source", e)
    """
    error_type = classify_error(error)
    error_message = create_error_message(error, check_name, error_type)

    logger.error(f"Check {check_name} failed: {error_message}")
    if error_type == 'unknown':
        logger.error("Unclassified pre-flight failure", exc_info=error)

    return {
        'abort_job': True,
        'passed': False,
        'error_message': error_message,
        'error_type': error_type,
        'check_name': check_name,
        'timestamp': datetime.now().isoformat()
    }


def create_error_message(error: Exception, check_name: str, error_type: str) -> str:
    """
    Format error details into an operator-facing message.

    Args:
        error: Exception that occurred
        check_name: Name of check
        error_type: Error classification

    Returns:
        str: Formatted error message

    Example:
        >>> create_error_message(
        >>>     PrepareJobWithTargetTableNotEmptyError("orders"),
        >>>     "target",
        >>>     "target_not_empty"
        >>> )
    """
    error_class = error.__class__.__name__
    message = f"[{error_type.upper()}] {check_name} check failed: {error_class}: {error}"

    if error_type == 'connection':
        message += " | Recommendation: Verify the data source is reachable and the credentials are valid"
    elif error_type == 'target_not_empty':
        message += " | Recommendation: Truncate or drop the target table before starting the job"
    elif error_type == 'privilege':
        message += " | Recommendation: Grant the missing privileges to the migration user"
    elif error_type == 'variable':
        message += " | Recommendation: Fix the server configuration and restart the data source if required"
    elif error_type == 'configuration':
        message += " | Recommendation: Check job configuration and credentials"

    return message


def classify_error(error: Exception) -> str:
    """
    Classify a pre-flight failure by kind.

    Args:
        error: Exception to classify

    Returns:
        str: One of connection, target_not_empty, privilege, variable,
             configuration, unknown

    Example:
        >>> classify_error(PrepareJobWithInvalidConnectionError(OSError("refused")))
        'connection'
    """
    if isinstance(error, PrepareJobWithInvalidConnectionError):
        return 'connection'
    elif isinstance(error, PrepareJobWithTargetTableNotEmptyError):
        return 'target_not_empty'
    elif isinstance(error, (CheckPrivilegeFailedError, MissingRequiredPrivilegeError)):
        return 'privilege'
    elif isinstance(error, (CheckVariableFailedError, UnexpectedVariableValueError)):
        return 'variable'
    elif isinstance(error, ConfigurationError):
        return 'configuration'

    return 'unknown'
