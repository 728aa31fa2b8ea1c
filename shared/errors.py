"""
Error types raised by the parameter store activity and the PubNub trigger.
"""

from temporalio.exceptions import ApplicationError


class ParameterStoreError(Exception):
    """Base class for failures of a parameter store invocation."""


class ConfigurationError(ParameterStoreError):
    """A required input field is missing or has the wrong type."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


class SessionError(ParameterStoreError):
    """The AWS session or SSM client could not be constructed."""


class RemoteCallError(ParameterStoreError):
    """A call to the parameter store service failed."""

    def __init__(self, operation: str, parameter_name: str, cause: Exception):
        super().__init__(
            f"{operation} failed for parameter '{parameter_name}': {cause}"
        )
        self.operation = operation
        self.parameter_name = parameter_name
        self.cause = cause


class ShapingError(ParameterStoreError):
    """The result map could not be re-encoded into the output envelope."""


class TriggerConfigurationError(ValueError):
    """Trigger or handler settings do not match the trigger metadata."""


def to_application_error(error: ParameterStoreError) -> ApplicationError:
    """Convert an invocation failure into a non-retryable Temporal error."""
    details = []
    if isinstance(error, ConfigurationError):
        details.append({"fields": error.fields})
    elif isinstance(error, RemoteCallError):
        details.append(
            {"operation": error.operation, "parameterName": error.parameter_name}
        )

    return ApplicationError(
        str(error),
        *details,
        type=type(error).__name__,
        non_retryable=True,
    )
