"""
Error taxonomy for payloadguard.

All payloadguard errors inherit from PayloadGuardError and include:
- A unique error code for programmatic handling
- A human-readable message
- Optional structured details

Only construction-time and configuration-time problems are raised. Filtering
untrusted payloads never raises; anomalies there are resolved by omission.
"""

from typing import Any


class PayloadGuardError(Exception):
    """
    Base class for all payloadguard errors.

    Attributes:
        code: Unique error code for programmatic handling
        message: Human-readable error message
        details: Additional error context
    """

    code: str = "PAYLOAD_GUARD_ERROR"

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ShapeDefinitionError(PayloadGuardError):
    """A shape descriptor was built from malformed input."""

    code = "SHAPE_DEFINITION_INVALID"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        received: Any = None,
        **kwargs: Any,
    ) -> None:
        details: dict[str, Any] = {"received_type": type(received).__name__}
        if field is not None:
            details["field"] = field
        super().__init__(message, details=details, **kwargs)
        self.field = field


class PolicyConfigurationError(PayloadGuardError):
    """The sensitive-field policy was configured with invalid input."""

    code = "POLICY_CONFIGURATION_INVALID"

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            details={"errors": errors or []},
            **kwargs,
        )
        self.errors = errors or []
