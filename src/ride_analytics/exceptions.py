"""
Custom exceptions for the ride analytics engine.

Pure analytics never raise for missing or malformed optional data; these
exceptions cover configuration validation and failures of the external
collaborators the controllers talk to. Each exception includes:
- A descriptive message
- An error code
- A details dict for logs and the CLI
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # User configuration
    ZONE_CONFIG_INVALID = "ZONE_CONFIG_INVALID"

    # Session control
    SESSION_START_FAILED = "SESSION_START_FAILED"
    SESSION_STOP_FAILED = "SESSION_STOP_FAILED"
    SESSION_NOT_ACTIVE = "SESSION_NOT_ACTIVE"

    # Zone control
    ZONE_CONTROL_FAILED = "ZONE_CONTROL_FAILED"
    ZONE_RIDE_NOT_ACTIVE = "ZONE_RIDE_NOT_ACTIVE"


class RideAnalyticsError(Exception):
    """
    Base exception for all ride analytics errors.

    Attributes:
        message: Text shown to the rider
        code: ErrorCode member
        details: Extra context (field, operation, offending values)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(RideAnalyticsError):
    """Raised when user-supplied configuration is rejected."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


class ZoneConfigError(ValidationError):
    """Raised when configured zone boundaries are not strictly ascending."""

    def __init__(self, label: str, boundaries: Any) -> None:
        super().__init__(
            message=f"{label} must be strictly ascending",
            field=label,
            details={"boundaries": list(boundaries)},
        )
        self.code = ErrorCode.ZONE_CONFIG_INVALID


# ============================================================================
# Collaborator Errors
# ============================================================================

class SessionControlError(RideAnalyticsError):
    """Raised when the session API rejects a start or stop."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SESSION_START_FAILED,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, code=code, details=details)


class ZoneControlError(RideAnalyticsError):
    """Raised when the zone-control actuator fails a command."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.ZONE_CONTROL_FAILED,
            details=error_details,
        )
