"""
Custom exception classes for the application.

Every error carries a code, a human-readable message and an HTTP status.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "HOLIDAY_API_ERROR")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class AuthenticationError(AppError):
    """Missing, invalid or rejected credentials (401)."""

    def __init__(
        self,
        message: str = "Authentication required",
        code: str = "AUTHENTICATION_REQUIRED",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=401,
            details=details
        )


class ConfigurationError(AppError):
    """Required configuration is missing (500)."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        super().__init__(
            code="CONFIGURATION_ERROR",
            message=message,
            status_code=500,
            details={"missing": missing or []}
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# SPECIFIC ERRORS
# ===================

class HolidayFetchError(ExternalServiceError):
    """Holiday API unreachable or answered with a non-success status."""

    def __init__(self, year: int, status_code: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(
            service="holiday_api",
            message="Failed to fetch external API",
            details={"year": year, "status_code": status_code, "reason": reason}
        )


class InvalidGranularityError(ValidationError):
    """Granularity is not one of day, week, month."""

    def __init__(self, granularity: str):
        super().__init__(
            code="INVALID_GRANULARITY",
            message="Granularity must be day, week, or month",
            details={"provided": granularity, "valid": ["day", "week", "month"]}
        )


class InvalidDateRangeError(ValidationError):
    """Start of the date filter is after its end."""

    def __init__(self, date_from: str, date_to: str):
        super().__init__(
            code="INVALID_DATE_RANGE",
            message="fecha_desde must not be after fecha_hasta",
            details={"fecha_desde": date_from, "fecha_hasta": date_to}
        )


class InvalidCredentialsError(AuthenticationError):
    """Email/password rejected by the auth provider."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            code="INVALID_CREDENTIALS",
            message="Invalid email or password",
            details={"reason": reason} if reason else None
        )
