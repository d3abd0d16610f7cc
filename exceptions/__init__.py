"""
Custom exceptions module.

Routes convert AppError subclasses to JSON with handle_error().
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
    DatabaseError,

    # Holiday sync
    HolidayFetchError,

    # Dashboard
    InvalidGranularityError,
    InvalidDateRangeError,

    # Auth
    InvalidCredentialsError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "AuthenticationError",
    "ConfigurationError",
    "ExternalServiceError",
    "DatabaseError",

    # Holiday sync
    "HolidayFetchError",

    # Dashboard
    "InvalidGranularityError",
    "InvalidDateRangeError",

    # Auth
    "InvalidCredentialsError",
]
