"""
Error taxonomy for the visibility library.

Visibility itself never raises: a missing viewer, an unknown designation or a
broken reporting graph all degrade to "nothing more is visible". Exceptions are
reserved for input that cannot be interpreted at all, i.e. malformed filter
criteria and raw records that fail validation at the loading boundary.
"""

import re
import traceback
from typing import Any

# Patterns for sensitive data that should never be logged
SENSITIVE_PATTERNS = [
    re.compile(r'password["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'token["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'api[_-]?key["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'secret["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'authorization["\s:]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'),  # Email
    re.compile(r'\b\d{3}-\d{2}-\d{4}\b'),  # SSN
]


class VisibilityError(Exception):
    """Base class for errors raised by the visibility library."""
    pass


class InvalidCriteria(VisibilityError):
    """Raised when user-entered filter criteria cannot be interpreted."""
    pass


class MalformedRecord(VisibilityError):
    """Raised when a raw record fails validation and skipping is disabled."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


def sanitize_error_message(message: str) -> str:
    """
    Remove sensitive information from error messages.

    Args:
        message: Original error message

    Returns:
        Sanitized error message
    """
    sanitized = message
    for pattern in SENSITIVE_PATTERNS:
        sanitized = pattern.sub('[REDACTED]', sanitized)
    return sanitized


def get_safe_error_details(exc: Exception, include_details: bool = False) -> dict[str, Any]:
    """
    Extract safe error details without exposing sensitive information.

    Args:
        exc: The exception to extract details from
        include_details: Whether to include the traceback (development only)

    Returns:
        Dictionary with safe error details
    """
    details = {
        "type": type(exc).__name__,
        "message": sanitize_error_message(str(exc)),
    }

    if include_details:
        details["traceback"] = traceback.format_exc()

    return details
