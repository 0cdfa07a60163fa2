"""Error classification utilities for service and API errors."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class ErrorCategory(Enum):
    """Categories of errors that can occur while serving a request."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    PERMISSION_DENIED = "permission_denied"
    NETWORK_ERROR = "network_error"
    STORAGE_ERROR = "storage_error"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Lookup errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_CONTACT_NOT_FOUND = "ERR_CONTACT_NOT_FOUND"
    ERR_USER_NOT_FOUND = "ERR_USER_NOT_FOUND"
    ERR_GROUP_NOT_FOUND = "ERR_GROUP_NOT_FOUND"
    ERR_NOT_FOUND = "ERR_NOT_FOUND"

    # Input errors
    ERR_EMAIL_ALREADY_REGISTERED = "ERR_EMAIL_ALREADY_REGISTERED"
    ERR_GROUP_REQUIRED = "ERR_GROUP_REQUIRED"
    ERR_INVALID_INPUT = "ERR_INVALID_INPUT"

    # Permission errors
    ERR_PERMISSION_DENIED = "ERR_PERMISSION_DENIED"

    # Infrastructure errors
    ERR_NETWORK_ERROR = "ERR_NETWORK_ERROR"
    ERR_STORAGE_ERROR = "ERR_STORAGE_ERROR"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_ERROR_PATTERNS: dict[
    Literal["network", "storage"],
    dict[str, list[str] | set[str]],
] = {
    "network": {
        "phrases": [
            "connection",
            "timeout",
            "network",
            "503",
            "502",
            "504",
            "unreachable",
        ],
        "exception_types": {"ConnectionError", "TimeoutError", "ConnectError", "ReadTimeout"},
    },
    "storage": {
        "phrases": ["does not exist. call init_db", "database is locked", "disk i/o error"],
        "exception_types": {"DatabaseError", "OperationalError"},
    },
}

# Phrases matched against "Record not found in <collection>: <id>" and service messages
_NOT_FOUND_PHRASES: list[tuple[tuple[str, ...], str, str]] = [
    (("in tasks:", "task not found"), ErrorCode.ERR_TASK_NOT_FOUND, "Task not found."),
    (("in contacts:", "contact not found"), ErrorCode.ERR_CONTACT_NOT_FOUND, "Contact not found."),
    (("in users:", "user not found"), ErrorCode.ERR_USER_NOT_FOUND, "User not found."),
    (("in user_groups:", "group not found"), ErrorCode.ERR_GROUP_NOT_FOUND, "Group not found."),
]


def _match_error_pattern(
    *,
    error_str: str,
    exception_type: str,
    pattern_type: Literal["network", "storage"],
) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def _is_not_found(exception: Exception, error_str: str) -> bool:
    return isinstance(exception, KeyError) or "not found" in error_str


def _not_found_response(error_str: str) -> ErrorResponse:
    for phrases, code, message in _NOT_FOUND_PHRASES:
        if any(phrase in error_str for phrase in phrases):
            return ErrorResponse(
                code=code,
                message=message,
                suggestion="Reload the list and pick an existing entry.",
                severity=ErrorSeverity.LOW,
            )
    return ErrorResponse(
        code=ErrorCode.ERR_NOT_FOUND,
        message="The requested record was not found.",
        suggestion="Reload the list and pick an existing entry.",
        severity=ErrorSeverity.LOW,
    )


def classify_error(exception: Exception) -> ErrorCategory:
    """Return the broad category of an exception raised by a service."""
    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    if isinstance(exception, PermissionError):
        return ErrorCategory.PERMISSION_DENIED
    if _is_not_found(exception, error_str):
        return ErrorCategory.NOT_FOUND
    if "already registered" in error_str or "already exists" in error_str:
        return ErrorCategory.CONFLICT
    if isinstance(exception, ValueError):
        return ErrorCategory.VALIDATION
    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="storage"):
        return ErrorCategory.STORAGE_ERROR
    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="network"):
        return ErrorCategory.NETWORK_ERROR
    return ErrorCategory.UNKNOWN


def classify_error_with_response(exception: Exception) -> ErrorResponse:  # noqa: PLR0911
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    error_str = str(exception).lower()
    category = classify_error(exception)

    if category is ErrorCategory.PERMISSION_DENIED:
        return ErrorResponse(
            code=ErrorCode.ERR_PERMISSION_DENIED,
            message="You don't have permission for this action.",
            suggestion="Ask an administrator if you think this is an error.",
            severity=ErrorSeverity.MEDIUM,
        )

    if category is ErrorCategory.NOT_FOUND:
        return _not_found_response(error_str)

    if category is ErrorCategory.CONFLICT:
        return ErrorResponse(
            code=ErrorCode.ERR_EMAIL_ALREADY_REGISTERED,
            message="This e-mail is already registered.",
            suggestion="Use a different e-mail address or edit the existing user.",
            severity=ErrorSeverity.LOW,
        )

    if category is ErrorCategory.VALIDATION and "requires a group" in error_str:
        return ErrorResponse(
            code=ErrorCode.ERR_GROUP_REQUIRED,
            message="Group visibility needs a group.",
            suggestion="Select a group or change the task visibility.",
            severity=ErrorSeverity.LOW,
        )

    if category is ErrorCategory.VALIDATION:
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_INPUT,
            message="The submitted data is invalid.",
            suggestion="Check the highlighted fields and try again.",
            severity=ErrorSeverity.LOW,
        )

    if category is ErrorCategory.STORAGE_ERROR:
        return ErrorResponse(
            code=ErrorCode.ERR_STORAGE_ERROR,
            message="The database could not complete the operation.",
            suggestion="Please try again later. If the problem persists, contact support.",
            severity=ErrorSeverity.HIGH,
        )

    if category is ErrorCategory.NETWORK_ERROR:
        return ErrorResponse(
            code=ErrorCode.ERR_NETWORK_ERROR,
            message="Network error occurred.",
            suggestion="Please check the backend URL in your preferences and try again.",
            severity=ErrorSeverity.MEDIUM,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
