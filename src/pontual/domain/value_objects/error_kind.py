"""Tracked error classification."""

from enum import StrEnum


class ErrorType(StrEnum):
    """Source of a tracked error."""

    JS_ERROR = "js_error"
    API_ERROR = "api_error"
    DATABASE_ERROR = "database_error"
    NETWORK_ERROR = "network_error"
    AUTH_ERROR = "auth_error"
    VALIDATION_ERROR = "validation_error"


class ErrorSeverity(StrEnum):
    """How urgent a tracked error is."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
