"""Query filters for the audit, activity and error logs."""

from dataclasses import dataclass
from datetime import datetime

from pontual.domain.value_objects import AuditAction, ErrorSeverity, ErrorType


@dataclass(frozen=True)
class AuditLogFilters:
    """All provided filters are AND-combined."""

    start: datetime | None = None
    end: datetime | None = None
    user_id: str | None = None
    module: str | None = None
    action_type: AuditAction | None = None
    limit: int | None = None


@dataclass(frozen=True)
class ActivityLogFilters:
    start: datetime | None = None
    end: datetime | None = None
    user_id: str | None = None
    module: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class ErrorLogFilters:
    start: datetime | None = None
    end: datetime | None = None
    error_type: ErrorType | None = None
    severity: ErrorSeverity | None = None
    module: str | None = None
    resolved: bool | None = None
    limit: int | None = None
