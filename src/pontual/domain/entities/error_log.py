"""Tracked error entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from pontual.domain.value_objects import ErrorSeverity, ErrorType


@dataclass
class ErrorLog:
    """Tracked error. Open rows with the same signature are coalesced."""

    id: UUID
    error_type: ErrorType
    severity: ErrorSeverity
    message: str
    component: str
    occurrence_count: int
    first_occurred_at: datetime
    last_occurred_at: datetime
    user_id: str | None = None
    module: str | None = None
    stack_trace: str | None = None
    error_context: dict[str, Any] | None = None
    user_agent: str | None = None
    resolved: bool = False
    resolved_by: str | None = None
    resolved_at: datetime | None = None
