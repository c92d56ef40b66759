"""Audit and activity log entries."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from pontual.domain.value_objects import AuditAction


@dataclass(frozen=True)
class AuditLogEntry:
    """One significant action taken by a user. Append-only."""

    id: UUID
    user_id: str
    action_type: AuditAction
    module: str
    description: str
    created_at: datetime
    entity_type: str | None = None
    entity_id: str | None = None
    old_data: dict[str, Any] | None = None
    new_data: dict[str, Any] | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class ActivityLogEntry:
    """Navigation activity (page views, searches, filters)."""

    id: UUID
    user_id: str
    activity_type: str
    module: str
    created_at: datetime
    details: dict[str, Any] | None = None
    duration_ms: int | None = None
