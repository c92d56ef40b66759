"""Stored permission set and its change log."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pontual.domain.permissions import PermissionSet


@dataclass
class UserPermissionRecord:
    """At most one stored permission set per user."""

    id: UUID
    user_id: str
    permissions: PermissionSet
    updated_by: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PermissionLog:
    """One permission save event. Written once, never updated."""

    id: UUID
    user_id: str
    changed_by: str
    permissions_before: PermissionSet | None
    permissions_after: PermissionSet
    change_summary: str
    created_at: datetime
