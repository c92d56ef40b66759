"""Audit and activity log repository ports."""

from datetime import datetime
from typing import Protocol

from pontual.application.dto.log_filters import ActivityLogFilters, AuditLogFilters
from pontual.domain.entities import ActivityLogEntry, AuditLogEntry


class AuditLogRepository(Protocol):
    """Port for the append-only audit log."""

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry: ...

    async def list(self, filters: AuditLogFilters) -> list[AuditLogEntry]: ...

    async def count_by(
        self,
        column: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, int]: ...


class ActivityLogRepository(Protocol):
    """Port for the append-only activity log."""

    async def create(self, entry: ActivityLogEntry) -> ActivityLogEntry: ...

    async def list(self, filters: ActivityLogFilters) -> list[ActivityLogEntry]: ...
