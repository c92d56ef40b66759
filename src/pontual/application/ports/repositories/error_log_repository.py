"""Tracked error repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from pontual.application.dto.log_filters import ErrorLogFilters
from pontual.domain.entities import ErrorLog
from pontual.domain.value_objects import ErrorType


class ErrorLogRepository(Protocol):
    """Port for tracked errors."""

    async def get_by_id(self, error_id: UUID) -> ErrorLog | None: ...

    async def find_open(
        self, error_type: ErrorType, message: str, component: str
    ) -> ErrorLog | None: ...

    async def create(self, error: ErrorLog) -> ErrorLog: ...

    async def add_occurrences(
        self,
        error_id: UUID,
        count: int,
        last_occurred_at: datetime,
        user_id: str | None,
    ) -> None: ...

    async def set_resolved(
        self,
        error_id: UUID,
        resolved: bool,
        resolved_by: str | None,
        resolved_at: datetime | None,
    ) -> None: ...

    async def list(self, filters: ErrorLogFilters) -> list[ErrorLog]: ...
