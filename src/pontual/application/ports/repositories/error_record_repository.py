"""Employee error record repository port."""

from datetime import date
from typing import Protocol
from uuid import UUID

from pontual.domain.entities import ErrorRecord


class ErrorRecordRepository(Protocol):
    """Port for employee error record persistence."""

    async def get_by_id(self, record_id: UUID) -> ErrorRecord | None: ...

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[ErrorRecord]: ...

    async def create(self, record: ErrorRecord) -> ErrorRecord: ...

    async def update(self, record: ErrorRecord) -> None: ...

    async def delete(self, record_id: UUID) -> None: ...
