"""Attendance repository port."""

from datetime import date
from typing import Protocol
from uuid import UUID

from pontual.domain.entities import Attendance
from pontual.domain.value_objects import AttendanceStatus


class AttendanceRepository(Protocol):
    """Port for attendance persistence. Unique on (employee_id, date)."""

    async def get_by_id(self, attendance_id: UUID) -> Attendance | None: ...

    async def upsert(self, attendance: Attendance) -> Attendance: ...

    async def update(self, attendance: Attendance) -> None: ...

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
        status: AttendanceStatus | None = None,
    ) -> list[Attendance]: ...

    async def delete_by_date(self, day: date) -> int: ...
