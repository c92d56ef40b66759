"""Attendance entity."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from pontual.domain.value_objects import AttendanceStatus


@dataclass
class Attendance:
    """Attendance - one row per employee per day."""

    id: UUID
    employee_id: UUID
    date: date
    status: AttendanceStatus
    marked_by: str
    created_at: datetime
    exit_time: str | None = None
