"""Attendance upsert shared by single and bulk marking."""

from datetime import UTC, datetime
from uuid import uuid4

from pontual.application.dto.attendance_input import AttendanceMark, validate_exit_time
from pontual.domain.entities import Attendance
from pontual.domain.exceptions import NotFound
from pontual.domain.value_objects import AttendanceStatus


async def write_mark(uow: object, mark: AttendanceMark, marked_by: str) -> Attendance:
    """Upsert on (employee_id, date). Absent days carry no exit time."""
    exit_time = validate_exit_time(mark.exit_time)
    status = AttendanceStatus(mark.status)
    if status is AttendanceStatus.ABSENT:
        exit_time = None

    if not await uow.employees.get_by_id(mark.employee_id):
        raise NotFound("Employee", str(mark.employee_id))

    return await uow.attendance.upsert(
        Attendance(
            id=uuid4(),
            employee_id=mark.employee_id,
            date=mark.date,
            status=status,
            exit_time=exit_time,
            marked_by=marked_by,
            created_at=datetime.now(UTC),
        )
    )
