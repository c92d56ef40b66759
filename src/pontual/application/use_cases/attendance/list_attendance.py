"""List attendance use case."""

from datetime import date
from uuid import UUID

from pontual.application.ports import PermissionChecker
from pontual.application.services import BusinessClock
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Attendance
from pontual.domain.value_objects import AttendanceStatus


class ListAttendanceUseCase:
    """Attendance in a date range, newest day first.

    Requires attendance.view; ranges reaching before today also require
    attendance.viewHistory.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        clock: BusinessClock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._clock = clock

    async def execute(
        self,
        user_id: str,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
        status: AttendanceStatus | None = None,
    ) -> list[Attendance]:
        await ensure_permission(self._permission_checker, user_id, "attendance.view")
        if start is None or self._clock.is_past(start):
            await ensure_permission(
                self._permission_checker, user_id, "attendance.viewHistory"
            )

        async with self._uow_factory() as uow:
            return await uow.attendance.list(
                start=start, end=end, employee_id=employee_id, status=status
            )
