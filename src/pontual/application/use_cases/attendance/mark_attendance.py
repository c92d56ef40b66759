"""Mark attendance use case."""

from pontual.application.dto.attendance_input import AttendanceMark
from pontual.application.ports import PermissionChecker
from pontual.application.services import BusinessClock
from pontual.application.use_cases.attendance.marking import write_mark
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Attendance


class MarkAttendanceUseCase:
    """Mark one employee present or absent on a day.

    Requires attendance.mark; days before today also require
    attendance.editHistory.
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

    async def execute(self, user_id: str, mark: AttendanceMark) -> Attendance:
        await ensure_permission(self._permission_checker, user_id, "attendance.mark")
        if self._clock.is_past(mark.date):
            await ensure_permission(
                self._permission_checker, user_id, "attendance.editHistory"
            )

        async with self._uow_factory() as uow:
            return await write_mark(uow, mark, user_id)
