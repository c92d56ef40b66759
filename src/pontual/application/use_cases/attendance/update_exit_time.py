"""Update exit time use case."""

from uuid import UUID

from pontual.application.dto.attendance_input import validate_exit_time
from pontual.application.ports import PermissionChecker
from pontual.application.services import BusinessClock
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Attendance
from pontual.domain.exceptions import NotFound, ValidationError
from pontual.domain.value_objects import AttendanceStatus


class UpdateExitTimeUseCase:
    """Set or clear the exit time of a present employee. Requires attendance.edit."""

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
        self, user_id: str, attendance_id: UUID, exit_time: str | None
    ) -> Attendance:
        await ensure_permission(self._permission_checker, user_id, "attendance.edit")
        exit_time = validate_exit_time(exit_time)

        async with self._uow_factory() as uow:
            attendance = await uow.attendance.get_by_id(attendance_id)
            if not attendance:
                raise NotFound("Attendance", str(attendance_id))
            if self._clock.is_past(attendance.date):
                await ensure_permission(
                    self._permission_checker, user_id, "attendance.editHistory"
                )
            if attendance.status is not AttendanceStatus.PRESENT:
                raise ValidationError("Horário de saída só pode ser definido para presentes")

            attendance.exit_time = exit_time
            await uow.attendance.update(attendance)
            return attendance
