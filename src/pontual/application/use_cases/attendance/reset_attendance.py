"""Reset attendance use case."""

from datetime import date

from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.guard import ensure_permission


class ResetAttendanceUseCase:
    """Delete every attendance record of a day. Requires attendance.reset."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(self, user_id: str, day: date) -> int:
        await ensure_permission(self._permission_checker, user_id, "attendance.reset")

        async with self._uow_factory() as uow:
            deleted = await uow.attendance.delete_by_date(day)

        await self._audit.log_bulk_action(
            user_id,
            "attendance",
            f"Registros de ponto de {day.isoformat()} resetados",
            deleted,
            {"date": day.isoformat()},
        )
        return deleted
