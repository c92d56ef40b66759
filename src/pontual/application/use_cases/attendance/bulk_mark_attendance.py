"""Bulk mark attendance use case."""

from pontual.application.dto.attendance_input import AttendanceMark
from pontual.application.dto.results import BulkResult
from pontual.application.ports import PermissionChecker
from pontual.application.services import BusinessClock
from pontual.application.use_cases.attendance.marking import write_mark
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.exceptions import PontualError
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


class BulkMarkAttendanceUseCase:
    """Mark many employees; each mark succeeds or fails on its own."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        clock: BusinessClock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._clock = clock

    async def execute(self, user_id: str, marks: list[AttendanceMark]) -> BulkResult:
        await ensure_permission(self._permission_checker, user_id, "attendance.mark")

        result = BulkResult()
        for mark in marks:
            try:
                if self._clock.is_past(mark.date):
                    await ensure_permission(
                        self._permission_checker, user_id, "attendance.editHistory"
                    )
                async with self._uow_factory() as uow:
                    await write_mark(uow, mark, user_id)
            except PontualError as e:
                result.record_failure(f"{mark.employee_id}@{mark.date}", str(e))
                continue
            result.record_success()

        logger.info(
            "attendance_bulk_marked",
            user_id=user_id,
            succeeded=result.succeeded,
            failed=result.failed,
        )
        return result
