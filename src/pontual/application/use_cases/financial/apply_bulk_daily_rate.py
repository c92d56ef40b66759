"""Apply bulk daily rate use case."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pontual.application.dto.results import BulkResult
from pontual.application.ports import PermissionChecker
from pontual.application.use_cases.financial.payments import non_negative, upsert_payment
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.exceptions import PontualError
from pontual.domain.value_objects import AttendanceStatus
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


class ApplyBulkDailyRateUseCase:
    """Set the rate on every present day of the selected employees.

    Existing bonuses are kept. One result item per employee-day.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        user_id: str,
        employee_ids: list[UUID],
        daily_rate: Decimal,
        start: date | None = None,
        end: date | None = None,
    ) -> BulkResult:
        await ensure_permission(self._permission_checker, user_id, "financial.editRate")
        daily_rate = non_negative(daily_rate, "Taxa diária")

        result = BulkResult()
        for employee_id in employee_ids:
            try:
                async with self._uow_factory() as uow:
                    present = await uow.attendance.list(
                        start=start,
                        end=end,
                        employee_id=employee_id,
                        status=AttendanceStatus.PRESENT,
                    )
            except PontualError as e:
                result.record_failure(str(employee_id), str(e))
                continue
            for attendance in present:
                try:
                    async with self._uow_factory() as uow:
                        await upsert_payment(
                            uow, employee_id, attendance.date, user_id, daily_rate=daily_rate
                        )
                except PontualError as e:
                    result.record_failure(f"{employee_id}@{attendance.date}", str(e))
                    continue
                result.record_success()

        logger.info(
            "bulk_daily_rate_applied",
            user_id=user_id,
            daily_rate=str(daily_rate),
            succeeded=result.succeeded,
            failed=result.failed,
        )
        return result
