"""Apply bonus use case."""

from datetime import UTC, date, datetime
from decimal import Decimal
from uuid import uuid4

from pontual.application.dto.results import BulkResult
from pontual.application.ports import PermissionChecker
from pontual.application.use_cases.financial.payments import non_negative, upsert_payment
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Bonus
from pontual.domain.exceptions import PontualError
from pontual.domain.value_objects import AttendanceStatus


class ApplyBonusUseCase:
    """Give every employee present on a day the same bonus.

    Requires financial.applyBonus. Each present employee is a result item.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, day: date, amount: Decimal) -> BulkResult:
        await ensure_permission(self._permission_checker, user_id, "financial.applyBonus")
        amount = non_negative(amount, "Bônus")

        async with self._uow_factory() as uow:
            await uow.bonuses.upsert(
                Bonus(
                    id=uuid4(),
                    date=day,
                    amount=amount,
                    applied_by=user_id,
                    created_at=datetime.now(UTC),
                )
            )
            present = await uow.attendance.list(
                start=day, end=day, status=AttendanceStatus.PRESENT
            )

        result = BulkResult()
        for attendance in present:
            try:
                async with self._uow_factory() as uow:
                    await upsert_payment(
                        uow, attendance.employee_id, day, user_id, bonus=amount
                    )
            except PontualError as e:
                result.record_failure(attendance.employee_id, str(e))
                continue
            result.record_success()
        return result
