"""Set daily rate use case."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pontual.application.ports import PermissionChecker
from pontual.application.use_cases.financial.payments import non_negative, upsert_payment
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Payment
from pontual.domain.exceptions import NotFound


class SetDailyRateUseCase:
    """Set an employee's rate for a day. Requires financial.editRate.

    Changing the bonus in the same edit also requires financial.editBonus.
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
        employee_id: UUID,
        day: date,
        daily_rate: Decimal,
        bonus: Decimal | None = None,
    ) -> Payment:
        await ensure_permission(self._permission_checker, user_id, "financial.editRate")
        daily_rate = non_negative(daily_rate, "Taxa diária")
        if bonus is not None:
            bonus = non_negative(bonus, "Bônus")

        async with self._uow_factory() as uow:
            if not await uow.employees.get_by_id(employee_id):
                raise NotFound("Employee", str(employee_id))
            if bonus is not None:
                existing = await uow.payments.get_for_day(employee_id, day)
                if bonus != (existing.bonus if existing else Decimal("0")):
                    await ensure_permission(
                        self._permission_checker, user_id, "financial.editBonus"
                    )
            return await upsert_payment(
                uow, employee_id, day, user_id, daily_rate=daily_rate, bonus=bonus
            )
