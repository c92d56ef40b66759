"""Apply error discounts use case."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pontual.application.dto.results import BulkResult
from pontual.application.ports import PermissionChecker
from pontual.application.use_cases.financial.payments import (
    ZERO,
    non_negative,
    upsert_payment,
)
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.exceptions import PontualError


class ApplyErrorDiscountsUseCase:
    """Discount ``error_count * discount_value`` from each day's total.

    Requires financial.editBonus. The rate and bonus are kept; only the
    total drops, never below zero. Days without a payment get a zero
    payment. One result item per error record.
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
        discount_value: Decimal,
        start: date | None = None,
        end: date | None = None,
    ) -> BulkResult:
        await ensure_permission(self._permission_checker, user_id, "financial.editBonus")
        discount_value = non_negative(discount_value, "Desconto")

        result = BulkResult()
        for employee_id in employee_ids:
            try:
                async with self._uow_factory() as uow:
                    records = await uow.error_records.list(
                        start=start, end=end, employee_id=employee_id
                    )
            except PontualError as e:
                result.record_failure(str(employee_id), str(e))
                continue
            for record in records:
                try:
                    async with self._uow_factory() as uow:
                        payment = await uow.payments.get_for_day(employee_id, record.date)
                        gross = (payment.daily_rate + payment.bonus) if payment else ZERO
                        discount = Decimal(record.error_count) * discount_value
                        await upsert_payment(
                            uow,
                            employee_id,
                            record.date,
                            user_id,
                            total=max(ZERO, gross - discount),
                        )
                except PontualError as e:
                    result.record_failure(f"{employee_id}@{record.date}", str(e))
                    continue
                result.record_success()
        return result
