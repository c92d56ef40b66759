"""Remove bonus use cases - one employee or a whole day."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.financial.payments import (
    ZERO,
    payment_snapshot,
    upsert_payment,
)
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Payment
from pontual.domain.exceptions import NotFound


class RemoveBonusUseCase:
    """Zero one employee's bonus on a day. Requires financial.removeBonus."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(self, user_id: str, day: date, employee_id: UUID) -> Payment:
        await ensure_permission(self._permission_checker, user_id, "financial.removeBonus")

        async with self._uow_factory() as uow:
            existing = await uow.payments.get_for_day(employee_id, day)
            if not existing:
                raise NotFound("Payment", f"{employee_id}@{day.isoformat()}")
            before = payment_snapshot(existing)
            removed = existing.bonus
            payment = await upsert_payment(uow, employee_id, day, user_id, bonus=ZERO)

        await self._audit.log_update(
            user_id,
            "financial",
            "payment",
            payment.id,
            before,
            {**payment_snapshot(payment), "bonus_removed": str(removed)},
            f"Bonificação de R$ {removed:.2f} removida em {day.isoformat()}",
        )
        return payment


class RemoveBonusBulkUseCase:
    """Zero every bonus of a day and drop the day's bonus.

    Requires financial.removeBonusBulk. Returns how many payments changed.
    """

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
        await ensure_permission(
            self._permission_checker, user_id, "financial.removeBonusBulk"
        )

        removed_total = Decimal("0")
        changed = 0
        async with self._uow_factory() as uow:
            for payment in await uow.payments.list(start=day, end=day):
                if payment.bonus <= ZERO:
                    continue
                removed_total += payment.bonus
                await upsert_payment(uow, payment.employee_id, day, user_id, bonus=ZERO)
                changed += 1
            await uow.bonuses.delete_by_date(day)

        await self._audit.log_bulk_action(
            user_id,
            "financial",
            f"Bonificações de {day.isoformat()} removidas",
            changed,
            {"date": day.isoformat(), "amount_removed": str(removed_total)},
        )
        return changed
