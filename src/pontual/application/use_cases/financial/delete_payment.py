"""Delete payment use case."""

from uuid import UUID

from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.financial.payments import payment_snapshot
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.exceptions import NotFound


class DeletePaymentUseCase:
    """Delete one payment. Requires financial.delete."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(self, user_id: str, payment_id: UUID) -> None:
        await ensure_permission(self._permission_checker, user_id, "financial.delete")

        async with self._uow_factory() as uow:
            payment = await uow.payments.get_by_id(payment_id)
            if not payment:
                raise NotFound("Payment", str(payment_id))
            await uow.payments.delete(payment_id)

        await self._audit.log_delete(
            user_id,
            "financial",
            "payment",
            payment_id,
            payment_snapshot(payment),
            f"Pagamento de {payment.date.isoformat()} excluído",
        )
