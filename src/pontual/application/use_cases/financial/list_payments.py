"""List payments use case."""

from datetime import date
from uuid import UUID

from pontual.application.ports import PermissionChecker
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Payment


class ListPaymentsUseCase:
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
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[Payment]:
        await ensure_permission(
            self._permission_checker, user_id, "financial.viewPayments"
        )
        async with self._uow_factory() as uow:
            return await uow.payments.list(start=start, end=end, employee_id=employee_id)
