"""Clear payments use case."""

from datetime import date
from uuid import UUID

from pontual.application.dto.results import BulkResult
from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.exceptions import PontualError


class ClearPaymentsUseCase:
    """Delete the selected employees' payments in a period. Requires financial.clear."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(
        self,
        user_id: str,
        employee_ids: list[UUID],
        start: date | None = None,
        end: date | None = None,
    ) -> BulkResult:
        await ensure_permission(self._permission_checker, user_id, "financial.clear")

        result = BulkResult()
        deleted = 0
        for employee_id in employee_ids:
            try:
                async with self._uow_factory() as uow:
                    deleted += await uow.payments.delete_range(employee_id, start, end)
            except PontualError as e:
                result.record_failure(employee_id, str(e))
                continue
            result.record_success()

        await self._audit.log_bulk_action(
            user_id,
            "financial",
            "Pagamentos do período limpos",
            deleted,
            {
                "start": start.isoformat() if start else None,
                "end": end.isoformat() if end else None,
                "employees": result.succeeded,
            },
        )
        return result
