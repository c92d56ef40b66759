"""Delete employee use case."""

from uuid import UUID

from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.employee.validation import employee_snapshot
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.exceptions import NotFound


class DeleteEmployeeUseCase:
    """Remove an employee. Requires employees.delete."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(self, user_id: str, employee_id: UUID) -> None:
        await ensure_permission(self._permission_checker, user_id, "employees.delete")

        async with self._uow_factory() as uow:
            employee = await uow.employees.get_by_id(employee_id)
            if not employee:
                raise NotFound("Employee", str(employee_id))
            await uow.employees.delete(employee_id)

        await self._audit.log_delete(
            user_id,
            "employees",
            "employee",
            employee_id,
            employee_snapshot(employee),
            f"Funcionário excluído: {employee.name}",
        )
