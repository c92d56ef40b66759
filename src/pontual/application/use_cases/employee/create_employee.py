"""Create employee use case."""

from datetime import UTC, datetime
from uuid import uuid4

from pontual.application.dto.employee_input import EmployeeInput
from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.employee.validation import (
    employee_snapshot,
    validate_employee,
)
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Employee


class CreateEmployeeUseCase:
    """Register a new employee. Requires employees.create."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(self, user_id: str, data: EmployeeInput) -> Employee:
        await ensure_permission(self._permission_checker, user_id, "employees.create")

        async with self._uow_factory() as uow:
            clean = await validate_employee(uow, data)
            employee = Employee(
                id=uuid4(),
                name=clean.name,
                cpf=clean.cpf,
                pix_key=clean.pix_key,
                pix_type=clean.pix_type,
                created_by=user_id,
                created_at=datetime.now(UTC),
            )
            await uow.employees.create(employee)

        await self._audit.log_create(
            user_id,
            "employees",
            "employee",
            employee.id,
            employee_snapshot(employee),
            f"Funcionário cadastrado: {employee.name}",
        )
        return employee
