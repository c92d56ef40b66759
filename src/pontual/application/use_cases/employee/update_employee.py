"""Update employee use case."""

from uuid import UUID

from pontual.application.dto.employee_input import EmployeeInput
from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.employee.validation import (
    employee_snapshot,
    validate_employee,
)
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Employee
from pontual.domain.exceptions import NotFound


class UpdateEmployeeUseCase:
    """Edit an employee's name, CPF and PIX key. Requires employees.edit."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(self, user_id: str, employee_id: UUID, data: EmployeeInput) -> Employee:
        await ensure_permission(self._permission_checker, user_id, "employees.edit")

        async with self._uow_factory() as uow:
            employee = await uow.employees.get_by_id(employee_id)
            if not employee:
                raise NotFound("Employee", str(employee_id))
            clean = await validate_employee(uow, data, exclude_id=employee_id)

            before = employee_snapshot(employee)
            employee.name = clean.name
            employee.cpf = clean.cpf
            employee.pix_key = clean.pix_key
            employee.pix_type = clean.pix_type
            await uow.employees.update(employee)

        await self._audit.log_update(
            user_id,
            "employees",
            "employee",
            employee.id,
            before,
            employee_snapshot(employee),
            f"Funcionário atualizado: {employee.name}",
        )
        return employee
