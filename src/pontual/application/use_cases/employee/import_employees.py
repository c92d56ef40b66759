"""Import employees use case - bulk create from spreadsheet rows."""

from datetime import UTC, datetime
from uuid import uuid4

from pontual.application.dto.employee_input import EmployeeInput
from pontual.application.dto.results import BulkResult
from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.employee.validation import validate_employee
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Employee
from pontual.domain.exceptions import PontualError
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


class ImportEmployeesUseCase:
    """Create one employee per row; invalid rows are reported, not fatal."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(self, user_id: str, rows: list[EmployeeInput]) -> BulkResult:
        await ensure_permission(self._permission_checker, user_id, "employees.import")

        result = BulkResult()
        for row in rows:
            try:
                async with self._uow_factory() as uow:
                    clean = await validate_employee(uow, row)
                    await uow.employees.create(
                        Employee(
                            id=uuid4(),
                            name=clean.name,
                            cpf=clean.cpf,
                            pix_key=clean.pix_key,
                            pix_type=clean.pix_type,
                            created_by=user_id,
                            created_at=datetime.now(UTC),
                        )
                    )
            except PontualError as e:
                result.record_failure(row.cpf or row.name, str(e))
                continue
            result.record_success()

        logger.info(
            "employees_imported",
            user_id=user_id,
            succeeded=result.succeeded,
            failed=result.failed,
        )
        await self._audit.log_import(
            user_id,
            "employees",
            f"Importação de funcionários: {result.succeeded} de {result.total}",
            result.to_dict(),
        )
        return result
