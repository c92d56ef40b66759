"""Employee input validation."""

from uuid import UUID

from pontual.application.dto.employee_input import EmployeeInput
from pontual.domain.exceptions import DuplicateRecord, ValidationError
from pontual.domain.value_objects import Cpf, is_valid_cpf


def _clean(value: str | None) -> str | None:
    return (value or "").strip() or None


async def validate_employee(
    uow: object,
    data: EmployeeInput,
    exclude_id: UUID | None = None,
) -> EmployeeInput:
    """Return normalized input (trimmed name, CPF digits) or raise."""
    name = (data.name or "").strip()
    if len(name) < 3:
        raise ValidationError("Nome deve ter pelo menos 3 caracteres")
    if not is_valid_cpf(data.cpf):
        raise ValidationError("CPF inválido")

    cpf = Cpf(data.cpf).value
    if await uow.employees.get_by_cpf(cpf, exclude_id=exclude_id):
        raise DuplicateRecord("CPF já cadastrado")

    return EmployeeInput(
        name=name,
        cpf=cpf,
        pix_key=_clean(data.pix_key),
        pix_type=_clean(data.pix_type),
    )


def employee_snapshot(employee: object) -> dict[str, object]:
    return {
        "name": employee.name,
        "cpf": employee.cpf,
        "pix_key": employee.pix_key,
        "pix_type": employee.pix_type,
    }
