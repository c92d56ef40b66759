"""Employee error record use cases."""

from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from pontual.application.ports import PermissionChecker
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import ErrorRecord
from pontual.domain.exceptions import NotFound, ValidationError


def _validate_count(error_count: int) -> int:
    if isinstance(error_count, bool) or not isinstance(error_count, int) or error_count < 0:
        raise ValidationError("Quantidade de erros deve ser um inteiro não negativo")
    return error_count


class CreateErrorRecordUseCase:
    """Record an employee's errors on a day. Requires errors.create."""

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
        employee_id: UUID,
        day: date,
        error_count: int,
        observations: str | None = None,
    ) -> ErrorRecord:
        await ensure_permission(self._permission_checker, user_id, "errors.create")
        error_count = _validate_count(error_count)

        async with self._uow_factory() as uow:
            if not await uow.employees.get_by_id(employee_id):
                raise NotFound("Employee", str(employee_id))
            now = datetime.now(UTC)
            record = ErrorRecord(
                id=uuid4(),
                employee_id=employee_id,
                date=day,
                error_count=error_count,
                observations=(observations or "").strip() or None,
                created_by=user_id,
                created_at=now,
                updated_at=now,
            )
            await uow.error_records.create(record)
            return record


class UpdateErrorRecordUseCase:
    """Change the count or observations of a record. Requires errors.edit."""

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
        record_id: UUID,
        error_count: int,
        observations: str | None = None,
    ) -> ErrorRecord:
        await ensure_permission(self._permission_checker, user_id, "errors.edit")
        error_count = _validate_count(error_count)

        async with self._uow_factory() as uow:
            record = await uow.error_records.get_by_id(record_id)
            if not record:
                raise NotFound("ErrorRecord", str(record_id))
            record.error_count = error_count
            record.observations = (observations or "").strip() or None
            record.updated_at = datetime.now(UTC)
            await uow.error_records.update(record)
            return record


class DeleteErrorRecordUseCase:
    """Requires errors.delete."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, record_id: UUID) -> None:
        await ensure_permission(self._permission_checker, user_id, "errors.delete")

        async with self._uow_factory() as uow:
            if not await uow.error_records.get_by_id(record_id):
                raise NotFound("ErrorRecord", str(record_id))
            await uow.error_records.delete(record_id)


class ListErrorRecordsUseCase:
    """Requires errors.view."""

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
    ) -> list[ErrorRecord]:
        await ensure_permission(self._permission_checker, user_id, "errors.view")
        async with self._uow_factory() as uow:
            return await uow.error_records.list(start=start, end=end, employee_id=employee_id)
