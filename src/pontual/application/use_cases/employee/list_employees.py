"""List employees use case."""

from pontual.application.ports import PermissionChecker
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import Employee


class ListEmployeesUseCase:
    """Employees ordered by name. Requires employees.view."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str) -> list[Employee]:
        await ensure_permission(self._permission_checker, user_id, "employees.view")
        async with self._uow_factory() as uow:
            return await uow.employees.list()
