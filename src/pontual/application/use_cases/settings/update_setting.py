"""Update setting use case."""

from typing import Any

from pontual.application.ports import PermissionChecker
from pontual.application.use_cases.financial.payments import non_negative
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.exceptions import ValidationError

DAILY_RATE_KEY = "daily_rate"


def permission_for_setting(key: str) -> str:
    return "settings.editDailyRate" if key == DAILY_RATE_KEY else "settings.editOther"


class UpdateSettingUseCase:
    """Write one system setting.

    The default daily rate requires settings.editDailyRate; every other key
    requires settings.editOther.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, key: str, value: Any) -> Any:
        await ensure_permission(self._permission_checker, user_id, permission_for_setting(key))
        if not key:
            raise ValidationError("Chave de configuração é obrigatória")
        if key == DAILY_RATE_KEY:
            value = str(non_negative(value, "Taxa diária"))

        async with self._uow_factory() as uow:
            await uow.settings.set(key, value, user_id)
        return value


class GetSettingUseCase:
    """Requires settings.view."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, key: str) -> Any:
        await ensure_permission(self._permission_checker, user_id, "settings.view")
        async with self._uow_factory() as uow:
            return await uow.settings.get(key)
