"""User permission management use cases.

All of them require users.managePermissions and delegate to the
PermissionStore, which refuses to touch the super admin.
"""

from pontual.application.dto.results import SaveResult
from pontual.application.ports import PermissionChecker
from pontual.application.services import PermissionStore
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import PermissionLog
from pontual.domain.exceptions import ValidationError
from pontual.domain.permissions import PermissionSet, schema_violation
from pontual.domain.value_objects import PresetName

MANAGE_PERMISSIONS = "users.managePermissions"


def as_permission_set(permissions: object) -> PermissionSet:
    problem = schema_violation(permissions)
    if problem:
        raise ValidationError(problem)
    return {str(module): dict(actions) for module, actions in permissions.items()}


class _PermissionUseCase:
    def __init__(self, store: PermissionStore, permission_checker: PermissionChecker) -> None:
        self._store = store
        self._permission_checker = permission_checker

    async def _authorize(self, user_id: str) -> None:
        await ensure_permission(self._permission_checker, user_id, MANAGE_PERMISSIONS)


class GetUserPermissionsUseCase(_PermissionUseCase):
    """Stored and effective sets of a user."""

    async def execute(
        self, user_id: str, target_user_id: str
    ) -> dict[str, PermissionSet | None]:
        await self._authorize(user_id)
        return {
            "stored": await self._store.get(target_user_id),
            "effective": await self._store.get_effective(target_user_id),
        }


class GetPermissionLogsUseCase(_PermissionUseCase):
    async def execute(
        self, user_id: str, target_user_id: str, limit: int | None = None
    ) -> list[PermissionLog]:
        await self._authorize(user_id)
        return await self._store.get_logs(target_user_id, limit)


class SaveUserPermissionsUseCase(_PermissionUseCase):
    async def execute(
        self, user_id: str, target_user_id: str, permissions: object
    ) -> SaveResult:
        await self._authorize(user_id)
        return await self._store.save(
            target_user_id, as_permission_set(permissions), user_id
        )


class ResetUserPermissionsUseCase(_PermissionUseCase):
    async def execute(
        self, user_id: str, target_user_id: str, preset_name: str
    ) -> SaveResult:
        await self._authorize(user_id)
        try:
            name = PresetName(preset_name)
        except ValueError:
            raise ValidationError(f"Preset desconhecido: {preset_name}") from None
        return await self._store.reset_to_default(target_user_id, name, user_id)


class DuplicateUserPermissionsUseCase(_PermissionUseCase):
    async def execute(
        self, user_id: str, from_user_id: str, to_user_id: str
    ) -> SaveResult:
        await self._authorize(user_id)
        return await self._store.duplicate(from_user_id, to_user_id, user_id)
