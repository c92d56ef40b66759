"""Permission API resources: own permissions, presets and per-user management."""

import falcon
import falcon.asgi

from pontual.application.dto.results import SaveResult
from pontual.application.services import PermissionStore
from pontual.application.use_cases.permission.manage_user_permissions import (
    DuplicateUserPermissionsUseCase,
    GetPermissionLogsUseCase,
    GetUserPermissionsUseCase,
    ResetUserPermissionsUseCase,
    SaveUserPermissionsUseCase,
)
from pontual.domain.exceptions import StorageError
from pontual.domain.permissions import (
    PERMISSION_LABELS,
    PERMISSION_SCHEMA,
    STORAGE_FALLBACK_PRESET,
    UI_NEW_USER_PRESET,
    preset,
)
from pontual.domain.value_objects import PresetName
from pontual.interfaces.api.requests import current_user, json_body, required
from pontual.interfaces.api.serializers import permission_log_to_dict


def _save_response(resp: falcon.asgi.Response, result: SaveResult) -> None:
    resp.media = {"success": result.success, "error": result.error}
    resp.status = falcon.HTTP_200 if result.success else falcon.HTTP_409


class MyPermissionsResource:
    """GET /v1/me/permissions - effective permissions of the caller."""

    def __init__(self, store: PermissionStore) -> None:
        self._store = store

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        permissions = await self._store.get_effective(user.user_id)
        if permissions is None:
            raise StorageError("Could not load permissions")
        resp.media = {
            "user_id": user.user_id,
            "is_super_admin": self._store.is_super_admin(user.user_id),
            "permissions": permissions,
        }
        resp.status = falcon.HTTP_200


class PermissionPresetsResource:
    """GET /v1/permission-presets - presets, schema and labels for the editor."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        current_user(req)
        resp.media = {
            "presets": {name.value: preset(name) for name in PresetName},
            "new_user_preset": UI_NEW_USER_PRESET.value,
            "fallback_preset": STORAGE_FALLBACK_PRESET.value,
            "schema": {module.value: list(actions) for module, actions in PERMISSION_SCHEMA.items()},
            "labels": PERMISSION_LABELS,
        }
        resp.status = falcon.HTTP_200


class UserPermissionsResource:
    """GET/PUT/POST /v1/users/{user_id}/permissions.

    PUT replaces the stored set; POST with ``copy_from`` duplicates another
    user's effective set onto this user.
    """

    def __init__(
        self,
        get_permissions: GetUserPermissionsUseCase,
        save_permissions: SaveUserPermissionsUseCase,
        duplicate_permissions: DuplicateUserPermissionsUseCase,
    ) -> None:
        self._get = get_permissions
        self._save = save_permissions
        self._duplicate = duplicate_permissions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = current_user(req)
        result = await self._get.execute(user.user_id, user_id)
        if result["effective"] is None:
            raise StorageError("Could not load permissions")
        resp.media = {"user_id": user_id, **result}
        resp.status = falcon.HTTP_200

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = current_user(req)
        body = await json_body(req)
        result = await self._save.execute(
            user.user_id, user_id, required(body, "permissions")
        )
        _save_response(resp, result)

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = current_user(req)
        body = await json_body(req)
        result = await self._duplicate.execute(
            user.user_id, str(required(body, "copy_from")), user_id
        )
        _save_response(resp, result)


class UserPermissionLogsResource:
    """GET /v1/users/{user_id}/permissions/logs - change history, newest first."""

    def __init__(self, get_logs: GetPermissionLogsUseCase) -> None:
        self._get_logs = get_logs

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = current_user(req)
        limit = req.get_param_as_int("limit", min_value=1, max_value=500)
        logs = await self._get_logs.execute(user.user_id, user_id, limit)
        resp.media = {"items": [permission_log_to_dict(log) for log in logs]}
        resp.status = falcon.HTTP_200


class UserPermissionResetResource:
    """POST /v1/users/{user_id}/permissions/reset - replace with a preset."""

    def __init__(self, reset_permissions: ResetUserPermissionsUseCase) -> None:
        self._reset = reset_permissions

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = current_user(req)
        body = await json_body(req)
        preset_name = body.get("preset") or STORAGE_FALLBACK_PRESET.value
        result = await self._reset.execute(user.user_id, user_id, str(preset_name))
        _save_response(resp, result)
