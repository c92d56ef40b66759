"""Data retention and cleanup API resources."""

import falcon
import falcon.asgi

from pontual.application.use_cases.data_management.retention import (
    ConfigureAutoCleanupUseCase,
    ConfigureRetentionUseCase,
    GetDataStatsUseCase,
    RunManualCleanupUseCase,
)
from pontual.domain.exceptions import ValidationError
from pontual.interfaces.api.requests import current_user, json_body, required
from pontual.interfaces.api.serializers import retention_to_dict


class DataStatsResource:
    """GET /v1/data-management/stats."""

    def __init__(self, get_stats: GetDataStatsUseCase) -> None:
        self._get_stats = get_stats

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        resp.media = {"tables": await self._get_stats.execute(user.user_id)}
        resp.status = falcon.HTTP_200


class RetentionResource:
    """PUT /v1/data-management/retention - ``{"table_name", "retention_days"}``."""

    def __init__(self, configure_retention: ConfigureRetentionUseCase) -> None:
        self._configure = configure_retention

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        policy = await self._configure.execute(
            user.user_id,
            str(required(body, "table_name")),
            required(body, "retention_days"),
        )
        resp.media = retention_to_dict(policy)
        resp.status = falcon.HTTP_200


class AutoCleanupResource:
    """PUT /v1/data-management/auto-cleanup - ``{"table_name", "enabled"}``."""

    def __init__(self, configure_auto_cleanup: ConfigureAutoCleanupUseCase) -> None:
        self._configure = configure_auto_cleanup

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        enabled = required(body, "enabled")
        if not isinstance(enabled, bool):
            raise ValidationError("enabled deve ser booleano")
        policy = await self._configure.execute(
            user.user_id, str(required(body, "table_name")), enabled
        )
        resp.media = retention_to_dict(policy)
        resp.status = falcon.HTTP_200


class CleanupResource:
    """POST /v1/data-management/cleanup - ``{"tables": [...]}`` optional."""

    def __init__(self, run_cleanup: RunManualCleanupUseCase) -> None:
        self._run_cleanup = run_cleanup

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        tables = body.get("tables")
        if tables is not None and not isinstance(tables, list):
            raise ValidationError("tables deve ser uma lista")
        result, deleted = await self._run_cleanup.execute(user.user_id, tables)
        resp.media = {**result.to_dict(), "deleted": deleted}
        resp.status = falcon.HTTP_200
