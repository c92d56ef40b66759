"""Health check endpoints."""

import falcon.asgi

from pontual.domain.exceptions import StorageError


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, unit_of_work_factory: type | None = None) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (database reachable)."""
        if self._uow_factory:
            try:
                async with self._uow_factory() as uow:
                    await uow.settings.get("error_tracking_enabled")
            except StorageError:
                resp.media = {"status": "unavailable"}
                resp.status = falcon.HTTP_503
                return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
