"""Pool lifespan middleware - opens pool on startup, closes on shutdown."""

from typing import Any

from psycopg_pool import AsyncConnectionPool

from pontual.application.services import ErrorTrackingService, MonitoringConfig
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool and loads monitoring settings on startup.

    On shutdown, unwritten error repeats are flushed before the pool closes.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        unit_of_work_factory: type,
        monitoring: MonitoringConfig,
        error_tracking: ErrorTrackingService,
    ) -> None:
        self._pool = pool
        self._uow_factory = unit_of_work_factory
        self._monitoring = monitoring
        self._error_tracking = error_tracking

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool when ASGI server starts."""
        await self._pool.open()
        await self._monitoring.refresh(self._uow_factory)
        logger.info("app_started")

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pool when ASGI server shuts down."""
        await self._error_tracking.flush()
        await self._pool.close()
        logger.info("app_stopped")
