"""Monitoring switches shared by the audit log and error tracking."""

from pontual.domain.exceptions import StorageError
from pontual.observability.logging import get_logger

logger = get_logger(__name__)

TRACKING_ENABLED_KEY = "error_tracking_enabled"
CRITICAL_NOTIFICATIONS_KEY = "critical_error_notifications"


def _as_flag(value: object) -> bool:
    return value is True or value == "true"


class MonitoringConfig:
    """Explicit, refreshable view of the monitoring settings.

    Services read the current values on every call; the values only change
    when ``refresh`` is awaited (at startup and on demand).
    """

    def __init__(
        self,
        tracking_enabled: bool = True,
        critical_notifications: bool = False,
    ) -> None:
        self.tracking_enabled = tracking_enabled
        self.critical_notifications = critical_notifications

    async def refresh(self, unit_of_work_factory: type) -> "MonitoringConfig":
        """Reload both switches; keep current values for missing keys or on failure."""
        try:
            async with unit_of_work_factory() as uow:
                enabled = await uow.settings.get(TRACKING_ENABLED_KEY)
                critical = await uow.settings.get(CRITICAL_NOTIFICATIONS_KEY)
        except StorageError as e:
            logger.warning("monitoring_config_refresh_failed", error=str(e))
            return self

        if enabled is not None:
            self.tracking_enabled = _as_flag(enabled)
        if critical is not None:
            self.critical_notifications = _as_flag(critical)
        logger.info(
            "monitoring_config_refreshed",
            tracking_enabled=self.tracking_enabled,
            critical_notifications=self.critical_notifications,
        )
        return self
