"""Application services shared by use cases and the HTTP layer."""

from pontual.application.services.audit_log import AuditLogService
from pontual.application.services.business_clock import BusinessClock
from pontual.application.services.error_tracking import ErrorTrackingService
from pontual.application.services.monitoring_config import MonitoringConfig
from pontual.application.services.permission_change_log import PermissionChangeLog
from pontual.application.services.permission_store import PermissionStore

__all__ = [
    "AuditLogService",
    "BusinessClock",
    "ErrorTrackingService",
    "MonitoringConfig",
    "PermissionChangeLog",
    "PermissionStore",
]
