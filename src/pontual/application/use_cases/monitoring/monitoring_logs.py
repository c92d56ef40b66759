"""Use cases over the audit, activity and error logs."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pontual.application.dto.log_filters import (
    ActivityLogFilters,
    AuditLogFilters,
    ErrorLogFilters,
)
from pontual.application.dto.results import SideEffectResult
from pontual.application.ports import PermissionChecker
from pontual.application.services import (
    AuditLogService,
    ErrorTrackingService,
    MonitoringConfig,
)
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import ActivityLogEntry, AuditLogEntry, ErrorLog
from pontual.domain.value_objects import ErrorSeverity, ErrorType

VIEW_PERMISSION = "settings.view"
MANAGE_PERMISSION = "settings.editOther"


class QueryAuditLogsUseCase:
    """Audit trail, activity log and audit statistics. Requires settings.view."""

    def __init__(self, audit: AuditLogService, permission_checker: PermissionChecker) -> None:
        self._audit = audit
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, filters: AuditLogFilters) -> list[AuditLogEntry]:
        await ensure_permission(self._permission_checker, user_id, VIEW_PERMISSION)
        return await self._audit.query(filters)

    async def activity(
        self, user_id: str, filters: ActivityLogFilters
    ) -> list[ActivityLogEntry]:
        await ensure_permission(self._permission_checker, user_id, VIEW_PERMISSION)
        return await self._audit.query_activity(filters)

    async def stats(
        self, user_id: str, start: datetime | None = None, end: datetime | None = None
    ) -> dict[str, Any]:
        await ensure_permission(self._permission_checker, user_id, VIEW_PERMISSION)
        return await self._audit.stats(start, end)


class RecordActivityUseCase:
    """Navigation activity reported by the signed-in user about themselves."""

    def __init__(self, audit: AuditLogService) -> None:
        self._audit = audit

    async def execute(
        self,
        user_id: str,
        activity_type: str,
        module: str,
        details: dict[str, Any] | None = None,
        duration_ms: int | None = None,
    ) -> SideEffectResult:
        return await self._audit.log_activity(
            user_id, activity_type, module, details=details, duration_ms=duration_ms
        )


class QueryErrorLogsUseCase:
    """Requires settings.view."""

    def __init__(
        self, error_tracking: ErrorTrackingService, permission_checker: PermissionChecker
    ) -> None:
        self._error_tracking = error_tracking
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, filters: ErrorLogFilters) -> list[ErrorLog]:
        await ensure_permission(self._permission_checker, user_id, VIEW_PERMISSION)
        return await self._error_tracking.query(filters)

    async def stats(
        self, user_id: str, start: datetime | None = None, end: datetime | None = None
    ) -> dict[str, Any]:
        await ensure_permission(self._permission_checker, user_id, VIEW_PERMISSION)
        return await self._error_tracking.stats(start, end)


class ReportErrorUseCase:
    """Client-side error report. Any authenticated user may report."""

    def __init__(self, error_tracking: ErrorTrackingService) -> None:
        self._error_tracking = error_tracking

    async def execute(
        self,
        user_id: str,
        error_type: ErrorType,
        severity: ErrorSeverity,
        message: str,
        *,
        stack_trace: str | None = None,
        component: str | None = None,
        module: str | None = None,
        context: dict[str, Any] | None = None,
        user_agent: str | None = None,
    ) -> SideEffectResult:
        return await self._error_tracking.capture(
            error_type,
            severity,
            message,
            stack_trace=stack_trace,
            component=component,
            module=module,
            context=context,
            user_id=user_id,
            user_agent=user_agent,
        )


class ResolveErrorUseCase:
    """Mark a tracked error resolved or reopen it. Requires settings.editOther."""

    def __init__(
        self, error_tracking: ErrorTrackingService, permission_checker: PermissionChecker
    ) -> None:
        self._error_tracking = error_tracking
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, error_id: UUID, resolved: bool = True) -> None:
        await ensure_permission(self._permission_checker, user_id, MANAGE_PERMISSION)
        if resolved:
            await self._error_tracking.resolve(error_id, user_id)
        else:
            await self._error_tracking.unresolve(error_id)


class RefreshMonitoringUseCase:
    """Reload the tracking flags from the settings table. Requires settings.editOther."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        monitoring: MonitoringConfig,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._monitoring = monitoring

    async def execute(self, user_id: str) -> MonitoringConfig:
        await ensure_permission(self._permission_checker, user_id, MANAGE_PERMISSION)
        return await self._monitoring.refresh(self._uow_factory)
