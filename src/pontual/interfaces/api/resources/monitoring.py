"""Monitoring API resources: audit trail, activity and tracked errors."""

from typing import Any

import falcon
import falcon.asgi

from pontual.application.dto.log_filters import (
    ActivityLogFilters,
    AuditLogFilters,
    ErrorLogFilters,
)
from pontual.application.use_cases.monitoring.monitoring_logs import (
    QueryAuditLogsUseCase,
    QueryErrorLogsUseCase,
    RecordActivityUseCase,
    RefreshMonitoringUseCase,
    ReportErrorUseCase,
    ResolveErrorUseCase,
)
from pontual.domain.exceptions import ValidationError
from pontual.domain.value_objects import AuditAction, ErrorSeverity, ErrorType
from pontual.interfaces.api.requests import (
    current_user,
    json_body,
    optional_param,
    parse_datetime,
    parse_uuid,
    required,
    user_agent,
)
from pontual.interfaces.api.serializers import (
    activity_entry_to_dict,
    audit_entry_to_dict,
    error_log_to_dict,
)


def _enum(enum_cls: type, value: Any, field: str) -> Any:
    try:
        return enum_cls(str(value))
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field} deve ser um de: {allowed}") from None


def _enum_param(req: falcon.asgi.Request, name: str, enum_cls: type) -> Any:
    value = req.get_param(name)
    return _enum(enum_cls, value, name) if value else None


def _limit(req: falcon.asgi.Request) -> int | None:
    value = req.get_param("limit")
    if not value:
        return None
    if not value.isdigit() or int(value) < 1:
        raise ValidationError("limit deve ser um inteiro positivo")
    return int(value)


def _optional_dict(body: dict, key: str) -> dict | None:
    value = body.get(key)
    if value is not None and not isinstance(value, dict):
        raise ValidationError(f"{key} deve ser um objeto")
    return value


class AuditLogsResource:
    """GET /v1/monitoring/audit-logs."""

    def __init__(self, query_audit: QueryAuditLogsUseCase) -> None:
        self._query = query_audit

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        filters = AuditLogFilters(
            start=optional_param(req, "start", parse_datetime),
            end=optional_param(req, "end", parse_datetime),
            user_id=req.get_param("user_id") or None,
            module=req.get_param("module") or None,
            action_type=_enum_param(req, "action_type", AuditAction),
            limit=_limit(req),
        )
        entries = await self._query.execute(user.user_id, filters)
        resp.media = {"items": [audit_entry_to_dict(e) for e in entries]}
        resp.status = falcon.HTTP_200


class AuditStatsResource:
    """GET /v1/monitoring/audit-stats."""

    def __init__(self, query_audit: QueryAuditLogsUseCase) -> None:
        self._query = query_audit

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        resp.media = await self._query.stats(
            user.user_id,
            optional_param(req, "start", parse_datetime),
            optional_param(req, "end", parse_datetime),
        )
        resp.status = falcon.HTTP_200


class ActivityLogsResource:
    """GET/POST /v1/monitoring/activity-logs.

    Reading requires settings.view; any signed-in user may record their own
    page views, searches and filters.
    """

    def __init__(
        self,
        query_audit: QueryAuditLogsUseCase,
        record_activity: RecordActivityUseCase,
    ) -> None:
        self._query = query_audit
        self._record = record_activity

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        filters = ActivityLogFilters(
            start=optional_param(req, "start", parse_datetime),
            end=optional_param(req, "end", parse_datetime),
            user_id=req.get_param("user_id") or None,
            module=req.get_param("module") or None,
            limit=_limit(req),
        )
        entries = await self._query.activity(user.user_id, filters)
        resp.media = {"items": [activity_entry_to_dict(e) for e in entries]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        duration = body.get("duration_ms")
        if duration is not None and (isinstance(duration, bool) or not isinstance(duration, int)):
            raise ValidationError("duration_ms deve ser um inteiro")
        result = await self._record.execute(
            user.user_id,
            str(required(body, "activity_type")),
            str(required(body, "module")),
            details=_optional_dict(body, "details"),
            duration_ms=duration,
        )
        resp.media = {"recorded": result.ok and not result.skipped}
        resp.status = falcon.HTTP_202


class ErrorLogsResource:
    """GET/POST /v1/monitoring/error-logs."""

    def __init__(
        self,
        query_errors: QueryErrorLogsUseCase,
        report_error: ReportErrorUseCase,
    ) -> None:
        self._query = query_errors
        self._report = report_error

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        resolved = req.get_param_as_bool("resolved")
        filters = ErrorLogFilters(
            start=optional_param(req, "start", parse_datetime),
            end=optional_param(req, "end", parse_datetime),
            error_type=_enum_param(req, "error_type", ErrorType),
            severity=_enum_param(req, "severity", ErrorSeverity),
            module=req.get_param("module") or None,
            resolved=resolved,
            limit=_limit(req),
        )
        errors = await self._query.execute(user.user_id, filters)
        resp.media = {"items": [error_log_to_dict(e) for e in errors]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await json_body(req)
        message = str(required(body, "message")).strip()
        if not message:
            raise ValidationError("message é obrigatório")
        result = await self._report.execute(
            user.user_id,
            _enum(ErrorType, required(body, "error_type"), "error_type"),
            _enum(ErrorSeverity, body.get("severity") or ErrorSeverity.MEDIUM, "severity"),
            message,
            stack_trace=body.get("stack_trace"),
            component=body.get("component"),
            module=body.get("module"),
            context=_optional_dict(body, "context"),
            user_agent=user_agent(req),
        )
        resp.media = {"recorded": result.ok and not result.skipped}
        resp.status = falcon.HTTP_202


class ErrorStatsResource:
    """GET /v1/monitoring/error-stats."""

    def __init__(self, query_errors: QueryErrorLogsUseCase) -> None:
        self._query = query_errors

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        resp.media = await self._query.stats(
            user.user_id,
            optional_param(req, "start", parse_datetime),
            optional_param(req, "end", parse_datetime),
        )
        resp.status = falcon.HTTP_200


class ErrorResolveResource:
    """POST/DELETE /v1/monitoring/error-logs/{error_id}/resolve.

    POST marks the error resolved by the caller, DELETE reopens it.
    """

    def __init__(self, resolve_error: ResolveErrorUseCase) -> None:
        self._resolve = resolve_error

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, error_id: str
    ) -> None:
        user = current_user(req)
        await self._resolve.execute(user.user_id, parse_uuid(error_id, "error_id"))
        resp.status = falcon.HTTP_204

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, error_id: str
    ) -> None:
        user = current_user(req)
        await self._resolve.execute(
            user.user_id, parse_uuid(error_id, "error_id"), resolved=False
        )
        resp.status = falcon.HTTP_204


class MonitoringRefreshResource:
    """POST /v1/monitoring/refresh."""

    def __init__(self, refresh: RefreshMonitoringUseCase) -> None:
        self._refresh = refresh

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        config = await self._refresh.execute(user.user_id)
        resp.media = {
            "tracking_enabled": config.tracking_enabled,
            "critical_notifications": config.critical_notifications,
        }
        resp.status = falcon.HTTP_200
