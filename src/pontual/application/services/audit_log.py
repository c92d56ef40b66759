"""Audit and activity log service."""

import json
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pontual.application.dto.log_filters import ActivityLogFilters, AuditLogFilters
from pontual.application.dto.results import SideEffectResult
from pontual.application.services.monitoring_config import MonitoringConfig
from pontual.application.services.side_channel import best_effort
from pontual.domain.entities import ActivityLogEntry, AuditLogEntry
from pontual.domain.value_objects import AuditAction

SKIPPED = SideEffectResult(ok=True, skipped=True)


def to_json_data(data: dict[str, Any] | None) -> dict[str, Any] | None:
    """Coerce snapshot values (UUID, date, Decimal, enums) to JSON types."""
    if data is None:
        return None
    return json.loads(json.dumps(data, default=str))


class AuditLogService:
    """Records significant actions and navigation activity.

    Writes are best effort and only happen while tracking is enabled in the
    monitoring settings. Queries propagate storage errors.
    """

    def __init__(self, unit_of_work_factory: type, monitoring: MonitoringConfig) -> None:
        self._uow_factory = unit_of_work_factory
        self._monitoring = monitoring

    async def log(
        self,
        action_type: AuditAction,
        module: str,
        description: str,
        *,
        user_id: str,
        entity_type: str | None = None,
        entity_id: object | None = None,
        old_data: dict[str, Any] | None = None,
        new_data: dict[str, Any] | None = None,
        user_agent: str | None = None,
    ) -> SideEffectResult:
        if not self._monitoring.tracking_enabled:
            return SKIPPED

        async def _write() -> None:
            entry = AuditLogEntry(
                id=uuid4(),
                user_id=user_id,
                action_type=AuditAction(action_type),
                module=module,
                description=description,
                created_at=datetime.now(UTC),
                entity_type=entity_type,
                entity_id=str(entity_id) if entity_id is not None else None,
                old_data=to_json_data(old_data),
                new_data=to_json_data(new_data),
                user_agent=user_agent or "Unknown",
            )
            async with self._uow_factory() as uow:
                await uow.audit_logs.create(entry)

        return await best_effort(
            _write,
            event="audit_log_write_failed",
            action_type=str(action_type),
            module=module,
        )

    async def log_create(
        self,
        user_id: str,
        module: str,
        entity_type: str,
        entity_id: object,
        new_data: dict[str, Any],
        description: str,
    ) -> SideEffectResult:
        return await self.log(
            AuditAction.CREATE,
            module,
            description,
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            new_data=new_data,
        )

    async def log_update(
        self,
        user_id: str,
        module: str,
        entity_type: str,
        entity_id: object,
        old_data: dict[str, Any],
        new_data: dict[str, Any],
        description: str,
    ) -> SideEffectResult:
        return await self.log(
            AuditAction.UPDATE,
            module,
            description,
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            old_data=old_data,
            new_data=new_data,
        )

    async def log_delete(
        self,
        user_id: str,
        module: str,
        entity_type: str,
        entity_id: object,
        old_data: dict[str, Any],
        description: str,
    ) -> SideEffectResult:
        return await self.log(
            AuditAction.DELETE,
            module,
            description,
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            old_data=old_data,
        )

    async def log_view(
        self,
        user_id: str,
        module: str,
        description: str,
        entity_type: str | None = None,
        entity_id: object | None = None,
    ) -> SideEffectResult:
        return await self.log(
            AuditAction.VIEW,
            module,
            description,
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
        )

    async def log_export(
        self,
        user_id: str,
        module: str,
        description: str,
        details: dict[str, Any] | None = None,
    ) -> SideEffectResult:
        return await self.log(
            AuditAction.EXPORT, module, description, user_id=user_id, new_data=details
        )

    async def log_import(
        self,
        user_id: str,
        module: str,
        description: str,
        details: dict[str, Any] | None = None,
    ) -> SideEffectResult:
        return await self.log(
            AuditAction.IMPORT, module, description, user_id=user_id, new_data=details
        )

    async def log_login(self, user_id: str) -> SideEffectResult:
        return await self.log(
            AuditAction.LOGIN,
            "auth",
            "Usuário realizou login no sistema",
            user_id=user_id,
        )

    async def log_logout(self, user_id: str) -> SideEffectResult:
        return await self.log(
            AuditAction.LOGOUT,
            "auth",
            "Usuário realizou logout do sistema",
            user_id=user_id,
        )

    async def log_bulk_action(
        self,
        user_id: str,
        module: str,
        description: str,
        affected_count: int,
        details: dict[str, Any] | None = None,
    ) -> SideEffectResult:
        """Record an action over many rows; the count lands in the description."""
        return await self.log(
            AuditAction.BULK_ACTION,
            module,
            f"{description} ({affected_count} registros)",
            user_id=user_id,
            new_data={"affected_count": affected_count, **(details or {})},
        )

    # --- Activity ---

    async def log_activity(
        self,
        user_id: str,
        activity_type: str,
        module: str,
        details: dict[str, Any] | None = None,
        duration_ms: int | None = None,
    ) -> SideEffectResult:
        if not self._monitoring.tracking_enabled:
            return SKIPPED

        async def _write() -> None:
            entry = ActivityLogEntry(
                id=uuid4(),
                user_id=user_id,
                activity_type=activity_type,
                module=module,
                created_at=datetime.now(UTC),
                details=to_json_data(details),
                duration_ms=duration_ms,
            )
            async with self._uow_factory() as uow:
                await uow.activity_logs.create(entry)

        return await best_effort(
            _write,
            event="activity_log_write_failed",
            activity_type=activity_type,
            module=module,
        )

    async def log_page_view(
        self, user_id: str, module: str, duration_ms: int | None = None
    ) -> SideEffectResult:
        return await self.log_activity(user_id, "page_view", module, duration_ms=duration_ms)

    async def log_search(
        self, user_id: str, module: str, search_term: str, results_count: int
    ) -> SideEffectResult:
        return await self.log_activity(
            user_id,
            "search",
            module,
            details={"search_term": search_term, "results_count": results_count},
        )

    async def log_filter(
        self, user_id: str, module: str, criteria: dict[str, Any]
    ) -> SideEffectResult:
        return await self.log_activity(user_id, "filter", module, details=criteria)

    # --- Queries ---

    async def query(self, filters: AuditLogFilters) -> list[AuditLogEntry]:
        async with self._uow_factory() as uow:
            return await uow.audit_logs.list(filters)

    async def query_activity(self, filters: ActivityLogFilters) -> list[ActivityLogEntry]:
        async with self._uow_factory() as uow:
            return await uow.activity_logs.list(filters)

    async def stats(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> dict[str, Any]:
        """Action totals overall, by action type and by module."""
        async with self._uow_factory() as uow:
            by_type = await uow.audit_logs.count_by("action_type", start, end)
            by_module = await uow.audit_logs.count_by("module", start, end)
        return {
            "total_actions": sum(by_type.values()),
            "actions_by_type": by_type,
            "actions_by_module": by_module,
        }
