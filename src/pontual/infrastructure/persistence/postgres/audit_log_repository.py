"""PostgreSQL audit and activity log repositories."""

from datetime import datetime

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from pontual.application.dto.log_filters import ActivityLogFilters, AuditLogFilters
from pontual.domain.entities import ActivityLogEntry, AuditLogEntry
from pontual.domain.value_objects import AuditAction
from pontual.infrastructure.persistence.postgres.filters import (
    build_where,
    enum_value,
    limit_clause,
)

_AUDIT_COLUMNS = (
    "id, user_id, action_type, module, description, created_at, "
    "entity_type, entity_id, old_data, new_data, user_agent"
)
_ACTIVITY_COLUMNS = "id, user_id, activity_type, module, created_at, details, duration_ms"

# Columns audit statistics may group by.
_COUNTABLE = frozenset({"action_type", "module", "user_id"})


def _json_or_none(value: dict | None) -> Jsonb | None:
    return Jsonb(value) if value is not None else None


def _row_to_audit(r: tuple) -> AuditLogEntry:
    return AuditLogEntry(
        id=r[0],
        user_id=r[1],
        action_type=AuditAction(r[2]),
        module=r[3],
        description=r[4],
        created_at=r[5],
        entity_type=r[6],
        entity_id=r[7],
        old_data=r[8],
        new_data=r[9],
        user_agent=r[10],
    )


class PostgresAuditLogRepository:
    """Append-only audit log."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        await self._conn.execute(
            f"INSERT INTO audit_logs ({_AUDIT_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.user_id,
                entry.action_type.value,
                entry.module,
                entry.description,
                entry.created_at,
                entry.entity_type,
                entry.entity_id,
                _json_or_none(entry.old_data),
                _json_or_none(entry.new_data),
                entry.user_agent,
            ),
        )
        return entry

    async def list(self, filters: AuditLogFilters) -> list[AuditLogEntry]:
        """AND-combined filters, newest first."""
        where, params = build_where(
            [
                ("created_at >= %s", filters.start),
                ("created_at <= %s", filters.end),
                ("user_id = %s", filters.user_id),
                ("module = %s", filters.module),
                ("action_type = %s", enum_value(filters.action_type)),
            ]
        )
        limit = limit_clause(filters.limit, params)
        cur = await self._conn.execute(
            f"SELECT {_AUDIT_COLUMNS} FROM audit_logs{where} ORDER BY created_at DESC{limit}",
            params,
        )
        return [_row_to_audit(r) for r in await cur.fetchall()]

    async def count_by(
        self,
        column: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, int]:
        if column not in _COUNTABLE:
            raise ValueError(f"Cannot group audit logs by {column!r}")
        where, params = build_where([("created_at >= %s", start), ("created_at <= %s", end)])
        cur = await self._conn.execute(
            f"SELECT {column}, COUNT(*) FROM audit_logs{where} GROUP BY {column}",
            params,
        )
        return {r[0]: r[1] for r in await cur.fetchall()}


class PostgresActivityLogRepository:
    """Append-only activity log."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, entry: ActivityLogEntry) -> ActivityLogEntry:
        await self._conn.execute(
            f"INSERT INTO activity_logs ({_ACTIVITY_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.user_id,
                entry.activity_type,
                entry.module,
                entry.created_at,
                _json_or_none(entry.details),
                entry.duration_ms,
            ),
        )
        return entry

    async def list(self, filters: ActivityLogFilters) -> list[ActivityLogEntry]:
        where, params = build_where(
            [
                ("created_at >= %s", filters.start),
                ("created_at <= %s", filters.end),
                ("user_id = %s", filters.user_id),
                ("module = %s", filters.module),
            ]
        )
        limit = limit_clause(filters.limit, params)
        cur = await self._conn.execute(
            f"SELECT {_ACTIVITY_COLUMNS} FROM activity_logs{where} "
            f"ORDER BY created_at DESC{limit}",
            params,
        )
        return [
            ActivityLogEntry(
                id=r[0],
                user_id=r[1],
                activity_type=r[2],
                module=r[3],
                created_at=r[4],
                details=r[5],
                duration_ms=r[6],
            )
            for r in await cur.fetchall()
        ]
