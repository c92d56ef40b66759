"""PostgreSQL tracked error repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from pontual.application.dto.log_filters import ErrorLogFilters
from pontual.domain.entities import ErrorLog
from pontual.domain.value_objects import ErrorSeverity, ErrorType
from pontual.infrastructure.persistence.postgres.filters import (
    build_where,
    enum_value,
    limit_clause,
)

_COLUMNS = (
    "id, error_type, severity, message, component, occurrence_count, "
    "first_occurred_at, last_occurred_at, user_id, module, stack_trace, "
    "error_context, user_agent, resolved, resolved_by, resolved_at"
)


def _row_to_error(r: tuple) -> ErrorLog:
    return ErrorLog(
        id=r[0],
        error_type=ErrorType(r[1]),
        severity=ErrorSeverity(r[2]),
        message=r[3],
        component=r[4],
        occurrence_count=r[5],
        first_occurred_at=r[6],
        last_occurred_at=r[7],
        user_id=r[8],
        module=r[9],
        stack_trace=r[10],
        error_context=r[11],
        user_agent=r[12],
        resolved=r[13],
        resolved_by=r[14],
        resolved_at=r[15],
    )


class PostgresErrorLogRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, error_id: UUID) -> ErrorLog | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM error_logs WHERE id = %s",
            (error_id,),
        )
        r = await cur.fetchone()
        return _row_to_error(r) if r else None

    async def find_open(
        self, error_type: ErrorType, message: str, component: str
    ) -> ErrorLog | None:
        """Unresolved row with the same signature, if any."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM error_logs "
            "WHERE error_type = %s AND message = %s AND component = %s AND NOT resolved "
            "ORDER BY last_occurred_at DESC LIMIT 1",
            (error_type.value, message, component),
        )
        r = await cur.fetchone()
        return _row_to_error(r) if r else None

    async def create(self, error: ErrorLog) -> ErrorLog:
        await self._conn.execute(
            f"INSERT INTO error_logs ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                error.id,
                error.error_type.value,
                error.severity.value,
                error.message,
                error.component,
                error.occurrence_count,
                error.first_occurred_at,
                error.last_occurred_at,
                error.user_id,
                error.module,
                error.stack_trace,
                Jsonb(error.error_context) if error.error_context is not None else None,
                error.user_agent,
                error.resolved,
                error.resolved_by,
                error.resolved_at,
            ),
        )
        return error

    async def add_occurrences(
        self,
        error_id: UUID,
        count: int,
        last_occurred_at: datetime,
        user_id: str | None,
    ) -> None:
        """Increment in place so concurrent writers never lose a count."""
        await self._conn.execute(
            "UPDATE error_logs SET occurrence_count = occurrence_count + %s, "
            "last_occurred_at = %s, user_id = COALESCE(%s, user_id) WHERE id = %s",
            (count, last_occurred_at, user_id, error_id),
        )

    async def set_resolved(
        self,
        error_id: UUID,
        resolved: bool,
        resolved_by: str | None,
        resolved_at: datetime | None,
    ) -> None:
        await self._conn.execute(
            "UPDATE error_logs SET resolved=%s, resolved_by=%s, resolved_at=%s WHERE id=%s",
            (resolved, resolved_by, resolved_at, error_id),
        )

    async def list(self, filters: ErrorLogFilters) -> list[ErrorLog]:
        """AND-combined filters, most recently seen first."""
        where, params = build_where(
            [
                ("first_occurred_at >= %s", filters.start),
                ("first_occurred_at <= %s", filters.end),
                ("error_type = %s", enum_value(filters.error_type)),
                ("severity = %s", enum_value(filters.severity)),
                ("module = %s", filters.module),
                ("resolved = %s", filters.resolved),
            ]
        )
        limit = limit_clause(filters.limit, params)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM error_logs{where} ORDER BY last_occurred_at DESC{limit}",
            params,
        )
        return [_row_to_error(r) for r in await cur.fetchall()]
