"""PostgreSQL employee error record repository implementation."""

from datetime import date
from uuid import UUID

from psycopg import AsyncConnection

from pontual.domain.entities import ErrorRecord
from pontual.infrastructure.persistence.postgres.filters import build_where

_COLUMNS = (
    "id, employee_id, date, error_count, observations, created_by, created_at, updated_at"
)


def _row_to_record(r: tuple) -> ErrorRecord:
    return ErrorRecord(
        id=r[0],
        employee_id=r[1],
        date=r[2],
        error_count=r[3],
        observations=r[4],
        created_by=r[5],
        created_at=r[6],
        updated_at=r[7],
    )


class PostgresErrorRecordRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, record_id: UUID) -> ErrorRecord | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM error_records WHERE id = %s",
            (record_id,),
        )
        r = await cur.fetchone()
        return _row_to_record(r) if r else None

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[ErrorRecord]:
        where, params = build_where(
            [("date >= %s", start), ("date <= %s", end), ("employee_id = %s", employee_id)]
        )
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM error_records{where} ORDER BY date DESC", params
        )
        return [_row_to_record(r) for r in await cur.fetchall()]

    async def create(self, record: ErrorRecord) -> ErrorRecord:
        await self._conn.execute(
            f"INSERT INTO error_records ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                record.id,
                record.employee_id,
                record.date,
                record.error_count,
                record.observations,
                record.created_by,
                record.created_at,
                record.updated_at,
            ),
        )
        return record

    async def update(self, record: ErrorRecord) -> None:
        await self._conn.execute(
            "UPDATE error_records SET error_count=%s, observations=%s, updated_at=%s "
            "WHERE id=%s",
            (record.error_count, record.observations, record.updated_at, record.id),
        )

    async def delete(self, record_id: UUID) -> None:
        await self._conn.execute("DELETE FROM error_records WHERE id = %s", (record_id,))
