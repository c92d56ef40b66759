"""PostgreSQL attendance repository implementation."""

from datetime import date
from uuid import UUID

from psycopg import AsyncConnection

from pontual.domain.entities import Attendance
from pontual.domain.value_objects import AttendanceStatus
from pontual.infrastructure.persistence.postgres.filters import build_where, enum_value

_COLUMNS = "id, employee_id, date, status, exit_time, marked_by, created_at"


def _row_to_attendance(r: tuple) -> Attendance:
    return Attendance(
        id=r[0],
        employee_id=r[1],
        date=r[2],
        status=AttendanceStatus(r[3]),
        exit_time=r[4],
        marked_by=r[5],
        created_at=r[6],
    )


class PostgresAttendanceRepository:
    """Attendance repository. One row per (employee_id, date)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, attendance_id: UUID) -> Attendance | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM attendance WHERE id = %s",
            (attendance_id,),
        )
        r = await cur.fetchone()
        return _row_to_attendance(r) if r else None

    async def upsert(self, attendance: Attendance) -> Attendance:
        """Insert or overwrite the day's record; returns the stored row."""
        cur = await self._conn.execute(
            f"INSERT INTO attendance ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (employee_id, date) DO UPDATE SET "
            "status = EXCLUDED.status, exit_time = EXCLUDED.exit_time, "
            "marked_by = EXCLUDED.marked_by "
            f"RETURNING {_COLUMNS}",
            (
                attendance.id,
                attendance.employee_id,
                attendance.date,
                attendance.status.value,
                attendance.exit_time,
                attendance.marked_by,
                attendance.created_at,
            ),
        )
        return _row_to_attendance(await cur.fetchone())

    async def update(self, attendance: Attendance) -> None:
        await self._conn.execute(
            "UPDATE attendance SET status=%s, exit_time=%s, marked_by=%s WHERE id=%s",
            (
                attendance.status.value,
                attendance.exit_time,
                attendance.marked_by,
                attendance.id,
            ),
        )

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
        status: AttendanceStatus | None = None,
    ) -> list[Attendance]:
        where, params = build_where(
            [
                ("date >= %s", start),
                ("date <= %s", end),
                ("employee_id = %s", employee_id),
                ("status = %s", enum_value(status)),
            ]
        )
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM attendance{where} ORDER BY date DESC, created_at DESC",
            params,
        )
        return [_row_to_attendance(r) for r in await cur.fetchall()]

    async def delete_by_date(self, day: date) -> int:
        cur = await self._conn.execute("DELETE FROM attendance WHERE date = %s", (day,))
        return cur.rowcount
