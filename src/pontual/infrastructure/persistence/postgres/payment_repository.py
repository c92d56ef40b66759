"""PostgreSQL payment and bonus repository implementations."""

from datetime import date
from uuid import UUID

from psycopg import AsyncConnection

from pontual.domain.entities import Bonus, Payment
from pontual.infrastructure.persistence.postgres.filters import build_where

_COLUMNS = (
    "id, employee_id, date, daily_rate, bonus, total, created_by, created_at, updated_at"
)


def _row_to_payment(r: tuple) -> Payment:
    return Payment(
        id=r[0],
        employee_id=r[1],
        date=r[2],
        daily_rate=r[3],
        bonus=r[4],
        total=r[5],
        created_by=r[6],
        created_at=r[7],
        updated_at=r[8],
    )


class PostgresPaymentRepository:
    """Payment repository. One row per (employee_id, date)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, payment_id: UUID) -> Payment | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM payments WHERE id = %s",
            (payment_id,),
        )
        r = await cur.fetchone()
        return _row_to_payment(r) if r else None

    async def get_for_day(self, employee_id: UUID, day: date) -> Payment | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM payments WHERE employee_id = %s AND date = %s",
            (employee_id, day),
        )
        r = await cur.fetchone()
        return _row_to_payment(r) if r else None

    async def upsert(self, payment: Payment) -> Payment:
        cur = await self._conn.execute(
            f"INSERT INTO payments ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (employee_id, date) DO UPDATE SET "
            "daily_rate = EXCLUDED.daily_rate, bonus = EXCLUDED.bonus, "
            "total = EXCLUDED.total, updated_at = EXCLUDED.updated_at "
            f"RETURNING {_COLUMNS}",
            (
                payment.id,
                payment.employee_id,
                payment.date,
                payment.daily_rate,
                payment.bonus,
                payment.total,
                payment.created_by,
                payment.created_at,
                payment.updated_at,
            ),
        )
        return _row_to_payment(await cur.fetchone())

    async def delete(self, payment_id: UUID) -> None:
        await self._conn.execute("DELETE FROM payments WHERE id = %s", (payment_id,))

    async def delete_range(
        self,
        employee_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> int:
        where, params = build_where(
            [("employee_id = %s", employee_id), ("date >= %s", start), ("date <= %s", end)]
        )
        cur = await self._conn.execute(f"DELETE FROM payments{where}", params)
        return cur.rowcount

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[Payment]:
        where, params = build_where(
            [("date >= %s", start), ("date <= %s", end), ("employee_id = %s", employee_id)]
        )
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM payments{where} ORDER BY date DESC", params
        )
        return [_row_to_payment(r) for r in await cur.fetchall()]


class PostgresBonusRepository:
    """Bonus repository. One row per date."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_date(self, day: date) -> Bonus | None:
        cur = await self._conn.execute(
            "SELECT id, date, amount, applied_by, created_at FROM bonuses WHERE date = %s",
            (day,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Bonus(id=r[0], date=r[1], amount=r[2], applied_by=r[3], created_at=r[4])

    async def upsert(self, bonus: Bonus) -> Bonus:
        await self._conn.execute(
            "INSERT INTO bonuses (id, date, amount, applied_by, created_at) "
            "VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (date) DO UPDATE SET "
            "amount = EXCLUDED.amount, applied_by = EXCLUDED.applied_by",
            (bonus.id, bonus.date, bonus.amount, bonus.applied_by, bonus.created_at),
        )
        return bonus

    async def delete_by_date(self, day: date) -> None:
        await self._conn.execute("DELETE FROM bonuses WHERE date = %s", (day,))
