"""PostgreSQL retention policy and data maintenance repositories."""

from datetime import datetime

from psycopg import AsyncConnection, sql

from pontual.domain.entities import MANAGED_TABLES, RetentionPolicy

# Column whose age decides when a row of each managed table expires.
_AGE_COLUMN = {
    "attendance": "date",
    "payments": "date",
    "error_records": "date",
    "audit_logs": "created_at",
    "activity_logs": "created_at",
    "error_logs": "last_occurred_at",
}

_COLUMNS = "table_name, retention_days, auto_cleanup, updated_by, updated_at"


def _managed(table_name: str) -> str:
    if table_name not in MANAGED_TABLES:
        raise ValueError(f"Table {table_name!r} is not managed")
    return table_name


class PostgresRetentionPolicyRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, table_name: str) -> RetentionPolicy | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM retention_policies WHERE table_name = %s",
            (table_name,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return RetentionPolicy(
            table_name=r[0],
            retention_days=r[1],
            auto_cleanup=r[2],
            updated_by=r[3],
            updated_at=r[4],
        )

    async def list_all(self) -> list[RetentionPolicy]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM retention_policies ORDER BY table_name"
        )
        return [
            RetentionPolicy(
                table_name=r[0],
                retention_days=r[1],
                auto_cleanup=r[2],
                updated_by=r[3],
                updated_at=r[4],
            )
            for r in await cur.fetchall()
        ]

    async def upsert(self, policy: RetentionPolicy) -> None:
        await self._conn.execute(
            f"INSERT INTO retention_policies ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (table_name) DO UPDATE SET "
            "retention_days = EXCLUDED.retention_days, auto_cleanup = EXCLUDED.auto_cleanup, "
            "updated_by = EXCLUDED.updated_by, updated_at = EXCLUDED.updated_at",
            (
                policy.table_name,
                policy.retention_days,
                policy.auto_cleanup,
                policy.updated_by,
                policy.updated_at,
            ),
        )


class PostgresDataMaintenanceRepository:
    """Count-only queries and age-based deletes over the managed tables."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def count(self, table_name: str) -> int:
        query = sql.SQL("SELECT COUNT(*) FROM {}").format(sql.Identifier(_managed(table_name)))
        cur = await self._conn.execute(query)
        r = await cur.fetchone()
        return r[0]

    async def delete_older_than(self, table_name: str, cutoff: datetime) -> int:
        table = _managed(table_name)
        query = sql.SQL("DELETE FROM {} WHERE {} < %s").format(
            sql.Identifier(table), sql.Identifier(_AGE_COLUMN[table])
        )
        cur = await self._conn.execute(query, (cutoff,))
        return cur.rowcount
