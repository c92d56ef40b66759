"""PostgreSQL stored permission set and change log repositories."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from pontual.domain.entities import PermissionLog, UserPermissionRecord

_COLUMNS = "id, user_id, permissions, updated_by, created_at, updated_at"
_LOG_COLUMNS = (
    "id, user_id, changed_by, permissions_before, permissions_after, "
    "change_summary, created_at"
)


def _row_to_record(r: tuple) -> UserPermissionRecord:
    return UserPermissionRecord(
        id=r[0],
        user_id=r[1],
        permissions=r[2] or {},
        updated_by=r[3],
        created_at=r[4],
        updated_at=r[5],
    )


def _row_to_log(r: tuple) -> PermissionLog:
    return PermissionLog(
        id=r[0],
        user_id=r[1],
        changed_by=r[2],
        permissions_before=r[3],
        permissions_after=r[4],
        change_summary=r[5],
        created_at=r[6],
    )


class PostgresUserPermissionRepository:
    """One JSONB permission set per user. Writes are single-row statements."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_user_id(self, user_id: str) -> UserPermissionRecord | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_permissions WHERE user_id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        return _row_to_record(r) if r else None

    async def create(self, record: UserPermissionRecord) -> UserPermissionRecord:
        await self._conn.execute(
            f"INSERT INTO user_permissions ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (user_id) DO UPDATE SET permissions = EXCLUDED.permissions, "
            "updated_by = EXCLUDED.updated_by, updated_at = EXCLUDED.updated_at",
            (
                record.id,
                record.user_id,
                Jsonb(record.permissions),
                record.updated_by,
                record.created_at,
                record.updated_at,
            ),
        )
        return record

    async def update(self, record: UserPermissionRecord) -> None:
        await self._conn.execute(
            "UPDATE user_permissions SET permissions=%s, updated_by=%s, updated_at=%s "
            "WHERE user_id=%s",
            (Jsonb(record.permissions), record.updated_by, record.updated_at, record.user_id),
        )

    async def delete_by_user_id(self, user_id: str) -> None:
        await self._conn.execute(
            "DELETE FROM user_permissions WHERE user_id = %s", (user_id,)
        )

    async def list_all(self) -> list[UserPermissionRecord]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM user_permissions ORDER BY created_at DESC"
        )
        return [_row_to_record(r) for r in await cur.fetchall()]


class PostgresPermissionLogRepository:
    """Append-only permission change log."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, entry: PermissionLog) -> PermissionLog:
        await self._conn.execute(
            f"INSERT INTO permission_logs ({_LOG_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.user_id,
                entry.changed_by,
                Jsonb(entry.permissions_before) if entry.permissions_before is not None else None,
                Jsonb(entry.permissions_after),
                entry.change_summary,
                entry.created_at,
            ),
        )
        return entry

    async def list_by_user(self, user_id: str, limit: int = 50) -> list[PermissionLog]:
        cur = await self._conn.execute(
            f"SELECT {_LOG_COLUMNS} FROM permission_logs WHERE user_id = %s "
            "ORDER BY created_at DESC LIMIT %s",
            (user_id, limit),
        )
        return [_row_to_log(r) for r in await cur.fetchall()]
