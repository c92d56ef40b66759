"""PostgreSQL key/value settings repository."""

from datetime import UTC, datetime
from typing import Any

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb


class PostgresSettingRepository:
    """Settings stored as JSONB values keyed by name."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, key: str) -> Any | None:
        cur = await self._conn.execute(
            "SELECT setting_value FROM settings WHERE setting_key = %s",
            (key,),
        )
        r = await cur.fetchone()
        return r[0] if r else None

    async def set(self, key: str, value: Any, updated_by: str) -> None:
        await self._conn.execute(
            "INSERT INTO settings (setting_key, setting_value, updated_by, updated_at) "
            "VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (setting_key) DO UPDATE SET setting_value = EXCLUDED.setting_value, "
            "updated_by = EXCLUDED.updated_by, updated_at = EXCLUDED.updated_at",
            (key, Jsonb(value), updated_by, datetime.now(UTC)),
        )
