"""PostgreSQL user repository implementation."""

from psycopg import AsyncConnection

from pontual.domain.entities import User

_COLUMNS = "id, role, email, created_by, created_at"


def _row_to_user(r: tuple) -> User:
    return User(id=r[0], role=r[1], email=r[2], created_by=r[3], created_at=r[4])


class PostgresUserRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> User | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        return _row_to_user(r) if r else None

    async def list_all(self) -> list[User]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users ORDER BY created_at DESC"
        )
        return [_row_to_user(r) for r in await cur.fetchall()]

    async def create(self, user: User) -> User:
        await self._conn.execute(
            f"INSERT INTO users ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s)",
            (user.id, user.role, user.email, user.created_by, user.created_at),
        )
        return user

    async def delete(self, user_id: str) -> None:
        await self._conn.execute("DELETE FROM users WHERE id = %s", (user_id,))
