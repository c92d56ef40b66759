"""User repository port."""

from typing import Protocol

from pontual.domain.entities import User


class UserRepository(Protocol):
    """Port for dashboard user persistence."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def list_all(self) -> list[User]: ...

    async def create(self, user: User) -> User: ...

    async def delete(self, user_id: str) -> None: ...
