"""Stored permission set repository ports."""

from typing import Protocol

from pontual.domain.entities import PermissionLog, UserPermissionRecord


class UserPermissionRepository(Protocol):
    """Port for per-user permission rows. One row per user."""

    async def get_by_user_id(self, user_id: str) -> UserPermissionRecord | None: ...

    async def create(self, record: UserPermissionRecord) -> UserPermissionRecord: ...

    async def update(self, record: UserPermissionRecord) -> None: ...

    async def delete_by_user_id(self, user_id: str) -> None: ...

    async def list_all(self) -> list[UserPermissionRecord]: ...


class PermissionLogRepository(Protocol):
    """Port for the append-only permission change log."""

    async def create(self, entry: PermissionLog) -> PermissionLog: ...

    async def list_by_user(self, user_id: str, limit: int = 50) -> list[PermissionLog]: ...
