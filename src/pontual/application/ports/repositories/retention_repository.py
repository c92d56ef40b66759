"""Retention policy and data maintenance ports."""

from datetime import datetime
from typing import Protocol

from pontual.domain.entities import RetentionPolicy


class RetentionPolicyRepository(Protocol):
    """Port for per-table retention policies."""

    async def get(self, table_name: str) -> RetentionPolicy | None: ...

    async def list_all(self) -> list[RetentionPolicy]: ...

    async def upsert(self, policy: RetentionPolicy) -> None: ...


class DataMaintenanceRepository(Protocol):
    """Port for count-only queries and age-based deletes over managed tables."""

    async def count(self, table_name: str) -> int: ...

    async def delete_older_than(self, table_name: str, cutoff: datetime) -> int: ...
