"""Key/value settings repository port."""

from typing import Any, Protocol


class SettingRepository(Protocol):
    """Port for system and monitoring settings stored as JSON values."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, updated_by: str) -> None: ...
