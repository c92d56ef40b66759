"""Permission checker port - authorization of domain operations."""

from typing import Protocol


class PermissionChecker(Protocol):
    """Port for deciding whether a user may perform ``module.action``."""

    async def check(self, user_id: str, permission: str) -> bool: ...
