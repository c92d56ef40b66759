"""Authorization guard shared by use cases."""

from pontual.application.ports import PermissionChecker
from pontual.domain.exceptions import PermissionDenied


async def ensure_permission(
    permission_checker: PermissionChecker,
    user_id: str,
    permission: str,
) -> None:
    """Raise PermissionDenied unless ``user_id`` holds ``permission``."""
    if not await permission_checker.check(user_id, permission):
        raise PermissionDenied(permission)
