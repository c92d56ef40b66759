"""Permission checker implementation - checks against stored permission sets."""

from pontual.application.services import PermissionStore
from pontual.domain.permissions import has_permission
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


class StoredPermissionChecker:
    """Resolves the user's effective set and checks ``module.action`` against it.

    The super admin is allowed everything without reading storage.
    """

    def __init__(self, store: PermissionStore) -> None:
        self._store = store

    async def check(self, user_id: str, permission: str) -> bool:
        if self._store.is_super_admin(user_id):
            return True
        permissions = await self._store.get_effective(user_id)
        allowed = has_permission(permissions, permission)
        if not allowed:
            logger.info("permission_denied", user_id=user_id, permission=permission)
        return allowed
