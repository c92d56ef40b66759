"""Permission store - per-user permission sets over the Unit of Work."""

from copy import deepcopy
from datetime import UTC, datetime
from uuid import uuid4

from pontual.application.dto.results import SaveResult
from pontual.application.services.permission_change_log import PermissionChangeLog
from pontual.domain.entities import PermissionLog, UserPermissionRecord
from pontual.domain.exceptions import StorageError
from pontual.domain.permissions import (
    DEFAULT_SUPER_ADMIN_ID,
    PermissionSet,
    merge_with_defaults,
    preset,
    schema_violation,
)
from pontual.domain.value_objects import PresetName
from pontual.observability.logging import get_logger

logger = get_logger(__name__)

SUPER_ADMIN_LOCKED = "Permissões do administrador principal não podem ser alteradas"
SOURCE_NOT_FOUND = "Permissões de origem não encontradas"


class PermissionStore:
    """Reads and writes stored permission sets.

    The super admin matrícula always resolves to the full-access preset and
    is never read from or written to storage. Read methods report storage
    failures as ``None``/``[]``; write methods report them in ``SaveResult``.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        change_log: PermissionChangeLog,
        super_admin_id: str = DEFAULT_SUPER_ADMIN_ID,
        log_limit: int = 50,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._change_log = change_log
        self._super_admin_id = super_admin_id
        self._log_limit = log_limit

    @property
    def super_admin_id(self) -> str:
        return self._super_admin_id

    def is_super_admin(self, user_id: str) -> bool:
        return user_id == self._super_admin_id

    async def _load(self, user_id: str) -> UserPermissionRecord | None:
        async with self._uow_factory() as uow:
            return await uow.user_permissions.get_by_user_id(user_id)

    async def get(self, user_id: str) -> PermissionSet | None:
        """Stored set as written, or None when nothing is stored or storage failed."""
        if self.is_super_admin(user_id):
            return preset(PresetName.ADMIN)
        try:
            record = await self._load(user_id)
        except StorageError as e:
            logger.error("permissions_load_failed", user_id=user_id, error=str(e))
            return None
        return record.permissions if record else None

    async def get_effective(self, user_id: str) -> PermissionSet | None:
        """Complete set used for authorization; None only when storage failed."""
        if self.is_super_admin(user_id):
            return preset(PresetName.ADMIN)
        try:
            record = await self._load(user_id)
        except StorageError as e:
            logger.error("permissions_load_failed", user_id=user_id, error=str(e))
            return None
        return merge_with_defaults(record.permissions if record else None)

    async def save(
        self,
        user_id: str,
        permissions: PermissionSet,
        changed_by: str,
    ) -> SaveResult:
        """Replace the user's stored set and record the change."""
        if self.is_super_admin(user_id):
            return SaveResult(success=False, error=SUPER_ADMIN_LOCKED)
        problem = schema_violation(permissions)
        if problem:
            logger.warning("permissions_save_rejected", user_id=user_id, reason=problem)
            return SaveResult(success=False, error=problem)

        after = deepcopy(permissions)
        now = datetime.now(UTC)
        try:
            async with self._uow_factory() as uow:
                existing = await uow.user_permissions.get_by_user_id(user_id)
                before = deepcopy(existing.permissions) if existing else None
                if existing:
                    existing.permissions = after
                    existing.updated_by = changed_by
                    existing.updated_at = now
                    await uow.user_permissions.update(existing)
                else:
                    await uow.user_permissions.create(
                        UserPermissionRecord(
                            id=uuid4(),
                            user_id=user_id,
                            permissions=after,
                            updated_by=changed_by,
                            created_at=now,
                            updated_at=now,
                        )
                    )
        except StorageError as e:
            logger.error("permissions_save_failed", user_id=user_id, error=str(e))
            return SaveResult(success=False, error=str(e))

        logger.info("permissions_saved", user_id=user_id, changed_by=changed_by)
        await self._change_log.log_change(user_id, changed_by, before, after)
        return SaveResult(success=True)

    async def delete(self, user_id: str) -> SaveResult:
        """Remove the stored row. Change log entries are kept."""
        if self.is_super_admin(user_id):
            return SaveResult(success=False, error=SUPER_ADMIN_LOCKED)
        try:
            async with self._uow_factory() as uow:
                await uow.user_permissions.delete_by_user_id(user_id)
        except StorageError as e:
            logger.error("permissions_delete_failed", user_id=user_id, error=str(e))
            return SaveResult(success=False, error=str(e))
        logger.info("permissions_deleted", user_id=user_id)
        return SaveResult(success=True)

    async def list_all(self) -> list[UserPermissionRecord]:
        try:
            async with self._uow_factory() as uow:
                records = await uow.user_permissions.list_all()
        except StorageError as e:
            logger.error("permissions_list_failed", error=str(e))
            return []
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    async def get_logs(self, user_id: str, limit: int | None = None) -> list[PermissionLog]:
        """Change log for a user, newest first."""
        try:
            async with self._uow_factory() as uow:
                return await uow.permission_logs.list_by_user(
                    user_id, limit=limit or self._log_limit
                )
        except StorageError as e:
            logger.error("permission_logs_load_failed", user_id=user_id, error=str(e))
            return []

    async def duplicate(
        self,
        from_user_id: str,
        to_user_id: str,
        changed_by: str,
    ) -> SaveResult:
        """Copy the effective set of one user onto another."""
        source = await self.get_effective(from_user_id)
        if source is None:
            return SaveResult(success=False, error=SOURCE_NOT_FOUND)
        return await self.save(to_user_id, source, changed_by)

    async def reset_to_default(
        self,
        user_id: str,
        preset_name: PresetName | str,
        changed_by: str,
    ) -> SaveResult:
        return await self.save(user_id, preset(preset_name), changed_by)
