"""Dashboard user use cases."""

from datetime import UTC, datetime

from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService, PermissionStore
from pontual.application.use_cases.guard import ensure_permission
from pontual.application.use_cases.permission.manage_user_permissions import (
    as_permission_set,
)
from pontual.domain.entities import User
from pontual.domain.exceptions import DuplicateRecord, NotFound, ValidationError
from pontual.domain.permissions import PermissionSet
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


class CreateUserUseCase:
    """Register a supervisor. Requires users.create.

    Initial permissions are stored only when given and additionally require
    users.managePermissions; a user without a stored
    row resolves to the fallback preset.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        store: PermissionStore,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._store = store
        self._audit = audit

    async def execute(
        self,
        user_id: str,
        new_user_id: str,
        email: str | None = None,
        permissions: PermissionSet | None = None,
    ) -> User:
        await ensure_permission(self._permission_checker, user_id, "users.create")
        new_user_id = (new_user_id or "").strip()
        if not new_user_id:
            raise ValidationError("Matrícula é obrigatória")
        if self._store.is_super_admin(new_user_id):
            raise DuplicateRecord("Matrícula reservada ao administrador principal")
        initial = as_permission_set(permissions) if permissions is not None else None
        if initial is not None:
            await ensure_permission(
                self._permission_checker, user_id, "users.managePermissions"
            )

        async with self._uow_factory() as uow:
            if await uow.users.get_by_id(new_user_id):
                raise DuplicateRecord("Matrícula já cadastrada")
            user = User(
                id=new_user_id,
                role="supervisor",
                email=email,
                created_by=user_id,
                created_at=datetime.now(UTC),
            )
            await uow.users.create(user)

        if initial is not None:
            saved = await self._store.save(new_user_id, initial, user_id)
            if not saved.success:
                logger.warning(
                    "initial_permissions_not_saved",
                    user_id=new_user_id,
                    created_by=user_id,
                    error=saved.error,
                )
        await self._audit.log_create(
            user_id,
            "users",
            "user",
            new_user_id,
            {"id": new_user_id, "role": user.role, "email": email},
            f"Supervisor criado: {new_user_id}",
        )
        return user


class DeleteUserUseCase:
    """Remove a user and its stored permissions. Requires users.delete."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        store: PermissionStore,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._store = store
        self._audit = audit

    async def execute(self, user_id: str, target_user_id: str) -> None:
        await ensure_permission(self._permission_checker, user_id, "users.delete")
        if self._store.is_super_admin(target_user_id):
            raise ValidationError("O administrador principal não pode ser excluído")

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(target_user_id)
            if not user:
                raise NotFound("User", target_user_id)
            await uow.user_permissions.delete_by_user_id(target_user_id)
            await uow.users.delete(target_user_id)

        await self._audit.log_delete(
            user_id,
            "users",
            "user",
            target_user_id,
            {"id": user.id, "role": user.role, "email": user.email},
            f"Supervisor excluído: {target_user_id}",
        )


class ListUsersUseCase:
    """Requires users.view."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str) -> list[User]:
        await ensure_permission(self._permission_checker, user_id, "users.view")
        async with self._uow_factory() as uow:
            return await uow.users.list_all()
