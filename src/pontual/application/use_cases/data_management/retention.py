"""Data retention use cases."""

from datetime import UTC, datetime, timedelta

from pontual.application.dto.results import BulkResult
from pontual.application.ports import PermissionChecker
from pontual.application.services import AuditLogService
from pontual.application.use_cases.guard import ensure_permission
from pontual.domain.entities import MANAGED_TABLES, RetentionPolicy
from pontual.domain.exceptions import NotFound, PontualError, ValidationError
from pontual.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RETENTION_DAYS = 365


def _check_table(table_name: str) -> str:
    if table_name not in MANAGED_TABLES:
        raise ValidationError(f"Tabela não gerenciada: {table_name}")
    return table_name


class ConfigureRetentionUseCase:
    """Set how many days a table keeps rows. Requires datamanagement.configRetention."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self, user_id: str, table_name: str, retention_days: int
    ) -> RetentionPolicy:
        await ensure_permission(
            self._permission_checker, user_id, "datamanagement.configRetention"
        )
        _check_table(table_name)
        if isinstance(retention_days, bool) or not isinstance(retention_days, int):
            raise ValidationError("Retenção deve ser um número inteiro de dias")
        if retention_days < 1:
            raise ValidationError("Retenção deve ser de pelo menos 1 dia")

        async with self._uow_factory() as uow:
            policy = await uow.retention_policies.get(table_name)
            policy = RetentionPolicy(
                table_name=table_name,
                retention_days=retention_days,
                auto_cleanup=policy.auto_cleanup if policy else False,
                updated_by=user_id,
                updated_at=datetime.now(UTC),
            )
            await uow.retention_policies.upsert(policy)
            return policy


class ConfigureAutoCleanupUseCase:
    """Turn scheduled cleanup of a table on or off. Requires datamanagement.autoCleanup."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, table_name: str, enabled: bool) -> RetentionPolicy:
        await ensure_permission(self._permission_checker, user_id, "datamanagement.autoCleanup")
        _check_table(table_name)

        async with self._uow_factory() as uow:
            policy = await uow.retention_policies.get(table_name)
            policy = RetentionPolicy(
                table_name=table_name,
                retention_days=policy.retention_days if policy else DEFAULT_RETENTION_DAYS,
                auto_cleanup=bool(enabled),
                updated_by=user_id,
                updated_at=datetime.now(UTC),
            )
            await uow.retention_policies.upsert(policy)
            return policy


class RunManualCleanupUseCase:
    """Delete rows older than each table's retention.

    Requires datamanagement.manualCleanup. Each table is one result item,
    cleaned in its own transaction.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        audit: AuditLogService,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._audit = audit

    async def execute(
        self, user_id: str, table_names: list[str] | None = None
    ) -> tuple[BulkResult, dict[str, int]]:
        await ensure_permission(
            self._permission_checker, user_id, "datamanagement.manualCleanup"
        )
        tables = list(table_names) if table_names else list(MANAGED_TABLES)

        result = BulkResult()
        deleted: dict[str, int] = {}
        now = datetime.now(UTC)
        for table in tables:
            try:
                _check_table(table)
                async with self._uow_factory() as uow:
                    policy = await uow.retention_policies.get(table)
                    if not policy:
                        raise NotFound("RetentionPolicy", table)
                    cutoff = now - timedelta(days=policy.retention_days)
                    deleted[table] = await uow.maintenance.delete_older_than(table, cutoff)
            except PontualError as e:
                result.record_failure(table, str(e))
                continue
            result.record_success()

        logger.info("manual_cleanup_finished", user_id=user_id, deleted=deleted)
        await self._audit.log_bulk_action(
            user_id,
            "datamanagement",
            "Limpeza manual de dados",
            sum(deleted.values()),
            {"deleted": deleted},
        )
        return result, deleted


class GetDataStatsUseCase:
    """Row counts and retention of every managed table. Requires datamanagement.viewStats."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str) -> list[dict[str, object]]:
        await ensure_permission(self._permission_checker, user_id, "datamanagement.viewStats")

        async with self._uow_factory() as uow:
            policies = {p.table_name: p for p in await uow.retention_policies.list_all()}
            stats = []
            for table in MANAGED_TABLES:
                policy = policies.get(table)
                stats.append(
                    {
                        "table_name": table,
                        "row_count": await uow.maintenance.count(table),
                        "retention_days": policy.retention_days if policy else None,
                        "auto_cleanup": policy.auto_cleanup if policy else False,
                    }
                )
            return stats
