"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from pontual.domain.exceptions import StorageError
from pontual.infrastructure.persistence.postgres.attendance_repository import (
    PostgresAttendanceRepository,
)
from pontual.infrastructure.persistence.postgres.audit_log_repository import (
    PostgresActivityLogRepository,
    PostgresAuditLogRepository,
)
from pontual.infrastructure.persistence.postgres.employee_repository import (
    PostgresEmployeeRepository,
)
from pontual.infrastructure.persistence.postgres.error_log_repository import (
    PostgresErrorLogRepository,
)
from pontual.infrastructure.persistence.postgres.error_record_repository import (
    PostgresErrorRecordRepository,
)
from pontual.infrastructure.persistence.postgres.payment_repository import (
    PostgresBonusRepository,
    PostgresPaymentRepository,
)
from pontual.infrastructure.persistence.postgres.retention_repository import (
    PostgresDataMaintenanceRepository,
    PostgresRetentionPolicyRepository,
)
from pontual.infrastructure.persistence.postgres.setting_repository import (
    PostgresSettingRepository,
)
from pontual.infrastructure.persistence.postgres.user_permission_repository import (
    PostgresPermissionLogRepository,
    PostgresUserPermissionRepository,
)
from pontual.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._employees = PostgresEmployeeRepository(self._conn)
        self._attendance = PostgresAttendanceRepository(self._conn)
        self._payments = PostgresPaymentRepository(self._conn)
        self._bonuses = PostgresBonusRepository(self._conn)
        self._error_records = PostgresErrorRecordRepository(self._conn)
        self._users = PostgresUserRepository(self._conn)
        self._user_permissions = PostgresUserPermissionRepository(self._conn)
        self._permission_logs = PostgresPermissionLogRepository(self._conn)
        self._audit_logs = PostgresAuditLogRepository(self._conn)
        self._activity_logs = PostgresActivityLogRepository(self._conn)
        self._error_logs = PostgresErrorLogRepository(self._conn)
        self._settings = PostgresSettingRepository(self._conn)
        self._retention_policies = PostgresRetentionPolicyRepository(self._conn)
        self._maintenance = PostgresDataMaintenanceRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def employees(self) -> PostgresEmployeeRepository:
        return self._employees

    @property
    def attendance(self) -> PostgresAttendanceRepository:
        return self._attendance

    @property
    def payments(self) -> PostgresPaymentRepository:
        return self._payments

    @property
    def bonuses(self) -> PostgresBonusRepository:
        return self._bonuses

    @property
    def error_records(self) -> PostgresErrorRecordRepository:
        return self._error_records

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def user_permissions(self) -> PostgresUserPermissionRepository:
        return self._user_permissions

    @property
    def permission_logs(self) -> PostgresPermissionLogRepository:
        return self._permission_logs

    @property
    def audit_logs(self) -> PostgresAuditLogRepository:
        return self._audit_logs

    @property
    def activity_logs(self) -> PostgresActivityLogRepository:
        return self._activity_logs

    @property
    def error_logs(self) -> PostgresErrorLogRepository:
        return self._error_logs

    @property
    def settings(self) -> PostgresSettingRepository:
        return self._settings

    @property
    def retention_policies(self) -> PostgresRetentionPolicyRepository:
        return self._retention_policies

    @property
    def maintenance(self) -> PostgresDataMaintenanceRepository:
        return self._maintenance

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits on clean exit, rolls back on any exception. Driver errors leave
    as StorageError so callers never depend on psycopg.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as e:
            logger.error("storage_error", error=str(e), error_class=type(e).__name__)
            raise StorageError(str(e)) from e

    return factory
