"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from pontual.application.ports.repositories import (
    ActivityLogRepository,
    AttendanceRepository,
    AuditLogRepository,
    BonusRepository,
    DataMaintenanceRepository,
    EmployeeRepository,
    ErrorLogRepository,
    ErrorRecordRepository,
    PaymentRepository,
    PermissionLogRepository,
    RetentionPolicyRepository,
    SettingRepository,
    UserPermissionRepository,
    UserRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def employees(self) -> EmployeeRepository: ...

    @property
    def attendance(self) -> AttendanceRepository: ...

    @property
    def payments(self) -> PaymentRepository: ...

    @property
    def bonuses(self) -> BonusRepository: ...

    @property
    def error_records(self) -> ErrorRecordRepository: ...

    @property
    def users(self) -> UserRepository: ...

    @property
    def user_permissions(self) -> UserPermissionRepository: ...

    @property
    def permission_logs(self) -> PermissionLogRepository: ...

    @property
    def audit_logs(self) -> AuditLogRepository: ...

    @property
    def activity_logs(self) -> ActivityLogRepository: ...

    @property
    def error_logs(self) -> ErrorLogRepository: ...

    @property
    def settings(self) -> SettingRepository: ...

    @property
    def retention_policies(self) -> RetentionPolicyRepository: ...

    @property
    def maintenance(self) -> DataMaintenanceRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
