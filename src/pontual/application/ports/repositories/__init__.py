"""Repository ports."""

from pontual.application.ports.repositories.attendance_repository import (
    AttendanceRepository,
)
from pontual.application.ports.repositories.audit_log_repository import (
    ActivityLogRepository,
    AuditLogRepository,
)
from pontual.application.ports.repositories.employee_repository import EmployeeRepository
from pontual.application.ports.repositories.error_log_repository import ErrorLogRepository
from pontual.application.ports.repositories.error_record_repository import (
    ErrorRecordRepository,
)
from pontual.application.ports.repositories.payment_repository import (
    BonusRepository,
    PaymentRepository,
)
from pontual.application.ports.repositories.retention_repository import (
    DataMaintenanceRepository,
    RetentionPolicyRepository,
)
from pontual.application.ports.repositories.setting_repository import SettingRepository
from pontual.application.ports.repositories.user_permission_repository import (
    PermissionLogRepository,
    UserPermissionRepository,
)
from pontual.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "ActivityLogRepository",
    "AttendanceRepository",
    "AuditLogRepository",
    "BonusRepository",
    "DataMaintenanceRepository",
    "EmployeeRepository",
    "ErrorLogRepository",
    "ErrorRecordRepository",
    "PaymentRepository",
    "PermissionLogRepository",
    "RetentionPolicyRepository",
    "SettingRepository",
    "UserPermissionRepository",
    "UserRepository",
]
