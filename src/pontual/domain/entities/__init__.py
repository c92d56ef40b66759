"""Domain entities."""

from pontual.domain.entities.attendance import Attendance
from pontual.domain.entities.audit_log import ActivityLogEntry, AuditLogEntry
from pontual.domain.entities.employee import Employee
from pontual.domain.entities.error_log import ErrorLog
from pontual.domain.entities.error_record import ErrorRecord
from pontual.domain.entities.payment import Bonus, Payment
from pontual.domain.entities.permission_record import PermissionLog, UserPermissionRecord
from pontual.domain.entities.retention_policy import MANAGED_TABLES, RetentionPolicy
from pontual.domain.entities.user import User

__all__ = [
    "MANAGED_TABLES",
    "ActivityLogEntry",
    "Attendance",
    "AuditLogEntry",
    "Bonus",
    "Employee",
    "ErrorLog",
    "ErrorRecord",
    "Payment",
    "PermissionLog",
    "RetentionPolicy",
    "User",
    "UserPermissionRecord",
]
