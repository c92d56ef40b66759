"""Domain value objects."""

from pontual.domain.value_objects.attendance_status import AttendanceStatus
from pontual.domain.value_objects.audit_action import AuditAction
from pontual.domain.value_objects.cpf import Cpf, is_valid_cpf
from pontual.domain.value_objects.error_kind import ErrorSeverity, ErrorType
from pontual.domain.value_objects.permission_module import PermissionModule
from pontual.domain.value_objects.preset_name import PresetName

__all__ = [
    "AttendanceStatus",
    "AuditAction",
    "Cpf",
    "ErrorSeverity",
    "ErrorType",
    "PermissionModule",
    "PresetName",
    "is_valid_cpf",
]
