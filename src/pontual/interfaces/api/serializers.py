"""Entity to JSON conversion for API responses."""

from typing import Any

from pontual.domain.entities import (
    ActivityLogEntry,
    Attendance,
    AuditLogEntry,
    Employee,
    ErrorLog,
    ErrorRecord,
    Payment,
    PermissionLog,
    RetentionPolicy,
    User,
)


def _iso(value: Any) -> str | None:
    return value.isoformat() if value is not None else None


def employee_to_dict(e: Employee) -> dict[str, Any]:
    return {
        "id": str(e.id),
        "name": e.name,
        "cpf": e.cpf,
        "pix_key": e.pix_key,
        "pix_type": e.pix_type,
        "created_by": e.created_by,
        "created_at": _iso(e.created_at),
    }


def attendance_to_dict(a: Attendance) -> dict[str, Any]:
    return {
        "id": str(a.id),
        "employee_id": str(a.employee_id),
        "date": a.date.isoformat(),
        "status": a.status.value,
        "exit_time": a.exit_time,
        "marked_by": a.marked_by,
        "created_at": _iso(a.created_at),
    }


def payment_to_dict(p: Payment) -> dict[str, Any]:
    return {
        "id": str(p.id),
        "employee_id": str(p.employee_id),
        "date": p.date.isoformat(),
        "daily_rate": str(p.daily_rate),
        "bonus": str(p.bonus),
        "total": str(p.total),
        "created_by": p.created_by,
        "updated_at": _iso(p.updated_at),
    }


def error_record_to_dict(r: ErrorRecord) -> dict[str, Any]:
    return {
        "id": str(r.id),
        "employee_id": str(r.employee_id),
        "date": r.date.isoformat(),
        "error_count": r.error_count,
        "observations": r.observations,
        "created_by": r.created_by,
        "updated_at": _iso(r.updated_at),
    }


def user_to_dict(u: User) -> dict[str, Any]:
    return {
        "id": u.id,
        "role": u.role,
        "email": u.email,
        "created_by": u.created_by,
        "created_at": _iso(u.created_at),
    }


def permission_log_to_dict(log: PermissionLog) -> dict[str, Any]:
    return {
        "id": str(log.id),
        "user_id": log.user_id,
        "changed_by": log.changed_by,
        "permissions_before": log.permissions_before,
        "permissions_after": log.permissions_after,
        "change_summary": log.change_summary,
        "created_at": _iso(log.created_at),
    }


def audit_entry_to_dict(e: AuditLogEntry) -> dict[str, Any]:
    return {
        "id": str(e.id),
        "user_id": e.user_id,
        "action_type": e.action_type.value,
        "module": e.module,
        "description": e.description,
        "entity_type": e.entity_type,
        "entity_id": e.entity_id,
        "old_data": e.old_data,
        "new_data": e.new_data,
        "user_agent": e.user_agent,
        "created_at": _iso(e.created_at),
    }


def error_log_to_dict(e: ErrorLog) -> dict[str, Any]:
    return {
        "id": str(e.id),
        "error_type": e.error_type.value,
        "severity": e.severity.value,
        "message": e.message,
        "component": e.component,
        "module": e.module,
        "occurrence_count": e.occurrence_count,
        "first_occurred_at": _iso(e.first_occurred_at),
        "last_occurred_at": _iso(e.last_occurred_at),
        "user_id": e.user_id,
        "stack_trace": e.stack_trace,
        "error_context": e.error_context,
        "resolved": e.resolved,
        "resolved_by": e.resolved_by,
        "resolved_at": _iso(e.resolved_at),
    }


def retention_to_dict(p: RetentionPolicy) -> dict[str, Any]:
    return {
        "table_name": p.table_name,
        "retention_days": p.retention_days,
        "auto_cleanup": p.auto_cleanup,
        "updated_by": p.updated_by,
        "updated_at": _iso(p.updated_at),
    }


def activity_entry_to_dict(e: ActivityLogEntry) -> dict[str, Any]:
    return {
        "id": str(e.id),
        "user_id": e.user_id,
        "activity_type": e.activity_type,
        "module": e.module,
        "details": e.details,
        "duration_ms": e.duration_ms,
        "created_at": _iso(e.created_at),
    }
