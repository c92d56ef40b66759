"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from pontual.application.services import ErrorTrackingService
from pontual.interfaces.api.errors import register_error_handlers
from pontual.interfaces.api.resources.attendance import (
    AttendanceBulkResource,
    AttendanceExitTimeResource,
    AttendanceResource,
)
from pontual.interfaces.api.resources.data_management import (
    AutoCleanupResource,
    CleanupResource,
    DataStatsResource,
    RetentionResource,
)
from pontual.interfaces.api.resources.employees import (
    EmployeeImportResource,
    EmployeeResource,
    EmployeesResource,
)
from pontual.interfaces.api.resources.error_records import (
    ErrorRecordResource,
    ErrorRecordsResource,
)
from pontual.interfaces.api.resources.financial import (
    BonusesResource,
    BulkDailyRateResource,
    ClearPaymentsResource,
    DayBonusResource,
    EmployeeBonusResource,
    ErrorDiscountsResource,
    PaymentResource,
    PaymentsResource,
)
from pontual.interfaces.api.resources.health import HealthResource
from pontual.interfaces.api.resources.monitoring import (
    ActivityLogsResource,
    AuditLogsResource,
    AuditStatsResource,
    ErrorLogsResource,
    ErrorResolveResource,
    ErrorStatsResource,
    MonitoringRefreshResource,
)
from pontual.interfaces.api.resources.permissions import (
    MyPermissionsResource,
    PermissionPresetsResource,
    UserPermissionLogsResource,
    UserPermissionResetResource,
    UserPermissionsResource,
)
from pontual.interfaces.api.resources.session import SessionResource
from pontual.interfaces.api.resources.settings import SettingResource
from pontual.interfaces.api.resources.users import UserResource, UsersResource


@dataclass
class ApiResources:
    """Every routed resource, built by the composition root."""

    health: HealthResource
    session: SessionResource
    my_permissions: MyPermissionsResource
    permission_presets: PermissionPresetsResource
    users: UsersResource
    user: UserResource
    user_permissions: UserPermissionsResource
    user_permission_logs: UserPermissionLogsResource
    user_permission_reset: UserPermissionResetResource
    employees: EmployeesResource
    employee: EmployeeResource
    employee_import: EmployeeImportResource
    attendance: AttendanceResource
    attendance_bulk: AttendanceBulkResource
    attendance_exit_time: AttendanceExitTimeResource
    payments: PaymentsResource
    payment: PaymentResource
    bulk_daily_rate: BulkDailyRateResource
    clear_payments: ClearPaymentsResource
    error_discounts: ErrorDiscountsResource
    bonuses: BonusesResource
    day_bonus: DayBonusResource
    employee_bonus: EmployeeBonusResource
    error_records: ErrorRecordsResource
    error_record: ErrorRecordResource
    setting: SettingResource
    data_stats: DataStatsResource
    retention: RetentionResource
    auto_cleanup: AutoCleanupResource
    cleanup: CleanupResource
    audit_logs: AuditLogsResource
    audit_stats: AuditStatsResource
    activity_logs: ActivityLogsResource
    error_logs: ErrorLogsResource
    error_stats: ErrorStatsResource
    error_resolve: ErrorResolveResource
    monitoring_refresh: MonitoringRefreshResource


def create_app(
    resources: ApiResources,
    error_tracking: ErrorTrackingService,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    r = resources

    app.add_route("/v1/health", r.health)
    app.add_route("/v1/health/ready", r.health, suffix="ready")

    app.add_route("/v1/session", r.session)
    app.add_route("/v1/me/permissions", r.my_permissions)
    app.add_route("/v1/permission-presets", r.permission_presets)
    app.add_route("/v1/users", r.users)
    app.add_route("/v1/users/{user_id}", r.user)
    app.add_route("/v1/users/{user_id}/permissions", r.user_permissions)
    app.add_route("/v1/users/{user_id}/permissions/logs", r.user_permission_logs)
    app.add_route("/v1/users/{user_id}/permissions/reset", r.user_permission_reset)

    app.add_route("/v1/employees", r.employees)
    app.add_route("/v1/employees/import", r.employee_import)
    app.add_route("/v1/employees/{employee_id}", r.employee)

    app.add_route("/v1/attendance", r.attendance)
    app.add_route("/v1/attendance/bulk", r.attendance_bulk)
    app.add_route("/v1/attendance/{attendance_id}/exit-time", r.attendance_exit_time)

    app.add_route("/v1/payments", r.payments)
    app.add_route("/v1/payments/bulk-rate", r.bulk_daily_rate)
    app.add_route("/v1/payments/clear", r.clear_payments)
    app.add_route("/v1/payments/discounts", r.error_discounts)
    app.add_route("/v1/payments/{payment_id}", r.payment)
    app.add_route("/v1/bonuses", r.bonuses)
    app.add_route("/v1/bonuses/{day}", r.day_bonus)
    app.add_route("/v1/bonuses/{day}/{employee_id}", r.employee_bonus)

    app.add_route("/v1/error-records", r.error_records)
    app.add_route("/v1/error-records/{record_id}", r.error_record)

    app.add_route("/v1/settings/{key}", r.setting)

    app.add_route("/v1/data-management/stats", r.data_stats)
    app.add_route("/v1/data-management/retention", r.retention)
    app.add_route("/v1/data-management/auto-cleanup", r.auto_cleanup)
    app.add_route("/v1/data-management/cleanup", r.cleanup)

    app.add_route("/v1/monitoring/audit-logs", r.audit_logs)
    app.add_route("/v1/monitoring/audit-stats", r.audit_stats)
    app.add_route("/v1/monitoring/activity-logs", r.activity_logs)
    app.add_route("/v1/monitoring/error-logs", r.error_logs)
    app.add_route("/v1/monitoring/error-stats", r.error_stats)
    app.add_route("/v1/monitoring/error-logs/{error_id}/resolve", r.error_resolve)
    app.add_route("/v1/monitoring/refresh", r.monitoring_refresh)

    register_error_handlers(app, error_tracking)
    return app
