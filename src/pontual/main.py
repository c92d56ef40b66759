"""Application entry point and composition root."""

from falcon.asgi import App

from pontual import __version__
from pontual.application.ports import PermissionChecker
from pontual.application.services import (
    AuditLogService,
    BusinessClock,
    ErrorTrackingService,
    MonitoringConfig,
    PermissionChangeLog,
    PermissionStore,
)
from pontual.application.use_cases.attendance.bulk_mark_attendance import (
    BulkMarkAttendanceUseCase,
)
from pontual.application.use_cases.attendance.list_attendance import ListAttendanceUseCase
from pontual.application.use_cases.attendance.mark_attendance import MarkAttendanceUseCase
from pontual.application.use_cases.attendance.reset_attendance import ResetAttendanceUseCase
from pontual.application.use_cases.attendance.update_exit_time import UpdateExitTimeUseCase
from pontual.application.use_cases.data_management.retention import (
    ConfigureAutoCleanupUseCase,
    ConfigureRetentionUseCase,
    GetDataStatsUseCase,
    RunManualCleanupUseCase,
)
from pontual.application.use_cases.employee.create_employee import CreateEmployeeUseCase
from pontual.application.use_cases.employee.delete_employee import DeleteEmployeeUseCase
from pontual.application.use_cases.employee.import_employees import ImportEmployeesUseCase
from pontual.application.use_cases.employee.list_employees import ListEmployeesUseCase
from pontual.application.use_cases.employee.update_employee import UpdateEmployeeUseCase
from pontual.application.use_cases.error_record.manage_error_records import (
    CreateErrorRecordUseCase,
    DeleteErrorRecordUseCase,
    ListErrorRecordsUseCase,
    UpdateErrorRecordUseCase,
)
from pontual.application.use_cases.financial.apply_bonus import ApplyBonusUseCase
from pontual.application.use_cases.financial.apply_bulk_daily_rate import (
    ApplyBulkDailyRateUseCase,
)
from pontual.application.use_cases.financial.apply_error_discounts import (
    ApplyErrorDiscountsUseCase,
)
from pontual.application.use_cases.financial.clear_payments import ClearPaymentsUseCase
from pontual.application.use_cases.financial.delete_payment import DeletePaymentUseCase
from pontual.application.use_cases.financial.list_payments import ListPaymentsUseCase
from pontual.application.use_cases.financial.remove_bonus import (
    RemoveBonusBulkUseCase,
    RemoveBonusUseCase,
)
from pontual.application.use_cases.financial.set_daily_rate import SetDailyRateUseCase
from pontual.application.use_cases.monitoring.monitoring_logs import (
    QueryAuditLogsUseCase,
    QueryErrorLogsUseCase,
    RecordActivityUseCase,
    RefreshMonitoringUseCase,
    ReportErrorUseCase,
    ResolveErrorUseCase,
)
from pontual.application.use_cases.permission.manage_user_permissions import (
    DuplicateUserPermissionsUseCase,
    GetPermissionLogsUseCase,
    GetUserPermissionsUseCase,
    ResetUserPermissionsUseCase,
    SaveUserPermissionsUseCase,
)
from pontual.application.use_cases.settings.update_setting import (
    GetSettingUseCase,
    UpdateSettingUseCase,
)
from pontual.application.use_cases.user.manage_users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
)
from pontual.config import get_settings
from pontual.infrastructure.auth.keycloak_provider import KeycloakProvider
from pontual.infrastructure.permission.permission_checker import StoredPermissionChecker
from pontual.infrastructure.persistence.postgres.connection import create_pool
from pontual.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from pontual.interfaces.api.app import ApiResources, create_app
from pontual.interfaces.api.middleware.auth import AuthMiddleware
from pontual.interfaces.api.middleware.cors import CORSMiddleware
from pontual.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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
from pontual.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_pontual_app() -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.debug)

    pool = create_pool(settings)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("keycloak_disabled", reason="no client secret configured")

    monitoring = MonitoringConfig()
    audit = AuditLogService(uow_factory, monitoring)
    error_tracking = ErrorTrackingService(
        uow_factory, monitoring, debounce_seconds=settings.error_debounce_seconds
    )
    store = PermissionStore(
        uow_factory,
        PermissionChangeLog(uow_factory),
        super_admin_id=settings.super_admin_id,
        log_limit=settings.permission_log_limit,
    )
    checker = StoredPermissionChecker(store)
    resources = build_resources(
        uow_factory,
        checker,
        store,
        audit,
        error_tracking,
        monitoring,
        BusinessClock(settings.timezone),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        resources,
        error_tracking,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, uow_factory, monitoring, error_tracking),
            AuthMiddleware(keycloak),
        ],
    )


def build_resources(
    uow_factory: type,
    checker: PermissionChecker,
    store: PermissionStore,
    audit: AuditLogService,
    error_tracking: ErrorTrackingService,
    monitoring: MonitoringConfig,
    clock: BusinessClock,
) -> ApiResources:
    """Wire every use case into its resource."""
    query_audit = QueryAuditLogsUseCase(audit, checker)
    query_errors = QueryErrorLogsUseCase(error_tracking, checker)

    return ApiResources(
        health=HealthResource(uow_factory),
        session=SessionResource(audit),
        my_permissions=MyPermissionsResource(store),
        permission_presets=PermissionPresetsResource(),
        users=UsersResource(
            ListUsersUseCase(uow_factory, checker),
            CreateUserUseCase(uow_factory, checker, store, audit),
        ),
        user=UserResource(DeleteUserUseCase(uow_factory, checker, store, audit)),
        user_permissions=UserPermissionsResource(
            GetUserPermissionsUseCase(store, checker),
            SaveUserPermissionsUseCase(store, checker),
            DuplicateUserPermissionsUseCase(store, checker),
        ),
        user_permission_logs=UserPermissionLogsResource(
            GetPermissionLogsUseCase(store, checker)
        ),
        user_permission_reset=UserPermissionResetResource(
            ResetUserPermissionsUseCase(store, checker)
        ),
        employees=EmployeesResource(
            ListEmployeesUseCase(uow_factory, checker),
            CreateEmployeeUseCase(uow_factory, checker, audit),
        ),
        employee=EmployeeResource(
            UpdateEmployeeUseCase(uow_factory, checker, audit),
            DeleteEmployeeUseCase(uow_factory, checker, audit),
        ),
        employee_import=EmployeeImportResource(
            ImportEmployeesUseCase(uow_factory, checker, audit)
        ),
        attendance=AttendanceResource(
            ListAttendanceUseCase(uow_factory, checker, clock),
            MarkAttendanceUseCase(uow_factory, checker, clock),
            ResetAttendanceUseCase(uow_factory, checker, audit),
        ),
        attendance_bulk=AttendanceBulkResource(
            BulkMarkAttendanceUseCase(uow_factory, checker, clock)
        ),
        attendance_exit_time=AttendanceExitTimeResource(
            UpdateExitTimeUseCase(uow_factory, checker, clock)
        ),
        payments=PaymentsResource(
            ListPaymentsUseCase(uow_factory, checker),
            SetDailyRateUseCase(uow_factory, checker),
        ),
        payment=PaymentResource(DeletePaymentUseCase(uow_factory, checker, audit)),
        bulk_daily_rate=BulkDailyRateResource(ApplyBulkDailyRateUseCase(uow_factory, checker)),
        clear_payments=ClearPaymentsResource(ClearPaymentsUseCase(uow_factory, checker, audit)),
        error_discounts=ErrorDiscountsResource(
            ApplyErrorDiscountsUseCase(uow_factory, checker)
        ),
        bonuses=BonusesResource(ApplyBonusUseCase(uow_factory, checker)),
        day_bonus=DayBonusResource(RemoveBonusBulkUseCase(uow_factory, checker, audit)),
        employee_bonus=EmployeeBonusResource(RemoveBonusUseCase(uow_factory, checker, audit)),
        error_records=ErrorRecordsResource(
            ListErrorRecordsUseCase(uow_factory, checker),
            CreateErrorRecordUseCase(uow_factory, checker),
        ),
        error_record=ErrorRecordResource(
            UpdateErrorRecordUseCase(uow_factory, checker),
            DeleteErrorRecordUseCase(uow_factory, checker),
        ),
        setting=SettingResource(
            GetSettingUseCase(uow_factory, checker),
            UpdateSettingUseCase(uow_factory, checker),
        ),
        data_stats=DataStatsResource(GetDataStatsUseCase(uow_factory, checker)),
        retention=RetentionResource(ConfigureRetentionUseCase(uow_factory, checker)),
        auto_cleanup=AutoCleanupResource(ConfigureAutoCleanupUseCase(uow_factory, checker)),
        cleanup=CleanupResource(RunManualCleanupUseCase(uow_factory, checker, audit)),
        audit_logs=AuditLogsResource(query_audit),
        audit_stats=AuditStatsResource(query_audit),
        activity_logs=ActivityLogsResource(query_audit, RecordActivityUseCase(audit)),
        error_logs=ErrorLogsResource(query_errors, ReportErrorUseCase(error_tracking)),
        error_stats=ErrorStatsResource(query_errors),
        error_resolve=ErrorResolveResource(ResolveErrorUseCase(error_tracking, checker)),
        monitoring_refresh=MonitoringRefreshResource(
            RefreshMonitoringUseCase(uow_factory, checker, monitoring)
        ),
    )


def main() -> None:
    """CLI entry point - serve the API with uvicorn."""
    import uvicorn

    app = create_pontual_app()
    logger.info("starting_server", version=__version__)
    uvicorn.run(app, host="0.0.0.0", port=8000)
