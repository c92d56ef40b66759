"""Unit tests for use cases."""

from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from pontual.application.dto.attendance_input import AttendanceMark
from pontual.application.dto.employee_input import EmployeeInput
from pontual.application.dto.log_filters import AuditLogFilters, ErrorLogFilters
from pontual.application.services import (
    AuditLogService,
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
from pontual.application.use_cases.employee.update_employee import UpdateEmployeeUseCase
from pontual.application.use_cases.error_record.manage_error_records import (
    CreateErrorRecordUseCase,
    UpdateErrorRecordUseCase,
)
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
    GetUserPermissionsUseCase,
    ResetUserPermissionsUseCase,
    SaveUserPermissionsUseCase,
)
from pontual.application.use_cases.settings.update_setting import (
    GetSettingUseCase,
    UpdateSettingUseCase,
)
from pontual.application.use_cases.user import manage_users as manage_users_module
from pontual.application.use_cases.user.manage_users import (
    CreateUserUseCase,
    DeleteUserUseCase,
)
from pontual.domain.entities import Employee, RetentionPolicy, User
from pontual.domain.exceptions import (
    DuplicateRecord,
    NotFound,
    PermissionDenied,
    StorageError,
    ValidationError,
)
from pontual.domain.permissions import preset
from pontual.domain.value_objects import (
    AttendanceStatus,
    AuditAction,
    ErrorSeverity,
    ErrorType,
    PresetName,
)

from tests.conftest import TODAY, FakeUnitOfWork, now

YESTERDAY = TODAY - timedelta(days=1)


def checker_granting(*granted: str):
    """Permission checker allowing only ``granted``."""
    checker = AsyncMock()
    checker.check = AsyncMock(side_effect=lambda user_id, permission: permission in granted)
    return checker


def add_employee(
    fake_uow: FakeUnitOfWork, name: str = "Ana Souza", cpf: str = "52998224725"
) -> Employee:
    employee = Employee(
        id=uuid4(), name=name, cpf=cpf, created_by="9999", created_at=now()
    )
    fake_uow.employees._by_id[employee.id] = employee
    return employee


@pytest.fixture
def audit(uow_factory) -> AuditLogService:
    return AuditLogService(uow_factory, MonitoringConfig())


@pytest.fixture
def store(uow_factory) -> PermissionStore:
    return PermissionStore(uow_factory, PermissionChangeLog(uow_factory))


# --- Guard ---


@pytest.mark.asyncio
async def test_denied_caller_never_reaches_storage(
    uow_factory, deny_permission_checker, audit, fake_uow: FakeUnitOfWork
) -> None:
    """Every guarded use case rejects before opening a unit of work."""
    use_case = CreateEmployeeUseCase(uow_factory, deny_permission_checker, audit)

    with pytest.raises(PermissionDenied) as exc_info:
        await use_case.execute("1234", EmployeeInput(name="Ana Souza", cpf="52998224725"))

    assert exc_info.value.permission == "employees.create"
    assert fake_uow.entered == 0


# --- Employees ---


@pytest.mark.asyncio
async def test_create_employee_normalizes_and_audits(
    uow_factory, mock_permission_checker, audit, fake_uow: FakeUnitOfWork
) -> None:
    use_case = CreateEmployeeUseCase(uow_factory, mock_permission_checker, audit)

    employee = await use_case.execute(
        "1234",
        EmployeeInput(name="  Ana Souza ", cpf="529.982.247-25", pix_key=" ", pix_type=""),
    )

    assert employee.name == "Ana Souza"
    assert employee.cpf == "52998224725"
    assert employee.pix_key is None
    assert employee.pix_type is None
    assert await fake_uow.employees.get_by_id(employee.id) == employee
    [entry] = fake_uow.audit_logs.entries
    assert entry.action_type == AuditAction.CREATE
    assert entry.entity_id == str(employee.id)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "cpf", "message"),
    [
        ("Al", "52998224725", "Nome deve ter pelo menos 3 caracteres"),
        ("Ana Souza", "12345678900", "CPF inválido"),
        ("Ana Souza", "111.111.111-11", "CPF inválido"),
    ],
)
async def test_create_employee_rejects_invalid_input(
    uow_factory, mock_permission_checker, audit, name, cpf, message
) -> None:
    use_case = CreateEmployeeUseCase(uow_factory, mock_permission_checker, audit)
    with pytest.raises(ValidationError, match=message):
        await use_case.execute("1234", EmployeeInput(name=name, cpf=cpf))


@pytest.mark.asyncio
async def test_create_employee_duplicate_cpf(
    uow_factory, mock_permission_checker, audit, fake_uow: FakeUnitOfWork
) -> None:
    add_employee(fake_uow)
    use_case = CreateEmployeeUseCase(uow_factory, mock_permission_checker, audit)
    with pytest.raises(DuplicateRecord, match="CPF já cadastrado"):
        await use_case.execute("1234", EmployeeInput(name="Outra Pessoa", cpf="529.982.247-25"))


@pytest.mark.asyncio
async def test_update_employee_keeps_own_cpf(
    uow_factory, mock_permission_checker, audit, fake_uow: FakeUnitOfWork
) -> None:
    employee = add_employee(fake_uow)
    use_case = UpdateEmployeeUseCase(uow_factory, mock_permission_checker, audit)

    updated = await use_case.execute(
        "1234",
        employee.id,
        EmployeeInput(
            name="Ana Souza Lima", cpf=employee.cpf, pix_key="ana@pix.com", pix_type="email"
        ),
    )

    assert updated.name == "Ana Souza Lima"
    assert updated.pix_key == "ana@pix.com"


@pytest.mark.asyncio
async def test_delete_unknown_employee(
    uow_factory, mock_permission_checker, audit
) -> None:
    use_case = DeleteEmployeeUseCase(uow_factory, mock_permission_checker, audit)
    with pytest.raises(NotFound):
        await use_case.execute("1234", uuid4())


@pytest.mark.asyncio
async def test_import_employees_partial_success(
    uow_factory, mock_permission_checker, audit, fake_uow: FakeUnitOfWork
) -> None:
    """Bad rows are reported; good rows are still created."""
    use_case = ImportEmployeesUseCase(uow_factory, mock_permission_checker, audit)
    rows = [
        EmployeeInput(name="Ana Souza", cpf="52998224725"),
        EmployeeInput(name="Bruno Lima", cpf="000"),
        EmployeeInput(name="Carla Dias", cpf="111.444.777-35"),
        EmployeeInput(name="Ana Repetida", cpf="529.982.247-25"),
    ]

    result = await use_case.execute("1234", rows)

    assert (result.succeeded, result.failed) == (2, 2)
    assert [f.reason for f in result.failures] == ["CPF inválido", "CPF já cadastrado"]
    assert len(await fake_uow.employees.list()) == 2
    [entry] = fake_uow.audit_logs.entries
    assert entry.action_type == AuditAction.IMPORT


# --- Attendance ---


@pytest.mark.asyncio
async def test_mark_today_needs_only_mark_permission(
    uow_factory, clock, fake_uow: FakeUnitOfWork
) -> None:
    employee = add_employee(fake_uow)
    use_case = MarkAttendanceUseCase(uow_factory, checker_granting("attendance.mark"), clock)

    attendance = await use_case.execute(
        "1234", AttendanceMark(employee.id, TODAY, AttendanceStatus.PRESENT, "17:30")
    )

    assert attendance.status is AttendanceStatus.PRESENT
    assert attendance.exit_time == "17:30"
    assert attendance.marked_by == "1234"


@pytest.mark.asyncio
async def test_mark_past_day_needs_edit_history(
    uow_factory, clock, fake_uow: FakeUnitOfWork
) -> None:
    employee = add_employee(fake_uow)
    use_case = MarkAttendanceUseCase(uow_factory, checker_granting("attendance.mark"), clock)

    with pytest.raises(PermissionDenied) as exc_info:
        await use_case.execute(
            "1234", AttendanceMark(employee.id, YESTERDAY, AttendanceStatus.PRESENT)
        )
    assert exc_info.value.permission == "attendance.editHistory"
    assert fake_uow.entered == 0


@pytest.mark.asyncio
async def test_remark_absent_clears_exit_time_and_keeps_row(
    uow_factory, mock_permission_checker, clock, fake_uow: FakeUnitOfWork
) -> None:
    employee = add_employee(fake_uow)
    use_case = MarkAttendanceUseCase(uow_factory, mock_permission_checker, clock)

    first = await use_case.execute(
        "1234", AttendanceMark(employee.id, TODAY, AttendanceStatus.PRESENT, "18:00")
    )
    second = await use_case.execute(
        "1234", AttendanceMark(employee.id, TODAY, AttendanceStatus.ABSENT, "18:00")
    )

    assert second.id == first.id
    assert second.exit_time is None
    assert len(await fake_uow.attendance.list()) == 1


@pytest.mark.asyncio
async def test_mark_rejects_bad_exit_time(
    uow_factory, mock_permission_checker, clock, fake_uow: FakeUnitOfWork
) -> None:
    employee = add_employee(fake_uow)
    use_case = MarkAttendanceUseCase(uow_factory, mock_permission_checker, clock)
    with pytest.raises(ValidationError):
        await use_case.execute(
            "1234", AttendanceMark(employee.id, TODAY, AttendanceStatus.PRESENT, "25:00")
        )


@pytest.mark.asyncio
async def test_bulk_mark_reports_each_item(
    uow_factory, clock, fake_uow: FakeUnitOfWork
) -> None:
    """Past days without editHistory and unknown employees fail alone."""
    ana = add_employee(fake_uow)
    bruno = add_employee(fake_uow, "Bruno Lima", "11144477735")
    use_case = BulkMarkAttendanceUseCase(
        uow_factory, checker_granting("attendance.mark"), clock
    )

    result = await use_case.execute(
        "1234",
        [
            AttendanceMark(ana.id, TODAY, AttendanceStatus.PRESENT),
            AttendanceMark(bruno.id, TODAY, AttendanceStatus.ABSENT),
            AttendanceMark(bruno.id, YESTERDAY, AttendanceStatus.PRESENT),
            AttendanceMark(uuid4(), TODAY, AttendanceStatus.PRESENT),
        ],
    )

    assert (result.succeeded, result.failed) == (2, 2)
    assert len(await fake_uow.attendance.list(start=TODAY, end=TODAY)) == 2


@pytest.mark.asyncio
async def test_list_attendance_history_needs_view_history(uow_factory, clock) -> None:
    use_case = ListAttendanceUseCase(uow_factory, checker_granting("attendance.view"), clock)

    assert await use_case.execute("1234", start=TODAY, end=TODAY) == []
    with pytest.raises(PermissionDenied):
        await use_case.execute("1234", start=YESTERDAY)
    with pytest.raises(PermissionDenied):
        await use_case.execute("1234")


@pytest.mark.asyncio
async def test_exit_time_only_for_present(
    uow_factory, mock_permission_checker, clock, fake_uow: FakeUnitOfWork
) -> None:
    employee = add_employee(fake_uow)
    mark = MarkAttendanceUseCase(uow_factory, mock_permission_checker, clock)
    update = UpdateExitTimeUseCase(uow_factory, mock_permission_checker, clock)
    absent = await mark.execute(
        "1234", AttendanceMark(employee.id, TODAY, AttendanceStatus.ABSENT)
    )

    with pytest.raises(ValidationError):
        await update.execute("1234", absent.id, "17:00")

    present = await mark.execute(
        "1234", AttendanceMark(employee.id, TODAY, AttendanceStatus.PRESENT)
    )
    updated = await update.execute("1234", present.id, "17:00")
    assert updated.exit_time == "17:00"


@pytest.mark.asyncio
async def test_reset_day_returns_deleted_count(
    uow_factory, mock_permission_checker, clock, audit, fake_uow: FakeUnitOfWork
) -> None:
    ana = add_employee(fake_uow)
    bruno = add_employee(fake_uow, "Bruno Lima", "11144477735")
    mark = MarkAttendanceUseCase(uow_factory, mock_permission_checker, clock)
    for employee in (ana, bruno):
        await mark.execute("1234", AttendanceMark(employee.id, TODAY, AttendanceStatus.PRESENT))
    await mark.execute("1234", AttendanceMark(ana.id, YESTERDAY, AttendanceStatus.PRESENT))

    reset = ResetAttendanceUseCase(uow_factory, mock_permission_checker, audit)
    assert await reset.execute("1234", TODAY) == 2
    assert len(await fake_uow.attendance.list()) == 1
    [entry] = fake_uow.audit_logs.entries
    assert entry.action_type == AuditAction.BULK_ACTION


# --- Error records ---


@pytest.mark.asyncio
async def test_error_record_create_and_update(
    uow_factory, mock_permission_checker, fake_uow: FakeUnitOfWork
) -> None:
    employee = add_employee(fake_uow)
    create = CreateErrorRecordUseCase(uow_factory, mock_permission_checker)
    update = UpdateErrorRecordUseCase(uow_factory, mock_permission_checker)

    record = await create.execute("1234", employee.id, TODAY, 2, "  ")
    assert record.observations is None

    updated = await update.execute("1234", record.id, 3, "caixa errado")
    assert updated.error_count == 3
    assert updated.observations == "caixa errado"


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [-1, True, "2"])
async def test_error_record_rejects_bad_count(
    uow_factory, mock_permission_checker, fake_uow: FakeUnitOfWork, count
) -> None:
    employee = add_employee(fake_uow)
    create = CreateErrorRecordUseCase(uow_factory, mock_permission_checker)
    with pytest.raises(ValidationError):
        await create.execute("1234", employee.id, TODAY, count)


# --- Settings ---


@pytest.mark.asyncio
async def test_daily_rate_setting_is_validated_and_stored_as_text(
    uow_factory, fake_uow: FakeUnitOfWork
) -> None:
    use_case = UpdateSettingUseCase(uow_factory, checker_granting("settings.editDailyRate"))

    assert await use_case.execute("1234", "daily_rate", 85.5) == "85.5"
    assert fake_uow.settings.values["daily_rate"] == "85.5"
    with pytest.raises(ValidationError):
        await use_case.execute("1234", "daily_rate", "-1")
    with pytest.raises(PermissionDenied) as exc_info:
        await use_case.execute("1234", "error_tracking_enabled", False)
    assert exc_info.value.permission == "settings.editOther"


@pytest.mark.asyncio
async def test_get_missing_setting(uow_factory, mock_permission_checker) -> None:
    assert await GetSettingUseCase(uow_factory, mock_permission_checker).execute(
        "1234", "nope"
    ) is None


# --- Data management ---


@pytest.mark.asyncio
async def test_configure_retention_keeps_auto_cleanup(
    uow_factory, mock_permission_checker
) -> None:
    auto = ConfigureAutoCleanupUseCase(uow_factory, mock_permission_checker)
    retention = ConfigureRetentionUseCase(uow_factory, mock_permission_checker)

    first = await auto.execute("1234", "audit_logs", True)
    assert first.retention_days == 365

    policy = await retention.execute("1234", "audit_logs", 90)
    assert policy.retention_days == 90
    assert policy.auto_cleanup is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("table", "days"), [("employees", 30), ("audit_logs", 0), ("audit_logs", 1.5)]
)
async def test_configure_retention_rejects(
    uow_factory, mock_permission_checker, table, days
) -> None:
    retention = ConfigureRetentionUseCase(uow_factory, mock_permission_checker)
    with pytest.raises(ValidationError):
        await retention.execute("1234", table, days)


@pytest.mark.asyncio
async def test_manual_cleanup_per_table(
    uow_factory, mock_permission_checker, audit, fake_uow: FakeUnitOfWork
) -> None:
    await fake_uow.retention_policies.upsert(
        RetentionPolicy(
            table_name="audit_logs",
            retention_days=30,
            auto_cleanup=False,
            updated_by="9999",
            updated_at=now(),
        )
    )
    fake_uow.maintenance.rows["audit_logs"] = 10
    fake_uow.maintenance.stale["audit_logs"] = 4
    use_case = RunManualCleanupUseCase(uow_factory, mock_permission_checker, audit)

    result, deleted = await use_case.execute("1234", ["audit_logs", "payments", "employees"])

    assert deleted == {"audit_logs": 4}
    assert (result.succeeded, result.failed) == (1, 2)
    cutoff = fake_uow.maintenance.cutoffs["audit_logs"]
    assert timedelta(days=29) < now() - cutoff < timedelta(days=31)

    stats = await GetDataStatsUseCase(uow_factory, mock_permission_checker).execute("1234")
    by_table = {s["table_name"]: s for s in stats}
    assert by_table["audit_logs"]["row_count"] == 6
    assert by_table["audit_logs"]["retention_days"] == 30
    assert by_table["payments"]["retention_days"] is None


# --- Users ---


@pytest.mark.asyncio
async def test_create_user_with_initial_permissions(
    uow_factory, mock_permission_checker, store, audit, fake_uow: FakeUnitOfWork
) -> None:
    use_case = CreateUserUseCase(uow_factory, mock_permission_checker, store, audit)

    user = await use_case.execute(
        "9999", " 1234 ", email="ana@example.com", permissions=preset(PresetName.READONLY)
    )

    assert user.id == "1234"
    assert user.role == "supervisor"
    assert await store.get("1234") == preset(PresetName.READONLY)
    assert len(fake_uow.permission_logs.entries) == 1


@pytest.mark.asyncio
async def test_create_user_warns_when_initial_permissions_not_stored(
    uow_factory, mock_permission_checker, store, audit, fake_uow: FakeUnitOfWork, monkeypatch
) -> None:
    logger = MagicMock()
    monkeypatch.setattr(manage_users_module, "logger", logger)
    fake_uow.fail_entries[2] = StorageError("connection reset")
    use_case = CreateUserUseCase(uow_factory, mock_permission_checker, store, audit)

    user = await use_case.execute("9999", "1234", permissions=preset(PresetName.READONLY))

    assert user.id == "1234"
    assert await store.get("1234") is None
    logger.warning.assert_called_once()
    assert logger.warning.call_args.args[0] == "initial_permissions_not_saved"
    assert logger.warning.call_args.kwargs["error"] == "connection reset"


@pytest.mark.asyncio
async def test_create_user_initial_permissions_need_manage(
    uow_factory, store, audit, fake_uow: FakeUnitOfWork
) -> None:
    use_case = CreateUserUseCase(uow_factory, checker_granting("users.create"), store, audit)
    with pytest.raises(PermissionDenied):
        await use_case.execute("1000", "1234", permissions={})
    assert await fake_uow.users.get_by_id("1234") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(("new_id", "error"), [("", ValidationError), ("9999", DuplicateRecord)])
async def test_create_user_rejects_reserved_ids(
    uow_factory, mock_permission_checker, store, audit, new_id, error
) -> None:
    use_case = CreateUserUseCase(uow_factory, mock_permission_checker, store, audit)
    with pytest.raises(error):
        await use_case.execute("9999", new_id)


@pytest.mark.asyncio
async def test_delete_user_removes_permissions(
    uow_factory, mock_permission_checker, store, audit, fake_uow: FakeUnitOfWork
) -> None:
    await fake_uow.users.create(
        User(id="1234", role="supervisor", created_by="9999", created_at=now())
    )
    await store.save("1234", preset(PresetName.READONLY), "9999")
    use_case = DeleteUserUseCase(uow_factory, mock_permission_checker, store, audit)

    await use_case.execute("9999", "1234")

    assert await fake_uow.users.get_by_id("1234") is None
    assert await fake_uow.user_permissions.get_by_user_id("1234") is None
    with pytest.raises(ValidationError):
        await use_case.execute("9999", "9999")


# --- Permissions ---


@pytest.mark.asyncio
async def test_permission_use_cases_require_manage_permission(store) -> None:
    use_case = SaveUserPermissionsUseCase(store, checker_granting("users.view"))
    with pytest.raises(PermissionDenied) as exc_info:
        await use_case.execute("1000", "1234", {})
    assert exc_info.value.permission == "users.managePermissions"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("permissions", "message"),
    [
        ({"users": True}, "Permissões do módulo users"),
        ({"bogus": {}}, "Módulo desconhecido: bogus"),
        ({"attendance": {"hack": True}}, "Ação desconhecida: attendance.hack"),
        ({"attendance": {"mark": "yes"}}, "Valor não booleano em attendance.mark"),
        ({"attendance": {"mark": 1}}, "Valor não booleano em attendance.mark"),
        (["users"], "Permissões devem mapear"),
    ],
)
async def test_save_rejects_sets_outside_schema(
    store, mock_permission_checker, fake_uow: FakeUnitOfWork, permissions, message
) -> None:
    use_case = SaveUserPermissionsUseCase(store, mock_permission_checker)
    with pytest.raises(ValidationError, match=message):
        await use_case.execute("9999", "1234", permissions)
    assert await fake_uow.user_permissions.get_by_user_id("1234") is None
    assert fake_uow.permission_logs.entries == []


@pytest.mark.asyncio
async def test_save_reset_and_duplicate(store, mock_permission_checker) -> None:
    save = SaveUserPermissionsUseCase(store, mock_permission_checker)
    reset = ResetUserPermissionsUseCase(store, mock_permission_checker)
    duplicate = DuplicateUserPermissionsUseCase(store, mock_permission_checker)
    get = GetUserPermissionsUseCase(store, mock_permission_checker)

    assert (await save.execute("9999", "1234", {"users": {"view": True}})).success
    assert (await duplicate.execute("9999", "1234", "5678")).success
    copied = await get.execute("9999", "5678")
    assert copied["effective"]["users"]["view"] is True

    assert (await reset.execute("9999", "1234", "readonly")).success
    assert (await get.execute("9999", "1234"))["stored"] == preset(PresetName.READONLY)
    with pytest.raises(ValidationError):
        await reset.execute("9999", "1234", "root")


@pytest.mark.asyncio
async def test_super_admin_cannot_be_changed(store, mock_permission_checker) -> None:
    result = await SaveUserPermissionsUseCase(store, mock_permission_checker).execute(
        "9999", "9999", {}
    )
    assert not result.success
    assert result.error


# --- Monitoring ---


@pytest.mark.asyncio
async def test_audit_queries_need_settings_view(audit, fake_uow: FakeUnitOfWork) -> None:
    await audit.log_login("1234")
    allowed = QueryAuditLogsUseCase(audit, checker_granting("settings.view"))
    denied = QueryAuditLogsUseCase(audit, checker_granting())

    [entry] = await allowed.execute("9999", AuditLogFilters(action_type=AuditAction.LOGIN))
    assert entry.user_id == "1234"
    assert (await allowed.stats("9999"))["total_actions"] == 1
    with pytest.raises(PermissionDenied):
        await denied.execute("9999", AuditLogFilters())


@pytest.mark.asyncio
async def test_record_activity_needs_no_permission(audit, fake_uow: FakeUnitOfWork) -> None:
    result = await RecordActivityUseCase(audit).execute(
        "1234", "page_view", "attendance", details={"page": "/ponto"}
    )
    assert result.ok
    [entry] = fake_uow.activity_logs.entries
    assert entry.module == "attendance"


@pytest.mark.asyncio
async def test_report_query_and_resolve_errors(
    uow_factory, fake_uow: FakeUnitOfWork
) -> None:
    tracker = ErrorTrackingService(uow_factory, MonitoringConfig(), debounce_seconds=0)
    await ReportErrorUseCase(tracker).execute(
        "1234", ErrorType.API_ERROR, ErrorSeverity.HIGH, "timeout", component="Payments"
    )
    [error] = fake_uow.error_logs.all()

    query = QueryErrorLogsUseCase(tracker, checker_granting("settings.view"))
    assert [e.id for e in await query.execute("9999", ErrorLogFilters(resolved=False))] == [
        error.id
    ]

    with pytest.raises(PermissionDenied):
        await ResolveErrorUseCase(tracker, checker_granting("settings.view")).execute(
            "9999", error.id
        )

    resolve = ResolveErrorUseCase(tracker, checker_granting("settings.editOther"))
    await resolve.execute("9999", error.id)
    assert error.resolved is True
    assert error.resolved_by == "9999"
    await resolve.execute("9999", error.id, resolved=False)
    assert error.resolved is False
    with pytest.raises(NotFound):
        await resolve.execute("9999", uuid4())


@pytest.mark.asyncio
async def test_refresh_monitoring_reads_settings(
    uow_factory, mock_permission_checker, fake_uow: FakeUnitOfWork
) -> None:
    monitoring = MonitoringConfig()
    fake_uow.settings.values["error_tracking_enabled"] = False
    fake_uow.settings.values["critical_error_notifications"] = True

    await RefreshMonitoringUseCase(uow_factory, mock_permission_checker, monitoring).execute(
        "9999"
    )

    assert monitoring.tracking_enabled is False
    assert monitoring.critical_notifications is True


def test_yesterday_is_in_the_past(clock) -> None:
    assert clock.is_past(YESTERDAY)
    assert not clock.is_past(TODAY)
    assert not clock.is_past(date(2024, 6, 11))
