"""Unit tests for AuditLogService and MonitoringConfig."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from pontual.application.dto.log_filters import ActivityLogFilters, AuditLogFilters
from pontual.application.services import AuditLogService, MonitoringConfig
from pontual.application.services.audit_log import to_json_data
from pontual.domain.value_objects import AuditAction

from tests.conftest import FakeUnitOfWork


@pytest.fixture
def monitoring() -> MonitoringConfig:
    return MonitoringConfig()


@pytest.fixture
def audit(uow_factory, monitoring) -> AuditLogService:
    return AuditLogService(uow_factory, monitoring)


def test_to_json_data_coerces_values() -> None:
    employee_id = uuid4()
    data = {"id": employee_id, "day": date(2024, 6, 1), "rate": Decimal("80.50")}
    assert to_json_data(data) == {
        "id": str(employee_id),
        "day": "2024-06-01",
        "rate": "80.50",
    }
    assert to_json_data(None) is None


class TestWrites:
    @pytest.mark.asyncio
    async def test_log_create(self, audit: AuditLogService, fake_uow: FakeUnitOfWork) -> None:
        employee_id = uuid4()
        result = await audit.log_create(
            "1234", "employees", "employee", employee_id, {"name": "Ana"}, "Funcionário criado"
        )
        assert result.ok
        [entry] = fake_uow.audit_logs.entries
        assert entry.action_type == AuditAction.CREATE
        assert entry.entity_id == str(employee_id)
        assert entry.new_data == {"name": "Ana"}
        assert entry.user_agent == "Unknown"

    @pytest.mark.asyncio
    async def test_bulk_action_description_and_count(
        self, audit: AuditLogService, fake_uow: FakeUnitOfWork
    ) -> None:
        await audit.log_bulk_action(
            "1234", "attendance", "Registros resetados", 7, {"date": "2024-06-01"}
        )
        [entry] = fake_uow.audit_logs.entries
        assert entry.description == "Registros resetados (7 registros)"
        assert entry.new_data == {"affected_count": 7, "date": "2024-06-01"}

    @pytest.mark.asyncio
    async def test_login_and_logout(
        self, audit: AuditLogService, fake_uow: FakeUnitOfWork
    ) -> None:
        await audit.log_login("1234")
        await audit.log_logout("1234")
        assert [e.action_type for e in fake_uow.audit_logs.entries] == [
            AuditAction.LOGIN,
            AuditAction.LOGOUT,
        ]
        assert {e.module for e in fake_uow.audit_logs.entries} == {"auth"}

    @pytest.mark.asyncio
    async def test_disabled_tracking_skips(
        self, audit: AuditLogService, monitoring, fake_uow: FakeUnitOfWork
    ) -> None:
        monitoring.tracking_enabled = False
        result = await audit.log_view("1234", "reports", "Relatório aberto")
        assert result.skipped is True
        assert (await audit.log_page_view("1234", "reports")).skipped is True
        assert fake_uow.entered == 0

    @pytest.mark.asyncio
    async def test_storage_failure_reported_not_raised(
        self, audit: AuditLogService, fake_uow: FakeUnitOfWork, storage_down
    ) -> None:
        fake_uow.fail = storage_down
        result = await audit.log_export("1234", "reports", "Exportação Excel")
        assert result.ok is False
        assert result.error == "connection refused"

    @pytest.mark.asyncio
    async def test_activity_helpers(
        self, audit: AuditLogService, fake_uow: FakeUnitOfWork
    ) -> None:
        await audit.log_page_view("1234", "attendance", duration_ms=1500)
        await audit.log_search("1234", "employees", "ana", 2)
        await audit.log_filter("1234", "financial", {"status": "paid"})

        entries = fake_uow.activity_logs.entries
        assert [e.activity_type for e in entries] == ["page_view", "search", "filter"]
        assert entries[0].duration_ms == 1500
        assert entries[1].details == {"search_term": "ana", "results_count": 2}


class TestQueries:
    @pytest.mark.asyncio
    async def test_query_filters_and_stats(self, audit: AuditLogService) -> None:
        await audit.log_login("1234")
        await audit.log_import("1234", "employees", "Importação")
        await audit.log_import("5678", "employees", "Importação")

        imports = await audit.query(AuditLogFilters(action_type=AuditAction.IMPORT))
        assert len(imports) == 2
        mine = await audit.query(AuditLogFilters(user_id="5678"))
        assert len(mine) == 1

        stats = await audit.stats()
        assert stats["total_actions"] == 3
        assert stats["actions_by_type"] == {"login": 1, "import": 2}
        assert stats["actions_by_module"] == {"auth": 1, "employees": 2}

    @pytest.mark.asyncio
    async def test_query_activity(self, audit: AuditLogService) -> None:
        await audit.log_page_view("1234", "attendance")
        await audit.log_page_view("5678", "financial")
        entries = await audit.query_activity(ActivityLogFilters(module="financial"))
        assert [e.user_id for e in entries] == ["5678"]


class TestMonitoringConfig:
    @pytest.mark.asyncio
    async def test_refresh_reads_flags(self, uow_factory, fake_uow: FakeUnitOfWork) -> None:
        fake_uow.settings.values["error_tracking_enabled"] = False
        fake_uow.settings.values["critical_error_notifications"] = "true"
        config = await MonitoringConfig().refresh(uow_factory)
        assert config.tracking_enabled is False
        assert config.critical_notifications is True

    @pytest.mark.asyncio
    async def test_missing_keys_keep_current_values(self, uow_factory) -> None:
        config = await MonitoringConfig(tracking_enabled=False).refresh(uow_factory)
        assert config.tracking_enabled is False
        assert config.critical_notifications is False

    @pytest.mark.asyncio
    async def test_storage_failure_keeps_current_values(
        self, uow_factory, fake_uow: FakeUnitOfWork, storage_down
    ) -> None:
        fake_uow.fail = storage_down
        config = await MonitoringConfig(critical_notifications=True).refresh(uow_factory)
        assert config.tracking_enabled is True
        assert config.critical_notifications is True
