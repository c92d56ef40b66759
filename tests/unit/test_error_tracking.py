"""Unit tests for error tracking debounce, coalescing and notifications."""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from pontual.application.dto.log_filters import ErrorLogFilters
from pontual.application.services import ErrorTrackingService, MonitoringConfig
from pontual.application.services import error_tracking as error_tracking_module
from pontual.domain.exceptions import NotFound
from pontual.domain.value_objects import ErrorSeverity, ErrorType

from tests.conftest import FakeUnitOfWork


class ManualClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def monotonic() -> ManualClock:
    return ManualClock()


@pytest.fixture
def monitoring() -> MonitoringConfig:
    return MonitoringConfig(tracking_enabled=True, critical_notifications=True)


@pytest.fixture
def tracker(uow_factory, monitoring, monotonic) -> ErrorTrackingService:
    return ErrorTrackingService(
        uow_factory, monitoring, debounce_seconds=5.0, clock=monotonic
    )


async def _capture(tracker: ErrorTrackingService, message: str = "boom", **kwargs):
    return await tracker.capture(
        ErrorType.JS_ERROR,
        kwargs.pop("severity", ErrorSeverity.MEDIUM),
        message,
        component=kwargs.pop("component", "AttendanceTab"),
        **kwargs,
    )


class TestCapture:
    @pytest.mark.asyncio
    async def test_first_occurrence_written(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork
    ) -> None:
        result = await _capture(tracker, user_id="1234")
        assert result.ok and not result.skipped
        [error] = fake_uow.error_logs.all()
        assert error.occurrence_count == 1
        assert error.component == "AttendanceTab"
        assert error.user_agent == "Unknown"
        assert error.resolved is False

    @pytest.mark.asyncio
    async def test_repeat_within_window_suppressed_then_flushed(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork, monotonic
    ) -> None:
        """The second occurrence reaches the row only through ``flush()``.

        Until then it is counted in memory, so ``occurrence_count == 2`` holds
        once the pending repeat has been written.
        """
        await _capture(tracker)
        monotonic.advance(1)
        second = await _capture(tracker)

        assert second.skipped is True
        assert fake_uow.error_logs.all()[0].occurrence_count == 1

        assert (await tracker.flush()).ok
        [error] = fake_uow.error_logs.all()
        assert error.occurrence_count == 2

    @pytest.mark.asyncio
    async def test_repeat_after_window_folds_pending(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork, monotonic
    ) -> None:
        await _capture(tracker)
        monotonic.advance(1)
        await _capture(tracker)
        monotonic.advance(10)
        await _capture(tracker)

        [error] = fake_uow.error_logs.all()
        assert error.occurrence_count == 3
        assert (await tracker.flush()).ok
        assert fake_uow.error_logs.all()[0].occurrence_count == 3

    @pytest.mark.asyncio
    async def test_window_slides_from_last_occurrence(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork, monotonic
    ) -> None:
        await _capture(tracker)
        for _ in range(3):
            monotonic.advance(4)
            assert (await _capture(tracker)).skipped is True
        assert fake_uow.error_logs.all()[0].occurrence_count == 1

    @pytest.mark.asyncio
    async def test_different_component_is_a_different_error(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork
    ) -> None:
        await _capture(tracker, component="A")
        await _capture(tracker, component="B")
        assert len(fake_uow.error_logs.all()) == 2

    @pytest.mark.asyncio
    async def test_resolved_error_gets_new_row(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork
    ) -> None:
        await _capture(tracker)
        [first] = fake_uow.error_logs.all()
        await tracker.resolve(first.id, "9999")
        tracker.clear_cache()

        await _capture(tracker)
        errors = fake_uow.error_logs.all()
        assert len(errors) == 2
        assert sum(1 for e in errors if not e.resolved) == 1

    @pytest.mark.asyncio
    async def test_disabled_tracking_writes_nothing(
        self, tracker: ErrorTrackingService, monitoring, fake_uow: FakeUnitOfWork
    ) -> None:
        monitoring.tracking_enabled = False
        result = await _capture(tracker)
        assert result.skipped is True
        assert fake_uow.entered == 0

    @pytest.mark.asyncio
    async def test_storage_failure_never_raises(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork, storage_down
    ) -> None:
        fake_uow.fail = storage_down
        result = await _capture(tracker)
        assert result.ok is False
        assert result.error == "connection refused"

    @pytest.mark.asyncio
    async def test_failed_flush_keeps_pending(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork, storage_down, monotonic
    ) -> None:
        await _capture(tracker)
        monotonic.advance(1)
        await _capture(tracker)

        fake_uow.fail = storage_down
        assert (await tracker.flush()).ok is False
        fake_uow.fail = None
        assert (await tracker.flush()).ok is True
        assert fake_uow.error_logs.all()[0].occurrence_count == 2

    @pytest.mark.asyncio
    async def test_failed_write_keeps_folded_repeats(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork, storage_down, monotonic
    ) -> None:
        await _capture(tracker)
        monotonic.advance(1)
        await _capture(tracker)
        monotonic.advance(10)

        fake_uow.fail = storage_down
        assert (await _capture(tracker)).ok is False
        fake_uow.fail = None
        assert (await tracker.flush()).ok is True
        assert fake_uow.error_logs.all()[0].occurrence_count == 2

    @pytest.mark.asyncio
    async def test_flush_tolerates_concurrent_capture(
        self, fake_uow: FakeUnitOfWork, monitoring, monotonic
    ) -> None:
        @asynccontextmanager
        async def yielding_factory():
            await asyncio.sleep(0)
            yield fake_uow

        tracker = ErrorTrackingService(
            yielding_factory, monitoring, debounce_seconds=5.0, clock=monotonic
        )
        await _capture(tracker)
        monotonic.advance(1)
        await _capture(tracker)

        flushed, captured = await asyncio.gather(tracker.flush(), _capture(tracker, "new"))

        assert flushed.ok and captured.ok
        counts = {e.message: e.occurrence_count for e in fake_uow.error_logs.all()}
        assert counts == {"boom": 2, "new": 1}


class TestSignatureCache:
    @pytest.mark.asyncio
    async def test_quiet_signatures_are_forgotten(
        self, tracker: ErrorTrackingService, monotonic
    ) -> None:
        for i in range(50):
            await _capture(tracker, f"unique {i}")
            monotonic.advance(6)
        assert len(tracker._seen) == 1

    @pytest.mark.asyncio
    async def test_unwritten_repeats_are_kept(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork, monotonic
    ) -> None:
        await _capture(tracker, "a")
        monotonic.advance(1)
        await _capture(tracker, "a")
        monotonic.advance(10)
        await _capture(tracker, "b")

        assert len(tracker._seen) == 2
        assert (await tracker.flush()).ok
        counts = {e.message: e.occurrence_count for e in fake_uow.error_logs.all()}
        assert counts == {"a": 2, "b": 1}


class TestCriticalNotification:
    @pytest.mark.asyncio
    async def test_critical_logged_when_enabled(
        self, tracker: ErrorTrackingService, monkeypatch
    ) -> None:
        logger = MagicMock()
        monkeypatch.setattr(error_tracking_module, "logger", logger)
        await _capture(tracker, severity=ErrorSeverity.CRITICAL)
        logger.critical.assert_called_once()
        assert logger.critical.call_args.args[0] == "critical_error_detected"

    @pytest.mark.asyncio
    async def test_no_notification_when_disabled(
        self, tracker: ErrorTrackingService, monitoring, monkeypatch
    ) -> None:
        monitoring.critical_notifications = False
        logger = MagicMock()
        monkeypatch.setattr(error_tracking_module, "logger", logger)
        await _capture(tracker, severity=ErrorSeverity.CRITICAL)
        logger.critical.assert_not_called()


class TestHelpers:
    @pytest.mark.asyncio
    async def test_api_error_severity_by_status(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork
    ) -> None:
        await tracker.capture_api_error("server down", 503, "GET /v1/employees")
        await tracker.capture_api_error("bad input", 400, "POST /v1/employees")
        by_message = {e.message: e for e in fake_uow.error_logs.all()}
        assert by_message["server down"].severity == ErrorSeverity.HIGH
        assert by_message["bad input"].severity == ErrorSeverity.MEDIUM
        assert by_message["server down"].error_context == {
            "status_code": 503,
            "endpoint": "GET /v1/employees",
        }

    @pytest.mark.asyncio
    async def test_capture_exception_uses_class_name_for_empty_message(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork
    ) -> None:
        await tracker.capture_exception(KeyError(), component="Payments")
        [error] = fake_uow.error_logs.all()
        assert error.error_type == ErrorType.JS_ERROR
        assert error.message == "KeyError"


class TestQueries:
    @pytest.mark.asyncio
    async def test_resolve_unknown_raises(self, tracker: ErrorTrackingService) -> None:
        with pytest.raises(NotFound):
            await tracker.resolve(uuid4(), "9999")

    @pytest.mark.asyncio
    async def test_resolve_and_unresolve(
        self, tracker: ErrorTrackingService, fake_uow: FakeUnitOfWork
    ) -> None:
        await _capture(tracker)
        [error] = fake_uow.error_logs.all()
        await tracker.resolve(error.id, "9999")
        assert error.resolved is True and error.resolved_by == "9999"
        await tracker.unresolve(error.id)
        assert error.resolved is False and error.resolved_at is None

    @pytest.mark.asyncio
    async def test_query_filters_and_stats(self, tracker: ErrorTrackingService) -> None:
        await _capture(tracker, "a", severity=ErrorSeverity.CRITICAL)
        await _capture(tracker, "b", severity=ErrorSeverity.LOW)

        critical = await tracker.query(ErrorLogFilters(severity=ErrorSeverity.CRITICAL))
        assert [e.message for e in critical] == ["a"]

        stats = await tracker.stats()
        assert stats["total_errors"] == 2
        assert stats["total_occurrences"] == 2
        assert stats["critical_errors"] == 1
        assert stats["unresolved_errors"] == 2
        assert stats["errors_by_severity"] == {"critical": 1, "low": 1}
