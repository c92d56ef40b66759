"""Error tracking with debounce and coalescing of repeated errors."""

import time
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from pontual.application.dto.log_filters import ErrorLogFilters
from pontual.application.dto.results import SideEffectResult
from pontual.application.services.audit_log import to_json_data
from pontual.application.services.monitoring_config import MonitoringConfig
from pontual.application.services.side_channel import best_effort
from pontual.domain.entities import ErrorLog
from pontual.domain.exceptions import NotFound
from pontual.domain.value_objects import ErrorSeverity, ErrorType
from pontual.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ErrorCapture:
    """One reported occurrence, as given by the caller."""

    error_type: ErrorType
    severity: ErrorSeverity
    message: str
    component: str | None = None
    module: str | None = None
    stack_trace: str | None = None
    context: dict[str, Any] | None = None
    user_id: str | None = None
    user_agent: str | None = None

    @property
    def signature(self) -> str:
        return f"{self.error_type}-{self.message}-{self.component or 'unknown'}"


@dataclass
class _Seen:
    last_seen: float
    latest: ErrorCapture
    pending: int = 0


class ErrorTrackingService:
    """Captures errors into the error log.

    Repeats of the same signature within ``debounce_seconds`` of the previous
    occurrence are not written; they are counted in memory and folded into
    the next write past the window, or written by ``flush()``. Capturing
    never raises.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        monitoring: MonitoringConfig,
        debounce_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._monitoring = monitoring
        self._debounce_seconds = debounce_seconds
        self._clock = clock
        self._seen: dict[str, _Seen] = {}

    async def capture(
        self,
        error_type: ErrorType,
        severity: ErrorSeverity,
        message: str,
        *,
        stack_trace: str | None = None,
        component: str | None = None,
        module: str | None = None,
        context: dict[str, Any] | None = None,
        user_id: str | None = None,
        user_agent: str | None = None,
    ) -> SideEffectResult:
        if not self._monitoring.tracking_enabled:
            return SideEffectResult(ok=True, skipped=True)

        occurrence = ErrorCapture(
            error_type=error_type,
            severity=severity,
            message=message,
            component=component,
            module=module,
            stack_trace=stack_trace,
            context=context,
            user_id=user_id,
            user_agent=user_agent,
        )
        count = self._register(occurrence)
        if count == 0:
            return SideEffectResult(ok=True, skipped=True)

        result = await self._persist(occurrence, count)
        if not result.ok:
            self._restore_pending(occurrence.signature, count - 1)
        elif occurrence.severity == ErrorSeverity.CRITICAL:
            self._notify_critical(occurrence)
        return result

    def _register(self, occurrence: ErrorCapture) -> int:
        """Return how many occurrences to write now; 0 when suppressed."""
        now = self._clock()
        key = occurrence.signature
        seen = self._seen.get(key)
        if seen and now - seen.last_seen < self._debounce_seconds:
            seen.pending += 1
            seen.last_seen = now
            seen.latest = occurrence
            return 0
        pending = seen.pending if seen else 0
        self._seen[key] = _Seen(last_seen=now, latest=occurrence)
        self._forget_stale(now, keep=key)
        return pending + 1

    def _forget_stale(self, now: float, keep: str) -> None:
        """Drop signatures past their window that have nothing left to write."""
        stale = [
            key
            for key, seen in self._seen.items()
            if key != keep
            and not seen.pending
            and now - seen.last_seen >= self._debounce_seconds
        ]
        for key in stale:
            del self._seen[key]

    def _restore_pending(self, key: str, count: int) -> None:
        if count <= 0:
            return
        seen = self._seen.get(key)
        if seen:
            seen.pending += count

    async def _persist(self, occurrence: ErrorCapture, count: int) -> SideEffectResult:
        async def _write() -> None:
            now = datetime.now(UTC)
            component = occurrence.component or ""
            async with self._uow_factory() as uow:
                existing = await uow.error_logs.find_open(
                    occurrence.error_type, occurrence.message, component
                )
                if existing:
                    await uow.error_logs.add_occurrences(
                        existing.id, count, now, occurrence.user_id
                    )
                    return
                await uow.error_logs.create(
                    ErrorLog(
                        id=uuid4(),
                        error_type=occurrence.error_type,
                        severity=occurrence.severity,
                        message=occurrence.message,
                        component=component,
                        occurrence_count=count,
                        first_occurred_at=now,
                        last_occurred_at=now,
                        user_id=occurrence.user_id,
                        module=occurrence.module,
                        stack_trace=occurrence.stack_trace,
                        error_context=to_json_data(occurrence.context),
                        user_agent=occurrence.user_agent or "Unknown",
                    )
                )

        return await best_effort(
            _write,
            event="error_capture_failed",
            error_type=str(occurrence.error_type),
            component=occurrence.component,
        )

    def _notify_critical(self, occurrence: ErrorCapture) -> None:
        if self._monitoring.critical_notifications:
            logger.critical(
                "critical_error_detected",
                message=occurrence.message,
                component=occurrence.component,
                module=occurrence.module,
            )

    async def flush(self) -> SideEffectResult:
        """Write every suppressed repeat that has not been written yet."""
        failures: list[str] = []
        for seen in list(self._seen.values()):
            if not seen.pending:
                continue
            count, seen.pending = seen.pending, 0
            result = await self._persist(seen.latest, count)
            if not result.ok:
                seen.pending += count
                failures.append(result.error or "unknown")
        if failures:
            return SideEffectResult(ok=False, error="; ".join(failures))
        return SideEffectResult(ok=True)

    def clear_cache(self) -> None:
        """Forget recent signatures, including unwritten repeats."""
        self._seen.clear()

    # --- Helpers ---

    async def capture_exception(
        self,
        error: BaseException,
        component: str | None = None,
        module: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        user_id: str | None = None,
        stack_trace: str | None = None,
    ) -> SideEffectResult:
        return await self.capture(
            ErrorType.JS_ERROR,
            severity,
            str(error) or type(error).__name__,
            stack_trace=stack_trace,
            component=component,
            module=module,
            user_id=user_id,
        )

    async def capture_api_error(
        self,
        message: str,
        status_code: int,
        endpoint: str,
        module: str | None = None,
        user_id: str | None = None,
        stack_trace: str | None = None,
    ) -> SideEffectResult:
        severity = ErrorSeverity.HIGH if status_code >= 500 else ErrorSeverity.MEDIUM
        return await self.capture(
            ErrorType.API_ERROR,
            severity,
            message,
            stack_trace=stack_trace,
            component=endpoint,
            module=module,
            context={"status_code": status_code, "endpoint": endpoint},
            user_id=user_id,
        )

    async def capture_database_error(
        self,
        message: str,
        operation: str,
        module: str | None = None,
        user_id: str | None = None,
    ) -> SideEffectResult:
        return await self.capture(
            ErrorType.DATABASE_ERROR,
            ErrorSeverity.HIGH,
            message,
            component=operation,
            module=module,
            user_id=user_id,
        )

    async def capture_network_error(
        self,
        message: str,
        url: str,
        module: str | None = None,
        user_id: str | None = None,
    ) -> SideEffectResult:
        return await self.capture(
            ErrorType.NETWORK_ERROR,
            ErrorSeverity.MEDIUM,
            message,
            component=url,
            module=module,
            context={"url": url},
            user_id=user_id,
        )

    async def capture_auth_error(
        self,
        message: str,
        module: str | None = None,
        user_id: str | None = None,
    ) -> SideEffectResult:
        return await self.capture(
            ErrorType.AUTH_ERROR,
            ErrorSeverity.HIGH,
            message,
            module=module,
            user_id=user_id,
        )

    async def capture_validation_error(
        self,
        message: str,
        field: str,
        component: str | None = None,
        module: str | None = None,
        user_id: str | None = None,
    ) -> SideEffectResult:
        return await self.capture(
            ErrorType.VALIDATION_ERROR,
            ErrorSeverity.LOW,
            message,
            component=component,
            module=module,
            context={"field": field},
            user_id=user_id,
        )

    # --- Queries ---

    async def query(self, filters: ErrorLogFilters) -> list[ErrorLog]:
        async with self._uow_factory() as uow:
            return await uow.error_logs.list(filters)

    async def resolve(self, error_id: UUID, resolved_by: str) -> None:
        async with self._uow_factory() as uow:
            if not await uow.error_logs.get_by_id(error_id):
                raise NotFound("ErrorLog", str(error_id))
            await uow.error_logs.set_resolved(error_id, True, resolved_by, datetime.now(UTC))
        logger.info("error_resolved", error_id=str(error_id), resolved_by=resolved_by)

    async def unresolve(self, error_id: UUID) -> None:
        async with self._uow_factory() as uow:
            if not await uow.error_logs.get_by_id(error_id):
                raise NotFound("ErrorLog", str(error_id))
            await uow.error_logs.set_resolved(error_id, False, None, None)
        logger.info("error_reopened", error_id=str(error_id))

    async def stats(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> dict[str, Any]:
        errors = await self.query(ErrorLogFilters(start=start, end=end))
        return {
            "total_errors": len(errors),
            "total_occurrences": sum(e.occurrence_count or 1 for e in errors),
            "resolved_errors": sum(1 for e in errors if e.resolved),
            "unresolved_errors": sum(1 for e in errors if not e.resolved),
            "critical_errors": sum(
                1 for e in errors if e.severity == ErrorSeverity.CRITICAL and not e.resolved
            ),
            "errors_by_type": dict(Counter(str(e.error_type) for e in errors)),
            "errors_by_severity": dict(Counter(str(e.severity) for e in errors)),
        }
