"""Pytest fixtures for Pontual tests."""

from __future__ import annotations

from collections import Counter
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, date, datetime
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID

import pytest

from pontual.application.dto.log_filters import (
    ActivityLogFilters,
    AuditLogFilters,
    ErrorLogFilters,
)
from pontual.application.services import BusinessClock
from pontual.domain.entities import (
    MANAGED_TABLES,
    ActivityLogEntry,
    Attendance,
    AuditLogEntry,
    Bonus,
    Employee,
    ErrorLog,
    ErrorRecord,
    Payment,
    PermissionLog,
    RetentionPolicy,
    User,
    UserPermissionRecord,
)
from pontual.domain.exceptions import StorageError
from pontual.domain.value_objects import AttendanceStatus, ErrorType


def _in_range(day: date, start: date | None, end: date | None) -> bool:
    return (start is None or day >= start) and (end is None or day <= end)


# --- Fake repositories ---


class FakeEmployeeRepository:
    """In-memory employee repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Employee] = {}

    async def get_by_id(self, employee_id: UUID) -> Employee | None:
        return self._by_id.get(employee_id)

    async def get_by_cpf(self, cpf: str, exclude_id: UUID | None = None) -> Employee | None:
        for e in self._by_id.values():
            if e.cpf == cpf and e.id != exclude_id:
                return e
        return None

    async def list(self) -> list[Employee]:
        return sorted(self._by_id.values(), key=lambda e: e.name)

    async def create(self, employee: Employee) -> Employee:
        self._by_id[employee.id] = employee
        return employee

    async def update(self, employee: Employee) -> None:
        self._by_id[employee.id] = employee

    async def delete(self, employee_id: UUID) -> None:
        self._by_id.pop(employee_id, None)


class FakeAttendanceRepository:
    """In-memory attendance keyed by (employee_id, date)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[UUID, date], Attendance] = {}

    async def get_by_id(self, attendance_id: UUID) -> Attendance | None:
        for a in self._by_key.values():
            if a.id == attendance_id:
                return a
        return None

    async def upsert(self, attendance: Attendance) -> Attendance:
        key = (attendance.employee_id, attendance.date)
        existing = self._by_key.get(key)
        if existing:
            attendance = replace(
                attendance, id=existing.id, created_at=existing.created_at
            )
        self._by_key[key] = attendance
        return attendance

    async def update(self, attendance: Attendance) -> None:
        self._by_key[(attendance.employee_id, attendance.date)] = attendance

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
        status: AttendanceStatus | None = None,
    ) -> list[Attendance]:
        items = [
            a
            for a in self._by_key.values()
            if _in_range(a.date, start, end)
            and (employee_id is None or a.employee_id == employee_id)
            and (status is None or a.status == status)
        ]
        return sorted(items, key=lambda a: a.date, reverse=True)

    async def delete_by_date(self, day: date) -> int:
        keys = [k for k in self._by_key if k[1] == day]
        for k in keys:
            del self._by_key[k]
        return len(keys)


class FakePaymentRepository:
    """In-memory payments keyed by (employee_id, date)."""

    def __init__(self) -> None:
        self._by_key: dict[tuple[UUID, date], Payment] = {}

    async def get_by_id(self, payment_id: UUID) -> Payment | None:
        for p in self._by_key.values():
            if p.id == payment_id:
                return p
        return None

    async def get_for_day(self, employee_id: UUID, day: date) -> Payment | None:
        return self._by_key.get((employee_id, day))

    async def upsert(self, payment: Payment) -> Payment:
        self._by_key[(payment.employee_id, payment.date)] = payment
        return payment

    async def delete(self, payment_id: UUID) -> None:
        self._by_key = {k: p for k, p in self._by_key.items() if p.id != payment_id}

    async def delete_range(
        self, employee_id: UUID, start: date | None = None, end: date | None = None
    ) -> int:
        keys = [
            k for k in self._by_key if k[0] == employee_id and _in_range(k[1], start, end)
        ]
        for k in keys:
            del self._by_key[k]
        return len(keys)

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[Payment]:
        items = [
            p
            for p in self._by_key.values()
            if _in_range(p.date, start, end)
            and (employee_id is None or p.employee_id == employee_id)
        ]
        return sorted(items, key=lambda p: p.date, reverse=True)


class FakeBonusRepository:
    def __init__(self) -> None:
        self._by_date: dict[date, Bonus] = {}

    async def get_by_date(self, day: date) -> Bonus | None:
        return self._by_date.get(day)

    async def upsert(self, bonus: Bonus) -> Bonus:
        self._by_date[bonus.date] = bonus
        return bonus

    async def delete_by_date(self, day: date) -> None:
        self._by_date.pop(day, None)


class FakeErrorRecordRepository:
    def __init__(self) -> None:
        self._by_id: dict[UUID, ErrorRecord] = {}

    async def get_by_id(self, record_id: UUID) -> ErrorRecord | None:
        return self._by_id.get(record_id)

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[ErrorRecord]:
        return [
            r
            for r in self._by_id.values()
            if _in_range(r.date, start, end)
            and (employee_id is None or r.employee_id == employee_id)
        ]

    async def create(self, record: ErrorRecord) -> ErrorRecord:
        self._by_id[record.id] = record
        return record

    async def update(self, record: ErrorRecord) -> None:
        self._by_id[record.id] = record

    async def delete(self, record_id: UUID) -> None:
        self._by_id.pop(record_id, None)


class FakeUserRepository:
    def __init__(self) -> None:
        self._by_id: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._by_id.get(user_id)

    async def list_all(self) -> list[User]:
        return sorted(self._by_id.values(), key=lambda u: u.created_at, reverse=True)

    async def create(self, user: User) -> User:
        self._by_id[user.id] = user
        return user

    async def delete(self, user_id: str) -> None:
        self._by_id.pop(user_id, None)


class FakeUserPermissionRepository:
    """In-memory permission rows; at most one per user."""

    def __init__(self) -> None:
        self._by_user: dict[str, UserPermissionRecord] = {}

    async def get_by_user_id(self, user_id: str) -> UserPermissionRecord | None:
        return self._by_user.get(user_id)

    async def create(self, record: UserPermissionRecord) -> UserPermissionRecord:
        self._by_user[record.user_id] = record
        return record

    async def update(self, record: UserPermissionRecord) -> None:
        self._by_user[record.user_id] = record

    async def delete_by_user_id(self, user_id: str) -> None:
        self._by_user.pop(user_id, None)

    async def list_all(self) -> list[UserPermissionRecord]:
        return list(self._by_user.values())


class FakePermissionLogRepository:
    def __init__(self) -> None:
        self.entries: list[PermissionLog] = []

    async def create(self, entry: PermissionLog) -> PermissionLog:
        self.entries.append(entry)
        return entry

    async def list_by_user(self, user_id: str, limit: int = 50) -> list[PermissionLog]:
        items = [e for e in self.entries if e.user_id == user_id]
        items.sort(key=lambda e: e.created_at, reverse=True)
        return items[:limit]


class FakeAuditLogRepository:
    def __init__(self) -> None:
        self.entries: list[AuditLogEntry] = []

    async def create(self, entry: AuditLogEntry) -> AuditLogEntry:
        self.entries.append(entry)
        return entry

    async def list(self, filters: AuditLogFilters) -> list[AuditLogEntry]:
        items = [
            e
            for e in self.entries
            if (filters.user_id is None or e.user_id == filters.user_id)
            and (filters.module is None or e.module == filters.module)
            and (filters.action_type is None or e.action_type == filters.action_type)
            and (filters.start is None or e.created_at >= filters.start)
            and (filters.end is None or e.created_at <= filters.end)
        ]
        items.sort(key=lambda e: e.created_at, reverse=True)
        return items[: filters.limit] if filters.limit else items

    async def count_by(
        self, column: str, start: datetime | None = None, end: datetime | None = None
    ) -> dict[str, int]:
        return dict(Counter(str(getattr(e, column)) for e in self.entries))


class FakeActivityLogRepository:
    def __init__(self) -> None:
        self.entries: list[ActivityLogEntry] = []

    async def create(self, entry: ActivityLogEntry) -> ActivityLogEntry:
        self.entries.append(entry)
        return entry

    async def list(self, filters: ActivityLogFilters) -> list[ActivityLogEntry]:
        return [
            e
            for e in self.entries
            if (filters.user_id is None or e.user_id == filters.user_id)
            and (filters.module is None or e.module == filters.module)
        ]


class FakeErrorLogRepository:
    def __init__(self) -> None:
        self._by_id: dict[UUID, ErrorLog] = {}

    async def get_by_id(self, error_id: UUID) -> ErrorLog | None:
        return self._by_id.get(error_id)

    async def find_open(
        self, error_type: ErrorType, message: str, component: str
    ) -> ErrorLog | None:
        for e in self._by_id.values():
            if (
                e.error_type == error_type
                and e.message == message
                and e.component == component
                and not e.resolved
            ):
                return e
        return None

    async def create(self, error: ErrorLog) -> ErrorLog:
        self._by_id[error.id] = error
        return error

    async def add_occurrences(
        self, error_id: UUID, count: int, last_occurred_at: datetime, user_id: str | None
    ) -> None:
        e = self._by_id[error_id]
        e.occurrence_count += count
        e.last_occurred_at = last_occurred_at
        if user_id:
            e.user_id = user_id

    async def set_resolved(
        self,
        error_id: UUID,
        resolved: bool,
        resolved_by: str | None,
        resolved_at: datetime | None,
    ) -> None:
        e = self._by_id[error_id]
        e.resolved, e.resolved_by, e.resolved_at = resolved, resolved_by, resolved_at

    async def list(self, filters: ErrorLogFilters) -> list[ErrorLog]:
        items = [
            e
            for e in self._by_id.values()
            if (filters.error_type is None or e.error_type == filters.error_type)
            and (filters.severity is None or e.severity == filters.severity)
            and (filters.resolved is None or e.resolved == filters.resolved)
        ]
        return sorted(items, key=lambda e: e.last_occurred_at, reverse=True)

    def all(self) -> list[ErrorLog]:
        return list(self._by_id.values())


class FakeSettingRepository:
    def __init__(self) -> None:
        self.values: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        return self.values.get(key)

    async def set(self, key: str, value: Any, updated_by: str) -> None:
        self.values[key] = value


class FakeRetentionPolicyRepository:
    def __init__(self) -> None:
        self._by_table: dict[str, RetentionPolicy] = {}

    async def get(self, table_name: str) -> RetentionPolicy | None:
        return self._by_table.get(table_name)

    async def list_all(self) -> list[RetentionPolicy]:
        return sorted(self._by_table.values(), key=lambda p: p.table_name)

    async def upsert(self, policy: RetentionPolicy) -> None:
        self._by_table[policy.table_name] = policy


class FakeDataMaintenanceRepository:
    """Row counts per table; ``delete_older_than`` removes ``stale`` rows."""

    def __init__(self) -> None:
        self.rows: dict[str, int] = {t: 0 for t in MANAGED_TABLES}
        self.stale: dict[str, int] = {t: 0 for t in MANAGED_TABLES}
        self.cutoffs: dict[str, datetime] = {}

    async def count(self, table_name: str) -> int:
        return self.rows[table_name]

    async def delete_older_than(self, table_name: str, cutoff: datetime) -> int:
        self.cutoffs[table_name] = cutoff
        deleted = self.stale[table_name]
        self.rows[table_name] -= deleted
        self.stale[table_name] = 0
        return deleted


class FakeUnitOfWork:
    """In-memory Unit of Work for tests.

    Set ``fail`` to make the next ``uow_factory()`` entries raise it, which
    is how storage outages are simulated. ``fail_entries`` maps a 1-based
    entry number to the error only that entry raises.
    """

    def __init__(self) -> None:
        self.employees = FakeEmployeeRepository()
        self.attendance = FakeAttendanceRepository()
        self.payments = FakePaymentRepository()
        self.bonuses = FakeBonusRepository()
        self.error_records = FakeErrorRecordRepository()
        self.users = FakeUserRepository()
        self.user_permissions = FakeUserPermissionRepository()
        self.permission_logs = FakePermissionLogRepository()
        self.audit_logs = FakeAuditLogRepository()
        self.activity_logs = FakeActivityLogRepository()
        self.error_logs = FakeErrorLogRepository()
        self.settings = FakeSettingRepository()
        self.retention_policies = FakeRetentionPolicyRepository()
        self.maintenance = FakeDataMaintenanceRepository()
        self.fail: Exception | None = None
        self.fail_entries: dict[int, Exception] = {}
        self.entered = 0

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Single UoW shared by every factory call in a test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Async context manager factory yielding ``fake_uow``."""

    @asynccontextmanager
    async def _factory():
        fake_uow.entered += 1
        if fake_uow.fail is not None:
            raise fake_uow.fail
        if fake_uow.entered in fake_uow.fail_entries:
            raise fake_uow.fail_entries[fake_uow.entered]
        yield fake_uow

    return _factory


@pytest.fixture
def storage_down() -> StorageError:
    return StorageError("connection refused")


@pytest.fixture
def mock_permission_checker():
    """Permission checker that allows everything."""
    checker = AsyncMock()
    checker.check = AsyncMock(return_value=True)
    return checker


@pytest.fixture
def deny_permission_checker():
    """Permission checker that denies everything."""
    checker = AsyncMock()
    checker.check = AsyncMock(return_value=False)
    return checker


class FixedClock(BusinessClock):
    """Business clock pinned to a given day."""

    def __init__(self, today: date) -> None:
        super().__init__("UTC")
        self._today = today

    def today(self) -> date:
        return self._today


TODAY = date(2024, 6, 10)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(TODAY)


def now() -> datetime:
    return datetime.now(UTC)
