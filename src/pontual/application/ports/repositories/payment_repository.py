"""Payment and bonus repository ports."""

from datetime import date
from typing import Protocol
from uuid import UUID

from pontual.domain.entities import Bonus, Payment


class PaymentRepository(Protocol):
    """Port for payment persistence. Unique on (employee_id, date)."""

    async def get_by_id(self, payment_id: UUID) -> Payment | None: ...

    async def get_for_day(self, employee_id: UUID, day: date) -> Payment | None: ...

    async def upsert(self, payment: Payment) -> Payment: ...

    async def delete(self, payment_id: UUID) -> None: ...

    async def delete_range(
        self,
        employee_id: UUID,
        start: date | None = None,
        end: date | None = None,
    ) -> int: ...

    async def list(
        self,
        *,
        start: date | None = None,
        end: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[Payment]: ...


class BonusRepository(Protocol):
    """Port for per-day bonus persistence."""

    async def get_by_date(self, day: date) -> Bonus | None: ...

    async def upsert(self, bonus: Bonus) -> Bonus: ...

    async def delete_by_date(self, day: date) -> None: ...
