"""Payment and bonus entities."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID


@dataclass
class Payment:
    """Payment owed to an employee for one day."""

    id: UUID
    employee_id: UUID
    date: date
    daily_rate: Decimal
    bonus: Decimal
    total: Decimal
    created_by: str
    created_at: datetime
    updated_at: datetime


@dataclass
class Bonus:
    """Bonus applied to every present employee on a day."""

    id: UUID
    date: date
    amount: Decimal
    applied_by: str
    created_at: datetime
