"""Employee error record entity."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass
class ErrorRecord:
    """Operational errors made by an employee on a day, used for discounts."""

    id: UUID
    employee_id: UUID
    date: date
    error_count: int
    created_by: str
    created_at: datetime
    updated_at: datetime
    observations: str | None = None
