"""Employee entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Employee:
    """Employee paid per day of attendance through a PIX key."""

    id: UUID
    name: str
    cpf: str
    created_by: str
    created_at: datetime
    pix_key: str | None = None
    pix_type: str | None = None
