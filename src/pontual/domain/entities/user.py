"""Dashboard user entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


@dataclass
class User:
    """User identified by matrícula; authenticated through the identity provider."""

    id: str
    role: Literal["admin", "supervisor"]
    created_at: datetime
    created_by: str | None = None
    email: str | None = None
