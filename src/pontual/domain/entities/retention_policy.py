"""Data retention policy entity."""

from dataclasses import dataclass
from datetime import datetime

# Tables whose rows age out; everything else is kept indefinitely.
MANAGED_TABLES = (
    "attendance",
    "payments",
    "error_records",
    "audit_logs",
    "activity_logs",
    "error_logs",
)


@dataclass
class RetentionPolicy:
    """How long rows of a table are kept before cleanup."""

    table_name: str
    retention_days: int
    auto_cleanup: bool
    updated_by: str
    updated_at: datetime
