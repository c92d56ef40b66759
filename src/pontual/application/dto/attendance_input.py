"""Attendance input DTO."""

import re
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from pontual.domain.exceptions import ValidationError
from pontual.domain.value_objects import AttendanceStatus

_EXIT_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_exit_time(exit_time: str | None) -> str | None:
    """Accept ``HH:MM`` (24h) or nothing."""
    if exit_time is None or exit_time == "":
        return None
    if not _EXIT_TIME.match(exit_time):
        raise ValidationError("Horário de saída inválido (use HH:MM)")
    return exit_time


@dataclass(frozen=True)
class AttendanceMark:
    """One employee's attendance for one day."""

    employee_id: UUID
    date: date
    status: AttendanceStatus
    exit_time: str | None = None
