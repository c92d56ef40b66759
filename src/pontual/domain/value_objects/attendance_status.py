"""Attendance status."""

from enum import StrEnum


class AttendanceStatus(StrEnum):
    """Whether an employee showed up on a given day."""

    PRESENT = "present"
    ABSENT = "absent"
