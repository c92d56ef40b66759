"""Employee input DTO."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmployeeInput:
    """Employee fields as typed by a user or read from a spreadsheet row."""

    name: str
    cpf: str
    pix_key: str | None = None
    pix_type: str | None = None
