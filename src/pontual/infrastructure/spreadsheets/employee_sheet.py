"""Employee import spreadsheet (.xlsx) reader."""

import io
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from pontual.application.dto.employee_input import EmployeeInput
from pontual.domain.exceptions import ValidationError

# Column order of the import template; the first row is the header.
NAME_COL, CPF_COL, PIX_KEY_COL, PIX_TYPE_COL = 0, 1, 2, 3


def _cell_text(row: tuple, index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _cpf_text(row: tuple, index: int) -> str:
    """CPF typed as a number loses leading zeros and may come back as a float."""
    value = row[index] if index < len(row) else None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(int(value)).zfill(11)
    return _cell_text(row, index)


def read_employee_rows(data: bytes) -> list[EmployeeInput]:
    """Read employee rows from the first sheet, skipping blank lines."""
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile) as e:
        raise ValidationError(f"Arquivo xlsx inválido ou corrompido: {e}") from e

    rows: list[EmployeeInput] = []
    try:
        sheet = wb.worksheets[0]
        for row in sheet.iter_rows(min_row=2, values_only=True):
            name = _cell_text(row, NAME_COL)
            cpf = _cpf_text(row, CPF_COL)
            if not name and not cpf:
                continue
            rows.append(
                EmployeeInput(
                    name=name,
                    cpf=cpf,
                    pix_key=_cell_text(row, PIX_KEY_COL) or None,
                    pix_type=_cell_text(row, PIX_TYPE_COL) or None,
                )
            )
    finally:
        wb.close()
    return rows
