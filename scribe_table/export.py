"""
CSV and spreadsheet export of table data.
"""
import io
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from . import config


def _quote(cell: str) -> str:
    return '"' + cell.replace('"', '""') + '"'


def _escape_control_chars(value: str) -> str:
    """Write XML-illegal control characters as _xHHHH_ escapes."""
    return ILLEGAL_CHARACTERS_RE.sub(lambda m: f"_x{ord(m.group()):04X}_", value)


def to_csv(data: Iterable[Sequence[str]]) -> str:
    """
    Serialize rows as CSV text.

    Every cell is quoted with embedded quotes doubled. Rows are joined with
    newlines and keep their own length.
    """
    return "\n".join(",".join(_quote(cell) for cell in row) for row in data)


def to_spreadsheet(data: Iterable[Sequence[str]], sheet_name: str = config.EXPORT_CONFIG["sheet_name"]) -> bytes:
    """Build a single-sheet xlsx workbook holding the rows verbatim."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    for row_idx, row in enumerate(data, start=1):
        for col_idx, value in enumerate(row, start=1):
            cell = ws.cell(row=row_idx, column=col_idx, value=_escape_control_chars(value))
            # keep "=..." cells as text, not formulas
            cell.data_type = "s"
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
