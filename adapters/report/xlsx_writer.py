"""Excel payment report writer."""
from __future__ import annotations

from io import BytesIO
from typing import Any, Dict, Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from adapters.report.csv_writer import PAYMENT_COLUMNS, payment_row

HEADER_FONT = Font(bold=True)
CENTER = Alignment(horizontal="center", vertical="center")

# money columns are written as numbers so totals work in Excel
_NUMERIC_COLUMNS = {"Base Pay", "Travel Pay", "Lake Geneva Bonus", "Total Pay"}


def write_payments(items: Iterable[Dict[str, Any]], *, title: str | None = None) -> BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = title or "Payments"

    for col_idx, header in enumerate(PAYMENT_COLUMNS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = HEADER_FONT
        cell.alignment = CENTER

    for row_idx, item in enumerate(items, start=2):
        for col_idx, (header, value) in enumerate(zip(PAYMENT_COLUMNS, payment_row(item)), start=1):
            if header in _NUMERIC_COLUMNS:
                value = float(value)
            ws.cell(row=row_idx, column=col_idx, value=value)

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    return buffer
