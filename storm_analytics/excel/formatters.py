"""
Reusable Excel cell/row formatting helpers.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from storm_analytics.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, TOTAL_FONT,
    THIN_BORDER, TOTAL_BORDER,
    ALTERNATE_FILL, TOTAL_FILL,
    KPI_VALUE_FONT, KPI_LABEL_FONT,
    CENTER, LEFT, RIGHT,
    HIGHLIGHT_FILLS,
)

NUMBER_FORMATS = {
    "currency": '"$"#,##0',
    "number": "#,##0",
    "percent": '0.0"%"',
    "decimal": "0.0",
}


def format_header_row(ws: Worksheet, row_num: int, num_cols: int) -> None:
    """Apply header styling to an entire row."""
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
    is_total: bool = False,
    highlight: str | None = None,
) -> None:
    """Write and format a single data cell."""
    cell = ws.cell(row=row_num, column=col_num)
    cell.value = value
    cell.font = TOTAL_FONT if is_total else DATA_FONT
    cell.border = TOTAL_BORDER if is_total else THIN_BORDER
    cell.alignment = RIGHT if col_type in NUMBER_FORMATS else LEFT
    if col_type in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[col_type]

    if highlight in HIGHLIGHT_FILLS:
        cell.fill = HIGHLIGHT_FILLS[highlight]
    elif is_total:
        cell.fill = TOTAL_FILL
    elif row_num % 2 == 0:
        cell.fill = ALTERNATE_FILL


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 45) -> None:
    """Fit column widths to the longest value in each column."""
    for column in ws.columns:
        lengths = [len(str(cell.value)) for cell in column if cell.value is not None]
        longest = max(lengths, default=0)
        letter = get_column_letter(column[0].column)
        ws.column_dimensions[letter].width = min(max(longest + 2, min_width), max_width)


def add_kpi_card(
    ws: Worksheet,
    row: int,
    col: int,
    value,
    label: str,
    format_type: str = "number",
) -> None:
    """Large KPI value with a small label underneath."""
    value_cell = ws.cell(row=row, column=col)
    value_cell.value = value
    value_cell.font = KPI_VALUE_FONT
    value_cell.alignment = CENTER
    if format_type in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[format_type]

    label_cell = ws.cell(row=row + 1, column=col)
    label_cell.value = label
    label_cell.font = KPI_LABEL_FONT
    label_cell.alignment = CENTER
