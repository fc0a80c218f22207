"""
ExcelWriter — high-level helpers for building styled report workbooks.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from storm_analytics.excel.styles import (
    TITLE_FONT, SUBTITLE_FONT, SECTION_FONT,
    INSIGHT_TITLE_FONT, INSIGHT_BODY_FONT,
    SEVERITY_FILLS, WRAP,
)
from storm_analytics.excel.formatters import (
    format_header_row,
    format_data_cell,
    auto_column_width,
    add_kpi_card,
)


ColSpec = tuple[str, str, str]  # (key, col_type, label)


class ExcelWriter:
    """Fluent builder for styled Excel workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    # ------------------------------------------------------------------
    # Sheet management
    # ------------------------------------------------------------------

    def add_sheet(self, title: str) -> Worksheet:
        """Create a new worksheet (re-uses the default sheet for the first call)."""
        if self._first_sheet:
            ws = self.wb.active
            ws.title = title
            self._first_sheet = False
        else:
            ws = self.wb.create_sheet(title=title)
        return ws

    # ------------------------------------------------------------------
    # Title block
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str, merge_cols: int = 8) -> int:
        """Write title + subtitle rows. Returns next available row."""
        ws.cell(row=1, column=1).value = title
        ws.cell(row=1, column=1).font = TITLE_FONT
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=merge_cols)

        ws.cell(row=2, column=1).value = subtitle
        ws.cell(row=2, column=1).font = SUBTITLE_FONT
        ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=merge_cols)

        for col in range(1, merge_cols + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18

        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        """Write a section header. Returns next row."""
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = SECTION_FONT
        return row + 2

    # ------------------------------------------------------------------
    # KPI cards
    # ------------------------------------------------------------------

    def write_kpi_row(
        self,
        ws: Worksheet,
        row: int,
        kpis: list[tuple],  # [(value, label, format_type), ...]
        start_col: int = 1,
        col_spacing: int = 2,
    ) -> int:
        """Write a row of KPI cards. Returns next row."""
        col = start_col
        for value, label, fmt in kpis:
            add_kpi_card(ws, row, col, value, label, fmt)
            col += col_spacing
        return row + 3

    # ------------------------------------------------------------------
    # Data tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: list[dict] | pd.DataFrame,
        highlight_fn=None,
        freeze: bool = True,
        show_total: bool = False,
        total_label: str = "TOTAL",
    ) -> int:
        """Write a header row, data rows, and an optional total row.

        highlight_fn(row_idx, row_data) -> str|None  e.g. 'sky', 'alert'

        Returns the row number after the last written row.
        """
        for col_num, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=start_row, column=col_num).value = label
        format_header_row(ws, start_row, len(columns))

        rows = data.to_dict("records") if isinstance(data, pd.DataFrame) else data

        row = start_row + 1
        for idx, row_data in enumerate(rows):
            hl = highlight_fn(idx, row_data) if highlight_fn else None
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                val = row_data.get(key, 0)
                if pd.isna(val):
                    val = 0
                format_data_cell(ws, row, col_num, val, col_type, highlight=hl)
            row += 1

        if show_total and rows:
            format_data_cell(ws, row, 1, total_label, "text", is_total=True)
            for col_num, (key, col_type, _) in enumerate(columns[1:], 2):
                if col_type in ("currency", "number"):
                    val = sum(r.get(key, 0) or 0 for r in rows)
                    format_data_cell(ws, row, col_num, val, col_type, is_total=True)
                else:
                    format_data_cell(ws, row, col_num, "", "text", is_total=True)
            row += 1

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = f"A{start_row + 1}"
        return row

    # ------------------------------------------------------------------
    # Charts
    # ------------------------------------------------------------------

    def write_bar_chart(
        self,
        ws: Worksheet,
        header_row: int,
        n_rows: int,
        category_col: int,
        value_col: int,
        title: str,
        y_title: str,
        anchor: str,
        color: str | None = None,
    ) -> BarChart | None:
        """Column chart over a table already on the sheet (one bar per row)."""
        if n_rows < 1:
            return None

        chart = BarChart()
        chart.type = "col"
        chart.title = title
        chart.y_axis.title = y_title
        chart.x_axis.title = "Event Type"
        chart.legend = None
        chart.width = 22
        chart.height = 11

        values = Reference(ws, min_col=value_col, min_row=header_row, max_row=header_row + n_rows)
        labels = Reference(ws, min_col=category_col, min_row=header_row + 1, max_row=header_row + n_rows)
        chart.add_data(values, titles_from_data=True)
        chart.set_categories(labels)
        if color:
            chart.series[0].graphicalProperties.solidFill = color
            chart.series[0].graphicalProperties.line.solidFill = color

        ws.add_chart(chart, anchor)
        return chart

    # ------------------------------------------------------------------
    # Narrative blocks
    # ------------------------------------------------------------------

    def write_insight(
        self,
        ws: Worksheet,
        row: int,
        title: str,
        body: str,
        severity: str = "info",
        merge_cols: int = 8,
    ) -> int:
        """Write a finding block. Returns next row."""
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = INSIGHT_TITLE_FONT

        body_cell = ws.cell(row=row + 1, column=1)
        body_cell.value = body
        body_cell.font = INSIGHT_BODY_FONT
        body_cell.alignment = WRAP
        if severity in SEVERITY_FILLS:
            body_cell.fill = SEVERITY_FILLS[severity]
        ws.merge_cells(start_row=row + 1, start_column=1, end_row=row + 1, end_column=merge_cols)
        ws.row_dimensions[row + 1].height = 45
        return row + 3

    def write_insights(self, ws: Worksheet, start_row: int, findings: list[dict], merge_cols: int = 8) -> int:
        row = start_row
        for finding in findings:
            row = self.write_insight(
                ws, row, finding["title"], finding["detail"],
                severity=finding.get("severity", "info"), merge_cols=merge_cols,
            )
        return row

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Save the workbook to disk."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
