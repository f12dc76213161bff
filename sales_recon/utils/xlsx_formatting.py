# -*- coding: utf-8 -*-
"""Shared XLSX formatting for the result workbook.

Writes one or more DataFrames as sheets of a single workbook, styles the
header row and applies each template column's number/date format.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

logger = logging.getLogger(__name__)

# Common styles used across all sheets
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
DEFAULT_COLUMN_WIDTH = 20


def _cell_value(value, data_type: str):
    if value is None or (not isinstance(value, (list, str)) and pd.isna(value)):
        return ""
    if data_type == "date":
        if isinstance(value, pd.Timestamp):
            return value.to_pydatetime()
        return value if isinstance(value, datetime) else str(value)
    if data_type == "number":
        return value
    return str(value)


class XLSXFormatter:
    """Shared XLSX formatting utilities for result workbooks."""

    @staticmethod
    def format_header(
        worksheet,
        template,
        column_width: int = DEFAULT_COLUMN_WIDTH,
    ) -> None:
        """Apply header styling and set column widths.

        Args:
            worksheet: openpyxl Worksheet to format
            template: Output template with COLUMNS definitions
            column_width: Default column width
        """
        for col_idx, _ in enumerate(template.COLUMNS, start=1):
            cell = worksheet.cell(row=1, column=col_idx)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center", vertical="center")
            worksheet.column_dimensions[cell.column_letter].width = column_width

    @staticmethod
    def apply_column_formats(
        worksheet,
        template,
        start_row: int = 2,
    ) -> None:
        """Apply number/date formats to data columns.

        Args:
            worksheet: openpyxl Worksheet to format
            template: Output template with COLUMNS definitions
            start_row: First row of data (after header)
        """
        max_row = worksheet.max_row
        if max_row < start_row:
            return

        for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
            if not col_spec.format_code:
                continue
            for row in range(start_row, max_row + 1):
                cell = worksheet.cell(row=row, column=col_idx)
                cell.number_format = col_spec.format_code
                if col_spec.data_type == "number":
                    cell.alignment = Alignment(horizontal="right")

    @staticmethod
    def write_sheet(worksheet, df: pd.DataFrame, template) -> None:
        """Write a DataFrame laid out by template into a worksheet."""
        for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
            worksheet.cell(row=1, column=col_idx, value=col_spec.name)

        for row_idx, row in enumerate(df.itertuples(index=False), start=2):
            for col_idx, (col_spec, value) in enumerate(
                zip(template.COLUMNS, row), start=1
            ):
                worksheet.cell(
                    row=row_idx,
                    column=col_idx,
                    value=_cell_value(value, col_spec.data_type),
                )

        XLSXFormatter.format_header(worksheet, template)
        XLSXFormatter.apply_column_formats(worksheet, template)

    @staticmethod
    def write_xlsx(sheets: List[Tuple[pd.DataFrame, object]], output_path: Path) -> None:
        """Write several (DataFrame, template) pairs as sheets of one workbook.

        Args:
            sheets: (DataFrame, template) pairs, one sheet each, in order
            output_path: Path to output XLSX file
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        workbook.remove(workbook.active)
        for df, template in sheets:
            worksheet = workbook.create_sheet(title=template.SHEET_NAME)
            XLSXFormatter.write_sheet(worksheet, df, template)

        workbook.save(output_path)
        logger.info(f"Wrote XLSX: {output_path}")
