"""Workbook loading and header extraction utilities.

This module provides safe loading of Excel workbooks with proper error
handling for invalid, corrupt, or unsupported files, and reads the header
row plus a few sample rows that the reconciliation engine works from.
"""

import io
import zipfile
from typing import Any

import openpyxl
from openpyxl import Workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from app.core.models import SheetData


class WorkbookLoadError(Exception):
    """Exception raised when a workbook cannot be loaded.

    This exception is raised for various loading failures including:
    - Empty file data
    - Corrupt or invalid ZIP structure
    - Invalid Excel file format
    - Password-protected files
    - Other unexpected errors during loading

    Attributes:
        message: Human-readable error description
        detail: Additional technical details (optional)
    """

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class SheetReadError(WorkbookLoadError):
    """Raised when a loaded workbook has no worksheet to read headers from."""


def load_workbook_safe(file_bytes: bytes) -> Workbook:
    """Safely load an Excel workbook from raw bytes.

    Cell values are loaded as last calculated by Excel (data_only=True), so
    formula headers such as ="Road " & "Tax" arrive as text.

    Args:
        file_bytes: Raw bytes of the Excel file

    Returns:
        Workbook: Loaded openpyxl Workbook object

    Raises:
        WorkbookLoadError: If the file is empty, too small, corrupt, not an
            Excel workbook, password-protected, or otherwise unreadable
    """
    if not file_bytes:
        raise WorkbookLoadError(
            message="Empty file",
            detail="The uploaded file contains no data"
        )

    # A valid xlsx file (a ZIP archive) is at least ~100 bytes even when empty
    if len(file_bytes) < 100:
        raise WorkbookLoadError(
            message="Invalid file",
            detail=f"File too small ({len(file_bytes)} bytes) to be a valid Excel workbook"
        )

    file_stream = io.BytesIO(file_bytes)

    try:
        return openpyxl.load_workbook(file_stream, data_only=True)

    except zipfile.BadZipFile as e:
        raise WorkbookLoadError(
            message="Invalid file format",
            detail="File is not a valid Excel workbook (corrupt or not .xlsx format)"
        ) from e

    except InvalidFileException as e:
        error_str = str(e).lower()

        if "password" in error_str or "encrypted" in error_str:
            raise WorkbookLoadError(
                message="Password-protected file",
                detail="Cannot open password-protected Excel files"
            ) from e

        raise WorkbookLoadError(
            message="Invalid Excel file",
            detail=str(e)
        ) from e

    except MemoryError as e:
        raise WorkbookLoadError(
            message="File too large",
            detail="The file is too large to process"
        ) from e

    except KeyError as e:
        # Valid ZIP but missing required parts such as [Content_Types].xml
        raise WorkbookLoadError(
            message="Invalid Excel file",
            detail="File is a valid ZIP archive but not a valid Excel workbook (missing required components)"
        ) from e

    except Exception as e:
        error_type = type(e).__name__
        raise WorkbookLoadError(
            message="Failed to load workbook",
            detail=f"Unexpected error ({error_type}): {str(e)}"
        ) from e


def _cell_text(value: Any) -> str:
    """Render a cell value as text; empty cells become ''."""
    if value is None:
        return ''
    return str(value).strip()


def read_headers(ws: Worksheet, max_cols: int = 200) -> list[str]:
    """Read the header row (row 1) of a worksheet.

    Empty header cells are replaced by "Column N" (N is the 1-based column
    index). Trailing empty cells after the last real header are dropped.

    Args:
        ws: openpyxl Worksheet object to read
        max_cols: Maximum number of columns to scan

    Returns:
        Header strings in column order
    """
    actual_max = min(max_cols, ws.max_column or 0)
    if actual_max == 0:
        return []

    values = [
        _cell_text(ws.cell(row=1, column=col).value)
        for col in range(1, actual_max + 1)
    ]

    while values and not values[-1]:
        values.pop()

    return [
        text or f"Column {index}"
        for index, text in enumerate(values, start=1)
    ]


def read_sheet(
    wb: Workbook,
    sheet_name: str | None = None,
    sample_rows: int = 9,
    max_cols: int = 200,
) -> SheetData:
    """Read headers and a sample of data rows from one worksheet.

    Args:
        wb: Loaded openpyxl Workbook
        sheet_name: Sheet to read; defaults to the first worksheet
        sample_rows: Number of data rows to sample after the header row
        max_cols: Maximum number of columns to scan

    Returns:
        SheetData with headers and rows aligned to them

    Raises:
        SheetReadError: If the workbook has no worksheets or the named sheet
            does not exist
    """
    if not wb.worksheets:
        raise SheetReadError(
            message="Empty workbook",
            detail="The workbook contains no worksheets"
        )

    if sheet_name is None:
        ws = wb.worksheets[0]
    elif sheet_name in wb.sheetnames:
        ws = wb[sheet_name]
    else:
        raise SheetReadError(
            message="Sheet not found",
            detail=f"No worksheet named '{sheet_name}'"
        )

    headers = read_headers(ws, max_cols=max_cols)

    rows: list[list[str]] = []
    if headers and sample_rows > 0:
        for row in ws.iter_rows(
            min_row=2,
            max_row=min(ws.max_row, 1 + sample_rows),
            max_col=len(headers),
            values_only=True,
        ):
            cells = [_cell_text(value) for value in row]
            cells.extend([''] * (len(headers) - len(cells)))
            rows.append(cells)

    return SheetData(sheet_name=ws.title, headers=headers, rows=rows)
