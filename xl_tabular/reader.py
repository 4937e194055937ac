"""
Workbook row source for xl-tabular.

Opens ``.xlsx`` workbooks with openpyxl and hands rows of
``OpenpyxlCell`` adapters to the table builder. This is the only module
that touches spreadsheet files.

The workbook is opened with ``read_only=True`` (streamed, low memory)
and ``data_only=True`` (formula cells yield their cached value; formulas
themselves are not preserved).

Date-formatted numbers in a 1900-system workbook are read as their raw
serials. openpyxl would otherwise convert them to ``datetime`` with
``from_excel``, which maps serial 60 (the fictitious 1900-02-29) onto
1900-02-28 like serial 59. 1904-system workbooks keep openpyxl's
conversion; the adapter re-encodes those datetimes as 1900 serials.

Failure policy:
- Unreadable / missing / corrupt file -> ``SourceReadError``.
- Requested sheet absent -> no rows (logged as a warning).
"""

from __future__ import annotations

import logging
from pathlib import Path

import openpyxl
from openpyxl.utils.datetime import CALENDAR_WINDOWS_1900

from xl_tabular.exceptions import SourceReadError
from xl_tabular.probes import OpenpyxlCell

logger = logging.getLogger(__name__)


def _open_workbook(path: str | Path) -> openpyxl.Workbook:
    path = Path(path)
    if not path.exists():
        raise SourceReadError(f"Workbook not found: {path}")
    try:
        return openpyxl.load_workbook(path, read_only=True, data_only=True)
    except Exception as exc:
        raise SourceReadError(f"Failed to open workbook {path}: {exc}") from exc


def _keep_raw_serials(wb: openpyxl.Workbook) -> None:
    """Stop read-only worksheets from converting date serials to datetimes.

    Read-only worksheets look up ``wb._date_formats`` when they start
    parsing rows; with it empty, date-styled cells keep ``data_type``
    ``n`` and their serial value, and ``is_date`` still reports the
    date number format.
    """
    if wb.epoch == CALENDAR_WINDOWS_1900:
        wb._date_formats = set()


def list_sheet_names(path: str | Path) -> list[str]:
    """Return the worksheet names of a workbook, in workbook order."""
    wb = _open_workbook(path)
    try:
        return list(wb.sheetnames)
    finally:
        wb.close()


def read_sheet_rows(
    path: str | Path,
    sheet_name: str = "Sheet1",
) -> list[list[OpenpyxlCell]]:
    """Read every row of one worksheet as raw cells.

    Args:
        path: Path to the ``.xlsx`` file.
        sheet_name: Worksheet to read.

    Returns:
        Rows in sheet order. Empty if the sheet does not exist or is a
        chartsheet.

    Raises:
        SourceReadError: If the workbook cannot be opened.
    """
    wb = _open_workbook(path)
    try:
        if sheet_name not in wb.sheetnames:
            logger.warning(
                "Sheet '%s' not found in %s (available: %s)",
                sheet_name, path, wb.sheetnames,
            )
            return []
        ws = wb[sheet_name]
        if not hasattr(ws, "iter_rows"):
            logger.warning("Sheet '%s' in %s has no cells (chartsheet)", sheet_name, path)
            return []
        _keep_raw_serials(wb)
        rows = [[OpenpyxlCell(cell) for cell in row] for row in ws.iter_rows()]
    finally:
        wb.close()

    logger.info("Read %d rows from %s [%s]", len(rows), path, sheet_name)
    return rows
