"""
xl-tabular: typed tables from untyped spreadsheet cells.

Public API surface:

- ``read_xlsx(path, ...)`` -- **recommended entry point**. Reads one
  worksheet of an ``.xlsx`` workbook and returns a typed ``Table``.

- ``build_table(rows, ...)`` -- build a ``Table`` from any 2-D iterable of
  probe-capable raw cells (see ``xl_tabular.probes``).

- ``classify`` / ``classify_date`` -- classify a single raw cell.

- ``decode_serial`` / ``decode_components`` -- spreadsheet date decoding,
  returning a ``DateResult`` rather than raising.

- ``SheetFrame`` -- handle that re-reads a sheet on demand and exports it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from xl_tabular.builder import TableBuilder, build_table
from xl_tabular.cells import (
    Cell,
    CellValue,
    DateValue,
    FloatValue,
    IntegerValue,
    Row,
    Table,
    TextValue,
)
from xl_tabular.classify import classify, classify_date
from xl_tabular.config import BuildOptions, load_config, save_config
from xl_tabular.dates import (
    Date,
    DateFormat,
    DateParseError,
    DateResult,
    days_in_month,
    days_in_year,
    decode_components,
    decode_serial,
    is_leap_year,
)
from xl_tabular.diagnostics import (
    CellDiagnostic,
    CellObserver,
    DiagnosticCollector,
    DiagnosticKind,
    LoggingObserver,
)
from xl_tabular.frame import SheetFrame
from xl_tabular.probes import CellError, OpenpyxlCell, RawCell, ValueCell
from xl_tabular.reader import read_sheet_rows

__all__ = [
    "read_xlsx",
    "build_table",
    "TableBuilder",
    "SheetFrame",
    # Model
    "Cell",
    "CellValue",
    "IntegerValue",
    "FloatValue",
    "TextValue",
    "DateValue",
    "Row",
    "Table",
    # Classification
    "classify",
    "classify_date",
    "RawCell",
    "ValueCell",
    "OpenpyxlCell",
    "CellError",
    # Dates
    "Date",
    "DateFormat",
    "DateParseError",
    "DateResult",
    "decode_serial",
    "decode_components",
    "is_leap_year",
    "days_in_year",
    "days_in_month",
    # Diagnostics
    "CellDiagnostic",
    "CellObserver",
    "DiagnosticCollector",
    "DiagnosticKind",
    "LoggingObserver",
    # Config
    "BuildOptions",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)


def read_xlsx(
    path: str | Path,
    sheet_name: str = "Sheet1",
    has_headers: bool = False,
    options: BuildOptions | None = None,
    observer: CellObserver | None = None,
) -> Table:
    """Read one worksheet of an ``.xlsx`` file into a typed ``Table``.

    Args:
        path: Workbook path.
        sheet_name: Worksheet to read. Ignored when *options* is given.
        has_headers: Split the first row off as ``Table.header``.
            Ignored when *options* is given.
        options: Full build options; overrides the two arguments above.
        observer: Receives per-cell diagnostics (default: logging).

    Returns:
        The built ``Table``; empty if the sheet does not exist.

    Raises:
        SourceReadError: If the workbook cannot be opened.

    Examples::

        table = xl_tabular.read_xlsx("data/test.xlsx", has_headers=True)
        for row in table:
            print([cell.value for cell in row])
    """
    if options is None:
        options = BuildOptions(sheet_name=sheet_name, has_headers=has_headers)
    logger.info("read_xlsx() -- path=%s, sheet=%s", path, options.sheet_name)
    rows = read_sheet_rows(path, options.sheet_name)
    return build_table(rows, options, observer)
