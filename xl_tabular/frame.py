"""
SheetFrame handle for xl-tabular.

A ``SheetFrame`` remembers a workbook path and its ``BuildOptions`` so a
sheet can be (re-)read without repeating arguments. Each ``read()``
builds a brand new ``Table`` and swaps it in with a single assignment;
existing references to the previous table stay valid and unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import pandas as pd

from xl_tabular.builder import TableBuilder
from xl_tabular.cells import Table
from xl_tabular.config import BuildOptions
from xl_tabular.diagnostics import CellObserver
from xl_tabular.export import export_table, table_to_dataframe
from xl_tabular.reader import read_sheet_rows

logger = logging.getLogger(__name__)


class SheetFrame:
    """Handle pairing a workbook path with its current ``Table``.

    Attributes:
        path: Workbook path.
        options: Build options used by every ``read()``.
        table: The most recently built table (empty until ``read()``).
    """

    def __init__(
        self,
        path: str | Path,
        options: BuildOptions | None = None,
        observer: CellObserver | None = None,
    ) -> None:
        self.path = Path(path)
        self.options = options or BuildOptions()
        self._observer = observer
        self.table = Table(sheet_name=self.options.sheet_name)

    def __repr__(self) -> str:
        return (
            f"SheetFrame(path={str(self.path)!r}, "
            f"sheet={self.options.sheet_name!r}, rows={self.table.n_rows})"
        )

    def read(self) -> Table:
        """Read the configured sheet and replace ``self.table``.

        Raises:
            SourceReadError: If the workbook cannot be opened. ``self.table``
                is left untouched in that case.
        """
        logger.info("SheetFrame.read() -- %s [%s]", self.path, self.options.sheet_name)
        rows = read_sheet_rows(self.path, self.options.sheet_name)
        table = TableBuilder(self.options, self._observer).build(rows)
        self.table = table
        return table

    def to_dataframe(self) -> pd.DataFrame:
        return table_to_dataframe(self.table)

    def export(
        self,
        path: str | Path,
        output_format: Literal["csv", "parquet"] = "parquet",
    ) -> str:
        return export_table(self.table, path, output_format)
