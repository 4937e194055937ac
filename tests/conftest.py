"""
Shared test fixtures for xl-tabular tests.

Workbooks are generated on the fly with openpyxl into ``tmp_path`` so
the suite needs no checked-in input files.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any

import openpyxl
import pytest

from xl_tabular.probes import ValueCell


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (reads real .xlsx workbooks)",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def value_rows(rows: list[list[Any]]) -> list[list[ValueCell]]:
    """Wrap a 2-D list of plain values as raw cells."""
    return [[ValueCell(v) for v in row] for row in rows]


def write_workbook(
    path: Path,
    sheets: dict[str, list[list[Any]]],
    date_format: str = "yyyy-mm-dd",
) -> Path:
    """Write an .xlsx with one worksheet per entry of *sheets*.

    ``datetime`` / ``date`` values get *date_format* as number format so
    they are stored as date serials.
    """
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for r, row in enumerate(rows, start=1):
            for c, value in enumerate(row, start=1):
                cell = ws.cell(row=r, column=c, value=value)
                if isinstance(value, (dt.date, dt.datetime)):
                    cell.number_format = date_format
    wb.save(path)
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def sample_workbook(tmp_path: Path) -> Path:
    """A workbook whose Sheet1 has a header row and one row of every kind."""
    return write_workbook(
        tmp_path / "sample.xlsx",
        {
            "Sheet1": [
                ["id", "price", "name", "active", "listed", "ratio"],
                [1, 25.5, "alpha", True, dt.datetime(2024, 1, 1), "#DIV/0!"],
                [2, 30.25, "beta", False, dt.datetime(2000, 2, 29, 15, 30), None],
            ],
            "Other": [["x"]],
        },
    )
