"""
Integration tests: SheetFrame handle (read, re-read, export).
"""

from __future__ import annotations

import pandas as pd
import pytest

from tests.conftest import write_workbook
from xl_tabular.cells import IntegerValue
from xl_tabular.config import BuildOptions
from xl_tabular.diagnostics import DiagnosticCollector
from xl_tabular.exceptions import SourceReadError
from xl_tabular.frame import SheetFrame


@pytest.mark.integration
class TestSheetFrame:
    """Tests for SheetFrame."""

    def test_empty_before_read(self, sample_workbook):
        frame = SheetFrame(sample_workbook)
        assert frame.table.n_rows == 0
        assert "rows=0" in repr(frame)

    def test_read(self, sample_workbook):
        frame = SheetFrame(sample_workbook, BuildOptions(has_headers=True), DiagnosticCollector())
        table = frame.read()
        assert table is frame.table
        assert table.n_rows == 2

    def test_reread_replaces_table(self, tmp_path):
        path = write_workbook(tmp_path / "t.xlsx", {"Sheet1": [[1]]})
        frame = SheetFrame(path)
        first = frame.read()

        write_workbook(path, {"Sheet1": [[2], [3]]})
        second = frame.read()

        assert first[0][0].value == IntegerValue(1)
        assert first.n_rows == 1
        assert second.n_rows == 2
        assert frame.table is second

    def test_failed_read_keeps_previous_table(self, tmp_path):
        path = write_workbook(tmp_path / "t.xlsx", {"Sheet1": [[1]]})
        frame = SheetFrame(path)
        previous = frame.read()
        path.unlink()
        with pytest.raises(SourceReadError):
            frame.read()
        assert frame.table is previous

    def test_to_dataframe_and_export(self, sample_workbook, tmp_path):
        frame = SheetFrame(sample_workbook, BuildOptions(has_headers=True), DiagnosticCollector())
        frame.read()
        df = frame.to_dataframe()
        assert list(df.columns) == ["id", "price", "name", "active", "listed", "ratio"]

        written = frame.export(tmp_path / "out.csv", output_format="csv")
        back = pd.read_csv(written, encoding="utf-8-sig")
        assert back["listed"].tolist() == ["2024-01-01", "2000-02-29"]
