"""
Exporter for xl-tabular.

Renders a ``Table`` as a pandas DataFrame and writes it to disk as CSV or
Parquet.

Rendering rules (``table_to_dataframe``):
- Integers, floats and text are written as-is; dates as ISO strings
  (``YYYY-MM-DD``), which also covers the fictitious 1900-02-29.
- Empty cells become ``None``.
- The ``Table`` itself is jagged; only the rendered frame is padded with
  ``None`` to the widest row.
- If the table has a header row, its cells (rendered as strings) become
  column names; blanks and duplicates get positional names.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import pandas as pd

from xl_tabular.cells import Row, Table, cell_to_python
from xl_tabular.exceptions import ExportError

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}


def _column_names(header: Row | None, width: int) -> list[str]:
    """Column names from the header row, falling back to ``col_<i>``."""
    names: list[str] = []
    seen: set[str] = set()
    for i in range(width):
        name = ""
        if header is not None and i < len(header):
            rendered = cell_to_python(header[i].value)
            name = "" if rendered is None else str(rendered).strip()
        if not name or name in seen:
            name = f"col_{i}"
        seen.add(name)
        names.append(name)
    return names


def table_to_dataframe(table: Table) -> pd.DataFrame:
    """Render *table* as a DataFrame (object dtype columns)."""
    width = table.max_width
    records = [
        [cell_to_python(cell.value) for cell in row] + [None] * (width - len(row))
        for row in table.rows
    ]
    columns = _column_names(table.header, width)
    return pd.DataFrame(records, columns=columns, dtype=object)


def _stringify_mixed(series: pd.Series) -> pd.Series:
    """Cast a column holding more than one kind of value to strings.

    pyarrow needs a single type per column; nulls are left alone.
    """
    kinds = {type(v) for v in series if v is not None}
    if len(kinds) <= 1:
        return series
    return series.map(lambda v: None if v is None else str(v))


def _write_dataframe(df: pd.DataFrame, path: Path, output_format: str) -> None:
    try:
        if output_format == "csv":
            df.to_csv(path, index=False, encoding="utf-8-sig")
        else:  # parquet
            frame = df.apply(_stringify_mixed)
            frame.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc


def export_table(
    table: Table,
    path: str | Path,
    output_format: Literal["csv", "parquet"] = "parquet",
) -> str:
    """Write *table* to *path*.

    The parent directory is created if needed. CSV is written with a
    ``utf-8-sig`` BOM so spreadsheet applications detect UTF-8.

    Returns:
        The written path as a string.

    Raises:
        ExportError: If *output_format* is unsupported or the write fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = table_to_dataframe(table)
    _write_dataframe(df, path, output_format)
    logger.info(
        "Exported table '%s' -> %s (%d rows, %d cols)",
        table.sheet_name, path.name, len(df), len(df.columns),
    )
    return str(path)
