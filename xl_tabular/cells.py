"""
Typed cell model for xl-tabular.

``CellValue`` is a closed union of four frozen variants. Consumers match
on it with an ``isinstance`` chain ending in ``assert_never`` so a new
variant is a type error at every site that does not handle it
(see ``cell_to_python`` below and ``export.table_to_dataframe``).

``Cell``, ``Row`` and ``Table`` are immutable once built. A ``Table``
owns its rows and cells; nothing else holds references to them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union, assert_never

from xl_tabular.dates import Date

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class IntegerValue:
    """A 32-bit signed integer."""

    value: int

    def __post_init__(self) -> None:
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f"IntegerValue out of 32-bit range: {self.value}")


@dataclass(frozen=True)
class FloatValue:
    value: float


@dataclass(frozen=True)
class TextValue:
    value: str


@dataclass(frozen=True)
class DateValue:
    value: Date


CellValue = Union[IntegerValue, FloatValue, TextValue, DateValue]


def cell_to_python(value: CellValue | None) -> int | float | str | None:
    """Render a cell value as a plain Python scalar.

    Dates are rendered as ISO strings (``YYYY-MM-DD``) so the fictitious
    1900-02-29 survives.
    """
    if value is None:
        return None
    if isinstance(value, IntegerValue):
        return value.value
    if isinstance(value, FloatValue):
        return value.value
    if isinstance(value, TextValue):
        return value.value
    if isinstance(value, DateValue):
        return value.value.isoformat()
    assert_never(value)


@dataclass(frozen=True)
class Cell:
    """One table cell. ``value is None`` means empty or unclassifiable."""

    value: CellValue | None = None

    @property
    def is_empty(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class Row:
    """An ordered, fixed sequence of cells. Lengths may differ per row."""

    cells: tuple[Cell, ...] = ()

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def values(self) -> list[CellValue | None]:
        return [cell.value for cell in self.cells]


@dataclass(frozen=True)
class Table:
    """Immutable result of one build pass over a worksheet.

    Attributes:
        rows: Data rows in source order, never padded.
        header: The first source row when the build treated it as a
            header, otherwise ``None``.
        sheet_name: Name of the worksheet the rows came from.
    """

    rows: tuple[Row, ...] = ()
    header: Row | None = None
    sheet_name: str = ""

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def max_width(self) -> int:
        """Length of the longest row (header included)."""
        widths = [len(row) for row in self.rows]
        if self.header is not None:
            widths.append(len(self.header))
        return max(widths, default=0)

    @property
    def is_jagged(self) -> bool:
        return len({len(row) for row in self.rows}) > 1
