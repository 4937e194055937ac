"""
Probe-capable raw cells for xl-tabular.

The classifier never inspects a raw cell's type directly. It asks a set
of questions instead ("can you give me an integer?", "are you empty?")
through the ``RawCell`` protocol. Any object with these methods can be
fed to the builder, which keeps workbook libraries out of the core.

Two adapters ship with the package:

- ``ValueCell`` wraps a plain Python value (``int``, ``float``, ``str``,
  ``bool``, ``None``, ``datetime``/``date``) or a ``CellError``.
- ``OpenpyxlCell`` wraps an openpyxl cell and uses its ``data_type`` and
  ``is_date`` to answer the probes.
"""

from __future__ import annotations

import datetime as dt
import math
import numbers
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from openpyxl.utils.datetime import to_excel

# Error literals a spreadsheet may store in place of a value.
ERROR_LITERALS = frozenset({
    "#NULL!", "#DIV/0!", "#VALUE!", "#REF!", "#NAME?", "#NUM!", "#N/A",
    "#GETTING_DATA",
})


@runtime_checkable
class RawCell(Protocol):
    """Capability set the classifier relies on.

    Each ``get_*`` probe returns ``None`` when the cell does not hold
    that kind of value.
    """

    def get_int(self) -> int | None: ...

    def get_float(self) -> float | None: ...

    def get_string(self) -> str | None: ...

    def get_bool(self) -> bool | None: ...

    def is_empty(self) -> bool: ...

    def get_error(self) -> str | None: ...

    def get_datetime_serial(self) -> float | None:
        """Serial day number (with fraction) if this is a date/time cell."""
        ...


@dataclass(frozen=True)
class CellError:
    """An error payload such as ``#DIV/0!``."""

    code: str


def _datetime_to_serial(value: dt.datetime | dt.date | dt.time | dt.timedelta) -> float | None:
    """Convert a Python date/time to a 1900-system serial via openpyxl.

    ``None`` for not-a-time values such as ``pandas.NaT``.
    """
    serial = to_excel(value)
    return None if serial is None else float(serial)


class ValueCell:
    """Raw cell backed by a plain Python value.

    Integral floats are *not* promoted to integers: ``5.0`` answers the
    float probe only, mirroring how workbook readers report numbers.
    Numeric checks go through ``numbers.Integral`` / ``numbers.Real`` so
    numpy scalars from a pandas-sourced row behave like ``int`` / ``float``.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"ValueCell({self._value!r})"

    @property
    def value(self) -> Any:
        return self._value

    def get_int(self) -> int | None:
        v = self._value
        # bool is an int subclass; numpy integer scalars register as Integral
        if isinstance(v, numbers.Integral) and not isinstance(v, bool):
            return int(v)
        return None

    def get_float(self) -> float | None:
        v = self._value
        if isinstance(v, numbers.Real) and not isinstance(v, numbers.Integral):
            v = float(v)
            if not math.isnan(v):
                return v
        return None

    def get_string(self) -> str | None:
        v = self._value
        if isinstance(v, str) and v not in ERROR_LITERALS:
            return v
        return None

    def get_bool(self) -> bool | None:
        return self._value if isinstance(self._value, bool) else None

    def is_empty(self) -> bool:
        v = self._value
        if v is None:
            return True
        return (
            isinstance(v, numbers.Real)
            and not isinstance(v, numbers.Integral)
            and math.isnan(float(v))
        )

    def get_error(self) -> str | None:
        v = self._value
        if isinstance(v, CellError):
            return v.code
        if isinstance(v, str) and v in ERROR_LITERALS:
            return v
        return None

    def get_datetime_serial(self) -> float | None:
        v = self._value
        if isinstance(v, (dt.datetime, dt.date, dt.time, dt.timedelta)):
            return _datetime_to_serial(v)
        return None


class OpenpyxlCell:
    """Raw cell backed by an openpyxl ``Cell`` / ``ReadOnlyCell``.

    Uses openpyxl's type codes: ``n`` numeric, ``s`` string, ``b`` bool,
    ``e`` error, ``d`` date. Date detection relies on ``is_date``, which
    openpyxl derives from the cell's number format.

    A date-formatted numeric cell is answered from its stored serial
    when the value is still a number; ``reader.read_sheet_rows`` keeps
    1900-system serials unconverted for this reason. Once openpyxl has
    turned the serial into a ``datetime`` the fictitious 1900-02-29 is
    gone: ``from_excel`` maps serials 59 and 60 both to 1900-02-28, so
    such a cell answers serial 59.
    """

    __slots__ = ("_cell",)

    def __init__(self, cell: Any) -> None:
        self._cell = cell

    def __repr__(self) -> str:
        coordinate = getattr(self._cell, "coordinate", "?")
        return f"OpenpyxlCell({coordinate}={self._cell.value!r})"

    @property
    def _type(self) -> str | None:
        return getattr(self._cell, "data_type", None)

    @property
    def _is_date(self) -> bool:
        return bool(getattr(self._cell, "is_date", False))

    def get_int(self) -> int | None:
        v = self._cell.value
        if self._type == "n" and not self._is_date and isinstance(v, int) and not isinstance(v, bool):
            return v
        return None

    def get_float(self) -> float | None:
        v = self._cell.value
        if self._type == "n" and not self._is_date and isinstance(v, float):
            return v
        return None

    def get_string(self) -> str | None:
        v = self._cell.value
        if self._type in ("s", "inlineStr", "str") and isinstance(v, str):
            return v
        return None

    def get_bool(self) -> bool | None:
        v = self._cell.value
        if self._type == "b" and isinstance(v, bool):
            return v
        return None

    def is_empty(self) -> bool:
        return self._cell.value is None

    def get_error(self) -> str | None:
        if self._type == "e" and self._cell.value is not None:
            return str(self._cell.value)
        return None

    def get_datetime_serial(self) -> float | None:
        v = self._cell.value
        if isinstance(v, (dt.datetime, dt.date, dt.time, dt.timedelta)):
            return _datetime_to_serial(v)
        if self._is_date and isinstance(v, (int, float)) and not isinstance(v, bool):
            return float(v)
        return None
