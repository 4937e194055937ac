"""
Cell classification for xl-tabular.

``classify`` turns one probe-capable raw cell into a typed ``CellValue``
or ``None``. Probes are tried in a fixed priority order, first match
wins:

1. integer (32-bit signed range) -> ``IntegerValue``
2. float -> ``FloatValue``
3. string -> ``TextValue``
4. boolean -> ``TextValue("true" / "false")``
5. empty -> ``None``
6. error payload -> ``None`` (reported as ``CELL_ERROR``)
7. anything else -> ``None``

Integers outside the 32-bit range are handled by a wide-integer policy
(``"text"``, ``"float"`` or ``"drop"``); see ``classify``.

``classify_date`` is the fallback for cells ``classify`` left empty. It
returns the ``DateResult`` rather than swallowing decode failures, so the
caller chooses whether to log, collect, or raise.
"""

from __future__ import annotations

import logging
from typing import Literal

from xl_tabular.cells import (
    INT32_MAX,
    INT32_MIN,
    CellValue,
    FloatValue,
    IntegerValue,
    TextValue,
)
from xl_tabular.dates import DateResult, decode_serial
from xl_tabular.diagnostics import CellDiagnostic, CellObserver, DiagnosticKind
from xl_tabular.probes import RawCell

logger = logging.getLogger(__name__)

WideIntegerPolicy = Literal["text", "float", "drop"]


def _report(
    observer: CellObserver | None,
    kind: DiagnosticKind,
    message: str,
    position: tuple[int, int] | None,
) -> None:
    if observer is not None:
        observer.report(CellDiagnostic(kind=kind, message=message, position=position))


def _widen(
    value: int,
    policy: WideIntegerPolicy,
    observer: CellObserver | None,
    position: tuple[int, int] | None,
) -> CellValue | None:
    """Apply the wide-integer policy to an out-of-range integer."""
    if policy == "text":
        _report(observer, DiagnosticKind.INTEGER_WIDENED, f"{value} kept as text", position)
        return TextValue(str(value))
    if policy == "float":
        _report(observer, DiagnosticKind.INTEGER_WIDENED, f"{value} kept as float", position)
        return FloatValue(float(value))
    _report(
        observer,
        DiagnosticKind.INTEGER_OUT_OF_RANGE,
        f"{value} does not fit in 32 bits; dropped",
        position,
    )
    return None


def classify(
    raw: RawCell,
    *,
    wide_integers: WideIntegerPolicy = "text",
    observer: CellObserver | None = None,
    position: tuple[int, int] | None = None,
) -> CellValue | None:
    """Classify a raw cell into a typed value.

    Args:
        raw: Any object implementing the ``RawCell`` probes.
        wide_integers: What to do with an integer outside the 32-bit
            range. ``"text"`` keeps its decimal digits as ``TextValue``,
            ``"float"`` converts it to ``FloatValue`` (may lose
            precision), ``"drop"`` leaves the cell empty.
        observer: Receives error payloads and wide-integer events.
        position: ``(row, col)`` attached to reported diagnostics.

    Returns:
        The typed value, or ``None`` for empty / unclassifiable cells.
    """
    integer = raw.get_int()
    if integer is not None:
        if INT32_MIN <= integer <= INT32_MAX:
            return IntegerValue(integer)
        return _widen(integer, wide_integers, observer, position)

    number = raw.get_float()
    if number is not None:
        return FloatValue(number)

    text = raw.get_string()
    if text is not None:
        return TextValue(text)

    flag = raw.get_bool()
    if flag is not None:
        return TextValue("true" if flag else "false")

    if raw.is_empty():
        return None

    error = raw.get_error()
    if error is not None:
        _report(observer, DiagnosticKind.CELL_ERROR, error, position)
        return None

    return None


def classify_date(raw: RawCell) -> DateResult | None:
    """Decode a date/time cell.

    Returns:
        ``None`` if *raw* is not a date/time payload. Otherwise the
        ``DateResult`` of decoding its serial, truncated to whole days.
        A time-only value (serial below 1) yields ``InvalidSerialNumber``.
    """
    serial = raw.get_datetime_serial()
    if serial is None:
        return None
    result = decode_serial(int(serial))
    if not result.ok:
        logger.debug("Serial %r did not decode: %s", serial, result.error)
    return result
