"""
Date decoding for xl-tabular.

Spreadsheets store dates as a serial day count from 1900-01-01 (serial 1).
The 1900 date system inherited a bug from Lotus 1-2-3: it treats 1900 as a
leap year, so serial 60 is the non-existent 1900-02-29 and every later
serial is one day ahead of the real calendar. ``decode_serial`` reproduces
that quirk so decoded dates agree with what spreadsheet applications
display.

``decode_components`` builds a date from three numeric fragments whose
order is given by a format tag (``"DD/MM/YYYY"`` etc.).

Both decoders return a ``DateResult`` instead of raising. Callers decide
whether a failure is fatal (``result.unwrap()``) or recoverable.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum

from xl_tabular.exceptions import DateDecodeError

_EPOCH_YEAR = 1900

# Serial 60 is 1900-02-29, a day that never existed.
_FICTITIOUS_LEAP_SERIAL = 60

_MONTHS_WITH_31_DAYS = frozenset({1, 3, 5, 7, 8, 10, 12})
_MONTHS_WITH_30_DAYS = frozenset({4, 6, 9, 11})


class DateParseError(str, Enum):
    """Reasons a date could not be constructed."""

    UnsupportedFormat = "UnsupportedFormat"
    InvalidDay = "InvalidDay"
    InvalidMonth = "InvalidMonth"
    InvalidYear = "InvalidYear"
    InvalidSerialNumber = "InvalidSerialNumber"
    InvalidDate = "InvalidDate"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    DateParseError.UnsupportedFormat: "Unsupported date format",
    DateParseError.InvalidDay: "Invalid day",
    DateParseError.InvalidMonth: "Invalid month",
    DateParseError.InvalidYear: "Invalid year",
    DateParseError.InvalidSerialNumber: "Invalid serial number",
    DateParseError.InvalidDate: "Invalid date",
}


class DateFormat(str, Enum):
    """Supported field orders for ``decode_components``."""

    YMD = "YYYY/MM/DD"
    DMY = "DD/MM/YYYY"
    MDY = "MM/DD/YYYY"


@dataclass(frozen=True)
class Date:
    """A calendar date as decoded from a spreadsheet.

    Unlike ``datetime.date`` this can represent 1900-02-29, which the
    1900 date system encodes as serial 60.

    Raises:
        ValueError: If the fields do not name a real calendar day (the
            fictitious 1900-02-29 excepted).
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if self.is_fictitious:
            return
        if self.year < 1:
            raise ValueError(f"year {self.year} is before year 1")
        if not 1 <= self.month <= 12:
            raise ValueError(f"month {self.month} is not in 1..12")
        last = days_in_month(self.year, self.month)
        if not 1 <= self.day <= last:
            raise ValueError(
                f"day {self.day} is not in 1..{last} for {self.year}-{self.month:02d}"
            )

    @property
    def is_fictitious(self) -> bool:
        """True for the legacy 1900-02-29."""
        return (self.year, self.month, self.day) == (_EPOCH_YEAR, 2, 29)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_date(self) -> dt.date:
        """Convert to ``datetime.date``.

        Raises:
            ValueError: For the fictitious 1900-02-29.
        """
        return dt.date(self.year, self.month, self.day)

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class DateResult:
    """Outcome of a decode: exactly one of ``date`` / ``error`` is set."""

    date: Date | None = None
    error: DateParseError | None = None

    @classmethod
    def success(cls, date: Date) -> DateResult:
        return cls(date=date)

    @classmethod
    def failure(cls, error: DateParseError) -> DateResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Date:
        """Return the date, or raise ``DateDecodeError`` on failure."""
        if self.date is None:
            raise DateDecodeError(self.error or DateParseError.InvalidDate)
        return self.date


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule. 1900 is *not* a leap year here."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(year: int, month: int) -> int:
    """Number of days in *month* of *year*; 0 for an invalid month."""
    if month in _MONTHS_WITH_31_DAYS:
        return 31
    if month in _MONTHS_WITH_30_DAYS:
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 0


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------

def decode_serial(serial: int) -> DateResult:
    """Decode a 1900-date-system serial day number.

    Serial 1 is 1900-01-01 and serial 60 is the fictitious 1900-02-29.
    Serials above 60 are shifted back one day before conversion so that
    61 lands on 1900-03-01.

    Args:
        serial: Whole-day serial number. Time-of-day fractions must be
            truncated by the caller.

    Returns:
        ``DateResult`` holding the date, or ``InvalidSerialNumber`` for
        serials below 1.
    """
    if serial < 1:
        return DateResult.failure(DateParseError.InvalidSerialNumber)
    if serial == _FICTITIOUS_LEAP_SERIAL:
        return DateResult.success(Date(_EPOCH_YEAR, 2, 29))

    corrected = serial - 1 if serial > _FICTITIOUS_LEAP_SERIAL else serial
    remaining = corrected - 1

    year = _EPOCH_YEAR
    while remaining >= days_in_year(year):
        remaining -= days_in_year(year)
        year += 1

    month = 1
    while remaining >= days_in_month(year, month):
        remaining -= days_in_month(year, month)
        month += 1

    day = remaining + 1
    # Unreachable for valid serials; kept as a guard on the walk above.
    if day > days_in_month(year, month):
        return DateResult.failure(DateParseError.InvalidDate)

    return DateResult.success(Date(year, month, day))


def decode_components(
    frag1: int,
    frag2: int,
    frag3: int,
    format: str,
) -> DateResult:
    """Build a date from three numeric fragments.

    The fragments are mapped to ``(year, month, day)`` according to
    *format*, one of ``"YYYY/MM/DD"``, ``"DD/MM/YYYY"`` or
    ``"MM/DD/YYYY"``.

    Validation runs in this order, first failure wins:

    1. day outside 1..31 -> ``InvalidDay``
    2. February day above 29 (leap) / 28 (otherwise) -> ``InvalidDay``
    3. day beyond the month's length, e.g. April 31 -> ``InvalidDay``
    4. month outside 1..12 -> ``InvalidMonth``
    5. year below 1 -> ``InvalidYear``

    Example::

        >>> decode_components(4, 2, 2000, "DD/MM/YYYY").unwrap()
        Date(year=2000, month=2, day=4)
    """
    try:
        order = DateFormat(format)
    except ValueError:
        return DateResult.failure(DateParseError.UnsupportedFormat)

    if order is DateFormat.YMD:
        year, month, day = frag1, frag2, frag3
    elif order is DateFormat.DMY:
        year, month, day = frag3, frag2, frag1
    else:
        year, month, day = frag3, frag1, frag2

    if day >= 32 or day < 1:
        return DateResult.failure(DateParseError.InvalidDay)
    if month == 2:
        limit = 29 if is_leap_year(year) else 28
        if day > limit:
            return DateResult.failure(DateParseError.InvalidDay)
    if 1 <= month <= 12 and day > days_in_month(year, month):
        return DateResult.failure(DateParseError.InvalidDay)
    if not 1 <= month <= 12:
        return DateResult.failure(DateParseError.InvalidMonth)
    if year < 1:
        return DateResult.failure(DateParseError.InvalidYear)

    return DateResult.success(Date(year, month, day))
