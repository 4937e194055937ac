"""
Custom exception hierarchy for xl-tabular.

Exceptions are reserved for the I/O and configuration edges. The date
decoders never raise: they return a ``DateResult`` and only
``DateResult.unwrap()`` converts a failure into ``DateDecodeError``.
Likewise, a bad cell never raises out of the table builder; it degrades
to an empty cell and is reported to the observer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xl_tabular.dates import DateParseError


class XlTabularError(Exception):
    """Base exception for all xl-tabular errors."""


class DateDecodeError(XlTabularError):
    """Raised by ``DateResult.unwrap()`` when the decode failed.

    The underlying ``DateParseError`` is available as ``.error``.
    """

    def __init__(self, error: DateParseError) -> None:
        super().__init__(error.message)
        self.error = error


class SourceReadError(XlTabularError):
    """Raised when a workbook cannot be opened or read.

    A missing worksheet is *not* an error: the reader yields no rows.
    """


class ConfigValidationError(XlTabularError):
    """Raised when a build config file is empty or malformed."""


class ExportError(XlTabularError):
    """Raised when the exporter fails to write output files.

    For example, permission errors, disk full, or unsupported format.
    """
