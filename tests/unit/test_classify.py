"""
Unit tests for cell classification (xl_tabular.classify).

Covers the probe priority order, the wide-integer policy and the date
fallback, using ValueCell plus a hand-written stub cell.
"""

from __future__ import annotations

import datetime as dt

import numpy as np
import pytest

from xl_tabular.cells import DateValue, FloatValue, IntegerValue, TextValue
from xl_tabular.classify import classify, classify_date
from xl_tabular.dates import Date, DateParseError
from xl_tabular.diagnostics import DiagnosticCollector, DiagnosticKind
from xl_tabular.probes import CellError, ValueCell


class _StubCell:
    """Raw cell stub answering every probe from constructor arguments."""

    def __init__(self, *, int_=None, float_=None, string=None, bool_=None,
                 empty=False, error=None, serial=None):
        self._int, self._float, self._string = int_, float_, string
        self._bool, self._empty, self._error = bool_, empty, error
        self._serial = serial

    def get_int(self):
        return self._int

    def get_float(self):
        return self._float

    def get_string(self):
        return self._string

    def get_bool(self):
        return self._bool

    def is_empty(self):
        return self._empty

    def get_error(self):
        return self._error

    def get_datetime_serial(self):
        return self._serial


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

class TestClassify:
    """Tests for classify()."""

    def test_integer(self):
        assert classify(ValueCell(5)) == IntegerValue(5)

    def test_numpy_scalars_from_pandas_rows(self):
        collector = DiagnosticCollector()
        assert classify(ValueCell(np.int64(7)), observer=collector) == IntegerValue(7)
        assert classify(ValueCell(np.float64(0.25)), observer=collector) == FloatValue(0.25)
        assert len(collector) == 0

    def test_float(self):
        assert classify(ValueCell(5.5)) == FloatValue(5.5)

    def test_text(self):
        assert classify(ValueCell("hi")) == TextValue("hi")

    def test_empty_string_is_text(self):
        assert classify(ValueCell("")) == TextValue("")

    def test_bool_rendered_as_text(self):
        assert classify(ValueCell(True)) == TextValue("true")
        assert classify(ValueCell(False)) == TextValue("false")

    def test_empty(self):
        assert classify(ValueCell(None)) is None

    def test_int32_bounds(self):
        assert classify(ValueCell(2**31 - 1)) == IntegerValue(2**31 - 1)
        assert classify(ValueCell(-(2**31))) == IntegerValue(-(2**31))

    def test_integer_wins_over_float(self):
        assert classify(_StubCell(int_=3, float_=3.0)) == IntegerValue(3)

    def test_float_wins_over_string(self):
        assert classify(_StubCell(float_=1.5, string="1.5")) == FloatValue(1.5)

    def test_string_wins_over_bool(self):
        assert classify(_StubCell(string="yes", bool_=True)) == TextValue("yes")

    def test_empty_wins_over_error(self):
        collector = DiagnosticCollector()
        assert classify(_StubCell(empty=True, error="#N/A"), observer=collector) is None
        assert len(collector) == 0

    def test_error_reported(self):
        collector = DiagnosticCollector()
        result = classify(ValueCell(CellError("#DIV/0!")), observer=collector, position=(2, 3))
        assert result is None
        [diag] = collector.diagnostics
        assert diag.kind is DiagnosticKind.CELL_ERROR
        assert diag.message == "#DIV/0!"
        assert diag.position == (2, 3)

    def test_error_without_observer(self):
        assert classify(ValueCell("#REF!")) is None

    def test_date_cell_is_left_to_fallback(self):
        assert classify(ValueCell(dt.datetime(2024, 1, 1))) is None

    def test_nothing_matches(self):
        assert classify(_StubCell()) is None


class TestWideIntegers:
    """Tests for integers outside the 32-bit range."""

    big = 2**40

    def test_text_policy_is_default(self):
        collector = DiagnosticCollector()
        assert classify(ValueCell(self.big), observer=collector) == TextValue("1099511627776")
        assert collector.of_kind(DiagnosticKind.INTEGER_WIDENED)

    def test_float_policy(self):
        assert classify(ValueCell(self.big), wide_integers="float") == FloatValue(float(self.big))

    def test_drop_policy(self):
        collector = DiagnosticCollector()
        assert classify(ValueCell(-self.big), wide_integers="drop", observer=collector) is None
        [diag] = collector.diagnostics
        assert diag.kind is DiagnosticKind.INTEGER_OUT_OF_RANGE

    def test_just_past_int32_max(self):
        assert classify(ValueCell(2**31)) == TextValue("2147483648")

    def test_out_of_range_does_not_fall_through_to_float_probe(self):
        """The integer probe matched, so the policy decides, not later probes."""
        assert classify(_StubCell(int_=self.big, float_=1.0), wide_integers="drop") is None


# ---------------------------------------------------------------------------
# classify_date
# ---------------------------------------------------------------------------

class TestClassifyDate:
    """Tests for classify_date()."""

    def test_datetime(self):
        result = classify_date(ValueCell(dt.datetime(2024, 1, 1, 18, 0)))
        assert result is not None
        assert result.unwrap() == Date(2024, 1, 1)

    def test_serial_is_truncated(self):
        assert classify_date(_StubCell(serial=61.99)).unwrap() == Date(1900, 3, 1)

    def test_not_a_date(self):
        assert classify_date(ValueCell("2024-01-01")) is None
        assert classify_date(ValueCell(None)) is None

    def test_time_only_fails_explicitly(self):
        result = classify_date(ValueCell(dt.time(9, 30)))
        assert result is not None
        assert result.error is DateParseError.InvalidSerialNumber

    def test_negative_serial(self):
        assert classify_date(_StubCell(serial=-5.0)).error is DateParseError.InvalidSerialNumber

    def test_result_wraps_into_date_value(self):
        result = classify_date(_StubCell(serial=60.0))
        assert DateValue(result.unwrap()).value.is_fictitious

    @pytest.mark.parametrize("serial", [1.0, 59.0, 45292.0])
    def test_whole_serials(self, serial):
        assert classify_date(_StubCell(serial=serial)).ok
