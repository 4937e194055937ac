"""
Unit tests for cell diagnostics (xl_tabular.diagnostics).
"""

from __future__ import annotations

import logging

from xl_tabular.diagnostics import (
    CellDiagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    LoggingObserver,
)


def _diag(kind=DiagnosticKind.CELL_ERROR, message="#N/A", position=(0, 1)):
    return CellDiagnostic(kind=kind, message=message, position=position)


class TestLoggingObserver:
    """Tests for LoggingObserver."""

    def test_error_logged_as_warning(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="xl_tabular.diagnostics"):
            LoggingObserver().report(_diag())
        [record] = caplog.records
        assert record.levelno == logging.WARNING
        assert "CELL_ERROR at (0, 1): #N/A" in record.getMessage()

    def test_widening_logged_as_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="xl_tabular.diagnostics"):
            LoggingObserver().report(_diag(kind=DiagnosticKind.INTEGER_WIDENED))
        assert caplog.records[0].levelno == logging.DEBUG

    def test_custom_logger(self, caplog):
        log = logging.getLogger("custom.sink")
        with caplog.at_level(logging.WARNING, logger="custom.sink"):
            LoggingObserver(log).report(_diag(position=None))
        assert caplog.records[0].name == "custom.sink"
        assert "at ?" in caplog.text


class TestDiagnosticCollector:
    """Tests for DiagnosticCollector."""

    def test_collects_in_order(self):
        collector = DiagnosticCollector()
        collector.report(_diag(message="a"))
        collector.report(_diag(kind=DiagnosticKind.PROBE_FAILED, message="b"))
        assert [d.message for d in collector.diagnostics] == ["a", "b"]
        assert len(collector) == 2

    def test_of_kind(self):
        collector = DiagnosticCollector()
        collector.report(_diag())
        collector.report(_diag(kind=DiagnosticKind.PROBE_FAILED))
        assert len(collector.of_kind(DiagnosticKind.PROBE_FAILED)) == 1

    def test_forwarding(self):
        downstream = DiagnosticCollector()
        collector = DiagnosticCollector(forward_to=downstream)
        collector.report(_diag())
        assert len(downstream) == 1

    def test_collectors_do_not_share_state(self):
        first, second = DiagnosticCollector(), DiagnosticCollector()
        first.report(_diag())
        assert len(second) == 0
