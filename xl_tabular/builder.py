"""
Table builder for xl-tabular.

Runs one linear pass over a 2-D sequence of raw cells and assembles an
immutable ``Table``. For each cell:

1. ``classify`` -- integer / float / text / bool-as-text, or nothing.
2. If nothing, ``classify_date`` -- date/time payloads decoded from their
   serial number. A decode failure is reported and the cell stays empty.
3. The result (possibly ``None``) becomes the ``Cell``.

Row order, column order and each row's length are preserved as given;
short rows are never padded.

The build never fails as a whole. A raw cell whose probes raise is
reported as ``PROBE_FAILED`` and becomes an empty cell.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from xl_tabular.cells import Cell, CellValue, DateValue, Row, Table
from xl_tabular.classify import classify, classify_date
from xl_tabular.config import BuildOptions
from xl_tabular.dates import DateParseError
from xl_tabular.diagnostics import (
    CellDiagnostic,
    CellObserver,
    DiagnosticKind,
    LoggingObserver,
)
from xl_tabular.probes import RawCell

logger = logging.getLogger(__name__)


class TableBuilder:
    """Builds ``Table`` objects from rows of raw cells.

    The builder is stateless: each ``build()`` call starts from scratch
    and returns a new table. ``options.has_headers`` decides whether the
    first row is data or header.
    """

    def __init__(
        self,
        options: BuildOptions | None = None,
        observer: CellObserver | None = None,
    ) -> None:
        self.options = options or BuildOptions()
        self.observer = observer if observer is not None else LoggingObserver()

    def build(self, rows: Iterable[Iterable[RawCell]]) -> Table:
        built: list[Row] = []
        n_cells = 0
        n_empty = 0
        for r, raw_row in enumerate(rows):
            cells = tuple(
                Cell(self._convert(raw, (r, c))) for c, raw in enumerate(raw_row)
            )
            n_cells += len(cells)
            n_empty += sum(1 for cell in cells if cell.is_empty)
            built.append(Row(cells))

        header: Row | None = None
        if self.options.has_headers and built:
            header, built = built[0], built[1:]

        logger.info(
            "Built table '%s': %d rows, %d cells (%d empty)%s",
            self.options.sheet_name,
            len(built),
            n_cells,
            n_empty,
            ", header split off" if header is not None else "",
        )
        return Table(
            rows=tuple(built),
            header=header,
            sheet_name=self.options.sheet_name,
        )

    # -- Per-cell conversion ------------------------------------------------

    def _convert(self, raw: RawCell, position: tuple[int, int]) -> CellValue | None:
        try:
            value = classify(
                raw,
                wide_integers=self.options.wide_integers,
                observer=self.observer,
                position=position,
            )
            if value is not None:
                return value

            result = classify_date(raw)
            if result is None:
                if not raw.is_empty() and raw.get_error() is None:
                    self._report(
                        DiagnosticKind.UNCLASSIFIED, f"no probe matched {raw!r}", position
                    )
                return None
            if result.date is None:
                error = result.error or DateParseError.InvalidDate
                self._report(DiagnosticKind.DATE_DECODE_FAILED, error.message, position)
                return None
            return DateValue(result.date)
        except Exception as exc:
            self._report(
                DiagnosticKind.PROBE_FAILED, f"{type(exc).__name__}: {exc}", position
            )
            return None

    def _report(
        self, kind: DiagnosticKind, message: str, position: tuple[int, int]
    ) -> None:
        self.observer.report(
            CellDiagnostic(kind=kind, message=message, position=position)
        )


def build_table(
    rows: Iterable[Iterable[RawCell]],
    options: BuildOptions | None = None,
    observer: CellObserver | None = None,
) -> Table:
    """Build a ``Table`` from rows of raw cells.

    Args:
        rows: Rows in source order; each row is an iterable of raw cells.
            Rows may have different lengths.
        options: Build options (defaults: ``Sheet1``, no header,
            wide integers kept as text).
        observer: Receives per-cell diagnostics. Defaults to a
            ``LoggingObserver``.

    Returns:
        The built ``Table``. Never raises because of cell contents.
    """
    return TableBuilder(options, observer).build(rows)
