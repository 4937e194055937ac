"""
Per-cell observability for xl-tabular.

Cells that cannot be classified become empty cells rather than errors.
What happened to them is reported through a ``CellObserver`` that the
caller passes in; there is no module-level registry or global switch.

- ``LoggingObserver`` (the default) writes each event to the
  ``xl_tabular.diagnostics`` logger.
- ``DiagnosticCollector`` keeps events in memory for inspection, and can
  forward them to another observer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """Stable codes for cell-level events."""

    CELL_ERROR = "CELL_ERROR"
    INTEGER_OUT_OF_RANGE = "INTEGER_OUT_OF_RANGE"
    INTEGER_WIDENED = "INTEGER_WIDENED"
    DATE_DECODE_FAILED = "DATE_DECODE_FAILED"
    PROBE_FAILED = "PROBE_FAILED"
    UNCLASSIFIED = "UNCLASSIFIED"


# Widening keeps the data, so it is only worth a debug line.
_LEVELS = {
    DiagnosticKind.INTEGER_WIDENED: logging.DEBUG,
    DiagnosticKind.UNCLASSIFIED: logging.DEBUG,
}


@dataclass(frozen=True)
class CellDiagnostic:
    """One reported event.

    Attributes:
        kind: What happened.
        message: Human-readable detail (error payload, decode error, ...).
        position: ``(row, col)`` in the source, 0-based, when known.
    """

    kind: DiagnosticKind
    message: str
    position: tuple[int, int] | None = None

    @property
    def level(self) -> int:
        return _LEVELS.get(self.kind, logging.WARNING)


class CellObserver(Protocol):
    def report(self, diagnostic: CellDiagnostic) -> None: ...


class LoggingObserver:
    """Log every diagnostic at a level chosen by its kind."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def report(self, diagnostic: CellDiagnostic) -> None:
        self._log.log(
            diagnostic.level,
            "%s at %s: %s",
            diagnostic.kind.value,
            diagnostic.position if diagnostic.position is not None else "?",
            diagnostic.message,
        )


@dataclass
class DiagnosticCollector:
    """Collect diagnostics in memory, optionally forwarding them."""

    forward_to: CellObserver | None = None
    diagnostics: list[CellDiagnostic] = field(default_factory=list)

    def report(self, diagnostic: CellDiagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.forward_to is not None:
            self.forward_to.report(diagnostic)

    def of_kind(self, kind: DiagnosticKind) -> list[CellDiagnostic]:
        return [d for d in self.diagnostics if d.kind is kind]

    def __len__(self) -> int:
        return len(self.diagnostics)
