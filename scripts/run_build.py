"""
Demo script: read one worksheet via the public API and print the table.

Usage:
    python scripts/run_build.py data/test.xlsx                  # Sheet1, no header
    python scripts/run_build.py data/test.xlsx --sheet Prices --headers
    python scripts/run_build.py data/test.xlsx --config build.yaml --export out/table.csv

Diagnostics for cells that could not be classified are logged and
summarised at the end.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_build")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _option(args: list[str], flag: str) -> str | None:
    """Return the value following *flag* in *args*, if any."""
    if flag in args:
        idx = args.index(flag)
        if idx + 1 < len(args):
            return args[idx + 1]
    return None


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    import xl_tabular
    from xl_tabular.diagnostics import DiagnosticCollector, LoggingObserver

    args = sys.argv[1:]
    if not args or args[0].startswith("--"):
        print(__doc__)
        return 2

    input_path = args[0]
    config_path = _option(args, "--config")
    if config_path is not None:
        options = xl_tabular.load_config(config_path)
    else:
        options = xl_tabular.BuildOptions(
            sheet_name=_option(args, "--sheet") or "Sheet1",
            has_headers="--headers" in args,
        )

    collector = DiagnosticCollector(forward_to=LoggingObserver())
    frame = xl_tabular.SheetFrame(input_path, options, observer=collector)
    table = frame.read()

    if table.header is not None:
        log.info("Header: %s", [c.value for c in table.header])
    for i, row in enumerate(table):
        log.info("Row %d: %s", i, [c.value for c in row])

    log.info(
        "Table '%s': %d rows, max width %d%s",
        table.sheet_name, table.n_rows, table.max_width,
        " (jagged)" if table.is_jagged else "",
    )
    if len(collector):
        log.warning("%d cell diagnostic(s) reported", len(collector))

    export_path = _option(args, "--export")
    if export_path is not None:
        fmt = "csv" if Path(export_path).suffix.lower() == ".csv" else "parquet"
        written = frame.export(export_path, output_format=fmt)
        log.info("Exported to %s", written)

    return 0


if __name__ == "__main__":
    sys.exit(main())
