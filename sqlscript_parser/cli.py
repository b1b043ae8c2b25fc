"""
SQL Script Parser – command-line interface
==========================================

Usage
-----
::

    python -m sqlscript_parser.cli SOURCE [OPTIONS]

Writes the formatted, diagnostic-annotated script to ``SOURCE.formatted``.

Options
-------
--table-log FILE    Write the function table and diagnostics to FILE as JSON.
--verbose, -v       Enable DEBUG logging.

Examples
--------
::

    python -m sqlscript_parser.cli script.sql
    python -m sqlscript_parser.cli script.sql --table-log table.json -v
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .models import FormatResult
from .pipeline.script_analysis import ScriptAnalysis


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sqlscript_parser",
        description="SQL Script Parser – preprocess, format and validate a script",
    )
    p.add_argument("source", help="Script file to format")
    p.add_argument(
        "--table-log",
        default="",
        metavar="FILE",
        help="Write the function table and diagnostics to FILE as JSON",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    analysis = ScriptAnalysis()

    try:
        result = analysis.format_file(args.source)
    except OSError:
        print(f"Error: Cannot open file {args.source}", file=sys.stderr)
        return 1

    if args.table_log:
        try:
            _write_table_log(result, args.table_log)
        except OSError:
            print(f"Error: Cannot write to file {args.table_log}", file=sys.stderr)
            return 1

    output_path = analysis.output_path_for(args.source)
    try:
        output_path.write_text(result.text, encoding="utf-8")
    except OSError:
        print(f"Error: Cannot write to file {output_path}", file=sys.stderr)
        return 1

    _report_diagnostics(result)

    print(f"Formatted and validated code written to {output_path}")
    return 0


# ---------------------------------------------------------------------------
# Helpers: JSON table log + diagnostic summary on stderr
# ---------------------------------------------------------------------------

def _write_table_log(result: FormatResult, log_file: str) -> None:
    """Write the function table and diagnostics to *log_file* as JSON."""
    Path(log_file).write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
    print(f"  Function table written to: {log_file}", file=sys.stderr)


def _report_diagnostics(result: FormatResult) -> None:
    """Print a diagnostic summary to stderr."""
    diagnostics = result.diagnostics
    if not diagnostics:
        return

    print(
        f"\nWARNING: {len(diagnostics)} diagnostic{'' if len(diagnostics) == 1 else 's'}"
        f" in {result.source_name} (inlined in the formatted output):",
        file=sys.stderr,
    )
    for d in diagnostics:
        print(f"  {d}", file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
