"""
export_tokens.py
================
Run the full formatting pipeline over one or more scripts and write, per
script, a JSON dump of the token stream, the function table and the
diagnostics to ``outputs/tokens/<source-stem>.json``.

Useful for checking what the two passes actually see after macro
substitution.

Usage
-----
    python scripts/export_tokens.py \\
        --sources tests/fixtures/sample.sql tests/fixtures/unterminated.sql \\
        --output-dir outputs/tokens
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Allow running from the repo root without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlscript_parser.pipeline.script_analysis import ScriptAnalysis


def export(source: str, output_dir: Path, directive: str) -> None:
    analysis = ScriptAnalysis(directive=directive)
    result = analysis.format_file(source)

    payload = {
        "source": source,
        "tokens": [t.to_dict() for t in result.tokens],
        "functions": result.table.to_dict(),
        "diagnostics": [d.to_dict() for d in result.diagnostics],
    }
    out_file = output_dir / f"{Path(source).stem}.json"
    out_file.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"  wrote {out_file} ({len(result.tokens)} tokens)")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Export the token stream and function table of scripts as JSON"
    )
    parser.add_argument("--sources", nargs="+", required=True, metavar="FILE")
    parser.add_argument("--directive", default="#define", metavar="MARKER")
    parser.add_argument(
        "--output-dir", "-o", default="outputs/tokens", metavar="DIR"
    )
    args = parser.parse_args()

    out = Path(args.output_dir)
    out.mkdir(parents=True, exist_ok=True)

    for src in args.sources:
        print(f"\n=== {src} ===")
        export(src, out, args.directive)


if __name__ == "__main__":
    main()
