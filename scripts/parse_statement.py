"""
Demo script: parse a bank statement export via the public API.

Usage:
    python scripts/parse_statement.py                         # all sample inputs
    python scripts/parse_statement.py inputs/sample.qfx       # single file
    python scripts/parse_statement.py export.txt --format csv # skip detection

Each file is detected (unless --format is given), parsed into unified
Transaction records, and the first few transactions are printed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import bank_statement_ingest
from bank_statement_ingest.formats import SupportedFormat

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

INPUT_FILES = [
    "inputs/sample.qfx",
    "inputs/sample_xml.qfx",
    "inputs/sample.csv",
]

PREVIEW_ROWS = 10

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("parse_statement")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "paths",
        nargs="*",
        default=INPUT_FILES,
        help="Statement files to parse (default: the sample inputs)",
    )
    parser.add_argument(
        "--format",
        type=str.lower,
        choices=[f.value for f in SupportedFormat],
        help="Skip detection and parse every file as this format",
    )
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    paths, fmt = args.paths, args.format
    failures = 0

    for input_path in paths:
        if not Path(input_path).exists():
            log.warning("SKIP  %s  (file not found)", input_path)
            continue

        log.info("=" * 70)
        log.info("Processing: %s", input_path)
        log.info("=" * 70)

        try:
            transactions = bank_statement_ingest.parse(filename=input_path, format=fmt)
        except bank_statement_ingest.StatementParseError as exc:
            log.error("FAILED  %s: %s", input_path, exc)
            failures += 1
            continue

        for tx in transactions[:PREVIEW_ROWS]:
            log.info(
                "  %s  %12s  %-8s  %s",
                tx.date.isoformat(),
                tx.amount,
                tx.transaction_type,
                tx.payee or "",
            )
        if len(transactions) > PREVIEW_ROWS:
            log.info("  ... %d more", len(transactions) - PREVIEW_ROWS)
        log.info("Done: %d transaction(s)\n", len(transactions))

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
