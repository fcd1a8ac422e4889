"""
Closed set of statement formats understood by bank-statement-ingest.

Adding a format is a coordinated change in three places:

1. a member here,
2. a parser class registered in ``dispatch._PARSER_MAP``,
3. a transaction model added to ``parsers.ParsedTransaction``.

``tests/unit/test_dispatch.py`` fails if the three drift apart.
"""

from __future__ import annotations

from enum import Enum


class SupportedFormat(str, Enum):
    """Statement formats with a registered parser."""

    QFX = "qfx"
    CSV = "csv"

    @classmethod
    def _missing_(cls, value: object) -> SupportedFormat | None:
        # Accept "QFX", "Csv", ... from config files and CLI flags
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None
