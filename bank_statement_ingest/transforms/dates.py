"""
Encoded posting dates for bank-statement-ingest.

Parsers never resolve dates themselves. They wrap the raw text in a
format-specific value object (``QfxDate`` / ``CsvDate``) and the
conversion step calls ``to_date()`` later. This keeps a malformed date
(a data-quality problem, ``DateResolutionError``) distinguishable from
a malformed document (``ParsingError``).

QFX dates look like ``YYYYMMDD[HHMMSS][.XXX][[offset:TZ]]``, e.g.
``20251226120000.000[-5:EST]``. Only the ``YYYYMMDD`` prefix is used.

CSV dates are locale-ambiguous. Patterns are tried in a fixed order,
first match wins:
  1. ``YYYY-MM-DD``
  2. ``DD/MM/YYYY``
  3. ``MM/DD/YYYY``
so ``03/04/2025`` is 3 April, while ``12/26/2025`` falls through to
the US pattern and is 26 December.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from pydantic import ConfigDict, RootModel

from bank_statement_ingest.exceptions import CsvDateError, QfxDateError

# Timezone bracket or fractional seconds end the significant part
_QFX_SUFFIX = re.compile(r"[\[.]")

_CSV_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%m/%d/%Y")


def _is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def parse_qfx_date(raw: str) -> date:
    """Resolve a QFX ``DTPOSTED`` style token to a calendar date.

    Raises:
        QfxDateError: If fewer than 8 significant characters remain, the
            prefix is not numeric, or it is not a real calendar date.
    """
    clean = _QFX_SUFFIX.split(raw, maxsplit=1)[0].strip()
    if len(clean) < 8:
        raise QfxDateError(raw)

    year, month, day = clean[0:4], clean[4:6], clean[6:8]
    if not (_is_ascii_digits(year) and _is_ascii_digits(month) and _is_ascii_digits(day)):
        raise QfxDateError(raw)

    try:
        return date(int(year), int(month), int(day))
    except ValueError as exc:
        raise QfxDateError(raw) from exc


def parse_csv_date(raw: str) -> date:
    """Resolve a CSV date string using the fallback pattern order.

    Raises:
        CsvDateError: If the text matches none of the accepted patterns.
    """
    text = raw.strip()
    for fmt in _CSV_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise CsvDateError(raw)


class QfxDate(RootModel[str]):
    """Unresolved QFX date token, kept verbatim from the document."""

    model_config = ConfigDict(frozen=True)

    def to_date(self) -> date:
        return parse_qfx_date(self.root)

    def __str__(self) -> str:
        return self.root


class CsvDate(RootModel[str]):
    """Unresolved CSV date string, kept verbatim from the document."""

    model_config = ConfigDict(frozen=True)

    def to_date(self) -> date:
        return parse_csv_date(self.root)

    def __str__(self) -> str:
        return self.root
