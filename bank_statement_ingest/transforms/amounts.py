"""
Currency amount parsing for bank-statement-ingest.

Statement exports carry amounts as plain signed decimal strings
(``"-50.00"``, ``"1500.00"``). They are converted to ``decimal.Decimal``
so that the value (and its scale) is exact: ``"-50.00"`` stays
``Decimal("-50.00")`` and prints back as ``"-50.00"``.

Only the plain grammar is accepted:
- optional leading ``+`` / ``-``
- digits, optionally followed by ``.`` and more digits (``.5`` is allowed)
- surrounding whitespace is ignored

Rejected: empty strings, thousands separators (``"1,000.00"``),
currency symbols (``"$100.00"``), exponents, ``NaN`` and ``Infinity``.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from bank_statement_ingest.exceptions import InvalidAmountError

_AMOUNT_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


def parse_amount(raw: str | None) -> Decimal:
    """Parse a raw amount token into an exact ``Decimal``.

    Args:
        raw: The amount text as found in the document.

    Returns:
        The exact decimal value, scale preserved.

    Raises:
        InvalidAmountError: If *raw* is missing or not a plain decimal.
    """
    if raw is None:
        raise InvalidAmountError("")
    token = raw.strip()
    if not _AMOUNT_PATTERN.fullmatch(token):
        raise InvalidAmountError(raw)
    try:
        return Decimal(token)
    except InvalidOperation as exc:
        raise InvalidAmountError(raw) from exc
