"""
bank-statement-ingest: Python library for parsing bank statement exports.

Supported formats: QFX/OFX (XML or legacy SGML) and header-driven CSV.

Public API surface:

- ``parse(content=..., filename=..., format=...)`` -- **recommended entry
  point**. Detects the format (unless given), parses the document and
  returns unified ``Transaction`` records in document order.

- ``parse_into(target, ...)`` -- Same, but converts every transaction
  into a caller-defined type implementing ``from_parsed``.

- ``detect_format(filename, content)`` -- Detection only.

- ``to_dataframe(transactions)`` -- pandas view of converted records.

Every call is all-or-nothing: the first malformed element aborts the
parse with a ``StatementParseError`` subclass.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from bank_statement_ingest.config import ParseRequest
from bank_statement_ingest.detect import detect_format
from bank_statement_ingest.exceptions import (
    ContentReadError,
    CsvDateError,
    DateResolutionError,
    InvalidAmountError,
    MissingInputError,
    ParsingError,
    QfxDateError,
    SignatureError,
    StatementParseError,
    UnsupportedFormatError,
)
from bank_statement_ingest.formats import SupportedFormat
from bank_statement_ingest.frame import to_dataframe
from bank_statement_ingest.parsers import CsvTransaction, ParsedTransaction, QfxTransaction
from bank_statement_ingest.transaction import FromParsed, Transaction

__all__ = [
    "parse",
    "parse_into",
    "detect_format",
    "to_dataframe",
    "ParseRequest",
    "SupportedFormat",
    "Transaction",
    "FromParsed",
    "ParsedTransaction",
    "QfxTransaction",
    "CsvTransaction",
    "StatementParseError",
    "UnsupportedFormatError",
    "ParsingError",
    "InvalidAmountError",
    "DateResolutionError",
    "QfxDateError",
    "CsvDateError",
    "MissingInputError",
    "ContentReadError",
    "SignatureError",
]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=FromParsed)


def parse(
    content: str | None = None,
    filename: str | None = None,
    format: SupportedFormat | str | None = None,
) -> list[Transaction]:
    """Parse a bank statement into unified ``Transaction`` records.

    Args:
        content: The decoded document. If ``None``, *filename* is read
            from disk (UTF-8).
        filename: Filename hint for detection, and the path to read when
            *content* is not given.
        format: Explicit format (``"qfx"`` / ``"csv"``); skips detection.

    Returns:
        Transactions in document order.

    Raises:
        UnsupportedFormatError: If no format could be detected.
        MissingInputError: If a format was given but no content or file.
        ContentReadError: If *filename* could not be read.
        ParsingError: If the document is malformed.
        DateResolutionError: If a posting date is invalid.

    Examples::

        txs = bank_statement_ingest.parse(filename="inputs/sample.qfx")

        txs = bank_statement_ingest.parse(content=text, format="csv")
    """
    return parse_into(Transaction, content=content, filename=filename, format=format)


def parse_into(
    target: type[T],
    content: str | None = None,
    filename: str | None = None,
    format: SupportedFormat | str | None = None,
) -> list[T]:
    """Parse a bank statement and convert each transaction into *target*.

    *target* must provide ``from_parsed(parsed) -> target``; see
    ``transaction.py`` for the contract. Arguments and errors are those
    of ``parse()``, plus whatever *target* raises.
    """
    request = ParseRequest(format=format, filename=filename, content=content)
    transactions = request.parse_into(target)
    logger.info("parse_into() -- %d transaction(s)", len(transactions))
    return transactions
