"""
Format dispatcher for bank-statement-ingest.

Routes a document to the parser registered for its ``SupportedFormat``
and, optionally, converts the parsed transactions into a caller-chosen
type.

- parse_raw(fmt, content) -> list[ParsedTransaction]
- parse_into(fmt, content, target) -> list[target]

``parse_into`` is fail-fast: the first parse or conversion error aborts
the whole batch, so a caller either gets every transaction of the
document or an exception.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from bank_statement_ingest.formats import SupportedFormat
from bank_statement_ingest.parsers import ParsedTransaction
from bank_statement_ingest.parsers.base import BaseParser
from bank_statement_ingest.parsers.csv import CsvParser
from bank_statement_ingest.parsers.qfx import QfxParser
from bank_statement_ingest.signature_registry import load_all_signatures
from bank_statement_ingest.transaction import FromParsed, Transaction, convert_all

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=FromParsed)

# One parser per SupportedFormat member
_PARSER_MAP: dict[SupportedFormat, type[BaseParser]] = {
    SupportedFormat.QFX: QfxParser,
    SupportedFormat.CSV: CsvParser,
}


def get_parser(fmt: SupportedFormat | str) -> BaseParser:
    """Instantiate the parser registered for *fmt*.

    Raises:
        ValueError: If *fmt* is not a ``SupportedFormat`` value.
    """
    fmt = SupportedFormat(fmt)
    return _PARSER_MAP[fmt]()


def get_parsers(signatures_dir: Path | None = None) -> list[BaseParser]:
    """One parser per loadable signature, in detection priority order.

    Args:
        signatures_dir: Directory of signature YAML files. Defaults to
            the built-in signatures/ directory.
    """
    parsers = [
        _PARSER_MAP[signature.format_name](signature=signature)
        for signature in load_all_signatures(signatures_dir)
    ]
    logger.debug("Detection order: %s", [p.format.value for p in parsers])
    return parsers


def parse_raw(fmt: SupportedFormat | str, content: str) -> list[ParsedTransaction]:
    """Parse *content* with the parser for *fmt*.

    Returns:
        Format-specific transactions (``QfxTransaction`` or
        ``CsvTransaction``) in document order.

    Raises:
        ParsingError: If the document is malformed.
    """
    parser = get_parser(fmt)
    logger.debug("Parsing %d chars as %s", len(content), parser.format.value)
    return parser.parse(content)


def parse_into(
    fmt: SupportedFormat | str,
    content: str,
    target: type[T] = Transaction,
) -> list[T]:
    """Parse *content* and convert every transaction into *target*.

    Args:
        fmt: The statement format.
        content: The full decoded document.
        target: Output class implementing ``from_parsed``. Defaults to
            the unified ``Transaction``.

    Raises:
        ParsingError: If the document is malformed.
        DateResolutionError: If a posting date cannot be resolved.
    """
    return convert_all(parse_raw(fmt, content), target)
