"""
Parsers sub-package for bank-statement-ingest.

Contains format-specific parsers that turn a decoded statement document
into format-specific transaction models.

Design: Strategy Pattern
- base.py defines the BaseParser ABC (is_supported + parse).
- qfx.py implements QfxParser (OFX/QFX, XML or SGML) -> QfxTransaction.
- csv.py implements CsvParser (header-driven CSV) -> CsvTransaction.
- sgml.py is the SGML -> XML normalizer used only by QfxParser.

``ParsedTransaction`` is the tagged union of the per-format models,
discriminated by their ``format`` field. It mirrors ``SupportedFormat``
one-to-one.

The dispatcher (dispatch.py) selects the appropriate parser at runtime.
"""

from __future__ import annotations

from typing import Annotated, Union

from pydantic import Field

from bank_statement_ingest.parsers.csv import CsvTransaction
from bank_statement_ingest.parsers.qfx import QfxTransaction

ParsedTransaction = Annotated[
    Union[QfxTransaction, CsvTransaction],
    Field(discriminator="format"),
]

__all__ = ["ParsedTransaction", "QfxTransaction", "CsvTransaction"]
