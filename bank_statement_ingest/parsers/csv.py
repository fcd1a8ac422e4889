"""
CSV parser for bank-statement-ingest.

Handles a simple header-driven export:

  Date,Type,Description,Amount,FITID,Memo
  2025-12-26,DEBIT,Coffee Shop,-50.00,202512260,Morning coffee

Columns are matched by header name, so their order does not matter.
Date, Type and Amount are required; Description, FITID and Memo may be
absent entirely or left empty per row.

Rows are read with pandas as raw strings (no NA or numeric coercion),
then each row is validated: Amount must be an exact decimal (a bad
value fails the whole parse) and Date is kept as an unresolved
``CsvDate``. Row order is preserved and no row is skipped.
"""

from __future__ import annotations

import io
import logging
from decimal import Decimal
from typing import Any, ClassVar, Literal

import pandas as pd
from pydantic import BaseModel, ConfigDict

from bank_statement_ingest.exceptions import ParsingError
from bank_statement_ingest.formats import SupportedFormat
from bank_statement_ingest.parsers.base import BaseParser
from bank_statement_ingest.signature_registry import FormatSignature
from bank_statement_ingest.transforms.amounts import parse_amount
from bank_statement_ingest.transforms.dates import CsvDate

logger = logging.getLogger(__name__)

_REQUIRED_COLUMNS = ["Date", "Type", "Amount"]


class CsvTransaction(BaseModel):
    """One CSV row, amount validated, date still encoded."""

    model_config = ConfigDict(frozen=True)

    format: Literal[SupportedFormat.CSV] = SupportedFormat.CSV
    date: CsvDate
    trn_type: str
    description: str | None = None
    amount: Decimal
    fitid: str | None = None
    memo: str | None = None


def _cell(row: dict[str, Any], column: str) -> str | None:
    """Raw cell text, or None if the column is absent."""
    value = row.get(column)
    return value if isinstance(value, str) else None


def _optional(row: dict[str, Any], column: str) -> str | None:
    value = _cell(row, column)
    return value if value else None


def _required(row: dict[str, Any], column: str, row_no: int) -> str:
    value = _cell(row, column)
    if value is None:
        raise ParsingError(f"CSV deserialize error: row {row_no} has no value for '{column}'")
    return value


class CsvParser(BaseParser[CsvTransaction]):
    """Parser for header-driven CSV statement exports."""

    format: ClassVar[SupportedFormat] = SupportedFormat.CSV

    def __init__(
        self,
        signature: FormatSignature | None = None,
        delimiter: str | None = None,
    ) -> None:
        super().__init__(signature)
        self.delimiter = delimiter or self.signature.delimiter

    def is_supported(self, filename: str | None, content: str) -> bool:
        first_line = content.split("\n", 1)[0]
        looks_like_csv = all(
            token in first_line for token in self.signature.detection.header_tokens
        )
        if filename is not None:
            # The extension only counts together with the expected header
            return self.signature.matches_extension(filename) and looks_like_csv
        return looks_like_csv

    def parse(self, content: str) -> list[CsvTransaction]:
        text = content.lstrip("\ufeff")
        if not text.strip():
            raise ParsingError("CSV deserialize error: document is empty")

        try:
            # header=None: pandas then rejects rows wider than the header line
            raw = pd.read_csv(
                io.StringIO(text),
                sep=self.delimiter,
                header=None,
                dtype=str,
                keep_default_na=False,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise ParsingError(f"CSV deserialize error: {exc}") from exc

        df = raw.iloc[1:].reset_index(drop=True)
        df.columns = [str(c).strip() for c in raw.iloc[0]]
        duplicated = sorted(set(df.columns[df.columns.duplicated()]))
        if duplicated:
            raise ParsingError(f"CSV deserialize error: duplicate column(s) {duplicated}")

        # Only missing fields are NaN (keep_default_na=False)
        short = df.isna().any(axis=1)
        if short.any():
            row_no = int(short.idxmax()) + 1
            raise ParsingError(
                f"CSV deserialize error: row {row_no} has fewer fields than the header"
            )

        missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ParsingError(
                f"CSV deserialize error: missing column(s) {missing}. "
                f"Columns: {list(df.columns)}"
            )

        transactions: list[CsvTransaction] = []
        for row_no, row in enumerate(df.to_dict("records"), start=1):
            transactions.append(
                CsvTransaction(
                    date=CsvDate(_required(row, "Date", row_no)),
                    trn_type=_required(row, "Type", row_no),
                    description=_optional(row, "Description"),
                    amount=parse_amount(_required(row, "Amount", row_no)),
                    fitid=_optional(row, "FITID"),
                    memo=_optional(row, "Memo"),
                )
            )

        logger.info("Parsed %d CSV transaction(s)", len(transactions))
        return transactions
