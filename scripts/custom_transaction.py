"""
Demo script: parse a statement into a caller-defined transaction type.

Usage:
    python scripts/custom_transaction.py                     # inputs/sample.qfx
    python scripts/custom_transaction.py inputs/sample.csv

``CategorizedTransaction`` implements ``from_parsed`` on top of the
built-in ``Transaction`` conversion and adds a category derived from
the transaction type.
"""

from __future__ import annotations

import logging
import sys
from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel

import bank_statement_ingest
from bank_statement_ingest import ParsedTransaction, Transaction

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("custom_transaction")

DEFAULT_INPUT = "inputs/sample.qfx"

Category = Literal["Expense", "Income", "Other"]

_CATEGORY_BY_TYPE: dict[str, Category] = {
    "DEBIT": "Expense",
    "CREDIT": "Income",
}


class CategorizedTransaction(BaseModel):
    day: date
    merchant: str
    amount: Decimal
    category: Category

    @classmethod
    def from_parsed(cls, parsed: ParsedTransaction) -> CategorizedTransaction:
        tx = Transaction.from_parsed(parsed)
        return cls(
            day=tx.date,
            merchant=tx.payee or "Unknown",
            amount=tx.amount,
            category=_CATEGORY_BY_TYPE.get(tx.transaction_type.upper(), "Other"),
        )


def main() -> int:
    input_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_INPUT
    try:
        transactions = bank_statement_ingest.parse_into(
            CategorizedTransaction, filename=input_path
        )
    except bank_statement_ingest.StatementParseError as exc:
        log.error("FAILED  %s: %s", input_path, exc)
        return 1

    totals: dict[str, Decimal] = {}
    for tx in transactions:
        log.info("  %s  %-7s  %12s  %s", tx.day, tx.category, tx.amount, tx.merchant)
        totals[tx.category] = totals.get(tx.category, Decimal("0")) + tx.amount
    for category, total in sorted(totals.items()):
        log.info("Total %-7s %12s", category, total)
    return 0


if __name__ == "__main__":
    sys.exit(main())
