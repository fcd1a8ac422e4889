"""
Unified transaction record and the conversion contract.

Any output type can receive parsed statements as long as it provides a
``from_parsed`` classmethod that builds one instance from one
``ParsedTransaction`` (a ``QfxTransaction`` or a ``CsvTransaction``) and
raises a ``StatementParseError`` subclass when it cannot. That is the
``FromParsed`` protocol; ``Transaction`` is the built-in implementation.

A custom target looks like::

    class Expense(BaseModel):
        day: date
        cents: int

        @classmethod
        def from_parsed(cls, parsed: ParsedTransaction) -> Expense:
            unified = Transaction.from_parsed(parsed)
            return cls(day=unified.date, cents=int(unified.amount * 100))

    expenses = bank_statement_ingest.parse_into(Expense, content=text)

``convert_all`` applies a target's conversion to a whole batch and stops
at the first failure; no transaction is ever silently dropped.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict

from bank_statement_ingest.parsers import CsvTransaction, ParsedTransaction, QfxTransaction

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="FromParsed")


@runtime_checkable
class FromParsed(Protocol):
    """Anything constructible from a parsed transaction, fallibly."""

    @classmethod
    def from_parsed(cls: type[T], parsed: ParsedTransaction) -> T: ...


class Transaction(BaseModel):
    """The canonical transaction record.

    Attributes:
        date: Posting date.
        amount: Signed exact amount (negative = money out).
        payee: Counterparty (QFX NAME, CSV Description).
        transaction_type: Type code as given, e.g. "DEBIT" / "CREDIT".
        fitid: Institution-assigned transaction id.
        status: Always None; no supported format carries a status.
        memo: Free-text memo.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    amount: Decimal
    payee: str | None = None
    transaction_type: str
    fitid: str | None = None
    status: str | None = None
    memo: str | None = None

    @classmethod
    def from_parsed(cls, parsed: ParsedTransaction) -> Transaction:
        """Build a Transaction from either parsed variant.

        Raises:
            QfxDateError / CsvDateError: If the posting date is invalid.
        """
        if isinstance(parsed, QfxTransaction):
            return cls.from_qfx(parsed)
        if isinstance(parsed, CsvTransaction):
            return cls.from_csv(parsed)
        raise TypeError(f"Unsupported parsed transaction type: {type(parsed).__name__}")

    @classmethod
    def from_qfx(cls, qfx: QfxTransaction) -> Transaction:
        return cls(
            date=qfx.dt_posted.to_date(),
            amount=qfx.amount,
            payee=qfx.name,
            transaction_type=qfx.trn_type,
            fitid=qfx.fitid,
            status=None,
            memo=qfx.memo,
        )

    @classmethod
    def from_csv(cls, row: CsvTransaction) -> Transaction:
        return cls(
            date=row.date.to_date(),
            amount=row.amount,
            payee=row.description,
            transaction_type=row.trn_type,
            fitid=row.fitid,
            status=None,
            memo=row.memo,
        )


def convert_all(parsed: Iterable[ParsedTransaction], target: type[T]) -> list[T]:
    """Convert every parsed transaction into *target*, fail-fast.

    Args:
        parsed: Parsed transactions in document order.
        target: A class implementing ``from_parsed``.

    Returns:
        Converted records, same order and length as *parsed*.

    Raises:
        TypeError: If *target* does not implement ``from_parsed``.
        StatementParseError: The first conversion error, unchanged.
    """
    if not callable(getattr(target, "from_parsed", None)):
        raise TypeError(
            f"{getattr(target, '__name__', target)!r} does not implement from_parsed()"
        )
    converted = [target.from_parsed(item) for item in parsed]
    logger.debug("Converted %d transaction(s) to %s", len(converted), target.__name__)
    return converted
