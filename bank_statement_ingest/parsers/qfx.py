"""
QFX / OFX parser for bank-statement-ingest.

Handles both serializations seen in the wild:
- XML (OFX 2.x): starts with an ``<?xml`` prologue, every tag closed.
- SGML (OFX 1.x): ``OFXHEADER:`` header block, leaf tags left open.
  These are rewritten to XML by ``parsers.sgml`` first.

Structure extracted (everything else in the document is ignored):

  OFX
  +-- BANKMSGSRSV1 / STMTTRNRS / STMTRS / BANKTRANLIST / STMTTRN*
  +-- CREDITCARDMSGSRSV1 / CCSTMTTRNRS / CCSTMTRS / BANKTRANLIST / STMTTRN*

Every level below the message block may repeat (several STMTTRNRS for
several accounts); all of them are read, in document order.

Each STMTTRN becomes a ``QfxTransaction``. TRNAMT is parsed to an exact
``Decimal`` here (a bad amount fails the whole parse); DTPOSTED is kept
as an unresolved ``QfxDate``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from decimal import Decimal
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict

from bank_statement_ingest.exceptions import ParsingError
from bank_statement_ingest.formats import SupportedFormat
from bank_statement_ingest.parsers.base import BaseParser
from bank_statement_ingest.parsers.sgml import convert_sgml_to_xml
from bank_statement_ingest.transforms.amounts import parse_amount
from bank_statement_ingest.transforms.dates import QfxDate

logger = logging.getLogger(__name__)

_OFX_OPEN = "<OFX>"
_OFX_CLOSE = "</OFX>"

# Message paths from the OFX root down to the transaction list
_BANK_PATH = ("BANKMSGSRSV1", "STMTTRNRS", "STMTRS", "BANKTRANLIST")
_CREDIT_CARD_PATH = ("CREDITCARDMSGSRSV1", "CCSTMTTRNRS", "CCSTMTRS", "BANKTRANLIST")


class QfxTransaction(BaseModel):
    """One STMTTRN element, amount validated, date still encoded."""

    model_config = ConfigDict(frozen=True)

    format: Literal[SupportedFormat.QFX] = SupportedFormat.QFX
    trn_type: str
    dt_posted: QfxDate
    amount: Decimal
    fitid: str | None = None
    name: str | None = None
    memo: str | None = None


def _text(parent: ET.Element, tag: str) -> str | None:
    """Stripped text of a direct child, or None if absent or empty."""
    el = parent.find(tag)
    if el is None or el.text is None:
        return None
    text = el.text.strip()
    return text or None


def _required_text(parent: ET.Element, tag: str, index: int) -> str:
    el = parent.find(tag)
    if el is None:
        raise ParsingError(f"STMTTRN #{index + 1} is missing required <{tag}>")
    return (el.text or "").strip()


def _find_transaction_list(
    root: ET.Element,
    path: tuple[str, ...],
) -> list[ET.Element] | None:
    """Follow a message path and return its STMTTRN elements.

    Every level may repeat (one STMTTRNRS per account, for instance);
    all of them are followed and the transactions come back in document
    order. Returns None when the message block itself is absent. A
    present block with a missing intermediate container is a malformed
    document.
    """
    nodes = root.findall(path[0])
    if not nodes:
        return None
    for tag in path[1:]:
        children: list[ET.Element] = []
        for node in nodes:
            found = node.findall(tag)
            if not found:
                raise ParsingError(f"Malformed statement: <{node.tag}> has no <{tag}> element")
            children.extend(found)
        if len(children) > len(nodes):
            logger.debug("Following %d <%s> elements", len(children), tag)
        nodes = children
    return [trn for node in nodes for trn in node.findall("STMTTRN")]


def _transaction_from_element(elem: ET.Element, index: int) -> QfxTransaction:
    return QfxTransaction(
        trn_type=_required_text(elem, "TRNTYPE", index),
        dt_posted=QfxDate(_required_text(elem, "DTPOSTED", index)),
        amount=parse_amount(_required_text(elem, "TRNAMT", index)),
        fitid=_text(elem, "FITID"),
        name=_text(elem, "NAME"),
        memo=_text(elem, "MEMO"),
    )


class QfxParser(BaseParser[QfxTransaction]):
    """Parser for QFX / OFX statements (XML or SGML serialization)."""

    format: ClassVar[SupportedFormat] = SupportedFormat.QFX

    def is_supported(self, filename: str | None, content: str) -> bool:
        if self.signature.matches_extension(filename):
            return True
        trimmed = content.strip()
        return any(marker in trimmed for marker in self.signature.detection.content_markers)

    def parse(self, content: str) -> list[QfxTransaction]:
        text = content.lstrip("\ufeff")
        if text.strip().startswith("<?xml"):
            xml_content = text
        else:
            logger.debug("No XML prologue, normalizing SGML document")
            xml_content = convert_sgml_to_xml(text, self.signature.leaf_elements)

        start = xml_content.find(_OFX_OPEN)
        if start < 0:
            raise ParsingError(f"Missing {_OFX_OPEN} tag")
        end = xml_content.find(_OFX_CLOSE)
        if end < 0:
            raise ParsingError(f"Missing {_OFX_CLOSE} tag")

        try:
            root = ET.fromstring(xml_content[start:end + len(_OFX_CLOSE)])
        except ET.ParseError as exc:
            raise ParsingError(f"XML parse error: {exc}") from exc

        bank = _find_transaction_list(root, _BANK_PATH)
        credit_card = _find_transaction_list(root, _CREDIT_CARD_PATH)
        if bank is not None and credit_card is not None:
            logger.warning(
                "Statement has both bank and credit card messages; "
                "using bank transactions, ignoring %d credit card transaction(s)",
                len(credit_card),
            )

        elements = bank if bank is not None else credit_card
        if elements is None:
            raise ParsingError("No transaction data found")

        transactions = [
            _transaction_from_element(elem, i) for i, elem in enumerate(elements)
        ]
        logger.info(
            "Parsed %d QFX transaction(s) from %s message block",
            len(transactions),
            "bank" if bank is not None else "credit card",
        )
        return transactions
