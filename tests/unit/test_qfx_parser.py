"""
Unit tests for QfxParser (bank_statement_ingest.parsers.qfx).

Uses small inline documents in both serializations (SGML and XML) plus
the bank / credit-card message variants.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from bank_statement_ingest.exceptions import InvalidAmountError, ParsingError
from bank_statement_ingest.formats import SupportedFormat
from bank_statement_ingest.parsers.qfx import QfxParser, QfxTransaction
from bank_statement_ingest.transforms.dates import QfxDate

from tests.conftest import SGML_QFX_SAMPLE, XML_QFX_SAMPLE

CREDIT_CARD_SGML = """\
OFXHEADER:100
DATA:OFXSGML

<OFX>
<CREDITCARDMSGSRSV1>
<CCSTMTTRNRS>
<CCSTMTRS>
<BANKTRANLIST>
<STMTTRN>
<TRNTYPE>DEBIT
<DTPOSTED>20251215
<TRNAMT>-89.99
<NAME>Bookshop
</STMTTRN>
</BANKTRANLIST>
</CCSTMTRS>
</CCSTMTTRNRS>
</CREDITCARDMSGSRSV1>
</OFX>
"""


def _bank_xml(transactions: str) -> str:
    """Helper: wrap STMTTRN elements in a minimal bank statement."""
    return (
        '<?xml version="1.0"?>\n'
        "<OFX><BANKMSGSRSV1><STMTTRNRS><STMTRS><BANKTRANLIST>"
        f"{transactions}"
        "</BANKTRANLIST></STMTRS></STMTTRNRS></BANKMSGSRSV1></OFX>"
    )


@pytest.fixture
def parser() -> QfxParser:
    return QfxParser()


# ---------------------------------------------------------------------------
# is_supported
# ---------------------------------------------------------------------------

class TestIsSupported:
    """Tests for QfxParser.is_supported()."""

    @pytest.mark.parametrize(
        "filename, content, expected",
        [
            ("test.qfx", "", True),
            ("test.ofx", "", True),
            ("test.QFX", "", True),
            ("test.OFX", "", True),
            ("test.csv", "", False),
            (None, "<OFX>", True),
            (None, "OFXHEADER:", True),
            (None, "DATA:OFXSGML", True),
            (None, "random content", False),
            (None, "", False),
        ],
    )
    def test_cases(self, parser, filename, content, expected):
        assert parser.is_supported(filename, content) is expected


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------

class TestParse:
    """Tests for QfxParser.parse()."""

    def test_sgml_bank_statement(self, parser):
        result = parser.parse(SGML_QFX_SAMPLE)
        assert result == [
            QfxTransaction(
                trn_type="DEBIT",
                dt_posted=QfxDate("20251226120000"),
                amount=Decimal("-50.00"),
                fitid="202512260",
                name="Coffee Shop",
                memo="Morning coffee",
            )
        ]
        assert result[0].format is SupportedFormat.QFX

    def test_xml_statement(self, parser):
        result = parser.parse(XML_QFX_SAMPLE)
        assert len(result) == 1
        tx = result[0]
        assert tx.trn_type == "CREDIT"
        assert tx.amount == Decimal("1500.00")
        assert tx.memo is None

    def test_credit_card_statement(self, parser):
        result = parser.parse(CREDIT_CARD_SGML)
        assert [tx.name for tx in result] == ["Bookshop"]
        assert result[0].fitid is None

    def test_document_order_preserved(self, parser):
        content = _bank_xml(
            "".join(
                f"<STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>2025120{i}</DTPOSTED>"
                f"<TRNAMT>-{i}.00</TRNAMT><FITID>{i}</FITID></STMTTRN>"
                for i in range(1, 6)
            )
        )
        assert [tx.fitid for tx in parser.parse(content)] == ["1", "2", "3", "4", "5"]

    def test_every_statement_in_a_message_block(self, parser):
        """Two accounts in one BANKMSGSRSV1 yield both accounts' transactions."""

        def statement(fitid: str) -> str:
            return (
                "<STMTTRNRS><STMTRS><BANKTRANLIST>"
                "<STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>20251201</DTPOSTED>"
                f"<TRNAMT>-1.00</TRNAMT><FITID>{fitid}</FITID></STMTTRN>"
                "</BANKTRANLIST></STMTRS></STMTTRNRS>"
            )

        content = (
            '<?xml version="1.0"?>\n<OFX><BANKMSGSRSV1>'
            + statement("chk")
            + statement("sav")
            + "</BANKMSGSRSV1></OFX>"
        )
        assert [tx.fitid for tx in parser.parse(content)] == ["chk", "sav"]

    def test_repeated_statement_missing_container(self, parser):
        content = (
            '<?xml version="1.0"?>\n<OFX><BANKMSGSRSV1>'
            "<STMTTRNRS><STMTRS><BANKTRANLIST></BANKTRANLIST></STMTRS></STMTTRNRS>"
            "<STMTTRNRS></STMTTRNRS>"
            "</BANKMSGSRSV1></OFX>"
        )
        with pytest.raises(ParsingError, match="Malformed statement"):
            parser.parse(content)

    def test_empty_transaction_list(self, parser):
        assert parser.parse(_bank_xml("")) == []

    def test_bank_wins_over_credit_card(self, parser, caplog):
        content = (
            '<?xml version="1.0"?>\n<OFX>'
            "<BANKMSGSRSV1><STMTTRNRS><STMTRS><BANKTRANLIST>"
            "<STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>20251201</DTPOSTED>"
            "<TRNAMT>-1.00</TRNAMT><FITID>bank</FITID></STMTTRN>"
            "</BANKTRANLIST></STMTRS></STMTTRNRS></BANKMSGSRSV1>"
            "<CREDITCARDMSGSRSV1><CCSTMTTRNRS><CCSTMTRS><BANKTRANLIST>"
            "<STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>20251201</DTPOSTED>"
            "<TRNAMT>-2.00</TRNAMT><FITID>card</FITID></STMTTRN>"
            "</BANKTRANLIST></CCSTMTRS></CCSTMTTRNRS></CREDITCARDMSGSRSV1>"
            "</OFX>"
        )
        with caplog.at_level(logging.WARNING, logger="bank_statement_ingest.parsers.qfx"):
            result = parser.parse(content)
        assert [tx.fitid for tx in result] == ["bank"]
        assert "both bank and credit card" in caplog.text

    def test_bom_stripped(self, parser):
        assert len(parser.parse("\ufeff" + XML_QFX_SAMPLE)) == 1

    def test_invalid_date_not_checked_at_parse_time(self, parser):
        content = _bank_xml(
            "<STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>garbage</DTPOSTED>"
            "<TRNAMT>-1.00</TRNAMT></STMTTRN>"
        )
        assert str(parser.parse(content)[0].dt_posted) == "garbage"


class TestParseErrors:
    """Structural failures raise ParsingError."""

    def test_missing_ofx_open(self, parser):
        with pytest.raises(ParsingError, match="Missing <OFX> tag"):
            parser.parse('<?xml version="1.0"?>\n<FOO></FOO>')

    def test_missing_ofx_close(self, parser):
        with pytest.raises(ParsingError, match="Missing </OFX> tag"):
            parser.parse('<?xml version="1.0"?>\n<OFX><BANKMSGSRSV1>')

    def test_no_transaction_data(self, parser):
        with pytest.raises(ParsingError, match="No transaction data found"):
            parser.parse('<?xml version="1.0"?>\n<OFX><SIGNONMSGSRSV1/></OFX>')

    def test_malformed_xml(self, parser):
        with pytest.raises(ParsingError, match="XML parse error"):
            parser.parse('<?xml version="1.0"?>\n<OFX><BANKMSGSRSV1></OFX>')

    def test_unknown_sgml_leaf_fails_in_xml_parser(self, parser):
        content = SGML_QFX_SAMPLE.replace("<MEMO>Morning coffee", "<CHECKNUM>1001")
        with pytest.raises(ParsingError, match="XML parse error"):
            parser.parse(content)

    def test_missing_intermediate_container(self, parser):
        content = '<?xml version="1.0"?>\n<OFX><BANKMSGSRSV1><STMTTRNRS></STMTTRNRS></BANKMSGSRSV1></OFX>'
        with pytest.raises(ParsingError, match="Malformed statement"):
            parser.parse(content)

    def test_missing_required_field(self, parser):
        content = _bank_xml(
            "<STMTTRN><TRNTYPE>DEBIT</TRNTYPE><TRNAMT>-1.00</TRNAMT></STMTTRN>"
        )
        with pytest.raises(ParsingError, match="missing required <DTPOSTED>"):
            parser.parse(content)

    def test_invalid_amount_fails_whole_parse(self, parser):
        content = _bank_xml(
            "<STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>20251201</DTPOSTED>"
            "<TRNAMT>-1.00</TRNAMT></STMTTRN>"
            "<STMTTRN><TRNTYPE>DEBIT</TRNTYPE><DTPOSTED>20251201</DTPOSTED>"
            "<TRNAMT>abc</TRNAMT></STMTTRN>"
        )
        with pytest.raises(InvalidAmountError):
            parser.parse(content)
