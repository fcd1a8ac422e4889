"""
Shared test fixtures and path constants for bank-statement-ingest tests.

All input file paths are defined here as module-level constants for
easy discovery and modification. If input files move or new ones are
added, update this file.
"""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Input file paths -- edit here if files move or new ones are added
# ---------------------------------------------------------------------------
INPUT_DIR = Path(__file__).resolve().parent.parent / "inputs"

SGML_BANK_QFX = INPUT_DIR / "sample.qfx"
XML_CREDIT_CARD_QFX = INPUT_DIR / "sample_xml.qfx"
SAMPLE_CSV = INPUT_DIR / "sample.csv"


# ---------------------------------------------------------------------------
# Inline documents shared by several unit test modules
# ---------------------------------------------------------------------------
SGML_QFX_SAMPLE = """\
OFXHEADER:100
DATA:OFXSGML
VERSION:102

<OFX>
<BANKMSGSRSV1>
<STMTTRNRS>
<TRNUID>1
<STMTRS>
<CURDEF>USD
<BANKTRANLIST>
<DTSTART>20251201
<DTEND>20251231
<STMTTRN>
<TRNTYPE>DEBIT
<DTPOSTED>20251226120000
<TRNAMT>-50.00
<FITID>202512260
<NAME>Coffee Shop
<MEMO>Morning coffee
</STMTTRN>
</BANKTRANLIST>
</STMTRS>
</STMTTRNRS>
</BANKMSGSRSV1>
</OFX>
"""

XML_QFX_SAMPLE = """\
<?xml version="1.0" encoding="UTF-8"?>
<OFX>
<BANKMSGSRSV1>
<STMTTRNRS>
<STMTRS>
<BANKTRANLIST>
<STMTTRN>
<TRNTYPE>CREDIT</TRNTYPE>
<DTPOSTED>20251227</DTPOSTED>
<TRNAMT>1500.00</TRNAMT>
<FITID>202512270</FITID>
<NAME>Employer Payroll</NAME>
</STMTTRN>
</BANKTRANLIST>
</STMTRS>
</STMTTRNRS>
</BANKMSGSRSV1>
</OFX>
"""

CSV_SAMPLE = """\
Date,Type,Description,Amount,FITID,Memo
2025-12-26,DEBIT,Coffee Shop,-50.00,202512260,Morning coffee
"""


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs against real input files)",
    )
