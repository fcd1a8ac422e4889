"""
SGML -> XML normalizer for legacy OFX (QFX 1.x) documents.

OFX 1.x files are SGML: a plain-text header block followed by tags
where scalar (leaf) elements have no closing tag::

    OFXHEADER:100
    DATA:OFXSGML
    <OFX>
    <STMTTRN>
    <TRNTYPE>DEBIT
    <TRNAMT>-50.00
    </STMTTRN>
    </OFX>

This module rewrites such documents line by line into XML that
``xml.etree.ElementTree`` accepts:

1. Drop every line before the first line containing ``<OFX>``.
2. Drop blank lines; trim the rest.
3. Text lines and closing tags pass through.
4. An opening tag whose name is a registered leaf element gets its
   closing tag appended right after the inline text, unless the line
   already closes it. Anything after an embedded ``</`` is kept.
5. Other opening tags (containers) pass through; their explicit
   closing tags appear later in the document.

Unknown scalar tags are never guessed at. A document using one will be
rejected by the XML parser afterwards, which is where the error is
reported.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Tag name ends at the first '>' or whitespace
_TAG_NAME_END = re.compile(r"[>\s]")


def _tag_name(line: str) -> str:
    """Extract the tag name from a trimmed line starting with '<'."""
    match = _TAG_NAME_END.search(line)
    end = match.start() if match else len(line)
    return line[1:end]


def _close_leaf(line: str, tag: str) -> str:
    """Append the closing tag for a leaf element line if it lacks one."""
    content_start = line.find(">")
    if content_start < 0:
        return line

    after_tag = line[content_start + 1:]
    closing_tag = f"</{tag}>"
    if closing_tag in after_tag:
        return line

    content_end = after_tag.find("</")
    if content_end < 0:
        content_end = len(after_tag)
    text = after_tag[:content_end].strip()
    trailing = after_tag[content_end:]
    return f"{line[:content_start + 1]}{text}{closing_tag}{trailing}"


def convert_sgml_to_xml(content: str, leaf_elements: Iterable[str]) -> str:
    """Rewrite an SGML-dialect OFX document into well-formed XML.

    Args:
        content: The full document text, header block included.
        leaf_elements: Tag names (any case) that hold scalar values.

    Returns:
        The rewritten document, one element per line. Empty if the
        document never opens ``<OFX>``.
    """
    leaves = {tag.upper() for tag in leaf_elements}
    lines = content.splitlines()

    start = next((i for i, line in enumerate(lines) if "<OFX>" in line), len(lines))
    if start:
        logger.debug("Skipped %d SGML header line(s)", start)

    out: list[str] = []
    closed = 0
    for line in lines[start:]:
        trimmed = line.strip()
        if not trimmed:
            continue
        if not trimmed.startswith("<") or trimmed.startswith("</"):
            out.append(trimmed)
            continue

        tag = _tag_name(trimmed)
        if tag.upper() in leaves:
            rewritten = _close_leaf(trimmed, tag)
            if rewritten != trimmed:
                closed += 1
            out.append(rewritten)
        else:
            out.append(trimmed)

    logger.debug("Closed %d leaf element(s) during SGML normalization", closed)
    return "".join(f"{line}\n" for line in out)
