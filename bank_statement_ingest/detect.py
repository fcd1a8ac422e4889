"""
Format detection for bank statement exports.

Each parser answers ``is_supported(filename, content)`` from its
signature YAML (see signature_registry.py). Detection asks them in
signature priority order: QFX before CSV, because ``<OFX>`` /
``OFXHEADER:`` are far more specific than a CSV header line.

Detection algorithm:
1. If content is given, ask every parser in priority order; the first
   one that recognizes the document wins. Content therefore beats the
   filename: an OFX document saved as ``export.csv`` is still QFX.
2. Otherwise, if a filename is given, look only at extensions that
   identify a format on their own (``.qfx`` / ``.ofx``). A ``.csv``
   extension alone is never enough, because it says nothing about the
   column layout.
3. Fallback: raise UnsupportedFormatError.
"""

from __future__ import annotations

import logging

from bank_statement_ingest.dispatch import get_parsers
from bank_statement_ingest.exceptions import UnsupportedFormatError
from bank_statement_ingest.formats import SupportedFormat
from bank_statement_ingest.parsers.base import BaseParser

logger = logging.getLogger(__name__)

# Characters of content echoed back in the UnsupportedFormatError message
_PREVIEW_CHARS = 200


def detect_format(
    filename: str | None = None,
    content: str | None = None,
    parsers: list[BaseParser] | None = None,
) -> SupportedFormat:
    """Detect the format of a statement from its content and/or filename.

    Args:
        filename: Optional filename hint.
        content: Optional decoded document text.
        parsers: Parsers to consult, in priority order (defaults to all
            registered parsers).

    Returns:
        The detected ``SupportedFormat``.

    Raises:
        UnsupportedFormatError: If no format matches.
    """
    if parsers is None:
        parsers = get_parsers()

    # Priority 1: content (with the filename as a hint to each parser)
    if content is not None:
        for parser in parsers:
            if parser.is_supported(filename, content):
                logger.info("Detected format '%s' from content", parser.format.value)
                return parser.format

    # Priority 2: unambiguous extensions only
    if filename is not None:
        for parser in parsers:
            signature = parser.signature
            if signature.detection.extension_only and signature.matches_extension(filename):
                logger.info(
                    "Detected format '%s' from filename %s", parser.format.value, filename
                )
                return parser.format

    # Build diagnostic message
    if filename is None and content is None:
        raise UnsupportedFormatError(
            "Unsupported file format: neither content nor filename was given"
        )
    preview = (content or "")[:_PREVIEW_CHARS]
    raise UnsupportedFormatError(
        f"Unsupported file format: {filename or '<no filename>'}\n"
        f"Tried {len(parsers)} formats, none matched.\n"
        f"Content starts with:\n{preview}"
    )
