"""
Request model for bank-statement-ingest.

``ParseRequest`` bundles the three knobs a caller can turn:

- format: explicit ``SupportedFormat`` override; skips detection.
- filename: hint for detection *and* path to read when no content is given.
- content: the decoded document text.

Resolution order in ``parse_into()``:
  1. content = ``content``, else the file at ``filename`` (UTF-8) if any.
  2. format = ``format``, else ``detect_format(filename, content)``.
  3. No content at this point -> MissingInputError.

Why Pydantic:
- The format override accepts "qfx" / "QFX" / ``SupportedFormat.QFX``
  alike, and rejects anything else with a clear ValidationError.
- Frozen: a request can be built once and parsed repeatedly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bank_statement_ingest.detect import detect_format
from bank_statement_ingest.dispatch import parse_into
from bank_statement_ingest.exceptions import ContentReadError, MissingInputError
from bank_statement_ingest.formats import SupportedFormat
from bank_statement_ingest.transaction import FromParsed, Transaction

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=FromParsed)


class ParseRequest(BaseModel):
    """A statement to parse: optional format, filename and content."""

    model_config = ConfigDict(frozen=True)

    format: SupportedFormat | None = Field(
        None, description="Explicit format; when set, detection is skipped"
    )
    filename: str | None = Field(
        None, description="Filename hint, also read from disk when content is None"
    )
    content: str | None = Field(None, description="Decoded statement text")

    @field_validator("format", mode="before")
    @classmethod
    def _coerce_format(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, SupportedFormat):
            return SupportedFormat(value)
        return value

    def read_content(self) -> str | None:
        """Return the content, reading ``filename`` from disk if needed.

        Returns:
            The document text, or None when neither content nor filename
            was given.

        Raises:
            ContentReadError: If the file cannot be read or decoded.
        """
        if self.content is not None:
            return self.content
        if self.filename is None:
            return None
        path = Path(self.filename)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentReadError(f"Read content failed: {path}: {exc}") from exc
        logger.debug("Read %d chars from %s", len(text), path)
        return text

    def resolve_format(self, content: str | None = None) -> SupportedFormat:
        """The explicit format, or the detected one.

        Raises:
            UnsupportedFormatError: If detection fails.
        """
        if self.format is not None:
            return self.format
        return detect_format(self.filename, content if content is not None else self.content)

    def parse_into(self, target: type[T]) -> list[T]:
        """Parse the statement and convert every transaction into *target*."""
        content = self.read_content()
        fmt = self.resolve_format(content)
        if content is None:
            raise MissingInputError()
        logger.info(
            "Parsing %s as %s into %s",
            self.filename or "<content>",
            fmt.value,
            target.__name__,
        )
        return parse_into(fmt, content, target)

    def parse(self) -> list[Transaction]:
        """Parse the statement into unified ``Transaction`` records."""
        return self.parse_into(Transaction)
