"""
Base parser protocol / ABC for bank-statement-ingest.

All format-specific parsers must implement this interface. The contract is:
1. is_supported() answers "does this look like my format?" from an
   optional filename and the document text, without raising.
2. parse() takes the whole decoded document and returns the
   format-specific transaction models in document order, or raises
   ParsingError (InvalidAmountError for bad amounts).

Why an ABC:
- Detection and dispatch only ever talk to this interface.
- Adding a format means one more subclass (see formats.py for the rest).

Each parser carries the ``FormatSignature`` loaded from its YAML file,
so detection constants live in data rather than in the class.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel

from bank_statement_ingest.formats import SupportedFormat
from bank_statement_ingest.signature_registry import FormatSignature, get_signature

TransactionT = TypeVar("TransactionT", bound=BaseModel)


class BaseParser(ABC, Generic[TransactionT]):
    """Abstract base class for statement format parsers.

    Subclasses set ``format`` and implement is_supported() and parse().
    """

    format: ClassVar[SupportedFormat]

    def __init__(self, signature: FormatSignature | None = None) -> None:
        self.signature = signature or get_signature(self.format)

    @abstractmethod
    def is_supported(self, filename: str | None, content: str) -> bool:
        """Check whether the document looks like this parser's format.

        Args:
            filename: Optional filename hint (only its suffix is used).
            content: The full decoded document text (may be empty).
        """

    @abstractmethod
    def parse(self, content: str) -> list[TransactionT]:
        """Parse a complete statement document.

        Args:
            content: The full decoded document text.

        Returns:
            Format-specific transactions in document order.

        Raises:
            ParsingError: If the document structure or a field is invalid.
        """
