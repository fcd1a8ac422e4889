"""
Custom exception hierarchy for bank-statement-ingest.

Every failure is fatal to the current parse call, so callers only need
to decide *which kind* of failure happened:

- UnsupportedFormatError: detection could not identify any format.
- ParsingError: a structural or field-level failure inside a format
  parser (missing root tag, malformed XML, missing CSV column, ...).
  InvalidAmountError narrows this to a bad currency amount token.
- DateResolutionError: a posting date could not be turned into a
  calendar date during conversion (QfxDateError / CsvDateError).
- MissingInputError / ContentReadError: the caller did not give us a
  document, or reading it from disk failed.

Structural corruption (ParsingError) and data-quality problems
(DateResolutionError) are separate branches.
"""

from __future__ import annotations


class StatementParseError(Exception):
    """Base exception for all bank-statement-ingest errors."""


class UnsupportedFormatError(StatementParseError):
    """Raised when neither content nor filename matches a supported format."""

    def __init__(self, message: str = "Unsupported file format") -> None:
        super().__init__(message)


class ParsingError(StatementParseError):
    """Raised when a format parser rejects the document.

    The human-readable cause is kept on ``.cause`` so callers can log or
    match it without parsing the message.
    """

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Parse failed: {cause}")


class InvalidAmountError(ParsingError):
    """Raised when a currency amount token is not an exact decimal."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid amount: {value!r}")


class MissingInputError(StatementParseError):
    """Raised when neither content nor a filepath to read it from was given."""

    def __init__(self, message: str = "Content or filepath is required") -> None:
        super().__init__(message)


class ContentReadError(StatementParseError):
    """Raised when the statement file cannot be read from disk.

    The underlying ``OSError`` / ``UnicodeDecodeError`` is chained as
    ``__cause__``.
    """


class DateResolutionError(StatementParseError):
    """Raised when an encoded posting date cannot be resolved to a date."""

    kind = "date"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"{self.kind} invalid format: {value!r}")


class QfxDateError(DateResolutionError):
    """Raised for a QFX ``DTPOSTED`` token that is not ``YYYYMMDD...``."""

    kind = "QFX date"


class CsvDateError(DateResolutionError):
    """Raised for a CSV date matching none of the accepted patterns."""

    kind = "CSV date"


class SignatureError(StatementParseError):
    """Raised when a format signature YAML file is missing or invalid."""
