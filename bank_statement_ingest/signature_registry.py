"""
Signature loader for bank-statement-ingest.

Loads format signature YAML files from bank_statement_ingest/signatures/
and provides structured access via Pydantic models. Each signature defines:
- format_name: the ``SupportedFormat`` value it describes (e.g., "qfx")
- detection: priority, filename extensions, content markers, header tokens
- leaf_elements: (QFX) scalar tags the SGML dialect leaves unclosed
- delimiter: (CSV) field separator

Why YAML instead of hardcoded:
- The QFX leaf registry and detection markers are plain vocabulary that
  grows with real-world exports; editing a list should not mean editing
  parser logic.
- Separation of format knowledge (YAML) from parsing logic (Python).

The set of *formats* is still closed: a signature whose format_name is
not a ``SupportedFormat`` member fails validation.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from bank_statement_ingest.exceptions import SignatureError
from bank_statement_ingest.formats import SupportedFormat

logger = logging.getLogger(__name__)

# Directory containing signature YAML files (sibling package)
_SIGNATURES_DIR = Path(__file__).parent / "signatures"


class DetectionRules(BaseModel):
    """Detection rules for a format."""
    priority: int = 99
    extensions: list[str] = Field(default_factory=list)
    extension_only: bool = False
    content_markers: list[str] = Field(default_factory=list)
    header_tokens: list[str] = Field(default_factory=list)

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext.startswith("."):
                ext = f".{ext}"
            normalized.append(ext)
        return normalized


class FormatSignature(BaseModel):
    """A complete format signature loaded from YAML."""
    format_name: SupportedFormat
    description: str = ""
    detection: DetectionRules
    leaf_elements: frozenset[str] = frozenset()
    delimiter: str = ","

    @field_validator("leaf_elements")
    @classmethod
    def _upper_leaf_elements(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(tag.strip().upper() for tag in value)

    @property
    def priority(self) -> int:
        """Lower number = checked first during detection."""
        return self.detection.priority

    def matches_extension(self, filename: str | None) -> bool:
        """Whether *filename* ends with one of this format's extensions."""
        if not filename:
            return False
        lowered = filename.lower()
        return any(lowered.endswith(ext) for ext in self.detection.extensions)


def load_signature(path: Path) -> FormatSignature:
    """Load a single signature YAML file.

    Raises:
        SignatureError: If the file is missing, empty, not valid YAML,
            or fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise SignatureError(f"Signature file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise SignatureError(f"Invalid YAML in signature file {path}: {exc}") from exc

    if raw is None:
        raise SignatureError(f"Signature file is empty: {path}")

    try:
        return FormatSignature.model_validate(raw)
    except ValidationError as exc:
        raise SignatureError(f"Invalid signature in {path}:\n{exc}") from exc


def get_signature(
    fmt: SupportedFormat,
    signatures_dir: Path | None = None,
) -> FormatSignature:
    """Load the signature for one format from ``{format}.yaml``."""
    signatures_dir = signatures_dir or _SIGNATURES_DIR
    signature = load_signature(signatures_dir / f"{fmt.value}.yaml")
    if signature.format_name is not fmt:
        raise SignatureError(
            f"Signature file {fmt.value}.yaml declares format_name "
            f"'{signature.format_name.value}'"
        )
    return signature


def load_all_signatures(signatures_dir: Path | None = None) -> list[FormatSignature]:
    """Load all signature YAML files, sorted by detection priority.

    Args:
        signatures_dir: Directory to scan for .yaml files. Defaults to
            the built-in signatures/ directory.

    Returns:
        List of FormatSignature objects, sorted by priority (QFX first,
        its content markers being far more specific than a CSV header).
    """
    signatures_dir = signatures_dir or _SIGNATURES_DIR
    signatures: list[FormatSignature] = []
    for yaml_path in sorted(signatures_dir.glob("*.yaml")):
        try:
            signature = load_signature(yaml_path)
        except SignatureError as e:
            logger.warning("Failed to load signature from %s: %s", yaml_path, e)
            continue
        signatures.append(signature)
        logger.debug("Loaded signature: %s from %s", signature.format_name.value, yaml_path)
    signatures.sort(key=lambda s: s.priority)
    logger.debug("Loaded %d signatures", len(signatures))
    return signatures
