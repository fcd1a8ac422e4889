"""
Transforms sub-package for bank-statement-ingest.

Field-level normalizers shared by the format parsers and the
conversion step. Each one turns format-specific text into an exact
Python value and raises a typed error otherwise:

- amounts.py: amount token -> ``Decimal`` (never float).
- dates.py: ``QfxDate`` / ``CsvDate`` value objects, resolved lazily
  to ``datetime.date`` by the conversion step.

Why separate modules:
- Both parsers share the amount rule; only the conversion step needs
  the date rules.
- Each rule is independently testable without building a document.
"""
