"""
Format signature definitions sub-package for bank-statement-ingest.

Contains one YAML file per supported format describing how the format
is recognized (filename suffixes, content markers, header tokens) and
the format's fixed vocabulary (QFX leaf elements, CSV columns). The
loader module (signature_registry.py in the parent package) reads
these files at runtime.
"""
