"""State-specific scanners for the RDML lexer.

Each scanner is a mixin that provides the scanning logic for one or more
lexer states (TEXT, TAG_OPEN, START_TAG_NAME, ATTRIBUTE, VALUE,
END_TAG_NAME, END_TAG_CLOSE).
"""

from __future__ import annotations

from rdml.lexer.scanners.attribute import AttributeScannerMixin
from rdml.lexer.scanners.tag import TagScannerMixin
from rdml.lexer.scanners.text import TextScannerMixin

__all__ = [
    "AttributeScannerMixin",
    "TagScannerMixin",
    "TextScannerMixin",
]
