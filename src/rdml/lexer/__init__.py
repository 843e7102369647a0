"""State-machine lexer for RDML markup.

This package provides a single-pass lexer with O(n) guaranteed performance.
The lexer walks the source once, switching between states, and stops at
the first error.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerState
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerState enum, character classes
└── scanners/            # State-specific scanners
    ├── text.py          # Character data
    ├── tag.py           # Tag open, element names, end tags
    └── attribute.py     # Attributes and delimited values

Usage:
    >>> from rdml.lexer import Lexer
    >>> for token in Lexer('<wait time="60"/>').tokenize():
    ...     print(token)
Token(TAG_OPEN_START, '<', 1)
Token(ELEMENT_NAME, 'wait', 1)
Token(ATTRIBUTE_NAME, 'time', 1)
Token(EQUALS, '=', 1)
Token(VALUE, '60', 1)
Token(SELF_CLOSING_TAG_CLOSE, '/>', 1)
Token(EOF, '', 1)

"""

from rdml.lexer.core import Lexer
from rdml.lexer.modes import LexerState

__all__ = ["Lexer", "LexerState"]
