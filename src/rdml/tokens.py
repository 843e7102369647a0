"""Token and TokenType definitions for the RDML lexer.

The lexer produces a list of Token objects that the parser consumes.
Each Token is a classified span ``[start, end)`` of the immutable source
text, plus the line it starts on for error messages.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Token types produced by the lexer.

    A token list always ends with EOF, unless scanning failed, in which
    case it ends with INVALID.

    """

    INVALID = auto()
    EOF = auto()
    TEXT = auto()

    # Start tag: <name attr="value" ...> or <name .../>
    TAG_OPEN_START = auto()  # <
    ELEMENT_NAME = auto()  # name (start or end tag)
    ATTRIBUTE_NAME = auto()  # attr
    EQUALS = auto()  # =
    VALUE = auto()  # value, delimiters excluded
    TAG_CLOSE = auto()  # >
    SELF_CLOSING_TAG_CLOSE = auto()  # />

    # End tag: </name>
    END_TAG_OPEN = auto()  # </
    END_TAG_CLOSE = auto()  # >


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        start: Absolute start offset in source
        end: Absolute end offset in source (exclusive)
        value: ``source[start:end]``
        lineno: Line number where the token starts (1-indexed)

    """

    type: TokenType
    start: int
    end: int
    value: str
    lineno: int = 1

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.lineno})"
