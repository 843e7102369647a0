"""Lexer states and character classes.

This module defines the finite state machine states for the lexer
and the character sets used to delimit names inside tags.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerState(Enum):
    """Lexer states.

    Each state consumes characters and yields the next state:
    - TEXT: Character data between tags
    - TAG_OPEN: At '<', deciding between start and end tag
    - START_TAG_NAME: Element name of a start tag
    - ATTRIBUTE: Inside a start tag, between attributes
    - VALUE: Inside a delimited attribute value
    - END_TAG_NAME: Element name of an end tag
    - END_TAG_CLOSE: After an end tag name, expecting '>'

    """

    TEXT = auto()
    TAG_OPEN = auto()
    START_TAG_NAME = auto()
    ATTRIBUTE = auto()
    VALUE = auto()
    END_TAG_NAME = auto()
    END_TAG_CLOSE = auto()


# Space, ideographic space, CR, LF, TAB
WHITESPACE = frozenset(" \u3000\r\n\t")

# Characters that end an element or attribute name
NAME_DELIMITERS = WHITESPACE | frozenset(">/=")

QUOTES = frozenset("'\"")
