"""Token navigation utilities for the RDML parser.

Provides mixin for token stream navigation and basic parsing operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rdml.errors import ParseError
from rdml.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    The cursor only ever moves forward, one token per call to `_advance`.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int (cached len(_tokens))
        - _pos: int
        - _current: Token | None
        - _source_file: str | None

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token | None
    _source_file: str | None

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < self._tokens_len:
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _expect(self, token_type: TokenType, element: str | None) -> Token:
        """Consume the current token, which must be of token_type.

        Raises:
            ParseError: On a different token type or end of stream.
        """
        token = self._current
        if token is None or token.type == TokenType.EOF:
            lineno = token.lineno if token is not None else None
            if element:
                msg = f"closing tag </{element}> not found"
            else:
                msg = "unexpected end of input"
            raise ParseError(msg, element=element, lineno=lineno, source_file=self._source_file)
        if token.type != token_type:
            raise ParseError(
                f"expected {token_type.name.lower()}, found {token.type.name.lower()} {token.value!r}",
                element=element,
                lineno=token.lineno,
                source_file=self._source_file,
            )
        self._advance()
        return token
