"""Attribute scanner mixin: attribute names, '=', delimited values and
the closers of a start tag."""

from rdml.lexer.modes import QUOTES, LexerState
from rdml.tokens import TokenType


class AttributeScannerMixin:
    """Mixin providing ATTRIBUTE and VALUE state scanning logic."""

    _source: str
    _source_len: int
    _pos: int

    def _peek(self) -> str:
        raise NotImplementedError

    def _advance(self) -> str:
        raise NotImplementedError

    def _advance_to(self, pos: int) -> None:
        raise NotImplementedError

    def _at_eof(self) -> bool:
        raise NotImplementedError

    def _scan_name(self) -> bool:
        raise NotImplementedError

    def _skip_whitespace(self) -> None:
        raise NotImplementedError

    def _ignore(self) -> None:
        raise NotImplementedError

    def _emit(self, token_type: TokenType) -> None:
        raise NotImplementedError

    def _fail(self, message: str) -> None:
        raise NotImplementedError

    def _scan_attribute(self) -> LexerState | None:
        """Scan one attribute (``name = value``) or the end of a start tag.

        Returns:
            TEXT after '>' or '/>', VALUE after '=', None on error.
        """
        self._skip_whitespace()

        char = self._peek()
        if char == "/":
            self._advance()  # consume '/'
            if self._peek() == ">":
                self._advance()  # consume '>'
                self._emit(TokenType.SELF_CLOSING_TAG_CLOSE)
                return LexerState.TEXT
            return self._fail("expected '/>', found '/'")

        if char == ">":
            self._advance()  # consume '>'
            self._emit(TokenType.TAG_CLOSE)
            return LexerState.TEXT

        if char in QUOTES:
            return self._fail(f"unexpected {char}")

        if not self._scan_name():
            return self._fail("unclosed start tag")
        self._emit(TokenType.ATTRIBUTE_NAME)

        self._skip_whitespace()
        if self._peek() != "=":
            return self._fail("expected '='")
        self._advance()  # consume '='
        self._emit(TokenType.EQUALS)
        self._skip_whitespace()
        return LexerState.VALUE

    def _scan_value(self) -> LexerState | None:
        """Scan a delimited value.

        The current character is taken as the delimiter as-is; the value
        runs up to the next occurrence of the same character.
        """
        if self._at_eof():
            return self._fail("unclosed value")

        delimiter = self._advance()  # consume opening delimiter
        self._ignore()

        idx = self._source.find(delimiter, self._pos)
        if idx == -1:
            self._advance_to(self._source_len)
            return self._fail("unclosed value")

        self._advance_to(idx)
        self._emit(TokenType.VALUE)
        self._advance()  # consume closing delimiter
        self._ignore()
        return LexerState.ATTRIBUTE
