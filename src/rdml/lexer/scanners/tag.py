"""Tag scanner mixin: tag openers, element names and end tags."""

from rdml.lexer.modes import LexerState
from rdml.tokens import TokenType


class TagScannerMixin:
    """Mixin providing TAG_OPEN, START_TAG_NAME, END_TAG_NAME and
    END_TAG_CLOSE state scanning logic.

    """

    def _peek(self) -> str:
        raise NotImplementedError

    def _advance(self) -> str:
        raise NotImplementedError

    def _at_eof(self) -> bool:
        raise NotImplementedError

    def _at_whitespace(self) -> bool:
        raise NotImplementedError

    def _scan_name(self) -> bool:
        raise NotImplementedError

    def _ignore(self) -> None:
        raise NotImplementedError

    def _emit(self, token_type: TokenType) -> None:
        raise NotImplementedError

    def _fail(self, message: str) -> None:
        raise NotImplementedError

    def _scan_tag_open(self) -> LexerState | None:
        """Consume '<' (and '/' for an end tag)."""
        self._advance()  # consume '<'
        if self._peek() == "/":
            self._advance()  # consume '/'
            self._emit(TokenType.END_TAG_OPEN)
            return LexerState.END_TAG_NAME

        self._emit(TokenType.TAG_OPEN_START)
        return LexerState.START_TAG_NAME

    def _scan_start_tag_name(self) -> LexerState | None:
        if not self._scan_name():
            return self._fail("unclosed start tag")
        self._emit(TokenType.ELEMENT_NAME)
        return LexerState.ATTRIBUTE

    def _scan_end_tag_name(self) -> LexerState | None:
        if not self._scan_name():
            return self._fail("unclosed end tag")
        self._emit(TokenType.ELEMENT_NAME)
        return LexerState.END_TAG_CLOSE

    def _scan_end_tag_close(self) -> LexerState | None:
        """Skip whitespace, then require '>'."""
        while not self._at_eof():
            if self._peek() == ">":
                self._advance()  # consume '>'
                self._emit(TokenType.END_TAG_CLOSE)
                return LexerState.TEXT
            if not self._at_whitespace():
                return self._fail("expected '>'")

            self._advance()
            self._ignore()
        return self._fail("unclosed end tag")
