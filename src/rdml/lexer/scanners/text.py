"""Character data scanner mixin."""

from rdml.lexer.modes import LexerState
from rdml.tokens import TokenType


class TextScannerMixin:
    """Mixin providing TEXT state scanning logic.

    Accumulates character data up to the next '<'.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _start: int

    def _advance_to(self, pos: int) -> None:
        """Advance to pos. Implemented by Lexer."""
        raise NotImplementedError

    def _emit(self, token_type: TokenType) -> None:
        """Emit pending span. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_text(self) -> LexerState | None:
        """Scan character data.

        Emits a TEXT token for any non-empty run before '<'. At end of
        input, emits trailing text followed by EOF and stops.

        Returns:
            TAG_OPEN at '<', None at end of input.
        """
        idx = self._source.find("<", self._pos)
        if idx == -1:
            idx = self._source_len
        self._advance_to(idx)

        if self._start < self._pos:
            self._emit(TokenType.TEXT)

        if self._pos >= self._source_len:
            self._emit(TokenType.EOF)
            return None
        return LexerState.TAG_OPEN
