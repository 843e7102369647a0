"""State-machine lexer with O(n) guaranteed performance.

Walks the source once. Each state method consumes characters and returns
the next state, or None when scanning is complete or has failed. The
driver loop in `Lexer.tokenize` is the only place states are dispatched.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from rdml.errors import ScanError
from rdml.lexer.modes import NAME_DELIMITERS, WHITESPACE, LexerState
from rdml.lexer.scanners import (
    AttributeScannerMixin,
    TagScannerMixin,
    TextScannerMixin,
)
from rdml.tokens import Token, TokenType
from rdml.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer(
    TextScannerMixin,
    TagScannerMixin,
    AttributeScannerMixin,
):
    """State-machine lexer for RDML markup.

    Usage:
        >>> tokens = Lexer("<br/>").tokenize()
        >>> [t.type.name for t in tokens]
        ['TAG_OPEN_START', 'ELEMENT_NAME', 'SELF_CLOSING_TAG_CLOSE', 'EOF']

    Raises:
        ScanError: On the first lexical error. Scanning never resumes.

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_pos",
        "_start",  # Start offset of the pending token
        "_lineno",
        "_start_lineno",  # Line of the pending token's first character
        "_source_file",
        "_tokens",
        "_error",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: RDML source text
            source_file: Optional source file path for error messages
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._start = 0
        self._lineno = 1
        self._start_lineno = 1
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._error: ScanError | None = None

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source.

        Returns:
            Token list terminated by an EOF token.

        Raises:
            ScanError: If the source is lexically malformed.

        Complexity: O(n) where n = len(source)
        """
        state: LexerState | None = LexerState.TEXT
        while state is not None:
            state = self._dispatch_state(state)

        if self._error is not None:
            raise self._error

        logger.debug("Scanned %d tokens from %d characters", len(self._tokens), self._source_len)
        return self._tokens

    def _dispatch_state(self, state: LexerState) -> LexerState | None:
        """Run one state and return the next one."""
        if state == LexerState.TEXT:
            return self._scan_text()
        elif state == LexerState.TAG_OPEN:
            return self._scan_tag_open()
        elif state == LexerState.START_TAG_NAME:
            return self._scan_start_tag_name()
        elif state == LexerState.ATTRIBUTE:
            return self._scan_attribute()
        elif state == LexerState.VALUE:
            return self._scan_value()
        elif state == LexerState.END_TAG_NAME:
            return self._scan_end_tag_name()
        elif state == LexerState.END_TAG_CLOSE:
            return self._scan_end_tag_close()
        raise AssertionError(f"unhandled lexer state {state!r}")

    # =========================================================================
    # Character navigation helpers
    # =========================================================================

    def _at_eof(self) -> bool:
        return self._pos >= self._source_len

    def _peek(self) -> str:
        """Peek at current character without advancing.

        Returns:
            Current character or empty string at end of input.
        """
        if self._pos >= self._source_len:
            return ""
        return self._source[self._pos]

    def _advance(self) -> str:
        """Advance position by one character, counting line feeds.

        Returns:
            The consumed character.
        """
        if self._pos >= self._source_len:
            return ""

        char = self._source[self._pos]
        self._pos += 1
        if char == "\n":
            self._lineno += 1
        return char

    def _advance_to(self, pos: int) -> None:
        """Advance position to pos, counting skipped line feeds."""
        self._lineno += self._source.count("\n", self._pos, pos)
        self._pos = pos

    def _at_whitespace(self) -> bool:
        return self._pos < self._source_len and self._source[self._pos] in WHITESPACE

    def _scan_name(self) -> bool:
        """Consume characters up to the next name delimiter.

        Returns:
            False if the source ended before a delimiter was found.
        """
        while self._pos < self._source_len:
            if self._source[self._pos] in NAME_DELIMITERS:
                return True
            self._advance()
        return False

    def _skip_whitespace(self) -> None:
        """Consume whitespace without covering it by any token."""
        while self._at_whitespace():
            self._advance()
        self._ignore()

    # =========================================================================
    # Token emission
    # =========================================================================

    def _ignore(self) -> None:
        """Drop the pending span; the next token starts here."""
        self._start = self._pos
        self._start_lineno = self._lineno

    def _emit(self, token_type: TokenType) -> None:
        """Emit the pending span ``[start, pos)`` as a token."""
        self._tokens.append(
            Token(
                type=token_type,
                start=self._start,
                end=self._pos,
                value=self._source[self._start : self._pos],
                lineno=self._start_lineno,
            )
        )
        self._ignore()

    def _fail(self, message: str) -> None:
        """Record a lexical error and stop the state machine.

        Returns:
            None, so scanners can ``return self._fail(...)``.
        """
        self._emit(TokenType.INVALID)
        self._error = ScanError(
            message,
            lineno=self._lineno,
            offset=self._pos,
            source_file=self._source_file,
            tokens=self._tokens,
        )
        return None
