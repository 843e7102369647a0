"""Recursive descent parser producing the element tree.

Consumes the token list from Lexer and builds Element/Text nodes.

Invariants:
- The token cursor advances by exactly one token per consumed lexical
  unit. A closing tag is three tokens (END_TAG_OPEN, ELEMENT_NAME,
  END_TAG_CLOSE) and is consumed by the call that opened the element.
- Every non-self-closing element's children come from one call to
  `_parse_nodes` that ended on a closing tag with the same name.

Thread Safety:
Parser instances are single-use and not thread-safe. Create one per
parse operation. The resulting tree is immutable.

"""

from __future__ import annotations

from collections.abc import Sequence

from rdml.entities import decode_attribute, decode_text
from rdml.errors import ParseError
from rdml.lexer import Lexer
from rdml.nodes import EMPTY_ELEMENTS, Element, Node, Text
from rdml.parsing import TokenNavigationMixin
from rdml.tokens import Token, TokenType


class Parser(TokenNavigationMixin):
    """Recursive descent tree builder.

    Usage:
        >>> parser = Parser.from_source('<if switch="1"><wait time="1"/></if>')
        >>> tree = parser.parse()
        >>> tree[0].elements[0].attrs["time"]
        '1'

    """

    __slots__ = (
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_source_file",
    )

    def __init__(
        self,
        tokens: Sequence[Token],
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with a token list.

        Args:
            tokens: Token list produced by Lexer.tokenize()
            source_file: Optional source file path for error messages
        """
        self._tokens = tokens
        self._tokens_len = len(tokens)
        self._pos = 0
        self._current: Token | None = tokens[0] if tokens else None
        self._source_file = source_file

    @classmethod
    def from_source(cls, source: str, source_file: str | None = None) -> Parser:
        """Scan source and return a parser over its tokens.

        Raises:
            ScanError: If the source is lexically malformed.
        """
        tokens = Lexer(source, source_file=source_file).tokenize()
        return cls(tokens, source_file=source_file)

    def parse(self) -> list[Node]:
        """Parse the token list into top-level nodes.

        Returns:
            Top-level nodes in document order.

        Raises:
            ParseError: On a structural error. No partial tree is returned.
        """
        return self._parse_nodes(None, None)

    def _error(self, message: str, token: Token | None, **kwargs: str | None) -> ParseError:
        return ParseError(
            message,
            lineno=token.lineno if token is not None else None,
            source_file=self._source_file,
            **kwargs,
        )

    def _parse_nodes(self, closing: str | None, opener: Token | None) -> list[Node]:
        """Parse sibling nodes up to the closing tag named `closing`.

        Args:
            closing: Expected closing tag name, None at top level
            opener: The '<' token of the enclosing element, for messages

        Returns:
            Nodes parsed before the closing tag (which is consumed).
        """
        nodes: list[Node] = []
        while True:
            token = self._current
            if token is None or token.type == TokenType.EOF:
                if closing is None:
                    return nodes
                raise self._error(f"closing tag </{closing}> not found", opener, element=closing)

            if token.type == TokenType.TEXT:
                nodes.append(Text(decode_text(token.value), lineno=token.lineno))
                self._advance()
            elif token.type == TokenType.TAG_OPEN_START:
                nodes.append(self._parse_element(token))
            elif token.type == TokenType.END_TAG_OPEN:
                self._parse_end_tag(closing)
                return nodes
            else:
                raise self._error(
                    f"unexpected {token.type.name.lower()} {token.value!r}",
                    token,
                    element=closing,
                )

    def _parse_end_tag(self, closing: str | None) -> None:
        """Consume ``</name>`` and check it against the open element."""
        self._advance()  # consume '</'
        name_token = self._expect(TokenType.ELEMENT_NAME, closing)
        name = name_token.value

        if closing is None:
            raise self._error(f"unexpected closing tag </{name}>", name_token, element=name)
        if name != closing:
            raise self._error(
                f"tag names mismatched: open='{closing}', close='{name}'",
                name_token,
                element=closing,
                closing=name,
            )
        self._expect(TokenType.END_TAG_CLOSE, closing)

    def _parse_element(self, opener: Token) -> Element:
        """Parse a start tag and, unless it self-closes, its children."""
        self._advance()  # consume '<'

        name = self._expect(TokenType.ELEMENT_NAME, None).value
        if not name:
            raise self._error("element name not found", opener)

        attrs: dict[str, str] = {}
        while True:
            token = self._current
            if token is None or token.type == TokenType.EOF:
                raise self._error(f"unclosed start tag <{name}>", opener, element=name)

            if token.type == TokenType.ATTRIBUTE_NAME:
                if not token.value:
                    raise self._error("attribute name not found", token, element=name)
                self._advance()
                self._expect(TokenType.EQUALS, name)
                value = self._expect(TokenType.VALUE, name)
                attrs[token.value] = decode_attribute(value.value)

            elif token.type == TokenType.TAG_CLOSE:
                self._advance()
                if name in EMPTY_ELEMENTS:
                    return Element(name, attrs, (), lineno=opener.lineno)
                children = self._parse_nodes(name, opener)
                return Element(name, attrs, tuple(children), lineno=opener.lineno)

            elif token.type == TokenType.SELF_CLOSING_TAG_CLOSE:
                self._advance()
                return Element(name, attrs, (), lineno=opener.lineno)

            else:
                raise self._error(
                    f"unexpected {token.type.name.lower()} {token.value!r} in <{name}>",
                    token,
                    element=name,
                )
