"""Tests for line number tracking in the lexer.

Line numbers are used for every error message the parser and compiler
produce, so each token records the line its first character is on.
"""

from rdml.lexer import Lexer
from rdml.tokens import TokenType


class TestSingleLine:
    def test_all_tokens_on_line_one(self) -> None:
        tokens = Lexer('<wait time="60"/>').tokenize()
        assert {t.lineno for t in tokens} == {1}


class TestMultiLine:
    """Tokens spread over several lines."""

    def test_element_on_later_line(self) -> None:
        source = "\n\n<wait time=\"1\"/>"
        tokens = Lexer(source).tokenize()
        opener = next(t for t in tokens if t.type == TokenType.TAG_OPEN_START)
        assert opener.lineno == 3

    def test_text_token_starts_on_its_first_line(self) -> None:
        """A multi-line TEXT token keeps the line it starts on."""
        source = "<m>\nline one\nline two\n</m>"
        tokens = Lexer(source).tokenize()
        text = next(t for t in tokens if t.type == TokenType.TEXT)
        assert text.lineno == 1
        end = next(t for t in tokens if t.type == TokenType.END_TAG_OPEN)
        assert end.lineno == 4

    def test_attributes_across_lines(self) -> None:
        source = '<heal\n  hpof="1"\n  n="50"/>'
        tokens = Lexer(source).tokenize()
        lines = {t.value: t.lineno for t in tokens if t.type == TokenType.ATTRIBUTE_NAME}
        assert lines == {"hpof": 2, "n": 3}

    def test_value_with_newline_advances_line(self) -> None:
        source = '<a b="x\ny" c="z"/>'
        tokens = Lexer(source).tokenize()
        c = next(t for t in tokens if t.value == "c")
        assert c.lineno == 2

    def test_eof_line(self) -> None:
        eof = Lexer("a\nb\n").tokenize()[-1]
        assert eof.type == TokenType.EOF
        assert eof.lineno == 3

    def test_carriage_return_alone_does_not_count(self) -> None:
        eof = Lexer("a\rb").tokenize()[-1]
        assert eof.lineno == 1
