"""Tests for the recursive descent tree builder."""

import pytest

from rdml import parse
from rdml.errors import ParseError, ScanError
from rdml.nodes import Element, Text
from rdml.parser import Parser


class TestElements:
    """Element structure and attributes."""

    @pytest.mark.parametrize("source", ["<a/>", "<a />", "<a   \n\t/>", "<a></a>"])
    def test_childless_forms(self, source: str) -> None:
        """Self-closing and empty elements parse identically."""
        (node,) = parse(source)
        assert isinstance(node, Element)
        assert node.name == "a"
        assert node.children == ()

    def test_attributes(self) -> None:
        (node,) = parse('<heal hpof="1" n="50"/>')
        assert dict(node.attrs) == {"hpof": "1", "n": "50"}

    def test_duplicate_attribute_last_wins(self) -> None:
        (node,) = parse('<a b="1" b="2"/>')
        assert node.attrs["b"] == "2"

    def test_attribute_entities_decoded(self) -> None:
        (node,) = parse('<m face="a &quot;b&quot; &amp; c"/>')
        assert node.get("face") == 'a "b" & c'

    def test_attrs_are_read_only(self) -> None:
        (node,) = parse('<a b="1"/>')
        with pytest.raises(TypeError):
            node.attrs["b"] = "2"  # type: ignore[index]

    def test_nested_children(self) -> None:
        (node,) = parse('<if switch="1"><wait time="1"/><break/></if>')
        assert [c.name for c in node.elements] == ["wait", "break"]
        assert node.elements[0].attrs["time"] == "1"

    def test_siblings_after_nested_element(self) -> None:
        """Closing an element consumes exactly its end tag."""
        nodes = parse("<a><b></b></a><c/><d/>")
        assert [n.name for n in nodes] == ["a", "c", "d"]
        assert [n.name for n in nodes[0].elements] == ["b"]

    def test_line_numbers(self) -> None:
        nodes = parse('<loop>\n  <wait time="1"/>\n</loop>')
        assert nodes[0].lineno == 1
        assert nodes[0].elements[0].lineno == 2


class TestText:
    """Character data."""

    def test_text_entities_decoded(self) -> None:
        (node,) = parse("<m>a &lt;b&gt; &amp;amp;</m>")
        assert node.data == "a <b> &amp;"

    def test_top_level_text(self) -> None:
        nodes = parse("hello <br/> world")
        assert isinstance(nodes[0], Text)
        assert nodes[0].content == "hello "
        assert isinstance(nodes[1], Element)
        assert nodes[2].content == " world"

    def test_no_empty_text_nodes(self) -> None:
        nodes = parse("<a/><b/>")
        assert all(isinstance(n, Element) for n in nodes)

    def test_empty_source(self) -> None:
        assert parse("") == []


class TestEmptyElements:
    """``br`` never has children."""

    @pytest.mark.parametrize("source", ["<br>", "<br/>", "<br />"])
    def test_br_forms(self, source: str) -> None:
        (node,) = parse(source)
        assert node.name == "br"
        assert node.children == ()
        assert node.is_empty

    def test_br_does_not_swallow_siblings(self) -> None:
        (m,) = parse("<m>one<br>two</m>")
        assert [type(c).__name__ for c in m.children] == ["Text", "Element", "Text"]

    def test_stray_br_end_tag(self) -> None:
        with pytest.raises(ParseError, match=r"unexpected closing tag </br>"):
            parse("<br>x</br>")


class TestStructuralErrors:
    """Mismatched, missing and unexpected tags."""

    def test_mismatched_names(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("<a>...</b>")
        err = exc_info.value
        assert err.element == "a"
        assert err.closing == "b"
        assert "open='a'" in str(err)
        assert "close='b'" in str(err)

    def test_missing_closing_tag(self) -> None:
        with pytest.raises(ParseError, match=r"closing tag </loop> not found") as exc_info:
            parse('<loop>\n<wait time="1"/>')
        assert exc_info.value.lineno == 1

    def test_unexpected_top_level_end_tag(self) -> None:
        with pytest.raises(ParseError, match=r"unexpected closing tag </a>"):
            parse("</a>")

    def test_empty_element_name(self) -> None:
        with pytest.raises(ParseError, match="element name not found"):
            parse("<>")

    def test_empty_attribute_name(self) -> None:
        with pytest.raises(ParseError, match="attribute name not found"):
            parse('<a ="1"/>')

    def test_source_file_in_message(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("<a>", source_file="town.rdml")
        assert str(exc_info.value).startswith("town.rdml:1 ")

    def test_lexical_errors_propagate(self) -> None:
        with pytest.raises(ScanError):
            parse('<a b="1>')


class TestParserClass:
    def test_from_source(self) -> None:
        nodes = Parser.from_source("<a/>").parse()
        assert nodes == [Element("a", lineno=1)]

    def test_nodes_compare_by_value(self) -> None:
        assert parse('<a b="1"><c/></a>') == parse('<a  b="1" ><c /></a >')
