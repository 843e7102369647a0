"""Tests for context-dependent entity decoding."""

import pytest

from rdml.entities import decode_attribute, decode_text


class TestDecodeText:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("&lt;", "<"),
            ("&gt;", ">"),
            ("&amp;", "&"),
            ("a &lt;b&gt; c", "a <b> c"),
            ("plain", "plain"),
        ],
    )
    def test_known_entities(self, raw: str, expected: str) -> None:
        assert decode_text(raw) == expected

    def test_single_pass(self) -> None:
        """Decoded output is never decoded again."""
        assert decode_text("&amp;lt;") == "&lt;"

    def test_attribute_entities_untouched(self) -> None:
        assert decode_text("&quot;&apos;") == "&quot;&apos;"

    def test_unknown_and_numeric_untouched(self) -> None:
        assert decode_text("&nbsp; &#60; &") == "&nbsp; &#60; &"


class TestDecodeAttribute:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("&quot;", '"'),
            ("&apos;", "'"),
            ("&amp;", "&"),
            ("say &quot;hi&quot;", 'say "hi"'),
        ],
    )
    def test_known_entities(self, raw: str, expected: str) -> None:
        assert decode_attribute(raw) == expected

    def test_text_entities_untouched(self) -> None:
        assert decode_attribute("&lt;&gt;") == "&lt;&gt;"

    def test_single_pass(self) -> None:
        assert decode_attribute("&amp;quot;") == "&quot;"
