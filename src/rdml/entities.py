"""Entity decoding for RDML text and attribute values.

Only a handful of named entities are recognized, and which ones depends
on context:

- Character data: ``&lt;`` ``&gt;`` ``&amp;``
- Attribute values: ``&quot;`` ``&apos;`` ``&amp;``

Anything else (including numeric references) is left untouched.
Decoding is a single left-to-right pass, so ``&amp;lt;`` decodes to
``&lt;`` and never to ``<``.
"""

from __future__ import annotations

import re

TEXT_ENTITIES: dict[str, str] = {
    "&lt;": "<",
    "&gt;": ">",
    "&amp;": "&",
}

ATTRIBUTE_ENTITIES: dict[str, str] = {
    "&quot;": '"',
    "&apos;": "'",
    "&amp;": "&",
}

_TEXT_RE = re.compile("|".join(re.escape(e) for e in TEXT_ENTITIES))
_ATTRIBUTE_RE = re.compile("|".join(re.escape(e) for e in ATTRIBUTE_ENTITIES))


def decode_text(raw: str) -> str:
    """Decode entities in character data.

    Example:
        >>> decode_text("a &lt;b&gt; &amp;amp;")
        'a <b> &amp;'
    """
    if "&" not in raw:
        return raw
    return _TEXT_RE.sub(lambda m: TEXT_ENTITIES[m.group(0)], raw)


def decode_attribute(raw: str) -> str:
    """Decode entities in an attribute value.

    Example:
        >>> decode_attribute("say &quot;hi&quot;")
        'say "hi"'
    """
    if "&" not in raw:
        return raw
    return _ATTRIBUTE_RE.sub(lambda m: ATTRIBUTE_ENTITIES[m.group(0)], raw)
