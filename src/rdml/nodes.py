"""Tree nodes for parsed RDML.

A document is a sequence of nodes; a node is either an Element or a Text
leaf. Elements are frozen dataclasses holding their attributes and an
ordered tuple of children.

Node Hierarchy:
Node
├── Element   name, attrs, children
└── Text      content

Thread Safety:
All nodes are frozen and safe to share across threads. The attrs mapping
is a read-only view.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Elements that never have children, however they were written
EMPTY_ELEMENTS = frozenset({"br"})


@dataclass(frozen=True, slots=True)
class Text:
    """Character data with entities already decoded."""

    content: str
    lineno: int = 0


@dataclass(frozen=True, slots=True)
class Element:
    """A markup element.

    Attributes:
        name: Element name
        attrs: Attribute name to decoded value. For a duplicated attribute
            the last occurrence wins.
        children: Child nodes in document order
        lineno: Line of the opening '<' (1-indexed, 0 if synthetic)

    """

    name: str
    attrs: Mapping[str, str] = field(default_factory=dict)
    children: tuple[Node, ...] = ()
    lineno: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.attrs, MappingProxyType):
            object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    @property
    def elements(self) -> tuple[Element, ...]:
        """Child elements, text nodes filtered out."""
        return tuple(c for c in self.children if isinstance(c, Element))

    @property
    def data(self) -> str:
        """Concatenated content of the direct text children."""
        return "".join(c.content for c in self.children if isinstance(c, Text))

    @property
    def is_empty(self) -> bool:
        """True for names that are always childless (e.g. ``br``)."""
        return self.name in EMPTY_ELEMENTS

    def get(self, attr: str, default: str | None = None) -> str | None:
        """Attribute value, or default when absent."""
        return self.attrs.get(attr, default)


Node = Element | Text
