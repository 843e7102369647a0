"""Declarative command schema.

A command is described by data, not by a class per command:

- AttributeGroup: one or more mutually exclusive attribute names sharing
  one value type, plus a default policy (REQUIRED or a default literal).
- CommandDescriptor: description, ordered attribute groups and an
  emission function.
- Arguments: the resolved groups of one element, handed to the emission
  function. Each Argument records which alternative matched, since
  emission may branch on it (``hpof`` vs ``mpof``).

Thread Safety:
All schema objects are frozen dataclasses. Arguments is immutable.
Safe to share across threads.

Example:
    >>> WAIT = CommandDescriptor(
    ...     name="wait",
    ...     description="Wait for a number of frames.",
    ...     groups=(AttributeGroup("time", ("time",), BoundedInt(0)),),
    ...     emit=leaf(230, Ref("time")),
    ... )

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from rdml.commands.values import Param, ValueType

if TYPE_CHECKING:
    from rdml.compiler import Compiler
    from rdml.nodes import Element


class _Required:
    """Sentinel for attribute groups without a default."""

    _instance: _Required | None = None

    def __new__(cls) -> _Required:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REQUIRED"

    def __reduce__(self) -> str:
        return "REQUIRED"


REQUIRED: Final = _Required()

# emit(compiler, element, args, depth)
EmitFunc = Callable[["Compiler", "Element", "Arguments", int], None]


@dataclass(frozen=True, slots=True)
class AttributeGroup:
    """A set of mutually exclusive attributes sharing one value type.

    Attributes:
        key: Argument name the group resolves to
        alternatives: Accepted attribute names, in priority order
        value_type: Converter applied to the present attribute's value
        default: REQUIRED, or a raw literal converted by value_type when
            none of the alternatives is present
        description: Human-readable summary
        requires: ``(group_key, alternative)``; the group only applies when
            that earlier group matched that alternative

    """

    key: str
    alternatives: tuple[str, ...]
    value_type: ValueType
    default: str | _Required = REQUIRED
    description: str = ""
    requires: tuple[str, str] | None = None

    def __post_init__(self) -> None:
        if not self.alternatives:
            msg = f"attribute group '{self.key}' has no alternatives"
            raise ValueError(msg)

    @property
    def is_required(self) -> bool:
        return self.default is REQUIRED

    def present(self, attrs: Mapping[str, str]) -> tuple[str, ...]:
        """Alternatives present in attrs, in declared order."""
        return tuple(a for a in self.alternatives if a in attrs)


def group(
    *alternatives: str,
    value: ValueType,
    default: str | _Required = REQUIRED,
    key: str | None = None,
    description: str = "",
    requires: tuple[str, str] | None = None,
) -> AttributeGroup:
    """Shorthand for AttributeGroup.

    The key defaults to the single alternative; groups with several
    alternatives must name their key.
    """
    if key is None:
        if len(alternatives) != 1:
            msg = f"attribute group {alternatives} needs an explicit key"
            raise ValueError(msg)
        key = alternatives[0]
    return AttributeGroup(
        key=key,
        alternatives=tuple(alternatives),
        value_type=value,
        default=default,
        description=description,
        requires=requires,
    )


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """Everything the compiler needs to know about one element name.

    Attributes:
        name: Element name
        description: Human-readable summary
        groups: Attribute groups, resolved in this order
        emit: Emission function
        aliases: Extra element names for the same command

    """

    name: str
    description: str
    groups: tuple[AttributeGroup, ...]
    emit: EmitFunc
    aliases: tuple[str, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    @property
    def attributes(self) -> frozenset[str]:
        """Every attribute name accepted by some group."""
        return frozenset(a for g in self.groups for a in g.alternatives)


@dataclass(frozen=True, slots=True)
class Argument:
    """A resolved attribute group.

    Attributes:
        attr: Attribute name that matched (the first alternative when
            the default was used)
        values: Converted parameters
        defaulted: True when no alternative was present

    """

    attr: str
    values: tuple[Param, ...]
    defaulted: bool = False


class Arguments(Mapping[str, Argument]):
    """Immutable mapping of group key to Argument."""

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, Argument] | None = None) -> None:
        self._items: dict[str, Argument] = dict(items or {})

    def __repr__(self) -> str:
        return f"Arguments({self._items!r})"

    def __getitem__(self, key: str) -> Argument:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def value(self, key: str, index: int = 0) -> Param:
        """The index-th converted value of group key."""
        return self._items[key].values[index]

    def attr(self, key: str) -> str | None:
        """Attribute that matched group key, None if the group was skipped."""
        argument = self._items.get(key)
        return argument.attr if argument is not None else None
