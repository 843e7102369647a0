"""Value types: validating converters from attribute strings to parameters.

A value type turns one raw attribute string into an ordered tuple of one
or more instruction parameters, or raises ConversionError. Value types
are small frozen dataclasses and compose: `Match` dispatches to other
value types.

Thread Safety:
All value types are frozen dataclasses (immutable).
Safe to share across threads.

Example:
    >>> actor = Match({"all": Fixed(0), "": BoundedInt(1)})
    >>> actor.convert("all")
    (0,)
    >>> actor.convert("3")
    (3,)

"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from rdml.errors import ConversionError

Param = int | float | str | bool | list

_INT_RE = re.compile(r"[+-]?[0-9]+")
_RANGE_SEPARATOR = ".."

TRUE_LITERALS = frozenset({"true", "on", "yes", "1"})
FALSE_LITERALS = frozenset({"false", "off", "no", "0"})


@runtime_checkable
class ValueType(Protocol):
    """Protocol for value types.

    Attributes:
        description: Human-readable summary used in error messages and docs.
    """

    description: str

    def convert(self, raw: str) -> tuple[Param, ...]:
        """Convert a raw attribute value.

        Raises:
            ConversionError: If raw is not acceptable.
        """
        ...


def _parse_int(raw: str) -> int:
    text = raw.strip()
    if not _INT_RE.fullmatch(text):
        msg = f'cannot parse "{raw}" as integer value'
        raise ConversionError(msg)
    try:
        return int(text)
    except ValueError as e:
        # More digits than the interpreter converts
        msg = f'cannot parse "{raw}" as integer value'
        raise ConversionError(msg) from e


def _check_bounds(raw: str, value: int, min: int | None, max: int | None) -> None:
    if min is not None and value < min:
        msg = f"expected {raw} >= {min}"
        raise ConversionError(msg)
    if max is not None and value > max:
        msg = f"expected {raw} <= {max}"
        raise ConversionError(msg)


@dataclass(frozen=True, slots=True)
class Fixed:
    """Ignores its input and always yields one constant."""

    value: Param
    description: str = "constant"

    def convert(self, raw: str) -> tuple[Param, ...]:
        return (self.value,)


@dataclass(frozen=True, slots=True)
class BoundedInt:
    """Decimal integer within the inclusive window ``[min, max]``.

    Either bound may be None (unbounded).
    """

    min: int | None = None
    max: int | None = None
    description: str = "integer"

    def convert(self, raw: str) -> tuple[Param, ...]:
        value = _parse_int(raw)
        _check_bounds(raw, value, self.min, self.max)
        return (value,)


@dataclass(frozen=True, slots=True)
class IntRange:
    """Integer or inclusive integer range, yielding ``(start, end)``.

    ``"3"`` gives ``(3, 3)``; ``"3..7"`` gives ``(3, 7)``.
    """

    min: int | None = None
    max: int | None = None
    description: str = "integer or range (a..b)"

    def convert(self, raw: str) -> tuple[Param, ...]:
        if _RANGE_SEPARATOR in raw:
            first, _, last = raw.partition(_RANGE_SEPARATOR)
            start, end = _parse_int(first), _parse_int(last)
        else:
            start = end = _parse_int(raw)
        if start > end:
            msg = f"range {raw} is reversed"
            raise ConversionError(msg)
        _check_bounds(raw, start, self.min, self.max)
        _check_bounds(raw, end, self.min, self.max)
        return (start, end)


@dataclass(frozen=True, slots=True)
class Boolean:
    """``true/on/yes/1`` or ``false/off/no/0`` (case-insensitive)."""

    description: str = "boolean"

    def convert(self, raw: str) -> tuple[Param, ...]:
        text = raw.strip().lower()
        if text in TRUE_LITERALS:
            return (True,)
        if text in FALSE_LITERALS:
            return (False,)
        msg = f'cannot parse "{raw}" as boolean value'
        raise ConversionError(msg)


@dataclass(frozen=True, slots=True)
class Text:
    """Passes the raw string through."""

    description: str = "text"

    def convert(self, raw: str) -> tuple[Param, ...]:
        return (raw,)


@dataclass(frozen=True, slots=True)
class Match:
    """Dispatch on the exact literal.

    A matched case is converted with the empty string, so cases are
    usually `Fixed`. Unmatched input is passed verbatim to the case named
    by `fallback` (``""`` by default).
    """

    cases: Mapping[str, ValueType] = field(default_factory=dict)
    fallback: str = ""
    description: str = "keyword"

    def convert(self, raw: str) -> tuple[Param, ...]:
        if raw != self.fallback and raw in self.cases:
            return self.cases[raw].convert("")
        if self.fallback in self.cases:
            return self.cases[self.fallback].convert(raw)
        accepted = ", ".join(repr(k) for k in self.cases if k != self.fallback)
        msg = f"{raw!r} is not one of {accepted}"
        raise ConversionError(msg)

    @property
    def literals(self) -> tuple[str, ...]:
        """Accepted literal keywords (fallback excluded)."""
        return tuple(k for k in self.cases if k != self.fallback)
