"""Emission functions for command descriptors.

Two generic shapes cover most commands:

- leaf: one instruction at the current depth; children are ignored.
- block: a start instruction at depth d, the child commands at d + 1,
  then an end instruction at depth d.

Instruction parameters are described as data, not code:

- Ref(key, index): the index-th value of a resolved argument
- Const(value): a literal
- Choose(key, table): a value picked by which alternative of a group
  matched (also usable as the opcode)

Example:
    >>> emit = leaf(Choose("actor", {"hpof": 311, "mpof": 312}), Ref("actor"))

Thread Safety:
Parameter sources are frozen dataclasses; emitters close over them only.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from rdml.commands.values import Param

if TYPE_CHECKING:
    from rdml.commands.schema import Arguments, EmitFunc
    from rdml.compiler import Compiler
    from rdml.nodes import Element


class ParamSource(Protocol):
    def __call__(self, args: Arguments) -> Param: ...


@dataclass(frozen=True, slots=True)
class Ref:
    """The index-th converted value of argument key."""

    key: str
    index: int = 0

    def __call__(self, args: Arguments) -> Param:
        return args.value(self.key, self.index)


@dataclass(frozen=True, slots=True)
class Const:
    """A literal parameter."""

    value: Param

    def __call__(self, args: Arguments) -> Param:
        return self.value


@dataclass(frozen=True, slots=True)
class Choose:
    """Value selected by the alternative that matched group key."""

    key: str
    table: Mapping[str, Param] = field(default_factory=dict)

    def __call__(self, args: Arguments) -> Param:
        return self.table[args.attr(self.key) or ""]


def _opcode(opcode: int | ParamSource, args: Arguments) -> int:
    if isinstance(opcode, int):
        return opcode
    value = opcode(args)
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"opcode must be an int, got {value!r}"
        raise TypeError(msg)
    return value


def resolve_params(params: tuple[ParamSource, ...], args: Arguments) -> tuple[Param, ...]:
    return tuple(p(args) for p in params)


def leaf(opcode: int | ParamSource, *params: ParamSource) -> EmitFunc:
    """Emission function writing exactly one instruction.

    Args:
        opcode: Opcode, or a parameter source (typically Choose) yielding it
        *params: Parameter sources, in instruction order
    """

    def emit(compiler: Compiler, element: Element, args: Arguments, depth: int) -> None:
        compiler.emit(_opcode(opcode, args), depth, resolve_params(params, args))

    return emit


def block(
    start: int | ParamSource,
    end: int,
    *params: ParamSource,
    body_terminator: bool = False,
) -> EmitFunc:
    """Emission function wrapping the element's child commands.

    Args:
        start: Opcode of the opening instruction
        end: Opcode of the closing instruction (no parameters)
        *params: Parameter sources for the opening instruction
        body_terminator: Also close the body scope with the terminator
            instruction at depth + 1, as branch and loop bodies require
    """

    def emit(compiler: Compiler, element: Element, args: Arguments, depth: int) -> None:
        compiler.emit(_opcode(start, args), depth, resolve_params(params, args))
        compiler.compile_children(element, depth + 1, terminate=body_terminator)
        compiler.emit(end, depth, ())

    return emit


def dispatch(key: str, emitters: Mapping[str, EmitFunc]) -> EmitFunc:
    """Emission function delegating on the alternative that matched key.

    Args:
        key: Attribute group key
        emitters: Alternative name to emission function
    """
    table = dict(emitters)

    def emit(compiler: Compiler, element: Element, args: Arguments, depth: int) -> None:
        table[args.attr(key) or ""](compiler, element, args, depth)

    return emit
