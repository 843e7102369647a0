"""Instruction: one unit of compiled output.

The host engine executes a flat list of instructions; nesting is encoded
by the indent field alone.

Thread Safety:
Instruction is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from rdml.commands.values import Param

# Parameterless sentinel closing every script scope
TERMINATOR_OPCODE = 0


@dataclass(frozen=True, slots=True)
class Instruction:
    """A compiled instruction.

    Attributes:
        opcode: Host command code
        indent: Nesting depth (0 at procedure level)
        params: Ordered parameters (int, float, str, bool or list)

    """

    opcode: int
    indent: int = 0
    params: tuple[Param, ...] = ()

    @classmethod
    def terminator(cls, indent: int) -> Instruction:
        """The scope terminator at indent."""
        return cls(TERMINATOR_OPCODE, indent, ())

    @property
    def is_terminator(self) -> bool:
        return self.opcode == TERMINATOR_OPCODE and not self.params

    def __repr__(self) -> str:
        return f"Instruction({self.opcode}, {self.indent}, {list(self.params)!r})"
