"""Text commands: m (message window) and comment.

A message is written as character data; blank lines start a new window
and ``<br/>`` forces a line break::

    <m face="Actor1" index="2">
      Hello there.
      How are you?

      This is a second window.
    </m>

Each window becomes one header instruction followed by one instruction
per line. Windows longer than MESSAGE_LINES lines are split.
"""

from __future__ import annotations

import re
import textwrap
from typing import TYPE_CHECKING

from rdml.commands.emitters import Ref
from rdml.commands.schema import Arguments, CommandDescriptor, group
from rdml.commands.values import BoundedInt, Fixed, Match, Text
from rdml.errors import CompileError
from rdml.nodes import Element
from rdml.nodes import Text as TextNode

if TYPE_CHECKING:
    from rdml.compiler import Compiler

MESSAGE_LINES = 4

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")

MESSAGE_HEADER = Ref("face"), Ref("index"), Ref("background"), Ref("position")


def _flatten(element: Element) -> str:
    """Character data of element, with ``<br/>`` as a line feed."""
    parts: list[str] = []
    for child in element.children:
        if isinstance(child, TextNode):
            parts.append(child.content)
        elif child.name == "br":
            parts.append("\n")
        else:
            raise CompileError(
                element.name,
                f"unexpected element <{child.name}> in text",
                lineno=child.lineno or None,
            )
    return "".join(parts)


def split_windows(text: str, max_lines: int = MESSAGE_LINES) -> list[list[str]]:
    """Split text into windows of at most max_lines stripped lines.

    Blank lines separate windows and are otherwise dropped.

    Example:
        >>> split_windows("a\\nb\\n\\nc")
        [['a', 'b'], ['c']]
    """
    windows: list[list[str]] = []
    current: list[str] = []
    for raw in _NEWLINE_RE.split(text):
        line = raw.strip()
        if not line:
            if current:
                windows.append(current)
                current = []
            continue
        if len(current) == max_lines:
            windows.append(current)
            current = []
        current.append(line)
    if current:
        windows.append(current)
    return windows


def _emit_message(compiler: Compiler, element: Element, args: Arguments, depth: int) -> None:
    windows = split_windows(_flatten(element))
    if not windows:
        raise CompileError(element.name, "empty message", lineno=element.lineno or None)

    header = tuple(p(args) for p in MESSAGE_HEADER)
    for lines in windows:
        compiler.emit(101, depth, header)
        for line in lines:
            compiler.emit(401, depth, (line,))


def _emit_comment(compiler: Compiler, element: Element, args: Arguments, depth: int) -> None:
    lines = [line.rstrip() for line in _NEWLINE_RE.split(textwrap.dedent(_flatten(element)))]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        lines = [""]

    compiler.emit(108, depth, (lines[0],))
    for line in lines[1:]:
        compiler.emit(408, depth, (line,))


MESSAGE = CommandDescriptor(
    name="m",
    description="Show text in a message window.",
    groups=(
        group("face", value=Text(description="face image name"), default=""),
        group("index", value=BoundedInt(0, 7, description="face index"), default="0"),
        group(
            "background",
            value=Match({"window": Fixed(0), "dim": Fixed(1), "transparent": Fixed(2)}),
            default="window",
        ),
        group(
            "position",
            value=Match({"top": Fixed(0), "middle": Fixed(1), "bottom": Fixed(2)}),
            default="bottom",
        ),
    ),
    emit=_emit_message,
    aliases=("message",),
)

COMMENT = CommandDescriptor(
    name="comment",
    description="Editor comment; no effect at run time.",
    groups=(),
    emit=_emit_comment,
)

TEXT_COMMANDS = (MESSAGE, COMMENT)
