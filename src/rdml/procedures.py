"""Compile documents holding several named procedures.

A document lists ``<proc name="...">`` elements at top level, optionally
grouped in ``<package name="...">``::

    <package name="town">
      <proc name="greet">
        <m>Welcome!</m>
      </proc>
    </package>
    <proc name="rest"><wait time="30"/></proc>

Each procedure body compiles independently, like a whole `compile` call.
Procedures are keyed ``"town.greet"`` and ``"rest"``. Storing and invoking
them is left to the host.
"""

from __future__ import annotations

from collections.abc import Sequence

from rdml.commands.registry import CommandRegistry
from rdml.compiler import Compiler
from rdml.errors import CompileError, MissingAttributeError
from rdml.instructions import Instruction
from rdml.nodes import Element, Node, Text
from rdml.utils.logger import get_logger

logger = get_logger(__name__)

PROC = "proc"
PACKAGE = "package"


def _name_of(element: Element) -> str:
    name = element.get("name")
    if not name:
        raise MissingAttributeError(element.name, "name", ("name",), lineno=element.lineno or None)
    return name


def _elements(nodes: Sequence[Node], parent: str) -> list[Element]:
    elements: list[Element] = []
    for node in nodes:
        if isinstance(node, Text):
            if node.content.strip():
                raise CompileError(parent, "unexpected text", lineno=node.lineno or None)
            continue
        elements.append(node)
    return elements


def compile_procedure_nodes(
    nodes: Sequence[Node],
    registry: CommandRegistry | None = None,
) -> dict[str, tuple[Instruction, ...]]:
    """Compile every procedure in a parsed document.

    Args:
        nodes: Top-level nodes of the document
        registry: Command registry (configured or default registry if None)

    Returns:
        Qualified procedure name to its instructions, in document order.

    Raises:
        CompileError: For unnamed or duplicate procedures, unexpected
            top-level content, or any error inside a procedure body.
    """
    procedures: dict[str, tuple[Instruction, ...]] = {}

    def add(proc: Element, prefix: str) -> None:
        qualified = prefix + _name_of(proc)
        if qualified in procedures:
            raise CompileError(
                PROC,
                f"duplicate procedure '{qualified}'",
                lineno=proc.lineno or None,
            )
        procedures[qualified] = Compiler(registry).compile(proc.children)
        logger.debug("Compiled procedure %s (%d instructions)", qualified, len(procedures[qualified]))

    for element in _elements(nodes, "(document)"):
        if element.name == PROC:
            add(element, "")
        elif element.name == PACKAGE:
            prefix = _name_of(element) + "."
            for child in _elements(element.children, PACKAGE):
                if child.name != PROC:
                    raise CompileError(
                        child.name,
                        f"unexpected element in <{PACKAGE}>",
                        lineno=child.lineno or None,
                    )
                add(child, prefix)
        else:
            raise CompileError(
                element.name,
                "unexpected top-level element",
                lineno=element.lineno or None,
            )
    return procedures
