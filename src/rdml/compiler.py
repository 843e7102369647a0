"""Schema-driven compiler from element trees to instruction lists.

Each element is looked up in the command registry, its attribute groups
are resolved into an Arguments mapping, and the descriptor's emission
function appends instructions. Block commands call back into the
compiler for their children, one depth deeper.

Every scope, the procedure itself included, ends with one terminator
instruction (opcode 0, no parameters) when the host format requires it.

Thread Safety:
Compiler instances are single-use and not thread-safe. Create one per
compile operation. The registry is immutable and may be shared.

"""

from __future__ import annotations

from collections.abc import Sequence

from rdml.commands.registry import CommandRegistry, create_default_registry
from rdml.commands.schema import Argument, Arguments, AttributeGroup, CommandDescriptor
from rdml.commands.values import Param
from rdml.config import get_compile_config
from rdml.errors import (
    CompileError,
    ConflictingAttributesError,
    ConversionError,
    InvalidAttributeError,
    MissingAttributeError,
    UnknownAttributeError,
    UnknownCommandError,
)
from rdml.instructions import Instruction
from rdml.nodes import Element, Node, Text
from rdml.utils.logger import get_logger

logger = get_logger(__name__)


class Compiler:
    """Compiles element trees into a flat instruction list.

    Usage:
        >>> nodes = Parser.from_source('<wait time="60"/>').parse()
        >>> Compiler().compile(nodes)
        (Instruction(230, 0, [60]), Instruction(0, 0, []))

    Configuration:
        Reads CompileConfig from ContextVar at construction. An explicit
        registry argument takes precedence over the configured one.

    """

    __slots__ = (
        "_registry",
        "_instructions",
        "_strict_alternatives",
        "_strict_attributes",
    )

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        config = get_compile_config()
        if registry is None:
            registry = config.command_registry
        if registry is None:
            registry = create_default_registry()
        self._registry = registry
        self._strict_alternatives = config.strict_alternatives
        self._strict_attributes = config.strict_attributes
        self._instructions: list[Instruction] = []

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    def compile(self, nodes: Sequence[Node]) -> tuple[Instruction, ...]:
        """Compile top-level nodes as one procedure at depth 0.

        Returns:
            Instructions, ending with the procedure's terminator.

        Raises:
            CompileError: On the first unknown command or invalid
                attribute. No partial output is returned.
        """
        self._instructions = []
        self.compile_nodes(nodes, 0, parent=None, terminate=True)
        logger.debug("Compiled %d instructions", len(self._instructions))
        return tuple(self._instructions)

    # =========================================================================
    # Emission API (used by emission functions)
    # =========================================================================

    def emit(self, opcode: int, depth: int, params: Sequence[Param] = ()) -> None:
        """Append one instruction."""
        self._instructions.append(Instruction(opcode, depth, tuple(params)))

    def compile_children(self, element: Element, depth: int, *, terminate: bool = False) -> None:
        """Compile the child commands of element at depth."""
        self.compile_nodes(element.children, depth, parent=element.name, terminate=terminate)

    def compile_nodes(
        self,
        nodes: Sequence[Node],
        depth: int,
        *,
        parent: str | None,
        terminate: bool,
    ) -> None:
        """Compile a sequence of sibling commands.

        Whitespace between commands is ignored; any other text is an error.

        Args:
            nodes: Sibling nodes
            depth: Nesting depth of the siblings
            parent: Enclosing command name, None at procedure level
            terminate: Close the scope with a terminator instruction
        """
        for node in nodes:
            if isinstance(node, Text):
                if node.content.strip():
                    raise CompileError(
                        parent or "(procedure)",
                        f"unexpected text {_excerpt(node.content)!r}",
                        lineno=node.lineno or None,
                    )
                continue
            self.compile_element(node, depth)

        if terminate:
            self._instructions.append(Instruction.terminator(depth))

    def compile_element(self, element: Element, depth: int) -> None:
        """Compile one command element at depth.

        Raises:
            UnknownCommandError: If the element name is not registered.
            CompileError: If an attribute group cannot be resolved.
        """
        descriptor = self._registry.get(element.name)
        if descriptor is None:
            raise UnknownCommandError(element.name, lineno=element.lineno or None)

        args = self.resolve_arguments(element, descriptor)
        descriptor.emit(self, element, args, depth)

    # =========================================================================
    # Attribute resolution
    # =========================================================================

    def resolve_arguments(self, element: Element, descriptor: CommandDescriptor) -> Arguments:
        """Resolve every attribute group of descriptor against element.

        Returns:
            Arguments keyed by group key. Groups whose dependency is not
            met and that have no attribute present are left out.
        """
        lineno = element.lineno or None
        attrs = element.attrs

        if self._strict_attributes:
            known = descriptor.attributes
            for attr in attrs:
                if attr not in known:
                    raise UnknownAttributeError(element.name, attr, lineno=lineno)

        resolved: dict[str, Argument] = {}
        for group in descriptor.groups:
            argument = self._resolve_group(element, group, resolved)
            if argument is not None:
                resolved[group.key] = argument
        return Arguments(resolved)

    def _resolve_group(
        self,
        element: Element,
        group: AttributeGroup,
        resolved: dict[str, Argument],
    ) -> Argument | None:
        lineno = element.lineno or None
        present = group.present(element.attrs)

        if group.requires is not None:
            required_key, required_alt = group.requires
            dependency = resolved.get(required_key)
            if dependency is None or dependency.attr != required_alt:
                if present:
                    raise InvalidAttributeError(
                        element.name,
                        group.key,
                        present[0],
                        f"only valid with '{required_alt}'",
                        lineno=lineno,
                    )
                return None

        if len(present) > 1:
            if self._strict_alternatives:
                raise ConflictingAttributesError(element.name, group.key, present, lineno=lineno)
            logger.warning(
                "Conflicting attributes on <%s> (line %s): %s; using '%s'",
                element.name,
                element.lineno,
                ", ".join(present),
                present[0],
            )

        if present:
            attr = present[0]
            raw = element.attrs[attr]
            defaulted = False
        elif group.is_required:
            raise MissingAttributeError(element.name, group.key, group.alternatives, lineno=lineno)
        else:
            attr = group.alternatives[0]
            raw = str(group.default)
            defaulted = True

        try:
            values = group.value_type.convert(raw)
        except ConversionError as e:
            raise InvalidAttributeError(element.name, group.key, attr, str(e), lineno=lineno) from e

        return Argument(attr, values, defaulted=defaulted)


def _excerpt(text: str, limit: int = 20) -> str:
    text = text.strip()
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text
