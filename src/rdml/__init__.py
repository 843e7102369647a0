"""
RDML: Event Script Markup Compiler

Compiles a small XML-like markup into the flat opcode instruction lists
executed by the host game engine. The pipeline has three stages: a
scanner producing tokens, a parser building an element tree, and a
schema-driven compiler that turns each element into instructions.

Quick Start:
    >>> from rdml import compile
    >>> compile('<wait time="60"/>')
    (Instruction(230, 0, [60]), Instruction(0, 0, []))

Custom Commands:
    >>> from rdml import compile, create_registry_with_defaults
    >>> from rdml.commands import CommandDescriptor, BoundedInt, Ref, group, leaf
    >>>
    >>> builder = create_registry_with_defaults()
    >>> builder.register(CommandDescriptor(
    ...     name="se",
    ...     description="Play a sound effect.",
    ...     groups=(group("volume", value=BoundedInt(0, 100), default="90"),),
    ...     emit=leaf(250, Ref("volume")),
    ... ))
    >>> compile("<se/>", builder.build())
    (Instruction(250, 0, [90]), Instruction(0, 0, []))

Installation:
    pip install rdml              # Compiler (zero deps)
    pip install rdml[test]        # + pytest and hypothesis
"""

from rdml.commands.registry import (
    CommandRegistry,
    CommandRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
)
from rdml.compiler import Compiler
from rdml.config import (
    CompileConfig,
    compile_config_context,
    get_compile_config,
    reset_compile_config,
    set_compile_config,
)
from rdml.errors import (
    CompileError,
    ConflictingAttributesError,
    ConversionError,
    InvalidAttributeError,
    MissingAttributeError,
    ParseError,
    RdmlError,
    RegistryError,
    ScanError,
    UnknownAttributeError,
    UnknownCommandError,
)
from rdml.instructions import Instruction
from rdml.lexer import Lexer
from rdml.nodes import Element, Node, Text
from rdml.parser import Parser
from rdml.procedures import compile_procedure_nodes
from rdml.serialization import from_dict, from_json, to_dict, to_json
from rdml.tokens import Token, TokenType

__version__ = "0.1.0"


def scan(source: str, *, source_file: str | None = None) -> list[Token]:
    """Tokenize RDML source.

    Args:
        source: Markup text
        source_file: Optional source file path for error messages

    Returns:
        Tokens, ending with an EOF token

    Raises:
        ScanError: On the first lexical error
    """
    return Lexer(source, source_file=source_file).tokenize()


def parse(source: str, *, source_file: str | None = None) -> list[Node]:
    """Parse RDML source into an element tree.

    Returns:
        Top-level nodes, in document order

    Raises:
        ScanError: On lexical errors
        ParseError: On structural errors (mismatched or missing end tags)
    """
    return Parser(scan(source, source_file=source_file), source_file=source_file).parse()


def compile(
    source: str,
    registry: CommandRegistry | None = None,
    *,
    source_file: str | None = None,
) -> tuple[Instruction, ...]:
    """Compile RDML source into an instruction list.

    Top-level elements are commands at depth 0; the list ends with the
    procedure's terminator.

    Args:
        source: Markup text
        registry: Command registry (uses defaults if None)
        source_file: Optional source file path for error messages

    Returns:
        Instructions in execution order

    Raises:
        ScanError, ParseError, CompileError: On the first error found

    Example:
        >>> compile('<switch id="3" set="off"/>')
        (Instruction(121, 0, [3, 3, 1]), Instruction(0, 0, []))
    """
    nodes = parse(source, source_file=source_file)
    with compile_config_context(_config_for(registry)):
        return Compiler().compile(nodes)


def compile_procedures(
    source: str,
    registry: CommandRegistry | None = None,
    *,
    source_file: str | None = None,
) -> dict[str, tuple[Instruction, ...]]:
    """Compile a document of ``<proc>`` elements, optionally in ``<package>``.

    Returns:
        Qualified procedure name (``"package.name"`` or ``"name"``) to
        that procedure's instructions

    Example:
        >>> compile_procedures('<proc name="rest"><wait time="30"/></proc>')
        {'rest': (Instruction(230, 0, [30]), Instruction(0, 0, []))}
    """
    nodes = parse(source, source_file=source_file)
    with compile_config_context(_config_for(registry)):
        return compile_procedure_nodes(nodes)


def _config_for(registry: CommandRegistry | None) -> CompileConfig:
    # Keep the caller's strictness flags, override only the registry
    current = get_compile_config()
    return CompileConfig(
        command_registry=registry if registry is not None else current.command_registry,
        strict_alternatives=current.strict_alternatives,
        strict_attributes=current.strict_attributes,
    )


__all__ = [
    # Main API
    "compile",
    "compile_procedures",
    "parse",
    "scan",
    # Configuration
    "CompileConfig",
    "compile_config_context",
    "get_compile_config",
    "reset_compile_config",
    "set_compile_config",
    # Commands
    "CommandRegistry",
    "CommandRegistryBuilder",
    "create_default_registry",
    "create_registry_with_defaults",
    # Pipeline classes
    "Compiler",
    "Lexer",
    "Parser",
    # Tokens
    "Token",
    "TokenType",
    # Nodes
    "Element",
    "Node",
    "Text",
    # Output
    "Instruction",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Errors
    "CompileError",
    "ConflictingAttributesError",
    "ConversionError",
    "InvalidAttributeError",
    "MissingAttributeError",
    "ParseError",
    "RdmlError",
    "RegistryError",
    "ScanError",
    "UnknownAttributeError",
    "UnknownCommandError",
    "__version__",
]
