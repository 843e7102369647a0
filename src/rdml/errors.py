"""Exception classes for RDML.

Two disjoint families of failures exist:

- Lexical: ScanError, raised by the lexer for malformed token-level syntax.
- Structural/semantic: ParseError (tree building) and CompileError with its
  subclasses (command lookup, attribute validation).

Every error is terminal for the scan/parse/compile call that raised it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rdml.tokens import Token


class RdmlError(Exception):
    """Base exception for all RDML errors."""

    pass


class ScanError(RdmlError):
    """Malformed token-level syntax.

    Formatted as ``"Syntax Error: <message> at line <n>"``.
    """

    kind = "Syntax Error"

    def __init__(
        self,
        message: str,
        lineno: int,
        offset: int = 0,
        source_file: str | None = None,
        tokens: list[Token] | None = None,
    ) -> None:
        """Initialize scan error.

        Args:
            message: Error description (e.g. "unclosed value")
            lineno: Line number where scanning stopped (1-indexed)
            offset: Absolute offset where scanning stopped
            source_file: Path to source file (optional)
            tokens: Tokens produced before the failure, ending with INVALID
        """
        self.message = message
        self.lineno = lineno
        self.offset = offset
        self.source_file = source_file
        self.tokens = tokens or []

        text = f"{self.kind}: {message} at line {lineno}"
        if source_file:
            text = f"{source_file}: {text}"
        super().__init__(text)


class ParseError(RdmlError):
    """Structural error while building the element tree.

    Raised for mismatched or missing closing tags and unexpected tokens.
    """

    def __init__(
        self,
        message: str,
        element: str | None = None,
        lineno: int | None = None,
        source_file: str | None = None,
        closing: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            element: Name of the offending element
            lineno: Line number where error occurred (1-indexed)
            source_file: Path to source file (optional)
            closing: Name carried by a mismatched closing tag
        """
        self.message = message
        self.element = element
        self.lineno = lineno
        self.source_file = source_file
        self.closing = closing

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ConversionError(RdmlError, ValueError):
    """A raw attribute string failed its value type's validation."""

    pass


class CompileError(RdmlError):
    """Semantic error while compiling an element into instructions.

    The message always names the offending command; attribute-level
    subclasses also name the attribute group.
    """

    def __init__(
        self,
        command: str,
        message: str,
        group: str | None = None,
        lineno: int | None = None,
    ) -> None:
        """Initialize compile error.

        Args:
            command: Element (command) name
            message: Description of the failure
            group: Attribute group key, when the failure concerns one
            lineno: Line number of the element (optional)
        """
        self.command = command
        self.group = group
        self.lineno = lineno
        self.message = message

        location = f" (line {lineno})" if lineno else ""
        super().__init__(f"command '{command}'{location}: {message}")


class UnknownCommandError(CompileError):
    """Element name has no entry in the command registry."""

    def __init__(self, command: str, lineno: int | None = None) -> None:
        super().__init__(command, f'unknown command "{command}"', lineno=lineno)


class MissingAttributeError(CompileError):
    """A required attribute group has none of its keys present."""

    def __init__(
        self,
        command: str,
        group: str,
        alternatives: tuple[str, ...],
        lineno: int | None = None,
    ) -> None:
        self.alternatives = alternatives
        if len(alternatives) == 1:
            wanted = f"'{alternatives[0]}'"
        else:
            wanted = "one of " + ", ".join(f"'{a}'" for a in alternatives)
        super().__init__(
            command,
            f"required attribute '{group}' is missing (expected {wanted})",
            group=group,
            lineno=lineno,
        )


class InvalidAttributeError(CompileError):
    """An attribute value was rejected."""

    def __init__(
        self,
        command: str,
        group: str,
        attribute: str,
        reason: str,
        lineno: int | None = None,
    ) -> None:
        self.attribute = attribute
        self.reason = reason
        super().__init__(
            command,
            f"invalid attribute '{attribute}' ({group}): {reason}",
            group=group,
            lineno=lineno,
        )


class ConflictingAttributesError(CompileError):
    """More than one alternative of one attribute group is present."""

    def __init__(
        self,
        command: str,
        group: str,
        present: tuple[str, ...],
        lineno: int | None = None,
    ) -> None:
        self.present = present
        names = ", ".join(f"'{a}'" for a in present)
        super().__init__(
            command,
            f"attributes {names} are mutually exclusive ({group})",
            group=group,
            lineno=lineno,
        )


class UnknownAttributeError(CompileError):
    """An attribute belongs to none of the command's groups."""

    def __init__(self, command: str, attribute: str, lineno: int | None = None) -> None:
        self.attribute = attribute
        super().__init__(command, f"unknown attribute '{attribute}'", lineno=lineno)


class RegistryError(RdmlError, ValueError):
    """Invalid or duplicate command registration."""

    pass
