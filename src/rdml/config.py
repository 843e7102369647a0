"""ContextVar-based compile configuration for RDML.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set for the duration of one compile call and read by the
Compiler.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from rdml.config import CompileConfig, compile_config_context

    with compile_config_context(CompileConfig(strict_alternatives=True)):
        instructions = Compiler().compile(nodes)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rdml.commands.registry import CommandRegistry


@dataclass(frozen=True, slots=True)
class CompileConfig:
    """Immutable compile configuration.

    Attributes:
        command_registry: Registry for command lookup (default registry if None)
        strict_alternatives: Raise instead of warning when several
            alternatives of one attribute group are present
        strict_attributes: Raise on attributes that belong to no group

    """

    command_registry: "CommandRegistry | None" = None
    strict_alternatives: bool = False
    strict_attributes: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict) -> "CompileConfig":
        """Create CompileConfig from dictionary.

        Only includes keys that are valid CompileConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = CompileConfig.from_dict({
            ...     "strict_alternatives": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.strict_alternatives
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: CompileConfig = CompileConfig()

_compile_config: ContextVar[CompileConfig] = ContextVar(
    "compile_config",
    default=_DEFAULT_CONFIG,
)


def get_compile_config() -> CompileConfig:
    """Get current compile configuration (thread-local)."""
    return _compile_config.get()


def set_compile_config(config: CompileConfig) -> None:
    """Set compile configuration for current context."""
    _compile_config.set(config)


def reset_compile_config() -> None:
    """Reset to default configuration."""
    _compile_config.set(_DEFAULT_CONFIG)


@contextmanager
def compile_config_context(config: CompileConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.
    """
    previous = _compile_config.get()
    _compile_config.set(config)
    try:
        yield
    finally:
        _compile_config.set(previous)


__all__ = [
    "CompileConfig",
    "get_compile_config",
    "set_compile_config",
    "reset_compile_config",
    "compile_config_context",
]
