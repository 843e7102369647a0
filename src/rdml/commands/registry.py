"""Command registry for descriptor lookup and registration.

The registry maps element names to their command descriptors. The
compiler consults it and never changes it, so new commands only need a
registration here.

Thread Safety:
CommandRegistry is immutable after creation. Safe to share.
Use CommandRegistryBuilder for mutable construction.

Example:
    >>> builder = CommandRegistryBuilder()
    >>> builder.register(WAIT)
    >>> registry = builder.build()
    >>> registry.get("wait").description
    'Wait for a number of frames.'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from rdml.commands.schema import CommandDescriptor
from rdml.errors import RegistryError


class CommandRegistry:
    """Immutable registry of command descriptors.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_descriptors", "_by_name")

    def __init__(
        self,
        descriptors: tuple[CommandDescriptor, ...],
        by_name: Mapping[str, CommandDescriptor],
    ) -> None:
        """Initialize registry with pre-built mappings.

        Use CommandRegistryBuilder to create instances.
        """
        self._descriptors = descriptors
        self._by_name = MappingProxyType(dict(by_name))

    def get(self, name: str) -> CommandDescriptor | None:
        """Get descriptor for element name, None if unknown."""
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        """Check if element name is registered."""
        return name in self._by_name

    @property
    def names(self) -> frozenset[str]:
        """Get all registered element names (aliases included)."""
        return frozenset(self._by_name.keys())

    @property
    def descriptors(self) -> tuple[CommandDescriptor, ...]:
        """Get all registered descriptors."""
        return self._descriptors

    def __contains__(self, name: object) -> bool:
        """Support 'name in registry' syntax."""
        return name in self._by_name

    def __len__(self) -> int:
        """Number of registered element names."""
        return len(self._by_name)


class CommandRegistryBuilder:
    """Mutable builder for CommandRegistry.

    Register descriptors, then call build() to create an immutable
    registry.
    """

    __slots__ = ("_descriptors", "_by_name")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._descriptors: list[CommandDescriptor] = []
        self._by_name: dict[str, CommandDescriptor] = {}

    def register(self, descriptor: CommandDescriptor) -> CommandRegistryBuilder:
        """Register a command descriptor.

        Args:
            descriptor: Descriptor to register under all of its names

        Returns:
            Self for chaining

        Raises:
            RegistryError: If a name is already registered, or the
                descriptor's attribute groups are inconsistent
        """
        _validate(descriptor)

        for name in descriptor.names:
            if name in self._by_name:
                msg = f"Command '{name}' already registered"
                raise RegistryError(msg)

        for name in descriptor.names:
            self._by_name[name] = descriptor
        self._descriptors.append(descriptor)
        return self

    def register_all(self, descriptors: Iterable[CommandDescriptor]) -> CommandRegistryBuilder:
        """Register multiple descriptors."""
        for descriptor in descriptors:
            self.register(descriptor)
        return self

    def build(self) -> CommandRegistry:
        """Build immutable registry from registered descriptors."""
        return CommandRegistry(
            descriptors=tuple(self._descriptors),
            by_name=self._by_name,
        )

    def __len__(self) -> int:
        """Number of registered descriptors."""
        return len(self._descriptors)


def _validate(descriptor: CommandDescriptor) -> None:
    """Reject descriptors whose names or attribute groups are inconsistent."""
    if len(set(descriptor.names)) != len(descriptor.names):
        msg = f"Command '{descriptor.name}': name repeated in aliases"
        raise RegistryError(msg)

    keys: dict[str, tuple[str, ...]] = {}
    owners: dict[str, str] = {}
    for group in descriptor.groups:
        if group.key in keys:
            msg = f"Command '{descriptor.name}': duplicate attribute group '{group.key}'"
            raise RegistryError(msg)
        for alternative in group.alternatives:
            if alternative in owners:
                msg = (
                    f"Command '{descriptor.name}': attribute '{alternative}' belongs to "
                    f"both '{owners[alternative]}' and '{group.key}'"
                )
                raise RegistryError(msg)
            owners[alternative] = group.key
        if group.requires is not None:
            required_key, required_alt = group.requires
            if required_alt not in keys.get(required_key, ()):
                msg = (
                    f"Command '{descriptor.name}': group '{group.key}' requires "
                    f"unknown alternative {required_key}={required_alt}"
                )
                raise RegistryError(msg)
        keys[group.key] = group.alternatives


def _builtin_descriptors() -> list[CommandDescriptor]:
    from rdml.commands.builtins import BUILTIN_COMMANDS

    return list(BUILTIN_COMMANDS)


# Cached singleton, shared freely since CommandRegistry is immutable
_DEFAULT_REGISTRY: CommandRegistry | None = None


def create_default_registry() -> CommandRegistry:
    """Get the default command registry (cached singleton).

    Returns:
        Registry with the built-in commands: flow control (wait, if,
        loop, break), game state (switch, variable, get, lose, heal) and
        text (m, comment).
    """
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = create_registry_with_defaults().build()
    return _DEFAULT_REGISTRY


def create_registry_with_defaults() -> CommandRegistryBuilder:
    """Create a builder pre-populated with the built-in commands.

    Use this to extend the default set:

        >>> builder = create_registry_with_defaults()
        >>> builder.register(MY_COMMAND)
        >>> registry = builder.build()
    """
    return CommandRegistryBuilder().register_all(_builtin_descriptors())
