"""Command system for RDML.

Each element name maps to a command descriptor: a description, an ordered
list of attribute groups and an emission function. The compiler is driven
entirely by this data.

Key components:
- ValueType: validating converters (Fixed, BoundedInt, Match, ...)
- AttributeGroup: mutually exclusive attributes with a default policy
- CommandDescriptor: the schema entry for one element name
- leaf / block / dispatch: emission function factories
- CommandRegistry: descriptor lookup and registration

Thread Safety:
All components are designed for thread-safety:
- Value types, groups and descriptors are frozen dataclasses
- Registry is immutable after creation
- Emission functions keep no state between calls

Example:
    >>> from rdml.commands import CommandDescriptor, Ref, BoundedInt, group, leaf
    >>>
    >>> PLAY_SE = CommandDescriptor(
    ...     name="se",
    ...     description="Play a sound effect.",
    ...     groups=(group("volume", value=BoundedInt(0, 100), default="90"),),
    ...     emit=leaf(250, Ref("volume")),
    ... )
    >>> builder = create_registry_with_defaults()
    >>> builder.register(PLAY_SE)
    >>> registry = builder.build()
"""

from __future__ import annotations

from rdml.commands.emitters import Choose, Const, ParamSource, Ref, block, dispatch, leaf
from rdml.commands.registry import (
    CommandRegistry,
    CommandRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
)
from rdml.commands.schema import (
    REQUIRED,
    Argument,
    Arguments,
    AttributeGroup,
    CommandDescriptor,
    EmitFunc,
    group,
)
from rdml.commands.values import (
    Boolean,
    BoundedInt,
    Fixed,
    IntRange,
    Match,
    Param,
    Text,
    ValueType,
)

__all__ = [
    # Value types
    "Boolean",
    "BoundedInt",
    "Fixed",
    "IntRange",
    "Match",
    "Param",
    "Text",
    "ValueType",
    # Schema
    "REQUIRED",
    "Argument",
    "Arguments",
    "AttributeGroup",
    "CommandDescriptor",
    "EmitFunc",
    "group",
    # Emission
    "Choose",
    "Const",
    "ParamSource",
    "Ref",
    "block",
    "dispatch",
    "leaf",
    # Registry
    "CommandRegistry",
    "CommandRegistryBuilder",
    "create_default_registry",
    "create_registry_with_defaults",
]
