"""Instruction serialization: JSON round-trip in the host format.

The host stores event command lists as JSON objects with ``code``,
``indent`` and ``parameters`` fields. This module converts Instruction
tuples to and from that shape.

Example:
    from rdml import compile
    from rdml.serialization import to_json, from_json

    instructions = compile('<wait time="60"/>')
    json_str = to_json(instructions)
    assert from_json(json_str) == instructions

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Iterable
from typing import Any

from rdml.instructions import Instruction


def to_dict(instruction: Instruction) -> dict[str, Any]:
    """Convert an Instruction to a JSON-compatible dict.

    Args:
        instruction: Instruction to convert.

    Returns:
        Dict with ``code``, ``indent`` and ``parameters``.

    """
    return {
        "code": instruction.opcode,
        "indent": instruction.indent,
        "parameters": [_serialize_value(p) for p in instruction.params],
    }


def from_dict(data: dict[str, Any]) -> Instruction:
    """Reconstruct an Instruction from a dict produced by to_dict.

    Raises:
        ValueError: If a required field is missing.
    """
    try:
        code = data["code"]
        indent = data["indent"]
    except KeyError as e:
        msg = f"Instruction dict missing field {e.args[0]!r}"
        raise ValueError(msg) from e
    return Instruction(int(code), int(indent), tuple(data.get("parameters", ())))


def to_json(instructions: Iterable[Instruction], *, indent: int | None = None) -> str:
    """Serialize an instruction list to a JSON array string."""
    return json.dumps([to_dict(i) for i in instructions], ensure_ascii=False, indent=indent)


def from_json(json_str: str) -> tuple[Instruction, ...]:
    """Deserialize a JSON array string produced by to_json."""
    data = json.loads(json_str)
    if not isinstance(data, list):
        msg = "Expected a JSON array of instructions"
        raise ValueError(msg)
    return tuple(from_dict(item) for item in data)


def _serialize_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    return value
