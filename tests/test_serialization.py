"""Tests for rdml.serialization: instruction JSON round-trip."""

import json

import pytest

from rdml import compile
from rdml.instructions import Instruction
from rdml.serialization import from_dict, from_json, to_dict, to_json


class TestToDict:
    def test_host_field_names(self) -> None:
        assert to_dict(Instruction(230, 0, (60,))) == {"code": 230, "indent": 0, "parameters": [60]}

    def test_terminator(self) -> None:
        assert to_dict(Instruction.terminator(2)) == {"code": 0, "indent": 2, "parameters": []}

    def test_nested_tuples_become_lists(self) -> None:
        data = to_dict(Instruction(1, 0, ((1, 2), "a", True)))
        assert data["parameters"] == [[1, 2], "a", True]


class TestFromDict:
    def test_reconstruct(self) -> None:
        assert from_dict({"code": 101, "indent": 1, "parameters": ["", 0, 0, 2]}) == Instruction(
            101, 1, ("", 0, 0, 2)
        )

    def test_parameters_optional(self) -> None:
        assert from_dict({"code": 0, "indent": 0}) == Instruction(0, 0, ())

    def test_missing_field(self) -> None:
        with pytest.raises(ValueError, match="'indent'"):
            from_dict({"code": 0})


class TestJson:
    def test_round_trip(self) -> None:
        instructions = compile('<if switch="1"><m face="Actor1">Hi &amp; bye</m></if>')
        assert from_json(to_json(instructions)) == instructions

    def test_output_is_json_array(self) -> None:
        data = json.loads(to_json(compile('<wait time="60"/>')))
        assert data == [
            {"code": 230, "indent": 0, "parameters": [60]},
            {"code": 0, "indent": 0, "parameters": []},
        ]

    def test_deterministic(self) -> None:
        source = '<heal hpof="1" n="5"/>'
        assert to_json(compile(source)) == to_json(compile(source))

    def test_non_ascii_kept(self) -> None:
        assert "ようこそ" in to_json(compile("<m>ようこそ</m>"))

    def test_indent(self) -> None:
        assert "\n" in to_json(compile("<break/>"), indent=2)

    def test_rejects_non_array(self) -> None:
        with pytest.raises(ValueError, match="JSON array"):
            from_json('{"code": 0}')
