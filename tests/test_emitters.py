"""Tests for emission function factories and parameter sources."""

import pytest

from rdml import compile
from rdml.commands import (
    Argument,
    Arguments,
    Choose,
    CommandDescriptor,
    Const,
    Ref,
    Text,
    block,
    create_registry_with_defaults,
    dispatch,
    group,
    leaf,
)
from rdml.instructions import Instruction

ARGS = Arguments(
    {
        "id": Argument("id", (3, 7)),
        "actor": Argument("mpof", (1,)),
    }
)


class TestParamSources:
    def test_ref(self) -> None:
        assert Ref("id")(ARGS) == 3
        assert Ref("id", 1)(ARGS) == 7

    def test_const(self) -> None:
        assert Const("x")(ARGS) == "x"

    def test_choose(self) -> None:
        assert Choose("actor", {"hpof": 311, "mpof": 312})(ARGS) == 312


def _registry(*descriptors: CommandDescriptor):
    builder = create_registry_with_defaults()
    for d in descriptors:
        builder.register(d)
    return builder.build()


class TestFactories:
    def test_leaf_with_chosen_opcode(self) -> None:
        show = CommandDescriptor(
            name="show",
            description="",
            groups=(group("pic", "movie", key="what", value=Text()),),
            emit=leaf(Choose("what", {"pic": 231, "movie": 261}), Ref("what")),
        )
        registry = _registry(show)
        assert compile('<show movie="intro"/>', registry)[0] == Instruction(261, 0, ("intro",))

    def test_block_with_params(self) -> None:
        branch = CommandDescriptor(
            name="branch",
            description="",
            groups=(group("label", value=Text()),),
            emit=block(118, 119, Ref("label"), Const(True)),
        )
        result = compile('<branch label="a"><break/></branch>', _registry(branch))
        assert result == (
            Instruction(118, 0, ("a", True)),
            Instruction(113, 1, ()),
            Instruction(119, 0, ()),
            Instruction(0, 0, ()),
        )

    def test_block_with_body_terminator(self) -> None:
        scope = CommandDescriptor(
            name="scope",
            description="",
            groups=(),
            emit=block(5, 6, body_terminator=True),
        )
        result = compile("<scope/>", _registry(scope))
        assert [(i.opcode, i.indent) for i in result] == [(5, 0), (0, 1), (6, 0), (0, 0)]

    def test_dispatch(self) -> None:
        toggle = CommandDescriptor(
            name="toggle",
            description="",
            groups=(group("on", "off", key="state", value=Text(), default=""),),
            emit=dispatch("state", {"on": leaf(1), "off": leaf(2)}),
        )
        registry = _registry(toggle)
        assert compile('<toggle off=""/>', registry)[0].opcode == 2
        # Defaulted groups match their first alternative
        assert compile("<toggle/>", registry)[0].opcode == 1

    def test_chosen_opcode_must_be_int(self) -> None:
        show = CommandDescriptor(
            name="show",
            description="",
            groups=(group("pic", key="what", value=Text()),),
            emit=leaf(Choose("what", {"pic": "231"}), Ref("what")),
        )
        with pytest.raises(TypeError, match="opcode must be an int"):
            compile('<show pic="a"/>', _registry(show))

    def test_chosen_opcode_rejects_bool(self) -> None:
        flag = CommandDescriptor(
            name="flag",
            description="",
            groups=(group("pic", key="what", value=Text()),),
            emit=block(Choose("what", {"pic": True}), 2),
        )
        with pytest.raises(TypeError, match="got True"):
            compile('<flag pic="a"/>', _registry(flag))
