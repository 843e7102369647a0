"""Tests for the schema-driven compiler."""

import logging

import pytest

from rdml import compile, parse
from rdml.commands import (
    BoundedInt,
    CommandDescriptor,
    Const,
    Ref,
    Text,
    block,
    create_registry_with_defaults,
    group,
    leaf,
)
from rdml.compiler import Compiler
from rdml.config import CompileConfig, compile_config_context
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


def codes(source: str, **kwargs: object) -> list[tuple]:
    """(opcode, indent, params) triples for compact comparisons."""
    return [(i.opcode, i.indent, i.params) for i in compile(source, **kwargs)]  # type: ignore[arg-type]


GROUP = CommandDescriptor(
    name="group",
    description="Plain block with no body terminator.",
    groups=(),
    emit=block(1, 2),
)

LABEL = CommandDescriptor(
    name="label",
    description="Leaf taking an optional name.",
    groups=(group("name", value=Text(), default="x"),),
    emit=leaf(3, Ref("name"), Const(7)),
)


@pytest.fixture
def registry():
    return create_registry_with_defaults().register(GROUP).register(LABEL).build()


class TestEndToEnd:
    """The three reference pipelines."""

    def test_wait(self) -> None:
        assert compile('<wait time="60"/>') == (
            Instruction(230, 0, (60,)),
            Instruction(0, 0, ()),
        )

    def test_missing_required_attribute(self) -> None:
        with pytest.raises(MissingAttributeError) as exc_info:
            compile("<wait/>")
        err = exc_info.value
        assert err.command == "wait"
        assert err.group == "time"
        assert "wait" in str(err)
        assert "time" in str(err)

    def test_block_with_two_children(self, registry) -> None:
        result = compile('<group><wait time="1"/><wait time="2"/></group>', registry)
        assert [(i.opcode, i.indent) for i in result] == [(1, 0), (230, 1), (230, 1), (2, 0), (0, 0)]


class TestCompileBasics:
    def test_empty_source(self) -> None:
        assert compile("") == (Instruction(0, 0, ()),)

    def test_whitespace_between_commands_ignored(self) -> None:
        result = compile('\n  <wait time="1"/>\n  <wait time="2"/>\n')
        assert [i.params for i in result] == [(1,), (2,), ()]

    def test_stray_text_rejected(self) -> None:
        with pytest.raises(CompileError, match="unexpected text 'hello'"):
            compile("hello")

    def test_stray_text_inside_block(self) -> None:
        with pytest.raises(CompileError) as exc_info:
            compile("<loop>oops</loop>")
        assert exc_info.value.command == "loop"

    def test_unknown_command(self) -> None:
        with pytest.raises(UnknownCommandError, match='unknown command "nope"') as exc_info:
            compile("\n<nope/>")
        assert exc_info.value.lineno == 2

    def test_defaults_converted(self, registry) -> None:
        assert codes("<label/>", registry=registry)[0] == (3, 0, ("x", 7))

    def test_unknown_attributes_ignored_by_default(self) -> None:
        assert codes('<wait time="5" speed="fast"/>')[0] == (230, 0, (5,))

    def test_leaf_ignores_children(self, registry) -> None:
        assert codes('<label name="a"><wait time="1"/></label>', registry=registry) == [
            (3, 0, ("a", 7)),
            (0, 0, ()),
        ]

    def test_nested_blocks_indent(self, registry) -> None:
        result = compile("<group><group><label/></group></group>", registry)
        assert [(i.opcode, i.indent) for i in result] == [
            (1, 0),
            (1, 1),
            (3, 2),
            (2, 1),
            (2, 0),
            (0, 0),
        ]


class TestAttributeErrors:
    def test_invalid_value_wraps_conversion_error(self) -> None:
        with pytest.raises(InvalidAttributeError) as exc_info:
            compile('<wait time="-1"/>')
        err = exc_info.value
        assert err.attribute == "time"
        assert isinstance(err.__cause__, ConversionError)
        assert "expected -1 >= 0" in str(err)

    def test_oversized_integer_is_attribute_error(self) -> None:
        with pytest.raises(InvalidAttributeError) as exc_info:
            compile('<wait time="' + "1" * 5000 + '"/>')
        assert isinstance(exc_info.value.__cause__, ConversionError)
        assert "as integer value" in str(exc_info.value)

    def test_non_ascii_digits_rejected(self) -> None:
        with pytest.raises(InvalidAttributeError) as exc_info:
            compile('<wait time="６０"/>')
        assert exc_info.value.attribute == "time"

    def test_error_line(self) -> None:
        with pytest.raises(CompileError) as exc_info:
            compile('\n\n<wait time="x"/>')
        assert exc_info.value.lineno == 3
        assert "(line 3)" in str(exc_info.value)

    def test_first_error_wins(self) -> None:
        with pytest.raises(UnknownCommandError, match="first"):
            compile('<first/><wait time="-1"/>')


class TestAlternatives:
    """Several alternatives of one group on one element."""

    def test_first_declared_wins_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="rdml.compiler"):
            result = codes('<heal mpof="2" hpof="1" n="5"/>')
        assert result[0][0] == 311
        assert result[0][2][1] == 1
        assert "Conflicting attributes on <heal>" in caplog.text

    def test_strict_alternatives(self) -> None:
        with compile_config_context(CompileConfig(strict_alternatives=True)):
            with pytest.raises(ConflictingAttributesError) as exc_info:
                compile('<heal mpof="2" hpof="1" n="5"/>')
        assert exc_info.value.present == ("hpof", "mpof")

    def test_strict_attributes(self) -> None:
        with compile_config_context(CompileConfig(strict_attributes=True)):
            with pytest.raises(UnknownAttributeError, match="speed"):
                compile('<wait time="5" speed="fast"/>')


class TestCompilerClass:
    def test_compile_nodes_directly(self) -> None:
        nodes = parse('<wait time="60"/>')
        assert Compiler().compile(nodes)[0] == Instruction(230, 0, (60,))

    def test_explicit_registry_overrides_config(self, registry) -> None:
        with compile_config_context(CompileConfig(command_registry=registry)):
            assert Compiler().registry is registry
        other = create_registry_with_defaults().build()
        with compile_config_context(CompileConfig(command_registry=registry)):
            assert Compiler(other).registry is other

    def test_compile_is_repeatable(self) -> None:
        compiler = Compiler()
        nodes = parse('<wait time="1"/>')
        assert compiler.compile(nodes) == compiler.compile(nodes)

    def test_resolve_arguments(self) -> None:
        compiler = Compiler()
        (element,) = parse('<get weapon="4"/>')
        args = compiler.resolve_arguments(element, compiler.registry.get("get"))
        assert args.attr("target") == "weapon"
        assert args.value("target") == 4
        assert args["n"].defaulted
        assert args.value("n") == 1

    def test_custom_value_type_in_registry(self) -> None:
        se = CommandDescriptor(
            name="se",
            description="Play a sound effect.",
            groups=(group("volume", value=BoundedInt(0, 100), default="90"),),
            emit=leaf(250, Ref("volume")),
        )
        registry = create_registry_with_defaults().register(se).build()
        assert compile("<se/>", registry)[0] == Instruction(250, 0, (90,))
        with pytest.raises(InvalidAttributeError):
            compile('<se volume="101"/>', registry)
