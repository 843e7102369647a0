"""Tests for the high-level RDML API."""

import rdml


class TestScanFunction:
    def test_scan(self) -> None:
        from rdml import TokenType, scan

        tokens = scan("<break/>")
        assert tokens[-1].type == TokenType.EOF
        assert [t.value for t in tokens[:-1]] == ["<", "break", "/>"]

    def test_scan_with_source_file(self) -> None:
        import pytest

        from rdml import ScanError, scan

        with pytest.raises(ScanError, match="^a.rdml: "):
            scan("<", source_file="a.rdml")


class TestParseFunction:
    def test_parse(self) -> None:
        from rdml import Element, parse

        nodes = parse('<wait time="60"/>')
        assert len(nodes) == 1
        assert isinstance(nodes[0], Element)
        assert nodes[0].attrs["time"] == "60"


class TestCompileFunction:
    def test_compile(self) -> None:
        from rdml import Instruction, compile

        assert compile('<wait time="60"/>') == (Instruction(230, 0, (60,)), Instruction(0, 0, ()))

    def test_compile_returns_tuple(self) -> None:
        from rdml import compile

        assert isinstance(compile(""), tuple)

    def test_compile_with_source_file(self) -> None:
        import pytest

        from rdml import ParseError, compile

        with pytest.raises(ParseError) as exc_info:
            compile("<loop>", source_file="events/town.rdml")
        assert exc_info.value.source_file == "events/town.rdml"

    def test_compile_procedures(self) -> None:
        from rdml import compile_procedures

        assert list(compile_procedures('<proc name="a"/>')) == ["a"]


class TestPackage:
    def test_version(self) -> None:
        assert rdml.__version__

    def test_all_exports_exist(self) -> None:
        for name in rdml.__all__:
            assert hasattr(rdml, name), name

    def test_error_hierarchy(self) -> None:
        from rdml import (
            CompileError,
            ConversionError,
            MissingAttributeError,
            ParseError,
            RdmlError,
            RegistryError,
            ScanError,
            UnknownCommandError,
        )

        for cls in (ScanError, ParseError, CompileError, ConversionError, RegistryError):
            assert issubclass(cls, RdmlError)
        assert issubclass(UnknownCommandError, CompileError)
        assert issubclass(MissingAttributeError, CompileError)
        assert issubclass(ConversionError, ValueError)
