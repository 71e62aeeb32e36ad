"""Tests for CLI commands."""

import pytest
import typer
from typer.testing import CliRunner

from cexpr.cli import app, format_value, parse_binding
from cexpr.core.value import Value


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


class TestEvalCommand:
    def test_single_expression(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "1 + 2 * 3"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "7"

    def test_hex_output(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "--hex", "1+2+3"])
        assert result.exit_code == 0
        assert "(0x00000006) 6" in result.stdout

    def test_negative_hex_output(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "-x", "0 - 1"])
        assert "(0xffffffff) -1" in result.stdout

    def test_shared_symbols_across_expressions(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "--var", "a=5", "a <<= 2", "a + 1"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["20", "21"]

    def test_float_binding(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "-D", "x=1.5", "x * 2"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "3"

    def test_symbols_listing(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "--symbols", "b = 2", "a = b + 1"])
        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert lines[-2:] == ["a = 3", "b = 2"]

    def test_evaluation_error_exits_1(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "1 / 0"])
        assert result.exit_code == 1

    def test_syntax_error_exits_1(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "1 +"])
        assert result.exit_code == 1

    def test_deeply_nested_input_exits_1(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "(" * 1000 + "1" + ")" * 1000])
        assert result.exit_code == 1
        assert not isinstance(result.exception, RecursionError)

    def test_bad_binding_is_usage_error(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["eval", "--var", "nonsense", "1"])
        assert result.exit_code == 2


class TestTokensCommand:
    def test_token_table(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["tokens", "x <<= 0xFF"])
        assert result.exit_code == 0
        assert "SHL_ASSIGN" in result.stdout
        assert "HEX_INT" in result.stdout
        assert "EOF" in result.stdout

    def test_invalid_token(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["tokens", "a # b"])
        assert result.exit_code == 1


class TestAstCommand:
    def test_tree_and_rendering(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["ast", "a = b ? c : d"])
        assert result.exit_code == 0
        assert "AssignExpr" in result.stdout
        assert "ConditionalExpr" in result.stdout
        assert "(a = (b ? c : d))" in result.stdout

    def test_register_label(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["ast", "%r0 + 1"])
        assert "Register %r0" in result.stdout


class TestVersion:
    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "cexpr" in result.stdout


class TestHelpers:
    def test_parse_binding_int_expression(self) -> None:
        assert parse_binding("mask=1<<4") == ("mask", Value.of_int(16))
        assert parse_binding("%r1=0xFF") == ("%r1", Value.of_int(255))

    def test_parse_binding_float(self) -> None:
        assert parse_binding("f=2.5") == ("f", Value.of_float(2.5))
        assert parse_binding("g=1e3") == ("g", Value.of_float(1000.0))

    def test_parse_binding_rejects_bad_value(self) -> None:
        with pytest.raises(typer.BadParameter):
            parse_binding("a=1 +")

    def test_format_value(self) -> None:
        assert format_value(Value.of_int(10)) == "10"
        assert format_value(Value.of_int(10), show_raw=True) == "(0x0000000a) 10"
        assert format_value(Value.of_float(1.0), show_raw=True) == "(0x3f800000) 1"
