"""Tests for error formatting and the error hierarchy."""

from __future__ import annotations

import pytest

from cexpr.core.errors import (
    DivisionByZeroError,
    ErrorContext,
    ExpressionError,
    ExpressionEvalError,
    ExpressionSyntaxError,
    InvalidAssignTargetError,
    InvalidOperandsError,
    InvalidTokenError,
    NestingTooDeepError,
    NoResolverError,
    make_syntax_error,
)
from cexpr.core.expression_lang import parse_expr


class TestErrorContext:
    def test_column_is_one_based(self) -> None:
        assert ErrorContext(source="1 + #", pos=4).column == 5

    def test_caret_under_position(self) -> None:
        text = ErrorContext(source="1 + # 2", pos=4).format()
        source_line, marker_line = text.split("\n")
        assert source_line == "  1 + # 2"
        assert marker_line.index("^") == source_line.index("#")


class TestExpressionError:
    def test_message_without_context(self) -> None:
        err = ExpressionError("boom")
        assert str(err) == "boom"
        assert err.pos is None

    def test_message_with_context(self) -> None:
        err = ExpressionError("boom", ErrorContext(source="ab", pos=1))
        assert str(err).startswith("boom (column 2)\n")
        assert err.pos == 1

    def test_parse_error_carries_position(self) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            parse_expr("(1 + 2")
        assert exc_info.value.pos == 6
        assert exc_info.value.message == "expected ')'"

    def test_make_syntax_error_without_source(self) -> None:
        err = make_syntax_error("expected ':'", None, 3)
        assert err.context is None
        assert str(err) == "expected ':'"

    def test_make_syntax_error_with_source(self) -> None:
        err = make_syntax_error("expected ':'", "a ? b", 5)
        assert err.pos == 5


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [
            InvalidTokenError,
            ExpressionSyntaxError,
            ExpressionEvalError,
            InvalidOperandsError,
            InvalidAssignTargetError,
            NoResolverError,
            DivisionByZeroError,
            NestingTooDeepError,
        ],
    )
    def test_all_are_expression_errors(self, cls: type) -> None:
        assert issubclass(cls, ExpressionError)

    def test_default_messages(self) -> None:
        assert str(InvalidOperandsError()) == "invalid operands to binary expression"
        assert str(InvalidAssignTargetError()) == "cannot assign to non-variable"
        assert str(DivisionByZeroError()) == "integer division by zero"
        assert str(NestingTooDeepError()) == "expression nested too deeply"

    def test_invalid_token_keeps_remainder(self) -> None:
        err = InvalidTokenError("invalid token", "#x", ErrorContext(source="1#x", pos=1))
        assert err.remainder == "#x"
        assert err.pos == 1
