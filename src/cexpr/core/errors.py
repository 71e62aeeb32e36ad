"""
Error types for cexpr tokenizing, parsing, and evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Location of an error inside an expression string.

    Attributes:
        source: The full expression text
        pos: 0-based character offset of the offending lexeme
    """

    source: str
    pos: int

    @property
    def column(self) -> int:
        """1-indexed column of the error."""
        return self.pos + 1

    def format(self) -> str:
        """
        Format the context as the source line with a caret marker.

        Returns:
            Formatted string like:
                "  1 + # 2"
                "      ^"
        """
        prefix = "  "
        marker = " " * (len(prefix) + self.pos) + "^"
        return f"{prefix}{self.source}\n{marker}"


class ExpressionError(Exception):
    """Base exception for all cexpr errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message} (column {self.context.column})\n{self.context.format()}"
        return self.message

    @property
    def pos(self) -> int | None:
        """Offset of the error in the source, when known."""
        return self.context.pos if self.context else None


class InvalidTokenError(ExpressionError):
    """
    Raised when the tokenizer meets input that matches no lexical rule.

    The unconsumed text starting at the offending character is kept in
    ``remainder``.
    """

    def __init__(self, message: str, remainder: str, context: ErrorContext | None = None):
        self.remainder = remainder
        super().__init__(message, context)


class ExpressionSyntaxError(ExpressionError):
    """
    Raised when a token cannot extend the current grammar rule.

    Examples:
    - Missing operand ("1 +")
    - Unbalanced parentheses ("(1 + 2", "1 + 2)")
    - Conditional without ':'
    - Trailing garbage after a complete expression
    """

    pass


class ExpressionEvalError(ExpressionError):
    """Base class for errors raised while evaluating an AST."""

    pass


class InvalidOperandsError(ExpressionEvalError):
    """
    Raised when an operator is applied outside its operand domain.

    Examples:
    - 1.5 % 2
    - ~x where x holds a float
    - f << 1 where f holds a float
    """

    def __init__(self, message: str = "invalid operands to binary expression"):
        super().__init__(message)


class InvalidAssignTargetError(ExpressionEvalError):
    """Raised when the left side of an assignment is not a variable."""

    def __init__(self, message: str = "cannot assign to non-variable"):
        super().__init__(message)


class NoResolverError(ExpressionEvalError):
    """Raised when an assignment is evaluated without a variable resolver."""

    def __init__(self, message: str = "no variable resolver supplied for assignment"):
        super().__init__(message)


class DivisionByZeroError(ExpressionEvalError):
    """Raised on integer division or remainder by zero."""

    def __init__(self, message: str = "integer division by zero"):
        super().__init__(message)


class NestingTooDeepError(ExpressionEvalError):
    """Raised when an AST is too deep to walk on the interpreter stack."""

    def __init__(self, message: str = "expression nested too deeply"):
        super().__init__(message)


def make_syntax_error(message: str, source: str | None, pos: int) -> ExpressionSyntaxError:
    """
    Helper to create an ExpressionSyntaxError with context.

    Args:
        message: Error description
        source: Expression text, or None when parsing a bare token list
        pos: Offset of the offending token

    Returns:
        ExpressionSyntaxError with context attached when the source is known
    """
    if source is None:
        return ExpressionSyntaxError(message)
    return ExpressionSyntaxError(message, ErrorContext(source=source, pos=pos))
