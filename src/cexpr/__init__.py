"""
cexpr - embeddable C-style expression language.

Tokenizes, parses and evaluates integer/float expressions with C operator
precedence against a caller-supplied variable resolver.
"""

from __future__ import annotations

from ._version import __version__

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import (
    DivisionByZeroError,
    ExpressionError,
    ExpressionEvalError,
    ExpressionSyntaxError,
    InvalidAssignTargetError,
    InvalidOperandsError,
    InvalidTokenError,
    NestingTooDeepError,
    NoResolverError,
)
from .core.expression_lang import eval_expr, evaluate, parse_expr, tokenize
from .core.symbols import Resolver, Slot, SymbolTable
from .core.value import Value, ValueKind

__all__ = [
    "__version__",
    "ir",
    "DivisionByZeroError",
    "ExpressionError",
    "ExpressionEvalError",
    "ExpressionSyntaxError",
    "InvalidAssignTargetError",
    "InvalidOperandsError",
    "InvalidTokenError",
    "NestingTooDeepError",
    "NoResolverError",
    "Resolver",
    "Slot",
    "SymbolTable",
    "Value",
    "ValueKind",
    "eval_expr",
    "evaluate",
    "parse_expr",
    "tokenize",
]
