"""Core cexpr functionality: values, IR, tokenizer, parser, evaluator, symbols."""

from . import ir
from .errors import (
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
)
from .expression_lang import eval_expr, evaluate, parse_expr, parse_tokens, tokenize
from .symbols import Resolver, Slot, SymbolTable
from .value import Value, ValueKind

__all__ = [
    "ir",
    "DivisionByZeroError",
    "ErrorContext",
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
    "parse_tokens",
    "tokenize",
]
