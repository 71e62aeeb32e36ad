"""
cexpr expression language.

Tokenizer, precedence-climbing parser, and evaluator for C-style integer
and float expressions.

Usage:
    from cexpr.core.expression_lang import parse_expr, evaluate

    expr = parse_expr("a = (1 + 2) << 3")
    result = evaluate(expr, symbols)
    # result == Value(int, 24)
"""

from cexpr.core.expression_lang.evaluator import eval_expr, evaluate
from cexpr.core.expression_lang.parser import parse_expr, parse_tokens
from cexpr.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = ["Token", "TokenKind", "eval_expr", "evaluate", "parse_expr", "parse_tokens", "tokenize"]
