"""
Expression evaluator for the cexpr expression language.

Walks an expression AST and produces a Value. Variables are read and
written only through the caller's resolver; nothing else is touched.
Does NOT use Python's eval().
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable

from cexpr.core.errors import (
    ExpressionEvalError,
    InvalidAssignTargetError,
    NestingTooDeepError,
    NoResolverError,
)
from cexpr.core.expression_lang.parser import parse_expr
from cexpr.core.ir.expressions import (
    AssignExpr,
    BinaryExpr,
    BinaryOp,
    ConditionalExpr,
    Expr,
    IntegerLiteral,
    UnaryExpr,
    UnaryOp,
    Variable,
)
from cexpr.core.symbols import Resolver
from cexpr.core.value import Value

logger = logging.getLogger(__name__)

_BINARY_OPS: dict[BinaryOp, Callable[[Value, Value], Value]] = {
    BinaryOp.LOR: Value.logical_or,
    BinaryOp.LAND: Value.logical_and,
    BinaryOp.OR: operator.or_,
    BinaryOp.XOR: operator.xor,
    BinaryOp.AND: operator.and_,
    BinaryOp.EQ: Value.eq,
    BinaryOp.NE: Value.ne,
    BinaryOp.LT: Value.lt,
    BinaryOp.LE: Value.le,
    BinaryOp.GT: Value.gt,
    BinaryOp.GE: Value.ge,
    BinaryOp.SHL: operator.lshift,
    BinaryOp.SHR: operator.rshift,
    BinaryOp.ADD: operator.add,
    BinaryOp.SUB: operator.sub,
    BinaryOp.MUL: operator.mul,
    BinaryOp.DIV: operator.truediv,
    BinaryOp.MOD: operator.mod,
}

_UNARY_OPS: dict[UnaryOp, Callable[[Value], Value]] = {
    UnaryOp.PLUS: operator.pos,
    UnaryOp.NEG: operator.neg,
    UnaryOp.INV: operator.invert,
    UnaryOp.NOT: Value.logical_not,
}


def apply_binary(op: BinaryOp, left: Value, right: Value) -> Value:
    """Apply a binary operator to two Values."""
    return _BINARY_OPS[op](left, right)


def evaluate(expr: Expr, resolve: Resolver | None = None) -> Value:
    """Evaluate an expression AST.

    Args:
        expr: Parsed expression AST.
        resolve: Maps a variable name to its mutable Slot. Optional; without
            it variables read as 0 and assignments fail.

    Returns:
        The computed Value.

    Raises:
        ExpressionEvalError: If evaluation fails.
        NestingTooDeepError: If the tree is deeper than the interpreter stack.
    """
    try:
        return _interpret(expr, resolve)
    except RecursionError as e:
        raise NestingTooDeepError() from e


def eval_expr(source: str, resolve: Resolver | None = None) -> Value:
    """Parse and evaluate an expression string in one step."""
    return evaluate(parse_expr(source), resolve)


def _interpret(expr: Expr, resolve: Resolver | None) -> Value:
    """Dispatch evaluation on the node type."""
    match expr:
        case IntegerLiteral():
            return Value.of_int(expr.value)
        case Variable():
            if resolve is None:
                return Value.zero()
            return resolve(expr.name).value
        case UnaryExpr():
            operand = _interpret(expr.operand, resolve)
            return _UNARY_OPS[expr.op](operand)
        case BinaryExpr():
            # Both sides always evaluated, left first
            left = _interpret(expr.left, resolve)
            right = _interpret(expr.right, resolve)
            return apply_binary(expr.op, left, right)
        case ConditionalExpr():
            if _interpret(expr.condition, resolve).is_nonzero:
                return _interpret(expr.then_expr, resolve)
            return _interpret(expr.else_expr, resolve)
        case AssignExpr():
            return _interpret_assign(expr, resolve)
        case _:
            raise ExpressionEvalError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_assign(expr: AssignExpr, resolve: Resolver | None) -> Value:
    """Evaluate the value, then store it (or combine it) into the target slot."""
    value = _interpret(expr.value, resolve)

    if not isinstance(expr.target, Variable):
        raise InvalidAssignTargetError()
    if resolve is None:
        raise NoResolverError()

    slot = resolve(expr.target.name)
    binary_op = expr.op.binary_op
    if binary_op is not None:
        value = apply_binary(binary_op, slot.value, value)
    slot.value = value
    logger.debug("%s %s -> %s", expr.target.name, expr.op.value, value)
    return value
