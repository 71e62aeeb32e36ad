"""
cexpr Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .expressions import (
    AssignExpr,
    AssignOp,
    BinaryExpr,
    BinaryOp,
    ConditionalExpr,
    Expr,
    IntegerLiteral,
    UnaryExpr,
    UnaryOp,
    Variable,
)

__all__ = [
    "AssignExpr",
    "AssignOp",
    "BinaryExpr",
    "BinaryOp",
    "ConditionalExpr",
    "Expr",
    "IntegerLiteral",
    "UnaryExpr",
    "UnaryOp",
    "Variable",
]
