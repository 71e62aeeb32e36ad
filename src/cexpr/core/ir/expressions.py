"""
Expression AST types for cexpr.

A closed set of immutable node types produced by the parser and walked by
the evaluator:

- IntegerLiteral: 42, 0xFF, 0b1010 (stored as int32)
- Variable: a, counter, %r0
- UnaryExpr: +x, -x, ~x, !x
- BinaryExpr: the 18 C binary operators
- ConditionalExpr: cond ? a : b
- AssignExpr: x = v and the 10 compound assignments
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from cexpr.core.value import INT32_MAX, INT32_MIN

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    # Logical
    LOR = "||"
    LAND = "&&"
    # Bitwise
    OR = "|"
    XOR = "^"
    AND = "&"
    # Equality
    EQ = "=="
    NE = "!="
    # Relational
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    # Shift
    SHL = "<<"
    SHR = ">>"
    # Additive
    ADD = "+"
    SUB = "-"
    # Multiplicative
    MUL = "*"
    DIV = "/"
    MOD = "%"


class UnaryOp(StrEnum):
    """Unary operators for expressions."""

    PLUS = "+"
    NEG = "-"
    INV = "~"
    NOT = "!"


class AssignOp(StrEnum):
    """Assignment operators. Compound forms map onto a BinaryOp."""

    ASSIGN = "="
    ADD = "+="
    SUB = "-="
    MUL = "*="
    DIV = "/="
    MOD = "%="
    AND = "&="
    OR = "|="
    XOR = "^="
    SHL = "<<="
    SHR = ">>="

    @property
    def binary_op(self) -> BinaryOp | None:
        """The operator applied by a compound assignment, None for plain '='."""
        if self is AssignOp.ASSIGN:
            return None
        return BinaryOp(self.value[:-1])


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class IntegerLiteral(BaseModel):
    """An integer literal, already converted to int32."""

    value: int = Field(ge=INT32_MIN, le=INT32_MAX, description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class Variable(BaseModel):
    """
    Reference to a variable resolved through the caller's resolver.

    Examples:
        - Variable(name="count") → count
        - Variable(name="%r0") → %r0 (register identifier)
    """

    name: str = Field(min_length=1, description="Variable or register name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name

    @property
    def is_register(self) -> bool:
        """Register-style name, written with a leading '%'."""
        return self.name.startswith("%")


class UnaryExpr(BaseModel):
    """Unary operation: op operand."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class ConditionalExpr(BaseModel):
    """
    Conditional expression: condition ? then_expr : else_expr.

    Only the selected branch is evaluated.
    """

    condition: Expr = Field(description="Selector, true when non-zero")
    then_expr: Expr = Field(description="Value when condition is non-zero")
    else_expr: Expr = Field(description="Value when condition is zero")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.condition} ? {self.then_expr} : {self.else_expr})"


class AssignExpr(BaseModel):
    """
    Assignment: target op value.

    The grammar accepts any expression as target; evaluation rejects
    anything that is not a Variable.
    """

    op: AssignOp
    target: Expr
    value: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.target} {self.op.value} {self.value})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = IntegerLiteral | Variable | UnaryExpr | BinaryExpr | ConditionalExpr | AssignExpr

# Rebuild models for recursive forward references
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
ConditionalExpr.model_rebuild()
AssignExpr.model_rebuild()
