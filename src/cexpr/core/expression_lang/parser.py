"""
Precedence-climbing parser for the cexpr expression language.

Grammar (precedence low to high):
    expression   → assignment
    assignment   → conditional (assign_op assignment)?
    conditional  → binary ("?" expression ":" conditional)?
    binary       → unary (binop unary)*        climbed by operator precedence
    unary        → ("+" | "-" | "~" | "!") primary | primary
    primary      → INT | HEX_INT | BIN_INT | IDENT | REGISTER | "(" expression ")"

Binary operator precedence (low to high):
    ||  &&  |  ^  &  (== !=)  (< <= > >=)  (<< >>)  (+ -)  (* / %)

Binary operators are left associative; assignment and the conditional
operator are right associative. Assignment targets are not checked here.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from cexpr.core.errors import ExpressionSyntaxError, make_syntax_error
from cexpr.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from cexpr.core.ir.expressions import (
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
from cexpr.core.value import INT32_MAX, UINT32_MASK, wrap_int32

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Binding strength of each binary operator class, loosest first.

    Assignment, the conditional operator and the unary prefix operators sit
    outside this ladder and have their own grammar rules.
    """

    LOGICAL_OR = 1
    LOGICAL_AND = 2
    BITWISE_OR = 3
    BITWISE_XOR = 4
    BITWISE_AND = 5
    EQUALITY = 6
    RELATIONAL = 7
    SHIFT = 8
    ADDITIVE = 9
    MULTIPLICATIVE = 10


BINARY_PRECEDENCE: dict[BinaryOp, Precedence] = {
    BinaryOp.LOR: Precedence.LOGICAL_OR,
    BinaryOp.LAND: Precedence.LOGICAL_AND,
    BinaryOp.OR: Precedence.BITWISE_OR,
    BinaryOp.XOR: Precedence.BITWISE_XOR,
    BinaryOp.AND: Precedence.BITWISE_AND,
    BinaryOp.EQ: Precedence.EQUALITY,
    BinaryOp.NE: Precedence.EQUALITY,
    BinaryOp.LT: Precedence.RELATIONAL,
    BinaryOp.LE: Precedence.RELATIONAL,
    BinaryOp.GT: Precedence.RELATIONAL,
    BinaryOp.GE: Precedence.RELATIONAL,
    BinaryOp.SHL: Precedence.SHIFT,
    BinaryOp.SHR: Precedence.SHIFT,
    BinaryOp.ADD: Precedence.ADDITIVE,
    BinaryOp.SUB: Precedence.ADDITIVE,
    BinaryOp.MUL: Precedence.MULTIPLICATIVE,
    BinaryOp.DIV: Precedence.MULTIPLICATIVE,
    BinaryOp.MOD: Precedence.MULTIPLICATIVE,
}

_BINARY_TOKENS: dict[TokenKind, BinaryOp] = {
    TokenKind.LOR: BinaryOp.LOR,
    TokenKind.LAND: BinaryOp.LAND,
    TokenKind.PIPE: BinaryOp.OR,
    TokenKind.CARET: BinaryOp.XOR,
    TokenKind.AMP: BinaryOp.AND,
    TokenKind.EQ: BinaryOp.EQ,
    TokenKind.NE: BinaryOp.NE,
    TokenKind.LT: BinaryOp.LT,
    TokenKind.LE: BinaryOp.LE,
    TokenKind.GT: BinaryOp.GT,
    TokenKind.GE: BinaryOp.GE,
    TokenKind.SHL: BinaryOp.SHL,
    TokenKind.SHR: BinaryOp.SHR,
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.PERCENT: BinaryOp.MOD,
}

_UNARY_TOKENS: dict[TokenKind, UnaryOp] = {
    TokenKind.PLUS: UnaryOp.PLUS,
    TokenKind.MINUS: UnaryOp.NEG,
    TokenKind.TILDE: UnaryOp.INV,
    TokenKind.BANG: UnaryOp.NOT,
}

_ASSIGN_TOKENS: dict[TokenKind, AssignOp] = {
    TokenKind.ASSIGN: AssignOp.ASSIGN,
    TokenKind.PLUS_ASSIGN: AssignOp.ADD,
    TokenKind.MINUS_ASSIGN: AssignOp.SUB,
    TokenKind.STAR_ASSIGN: AssignOp.MUL,
    TokenKind.SLASH_ASSIGN: AssignOp.DIV,
    TokenKind.PERCENT_ASSIGN: AssignOp.MOD,
    TokenKind.AMP_ASSIGN: AssignOp.AND,
    TokenKind.PIPE_ASSIGN: AssignOp.OR,
    TokenKind.CARET_ASSIGN: AssignOp.XOR,
    TokenKind.SHL_ASSIGN: AssignOp.SHL,
    TokenKind.SHR_ASSIGN: AssignOp.SHR,
}

_INTEGER_BASES: dict[TokenKind, int] = {
    TokenKind.INT: 10,
    TokenKind.HEX_INT: 16,
    TokenKind.BIN_INT: 2,
}


class _Parser:
    """Recursive descent parser with precedence climbing for binary operators."""

    def __init__(self, tokens: list[Token], source: str | None = None) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            tokens = [*tokens, Token(TokenKind.EOF, "", tokens[-1].pos if tokens else 0)]
        self.tokens = tokens
        self.source = source
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def error(self, message: str, tok: Token | None = None) -> ExpressionSyntaxError:
        tok = tok or self.current
        return make_syntax_error(message, self.source, tok.pos)

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """Top-level: assignment."""
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        """conditional (assign_op assignment)?"""
        target = self.parse_conditional()
        op = _ASSIGN_TOKENS.get(self.current.kind)
        if op is None:
            return target
        self.advance()
        value = self.parse_assignment()
        return AssignExpr(op=op, target=target, value=value)

    def parse_conditional(self) -> Expr:
        """binary ('?' expression ':' conditional)?"""
        condition = self.parse_binary()
        if self.current.kind != TokenKind.QUESTION:
            return condition
        self.advance()
        then_expr = self.parse_expression()
        if self.current.kind != TokenKind.COLON:
            raise self.error("expected ':'")
        self.advance()
        else_expr = self.parse_conditional()
        return ConditionalExpr(condition=condition, then_expr=then_expr, else_expr=else_expr)

    def parse_binary(
        self,
        lhs: Expr | None = None,
        min_precedence: Precedence = Precedence.LOGICAL_OR,
    ) -> Expr:
        """Climb binary operators binding at least as tightly as min_precedence."""
        if lhs is None:
            lhs = self.parse_unary()

        while (op := self._binary_op()) is not None and BINARY_PRECEDENCE[op] >= min_precedence:
            self.advance()
            rhs = self.parse_unary()
            # Fold tighter-binding operators into rhs before merging
            while (next_op := self._binary_op()) is not None and (
                BINARY_PRECEDENCE[next_op] > BINARY_PRECEDENCE[op]
            ):
                rhs = self.parse_binary(rhs, Precedence(BINARY_PRECEDENCE[op] + 1))
            lhs = BinaryExpr(op=op, left=lhs, right=rhs)

        return lhs

    def parse_unary(self) -> Expr:
        """('+' | '-' | '~' | '!') primary | primary"""
        op = _UNARY_TOKENS.get(self.current.kind)
        if op is None:
            return self.parse_primary()
        self.advance()
        operand = self.parse_primary()
        return UnaryExpr(op=op, operand=operand)

    def parse_primary(self) -> Expr:
        """integer | variable | register | '(' expression ')'"""
        tok = self.current

        if tok.kind in _INTEGER_BASES:
            self.advance()
            return self._integer_literal(tok)

        if tok.kind in (TokenKind.IDENT, TokenKind.REGISTER):
            self.advance()
            return Variable(name=tok.value)

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            expr = self.parse_expression()
            if self.current.kind != TokenKind.RPAREN:
                raise self.error("expected ')'")
            self.advance()
            return expr

        raise self.error("unknown token when expecting an expression")

    def parse_all(self) -> Expr:
        """Parse one expression and require the whole stream to be consumed."""
        expr = self.parse_expression()
        tok = self.current
        if tok.kind == TokenKind.EOF:
            return expr
        if tok.kind == TokenKind.RPAREN:
            raise self.error("expected '('")
        raise self.error(f"unknown token when expecting an operator '{tok.value}'")

    # -- Helpers --

    def _binary_op(self) -> BinaryOp | None:
        return _BINARY_TOKENS.get(self.current.kind)

    def _integer_literal(self, tok: Token) -> IntegerLiteral:
        """Convert literal text to int32, stripping any 0x/0b prefix."""
        base = _INTEGER_BASES[tok.kind]
        digits = tok.value if base == 10 else tok.value[2:]
        value = int(digits, base)

        if base == 10:
            if value > INT32_MAX:
                raise self.error("integer literal out of range", tok)
        else:
            # Hex and binary literals cover the unsigned 32-bit range
            if value > UINT32_MASK:
                raise self.error("integer literal out of range", tok)
            value = wrap_int32(value)

        return IntegerLiteral(value=value)


def parse_tokens(tokens: list[Token], source: str | None = None) -> Expr:
    """Parse an already tokenized expression into an AST.

    Args:
        tokens: Output of tokenize(); an EOF token is appended if missing.
        source: Original text, used only to annotate error messages.

    Raises:
        ExpressionSyntaxError: If the tokens do not form one expression, or
            nest deeper than the interpreter stack allows.
    """
    parser = _Parser(tokens, source)
    try:
        return parser.parse_all()
    except RecursionError as e:
        raise parser.error("expression nested too deeply") from e


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "a = b << 2 | 1")

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionSyntaxError: If the expression is invalid.
        InvalidTokenError: If tokenization fails.
    """
    tokens = tokenize(source)
    expr = parse_tokens(tokens, source)
    logger.debug("Parsed %r as %s", source, expr)
    return expr
