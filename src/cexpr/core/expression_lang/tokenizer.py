"""
Tokenizer for the cexpr expression language.

Converts an expression string into a sequence of typed tokens. At each
position the ordered rule list is tried and the first matching rule wins;
longer operators are listed before their prefixes so that "<<=" beats
"<<" beats "<".
"""

from __future__ import annotations

import re
from enum import IntEnum, auto

from cexpr.core.errors import ErrorContext, InvalidTokenError


class TokenKind(IntEnum):
    """Token types for the expression language. EOF is the lowest kind."""

    EOF = 0

    # Literals (raw text, converted by the parser)
    INT = auto()
    HEX_INT = auto()
    BIN_INT = auto()

    # Names
    IDENT = auto()
    REGISTER = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    QUESTION = auto()
    COLON = auto()

    # Binary operators
    LOR = auto()
    LAND = auto()
    PIPE = auto()
    CARET = auto()
    AMP = auto()
    EQ = auto()
    NE = auto()
    LT = auto()
    LE = auto()
    GT = auto()
    GE = auto()
    SHL = auto()
    SHR = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    # Unary-only operators
    TILDE = auto()
    BANG = auto()

    # Assignment operators
    ASSIGN = auto()
    PLUS_ASSIGN = auto()
    MINUS_ASSIGN = auto()
    STAR_ASSIGN = auto()
    SLASH_ASSIGN = auto()
    PERCENT_ASSIGN = auto()
    AMP_ASSIGN = auto()
    PIPE_ASSIGN = auto()
    CARET_ASSIGN = auto()
    SHL_ASSIGN = auto()
    SHR_ASSIGN = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, pos={self.pos})"


# Ordered rule list: (TokenKind, regex). Order is significant.
_TOKEN_RULES: list[tuple[TokenKind, str]] = [
    (TokenKind.HEX_INT, r"0[xX][0-9a-fA-F]+"),
    (TokenKind.BIN_INT, r"0[bB][01]+"),
    (TokenKind.INT, r"[0-9]+"),
    (TokenKind.IDENT, r"[a-zA-Z][a-zA-Z0-9]*"),
    (TokenKind.REGISTER, r"%[a-zA-Z][a-zA-Z0-9]*"),
    # 3-character
    (TokenKind.SHL_ASSIGN, r"<<="),
    (TokenKind.SHR_ASSIGN, r">>="),
    # 2-character
    (TokenKind.EQ, r"=="),
    (TokenKind.NE, r"!="),
    (TokenKind.LE, r"<="),
    (TokenKind.GE, r">="),
    (TokenKind.LAND, r"&&"),
    (TokenKind.LOR, r"\|\|"),
    (TokenKind.SHL, r"<<"),
    (TokenKind.SHR, r">>"),
    (TokenKind.PLUS_ASSIGN, r"\+="),
    (TokenKind.MINUS_ASSIGN, r"-="),
    (TokenKind.STAR_ASSIGN, r"\*="),
    (TokenKind.SLASH_ASSIGN, r"/="),
    (TokenKind.PERCENT_ASSIGN, r"%="),
    (TokenKind.AMP_ASSIGN, r"&="),
    (TokenKind.PIPE_ASSIGN, r"\|="),
    (TokenKind.CARET_ASSIGN, r"\^="),
    # 1-character
    (TokenKind.LT, r"<"),
    (TokenKind.GT, r">"),
    (TokenKind.PLUS, r"\+"),
    (TokenKind.MINUS, r"-"),
    (TokenKind.STAR, r"\*"),
    (TokenKind.SLASH, r"/"),
    (TokenKind.PERCENT, r"%"),
    (TokenKind.AMP, r"&"),
    (TokenKind.PIPE, r"\|"),
    (TokenKind.CARET, r"\^"),
    (TokenKind.TILDE, r"~"),
    (TokenKind.BANG, r"!"),
    (TokenKind.LPAREN, r"\("),
    (TokenKind.RPAREN, r"\)"),
    (TokenKind.QUESTION, r"\?"),
    (TokenKind.COLON, r":"),
    (TokenKind.ASSIGN, r"="),
]

_COMPILED_RULES: list[tuple[TokenKind, re.Pattern[str]]] = [
    (kind, re.compile(pattern, re.ASCII)) for kind, pattern in _TOKEN_RULES
]

_WHITESPACE_RE = re.compile(r"[ \t]+")

# Tokens after which an operand is complete, so '%' is the modulo operator
_OPERAND_END = frozenset(
    {
        TokenKind.INT,
        TokenKind.HEX_INT,
        TokenKind.BIN_INT,
        TokenKind.IDENT,
        TokenKind.REGISTER,
        TokenKind.RPAREN,
    }
)


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending with EOF.

    Raises:
        InvalidTokenError: If some input matches no lexical rule.
    """
    tokens: list[Token] = []
    pos = 0
    n = len(source)

    while pos < n:
        m = _WHITESPACE_RE.match(source, pos)
        if m:
            pos = m.end()
            continue

        expecting_operand = not tokens or tokens[-1].kind not in _OPERAND_END
        for kind, pattern in _COMPILED_RULES:
            if kind == TokenKind.REGISTER and not expecting_operand:
                continue
            m = pattern.match(source, pos)
            if m:
                tokens.append(Token(kind, m.group(0), pos))
                pos = m.end()
                break
        else:
            raise InvalidTokenError(
                f"invalid token: {source[pos]!r}",
                remainder=source[pos:],
                context=ErrorContext(source=source, pos=pos),
            )

    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens
