"""Token kinds, tokens and the operator tables used by the expression parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TokenKind(IntEnum):
    """Every kind of token the compiler knows about."""

    INT = 1
    RETURN = 2
    MAIN = 3
    IDENTIFIER = 4
    CONST = 5
    PLUS = 6
    SUB = 7
    MULTIPLY = 8
    DIVIDE = 9
    LT = 10
    GT = 11
    LE = 12
    GE = 13
    EQ = 14
    NE = 15
    ASSIGN = 16
    END = 17
    BLOCKL = 18
    BLOCKR = 19
    LPAREN = 20
    RPAREN = 21
    MOD = 22
    AND = 23
    OR = 24
    XOR = 25
    VOID = 26
    IF = 27
    ELSE = 28
    WHILE = 29
    CONTINUE = 30
    BREAK = 31
    LNOT = 32
    BNOT = 33
    LAND = 34
    LOR = 35
    COMMA = 36
    NEG = 37


@dataclass(frozen=True)
class Token:
    """A lexeme together with its kind."""

    kind: TokenKind
    text: str


_PRECEDENCE: dict[TokenKind, int] = {
    TokenKind.LPAREN: 1,
    TokenKind.LNOT: 2,
    TokenKind.BNOT: 2,
    TokenKind.NEG: 2,
    TokenKind.DIVIDE: 3,
    TokenKind.MULTIPLY: 3,
    TokenKind.MOD: 3,
    TokenKind.PLUS: 4,
    TokenKind.SUB: 4,
    TokenKind.LT: 5,
    TokenKind.GT: 5,
    TokenKind.LE: 5,
    TokenKind.GE: 5,
    TokenKind.EQ: 6,
    TokenKind.NE: 6,
    TokenKind.AND: 7,
    TokenKind.XOR: 8,
    TokenKind.OR: 9,
    TokenKind.LAND: 10,
    TokenKind.LOR: 11,
    TokenKind.RPAREN: 12,
}

_UNARY = frozenset({TokenKind.LNOT, TokenKind.BNOT, TokenKind.NEG})
_BINARY = frozenset(
    {
        TokenKind.DIVIDE,
        TokenKind.MULTIPLY,
        TokenKind.MOD,
        TokenKind.PLUS,
        TokenKind.SUB,
        TokenKind.LT,
        TokenKind.GT,
        TokenKind.LE,
        TokenKind.GE,
        TokenKind.EQ,
        TokenKind.NE,
        TokenKind.AND,
        TokenKind.XOR,
        TokenKind.OR,
        TokenKind.LAND,
        TokenKind.LOR,
    }
)


def precedence(kind: TokenKind) -> int:
    """Binding level of an operator; lower binds tighter, 0 means not an operator."""
    return _PRECEDENCE.get(kind, 0)


def arity(kind: TokenKind) -> int:
    """Number of operands an operator takes; 0 for tokens that are not operators."""
    if kind in _UNARY:
        return 1
    if kind in _BINARY:
        return 2
    return 0