"""Turns source text into a list of tokens."""

from __future__ import annotations

import re

from .tokens import Token, TokenKind


class LexError(ValueError):
    """Raised when the input holds a character that starts no token."""

    def __init__(self, char: str, line: int) -> None:
        super().__init__(f"unexpected character {char!r} on line {line}")
        self.char = char
        self.line = line


_KEYWORDS = {
    "int": TokenKind.INT,
    "return": TokenKind.RETURN,
    "main": TokenKind.MAIN,
    "void": TokenKind.VOID,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
    "continue": TokenKind.CONTINUE,
    "break": TokenKind.BREAK,
}

_OPERATORS = {
    "&&": TokenKind.LAND,
    "||": TokenKind.LOR,
    "<=": TokenKind.LE,
    ">=": TokenKind.GE,
    "==": TokenKind.EQ,
    "!=": TokenKind.NE,
    "+": TokenKind.PLUS,
    "-": TokenKind.SUB,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "%": TokenKind.MOD,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    "=": TokenKind.ASSIGN,
    ";": TokenKind.END,
    "{": TokenKind.BLOCKL,
    "}": TokenKind.BLOCKR,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "&": TokenKind.AND,
    "|": TokenKind.OR,
    "^": TokenKind.XOR,
    "!": TokenKind.LNOT,
    "~": TokenKind.BNOT,
    ",": TokenKind.COMMA,
}

_PATTERN = re.compile(
    r"(?P<skip>\s+|//[^\n]*|/\*.*?\*/)"
    r"|(?P<const>\d+)"
    r"|(?P<word>[A-Za-z_]\w*)"
    r"|(?P<op>" + "|".join(re.escape(op) for op in _OPERATORS) + r")",
    re.DOTALL,
)


def tokenize(text: str) -> list[Token]:
    """Split source text into tokens, skipping whitespace and comments."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _PATTERN.match(text, pos)
        if match is None:
            raise LexError(text[pos], text.count("\n", 0, pos) + 1)
        lexeme = match.group()
        group = match.lastgroup
        if group == "const":
            tokens.append(Token(TokenKind.CONST, lexeme))
        elif group == "word":
            tokens.append(Token(_KEYWORDS.get(lexeme, TokenKind.IDENTIFIER), lexeme))
        elif group == "op":
            tokens.append(Token(_OPERATORS[lexeme], lexeme))
        pos = match.end()
    return tokens