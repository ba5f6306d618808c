from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class TokenType(Enum):
    # Single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Reserved words
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: dict[str, TokenType] = {
    t.name.lower(): t
    for t in (
        TokenType.AND, TokenType.CLASS, TokenType.ELSE, TokenType.FALSE,
        TokenType.FUN, TokenType.FOR, TokenType.IF, TokenType.NIL,
        TokenType.OR, TokenType.PRINT, TokenType.RETURN, TokenType.SUPER,
        TokenType.THIS, TokenType.TRUE, TokenType.VAR, TokenType.WHILE,
    )
}

LiteralValue = Optional[Union[int, float, str]]


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: LiteralValue
    line: int

    def __str__(self) -> str:
        literal = "" if self.literal is None else self.literal
        return f"{self.type.name} {self.lexeme} {literal}"
