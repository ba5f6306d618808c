"""
  Lox Scanner

- Single forward pass over the source with start/current cursors.
- Emits Token values, always terminated by exactly one EOF token.
- Errors (unexpected characters, unterminated strings) are reported to the
  Diagnostics sink and scanning carries on:

    - illegal character -> reported, dropped
    - unterminated string -> reported, no token
    - // and # comments -> skipped to end of line
    - "..." strings -> str literal, may span lines
    - 123 -> int, 1.5 -> float
"""

from __future__ import annotations

import logging
from typing import Optional

from lox.diagnostics import Diagnostics
from lox.reader.token import KEYWORDS, LiteralValue, Token, TokenType

logger = logging.getLogger(__name__)

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char -> (bare token, token when followed by '=')
EQUAL_SUFFIXED_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

WHITESPACE = " \r\t"


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def is_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def is_alphanumeric(char: str) -> bool:
    return is_alpha(char) or is_digit(char)


class Scanner:
    def __init__(self, source: str, diagnostics: Optional[Diagnostics] = None):
        self.source = source
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.tokens: list[Token] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> list[Token]:
        while not self.at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        logger.debug("scanned %d tokens over %d lines", len(self.tokens), self.line)
        return self.tokens

    # ------------------------
    # Cursor helpers
    # ------------------------
    def at_end(self, offset: int = 0) -> bool:
        return self.current + offset >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        if self.at_end(offset):
            return "\0"
        return self.source[self.current + offset]

    def advance(self) -> str:
        self.current += 1
        return self.source[self.current - 1]

    def match(self, expected: str) -> bool:
        if self.at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def add_token(self, token_type: TokenType, literal: LiteralValue = None) -> None:
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self.line))

    # ------------------------
    # Dispatch
    # ------------------------
    def scan_token(self) -> None:
        char = self.advance()

        if char in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[char])
        elif char in EQUAL_SUFFIXED_TOKENS:
            bare, compound = EQUAL_SUFFIXED_TOKENS[char]
            self.add_token(compound if self.match("=") else bare)
        elif char == "/":
            if self.match("/"):
                self.skip_line_comment()
            else:
                self.add_token(TokenType.SLASH)
        elif char == "#":
            self.skip_line_comment()
        elif char in WHITESPACE:
            pass
        elif char == "\n":
            self.line += 1
        elif char == '"':
            self.string()
        elif is_digit(char):
            self.number()
        elif is_alpha(char):
            self.identifier()
        else:
            self.diagnostics.error(self.line, f"Unexpected character {char}.")

    def skip_line_comment(self) -> None:
        while self.peek() != "\n" and not self.at_end():
            self.advance()

    # ------------------------
    # Literals
    # ------------------------
    def string(self) -> None:
        while self.peek() != '"' and not self.at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.at_end():
            self.diagnostics.error(self.line, "Unterminated string.")
            return

        self.advance()  # closing "
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self) -> None:
        while is_digit(self.peek()):
            self.advance()

        if self.peek() == "." and is_digit(self.peek(1)):
            self.advance()  # consume '.'
            while is_digit(self.peek()):
                self.advance()
            self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))
        else:
            self.add_token(TokenType.NUMBER, int(self.source[self.start:self.current]))

    def identifier(self) -> None:
        while is_alphanumeric(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))


def lex(source: str, diagnostics: Optional[Diagnostics] = None) -> list[Token]:
    """Scan `source` into a token list ending with EOF."""
    return Scanner(source, diagnostics).scan_tokens()
