"""Diagnostics sink shared by the scanner, parser and interpreter.

One Diagnostics object is passed by reference through every stage of a run.
It writes user-facing error lines of the exact shape

    [line N] Error<where>: message

and remembers whether a static (scan/parse) or runtime error was seen, which
decides the process exit code.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO, Union

from lox.errors import LoxRuntimeError
from lox.reader.token import Token, TokenType

logger = logging.getLogger(__name__)

EX_OK = 0
EX_DATAERR = 65
EX_SOFTWARE = 70


class Diagnostics:
    def __init__(self, stream: TextIO | None = None):
        self.stream: TextIO | None = stream
        self.had_error: bool = False
        self.had_runtime_error: bool = False
        self.messages: list[str] = []

    def report(self, line: int, where: str, message: str) -> None:
        text = f"[line {line}] Error{where}: {message}"
        logger.debug("static error: %s", text)
        self.messages.append(text)
        self._write(text)
        self.had_error = True

    def error(self, line_or_token: Union[int, Token], message: str) -> None:
        """Report a scan/parse error at a bare line or at a token."""
        if isinstance(line_or_token, Token):
            token = line_or_token
            if token.type == TokenType.EOF:
                where = " at end"
            else:
                where = f" at '{token.lexeme}'"
            self.report(token.line, where, message)
        else:
            self.report(line_or_token, "", message)

    def runtime_error(self, error: LoxRuntimeError) -> None:
        text = f"[line {error.token.line}] Error: {error.message}"
        logger.debug("runtime error (%s): %s", type(error).__name__, text)
        self.messages.append(text)
        self._write(text)
        self.had_runtime_error = True

    def _write(self, text: str) -> None:
        # stderr resolved per write so a swapped sys.stderr is honoured
        print(text, file=self.stream if self.stream is not None else sys.stderr)

    def reset(self) -> None:
        self.had_error = False
        self.had_runtime_error = False
        self.messages.clear()

    @property
    def exit_code(self) -> int:
        if self.had_error:
            return EX_DATAERR
        if self.had_runtime_error:
            return EX_SOFTWARE
        return EX_OK
