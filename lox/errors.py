from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lox.reader.token import Token


class LoxError(Exception):
    """ Base class for all Lox errors"""
    pass


class LoxParseError(LoxError):
    """ Raised inside the parser to unwind to the nearest declaration boundary.
    The diagnostic has already been reported when this is raised."""


class LoxNodeError(LoxError, TypeError):
    """ Raised when a syntax node is constructed with a field of the wrong shape"""


class LoxRuntimeError(LoxError):
    """ Raised when evaluation fails; carries the token used for the line number"""

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class LoxTypeError(LoxRuntimeError):
    """ Raised when an operand or callee has the wrong kind"""


class LoxUndefinedVariable(LoxRuntimeError):
    """ Raised when a name is read or assigned before it is defined"""

    def __init__(self, token: Token):
        super().__init__(token, f"Undefined variable '{token.lexeme}'.")


class LoxArityError(LoxRuntimeError):
    """ Raised when a function is called with the wrong number of arguments"""

    def __init__(self, token: Token, expected: int, actual: int):
        super().__init__(token, f"Expected {expected} arguments but got {actual}.")
        self.expected = expected
        self.actual = actual
