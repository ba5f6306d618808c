"""User-defined function values and their closures."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from lox import LoxValue
from lox.syntax.nodes import Function
from lox.types.callable import LoxCallable
from lox.types.environment import Environment
from lox.types.nil import Nil

if TYPE_CHECKING:
    from lox.evaluation.interpreter import Interpreter


class LoxFunction(LoxCallable):
    """A first-class function: its declaration plus the environment it closed over."""

    __slots__ = ("declaration", "closure")

    def __init__(self, declaration: Function, closure: Environment):
        self.declaration: Function = declaration
        self.closure: Environment = closure

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: Interpreter, arguments: list[LoxValue]) -> LoxValue:
        """
        Bind the arguments in a fresh frame whose enclosing scope is the closure
        (not the caller's environment) and run the body there. A ReturnWith
        outcome from the body stops here and its value becomes the result.
        """
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        outcome = interpreter.execute_block(self.declaration.body, environment)
        if outcome is not None:
            return outcome.value
        return Nil

    def __str__(self) -> str:
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<fn ")
            buffer.write(self.declaration.name.lexeme)
            buffer.write("(")
            buffer.write(", ".join(p.lexeme for p in self.declaration.params))
            buffer.write(")>")
            return buffer.getvalue()
