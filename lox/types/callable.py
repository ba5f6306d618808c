"""Callable values: anything a Lox call expression can invoke."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, TYPE_CHECKING

from lox import LoxValue

if TYPE_CHECKING:
    from lox.evaluation.interpreter import Interpreter


class LoxCallable(ABC):
    @abstractmethod
    def arity(self) -> int:
        """Number of arguments the callable requires."""

    @abstractmethod
    def call(self, interpreter: Interpreter, arguments: list[LoxValue]) -> LoxValue:
        """Invoke with already-evaluated arguments; len(arguments) == arity()."""


class NativeFunction(LoxCallable):
    """A host function exposed to Lox code."""

    __slots__ = ("name", "_arity", "fn")

    def __init__(self, name: str, arity: int, fn: Callable[..., LoxValue]):
        self.name = name
        self._arity = arity
        self.fn = fn

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: Interpreter, arguments: list[LoxValue]) -> LoxValue:
        return self.fn(*arguments)

    def __str__(self) -> str:
        return "<native fn>"

    def __repr__(self) -> str:
        return f"NativeFunction({self.name!r}, {self._arity})"
