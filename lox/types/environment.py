"""Runtime environment for Lox.

The Environment stores bindings of names to evaluated Lox values and supports
nested scopes via an `enclosing` link fixed at construction. Chains are plain
Python references, so a closure keeps its defining scopes alive for as long
as it is reachable, and several closures may share one chain.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lox import LoxValue
from lox.errors import LoxUndefinedVariable
from lox.reader.token import Token


class Environment:
    """Hierarchical mapping from names to Lox values."""

    __slots__ = ("values", "_enclosing")

    def __init__(self, enclosing: Optional[Environment] = None):
        self.values: dict[str, LoxValue] = {}
        self._enclosing: Environment | None = enclosing

    @property
    def enclosing(self) -> Optional[Environment]:
        return self._enclosing

    def define(self, name: str, value: LoxValue) -> None:
        """Bind `name` in this frame, replacing any existing binding here.

        Never searches outward: defining in an inner frame shadows.
        """
        self.values[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env._enclosing
        return None

    def get(self, name: Token) -> LoxValue:
        """Look up the value bound to `name.lexeme`.

        Raises LoxUndefinedVariable if no frame in the chain binds it.
        """
        env = self.find(name.lexeme)
        if env is None:
            raise LoxUndefinedVariable(name)
        return env.values[name.lexeme]

    def assign(self, name: Token, value: LoxValue) -> None:
        """Update an existing binding in the frame where it is found.

        Raises LoxUndefinedVariable if the name is not bound anywhere; assignment
        never creates a binding.
        """
        env = self.find(name.lexeme)
        if env is None:
            raise LoxUndefinedVariable(name)
        env.values[name.lexeme] = value

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.values.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for the enclosing scope."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self._enclosing is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env = self
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env._enclosing
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
