"""Native functions for the Lox global environment."""
from __future__ import annotations

import time

from lox.types.callable import NativeFunction
from lox.types.environment import Environment


def clock() -> float:
    """Wall-clock time in seconds, as a float."""
    return time.time()


NATIVES: tuple[NativeFunction, ...] = (
    NativeFunction("clock", 0, clock),
)


def register(env: Environment) -> None:
    """Register all native functions into the given environment."""
    for native in NATIVES:
        env.define(native.name, native)
