"""Statement outcomes.

Executing a statement yields a Completion: None when control falls through
normally, or ReturnWith(value) when a return statement ran. Blocks, ifs and
loops hand a ReturnWith straight back to their caller; only a function call
consumes it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lox import LoxValue


@dataclass(frozen=True)
class ReturnWith:
    value: LoxValue


Completion = Optional[ReturnWith]
NORMAL: Completion = None
