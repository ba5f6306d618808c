from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, TextIO

from lox.config import get_prompt
from lox.diagnostics import Diagnostics
from lox.evaluation.interpreter import Interpreter
from lox.reader.parser import Parser
from lox.reader.scanner import Scanner
from lox.syntax.nodes import Stmt

logger = logging.getLogger(__name__)


class Lox:
    """
    Orchestrates scanning, parsing and interpreting Lox code.
    Maintains one Interpreter (and so one global scope) across calls.
    """

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.diagnostics = Diagnostics(err)
        self.interpreter = Interpreter(self.diagnostics, out)

    def parse(self, source: str) -> list[Stmt]:
        tokens = Scanner(source, self.diagnostics).scan_tokens()
        return Parser(tokens, self.diagnostics).parse()

    def run(self, source: str) -> None:
        """Run a program; nothing is executed if it has a scan or parse error."""
        statements = self.parse(source)
        if self.diagnostics.had_error:
            logger.debug("static errors recorded; skipping interpretation")
            return
        self.interpreter.interpret(statements)

    def run_file(self, path: str | Path) -> int:
        """Run a script file and return the process exit code (65, 70 or 0)."""
        source = Path(path).read_text(encoding="utf-8")
        self.run(source)
        return self.diagnostics.exit_code

    def run_prompt(self, lines: Optional[Iterable[str]] = None) -> None:
        """Read-eval loop. Errors on one line do not affect the next."""
        for line in lines if lines is not None else _read_lines(get_prompt()):
            self.run(line)
            self.diagnostics.reset()


def _read_lines(prompt: str) -> Iterable[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return
