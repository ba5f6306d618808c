import pytest
from dataclasses import dataclass
from io import StringIO

from lox.diagnostics import Diagnostics
from lox.evaluation.interpreter import Interpreter
from lox.reader.parser import Parser
from lox.reader.scanner import Scanner
from lox.runtime import Lox

# Fixtures shared by the suite:
# - `run` runs a whole program through the Lox facade and captures both
#   output channels plus the exit code.
# - `parse_source` scans and parses with a throwaway Diagnostics.
# - `interpreter` / `execute` / `evaluate` drive the Interpreter directly, so
#   tests can catch the raised LoxRuntimeError instead of its report.


@dataclass
class RunResult:
    out: str
    err: str
    exit_code: int

    @property
    def lines(self):
        return self.out.splitlines()


@pytest.fixture
def run():
    def _run(source: str) -> RunResult:
        out, err = StringIO(), StringIO()
        lox = Lox(out=out, err=err)
        lox.run(source)
        return RunResult(out.getvalue(), err.getvalue(), lox.diagnostics.exit_code)
    return _run


@pytest.fixture
def diagnostics():
    return Diagnostics(StringIO())


@pytest.fixture
def parse_source(diagnostics):
    def _parse(source: str):
        tokens = Scanner(source, diagnostics).scan_tokens()
        return Parser(tokens, diagnostics).parse()
    return _parse


@pytest.fixture
def interpreter(diagnostics):
    return Interpreter(diagnostics, out=StringIO())


@pytest.fixture
def execute(interpreter, parse_source, diagnostics):
    """Execute every statement of `source`, letting runtime errors propagate."""
    def _execute(source: str) -> str:
        statements = parse_source(source)
        assert not diagnostics.had_error, diagnostics.messages
        for statement in statements:
            interpreter.execute(statement)
        return interpreter.out.getvalue()
    return _execute


@pytest.fixture
def evaluate(interpreter, parse_source, diagnostics):
    """Evaluate a single expression and return its Python value."""
    def _evaluate(source: str):
        [statement] = parse_source(f"{source};")
        assert not diagnostics.had_error, diagnostics.messages
        return interpreter.evaluate(statement.expression)
    return _evaluate
