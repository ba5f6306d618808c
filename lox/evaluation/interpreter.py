"""Tree-walking interpreter for Lox.

Statements are executed and expressions evaluated by double dispatch from the
syntax nodes (`node.accept(self)`). The interpreter holds two environments:

- `globals`: fixed root scope where natives such as clock() live;
- `environment`: the current scope cursor, swapped on block and call entry and
  always restored on exit, whether the block finished, returned or failed.

Executing a statement returns a Completion (None or ReturnWith); return is a
value flowing back through the executors, not an exception.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional, TextIO

from lox import LoxValue
from lox.builtin.natives import register
from lox.diagnostics import Diagnostics
from lox.errors import LoxArityError, LoxRuntimeError, LoxTypeError
from lox.evaluation import operators
from lox.evaluation.completion import NORMAL, Completion, ReturnWith
from lox.reader.token import TokenType
from lox.syntax import nodes
from lox.syntax.visitor import ExprVisitor, StmtVisitor
from lox.types.callable import LoxCallable
from lox.types.environment import Environment
from lox.types.function import LoxFunction
from lox.types.nil import Nil

logger = logging.getLogger(__name__)


class Interpreter(ExprVisitor, StmtVisitor):
    def __init__(self, diagnostics: Optional[Diagnostics] = None, out: Optional[TextIO] = None):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.out = out
        self.globals: Environment = Environment()
        register(self.globals)
        self.environment: Environment = self.globals

    def interpret(self, statements: Iterable[nodes.Stmt]) -> bool:
        """Run a program. A runtime error aborts the rest of it and is reported once.

        Returns True if the program ran to completion.
        """
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            logger.debug("aborting on %s at line %d", type(error).__name__, error.token.line)
            self.diagnostics.runtime_error(error)
            return False
        return True

    # ------------------------
    # Entry points
    # ------------------------
    def execute(self, stmt: nodes.Stmt) -> Completion:
        return stmt.accept(self)

    def evaluate(self, expr: nodes.Expr) -> LoxValue:
        return expr.accept(self)

    def execute_block(self, statements: Iterable[nodes.Stmt], environment: Environment) -> Completion:
        previous = self.environment
        self.environment = environment
        try:
            for statement in statements:
                outcome = self.execute(statement)
                if outcome is not None:
                    return outcome
            return NORMAL
        finally:
            self.environment = previous

    # ------------------------
    # Statements
    # ------------------------
    def visit_block_stmt(self, stmt: nodes.Block) -> Completion:
        return self.execute_block(stmt.statements, Environment(self.environment))

    def visit_expression_stmt(self, stmt: nodes.Expression) -> Completion:
        self.evaluate(stmt.expression)
        return NORMAL

    def visit_function_stmt(self, stmt: nodes.Function) -> Completion:
        self.environment.define(stmt.name.lexeme, LoxFunction(stmt, self.environment))
        return NORMAL

    def visit_if_stmt(self, stmt: nodes.If) -> Completion:
        if operators.is_truthy(self.evaluate(stmt.condition)):
            return self.execute(stmt.then_branch)
        if stmt.else_branch is not None:
            return self.execute(stmt.else_branch)
        return NORMAL

    def visit_print_stmt(self, stmt: nodes.Print) -> Completion:
        value = self.evaluate(stmt.expression)
        # stdout resolved per call so a swapped sys.stdout is honoured
        print(operators.stringify(value), file=self.out if self.out is not None else sys.stdout)
        return NORMAL

    def visit_return_stmt(self, stmt: nodes.Return) -> Completion:
        value = Nil if stmt.value is None else self.evaluate(stmt.value)
        return ReturnWith(value)

    def visit_var_stmt(self, stmt: nodes.Var) -> Completion:
        value = Nil if stmt.initializer is None else self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)
        return NORMAL

    def visit_while_stmt(self, stmt: nodes.While) -> Completion:
        while operators.is_truthy(self.evaluate(stmt.condition)):
            outcome = self.execute(stmt.body)
            if outcome is not None:
                return outcome
        return NORMAL

    # ------------------------
    # Expressions
    # ------------------------
    def visit_assign_expr(self, expr: nodes.Assign) -> LoxValue:
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def visit_binary_expr(self, expr: nodes.Binary) -> LoxValue:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        return operators.binary(expr.operator, left, right)

    def visit_call_expr(self, expr: nodes.Call) -> LoxValue:
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxTypeError(expr.paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxArityError(expr.paren, callee.arity(), len(arguments))
        return callee.call(self, arguments)

    def visit_grouping_expr(self, expr: nodes.Grouping) -> LoxValue:
        return self.evaluate(expr.expression)

    def visit_literal_expr(self, expr: nodes.Literal) -> LoxValue:
        return expr.value

    def visit_logical_expr(self, expr: nodes.Logical) -> LoxValue:
        left = self.evaluate(expr.left)
        if expr.operator.type == TokenType.OR:
            if operators.is_truthy(left):
                return left
        elif not operators.is_truthy(left):
            return left
        return self.evaluate(expr.right)

    def visit_unary_expr(self, expr: nodes.Unary) -> LoxValue:
        right = self.evaluate(expr.right)
        if expr.operator.type == TokenType.MINUS:
            return operators.negate(expr.operator, right)
        if expr.operator.type == TokenType.BANG:
            return not operators.is_truthy(right)
        raise LoxRuntimeError(expr.operator, f"Unknown unary operator '{expr.operator.lexeme}'.")

    def visit_variable_expr(self, expr: nodes.Variable) -> LoxValue:
        return self.environment.get(expr.name)
