"""Capability sets for syntax-tree consumers.

A consumer that walks expressions subclasses ExprVisitor, one that walks
statements subclasses StmtVisitor; every node kind in the grammar table has a
matching abstract method, so a consumer missing a case cannot be instantiated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from lox.syntax import nodes


class ExprVisitor(ABC):
    @abstractmethod
    def visit_assign_expr(self, expr: nodes.Assign) -> Any: ...

    @abstractmethod
    def visit_binary_expr(self, expr: nodes.Binary) -> Any: ...

    @abstractmethod
    def visit_call_expr(self, expr: nodes.Call) -> Any: ...

    @abstractmethod
    def visit_grouping_expr(self, expr: nodes.Grouping) -> Any: ...

    @abstractmethod
    def visit_literal_expr(self, expr: nodes.Literal) -> Any: ...

    @abstractmethod
    def visit_logical_expr(self, expr: nodes.Logical) -> Any: ...

    @abstractmethod
    def visit_unary_expr(self, expr: nodes.Unary) -> Any: ...

    @abstractmethod
    def visit_variable_expr(self, expr: nodes.Variable) -> Any: ...


class StmtVisitor(ABC):
    @abstractmethod
    def visit_block_stmt(self, stmt: nodes.Block) -> Any: ...

    @abstractmethod
    def visit_expression_stmt(self, stmt: nodes.Expression) -> Any: ...

    @abstractmethod
    def visit_function_stmt(self, stmt: nodes.Function) -> Any: ...

    @abstractmethod
    def visit_if_stmt(self, stmt: nodes.If) -> Any: ...

    @abstractmethod
    def visit_print_stmt(self, stmt: nodes.Print) -> Any: ...

    @abstractmethod
    def visit_return_stmt(self, stmt: nodes.Return) -> Any: ...

    @abstractmethod
    def visit_var_stmt(self, stmt: nodes.Var) -> Any: ...

    @abstractmethod
    def visit_while_stmt(self, stmt: nodes.While) -> Any: ...
