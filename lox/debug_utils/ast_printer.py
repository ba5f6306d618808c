"""Structural printer for Lox syntax trees.

Renders any expression or statement as a parenthesised prefix form, e.g.

    print 1 + 2 * x;   ->   (print (+ 1 (* 2 x)))

Number literals use repr so that `1` and `1.0` print differently, and string
literals are quoted, so two trees print the same text only when they have the
same structure.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Union

from lox import LoxValue
from lox.syntax.nodes import (
    Assign, Binary, Block, Call, Expression, Function, Grouping, If,
    Literal, Logical, Node, Print, Return, Stmt, Unary, Var, Variable, While,
)
from lox.types.nil import NilType


class AstPrinter:
    def print(self, tree: Union[Node, Iterable[Stmt]]) -> str:
        """Print one node, or a statement sequence one statement per line."""
        if isinstance(tree, Node):
            return self.render(tree)
        return "\n".join(self.render(stmt) for stmt in tree)

    def render(self, node: Node) -> str:
        match node:
            # --- Expressions ---
            case Assign(name, value):
                return self.parenthesize("=", name.lexeme, value)
            case Binary(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case Call(callee, _, arguments):
                return self.parenthesize("call", callee, *arguments)
            case Grouping(expression):
                return self.parenthesize("group", expression)
            case Literal(value):
                return self.literal(value)
            case Logical(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case Unary(operator, right):
                return self.parenthesize(operator.lexeme, right)
            case Variable(name):
                return name.lexeme

            # --- Statements ---
            case Block(statements):
                return self.parenthesize("block", *statements)
            case Expression(expression):
                return self.parenthesize(";", expression)
            case Function(name, params, body):
                signature = "(" + " ".join(p.lexeme for p in params) + ")"
                return self.parenthesize("fun", name.lexeme, signature, *body)
            case If(condition, then_branch, None):
                return self.parenthesize("if", condition, then_branch)
            case If(condition, then_branch, else_branch):
                return self.parenthesize("if-else", condition, then_branch, else_branch)
            case Print(expression):
                return self.parenthesize("print", expression)
            case Return(_, None):
                return "(return)"
            case Return(_, value):
                return self.parenthesize("return", value)
            case Var(name, None):
                return self.parenthesize("var", name.lexeme)
            case Var(name, initializer):
                return self.parenthesize("var", name.lexeme, "=", initializer)
            case While(condition, body):
                return self.parenthesize("while", condition, body)

        raise TypeError(f"Cannot print {type(node).__name__}")

    @staticmethod
    def literal(value: LoxValue) -> str:
        if isinstance(value, NilType):
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return '"' + value + '"'
        return repr(value)

    def parenthesize(self, name: str, *parts: Union[Node, str]) -> str:
        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(name)
            for part in parts:
                buffer.write(" ")
                buffer.write(part if isinstance(part, str) else self.render(part))
            buffer.write(")")
            return buffer.getvalue()
