"""Immutable syntax-tree node types.

Every node is a frozen dataclass whose fields mirror one row of the grammar
table in lox.syntax.grammar. Construction checks each field's shape against
that table and freezes sequences into tuples. Nodes support two ways of
being consumed:

- double dispatch: `node.accept(visitor)` calls exactly one
  `visit_<kind>_<category>` method on the visitor;
- structural pattern matching: `match node: case Binary(left, op, right): ...`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Optional

from lox import LoxValue
from lox.errors import LoxNodeError
from lox.reader.token import Token
from lox.syntax.grammar import GRAMMAR, Field, visit_method_name


class Node:
    category: ClassVar[str] = ""

    def __post_init__(self) -> None:
        layout = GRAMMAR[self.category][type(self).__name__]
        for field, declared in zip(fields(self), layout):
            value = getattr(self, field.name)
            if declared.many:
                if value is None and declared.optional:
                    continue
                try:
                    items = tuple(value)
                except TypeError:
                    raise LoxNodeError(
                        f"{type(self).__name__}.{declared.name} must be a sequence of {declared.shape}"
                    ) from None
                for item in items:
                    _check_shape(self, declared, item)
                object.__setattr__(self, field.name, items)
            else:
                _check_shape(self, declared, value)

    def accept(self, visitor: Any) -> Any:
        method = getattr(visitor, visit_method_name(type(self).__name__, self.category))
        return method(self)


def _check_shape(node: Node, declared: Field, value: Any) -> None:
    if value is None:
        if declared.optional:
            return
        raise LoxNodeError(f"{type(node).__name__}.{declared.name} is required")
    expected = SHAPES.get(declared.shape)
    if expected is not None and not isinstance(value, expected):
        raise LoxNodeError(
            f"{type(node).__name__}.{declared.name} must be of type {declared.shape}, "
            f"got {type(value).__name__}"
        )


class Expr(Node):
    category: ClassVar[str] = "expr"


class Stmt(Node):
    category: ClassVar[str] = "stmt"


# "Object" is unconstrained
SHAPES: dict[str, type] = {
    "Expr": Expr,
    "Stmt": Stmt,
    "Token": Token,
}


# ---------------------------
# Expressions
# ---------------------------

@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: tuple[Expr, ...]


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Literal(Expr):
    value: LoxValue


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


# ---------------------------
# Statements
# ---------------------------

@dataclass(frozen=True)
class Block(Stmt):
    statements: tuple[Stmt, ...]


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Function(Stmt):
    name: Token
    params: tuple[Token, ...]
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr] = None


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt
