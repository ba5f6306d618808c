"""Declarative grammar for the Lox syntax tree.

Each node kind maps to an ordered list of fields. A field has a shape:

    - "Expr"   -> an expression node
    - "Stmt"   -> a statement node
    - "Token"  -> a scanner Token
    - "Object" -> any literal value

`many` marks a zero-or-more sequence of that shape and `optional` marks a
slot that may hold None. Node classes in lox.syntax.nodes are validated
against this table on construction, and the visitor capability sets in
lox.syntax.visitor list one method per kind.
"""

from __future__ import annotations

from typing import NamedTuple


class Field(NamedTuple):
    name: str
    shape: str
    many: bool = False
    optional: bool = False


EXPR: dict[str, tuple[Field, ...]] = {
    "Assign": (Field("name", "Token"), Field("value", "Expr")),
    "Binary": (Field("left", "Expr"), Field("operator", "Token"), Field("right", "Expr")),
    "Call": (Field("callee", "Expr"), Field("paren", "Token"), Field("arguments", "Expr", many=True)),
    "Grouping": (Field("expression", "Expr"),),
    "Literal": (Field("value", "Object"),),
    "Logical": (Field("left", "Expr"), Field("operator", "Token"), Field("right", "Expr")),
    "Unary": (Field("operator", "Token"), Field("right", "Expr")),
    "Variable": (Field("name", "Token"),),
}

STMT: dict[str, tuple[Field, ...]] = {
    "Block": (Field("statements", "Stmt", many=True),),
    "Expression": (Field("expression", "Expr"),),
    "Function": (Field("name", "Token"), Field("params", "Token", many=True), Field("body", "Stmt", many=True)),
    "If": (Field("condition", "Expr"), Field("then_branch", "Stmt"), Field("else_branch", "Stmt", optional=True)),
    "Print": (Field("expression", "Expr"),),
    "Return": (Field("keyword", "Token"), Field("value", "Expr", optional=True)),
    "Var": (Field("name", "Token"), Field("initializer", "Expr", optional=True)),
    "While": (Field("condition", "Expr"), Field("body", "Stmt")),
}

GRAMMAR: dict[str, dict[str, tuple[Field, ...]]] = {
    "expr": EXPR,
    "stmt": STMT,
}


def visit_method_name(kind: str, category: str) -> str:
    """'Binary', 'expr' -> 'visit_binary_expr'."""
    return f"visit_{kind.lower()}_{category}"
