"""Operator semantics for the Lox runtime.

This module defines truthiness, equality, numeric checks, arithmetic and
comparison, and the textual form of values used by print.

Numbers are Python ints and floats. Booleans are never numbers even though
bool subclasses int. Arithmetic on two ints stays integral (/ floors), and a
float operand promotes the result to float. Ints are unbounded, so a result
too large for a float is reported as a runtime error.
"""
from __future__ import annotations

import operator as op
from typing import Callable

from lox import LoxValue
from lox.errors import LoxRuntimeError, LoxTypeError
from lox.reader.token import Token, TokenType
from lox.types.nil import Nil, NilType


def is_number(value: LoxValue) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: LoxValue) -> bool:
    """Everything is truthy except false and nil (0 and "" are truthy)."""
    if value is Nil or value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: LoxValue, b: LoxValue) -> bool:
    """Equality without coercion between kinds (nil, boolean, number, string, callable)."""
    if isinstance(a, NilType) or isinstance(b, NilType):
        return isinstance(a, NilType) and isinstance(b, NilType)
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    # callables compare by identity
    return a is b


def check_number_operand(operator: Token, operand: LoxValue) -> None:
    if not is_number(operand):
        raise LoxTypeError(operator, f"Operand of '{operator.lexeme}' must be a number.")


def check_number_operands(operator: Token, left: LoxValue, right: LoxValue) -> None:
    if not (is_number(left) and is_number(right)):
        raise LoxTypeError(operator, f"Operands of '{operator.lexeme}' must be numbers.")


def _checked(operator: Token, fn: Callable[[LoxValue, LoxValue], LoxValue],
             left: LoxValue, right: LoxValue) -> LoxValue:
    # ints are unbounded but floats are not
    try:
        return fn(left, right)
    except OverflowError:
        raise LoxRuntimeError(operator, "Number too large.") from None


def negate(operator: Token, operand: LoxValue) -> float:
    check_number_operand(operator, operand)
    try:
        return -float(operand)
    except OverflowError:
        raise LoxRuntimeError(operator, "Number too large.") from None


def add(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    if is_number(left) and is_number(right):
        return _checked(operator, op.add, left, right)
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    raise LoxTypeError(
        operator, f"Operands of '{operator.lexeme}' must be two numbers or two strings."
    )


def divide(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    if right == 0:
        raise LoxRuntimeError(operator, "Division by zero.")
    if isinstance(left, int) and isinstance(right, int):
        return left // right
    return _checked(operator, op.truediv, left, right)


# Operators whose operands must both be numbers
NUMERIC_BINARY: dict[TokenType, Callable[[LoxValue, LoxValue], LoxValue]] = {
    TokenType.MINUS: op.sub,
    TokenType.STAR: op.mul,
    TokenType.GREATER: op.gt,
    TokenType.GREATER_EQUAL: op.ge,
    TokenType.LESS: op.lt,
    TokenType.LESS_EQUAL: op.le,
}


def binary(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    """Apply a binary (non-logical) operator to two evaluated operands."""
    kind = operator.type
    if kind == TokenType.PLUS:
        return add(operator, left, right)
    if kind == TokenType.SLASH:
        return divide(operator, left, right)
    if kind == TokenType.EQUAL_EQUAL:
        return is_equal(left, right)
    if kind == TokenType.BANG_EQUAL:
        return not is_equal(left, right)
    fn = NUMERIC_BINARY.get(kind)
    if fn is None:
        raise LoxRuntimeError(operator, f"Unknown binary operator '{operator.lexeme}'.")
    check_number_operands(operator, left, right)
    return _checked(operator, fn, left, right)


def stringify(value: LoxValue) -> str:
    """Textual form used by print; integral floats drop the trailing '.0'."""
    if value is Nil or value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    if isinstance(value, int):
        return _int_text(value)
    return str(value)


# Digits per chunk, well under the interpreter's int-to-str limit
_INT_CHUNK_DIGITS = 1000
_INT_CHUNK = 10 ** _INT_CHUNK_DIGITS


def _int_text(value: int) -> str:
    try:
        return str(value)
    except ValueError:
        sign = "-" if value < 0 else ""
        value = abs(value)
        chunks = []
        while value:
            value, chunk = divmod(value, _INT_CHUNK)
            chunks.append(chunk)
        head, *rest = reversed(chunks)
        return sign + str(head) + "".join(f"{chunk:0{_INT_CHUNK_DIGITS}d}" for chunk in rest)
