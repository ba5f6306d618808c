"""
  Lox Parser

Recursive descent over a token list with one forward cursor, no backtracking.

    program     -> declaration* EOF
    declaration -> funDecl | varDecl | statement
    statement   -> exprStmt | forStmt | ifStmt | printStmt | returnStmt
                 | whileStmt | block
    expression  -> assignment
    assignment  -> IDENTIFIER "=" assignment | logic_or
    logic_or    -> logic_and ( "or" logic_and )*
    logic_and   -> equality ( "and" equality )*
    equality    -> comparison ( ( "!=" | "==" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | call
    call        -> primary ( "(" arguments? ")" )*
    primary     -> "true" | "false" | "nil" | NUMBER | STRING
                 | IDENTIFIER | "(" expression ")"

Errors are reported to Diagnostics as they are found. Fatal ones raise
LoxParseError, which unwinds to the enclosing declaration; the parser then
skips ahead to a likely statement boundary and carries on, so later errors
are still reported.

`for` loops are desugared here into while loops.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from lox.diagnostics import Diagnostics
from lox.errors import LoxParseError
from lox.reader.token import Token, TokenType
from lox.syntax import nodes
from lox.types.nil import Nil

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 255

# Tokens that begin a statement; resynchronization stops in front of them.
STATEMENT_KEYWORDS = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})


class Parser:
    def __init__(self, tokens: list[Token], diagnostics: Optional[Diagnostics] = None):
        self.tokens = tokens
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.current = 0
        self.function_depth = 0

    def parse(self) -> list[nodes.Stmt]:
        statements: list[nodes.Stmt] = []
        while not self.is_at_end():
            statement = self.declaration()
            if statement is not None:
                statements.append(statement)
        logger.debug("parsed %d top-level statements", len(statements))
        return statements

    # ------------------------
    # Declarations
    # ------------------------
    def declaration(self) -> Optional[nodes.Stmt]:
        try:
            if self.match(TokenType.FUN):
                return self.function("function")
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except LoxParseError:
            self.synchronize()
            return None

    def function(self, kind: str) -> nodes.Function:
        name = self.consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self.consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params: list[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")

        self.consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        self.function_depth += 1
        try:
            body = self.block()
        finally:
            self.function_depth -= 1
        return nodes.Function(name, params, body)

    def var_declaration(self) -> nodes.Var:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return nodes.Var(name, initializer)

    # ------------------------
    # Statements
    # ------------------------
    def statement(self) -> nodes.Stmt:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return nodes.Block(self.block())
        return self.expression_statement()

    def for_statement(self) -> nodes.Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Optional[nodes.Stmt]
        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        # for (init; cond; incr) body  =>  { init; while (cond) { body; incr; } }
        if increment is not None:
            body = nodes.Block([body, nodes.Expression(increment)])
        if condition is None:
            condition = nodes.Literal(True)
        loop: nodes.Stmt = nodes.While(condition, body)
        if initializer is not None:
            loop = nodes.Block([initializer, loop])
        return loop

    def if_statement(self) -> nodes.If:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        # greedy: an else belongs to the nearest if
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
        return nodes.If(condition, then_branch, else_branch)

    def print_statement(self) -> nodes.Print:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return nodes.Print(value)

    def return_statement(self) -> nodes.Return:
        keyword = self.previous()
        if self.function_depth == 0:
            self.error(keyword, "Can't return from top-level code.")
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return nodes.Return(keyword, value)

    def while_statement(self) -> nodes.While:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        body = self.statement()
        return nodes.While(condition, body)

    def block(self) -> list[nodes.Stmt]:
        statements: list[nodes.Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statement = self.declaration()
            if statement is not None:
                statements.append(statement)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> nodes.Expression:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return nodes.Expression(expr)

    # ------------------------
    # Expressions
    # ------------------------
    def expression(self) -> nodes.Expr:
        return self.assignment()

    def assignment(self) -> nodes.Expr:
        expr = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, nodes.Variable):
                return nodes.Assign(expr.name, value)
            # reported, not raised: the parser is not confused
            self.error(equals, "Invalid assignment target.")
            return value

        return expr

    def logic_or(self) -> nodes.Expr:
        return self._left_assoc(self.logic_and, nodes.Logical, TokenType.OR)

    def logic_and(self) -> nodes.Expr:
        return self._left_assoc(self.equality, nodes.Logical, TokenType.AND)

    def equality(self) -> nodes.Expr:
        return self._left_assoc(
            self.comparison, nodes.Binary, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL
        )

    def comparison(self) -> nodes.Expr:
        return self._left_assoc(
            self.term, nodes.Binary,
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def term(self) -> nodes.Expr:
        return self._left_assoc(self.factor, nodes.Binary, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> nodes.Expr:
        return self._left_assoc(self.unary, nodes.Binary, TokenType.SLASH, TokenType.STAR)

    def _left_assoc(
        self,
        operand: Callable[[], nodes.Expr],
        node_type: type[nodes.Binary] | type[nodes.Logical],
        *operators: TokenType,
    ) -> nodes.Expr:
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = node_type(expr, operator, right)
        return expr

    def unary(self) -> nodes.Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return nodes.Unary(operator, right)
        return self.call()

    def call(self) -> nodes.Expr:
        expr = self.primary()
        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: nodes.Expr) -> nodes.Call:
        arguments: list[nodes.Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return nodes.Call(callee, paren, arguments)

    def primary(self) -> nodes.Expr:
        if self.match(TokenType.FALSE):
            return nodes.Literal(False)
        if self.match(TokenType.TRUE):
            return nodes.Literal(True)
        if self.match(TokenType.NIL):
            return nodes.Literal(Nil)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return nodes.Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return nodes.Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return nodes.Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    # ------------------------
    # Token stream helpers
    # ------------------------
    def match(self, *types: TokenType) -> bool:
        if self.check(*types):
            self.advance()
            return True
        return False

    def check(self, *types: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type in types

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> LoxParseError:
        """Report at `token` and return (not raise) the error for the caller to raise."""
        self.diagnostics.error(token, message)
        return LoxParseError(message)

    def synchronize(self) -> None:
        """Skip to just after a ';' or to the next statement keyword."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_KEYWORDS:
                return
            self.advance()


def parse(tokens: list[Token], diagnostics: Optional[Diagnostics] = None) -> list[nodes.Stmt]:
    """Parse a token list (ending with EOF) into statements."""
    return Parser(tokens, diagnostics).parse()
