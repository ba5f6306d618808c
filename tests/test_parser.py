import pytest

from lox.debug_utils.ast_printer import AstPrinter
from lox.reader.token import TokenType as T
from lox.syntax import nodes


@pytest.fixture
def parse_to_text(parse_source, diagnostics):
    def _parse(source):
        statements = parse_source(source)
        assert not diagnostics.had_error, diagnostics.messages
        return AstPrinter().print(statements)
    return _parse


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2 * 3;", "(; (+ 1 (* 2 3)))"),
        ("1 * 2 + 3;", "(; (+ (* 1 2) 3))"),
        ("1 - 2 - 3;", "(; (- (- 1 2) 3))"),
        ("8 / 4 / 2;", "(; (/ (/ 8 4) 2))"),
        ("(1 + 2) * 3;", "(; (* (group (+ 1 2)) 3))"),
        ("-a - b;", "(; (- (- a) b))"),
        ("!!x;", "(; (! (! x)))"),
        ("1 < 2 == true;", "(; (== (< 1 2) true))"),
        ("a != b == c;", "(; (== (!= a b) c))"),
        ("a >= b + 1;", "(; (>= a (+ b 1)))"),
        ("a or b and c;", "(; (or a (and b c)))"),
        ("a and b or c and d;", "(; (or (and a b) (and c d)))"),
        ("a = b = c;", "(; (= a (= b c)))"),
        ("a = 1 or 2;", "(; (= a (or 1 2)))"),
        ("f();", "(; (call f))"),
        ("f(1, x)(2);", "(; (call (call f 1 x) 2))"),
        ("-f(1);", "(; (- (call f 1)))"),
        ('print "hi";', '(print "hi")'),
        ("print 1.0;", "(print 1.0)"),
        ("print nil;", "(print nil)"),
        ("var x;", "(var x)"),
        ("var x = false;", "(var x = false)"),
        ("{ var a = 1; print a; }", "(block (var a = 1) (print a))"),
        ("{}", "(block)"),
        ("while (x) x = x - 1;", "(while x (; (= x (- x 1))))"),
        ("fun add(a, b) { return a + b; }", "(fun add (a b) (return (+ a b)))"),
        ("fun f() { return; }", "(fun f () (return))"),
        ("fun f() { fun g() { return 1; } return g; }",
         "(fun f () (fun g () (return 1)) (return g))"),
    ]
)
def test_parse(parse_to_text, source, expected):
    assert parse_to_text(source) == expected


def test_dangling_else_binds_to_nearest_if(parse_to_text):
    assert parse_to_text("if (a) if (b) print 1; else print 2;") == \
        "(if a (if-else b (print 1) (print 2)))"


def test_else_branch(parse_to_text):
    assert parse_to_text("if (a) print 1; else { print 2; }") == \
        "(if-else a (print 1) (block (print 2)))"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("for (var i = 0; i < 3; i = i + 1) print i;",
         "(block (var i = 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))"),
        ("for (i = 0; i < 3;) print i;",
         "(block (; (= i 0)) (while (< i 3) (print i)))"),
        ("for (; i < 3; i = i + 1) print i;",
         "(while (< i 3) (block (print i) (; (= i (+ i 1)))))"),
        ("for (;;) print 1;", "(while true (print 1))"),
    ]
)
def test_for_loop_desugars_to_while(parse_to_text, source, expected):
    assert parse_to_text(source) == expected


def test_for_without_condition_uses_literal_true(parse_source):
    [loop] = parse_source("for (;;) {}")
    assert isinstance(loop, nodes.While)
    assert loop.condition == nodes.Literal(True)


def test_call_keeps_closing_paren_token(parse_source):
    [stmt] = parse_source("f(\n1\n);")
    assert stmt.expression.paren.type == T.RIGHT_PAREN
    assert stmt.expression.paren.line == 3


# ------------------ Errors and recovery ------------------

@pytest.mark.parametrize(
    "source,message",
    [
        ("print 1", "[line 1] Error at end: Expect ';' after value."),
        ("1 + ;", "[line 1] Error at ';': Expect expression."),
        ("var 1 = 2;", "[line 1] Error at '1': Expect variable name."),
        ("var a = 1", "[line 1] Error at end: Expect ';' after variable declaration."),
        ("(1 + 2;", "[line 1] Error at ';': Expect ')' after expression."),
        ("if 1) print 1;", "[line 1] Error at '1': Expect '(' after 'if'."),
        ("while (true print 1;", "[line 1] Error at 'print': Expect ')' after condition."),
        ("for var i;;) {}", "[line 1] Error at 'var': Expect '(' after 'for'."),
        ("{ print 1;", "[line 1] Error at end: Expect '}' after block."),
        ("fun (a) {}", "[line 1] Error at '(': Expect function name."),
        ("fun f(a, 1) {}", "[line 1] Error at '1': Expect parameter name."),
        ("fun f() print 1;", "[line 1] Error at 'print': Expect '{' before function body."),
        ("f(1, 2;", "[line 1] Error at ';': Expect ')' after arguments."),
        ("return 1;", "[line 1] Error at 'return': Can't return from top-level code."),
        ("class Foo {}", "[line 1] Error at 'class': Expect expression."),
    ]
)
def test_parse_error_messages(parse_source, diagnostics, source, message):
    parse_source(source)
    assert diagnostics.had_error
    assert diagnostics.messages[0] == message


def test_invalid_assignment_target_is_not_fatal(parse_source, diagnostics):
    statements = parse_source("1 = 2; print 3;")
    assert diagnostics.messages == ["[line 1] Error at '=': Invalid assignment target."]
    assert AstPrinter().print(statements) == "(; 2)\n(print 3)"


def test_grouped_variable_is_not_an_assignment_target(parse_source, diagnostics):
    parse_source("(a) = 1;")
    assert diagnostics.messages == ["[line 1] Error at '=': Invalid assignment target."]


def test_recovers_and_reports_later_errors(parse_source, diagnostics):
    statements = parse_source("var = 1;\nprint ;\nprint 3;")
    assert diagnostics.messages == [
        "[line 1] Error at '=': Expect variable name.",
        "[line 2] Error at ';': Expect expression.",
    ]
    assert AstPrinter().print(statements) == "(print 3)"


def test_resynchronizes_at_statement_keyword(parse_source, diagnostics):
    statements = parse_source("var a = 1 + + print 2;\nvar b = ) ;\nprint b;")
    assert len(diagnostics.messages) == 2
    assert diagnostics.messages[1] == "[line 2] Error at ')': Expect expression."
    assert AstPrinter().print(statements) == "(print 2)\n(print b)"


def test_error_inside_block_keeps_rest_of_block(parse_source, diagnostics):
    statements = parse_source("{ print ; print 1; }")
    assert diagnostics.messages == ["[line 1] Error at ';': Expect expression."]
    assert AstPrinter().print(statements) == "(block (print 1))"


def test_return_inside_function_is_allowed_after_top_level_error(parse_source, diagnostics):
    parse_source("return;\nfun f() { return 1; }")
    assert diagnostics.messages == ["[line 1] Error at 'return': Can't return from top-level code."]


def test_too_many_arguments_is_reported_but_not_fatal(parse_source, diagnostics):
    args = ", ".join(["1"] * 256)
    statements = parse_source(f"f({args});")
    assert diagnostics.messages == ["[line 1] Error at '1': Can't have more than 255 arguments."]
    assert len(statements) == 1
    assert len(statements[0].expression.arguments) == 256


def test_255_arguments_is_fine(parse_source, diagnostics):
    args = ", ".join(["1"] * 255)
    parse_source(f"f({args});")
    assert not diagnostics.had_error


def test_too_many_parameters_is_reported_but_not_fatal(parse_source, diagnostics):
    params = ", ".join(f"p{i}" for i in range(256))
    statements = parse_source(f"fun f({params}) {{}}")
    assert diagnostics.messages == ["[line 1] Error at 'p255': Can't have more than 255 parameters."]
    assert len(statements[0].params) == 256
