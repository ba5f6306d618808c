import pytest
from hypothesis import given, strategies as st

from lox.reader.scanner import Scanner, lex
from lox.reader.token import Token, TokenType as T


def _types(source, diagnostics=None):
    return [t.type for t in lex(source, diagnostics)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(){},.-+;*/", [T.LEFT_PAREN, T.RIGHT_PAREN, T.LEFT_BRACE, T.RIGHT_BRACE, T.COMMA,
                         T.DOT, T.MINUS, T.PLUS, T.SEMICOLON, T.STAR, T.SLASH, T.EOF]),
        ("! != = == < <= > >=", [T.BANG, T.BANG_EQUAL, T.EQUAL, T.EQUAL_EQUAL,
                                 T.LESS, T.LESS_EQUAL, T.GREATER, T.GREATER_EQUAL, T.EOF]),
        ("!==", [T.BANG_EQUAL, T.EQUAL, T.EOF]),
        ("===", [T.EQUAL_EQUAL, T.EQUAL, T.EOF]),
        ("<==>", [T.LESS_EQUAL, T.EQUAL, T.GREATER, T.EOF]),
        ("and class else false fun for if nil or print return super this true var while",
         [T.AND, T.CLASS, T.ELSE, T.FALSE, T.FUN, T.FOR, T.IF, T.NIL, T.OR, T.PRINT,
          T.RETURN, T.SUPER, T.THIS, T.TRUE, T.VAR, T.WHILE, T.EOF]),
        ("andy _x1 orchid Var", [T.IDENTIFIER, T.IDENTIFIER, T.IDENTIFIER, T.IDENTIFIER, T.EOF]),
        ("", [T.EOF]),
        ("   \t\r\n  ", [T.EOF]),
    ]
)
def test_token_types(source, expected):
    assert _types(source) == expected


def test_comments_are_skipped_to_end_of_line():
    tokens = lex("// a comment\n1 # another\n2 / 3")
    assert [(t.type, t.line) for t in tokens] == [
        (T.NUMBER, 2), (T.NUMBER, 3), (T.SLASH, 3), (T.NUMBER, 3), (T.EOF, 3)
    ]


@pytest.mark.parametrize(
    "source,literal",
    [
        ("0", 0),
        ("123", 123),
        ("1.5", 1.5),
        ("10.25", 10.25),
    ]
)
def test_number_literals(source, literal):
    token = lex(source)[0]
    assert token.type == T.NUMBER
    assert token.literal == literal
    assert type(token.literal) is type(literal)


def test_trailing_dot_is_not_part_of_number():
    tokens = lex("1.")
    assert [(t.type, t.literal) for t in tokens] == [(T.NUMBER, 1), (T.DOT, None), (T.EOF, None)]


def test_leading_dot_is_not_part_of_number():
    assert _types(".5") == [T.DOT, T.NUMBER, T.EOF]


def test_string_literal():
    token = lex('"hello world"')[0]
    assert token == Token(T.STRING, '"hello world"', "hello world", 1)


def test_multiline_string_advances_line_counter():
    tokens = lex('"a\nb"\nx')
    assert tokens[0].literal == "a\nb"
    assert tokens[0].line == 2
    assert tokens[1] == Token(T.IDENTIFIER, "x", None, 3)


def test_unterminated_string_is_reported_and_dropped(diagnostics):
    tokens = lex('print "oops\n', diagnostics)
    assert [t.type for t in tokens] == [T.PRINT, T.EOF]
    assert diagnostics.messages == ["[line 2] Error: Unterminated string."]
    assert diagnostics.had_error


def test_unexpected_character_is_reported_and_scanning_continues(diagnostics):
    tokens = lex("1 @ 2\n$", diagnostics)
    assert [t.literal for t in tokens if t.type == T.NUMBER] == [1, 2]
    assert diagnostics.messages == [
        "[line 1] Error: Unexpected character @.",
        "[line 2] Error: Unexpected character $.",
    ]


def test_lexemes_are_raw_source_text():
    tokens = lex('var answer = 4.20;')
    assert [t.lexeme for t in tokens] == ["var", "answer", "=", "4.20", ";", ""]


def test_token_str():
    assert str(Token(T.NUMBER, "1.5", 1.5, 1)) == "NUMBER 1.5 1.5"
    assert str(Token(T.SEMICOLON, ";", None, 1)) == "SEMICOLON ; "


def test_scanner_exposes_final_line():
    scanner = Scanner("a\nb\nc")
    scanner.scan_tokens()
    assert scanner.line == 3


# -------------------------------
# Hypothesis tests
# -------------------------------
@given(st.text(max_size=60))
def test_scanner_never_crashes_and_ends_with_one_eof(source):
    tokens = lex(source)
    assert tokens[-1].type == T.EOF
    assert sum(1 for t in tokens if t.type == T.EOF) == 1


@given(st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,10}", fullmatch=True))
def test_identifier_or_keyword(word):
    token = lex(word)[0]
    assert token.lexeme == word
    assert token.type in (T.IDENTIFIER, T.AND, T.CLASS, T.ELSE, T.FALSE, T.FUN, T.FOR, T.IF,
                          T.NIL, T.OR, T.PRINT, T.RETURN, T.SUPER, T.THIS, T.TRUE, T.VAR, T.WHILE)
