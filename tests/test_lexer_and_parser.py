import math

import pytest
from hypothesis import given, strategies as st

from ember.errors import (
    CharLiteralTooLong,
    EmberError,
    EmptyCharLiteral,
    LexError,
    MalformedNumber,
    NestingTooDeep,
    ParseError,
    ReservedIdentifier,
    UnclosedGroup,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnknownEscape,
    UnterminatedChar,
    UnterminatedString,
)
from ember.reader.ast import (
    BinaryOp,
    Literal,
    UnaryOp,
    VariableAccess,
    VariableAssign,
    VariableDeclare,
)
from ember.reader.lexer import lex
from ember.reader.parser import parse, parse_program
from ember.reader.tokens import Op, TokenKind
from ember.types.values import Char, format_number

NUM = TokenKind.NUMBER
IDENT = TokenKind.IDENTIFIER
STR = TokenKind.STRING
CHR = TokenKind.CHAR
OP = TokenKind.OPERATOR


def _kinds(source):
    tokens = lex(source)
    assert tokens[-1].kind is TokenKind.EOF
    return [(t.kind, t.value) for t in tokens[:-1]]


def _parse(source):
    return parse(lex(source))


# -------------------------------
# Lexer
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", [(NUM, 42.0)]),
        ("3.14", [(NUM, 3.14)]),
        (".5", [(NUM, 0.5)]),
        ("7.", [(NUM, 7.0)]),
        ("007", [(NUM, 7.0)]),
        ("foo_bar$1", [(IDENT, "foo_bar$1")]),
        ("$x _y", [(IDENT, "$x"), (IDENT, "_y")]),
        ("let", [(IDENT, "let")]),
        ("a+b", [(IDENT, "a"), (OP, Op.PLUS), (IDENT, "b")]),
        ("2**3", [(NUM, 2.0), (OP, Op.STAR_STAR), (NUM, 3.0)]),
        ("***", [(OP, Op.STAR_STAR), (OP, Op.STAR)]),
        ("== != >= <= >> <<", [
            (OP, Op.EQUALS_EQUALS), (OP, Op.BANG_EQUALS), (OP, Op.GREATER_EQUALS),
            (OP, Op.LESS_EQUALS), (OP, Op.GREATER_GREATER), (OP, Op.LESS_LESS),
        ]),
        ("= =", [(OP, Op.EQUALS), (OP, Op.EQUALS)]),
        ("! =", [(OP, Op.BANG), (OP, Op.EQUALS)]),
        ("<<=", [(OP, Op.LESS_LESS), (OP, Op.EQUALS)]),
        ("- / % | & ^ > <", [
            (OP, Op.MINUS), (OP, Op.SLASH), (OP, Op.PERCENT), (OP, Op.PIPE),
            (OP, Op.AMPERSAND), (OP, Op.CARET), (OP, Op.GREATER), (OP, Op.LESS),
        ]),
        ("()[]{}:;", [
            (OP, Op.LPAREN), (OP, Op.RPAREN), (OP, Op.LBRACKET), (OP, Op.RBRACKET),
            (OP, Op.LBRACE), (OP, Op.RBRACE), (OP, Op.COLON), (OP, Op.SEMICOLON),
        ]),
        ('"hi"', [(STR, "hi")]),
        ('""', [(STR, "")]),
        ('"a\\nb"', [(STR, "a\nb")]),
        ('"\\n\\r\\t\\0\\"\\\\\\\'"', [(STR, "\n\r\t\0\"\\'")]),
        ('"it\'s"', [(STR, "it's")]),
        ("'x'", [(CHR, Char("x"))]),
        ("'\\n'", [(CHR, Char("\n"))]),
        ("'\\''", [(CHR, Char("'"))]),
        ("'\"'", [(CHR, Char('"'))]),
        ("  1 \t\n 2 ", [(NUM, 1.0), (NUM, 2.0)]),
        ("", []),
        ("   ", []),
    ]
)
def test_lexer_basic(source, expected):
    assert _kinds(source) == expected


def test_lexer_positions():
    tokens = lex("ab + 12")
    assert [t.pos for t in tokens] == [0, 3, 5, 7]
    assert tokens[-1].kind is TokenKind.EOF


@pytest.mark.parametrize(
    "source,error,pos",
    [
        ("1 @ 2", UnexpectedCharacter, 2),
        ("#", UnexpectedCharacter, 0),
        ("é", UnexpectedCharacter, 0),
        ("²", UnexpectedCharacter, 0),
        ("1.2.3", MalformedNumber, 0),
        ("x = .", MalformedNumber, 4),
        ("1..2", MalformedNumber, 0),
        ('"abc', UnterminatedString, 0),
        ('1 + "abc\\', UnterminatedString, 4),
        ('"\\q"', UnknownEscape, 1),
        ("'", UnterminatedChar, 0),
        ("'a", UnterminatedChar, 0),
        ("'ab", UnterminatedChar, 0),
        ("''", EmptyCharLiteral, 0),
        ("'ab'", CharLiteralTooLong, 0),
        ("'\\q'", UnknownEscape, 1),
    ]
)
def test_lexer_errors(source, error, pos):
    with pytest.raises(error) as info:
        lex(source)
    assert isinstance(info.value, LexError)
    assert info.value.pos == pos
    assert str(info.value).endswith(f" at {pos}")


# -------------------------------
# Parser
# -------------------------------
L = Literal


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1", L(1.0)),
        ("x", VariableAccess("x")),
        ("2 + 3 * 4", BinaryOp(L(2.0), Op.PLUS, BinaryOp(L(3.0), Op.STAR, L(4.0)))),
        ("(2 + 3) * 4", BinaryOp(BinaryOp(L(2.0), Op.PLUS, L(3.0)), Op.STAR, L(4.0))),
        ("2 - 3 - 4", BinaryOp(BinaryOp(L(2.0), Op.MINUS, L(3.0)), Op.MINUS, L(4.0))),
        ("8 / 4 % 3", BinaryOp(BinaryOp(L(8.0), Op.SLASH, L(4.0)), Op.PERCENT, L(3.0))),
        ("2 ** 3 ** 2", BinaryOp(L(2.0), Op.STAR_STAR, BinaryOp(L(3.0), Op.STAR_STAR, L(2.0)))),
        ("-2 ** 2", UnaryOp(Op.MINUS, BinaryOp(L(2.0), Op.STAR_STAR, L(2.0)))),
        ("2 ** -1", BinaryOp(L(2.0), Op.STAR_STAR, UnaryOp(Op.MINUS, L(1.0)))),
        ("--1", UnaryOp(Op.MINUS, UnaryOp(Op.MINUS, L(1.0)))),
        ("+x", UnaryOp(Op.PLUS, VariableAccess("x"))),
        ("1 | 2 ^ 3 & 4", BinaryOp(L(1.0), Op.PIPE, BinaryOp(L(2.0), Op.CARET, BinaryOp(L(3.0), Op.AMPERSAND, L(4.0))))),
        ("1 << 2 + 3", BinaryOp(L(1.0), Op.LESS_LESS, BinaryOp(L(2.0), Op.PLUS, L(3.0)))),
        ("1 >> 2 << 3", BinaryOp(BinaryOp(L(1.0), Op.GREATER_GREATER, L(2.0)), Op.LESS_LESS, L(3.0))),
        ("1 + 2 == 3", BinaryOp(BinaryOp(L(1.0), Op.PLUS, L(2.0)), Op.EQUALS_EQUALS, L(3.0))),
        ("1 < 2 == 3", BinaryOp(BinaryOp(L(1.0), Op.LESS, L(2.0)), Op.EQUALS_EQUALS, L(3.0))),
        ("1 | 2 >= 3", BinaryOp(BinaryOp(L(1.0), Op.PIPE, L(2.0)), Op.GREATER_EQUALS, L(3.0))),
        ("!1 == 2", UnaryOp(Op.BANG, BinaryOp(L(1.0), Op.EQUALS_EQUALS, L(2.0)))),
        ("!!x", UnaryOp(Op.BANG, UnaryOp(Op.BANG, VariableAccess("x")))),
        ("let x = 1 + 2", VariableDeclare("x", BinaryOp(L(1.0), Op.PLUS, L(2.0)))),
        ("let y = x = 3", VariableDeclare("y", VariableAssign("x", L(3.0)))),
        ("x = y = 3", VariableAssign("x", VariableAssign("y", L(3.0)))),
        ("1 + x = 2", BinaryOp(L(1.0), Op.PLUS, VariableAssign("x", L(2.0)))),
        ('"hi" + \'c\'', BinaryOp(L("hi"), Op.PLUS, L(Char("c")))),
        ("inf", L(math.inf)),
        ("1;", L(1.0)),
        ("((x))", VariableAccess("x")),
    ]
)
def test_parser_basic(source, expected):
    assert _parse(source) == expected


@pytest.mark.parametrize("source,expected", [("true", True), ("false", False)])
def test_parser_bool_constants(source, expected):
    node = _parse(source)
    assert isinstance(node, Literal)
    assert node.value is expected


def test_parser_nan_constant():
    node = _parse("NaN")
    assert isinstance(node, Literal)
    assert math.isnan(node.value)


@pytest.mark.parametrize(
    "source,error",
    [
        ("", UnexpectedEndOfInput),
        ("1 +", UnexpectedEndOfInput),
        ("-", UnexpectedEndOfInput),
        ("(1 + 2", UnclosedGroup),
        ("((1)", UnclosedGroup),
        ("let", UnexpectedEndOfInput),
        ("let x", UnexpectedEndOfInput),
        ("let x =", UnexpectedEndOfInput),
        ("(1 + 2]", UnexpectedToken),
        ("let 5 = 1", UnexpectedToken),
        ("let x 1", UnexpectedToken),
        ("let x == 1", UnexpectedToken),
        ("1 2", UnexpectedToken),
        (")", UnexpectedToken),
        ("* 2", UnexpectedToken),
        ("1 + let", UnexpectedToken),
        ("1 + !2", UnexpectedToken),
        ("[1]", UnexpectedToken),
        ("1; 2", UnexpectedToken),
        ("1;;", UnexpectedToken),
        ("let true = 1", ReservedIdentifier),
        ("let let = 1", ReservedIdentifier),
        ("NaN = 1", ReservedIdentifier),
        ("inf = 2", ReservedIdentifier),
    ]
)
def test_parser_errors(source, error):
    with pytest.raises(error) as info:
        _parse(source)
    assert isinstance(info.value, ParseError)


def test_unclosed_group_is_incomplete_input():
    with pytest.raises(UnexpectedEndOfInput):
        _parse("(1 + 2")


def test_unexpected_token_details():
    with pytest.raises(UnexpectedToken) as info:
        _parse("(1 + 2]")
    err = info.value
    assert err.expected == "')'"
    assert err.found == "']'"
    assert err.pos == 6
    assert str(err) == "expected ')', found ']' at 6"


def test_deep_nesting_is_a_parse_error():
    source = "(" * 5000 + "1" + ")" * 5000
    with pytest.raises(NestingTooDeep):
        _parse(source)
    with pytest.raises(NestingTooDeep):
        parse_program(lex(source))


@pytest.mark.parametrize(
    "source,expected",
    [
        ("", []),
        (";;", []),
        ("1", [L(1.0)]),
        ("let x = 1; x + 1", [VariableDeclare("x", L(1.0)), BinaryOp(VariableAccess("x"), Op.PLUS, L(1.0))]),
        (";;1;;2;", [L(1.0), L(2.0)]),
    ]
)
def test_parse_program(source, expected):
    assert parse_program(lex(source)) == expected


def test_parse_program_requires_separators():
    with pytest.raises(UnexpectedToken) as info:
        parse_program(lex("1 2"))
    assert info.value.pos == 2


# -------------------------------
# Hypothesis tests
# -------------------------------
@given(st.text(max_size=40))
def test_lexer_no_crash(source):
    try:
        tokens = lex(source)
    except LexError:
        return
    assert tokens[-1].kind is TokenKind.EOF
    assert all(t.kind is not TokenKind.EOF for t in tokens[:-1])


@given(st.floats(min_value=0, allow_nan=False, allow_infinity=False).map(abs))
def test_number_text_lexes_back(n):
    assert _kinds(format_number(n)) == [(NUM, n)]


@given(st.text(alphabet="0123456789.+-*/%()!=<>&|^;'\" xyletrufasNIn", max_size=30))
def test_parser_no_crash(source):
    try:
        parse_program(lex(source))
    except EmberError:
        pass
