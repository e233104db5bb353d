"""
  Ember parser

Recursive descent for statements, unary prefixes, grouping and atoms;
precedence climbing over a table for the binary operator levels.

Grammar, loosest binding first:

    statement   := 'let' IDENT '=' comparison | comparison
    comparison  := '!' comparison | bitwise (('=='|'!='|'>'|'<'|'>='|'<=') bitwise)*
    bitwise     := the BINARY_LEVELS table: | then ^ then & then >> << then + - then * / %
    factor      := ('+'|'-') factor | power
    power       := atom ('**' factor)?
    atom        := NUMBER | STRING | CHAR | 'true' | 'false' | 'inf' | 'NaN'
                 | IDENT '=' comparison | IDENT | '(' comparison ')'

Because the right operand of '**' is a factor, which re-enters power, chains
of '**' group to the right: 2 ** 3 ** 2 == 2 ** 9.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ember.errors import (
    NestingTooDeep,
    ReservedIdentifier,
    UnclosedGroup,
    UnexpectedEndOfInput,
    UnexpectedToken,
)
from ember.reader.ast import (
    BinaryOp,
    Literal,
    Node,
    UnaryOp,
    VariableAccess,
    VariableAssign,
    VariableDeclare,
)
from ember.reader.tokens import Op, Token, TokenKind

logger = logging.getLogger(__name__)

LET = "let"

CONSTANTS = {
    "true": True,
    "false": False,
    "inf": float("inf"),
    "NaN": float("nan"),
}

RESERVED = frozenset({LET, *CONSTANTS})

# Binary operator levels, loosest first. Every level is left associative.
BINARY_LEVELS: tuple[frozenset[Op], ...] = (
    frozenset({Op.PIPE}),
    frozenset({Op.CARET}),
    frozenset({Op.AMPERSAND}),
    frozenset({Op.GREATER_GREATER, Op.LESS_LESS}),
    frozenset({Op.PLUS, Op.MINUS}),
    frozenset({Op.STAR, Op.SLASH, Op.PERCENT}),
)

COMPARISON_OPS = frozenset({
    Op.EQUALS_EQUALS,
    Op.BANG_EQUALS,
    Op.GREATER,
    Op.LESS,
    Op.GREATER_EQUALS,
    Op.LESS_EQUALS,
})


class Parser:
    """Cursor over a token sequence with one token of look-ahead."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.index = 0

    def peek(self) -> Token:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        end = self.tokens[-1].pos if self.tokens else 0
        return Token(TokenKind.EOF, None, end)

    def advance(self) -> Token:
        tok = self.peek()
        if tok.kind is not TokenKind.EOF:
            self.index += 1
        return tok

    def at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    # ------------------------
    # Statements
    # ------------------------
    def parse_statement(self) -> Node:
        tok = self.peek()
        if tok.kind is TokenKind.IDENTIFIER and tok.value == LET:
            self.advance()
            return self.parse_declaration()
        return self.parse_comparison()

    def parse_declaration(self) -> Node:
        name_tok = self.advance()
        if name_tok.kind is TokenKind.EOF:
            raise UnexpectedEndOfInput("expected identifier after 'let', found end of input", name_tok.pos)
        if name_tok.kind is not TokenKind.IDENTIFIER:
            raise UnexpectedToken("identifier", name_tok.describe(), name_tok.pos)
        if name_tok.value in RESERVED:
            raise ReservedIdentifier(name_tok.value, name_tok.pos)

        eq_tok = self.advance()
        if eq_tok.kind is TokenKind.EOF:
            raise UnexpectedEndOfInput("expected '=', found end of input", eq_tok.pos)
        if not eq_tok.is_op(Op.EQUALS):
            raise UnexpectedToken("'='", eq_tok.describe(), eq_tok.pos)

        return VariableDeclare(name_tok.value, self.parse_comparison())

    # ------------------------
    # Expressions
    # ------------------------
    def parse_comparison(self) -> Node:
        if self.peek().is_op(Op.BANG):
            self.advance()
            return UnaryOp(Op.BANG, self.parse_comparison())

        left = self.parse_binary(0)
        while self.peek().kind is TokenKind.OPERATOR and self.peek().value in COMPARISON_OPS:
            op = self.advance().value
            left = BinaryOp(left, op, self.parse_binary(0))
        return left

    def parse_binary(self, level: int) -> Node:
        if level == len(BINARY_LEVELS):
            return self.parse_factor()
        ops = BINARY_LEVELS[level]
        left = self.parse_binary(level + 1)
        while self.peek().kind is TokenKind.OPERATOR and self.peek().value in ops:
            op = self.advance().value
            left = BinaryOp(left, op, self.parse_binary(level + 1))
        return left

    def parse_factor(self) -> Node:
        tok = self.peek()
        if tok.is_op(Op.PLUS, Op.MINUS):
            self.advance()
            return UnaryOp(tok.value, self.parse_factor())
        return self.parse_power()

    def parse_power(self) -> Node:
        base = self.parse_atom()
        if self.peek().is_op(Op.STAR_STAR):
            self.advance()
            return BinaryOp(base, Op.STAR_STAR, self.parse_factor())
        return base

    def parse_atom(self) -> Node:
        tok = self.advance()

        if tok.kind in (TokenKind.NUMBER, TokenKind.STRING, TokenKind.CHAR):
            return Literal(tok.value)

        if tok.kind is TokenKind.IDENTIFIER:
            name = tok.value
            if self.peek().is_op(Op.EQUALS):
                self.advance()
                if name in RESERVED:
                    raise ReservedIdentifier(name, tok.pos)
                return VariableAssign(name, self.parse_comparison())
            if name in CONSTANTS:
                return Literal(CONSTANTS[name])
            if name == LET:
                raise UnexpectedToken("expression", "keyword 'let'", tok.pos)
            return VariableAccess(name)

        if tok.is_op(Op.LPAREN):
            expr = self.parse_comparison()
            close = self.peek()
            if close.kind is TokenKind.EOF:
                raise UnclosedGroup(close.pos)
            if not close.is_op(Op.RPAREN):
                raise UnexpectedToken("')'", close.describe(), close.pos)
            self.advance()
            return expr

        if tok.kind is TokenKind.EOF:
            raise UnexpectedEndOfInput(pos=tok.pos)

        raise UnexpectedToken("expression", tok.describe(), tok.pos)

    def expect_statement_end(self) -> None:
        tok = self.peek()
        if tok.kind is TokenKind.EOF or tok.is_op(Op.SEMICOLON):
            return
        raise UnexpectedToken("';' or end of input", tok.describe(), tok.pos)


def parse(tokens: Sequence[Token]) -> Node:
    """Parse exactly one statement, optionally followed by a single ';'."""
    parser = Parser(tokens)
    try:
        node = parser.parse_statement()
    except RecursionError:
        raise NestingTooDeep() from None
    parser.expect_statement_end()
    if parser.peek().is_op(Op.SEMICOLON):
        parser.advance()
    if not parser.at_end():
        tok = parser.peek()
        raise UnexpectedToken("end of input", tok.describe(), tok.pos)
    logger.debug("parsed %r", node)
    return node


def parse_program(tokens: Sequence[Token]) -> list[Node]:
    """Parse a ';'-separated sequence of statements. Empty statements are skipped."""
    parser = Parser(tokens)
    statements: list[Node] = []
    while True:
        while parser.peek().is_op(Op.SEMICOLON):
            parser.advance()
        if parser.at_end():
            break
        try:
            statements.append(parser.parse_statement())
        except RecursionError:
            raise NestingTooDeep() from None
        parser.expect_statement_end()
    logger.debug("parsed %d statement(s): %r", len(statements), statements)
    return statements
