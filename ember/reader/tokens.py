from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ember.types.values import Char


class TokenKind(Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    STRING = "string"
    CHAR = "char"
    OPERATOR = "operator"
    EOF = "end of input"


class Op(Enum):
    """Operator and punctuation kinds, valued by their source spelling."""

    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    STAR_STAR = "**"
    SLASH = "/"
    PERCENT = "%"

    EQUALS_EQUALS = "=="
    BANG_EQUALS = "!="
    GREATER = ">"
    LESS = "<"
    GREATER_EQUALS = ">="
    LESS_EQUALS = "<="

    PIPE = "|"
    AMPERSAND = "&"
    CARET = "^"
    GREATER_GREATER = ">>"
    LESS_LESS = "<<"

    BANG = "!"
    EQUALS = "="

    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"

    COLON = ":"
    SEMICOLON = ";"


# First character -> follow-up characters that extend it into a two-character
# operator. Anything not listed here is a single-character operator.
TWO_CHAR_OPERATORS: dict[str, dict[str, Op]] = {
    "*": {"*": Op.STAR_STAR},
    "=": {"=": Op.EQUALS_EQUALS},
    "!": {"=": Op.BANG_EQUALS},
    ">": {"=": Op.GREATER_EQUALS, ">": Op.GREATER_GREATER},
    "<": {"=": Op.LESS_EQUALS, "<": Op.LESS_LESS},
}

SINGLE_CHAR_OPERATORS: dict[str, Op] = {op.value: op for op in Op if len(op.value) == 1}


TokenValue = Union[float, str, Char, Op, None]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: TokenValue = None
    pos: int = field(default=0, compare=False)

    def is_op(self, *ops: Op) -> bool:
        return self.kind is TokenKind.OPERATOR and self.value in ops

    def describe(self) -> str:
        """Short human form used in parse error messages."""
        if self.kind is TokenKind.OPERATOR:
            return f"'{self.value.value}'"
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.IDENTIFIER:
            return f"identifier '{self.value}'"
        return f"{self.kind.value} literal"

    def __repr__(self):
        if self.kind is TokenKind.EOF:
            return "Token(EOF)"
        return f"Token({self.kind.name}, {self.value!r})"
