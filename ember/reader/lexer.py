"""
  Ember lexer

Turns source text into a fully materialized list of Tokens, always terminated
by an EOF token. Dispatch is on the first character of each token:

    - digit or '.'      -> number (at most one '.')
    - letter, '_', '$'  -> identifier (keywords are identifiers too)
    - '"'               -> string literal
    - "'"               -> char literal
    - operator chars    -> operator, with one character of look-ahead for
                           ** == != >= <= >> <<
    - whitespace        -> skipped
"""

from __future__ import annotations

import logging
import re

from ember.errors import (
    CharLiteralTooLong,
    EmptyCharLiteral,
    MalformedNumber,
    UnexpectedCharacter,
    UnknownEscape,
    UnterminatedChar,
    UnterminatedString,
)
from ember.reader.tokens import SINGLE_CHAR_OPERATORS, TWO_CHAR_OPERATORS, Token, TokenKind
from ember.types.values import Char

logger = logging.getLogger(__name__)

NUMBER_RE = re.compile(r"[0-9.]+")
IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

NUMBER_START = frozenset("0123456789.")
IDENTIFIER_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_$")

# Escape letter -> the character it stands for.
UNESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    '"': '"',
    "\\": "\\",
    "'": "'",
}


def lex(source: str) -> list[Token]:
    """Split `source` into tokens, raising a LexError on malformed input."""
    tokens: list[Token] = []
    pos = 0
    n = len(source)

    while pos < n:
        ch = source[pos]

        if ch.isspace():
            pos += 1
            continue

        if ch in NUMBER_START:
            m = NUMBER_RE.match(source, pos)
            text = m.group()
            if text.count(".") > 1 or text == ".":
                raise MalformedNumber(text, pos)
            tokens.append(Token(TokenKind.NUMBER, float(text), pos))
            pos = m.end()
            continue

        if ch in IDENTIFIER_START:
            m = IDENTIFIER_RE.match(source, pos)
            tokens.append(Token(TokenKind.IDENTIFIER, m.group(), pos))
            pos = m.end()
            continue

        if ch == '"':
            text, end = _read_string(source, pos)
            tokens.append(Token(TokenKind.STRING, text, pos))
            pos = end
            continue

        if ch == "'":
            char, end = _read_char(source, pos)
            tokens.append(Token(TokenKind.CHAR, char, pos))
            pos = end
            continue

        if ch in SINGLE_CHAR_OPERATORS:
            follow = TWO_CHAR_OPERATORS.get(ch, {})
            if pos + 1 < n and source[pos + 1] in follow:
                tokens.append(Token(TokenKind.OPERATOR, follow[source[pos + 1]], pos))
                pos += 2
            else:
                tokens.append(Token(TokenKind.OPERATOR, SINGLE_CHAR_OPERATORS[ch], pos))
                pos += 1
            continue

        raise UnexpectedCharacter(ch, pos)

    tokens.append(Token(TokenKind.EOF, None, n))
    logger.debug("lexed %d tokens: %r", len(tokens), tokens)
    return tokens


def _read_escape(source: str, pos: int) -> str:
    """Decode the escape whose backslash sits at `pos`. Caller checks bounds."""
    letter = source[pos + 1]
    if letter not in UNESCAPES:
        raise UnknownEscape(letter, pos)
    return UNESCAPES[letter]


def _read_string(source: str, start: int) -> tuple[str, int]:
    """Read a string literal opening at `start`; return (text, index past the closing quote)."""
    pos = start + 1
    n = len(source)
    out: list[str] = []
    while pos < n:
        ch = source[pos]
        if ch == '"':
            return "".join(out), pos + 1
        if ch == "\\":
            if pos + 1 >= n:
                break
            out.append(_read_escape(source, pos))
            pos += 2
            continue
        out.append(ch)
        pos += 1
    raise UnterminatedString(start)


def _read_char(source: str, start: int) -> tuple[Char, int]:
    """Read a char literal opening at `start`; return (char, index past the closing quote)."""
    pos = start + 1
    n = len(source)
    if pos >= n:
        raise UnterminatedChar(start)
    ch = source[pos]
    if ch == "'":
        raise EmptyCharLiteral(start)
    if ch == "\\":
        if pos + 1 >= n:
            raise UnterminatedChar(start)
        ch = _read_escape(source, pos)
        pos += 2
    else:
        pos += 1
    if pos < n and source[pos] == "'":
        return Char(ch), pos + 1
    # more than one character before the closing quote, or no closing quote at all
    while pos < n:
        if source[pos] == "\\":
            pos += 2
            continue
        if source[pos] == "'":
            raise CharLiteralTooLong(start)
        pos += 1
    raise UnterminatedChar(start)
