"""Error hierarchy for Ember.

Three disjoint families hang off EmberError: LexError, ParseError and
EvaluationError. Lex and parse errors carry the character offset of the
offending input where one is known.
"""

from __future__ import annotations

from typing import Optional


class EmberError(Exception):
    """ Base class for all Ember errors"""
    pass


# -------------------------------
# Lexing
# -------------------------------
class LexError(EmberError):
    """ Raised when source text cannot be split into tokens"""

    def __init__(self, message: str, pos: Optional[int] = None):
        if pos is not None:
            message = f"{message} at {pos}"
        super().__init__(message)
        self.pos = pos


class UnexpectedCharacter(LexError):
    """ Raised on a character that cannot start any token"""

    def __init__(self, char: str, pos: int):
        super().__init__(f"unexpected character {char!r}", pos)
        self.char = char


class MalformedNumber(LexError):
    """ Raised when a numeric literal has more than one '.' or no digits"""

    def __init__(self, text: str, pos: int):
        super().__init__(f"malformed number {text!r}", pos)
        self.text = text


class UnterminatedString(LexError):
    """ Raised when a string literal runs to the end of input"""

    def __init__(self, pos: int):
        super().__init__("unterminated string literal", pos)


class UnterminatedChar(LexError):
    """ Raised when a char literal runs to the end of input"""

    def __init__(self, pos: int):
        super().__init__("unterminated char literal", pos)


class UnknownEscape(LexError):
    """ Raised on a backslash escape that is not one of \\n \\r \\t \\0 \\" \\\\ \\'"""

    def __init__(self, escape: str, pos: int):
        super().__init__(f"unknown escape sequence '\\{escape}'", pos)
        self.escape = escape


class CharLiteralTooLong(LexError):
    """ Raised when a char literal holds more than one character"""

    def __init__(self, pos: int):
        super().__init__("char literal must contain exactly one character", pos)


class EmptyCharLiteral(LexError):
    """ Raised on ''"""

    def __init__(self, pos: int):
        super().__init__("empty char literal", pos)


# -------------------------------
# Parsing
# -------------------------------
class ParseError(EmberError):
    """ Raised when the token sequence does not form a statement"""

    def __init__(self, message: str, pos: Optional[int] = None):
        if pos is not None:
            message = f"{message} at {pos}"
        super().__init__(message)
        self.pos = pos


class UnexpectedToken(ParseError):
    """ Raised when a token other than the one the grammar requires is found"""

    def __init__(self, expected: str, found: str, pos: Optional[int] = None):
        super().__init__(f"expected {expected}, found {found}", pos)
        self.expected = expected
        self.found = found


class UnexpectedEndOfInput(ParseError):
    """ Raised when input ends where an operand or keyword part is required.

    Interactive callers treat this family as "incomplete input".
    """

    def __init__(self, message: str = "unexpected end of input", pos: Optional[int] = None):
        super().__init__(message, pos)


class UnclosedGroup(UnexpectedEndOfInput):
    """ Raised when input ends before a '(' is closed"""

    def __init__(self, pos: Optional[int] = None):
        super().__init__("expected ')', found end of input", pos)


class ReservedIdentifier(ParseError):
    """ Raised when a reserved word is used as a variable name"""

    def __init__(self, name: str, pos: Optional[int] = None):
        super().__init__(f"'{name}' is reserved and cannot be used as a variable name", pos)
        self.name = name


class NestingTooDeep(ParseError):
    """ Raised when an expression nests deeper than the parser can recurse"""

    def __init__(self):
        super().__init__("expression is nested too deeply")


# -------------------------------
# Evaluation
# -------------------------------
class EvaluationError(EmberError):
    """ Base class for errors raised while evaluating a syntax tree"""
    pass


class UnsupportedOperator(EvaluationError):
    """ Raised when an operator is not defined for the operand types"""

    def __init__(self, op: str, left_type: str, right_type: Optional[str] = None):
        if right_type is None:
            message = f"Operator '{op}' is not supported for type {left_type}"
        else:
            message = f"Operator '{op}' is not supported for types {left_type} and {right_type}"
        super().__init__(message)
        self.op = op
        self.left_type = left_type
        self.right_type = right_type


class UndefinedVariable(EvaluationError):
    """ Raised when a name is read or assigned before it is declared"""

    def __init__(self, name: str):
        super().__init__(f"Name '{name}' is not defined")
        self.name = name


class FractionalRepeatCount(EvaluationError):
    """ Raised when text is repeated a negative, fractional or non-finite number of times"""

    def __init__(self, count: float):
        super().__init__(f"cannot repeat text {count!r} times; count must be a whole non-negative number")
        self.count = count


class TextTooLong(EvaluationError):
    """ Raised when concatenation or repetition would build text longer than the text length limit"""

    def __init__(self, length: int, limit: int):
        super().__init__(f"text of length {length} exceeds the limit of {limit} characters")
        self.length = length
        self.limit = limit
