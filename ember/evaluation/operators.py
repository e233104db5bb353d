"""Operator semantics for Ember values.

Every operator dispatches on the runtime types of its evaluated operands.
The rules, in short:

    - Number op Number: IEEE-754 double arithmetic; never raises.
    - Bool mixed with Number: the Bool counts as 1.0 / 0.0.
    - Bool op Bool: arithmetic and bitwise ops give a Number; comparisons
      order false before true.
    - Text (String or Char): '+' concatenates display forms, '*' by a Number
      repeats, every other arithmetic op parses both sides as numbers (NaN on
      failure). Bitwise ops on text are unsupported.
    - Comparisons between types that do not coerce are unequal and unordered.
    - Bitwise ops work on 64-bit two's complement integers.
"""

from __future__ import annotations

import math
import re
from typing import Callable

from ember.errors import FractionalRepeatCount, TextTooLong, UnsupportedOperator
from ember.reader.tokens import Op
from ember.types.values import Char, Value, to_display, type_name

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
_INT64_MASK = (1 << 64) - 1

# Longest String that concatenation or repetition may produce.
MAX_TEXT_LENGTH = 1 << 24

NUMERIC_TEXT_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+|inf|NaN)\s*", re.ASCII)

NAN = float("nan")
INF = float("inf")


# -------------------------------
# Coercions
# -------------------------------
def text_to_number(text: str) -> float:
    """Parse text the way numeric literals are written; NaN when it does not parse."""
    if NUMERIC_TEXT_RE.fullmatch(text):
        return float(text)
    return NAN


def as_number(value: Value) -> float:
    match value:
        case bool():
            return 1.0 if value else 0.0
        case float():
            return value
        case str():
            return text_to_number(value)
        case Char():
            return text_to_number(value.ch)
    raise AssertionError(f"not an Ember value: {value!r}")


def to_int64(n: float) -> int:
    """Truncate toward zero and saturate to the int64 range; NaN becomes 0."""
    if math.isnan(n):
        return 0
    if n >= INT64_MAX:
        return INT64_MAX
    if n <= INT64_MIN:
        return INT64_MIN
    return int(n)


def wrap_int64(n: int) -> int:
    n &= _INT64_MASK
    return n - (1 << 64) if n > INT64_MAX else n


# -------------------------------
# IEEE helpers
# -------------------------------
def ieee_div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)
    return a / b


def ieee_mod(a: float, b: float) -> float:
    # sign follows the dividend; x % 0 is NaN
    if b == 0.0 or math.isnan(a) or math.isnan(b) or math.isinf(a):
        return NAN
    return math.fmod(a, b)


def _is_odd_integer(n: float) -> bool:
    return n.is_integer() and int(n) % 2 == 1


def ieee_pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -INF
        return INF
    except ValueError:
        # pole (0 ** negative) or negative base with a fractional exponent
        if a == 0.0:
            if math.copysign(1.0, a) < 0 and _is_odd_integer(b):
                return -INF
            return INF
        return NAN


# -------------------------------
# Arithmetic
# -------------------------------
def add(left: Value, right: Value) -> Value:
    match (left, right):
        case (float(), float()):
            return left + right
        case (float(), bool()):
            return left + as_number(right)
        case (bool(), float()):
            return add(right, left)
        case (bool(), bool()):
            return as_number(left) + as_number(right)
    # at least one side is text
    left_text, right_text = to_display(left), to_display(right)
    _check_length(len(left_text) + len(right_text))
    return left_text + right_text


def sub(left: Value, right: Value) -> Value:
    return as_number(left) - as_number(right)


def _check_length(length: int) -> None:
    if length > MAX_TEXT_LENGTH:
        raise TextTooLong(length, MAX_TEXT_LENGTH)


def _repeat(text: str | Char, count: float) -> str:
    if not math.isfinite(count) or not count.is_integer() or count < 0:
        raise FractionalRepeatCount(count)
    unit = to_display(text)
    if not unit:
        return ""
    times = int(count)
    _check_length(len(unit) * times)
    return unit * times


def mul(left: Value, right: Value) -> Value:
    match (left, right):
        case (str() | Char(), float()):
            return _repeat(left, right)
        case (float(), str() | Char()):
            return mul(right, left)
        case (bool(), float()):
            return mul(right, left)
    return as_number(left) * as_number(right)


def div(left: Value, right: Value) -> Value:
    return ieee_div(as_number(left), as_number(right))


def mod(left: Value, right: Value) -> Value:
    return ieee_mod(as_number(left), as_number(right))


def power(left: Value, right: Value) -> Value:
    return ieee_pow(as_number(left), as_number(right))


# -------------------------------
# Bitwise
# -------------------------------
def _bitwise_operands(op: Op, left: Value, right: Value) -> tuple[int, int]:
    match (left, right):
        case (float() | bool(), float() | bool()):
            return to_int64(as_number(left)), to_int64(as_number(right))
    raise UnsupportedOperator(op.value, type_name(left), type_name(right))


def bit_and(left: Value, right: Value) -> Value:
    a, b = _bitwise_operands(Op.AMPERSAND, left, right)
    return float(a & b)


def bit_or(left: Value, right: Value) -> Value:
    a, b = _bitwise_operands(Op.PIPE, left, right)
    return float(a | b)


def bit_xor(left: Value, right: Value) -> Value:
    a, b = _bitwise_operands(Op.CARET, left, right)
    return float(a ^ b)


def _shift_left(a: int, count: int) -> int:
    if count < 0:
        return _shift_right(a, -count)
    if count >= 64:
        return 0
    return wrap_int64(a << count)


def _shift_right(a: int, count: int) -> int:
    if count < 0:
        return _shift_left(a, -count)
    if count >= 64:
        return -1 if a < 0 else 0
    return a >> count


def shift_left(left: Value, right: Value) -> Value:
    a, b = _bitwise_operands(Op.LESS_LESS, left, right)
    return float(_shift_left(a, b))


def shift_right(left: Value, right: Value) -> Value:
    a, b = _bitwise_operands(Op.GREATER_GREATER, left, right)
    return float(_shift_right(a, b))


# -------------------------------
# Comparison
# -------------------------------
def _comparable(left: Value, right: Value) -> tuple | None:
    """Return a pair of like-typed keys, or None when the types do not compare."""
    match (left, right):
        case (float() | bool(), float() | bool()):
            return as_number(left), as_number(right)
        case (str(), str()):
            return left, right
        case (Char(), Char()):
            return left.ch, right.ch
    return None


def equal(left: Value, right: Value) -> Value:
    pair = _comparable(left, right)
    return pair is not None and pair[0] == pair[1]


def not_equal(left: Value, right: Value) -> Value:
    return not equal(left, right)


def greater(left: Value, right: Value) -> Value:
    pair = _comparable(left, right)
    return pair is not None and pair[0] > pair[1]


def less(left: Value, right: Value) -> Value:
    pair = _comparable(left, right)
    return pair is not None and pair[0] < pair[1]


def greater_equal(left: Value, right: Value) -> Value:
    pair = _comparable(left, right)
    return pair is not None and pair[0] >= pair[1]


def less_equal(left: Value, right: Value) -> Value:
    pair = _comparable(left, right)
    return pair is not None and pair[0] <= pair[1]


# -------------------------------
# Unary
# -------------------------------
def positive(operand: Value) -> Value:
    match operand:
        case float():
            return operand
        case bool():
            return as_number(operand)
    raise UnsupportedOperator(Op.PLUS.value, type_name(operand))


def negate(operand: Value) -> Value:
    return mul(-1.0, operand)


def logical_not(operand: Value) -> Value:
    match operand:
        case bool():
            return not operand
        case float():
            return operand == 0.0 or math.isnan(operand)
    raise UnsupportedOperator(Op.BANG.value, type_name(operand))


UNARY_OPERATORS: dict[Op, Callable[[Value], Value]] = {
    Op.PLUS: positive,
    Op.MINUS: negate,
    Op.BANG: logical_not,
}

BINARY_OPERATORS: dict[Op, Callable[[Value, Value], Value]] = {
    Op.PLUS: add,
    Op.MINUS: sub,
    Op.STAR: mul,
    Op.SLASH: div,
    Op.PERCENT: mod,
    Op.STAR_STAR: power,
    Op.AMPERSAND: bit_and,
    Op.PIPE: bit_or,
    Op.CARET: bit_xor,
    Op.LESS_LESS: shift_left,
    Op.GREATER_GREATER: shift_right,
    Op.EQUALS_EQUALS: equal,
    Op.BANG_EQUALS: not_equal,
    Op.GREATER: greater,
    Op.LESS: less,
    Op.GREATER_EQUALS: greater_equal,
    Op.LESS_EQUALS: less_equal,
}
