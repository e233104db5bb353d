"""Runtime values for Ember.

Values are plain Python objects wherever a Python type fits:

    - Number -> float (never int; every numeric result is a float)
    - Bool   -> bool
    - String -> str
    - Char   -> Char (a single code point, kept distinct from str)

All of them are immutable, so binding a value to several names never lets a
mutation through one name show up under another.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Union


class Char:
    __slots__ = ("ch",)

    def __init__(self, ch: str):
        if len(ch) != 1:
            raise ValueError(f"Char holds exactly one character, got {ch!r}")
        self.ch = ch

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Char) and self.ch == other.ch

    def __hash__(self) -> int:
        return hash((Char, self.ch))

    def __repr__(self):
        return f"Char({self.ch!r})"

    def __str__(self):
        return self.ch


Value = Union[float, bool, str, Char]

# Escapes understood by the lexer, keyed by the character they produce.
ESCAPES: dict[str, str] = {
    "\n": "n",
    "\r": "r",
    "\t": "t",
    "\0": "0",
    "\\": "\\",
}


def type_name(value: Value) -> str:
    """Return the Ember type name of a runtime value."""
    # bool first: bool is not a float, but keep the check order explicit
    if isinstance(value, bool):
        return "Bool"
    if isinstance(value, float):
        return "Number"
    if isinstance(value, str):
        return "String"
    if isinstance(value, Char):
        return "Char"
    raise AssertionError(f"not an Ember value: {value!r}")


def format_number(n: float) -> str:
    """Canonical decimal form of a Number.

    Never uses exponent notation, so the output can always be read back by
    the lexer: whole numbers print without a fractional part, everything else
    uses the shortest digits that round-trip.
    """
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    if n.is_integer():
        if n == 0 and math.copysign(1.0, n) < 0:
            return "-0"
        return str(int(n))
    text = repr(n)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def escape_text(text: str, quote: str) -> str:
    out = []
    for ch in text:
        if ch in ESCAPES:
            out.append("\\" + ESCAPES[ch])
        elif ch == quote:
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)


def to_display(value: Value) -> str:
    """Text shown for a result: raw strings and chars, bare numbers and bools."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Char):
        return value.ch
    raise AssertionError(f"not an Ember value: {value!r}")


def to_repr(value: Value) -> str:
    """Source form of a value: strings and chars quoted and escaped."""
    if isinstance(value, str):
        return '"' + escape_text(value, '"') + '"'
    if isinstance(value, Char):
        return "'" + escape_text(value.ch, "'") + "'"
    return to_display(value)
