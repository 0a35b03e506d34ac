"""Digit symbols shared by the integer formatter and parser.

Index ``n`` of ``DIGITS`` is the symbol for digit value ``n``; the two
hundred-entry tables give the tens and ones symbol of every value in
[0, 99] so the decimal formatter can emit two digits per division.
"""
from __future__ import annotations

from bounds import RADIX

MIN_RADIX = RADIX.lo
MAX_RADIX = RADIX.hi

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

DIGIT_TENS = "".join(DIGITS[n // 10] for n in range(100))
DIGIT_ONES = "".join(DIGITS[n % 10] for n in range(100))

# symbol -> value, both cases
_SYMBOL_VALUES = {c: v for v, c in enumerate(DIGITS)}
_SYMBOL_VALUES.update({c.upper(): v for v, c in enumerate(DIGITS) if c.isalpha()})


def is_valid_radix(radix: int) -> bool:
    return RADIX.contains(radix)


def digit_symbol(value: int) -> str:
    """Symbol for a digit value in [0, 35]."""
    return DIGITS[value]


def symbol_value(symbol: str, radix: int = MAX_RADIX) -> int:
    """Value of an ASCII digit symbol in ``radix``, or -1."""
    value = _SYMBOL_VALUES.get(symbol, -1)
    if value < 0 or value >= radix:
        return -1
    return value
