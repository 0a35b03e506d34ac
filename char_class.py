"""Character classification over 16-bit code units.

Pure functions the text value and the parser call for surrogate
handling, single-unit case mapping and digit values.  Case mapping is
one unit to one unit and follows the Unicode simple mappings: where the
full mapping expands but a simple mapping exists (``"\u0130"`` lowers
to ``"i"``, ``"\u1f80"`` uppers to ``"\u1f88"``) the simple one is used,
and where none exists (``"ß".upper() == "SS"``) the unit is returned
unchanged.
"""
from __future__ import annotations

import unicodedata
from typing import Sequence

from codec_errors import IndexOutOfRangeError
from radix_digits import is_valid_radix, symbol_value

MIN_HIGH_SURROGATE = 0xD800
MAX_HIGH_SURROGATE = 0xDBFF
MIN_LOW_SURROGATE = 0xDC00
MAX_LOW_SURROGATE = 0xDFFF
MIN_SUPPLEMENTARY_CODE_POINT = 0x10000
MAX_CODE_POINT = 0x10FFFF

_SURROGATE_OFFSET = (
    MIN_SUPPLEMENTARY_CODE_POINT - (MIN_HIGH_SURROGATE << 10) - MIN_LOW_SURROGATE
)

_FULLWIDTH_UPPER_A = 0xFF21
_FULLWIDTH_UPPER_Z = 0xFF3A
_FULLWIDTH_LOWER_A = 0xFF41
_FULLWIDTH_LOWER_Z = 0xFF5A


# ---------------------------------------------------------------------------
# Code points and surrogates
# ---------------------------------------------------------------------------

def is_bmp_code_point(code_point: int) -> bool:
    return code_point >> 16 == 0


def is_valid_code_point(code_point: int) -> bool:
    return 0 <= code_point <= MAX_CODE_POINT


def is_high_surrogate(unit: int) -> bool:
    return MIN_HIGH_SURROGATE <= unit <= MAX_HIGH_SURROGATE


def is_low_surrogate(unit: int) -> bool:
    return MIN_LOW_SURROGATE <= unit <= MAX_LOW_SURROGATE


def is_surrogate(unit: int) -> bool:
    return MIN_HIGH_SURROGATE <= unit <= MAX_LOW_SURROGATE


def high_surrogate(code_point: int) -> int:
    return (code_point >> 10) + (
        MIN_HIGH_SURROGATE - (MIN_SUPPLEMENTARY_CODE_POINT >> 10)
    )


def low_surrogate(code_point: int) -> int:
    return (code_point & 0x3FF) + MIN_LOW_SURROGATE


def to_code_point(high: int, low: int) -> int:
    return (high << 10) + low + _SURROGATE_OFFSET


def char_count(code_point: int) -> int:
    """Code units needed to store ``code_point``."""
    return 2 if code_point >= MIN_SUPPLEMENTARY_CODE_POINT else 1


def code_point_at(units: Sequence[int], index: int, limit: int) -> int:
    c1 = units[index]
    if is_high_surrogate(c1):
        index += 1
        if index < limit:
            c2 = units[index]
            if is_low_surrogate(c2):
                return to_code_point(c1, c2)
    return c1


def code_point_before(units: Sequence[int], index: int, start: int = 0) -> int:
    index -= 1
    c2 = units[index]
    if is_low_surrogate(c2) and index > start:
        c1 = units[index - 1]
        if is_high_surrogate(c1):
            return to_code_point(c1, c2)
    return c2


def code_point_count(units: Sequence[int], offset: int, count: int) -> int:
    """Code points in ``units[offset:offset + count]``; a pair counts once."""
    end = offset + count
    n = count
    i = offset
    while i < end:
        unit = units[i]
        i += 1
        if is_high_surrogate(unit) and i < end and is_low_surrogate(units[i]):
            n -= 1
            i += 1
    return n


def offset_by_code_points(
    units: Sequence[int], start: int, count: int, index: int, code_point_offset: int
) -> int:
    """Code-unit index ``code_point_offset`` code points away from ``index``."""
    x = index
    if code_point_offset >= 0:
        limit = start + count
        i = 0
        while x < limit and i < code_point_offset:
            unit = units[x]
            x += 1
            if is_high_surrogate(unit) and x < limit and is_low_surrogate(units[x]):
                x += 1
            i += 1
        if i < code_point_offset:
            raise IndexOutOfRangeError(index + code_point_offset)
    else:
        i = code_point_offset
        while x > start and i < 0:
            x -= 1
            if is_low_surrogate(units[x]) and x > start and is_high_surrogate(units[x - 1]):
                x -= 1
            i += 1
        if i < 0:
            raise IndexOutOfRangeError(index + code_point_offset)
    return x


# ---------------------------------------------------------------------------
# Case mapping
# ---------------------------------------------------------------------------

# Simple (one-to-one) mappings of characters whose full mapping expands.
_SIMPLE_UPPER = {
    **{c: c + 8 for c in range(0x1F80, 0x1F88)},
    **{c: c + 8 for c in range(0x1F90, 0x1F98)},
    **{c: c + 8 for c in range(0x1FA0, 0x1FA8)},
    0x1FB3: 0x1FBC,
    0x1FC3: 0x1FCC,
    0x1FF3: 0x1FFC,
}
_SIMPLE_LOWER = {
    0x0130: 0x0069,  # LATIN CAPITAL LETTER I WITH DOT ABOVE
}


def to_upper_case(unit: int) -> int:
    mapped = chr(unit).upper()
    if len(mapped) == 1:
        return ord(mapped)
    return _SIMPLE_UPPER.get(unit, unit)


def to_lower_case(unit: int) -> int:
    mapped = chr(unit).lower()
    if len(mapped) == 1:
        return ord(mapped)
    return _SIMPLE_LOWER.get(unit, unit)


# ---------------------------------------------------------------------------
# Digits
# ---------------------------------------------------------------------------

def digit(ch: int | str, radix: int) -> int:
    """Value of the code unit ``ch`` as a digit in ``radix``, or -1.

    Accepts ASCII and fullwidth Latin letters and any basic-plane
    Unicode decimal digit (category Nd), not only ``0-9``.  Anything
    that does not fit in one code unit is not a digit.
    """
    code_point = ord(ch) if isinstance(ch, str) else ch
    if not is_valid_radix(radix) or not is_bmp_code_point(code_point):
        return -1

    if code_point < 0x80:
        return symbol_value(chr(code_point), radix)

    if _FULLWIDTH_UPPER_A <= code_point <= _FULLWIDTH_UPPER_Z:
        value = code_point - _FULLWIDTH_UPPER_A + 10
    elif _FULLWIDTH_LOWER_A <= code_point <= _FULLWIDTH_LOWER_Z:
        value = code_point - _FULLWIDTH_LOWER_A + 10
    else:
        value = unicodedata.decimal(chr(code_point), -1)

    return value if value < radix else -1
