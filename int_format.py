"""Integer to text conversion in any radix from 2 to 36.

Radix policy: formatting is permissive.  A radix outside [2, 36] is
silently replaced by 10 and never raises.  Parsing (int_parse.py) is
strict and rejects the same radix.

The algorithms work in negative space: a non-negative value is negated
once up front and every digit is extracted from the negative magnitude,
so MIN_VALUE, which has no positive counterpart, needs no special path
outside the decimal shortcut.

Decision branches are annotated with their contract branch-IDs (see
contract.py BranchSpec) so white-box tests can trace coverage back to
the contract.
"""
from __future__ import annotations

from bit_ops import (
    MAX_VALUE,
    MIN_VALUE,
    SIZE,
    number_of_leading_zeros,
    to_unsigned_long,
    truncdiv,
    truncmod,
)
from bounds import INT32, INT64
from radix_digits import DIGITS, DIGIT_ONES, DIGIT_TENS, is_valid_radix

SIZE_TABLE = (
    9, 99, 999, 9999, 99999, 999999, 9999999,
    99999999, 999999999, MAX_VALUE,
)

_MIN_VALUE_TEXT = "-2147483648"

# Values below this bound are split with the multiply-shift quotient.
_TWO_DIGIT_THRESHOLD = 65536


def _check_int32(i: int) -> int:
    return INT32.apply(i)


# ---------------------------------------------------------------------------
# Signed formatting
# ---------------------------------------------------------------------------

def to_string(i: int, radix: int = 10) -> str:
    """Signed text of ``i`` in ``radix``.

    Raises OverflowError only when ``i`` is not a 32-bit value at all.

    Branches: FMT-RADIX-DEFAULT, FMT-DECIMAL, FMT-RADIX
    """
    _check_int32(i)
    if not is_valid_radix(radix):                                 # FMT-RADIX-DEFAULT
        radix = 10

    if radix == 10:                                               # FMT-DECIMAL
        return _to_decimal_string(i)

    return _format_negative_space(i, radix, SIZE + 1)             # FMT-RADIX


def _format_negative_space(i: int, radix: int, capacity: int) -> str:
    """Digits of ``i`` extracted from its negative magnitude.

    Branches: FMT-NEGATIVE, FMT-NON-NEGATIVE
    """
    buf = [""] * capacity
    negative = i < 0
    char_pos = capacity - 1

    if not negative:                                              # FMT-NON-NEGATIVE
        i = -i

    while i <= -radix:
        buf[char_pos] = DIGITS[-truncmod(i, radix)]
        char_pos -= 1
        i = truncdiv(i, radix)
    buf[char_pos] = DIGITS[-i]

    if negative:                                                  # FMT-NEGATIVE
        char_pos -= 1
        buf[char_pos] = "-"

    return "".join(buf[char_pos:])


def _to_decimal_string(i: int) -> str:
    """Branches: FMT-DEC-MIN-VALUE, FMT-DEC-SIZED"""
    if i == MIN_VALUE:                                            # FMT-DEC-MIN-VALUE
        return _MIN_VALUE_TEXT
    # FMT-DEC-SIZED
    size = string_size(-i) + 1 if i < 0 else string_size(i)
    buf = [""] * size
    get_chars(i, size, buf)
    return "".join(buf)


def string_size(x: int) -> int:
    """Decimal digit count of a non-negative 32-bit value."""
    for index, ceiling in enumerate(SIZE_TABLE):
        if x <= ceiling:
            return index + 1
    raise OverflowError(f"{x} is wider than a 32-bit value")


def get_chars(i: int, index: int, buf: list[str]) -> int:
    """Write the decimal digits of ``i`` into ``buf`` ending before ``index``.

    Digits are produced least significant first.  While the magnitude is
    at least 65536 two digits are peeled off per division by 100 (the
    multiply by 100 done with shifts: 64 + 32 + 4).  Below that, the
    quotient by ten is ``(i * 52429) >> 19``, which equals ``i // 10``
    for every value under 65536.  ``MIN_VALUE`` must not be passed.

    Returns the position of the first character written.

    Branches: DEC-TWO-DIGITS, DEC-ONE-DIGIT
    """
    char_pos = index
    sign = ""

    if i < 0:
        sign = "-"
        i = -i

    while i >= _TWO_DIGIT_THRESHOLD:                              # DEC-TWO-DIGITS
        q = i // 100
        r = i - ((q << 6) + (q << 5) + (q << 2))
        i = q
        char_pos -= 1
        buf[char_pos] = DIGIT_ONES[r]
        char_pos -= 1
        buf[char_pos] = DIGIT_TENS[r]

    while True:                                                   # DEC-ONE-DIGIT
        q = (i * 52429) >> (16 + 3)
        r = i - ((q << 3) + (q << 1))
        char_pos -= 1
        buf[char_pos] = DIGITS[r]
        i = q
        if i == 0:
            break

    if sign:
        char_pos -= 1
        buf[char_pos] = sign
    return char_pos


# ---------------------------------------------------------------------------
# Unsigned formatting
# ---------------------------------------------------------------------------

def to_unsigned_string(i: int, radix: int = 10) -> str:
    """Text of the unsigned reinterpretation of ``i``.

    The 32-bit pattern is zero-extended and formatted by the 64-bit
    signed algorithm, where it can never be negative.
    """
    _check_int32(i)
    if not is_valid_radix(radix):                                 # FMT-RADIX-DEFAULT
        radix = 10
    return _long_to_string(to_unsigned_long(i), radix)


def _long_to_string(value: int, radix: int) -> str:
    INT64.apply(value)
    return _format_negative_space(value, radix, 64 + 1)


def to_hex_string(i: int) -> str:
    return _to_unsigned_string_shift(i, 4)


def to_octal_string(i: int) -> str:
    return _to_unsigned_string_shift(i, 3)


def to_binary_string(i: int) -> str:
    return _to_unsigned_string_shift(i, 1)


def _to_unsigned_string_shift(val: int, shift: int) -> str:
    """Power-of-two radix formatting by mask and shift.

    Branches: SHIFT-ZERO, SHIFT-DIGITS
    """
    _check_int32(val)
    mag = SIZE - number_of_leading_zeros(val)
    chars = max((mag + (shift - 1)) // shift, 1)                  # SHIFT-ZERO when mag == 0
    buf = [""] * chars
    format_unsigned_int(val, shift, buf, 0, chars)                # SHIFT-DIGITS
    return "".join(buf)


def format_unsigned_int(val: int, shift: int, buf: list[str], offset: int, length: int) -> int:
    """Fill ``buf[offset:offset + length]`` with digits of radix ``1 << shift``.

    Returns the lowest buffer position (relative to ``offset``) written.
    """
    char_pos = length
    radix = 1 << shift
    mask = radix - 1
    val = to_unsigned_long(val)
    while True:
        char_pos -= 1
        buf[offset + char_pos] = DIGITS[val & mask]
        val >>= shift
        if val == 0 or char_pos <= 0:
            break
    return char_pos
