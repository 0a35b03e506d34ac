"""Bit-level operations on 32-bit two's-complement values.

Every function works on the 32-bit pattern of its argument: any Python
integer is first reduced modulo 2**32 and reinterpreted as signed, and
results are returned as signed 32-bit values.  The shift helpers
reproduce machine-register semantics (shift distances taken modulo 32,
``urshift`` zero-fills) so the classic bit-twiddling sequences can be
written exactly as they are on fixed-width hardware.

Decision branches are annotated with their contract branch-IDs (see
contract.py BranchSpec).
"""
from __future__ import annotations

from bounds import INT32, INT32_WRAP, UINT32

MIN_VALUE = INT32.lo
MAX_VALUE = INT32.hi
SIZE = INT32.bits
BYTES = SIZE // 8

_MASK = INT32.mask


# ---------------------------------------------------------------------------
# Register helpers
# ---------------------------------------------------------------------------

def to_int32(value: int) -> int:
    """Reinterpret the low 32 bits of ``value`` as a signed integer."""
    return INT32_WRAP.apply(value)


def to_unsigned_long(i: int) -> int:
    """Zero-extend the 32-bit pattern of ``i`` (0 .. 2**32 - 1)."""
    return INT32.unsigned(i)


def urshift(i: int, distance: int) -> int:
    """Unsigned (zero-filling) right shift, distance taken modulo 32."""
    return to_int32((i & _MASK) >> (distance & 31))


def shl(i: int, distance: int) -> int:
    """Left shift dropping bits above bit 31, distance taken modulo 32."""
    return to_int32(i << (distance & 31))


def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.  Fixed-width
    machine division truncates toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    """Remainder matching ``truncdiv``: takes the sign of the dividend."""
    return a - b * truncdiv(a, b)


# ---------------------------------------------------------------------------
# Counting
# ---------------------------------------------------------------------------

def number_of_leading_zeros(i: int) -> int:
    """Zero bits above the highest one bit; 32 for zero.

    Branches: NLZ-ZERO, NLZ-SCAN
    """
    i = to_int32(i)
    if i == 0:                                                    # NLZ-ZERO
        return 32
    # NLZ-SCAN: binary search on halves, quarters, ...
    n = 1
    if urshift(i, 16) == 0:
        n += 16
        i = shl(i, 16)
    if urshift(i, 24) == 0:
        n += 8
        i = shl(i, 8)
    if urshift(i, 28) == 0:
        n += 4
        i = shl(i, 4)
    if urshift(i, 30) == 0:
        n += 2
        i = shl(i, 2)
    n -= urshift(i, 31)
    return n


def number_of_trailing_zeros(i: int) -> int:
    """Zero bits below the lowest one bit; 32 for zero.

    Branches: NTZ-ZERO, NTZ-SCAN
    """
    i = to_int32(i)
    if i == 0:                                                    # NTZ-ZERO
        return 32
    # NTZ-SCAN
    n = 31
    y = shl(i, 16)
    if y != 0:
        n -= 16
        i = y
    y = shl(i, 8)
    if y != 0:
        n -= 8
        i = y
    y = shl(i, 4)
    if y != 0:
        n -= 4
        i = y
    y = shl(i, 2)
    if y != 0:
        n -= 2
        i = y
    return n - urshift(shl(i, 1), 31)


def bit_count(i: int) -> int:
    """Population count by parallel summation of bit fields."""
    u = INT32.unsigned(i)
    u = u - ((u >> 1) & 0x55555555)
    u = (u & 0x33333333) + ((u >> 2) & 0x33333333)
    u = (u + (u >> 4)) & 0x0F0F0F0F
    u = u + (u >> 8)
    u = u + (u >> 16)
    return u & 0x3F


def highest_one_bit(i: int) -> int:
    """Value with only the highest one bit of ``i`` set (0 for 0)."""
    i = to_int32(i)
    i |= i >> 1
    i |= i >> 2
    i |= i >> 4
    i |= i >> 8
    i |= i >> 16
    return to_int32(i - urshift(i, 1))


def lowest_one_bit(i: int) -> int:
    """Value with only the lowest one bit of ``i`` set (0 for 0)."""
    i = to_int32(i)
    return to_int32(i & -i)


# ---------------------------------------------------------------------------
# Permutations
# ---------------------------------------------------------------------------

def rotate_left(i: int, distance: int) -> int:
    """Rotate left; any distance, negative means rotate right."""
    i = to_int32(i)
    return shl(i, distance) | urshift(i, -distance)


def rotate_right(i: int, distance: int) -> int:
    """Rotate right; any distance, negative means rotate left."""
    i = to_int32(i)
    return urshift(i, distance) | shl(i, -distance)


def reverse(i: int) -> int:
    """Reverse the order of all 32 bits."""
    u = INT32.unsigned(i)
    u = ((u & 0x55555555) << 1) | ((u >> 1) & 0x55555555)
    u = ((u & 0x33333333) << 2) | ((u >> 2) & 0x33333333)
    u = ((u & 0x0F0F0F0F) << 4) | ((u >> 4) & 0x0F0F0F0F)
    u = (u << 24) | ((u & 0xFF00) << 8) | ((u >> 8) & 0xFF00) | (u >> 24)
    return to_int32(u)


def reverse_bytes(i: int) -> int:
    """Reverse the order of the four bytes."""
    i = to_int32(i)
    return (
        urshift(i, 24)
        | ((i >> 8) & 0xFF00)
        | (shl(i, 8) & 0xFF0000)
        | shl(i, 24)
    )


# ---------------------------------------------------------------------------
# Sign, comparison, arithmetic
# ---------------------------------------------------------------------------

def signum(i: int) -> int:
    """-1, 0 or 1 without a conditional."""
    i = to_int32(i)
    return (i >> 31) | urshift(to_int32(-i), 31)


def compare(x: int, y: int) -> int:
    return -1 if x < y else (0 if x == y else 1)


def compare_unsigned(x: int, y: int) -> int:
    """Compare as unsigned by biasing both values with MIN_VALUE."""
    return compare(to_int32(x + MIN_VALUE), to_int32(y + MIN_VALUE))


def divide_unsigned(dividend: int, divisor: int) -> int:
    """Unsigned quotient, computed at double width.

    Branches: UDIV-ZERO, UDIV-NORMAL
    """
    if to_int32(divisor) == 0:                                    # UDIV-ZERO
        return UINT32.handle_div_zero()
    # UDIV-NORMAL
    return to_int32(to_unsigned_long(dividend) // to_unsigned_long(divisor))


def remainder_unsigned(dividend: int, divisor: int) -> int:
    """Unsigned remainder, computed at double width."""
    if to_int32(divisor) == 0:                                    # UDIV-ZERO
        return UINT32.handle_div_zero()
    return to_int32(to_unsigned_long(dividend) % to_unsigned_long(divisor))


def hash_code(value: int) -> int:
    return to_int32(value)


def int_sum(a: int, b: int) -> int:
    """Wrapping 32-bit addition."""
    return to_int32(a + b)


def int_max(a: int, b: int) -> int:
    return a if a >= b else b


def int_min(a: int, b: int) -> int:
    return a if a <= b else b
