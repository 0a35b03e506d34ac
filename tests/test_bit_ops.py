"""Unit tests for the 32-bit bit operations."""
from __future__ import annotations

import pytest

from bit_ops import (
    BYTES,
    MAX_VALUE,
    MIN_VALUE,
    SIZE,
    bit_count,
    compare,
    compare_unsigned,
    divide_unsigned,
    hash_code,
    highest_one_bit,
    int_max,
    int_min,
    int_sum,
    lowest_one_bit,
    number_of_leading_zeros,
    number_of_trailing_zeros,
    remainder_unsigned,
    reverse,
    reverse_bytes,
    rotate_left,
    rotate_right,
    shl,
    signum,
    to_int32,
    to_unsigned_long,
    truncdiv,
    truncmod,
    urshift,
)


class TestConstants:
    def test_range(self):
        assert MIN_VALUE == -(2**31)
        assert MAX_VALUE == 2**31 - 1

    def test_width(self):
        assert SIZE == 32
        assert BYTES == 4


class TestRegisterHelpers:
    def test_to_int32(self):
        assert to_int32(0x80000000) == MIN_VALUE
        assert to_int32(0xFFFFFFFF) == -1
        assert to_int32(2**32 + 5) == 5

    def test_to_unsigned_long(self):
        assert to_unsigned_long(-1) == 0xFFFFFFFF
        assert to_unsigned_long(MIN_VALUE) == 0x80000000
        assert to_unsigned_long(7) == 7

    def test_urshift_zero_fills(self):
        assert urshift(-1, 28) == 0xF
        assert urshift(MIN_VALUE, 31) == 1

    def test_urshift_distance_mod_32(self):
        assert urshift(-1, 32) == -1
        assert urshift(-1, 33) == MAX_VALUE

    def test_shl_drops_high_bits(self):
        assert shl(1, 31) == MIN_VALUE
        assert shl(3, 31) == MIN_VALUE
        assert shl(1, 32) == 1

    @pytest.mark.parametrize("a, b, q, r", [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (MIN_VALUE, 10, -214748364, -8),
    ])
    def test_truncating_division(self, a, b, q, r):
        assert truncdiv(a, b) == q
        assert truncmod(a, b) == r


class TestCounting:
    def test_leading_zeros_of_zero(self):
        """Branch: NLZ-ZERO"""
        assert number_of_leading_zeros(0) == 32

    @pytest.mark.parametrize("v, expected", [
        (1, 31), (2, 30), (0xFFFF, 16), (0x10000, 15), (MAX_VALUE, 1),
        (-1, 0), (MIN_VALUE, 0),
    ])
    def test_leading_zeros_scan(self, v, expected):
        """Branch: NLZ-SCAN"""
        assert number_of_leading_zeros(v) == expected

    def test_trailing_zeros_of_zero(self):
        """Branch: NTZ-ZERO"""
        assert number_of_trailing_zeros(0) == 32

    @pytest.mark.parametrize("v, expected", [
        (1, 0), (2, 1), (3, 0), (0x10000, 16), (MIN_VALUE, 31), (-1, 0), (-2, 1),
    ])
    def test_trailing_zeros_scan(self, v, expected):
        """Branch: NTZ-SCAN"""
        assert number_of_trailing_zeros(v) == expected

    def test_every_single_bit(self):
        for k in range(32):
            v = to_int32(1 << k)
            assert number_of_trailing_zeros(v) == k
            assert number_of_leading_zeros(v) == 31 - k
            assert bit_count(v) == 1

    def test_bit_count(self):
        assert bit_count(0) == 0
        assert bit_count(-1) == 32
        assert bit_count(0b1011) == 3
        assert bit_count(MIN_VALUE) == 1

    def test_highest_one_bit(self):
        assert highest_one_bit(0) == 0
        assert highest_one_bit(1) == 1
        assert highest_one_bit(100) == 64
        assert highest_one_bit(-1) == MIN_VALUE
        assert highest_one_bit(MAX_VALUE) == 1 << 30

    def test_lowest_one_bit(self):
        assert lowest_one_bit(0) == 0
        assert lowest_one_bit(12) == 4
        assert lowest_one_bit(MIN_VALUE) == MIN_VALUE
        assert lowest_one_bit(-1) == 1


class TestPermutations:
    def test_rotate_left_wraps_top_bit(self):
        assert rotate_left(MIN_VALUE, 1) == 1

    def test_rotate_right_wraps_low_bit(self):
        assert rotate_right(1, 1) == MIN_VALUE

    def test_rotate_negative_distance(self):
        assert rotate_left(1, -1) == rotate_right(1, 1)

    def test_rotate_distance_mod_32(self):
        assert rotate_left(0x12345678, 36) == rotate_left(0x12345678, 4)
        assert rotate_left(0x12345678, 0) == 0x12345678

    def test_rotate_by_nibble(self):
        assert rotate_left(0x12345678, 4) == 0x23456781

    def test_reverse(self):
        assert reverse(1) == MIN_VALUE
        assert reverse(0) == 0
        assert reverse(-1) == -1
        assert reverse(0x0000000F) == to_int32(0xF0000000)

    def test_reverse_bytes(self):
        assert reverse_bytes(0x12345678) == 0x78563412
        assert reverse_bytes(0x000000FF) == to_int32(0xFF000000)
        assert reverse_bytes(to_int32(0x80000000)) == 0x80


class TestSignAndComparison:
    @pytest.mark.parametrize("v, expected", [
        (0, 0), (5, 1), (-5, -1), (MIN_VALUE, -1), (MAX_VALUE, 1),
    ])
    def test_signum(self, v, expected):
        assert signum(v) == expected

    def test_compare(self):
        assert compare(1, 2) == -1
        assert compare(2, 2) == 0
        assert compare(3, 2) == 1

    def test_compare_unsigned_treats_negatives_as_large(self):
        assert compare_unsigned(-1, 1) == 1
        assert compare_unsigned(1, -1) == -1
        assert compare_unsigned(MIN_VALUE, MAX_VALUE) == 1
        assert compare_unsigned(-1, -1) == 0

    def test_hash_code_is_value(self):
        assert hash_code(42) == 42
        assert hash_code(MIN_VALUE) == MIN_VALUE

    def test_sum_wraps(self):
        assert int_sum(MAX_VALUE, 1) == MIN_VALUE
        assert int_sum(2, 3) == 5

    def test_max_min(self):
        assert int_max(-3, 4) == 4
        assert int_min(-3, 4) == -3


class TestUnsignedDivision:
    def test_divide_unsigned(self):
        """Branch: UDIV-NORMAL"""
        assert divide_unsigned(-1, 2) == MAX_VALUE
        assert divide_unsigned(10, 3) == 3
        assert divide_unsigned(MIN_VALUE, -1) == 0

    def test_remainder_unsigned(self):
        assert remainder_unsigned(-1, 10) == 5
        assert remainder_unsigned(10, 3) == 1
        assert remainder_unsigned(5, -1) == 5

    def test_divide_by_zero(self):
        """Branch: UDIV-ZERO"""
        with pytest.raises(ZeroDivisionError):
            divide_unsigned(5, 0)
        with pytest.raises(ZeroDivisionError):
            remainder_unsigned(5, 0)
