"""
Boxed signed 32-bit integer.

``Int32`` is an immutable value wrapping one integer in
[MIN_VALUE, MAX_VALUE].  Instances convert to the narrower and wider
numeric views and order by signed value.

The class also works as a facade: every formatting, parsing and bit
operation is reachable as a static method (``Int32.to_hex_string(255)``,
``Int32.parse_int("7f", 16)``), so callers holding the class need no
other import.
"""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import Mapping

import bit_ops
import int_format
import int_parse
from bounds import INT32
from codec_errors import NumberFormatError


@dataclass(frozen=True, order=True)
class Int32:
    """An immutable signed 32-bit value."""

    value: int

    MIN_VALUE = bit_ops.MIN_VALUE
    MAX_VALUE = bit_ops.MAX_VALUE
    SIZE = bit_ops.SIZE
    BYTES = bit_ops.BYTES

    def __post_init__(self) -> None:
        if not INT32.contains(self.value):
            raise OverflowError(
                f"{self.value} is outside [{INT32.lo}, {INT32.hi}]"
            )

    # -- numeric views ----------------------------------------------------

    def byte_value(self) -> int:
        """Low 8 bits, sign-extended."""
        b = self.value & 0xFF
        return b - 0x100 if b & 0x80 else b

    def short_value(self) -> int:
        """Low 16 bits, sign-extended."""
        s = self.value & 0xFFFF
        return s - 0x10000 if s & 0x8000 else s

    def int_value(self) -> int:
        return self.value

    def long_value(self) -> int:
        return self.value

    def float_value(self) -> float:
        """Nearest single-precision float."""
        return struct.unpack("f", struct.pack("f", self.value))[0]

    def double_value(self) -> float:
        return float(self.value)

    # -- comparison -------------------------------------------------------

    def compare_to(self, other: Int32) -> int:
        return bit_ops.compare(self.value, other.value)

    def hash_code(self) -> int:
        return bit_ops.hash_code(self.value)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return int_format.to_string(self.value)

    # -- construction -----------------------------------------------------

    @classmethod
    def value_of(cls, s: str | int, radix: int = 10) -> Int32:
        if isinstance(s, int):
            return cls(s)
        return cls(int_parse.parse_int(s, radix))

    @classmethod
    def decode(cls, nm: str) -> Int32:
        """Boxed value of a literal with an optional sign and radix prefix."""
        return cls(int_parse.decode(nm))

    # -- codec facade -----------------------------------------------------

    to_string = staticmethod(int_format.to_string)
    to_unsigned_string = staticmethod(int_format.to_unsigned_string)
    to_hex_string = staticmethod(int_format.to_hex_string)
    to_octal_string = staticmethod(int_format.to_octal_string)
    to_binary_string = staticmethod(int_format.to_binary_string)

    parse_int = staticmethod(int_parse.parse_int)
    parse_unsigned_int = staticmethod(int_parse.parse_unsigned_int)

    # -- bit facade -------------------------------------------------------

    number_of_leading_zeros = staticmethod(bit_ops.number_of_leading_zeros)
    number_of_trailing_zeros = staticmethod(bit_ops.number_of_trailing_zeros)
    bit_count = staticmethod(bit_ops.bit_count)
    highest_one_bit = staticmethod(bit_ops.highest_one_bit)
    lowest_one_bit = staticmethod(bit_ops.lowest_one_bit)
    rotate_left = staticmethod(bit_ops.rotate_left)
    rotate_right = staticmethod(bit_ops.rotate_right)
    reverse = staticmethod(bit_ops.reverse)
    reverse_bytes = staticmethod(bit_ops.reverse_bytes)
    signum = staticmethod(bit_ops.signum)
    compare = staticmethod(bit_ops.compare)
    compare_unsigned = staticmethod(bit_ops.compare_unsigned)
    to_unsigned_long = staticmethod(bit_ops.to_unsigned_long)
    divide_unsigned = staticmethod(bit_ops.divide_unsigned)
    remainder_unsigned = staticmethod(bit_ops.remainder_unsigned)
    sum = staticmethod(bit_ops.int_sum)
    max = staticmethod(bit_ops.int_max)
    min = staticmethod(bit_ops.int_min)


def integer_property(
    name: str,
    default: int | Int32 | None = None,
    environ: Mapping[str, str] | None = None,
) -> Int32 | None:
    """Decode the property ``name`` from ``environ`` (``os.environ`` by default).

    A missing, empty-named or undecodable property yields ``default``.
    """
    if isinstance(default, int):
        default = Int32(default)
    if not name:
        return default

    source = os.environ if environ is None else environ
    raw = source.get(name)
    if raw is None:
        return default
    try:
        return Int32.decode(raw)
    except NumberFormatError:
        return default
