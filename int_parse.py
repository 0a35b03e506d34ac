"""Text to integer conversion in any radix from 2 to 36.

Radix policy: parsing is strict.  A radix outside [2, 36] raises
InvalidRadixError, unlike the formatter, which falls back to 10.

Every digit is accumulated into a *negative* running value
(``result = result * radix - digit``).  The negative range is one
larger than the positive one, so the single accumulation path reaches
MIN_VALUE without overflowing; the sign is applied at the end.
Overflow is detected before it happens: ``result < multmin`` before the
multiply, ``result < limit + digit`` before the subtraction.

Decision branches are annotated with their contract branch-IDs (see
contract.py BranchSpec).
"""
from __future__ import annotations

from bit_ops import to_int32, truncdiv
from bounds import Bounds, INT32, INT64, UINT32
from char_class import digit
from codec_errors import (
    EmptyInputError,
    IllegalSignError,
    InvalidRadixError,
    MalformedInputError,
    RangeExceededError,
)
from radix_digits import MAX_RADIX, MIN_RADIX

# Longest unsigned texts that cannot overflow a signed 32-bit parse:
# five digits in any radix (36**5 - 1 < 2**31), nine in decimal.
_SHORT_UNSIGNED_LENGTH = 5
_SHORT_UNSIGNED_DECIMAL_LENGTH = 9


def _check_radix(radix: int) -> None:
    """Branches: PARSE-RADIX-LOW, PARSE-RADIX-HIGH"""
    if radix < MIN_RADIX:                                         # PARSE-RADIX-LOW
        raise InvalidRadixError(
            radix, f"radix {radix} less than MIN_RADIX ({MIN_RADIX})"
        )
    if radix > MAX_RADIX:                                         # PARSE-RADIX-HIGH
        raise InvalidRadixError(
            radix, f"radix {radix} greater than MAX_RADIX ({MAX_RADIX})"
        )


def _parse(s: str, radix: int, domain: Bounds) -> int:
    """Negative-space accumulation for any signed fixed-width domain.

    Branches: PARSE-EMPTY, PARSE-NEGATIVE, PARSE-PLUS, PARSE-BAD-LEAD,
              PARSE-LONE-SIGN, PARSE-BAD-DIGIT, PARSE-OVERFLOW-MUL,
              PARSE-OVERFLOW-SUB, PARSE-OK
    """
    if s is None:
        raise MalformedInputError(None, "null")
    s = str(s)
    _check_radix(radix)

    length = len(s)
    if length == 0:                                               # PARSE-EMPTY
        raise EmptyInputError(s)

    result = 0
    negative = False
    i = 0
    limit = -domain.hi

    first_char = s[0]
    if first_char < "0":
        if first_char == "-":                                     # PARSE-NEGATIVE
            negative = True
            limit = domain.lo
        elif first_char != "+":                                   # PARSE-BAD-LEAD
            raise MalformedInputError(s)
        # PARSE-PLUS falls through with the default limit
        if length == 1:                                           # PARSE-LONE-SIGN
            raise MalformedInputError(s)
        i += 1

    multmin = truncdiv(limit, radix)
    while i < length:
        value = digit(s[i], radix)
        i += 1
        if value < 0:                                             # PARSE-BAD-DIGIT
            raise MalformedInputError(s)
        if result < multmin:                                      # PARSE-OVERFLOW-MUL
            raise MalformedInputError(s)
        result *= radix
        if result < limit + value:                                # PARSE-OVERFLOW-SUB
            raise MalformedInputError(s)
        result -= value

    # PARSE-OK
    return result if negative else -result


def parse_int(s: str, radix: int = 10) -> int:
    """Signed 32-bit value of ``s`` in ``radix``."""
    return _parse(s, radix, INT32)


def parse_long(s: str, radix: int = 10) -> int:
    """Signed 64-bit value of ``s`` in ``radix``."""
    return _parse(s, radix, INT64)


def parse_unsigned_int(s: str, radix: int = 10) -> int:
    """Unsigned 32-bit value of ``s``, returned as its signed bit pattern.

    ``parse_unsigned_int("4294967295") == -1``.

    Branches: UPARSE-EMPTY, UPARSE-MINUS, UPARSE-SHORT, UPARSE-WIDE,
              UPARSE-RANGE
    """
    if s is None:
        raise MalformedInputError(None, "null")
    s = str(s)

    length = len(s)
    if length == 0:                                               # UPARSE-EMPTY
        raise EmptyInputError(s)

    if s[0] == "-":                                               # UPARSE-MINUS
        raise IllegalSignError(s)

    if length <= _SHORT_UNSIGNED_LENGTH or (
        radix == 10 and length <= _SHORT_UNSIGNED_DECIMAL_LENGTH
    ):                                                            # UPARSE-SHORT
        return parse_int(s, radix)

    # UPARSE-WIDE
    ell = parse_long(s, radix)
    if ell & ~UINT32.hi != 0:                                     # UPARSE-RANGE
        raise RangeExceededError(s)
    return to_int32(ell)


def decode(nm: str) -> int:
    """Signed 32-bit value of a literal with an optional radix prefix.

    ``0x``/``0X``/``#`` select hex, a leading ``0`` followed by more
    digits selects octal; an optional sign may precede the prefix but
    never follow it.

    Branches: DECODE-EMPTY, DECODE-HEX, DECODE-OCTAL, DECODE-DECIMAL,
              DECODE-SIGN-AFTER-PREFIX, DECODE-MIN-VALUE
    """
    if nm is None:
        raise MalformedInputError(None, "null")
    nm = str(nm)

    radix = 10
    index = 0
    negative = False

    if len(nm) == 0:                                              # DECODE-EMPTY
        raise EmptyInputError(nm)

    first_char = nm[0]
    if first_char == "-":
        negative = True
        index += 1
    elif first_char == "+":
        index += 1

    if nm.startswith("0x", index) or nm.startswith("0X", index):  # DECODE-HEX
        index += 2
        radix = 16
    elif nm.startswith("#", index):                               # DECODE-HEX
        index += 1
        radix = 16
    elif nm.startswith("0", index) and len(nm) > 1 + index:       # DECODE-OCTAL
        index += 1
        radix = 8
    # otherwise DECODE-DECIMAL

    if nm.startswith("-", index) or nm.startswith("+", index):    # DECODE-SIGN-AFTER-PREFIX
        raise MalformedInputError(nm, "Sign character in wrong position")

    try:
        result = parse_int(nm[index:], radix)
        return -result if negative else result
    except MalformedInputError:
        # DECODE-MIN-VALUE: the magnitude of MIN_VALUE only parses with
        # its sign attached.
        constant = "-" + nm[index:] if negative else nm[index:]
        return parse_int(constant, radix)
