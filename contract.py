"""Executable contract for the integer codec and the text search.

Each operation is described as a collection of:
- preconditions: what inputs must satisfy before the operation
- postconditions: what the output must satisfy, checked against an
  independent Python oracle (built-in ``int``/``format``, slicing)
- error conditions: what inputs must raise, and which exception
- algebraic properties: relationships between operations that must hold

The contract is machine-readable.  Validation tools iterate over it to
drive conformance tests and to search for counterexamples.

Calling conventions
-------------------
Every operation takes the argument tuple of its *domain*:

int32           (v,)
int32_radix     (v, radix)                  radix may be out of [2, 36]
int32_distance  (v, distance)
int32_pair      (a, b)
numeral         (s, radix)                  s is arbitrary text
literal         (s,)
text_search     (source, target, from_index)
text_region     (text, toffset, other, ooffset, length, ignore_case)

``Precondition.check(*args)``, ``Postcondition.check(*args, result)``,
``ErrorCondition.trigger(*args)`` and ``AlgebraicProperty.check(impl,
*args)``.  ``impl`` is the implementation named by the operation's
*subject*: the ``Int32`` facade for ``"codec"``, the ``Text`` class for
``"text"``.  Operations are looked up on it by name.
"""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Callable

from bounds import INT32, INT64, RADIX, UINT32
from codec_errors import (
    IllegalSignError,
    InvalidRadixError,
    MalformedInputError,
    RangeExceededError,
)

CODEC = "codec"
TEXT = "text"

_MASK = UINT32.hi


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Precondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    domain: str         # argument tuple the check takes after ``impl``
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationContract:
    name: str
    subject: str        # CODEC or TEXT
    domain: str
    preconditions: list[Precondition]
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class CodecContract:
    """Complete contract for the codec and the text search."""

    operations: dict[str, OperationContract]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    @property
    def all_error_conditions(self) -> list[tuple[str, ErrorCondition]]:
        out: list[tuple[str, ErrorCondition]] = []
        for name, op in self.operations.items():
            for ec in op.error_conditions:
                out.append((name, ec))
        return out

    @property
    def branch_ids(self) -> set[str]:
        return {b.id for b in self.branches}

    def subject_of(self, name: str) -> str:
        return self.operations[name].subject


# ---------------------------------------------------------------------------
# Oracles used inside the contract predicates
# ---------------------------------------------------------------------------

def signed32(u: int) -> int:
    """Signed reading of the low 32 bits of ``u``."""
    u &= _MASK
    return u - (1 << 32) if u & 0x80000000 else u


_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def radix_repr(n: int, radix: int) -> str:
    """Lower-case digits of ``n`` in ``radix``, with a leading ``-`` if negative."""
    magnitude = abs(n)
    out = []
    while True:
        magnitude, d = divmod(magnitude, radix)
        out.append(_DIGITS[d])
        if magnitude == 0:
            break
    if n < 0:
        out.append("-")
    return "".join(reversed(out))


def effective_radix(radix: int) -> int:
    return radix if RADIX.contains(radix) else 10


def magnitude_of(body: str, radix: int) -> int | None:
    """Value of an unsigned run of ASCII digits, or None.

    Checked symbol by symbol: ``int()`` alone would also take radix
    prefixes, underscores and surrounding whitespace.
    """
    allowed = _DIGITS[:radix]
    if body == "" or not all(c in allowed for c in body.lower()):
        return None
    return int(body, radix)


def oracle_parse(s: str, radix: int) -> int | None:
    """Signed value of an ASCII numeral, or None when it is not one."""
    body = s[1:] if s[:1] in ("-", "+") else s
    value = magnitude_of(body, radix)
    if value is None:
        return None
    value = -value if s[0] == "-" else value
    return value if INT32.contains(value) else None


def oracle_parse_unsigned(s: str, radix: int) -> int | None:
    value = magnitude_of(s[1:] if s[:1] == "+" else s, radix)
    if value is None or not UINT32.contains(value):
        return None
    return signed32(value)


def unsigned_overflows(s: str, radix: int) -> bool:
    """A well-formed unsigned numeral above 2**32 - 1 that 64 bits still hold."""
    value = magnitude_of(s[1:] if s[:1] == "+" else s, radix)
    return value is not None and UINT32.hi < value <= INT64.hi


def oracle_decode(s: str) -> int | None:
    negative = s[:1] == "-"
    body = s[1:] if s[:1] in ("-", "+") else s
    radix = 10
    if body[:2] in ("0x", "0X"):
        body, radix = body[2:], 16
    elif body[:1] == "#":
        body, radix = body[1:], 16
    elif body[:1] == "0" and len(body) > 1:
        body, radix = body[1:], 8
    value = magnitude_of(body, radix)
    if value is None:
        return None
    value = -value if negative else value
    return value if INT32.contains(value) else None


def oracle_index_of(source: tuple[int, ...], target: tuple[int, ...], from_index: int) -> int:
    n, m = len(source), len(target)
    if from_index >= n:
        return n if m == 0 else -1
    for i in range(max(from_index, 0), n - m + 1):
        if source[i:i + m] == target:
            return i
    return -1


def oracle_last_index_of(source: tuple[int, ...], target: tuple[int, ...], from_index: int) -> int:
    n, m = len(source), len(target)
    if from_index < 0:
        return -1
    for i in range(min(from_index, n - m), -1, -1):
        if source[i:i + m] == target:
            return i
    return -1


def _simple_upper(ch: str) -> str:
    for mapped in (ch.upper(), ch.title()):
        if len(mapped) == 1:
            return mapped
    return ch


def _simple_lower(ch: str) -> str:
    mapped = ch.lower()
    if len(mapped) == 1:
        return mapped
    if all(unicodedata.combining(m) for m in mapped[1:]):
        return mapped[0]
    return ch


def _fold_equal(c1: int, c2: int) -> bool:
    if c1 == c2:
        return True
    u1, u2 = _simple_upper(chr(c1)), _simple_upper(chr(c2))
    if u1 == u2:
        return True
    return _simple_lower(u1) == _simple_lower(u2)


def oracle_region_matches(
    ta: tuple[int, ...], toffset: int, pa: tuple[int, ...], ooffset: int,
    length: int, ignore_case: bool,
) -> bool:
    if toffset < 0 or ooffset < 0:
        return False
    if toffset + length > len(ta) or ooffset + length > len(pa):
        return False
    left = ta[toffset:toffset + max(length, 0)]
    right = pa[ooffset:ooffset + max(length, 0)]
    if not ignore_case:
        return left == right
    return all(_fold_equal(c1, c2) for c1, c2 in zip(left, right))


def _units(text) -> tuple[int, ...]:
    return tuple(text.chars())


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract() -> CodecContract:
    """Construct the full contract of the codec and the text search."""

    int32_inputs = Precondition(
        "input_in_int32", "Input is a signed 32-bit value",
        lambda v, *_: INT32.contains(v),
    )
    pair_inputs = Precondition(
        "inputs_in_int32", "Both inputs are signed 32-bit values",
        lambda a, b: INT32.contains(a) and INT32.contains(b),
    )
    text_input = Precondition(
        "input_is_text", "Numeral is a string",
        lambda s, *_: isinstance(s, str),
    )

    invalid_radix = ErrorCondition(
        "invalid_radix", "InvalidRadixError for a radix outside [2, 36]",
        lambda s, r: not RADIX.contains(r),
        InvalidRadixError,
    )

    # ---------------------------------------------------------- formatting
    to_string_contract = OperationContract(
        name="to_string",
        subject=CODEC,
        domain="int32_radix",
        preconditions=[int32_inputs],
        postconditions=[
            Postcondition(
                "matches_oracle",
                "Signed digits in the radix (10 when the radix is invalid)",
                lambda v, r, result: result == radix_repr(v, effective_radix(r)),
            ),
            Postcondition(
                "lower_case", "Letters are lower case",
                lambda v, r, result: result == result.lower(),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "round_trip", "parse_int(to_string(v, r), r) == v for valid r",
                "int32_radix",
                lambda codec, v, r: (
                    codec.parse_int(codec.to_string(v, r), r) == v
                    if RADIX.contains(r) else True
                ),
            ),
            AlgebraicProperty(
                "radix_fallback", "an invalid radix formats as decimal",
                "int32_radix",
                lambda codec, v, r: (
                    codec.to_string(v, r) == codec.to_string(v, 10)
                    if not RADIX.contains(r) else True
                ),
            ),
            AlgebraicProperty(
                "decimal_default", "to_string(v) == to_string(v, 10)",
                "int32",
                lambda codec, v: codec.to_string(v) == codec.to_string(v, 10),
            ),
        ],
    )

    to_unsigned_string_contract = OperationContract(
        name="to_unsigned_string",
        subject=CODEC,
        domain="int32_radix",
        preconditions=[int32_inputs],
        postconditions=[
            Postcondition(
                "matches_oracle",
                "Digits of the zero-extended value",
                lambda v, r, result: result == radix_repr(v & _MASK, effective_radix(r)),
            ),
            Postcondition(
                "never_signed", "No sign character",
                lambda v, r, result: not result.startswith("-"),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "round_trip",
                "parse_unsigned_int(to_unsigned_string(v, r), r) == v for valid r",
                "int32_radix",
                lambda codec, v, r: (
                    codec.parse_unsigned_int(codec.to_unsigned_string(v, r), r) == v
                    if RADIX.contains(r) else True
                ),
            ),
            AlgebraicProperty(
                "non_negative_agrees", "to_unsigned_string(v) == to_string(v) for v >= 0",
                "int32",
                lambda codec, v: (
                    codec.to_unsigned_string(v) == codec.to_string(v) if v >= 0 else True
                ),
            ),
        ],
    )

    def shift_contract(name: str, radix: int, spec: str) -> OperationContract:
        return OperationContract(
            name=name,
            subject=CODEC,
            domain="int32",
            preconditions=[int32_inputs],
            postconditions=[
                Postcondition(
                    "matches_oracle", f"format(v & 0xFFFFFFFF, {spec!r})",
                    lambda v, result: result == format(v & _MASK, spec),
                ),
            ],
            error_conditions=[],
            properties=[
                AlgebraicProperty(
                    "agrees_with_unsigned_string",
                    f"{name}(v) == to_unsigned_string(v, {radix})",
                    "int32",
                    lambda codec, v: (
                        getattr(codec, name)(v) == codec.to_unsigned_string(v, radix)
                    ),
                ),
                AlgebraicProperty(
                    "parses_back", f"parse_unsigned_int({name}(v), {radix}) == v",
                    "int32",
                    lambda codec, v: (
                        codec.parse_unsigned_int(getattr(codec, name)(v), radix) == v
                    ),
                ),
            ],
        )

    # ------------------------------------------------------------- parsing
    parse_int_contract = OperationContract(
        name="parse_int",
        subject=CODEC,
        domain="numeral",
        preconditions=[text_input],
        postconditions=[
            Postcondition(
                "in_int32", "Result is a signed 32-bit value",
                lambda s, r, result: INT32.contains(result),
            ),
            Postcondition(
                "matches_oracle", "ASCII numerals agree with int(s, radix)",
                lambda s, r, result: (
                    result == oracle_parse(s, r) if s.isascii() else True
                ),
            ),
        ],
        error_conditions=[
            invalid_radix,
            ErrorCondition(
                "malformed",
                "MalformedInputError for text that is not an in-range numeral",
                lambda s, r: (
                    RADIX.contains(r) and s.isascii() and oracle_parse(s, r) is None
                ),
                MalformedInputError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "sign_symmetry", "parse_int('-' + t) == -parse_int(t) below MAX_VALUE",
                "int32_radix",
                lambda codec, v, r: (
                    codec.parse_int("-" + codec.to_string(v, r), r) == -v
                    if RADIX.contains(r) and v >= 0 else True
                ),
            ),
            AlgebraicProperty(
                "plus_sign_ignored", "parse_int('+' + t) == parse_int(t) for v >= 0",
                "int32_radix",
                lambda codec, v, r: (
                    codec.parse_int("+" + codec.to_string(v, r), r) == v
                    if RADIX.contains(r) and v >= 0 else True
                ),
            ),
        ],
    )

    parse_unsigned_int_contract = OperationContract(
        name="parse_unsigned_int",
        subject=CODEC,
        domain="numeral",
        preconditions=[text_input],
        postconditions=[
            Postcondition(
                "in_int32", "Result is the signed reading of the unsigned value",
                lambda s, r, result: INT32.contains(result),
            ),
            Postcondition(
                "matches_oracle", "ASCII numerals agree with int(s, radix) mod 2**32",
                lambda s, r, result: (
                    result == oracle_parse_unsigned(s, r) if s.isascii() else True
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "invalid_radix",
                "InvalidRadixError for a radix outside [2, 36] once the sign is checked",
                lambda s, r: s != "" and not s.startswith("-") and not RADIX.contains(r),
                InvalidRadixError,
            ),
            ErrorCondition(
                "leading_minus", "IllegalSignError for a leading '-'",
                lambda s, r: s.startswith("-"),
                IllegalSignError,
            ),
            ErrorCondition(
                "range_exceeded", "RangeExceededError above 2**32 - 1",
                lambda s, r: RADIX.contains(r) and unsigned_overflows(s, r),
                RangeExceededError,
            ),
            ErrorCondition(
                "malformed",
                "MalformedInputError for text that is not an unsigned numeral",
                lambda s, r: s == "" or (
                    RADIX.contains(r)
                    and s.isascii()
                    and not s.startswith("-")
                    and oracle_parse_unsigned(s, r) is None
                    and not unsigned_overflows(s, r)
                ),
                MalformedInputError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "agrees_with_parse_int", "parse_unsigned_int(t) == parse_int(t) for v >= 0",
                "int32_radix",
                lambda codec, v, r: (
                    codec.parse_unsigned_int(codec.to_string(v, r), r) == v
                    if RADIX.contains(r) and v >= 0 else True
                ),
            ),
        ],
    )

    decode_contract = OperationContract(
        name="decode",
        subject=CODEC,
        domain="literal",
        preconditions=[text_input],
        postconditions=[
            Postcondition(
                "matches_oracle", "ASCII literals agree with the prefix rules",
                lambda s, result: (
                    int(result) == oracle_decode(s) if s.isascii() else True
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "malformed", "MalformedInputError for anything but a prefixed numeral",
                lambda s: s.isascii() and oracle_decode(s) is None,
                MalformedInputError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "decimal_literal", "decode(to_string(v)) == v",
                "int32",
                lambda codec, v: int(codec.decode(codec.to_string(v))) == v,
            ),
            AlgebraicProperty(
                "signed_hex_literal", "decode('-#' + hex(|v|)) == v, MIN_VALUE included",
                "int32",
                lambda codec, v: int(
                    codec.decode(("-" if v < 0 else "") + "#" + format(abs(v), "x"))
                ) == v,
            ),
            AlgebraicProperty(
                "octal_literal", "decode('0' + octal) == v for v >= 0",
                "int32",
                lambda codec, v: (
                    int(codec.decode("0" + codec.to_octal_string(v))) == v
                    if v >= 0 else True
                ),
            ),
        ],
    )

    # ------------------------------------------------------------ bit ops
    def unary_bit_contract(
        name: str, description: str, oracle: Callable[[int], int],
        properties: list[AlgebraicProperty],
    ) -> OperationContract:
        return OperationContract(
            name=name,
            subject=CODEC,
            domain="int32",
            preconditions=[int32_inputs],
            postconditions=[
                Postcondition(
                    "matches_oracle", description,
                    lambda v, result: result == oracle(v),
                ),
            ],
            error_conditions=[],
            properties=properties,
        )

    nlz_contract = unary_bit_contract(
        "number_of_leading_zeros", "32 - bit_length of the unsigned pattern",
        lambda v: 32 - (v & _MASK).bit_length(),
        [
            AlgebraicProperty(
                "bounded_by_width", "0 <= nlz(v) <= 32",
                "int32",
                lambda codec, v: 0 <= codec.number_of_leading_zeros(v) <= 32,
            ),
            AlgebraicProperty(
                "agrees_with_highest_one_bit",
                "nlz(v) == nlz(highest_one_bit(v))",
                "int32",
                lambda codec, v: (
                    codec.number_of_leading_zeros(v)
                    == codec.number_of_leading_zeros(codec.highest_one_bit(v))
                ),
            ),
        ],
    )

    ntz_contract = unary_bit_contract(
        "number_of_trailing_zeros", "Index of the lowest set bit (32 for 0)",
        lambda v: 32 if v == 0 else ((v & _MASK) & -(v & _MASK)).bit_length() - 1,
        [
            AlgebraicProperty(
                "agrees_with_lowest_one_bit",
                "ntz(v) == ntz(lowest_one_bit(v))",
                "int32",
                lambda codec, v: (
                    codec.number_of_trailing_zeros(v)
                    == codec.number_of_trailing_zeros(codec.lowest_one_bit(v))
                ),
            ),
            AlgebraicProperty(
                "mirrors_leading_zeros", "ntz(v) == nlz(reverse(v))",
                "int32",
                lambda codec, v: (
                    codec.number_of_trailing_zeros(v)
                    == codec.number_of_leading_zeros(codec.reverse(v))
                ),
            ),
        ],
    )

    bit_count_contract = unary_bit_contract(
        "bit_count", "Number of one bits in the unsigned pattern",
        lambda v: bin(v & _MASK).count("1"),
        [
            AlgebraicProperty(
                "complement", "bit_count(v) + bit_count(~v) == 32",
                "int32",
                lambda codec, v: codec.bit_count(v) + codec.bit_count(~v) == 32,
            ),
        ],
    )

    reverse_contract = unary_bit_contract(
        "reverse", "Bits of the 32-bit pattern in reverse order",
        lambda v: signed32(int(format(v & _MASK, "032b")[::-1], 2)),
        [
            AlgebraicProperty(
                "involution", "reverse(reverse(v)) == v",
                "int32",
                lambda codec, v: codec.reverse(codec.reverse(v)) == v,
            ),
            AlgebraicProperty(
                "preserves_bit_count", "bit_count(reverse(v)) == bit_count(v)",
                "int32",
                lambda codec, v: codec.bit_count(codec.reverse(v)) == codec.bit_count(v),
            ),
        ],
    )

    reverse_bytes_contract = unary_bit_contract(
        "reverse_bytes", "Bytes of the 32-bit pattern in reverse order",
        lambda v: signed32(int.from_bytes((v & _MASK).to_bytes(4, "big"), "little")),
        [
            AlgebraicProperty(
                "involution", "reverse_bytes(reverse_bytes(v)) == v",
                "int32",
                lambda codec, v: codec.reverse_bytes(codec.reverse_bytes(v)) == v,
            ),
        ],
    )

    signum_contract = unary_bit_contract(
        "signum", "-1, 0 or 1 by sign",
        lambda v: (v > 0) - (v < 0),
        [],
    )

    highest_one_bit_contract = unary_bit_contract(
        "highest_one_bit", "Only the highest set bit kept",
        lambda v: 0 if v == 0 else signed32(1 << ((v & _MASK).bit_length() - 1)),
        [
            AlgebraicProperty(
                "single_bit", "highest_one_bit(v) has at most one bit set",
                "int32",
                lambda codec, v: codec.bit_count(codec.highest_one_bit(v)) == (v != 0),
            ),
        ],
    )

    lowest_one_bit_contract = unary_bit_contract(
        "lowest_one_bit", "Only the lowest set bit kept",
        lambda v: signed32((v & _MASK) & -(v & _MASK)),
        [
            AlgebraicProperty(
                "single_bit", "lowest_one_bit(v) has at most one bit set",
                "int32",
                lambda codec, v: codec.bit_count(codec.lowest_one_bit(v)) == (v != 0),
            ),
        ],
    )

    def rotation(v: int, d: int) -> int:
        k = d % 32
        u = v & _MASK
        return signed32((u << k) | (u >> (32 - k)))

    rotate_left_contract = OperationContract(
        name="rotate_left",
        subject=CODEC,
        domain="int32_distance",
        preconditions=[int32_inputs],
        postconditions=[
            Postcondition(
                "matches_oracle", "Rotation by distance mod 32",
                lambda v, d, result: result == rotation(v, d),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "inverse", "rotate_right(rotate_left(v, d), d) == v",
                "int32_distance",
                lambda codec, v, d: codec.rotate_right(codec.rotate_left(v, d), d) == v,
            ),
            AlgebraicProperty(
                "distance_mod_32", "rotate_left(v, d) == rotate_left(v, d + 32)",
                "int32_distance",
                lambda codec, v, d: codec.rotate_left(v, d) == codec.rotate_left(v, d + 32),
            ),
            AlgebraicProperty(
                "negative_distance", "rotate_left(v, -d) == rotate_right(v, d)",
                "int32_distance",
                lambda codec, v, d: codec.rotate_left(v, -d) == codec.rotate_right(v, d),
            ),
        ],
    )

    rotate_right_contract = OperationContract(
        name="rotate_right",
        subject=CODEC,
        domain="int32_distance",
        preconditions=[int32_inputs],
        postconditions=[
            Postcondition(
                "matches_oracle", "Rotation by -distance mod 32",
                lambda v, d, result: result == rotation(v, -d),
            ),
        ],
        error_conditions=[],
        properties=[],
    )

    compare_unsigned_contract = OperationContract(
        name="compare_unsigned",
        subject=CODEC,
        domain="int32_pair",
        preconditions=[pair_inputs],
        postconditions=[
            Postcondition(
                "matches_oracle", "Sign of the unsigned difference",
                lambda a, b, result: result == (
                    ((a & _MASK) > (b & _MASK)) - ((a & _MASK) < (b & _MASK))
                ),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "antisymmetry", "compare_unsigned(a, b) == -compare_unsigned(b, a)",
                "int32_pair",
                lambda codec, a, b: (
                    codec.compare_unsigned(a, b) == -codec.compare_unsigned(b, a)
                ),
            ),
        ],
    )

    nonzero_divisor = ErrorCondition(
        "div_by_zero_error", "ZeroDivisionError when the divisor is zero",
        lambda a, b: b == 0,
        ZeroDivisionError,
    )

    divide_unsigned_contract = OperationContract(
        name="divide_unsigned",
        subject=CODEC,
        domain="int32_pair",
        preconditions=[pair_inputs],
        postconditions=[
            Postcondition(
                "matches_oracle", "Floor quotient of the unsigned values",
                lambda a, b, result: result == signed32((a & _MASK) // (b & _MASK)),
            ),
        ],
        error_conditions=[nonzero_divisor],
        properties=[
            AlgebraicProperty(
                "division_identity",
                "divide_unsigned(a, b) * b + remainder_unsigned(a, b) == a (mod 2**32)",
                "int32_pair",
                lambda codec, a, b: b == 0 or signed32(
                    codec.divide_unsigned(a, b) * b + codec.remainder_unsigned(a, b)
                ) == a,
            ),
        ],
    )

    remainder_unsigned_contract = OperationContract(
        name="remainder_unsigned",
        subject=CODEC,
        domain="int32_pair",
        preconditions=[pair_inputs],
        postconditions=[
            Postcondition(
                "matches_oracle", "Remainder of the unsigned values",
                lambda a, b, result: result == signed32((a & _MASK) % (b & _MASK)),
            ),
        ],
        error_conditions=[nonzero_divisor],
        properties=[
            AlgebraicProperty(
                "below_divisor", "remainder_unsigned(a, b) <u b",
                "int32_pair",
                lambda codec, a, b: b == 0 or codec.compare_unsigned(
                    codec.remainder_unsigned(a, b), b
                ) < 0,
            ),
        ],
    )

    # -------------------------------------------------------------- search
    index_of_contract = OperationContract(
        name="index_of",
        subject=TEXT,
        domain="text_search",
        preconditions=[],
        postconditions=[
            Postcondition(
                "matches_oracle", "First match by brute-force slicing",
                lambda s, t, f, result: result == oracle_index_of(_units(s), _units(t), f),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "match_is_real", "a reported match really is the target",
                "text_search",
                lambda text, s, t, f: (
                    (i := s.index_of(t, f)) == -1
                    or s.substring(i, i + len(t)).equals(t)
                ),
            ),
            AlgebraicProperty(
                "agrees_with_last_index_of",
                "last_index_of(t, index_of(t, f)) == index_of(t, f)",
                "text_search",
                lambda text, s, t, f: (
                    (i := s.index_of(t, f)) == -1 or s.last_index_of(t, i) == i
                ),
            ),
        ],
    )

    last_index_of_contract = OperationContract(
        name="last_index_of",
        subject=TEXT,
        domain="text_search",
        preconditions=[],
        postconditions=[
            Postcondition(
                "matches_oracle", "Last match by brute-force slicing",
                lambda s, t, f, result: (
                    result == oracle_last_index_of(_units(s), _units(t), f)
                ),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "agrees_with_index_of",
                "index_of(t, last_index_of(t, f)) == last_index_of(t, f)",
                "text_search",
                lambda text, s, t, f: (
                    (j := s.last_index_of(t, f)) == -1 or s.index_of(t, j) == j
                ),
            ),
        ],
    )

    region_matches_contract = OperationContract(
        name="region_matches",
        subject=TEXT,
        domain="text_region",
        preconditions=[],
        postconditions=[
            Postcondition(
                "matches_oracle", "Unit-by-unit comparison with upper/lower folding",
                lambda ta, to, pa, po, n, ic, result: result == oracle_region_matches(
                    _units(ta), to, _units(pa), po, n, ic
                ),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "symmetric", "swapping the two regions gives the same answer",
                "text_region",
                lambda text, ta, to, pa, po, n, ic: (
                    ta.region_matches(to, pa, po, n, ic)
                    == pa.region_matches(po, ta, to, n, ic)
                ),
            ),
            AlgebraicProperty(
                "case_sensitive_implies_insensitive",
                "an exact region match also matches ignoring case",
                "text_region",
                lambda text, ta, to, pa, po, n, ic: (
                    not ta.region_matches(to, pa, po, n, False)
                    or ta.region_matches(to, pa, po, n, True)
                ),
            ),
        ],
    )

    operations = {
        op.name: op
        for op in (
            to_string_contract,
            to_unsigned_string_contract,
            shift_contract("to_hex_string", 16, "x"),
            shift_contract("to_octal_string", 8, "o"),
            shift_contract("to_binary_string", 2, "b"),
            parse_int_contract,
            parse_unsigned_int_contract,
            decode_contract,
            nlz_contract,
            ntz_contract,
            bit_count_contract,
            reverse_contract,
            reverse_bytes_contract,
            signum_contract,
            highest_one_bit_contract,
            lowest_one_bit_contract,
            rotate_left_contract,
            rotate_right_contract,
            compare_unsigned_contract,
            divide_unsigned_contract,
            remainder_unsigned_contract,
            index_of_contract,
            last_index_of_contract,
            region_matches_contract,
        )
    }

    return CodecContract(operations=operations, branches=_BRANCHES)


# ---------------------------------------------------------------------------
# Branch map
# ---------------------------------------------------------------------------

_BRANCHES = [
    # -- formatting
    BranchSpec("FMT-RADIX-DEFAULT", "Invalid radix falls back to 10",
               "radix < 2 or radix > 36", "to_string"),
    BranchSpec("FMT-DECIMAL", "Radix 10 takes the table-driven path",
               "radix == 10", "to_string"),
    BranchSpec("FMT-RADIX", "Any other radix takes the generic path",
               "radix != 10", "to_string"),
    BranchSpec("FMT-NEGATIVE", "Sign prepended for negative input",
               "i < 0", "_format_negative_space"),
    BranchSpec("FMT-NON-NEGATIVE", "Non-negative input negated before digit extraction",
               "i >= 0", "_format_negative_space"),
    BranchSpec("FMT-DEC-MIN-VALUE", "MIN_VALUE returned as a literal",
               "i == MIN_VALUE", "_to_decimal_string"),
    BranchSpec("FMT-DEC-SIZED", "Buffer sized by the size table",
               "i != MIN_VALUE", "_to_decimal_string"),
    BranchSpec("DEC-TWO-DIGITS", "Two digits per division by 100",
               "i >= 65536", "get_chars"),
    BranchSpec("DEC-ONE-DIGIT", "One digit per multiply-shift by 52429",
               "i < 65536", "get_chars"),
    BranchSpec("SHIFT-ZERO", "Zero still produces one digit",
               "val == 0", "_to_unsigned_string_shift"),
    BranchSpec("SHIFT-DIGITS", "Digits by mask and shift",
               "val != 0", "_to_unsigned_string_shift"),
    # -- parsing
    BranchSpec("PARSE-RADIX-LOW", "Radix below 2 rejected",
               "radix < 2", "parse_int"),
    BranchSpec("PARSE-RADIX-HIGH", "Radix above 36 rejected",
               "radix > 36", "parse_int"),
    BranchSpec("PARSE-EMPTY", "Empty text rejected",
               "len(s) == 0", "parse_int"),
    BranchSpec("PARSE-NEGATIVE", "Leading '-' selects the MIN_VALUE limit",
               "s[0] == '-'", "parse_int"),
    BranchSpec("PARSE-PLUS", "Leading '+' accepted",
               "s[0] == '+'", "parse_int"),
    BranchSpec("PARSE-BAD-LEAD", "Other leading char below '0' rejected",
               "s[0] < '0' and s[0] not in '+-'", "parse_int"),
    BranchSpec("PARSE-LONE-SIGN", "Sign with no digits rejected",
               "s in ('+', '-')", "parse_int"),
    BranchSpec("PARSE-BAD-DIGIT", "Character not a digit in radix",
               "digit(c, radix) < 0", "parse_int"),
    BranchSpec("PARSE-OVERFLOW-MUL", "Multiplication would overflow",
               "result < multmin", "parse_int"),
    BranchSpec("PARSE-OVERFLOW-SUB", "Subtraction would overflow",
               "result * radix < limit + digit", "parse_int"),
    BranchSpec("PARSE-OK", "Sign applied to the negative accumulator",
               "all digits consumed", "parse_int"),
    BranchSpec("UPARSE-EMPTY", "Empty text rejected",
               "len(s) == 0", "parse_unsigned_int"),
    BranchSpec("UPARSE-MINUS", "Leading '-' rejected",
               "s[0] == '-'", "parse_unsigned_int"),
    BranchSpec("UPARSE-SHORT", "Short text delegated to the signed parse",
               "len(s) <= 5 or (radix == 10 and len(s) <= 9)", "parse_unsigned_int"),
    BranchSpec("UPARSE-WIDE", "Long text parsed at 64 bits",
               "otherwise", "parse_unsigned_int"),
    BranchSpec("UPARSE-RANGE", "64-bit result wider than 32 bits rejected",
               "value >> 32 != 0", "parse_unsigned_int"),
    BranchSpec("DECODE-EMPTY", "Empty literal rejected",
               "len(nm) == 0", "decode"),
    BranchSpec("DECODE-HEX", "'0x', '0X' or '#' prefix",
               "prefix in ('0x', '0X', '#')", "decode"),
    BranchSpec("DECODE-OCTAL", "Leading '0' followed by more digits",
               "nm[index] == '0' and len(nm) > index + 1", "decode"),
    BranchSpec("DECODE-DECIMAL", "No prefix",
               "otherwise", "decode"),
    BranchSpec("DECODE-SIGN-AFTER-PREFIX", "Sign after the prefix rejected",
               "nm[index] in '+-'", "decode"),
    BranchSpec("DECODE-MIN-VALUE", "Magnitude of MIN_VALUE retried with its sign",
               "parse_int(body) overflowed", "decode"),
    # -- bit ops
    BranchSpec("NLZ-ZERO", "Zero has 32 leading zeros",
               "i == 0", "number_of_leading_zeros"),
    BranchSpec("NLZ-SCAN", "Binary search for the highest bit",
               "i != 0", "number_of_leading_zeros"),
    BranchSpec("NTZ-ZERO", "Zero has 32 trailing zeros",
               "i == 0", "number_of_trailing_zeros"),
    BranchSpec("NTZ-SCAN", "Binary search for the lowest bit",
               "i != 0", "number_of_trailing_zeros"),
    BranchSpec("UDIV-ZERO", "Unsigned division by zero raises",
               "divisor == 0", "divide_unsigned"),
    BranchSpec("UDIV-NORMAL", "Quotient at double width",
               "divisor != 0", "divide_unsigned"),
    # -- text construction
    BranchSpec("CTOR-NEGATIVE-OFFSET", "Negative offset rejected",
               "offset < 0", "Text.from_chars"),
    BranchSpec("CTOR-EMPTY-RANGE", "Zero count yields the empty text",
               "count == 0 and offset <= len", "Text.from_chars"),
    BranchSpec("CTOR-OUT-OF-RANGE", "Range past the end rejected",
               "offset > len - count", "Text.from_chars"),
    BranchSpec("CTOR-COPY", "Units copied into a new buffer",
               "valid range", "Text.from_chars"),
    BranchSpec("CP-BMP", "Basic-plane code point stored as one unit",
               "cp >> 16 == 0", "Text.from_code_points"),
    BranchSpec("CP-SUPPLEMENTARY", "Supplementary code point stored as a pair",
               "0x10000 <= cp <= 0x10FFFF", "Text.from_code_points"),
    BranchSpec("CP-INVALID", "Non-code-point rejected",
               "cp < 0 or cp > 0x10FFFF", "Text.from_code_points"),
    BranchSpec("ACCESS-OUT-OF-RANGE", "Index outside the buffer rejected",
               "index < 0 or index >= len", "Text.char_at"),
    BranchSpec("SUB-BEGIN-NEGATIVE", "Negative begin rejected",
               "begin < 0", "Text.substring"),
    BranchSpec("SUB-END-PAST-LENGTH", "End past the length rejected",
               "end > len", "Text.substring"),
    BranchSpec("SUB-INVERTED", "End before begin rejected",
               "end < begin", "Text.substring"),
    BranchSpec("SUB-WHOLE", "Full range returns the same text",
               "begin == 0 and end == len", "Text.substring"),
    BranchSpec("SUB-COPY", "Proper range copies",
               "otherwise", "Text.substring"),
    BranchSpec("SPLIT-FAST", "Single literal character split by char search",
               "regex is one non-meta char or an escaped non-alnum", "Text.split"),
    BranchSpec("SPLIT-REGEX", "Everything else through the regex engine",
               "otherwise", "Text.split"),
    BranchSpec("SPLIT-NO-MATCH", "No separator returns the text itself",
               "off == 0", "Text.split"),
    BranchSpec("SPLIT-LIMIT", "Positive limit keeps the remainder whole",
               "limit > 0 and len(pieces) == limit - 1", "Text.split"),
    BranchSpec("SPLIT-TRIM-TRAILING", "Zero limit drops trailing empty pieces",
               "limit == 0", "Text.split"),
    # -- search
    BranchSpec("SEARCH-FROM-PAST-END", "Start at or past the end",
               "from_index >= source_count", "index_of"),
    BranchSpec("SEARCH-EMPTY-TARGET", "Empty target found at from_index",
               "target_count == 0", "index_of"),
    BranchSpec("SEARCH-SKIP", "Skip to the next occurrence of the first unit",
               "source[i] != first", "index_of"),
    BranchSpec("SEARCH-VERIFY-MISMATCH", "Candidate fails verification",
               "source[j] != target[k]", "index_of"),
    BranchSpec("SEARCH-FOUND", "Whole target verified",
               "j == end", "index_of"),
    BranchSpec("SEARCH-NOT-FOUND", "No candidate left",
               "i > last_start", "index_of"),
    BranchSpec("RSEARCH-NEGATIVE-FROM", "Negative start finds nothing",
               "from_index < 0", "last_index_of"),
    BranchSpec("RSEARCH-EMPTY-TARGET", "Empty target found at clamped from_index",
               "target_count == 0", "last_index_of"),
    BranchSpec("RSEARCH-FOUND", "Whole target verified backwards",
               "j == start", "last_index_of"),
    BranchSpec("RSEARCH-NOT-FOUND", "No candidate left",
               "i < lowest", "last_index_of"),
    BranchSpec("CHAR-BMP", "Basic-plane char compared unit by unit",
               "ch < 0x10000", "index_of_char"),
    BranchSpec("CHAR-SUPPLEMENTARY", "Supplementary char matched as a pair",
               "ch >= 0x10000", "index_of_char"),
    BranchSpec("REGION-OUT-OF-RANGE", "Bad offsets fail closed",
               "offset < 0 or offset > len - length", "region_matches"),
    BranchSpec("REGION-EXACT", "Units equal",
               "c1 == c2", "region_matches"),
    BranchSpec("REGION-UPPER-FOLD", "Units equal after upper-casing",
               "upper(c1) == upper(c2)", "region_matches"),
    BranchSpec("REGION-LOWER-FOLD", "Units equal after upper- then lower-casing",
               "lower(upper(c1)) == lower(upper(c2))", "region_matches"),
    BranchSpec("REGION-MISMATCH", "Units differ under every fold",
               "otherwise", "region_matches"),
]
