"""
Fixed-width value domains.

Every integer the codec touches lives in one of a handful of domains:
the signed 32-bit range, its unsigned reinterpretation, the 64-bit
ranges used by the wide paths, and the radix range [2, 36].  A Bounds
knows its interval and what to do when a raw Python integer escapes it.

Python integers never overflow, so two's-complement behaviour has to be
applied explicitly: WRAP reproduces the modular arithmetic of a machine
register, ERROR rejects values that are not representable at all.
Domains whose width is a power of two are registers and also expose
their bit count, mask and unsigned view.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class OverflowStrategy(Enum):
    """What to do when a raw value falls outside the bounds."""

    WRAP = auto()        # Reduce modulo the width (two's complement)
    ERROR = auto()       # Raise an OverflowError


class DivisionByZeroStrategy(Enum):
    """What to do on division by zero."""

    ERROR = auto()       # Raise ZeroDivisionError
    RETURN_ZERO = auto() # Return 0 (total function)


@dataclass(frozen=True)
class Bounds:
    """
    An integer domain [lo, hi] with explicit overflow semantics.
    """

    lo: int
    hi: int
    overflow: OverflowStrategy = OverflowStrategy.ERROR
    div_zero: DivisionByZeroStrategy = DivisionByZeroStrategy.ERROR

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    @property
    def is_register(self) -> bool:
        return self.width & (self.width - 1) == 0

    @property
    def bits(self) -> int:
        """Register size in bits; only defined for power-of-two widths."""
        if not self.is_register:
            raise ValueError(f"[{self.lo}, {self.hi}] is not a register domain")
        return self.width.bit_length() - 1

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def unsigned(self, value: int) -> int:
        """The bit pattern of ``value`` read as a non-negative integer."""
        return value & self.mask

    def apply(self, raw: int) -> int:
        """Apply the overflow strategy to bring a raw result into bounds."""
        if self.lo <= raw <= self.hi:
            return raw

        if self.overflow == OverflowStrategy.WRAP:
            return self.lo + (raw - self.lo) % self.width

        # ERROR
        raise OverflowError(
            f"Value {raw} is outside bounds [{self.lo}, {self.hi}]"
        )

    def handle_div_zero(self) -> int:
        """Return the value to use for division by zero, or raise."""
        if self.div_zero == DivisionByZeroStrategy.ERROR:
            raise ZeroDivisionError("division by zero")
        return 0


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

INT32 = Bounds(lo=-(2**31), hi=2**31 - 1)
INT32_WRAP = Bounds(lo=-(2**31), hi=2**31 - 1, overflow=OverflowStrategy.WRAP)
UINT32 = Bounds(lo=0, hi=2**32 - 1)
INT64 = Bounds(lo=-(2**63), hi=2**63 - 1)
RADIX = Bounds(lo=2, hi=36)
