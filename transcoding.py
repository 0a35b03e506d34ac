"""Conversion between 16-bit code units, Python strings and bytes.

Code units are UTF-16 values.  Python strings hold code points, so a
supplementary character becomes a surrogate pair on the way in and a
well-formed pair is joined again on the way out; unpaired surrogates
survive both directions unchanged.  Byte conversion goes through the
standard codec registry; an unknown charset raises LookupError.
"""
from __future__ import annotations

import codecs
import sys
from array import array
from typing import Iterable

DEFAULT_CHARSET = "utf-8"

_UTF16 = "utf-16-le"
_SURROGATES = "surrogatepass"


def units_from_str(s: str) -> tuple[int, ...]:
    """UTF-16 code units of ``s``."""
    units = array("H")
    units.frombytes(s.encode(_UTF16, _SURROGATES))
    if sys.byteorder == "big":
        units.byteswap()
    return tuple(units)


def str_from_units(units: Iterable[int]) -> str:
    """Python string for a sequence of code units."""
    buf = array("H", units)
    if sys.byteorder == "big":
        buf.byteswap()
    return buf.tobytes().decode(_UTF16, _SURROGATES)


def decode(data: bytes, charset: str = DEFAULT_CHARSET) -> tuple[int, ...]:
    """Code units for ``data`` decoded with ``charset``.

    Malformed input is replaced, never raised.
    """
    name = codecs.lookup(charset).name
    return units_from_str(bytes(data).decode(name, "replace"))


def encode(units: Iterable[int], charset: str = DEFAULT_CHARSET) -> bytes:
    """Bytes for ``units`` encoded with ``charset``.

    Characters the charset cannot represent, and unpaired surrogates,
    become ``?``.
    """
    name = codecs.lookup(charset).name
    return str_from_units(units).encode(name, "replace")
