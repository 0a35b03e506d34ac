"""Immutable text indexed by 16-bit code units.

A Text owns a tuple of UTF-16 code units.  The tuple cannot be mutated,
so texts built from one another share it freely: copying a Text shares
the buffer and its cached hash, and ``substring`` over the full range
returns the text itself.  Any other slice copies.

Two coordinate systems exist.  Almost every index is a *code-unit*
index (``CodeUnitIndex``): a supplementary character occupies two
positions.  ``CodePointIndex`` counts logical characters; convert with
``to_unit_index`` / ``to_code_point_index``.

Decision branches are annotated with their contract branch-IDs (see
contract.py BranchSpec).
"""
from __future__ import annotations

from functools import cmp_to_key, total_ordering
from typing import Iterable, Iterator, MutableSequence, NewType, Sequence, Union

import char_class
import patterns
import text_search
import transcoding
from bit_ops import to_int32
from codec_errors import IndexOutOfRangeError, InvalidCodePointError
from int_format import to_string

CodeUnitIndex = NewType("CodeUnitIndex", int)
CodePointIndex = NewType("CodePointIndex", int)

TextLike = Union["Text", str]

_MAX_UNIT = 0xFFFF
_REGEX_META = ".$|()[{^?*+\\"


def _units_of(value: TextLike | Sequence[int]) -> tuple[int, ...]:
    if isinstance(value, Text):
        return value._value
    if isinstance(value, str):
        return transcoding.units_from_str(value)
    return tuple(value)


def _char_of(ch: TextLike | int) -> int:
    if isinstance(ch, int):
        return ch
    return _units_of(ch)[0]


def _check_bounds(length: int, offset: int, count: int) -> None:
    if count < 0:
        raise IndexOutOfRangeError(count)
    if offset < 0:
        raise IndexOutOfRangeError(offset)
    if offset > length - count:
        raise IndexOutOfRangeError(offset + count)


def _check_units(units: tuple[int, ...]) -> tuple[int, ...]:
    for unit in units:
        if not 0 <= unit <= _MAX_UNIT:
            raise ValueError(f"Not a 16-bit code unit: {unit}")
    return units


@total_ordering
class Text:
    """An immutable sequence of UTF-16 code units."""

    __slots__ = ("_value", "_hash")

    _value: tuple[int, ...]
    _hash: int | None

    def __init__(self, original: TextLike = "") -> None:
        if isinstance(original, Text):
            object.__setattr__(self, "_value", original._value)
            object.__setattr__(self, "_hash", original._hash)
        elif isinstance(original, str):
            object.__setattr__(self, "_value", transcoding.units_from_str(original))
            object.__setattr__(self, "_hash", None)
        else:
            raise TypeError(
                f"Text() takes a str or Text, got {type(original).__name__}"
            )

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Text is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Text is immutable")

    @classmethod
    def _shared(cls, value: tuple[int, ...]) -> Text:
        """Wrap a buffer nobody else can mutate; no copy is made."""
        text = cls.__new__(cls)
        object.__setattr__(text, "_value", value)
        object.__setattr__(text, "_hash", None)
        return text

    # -- construction --------------------------------------------------------

    @classmethod
    def from_chars(
        cls, chars: Sequence[int] | str, offset: int = 0, count: int | None = None
    ) -> Text:
        """Text of ``count`` code units of ``chars`` starting at ``offset``.

        Branches: CTOR-NEGATIVE-OFFSET, CTOR-EMPTY-RANGE, CTOR-OUT-OF-RANGE,
                  CTOR-COPY
        """
        units = _units_of(chars)
        if count is None:
            count = len(units) - offset
        if offset < 0:                                            # CTOR-NEGATIVE-OFFSET
            raise IndexOutOfRangeError(offset)
        if count <= 0:
            if count < 0:
                raise IndexOutOfRangeError(count)
            if offset <= len(units):                              # CTOR-EMPTY-RANGE
                return EMPTY
        if offset > len(units) - count:                           # CTOR-OUT-OF-RANGE
            raise IndexOutOfRangeError(offset + count)
        # CTOR-COPY
        return cls._shared(_check_units(units[offset:offset + count]))

    @classmethod
    def from_code_points(
        cls, code_points: Sequence[int], offset: int = 0, count: int | None = None
    ) -> Text:
        """Text of ``count`` code points, expanding supplementary ones to pairs.

        Branches: CTOR-NEGATIVE-OFFSET, CTOR-EMPTY-RANGE, CTOR-OUT-OF-RANGE,
                  CP-BMP, CP-SUPPLEMENTARY, CP-INVALID
        """
        if count is None:
            count = len(code_points) - offset
        if offset < 0:                                            # CTOR-NEGATIVE-OFFSET
            raise IndexOutOfRangeError(offset)
        if count <= 0:
            if count < 0:
                raise IndexOutOfRangeError(count)
            if offset <= len(code_points):                        # CTOR-EMPTY-RANGE
                return EMPTY
        if offset > len(code_points) - count:                     # CTOR-OUT-OF-RANGE
            raise IndexOutOfRangeError(offset + count)

        units: list[int] = []
        for c in code_points[offset:offset + count]:
            if char_class.is_bmp_code_point(c):                   # CP-BMP
                units.append(c)
            elif char_class.is_valid_code_point(c):               # CP-SUPPLEMENTARY
                units.append(char_class.high_surrogate(c))
                units.append(char_class.low_surrogate(c))
            else:                                                 # CP-INVALID
                raise InvalidCodePointError(c)
        return cls._shared(tuple(units))

    @classmethod
    def from_ascii(
        cls, data: bytes, hibyte: int, offset: int = 0, count: int | None = None
    ) -> Text:
        """Widen each byte to a code unit whose high byte is ``hibyte``."""
        if count is None:
            count = len(data) - offset
        _check_bounds(len(data), offset, count)
        high = (hibyte & 0xFF) << 8
        return cls._shared(
            tuple(high | (b & 0xFF) for b in data[offset:offset + count])
        )

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        offset: int = 0,
        length: int | None = None,
        charset: str = transcoding.DEFAULT_CHARSET,
    ) -> Text:
        """Text decoded from ``data[offset:offset + length]`` with ``charset``."""
        if length is None:
            length = len(data) - offset
        _check_bounds(len(data), offset, length)
        return cls._shared(transcoding.decode(data[offset:offset + length], charset))

    @classmethod
    def value_of(cls, obj: object) -> Text:
        """Text form of ``obj``; integers go through the decimal formatter."""
        if isinstance(obj, Text):
            return obj
        if isinstance(obj, bool):
            return cls("true" if obj else "false")
        if isinstance(obj, int):
            return cls(to_string(obj))
        return cls(str(obj))

    @classmethod
    def join(cls, delimiter: TextLike, elements: Iterable[TextLike]) -> Text:
        sep = _units_of(delimiter)
        units: list[int] = []
        for n, element in enumerate(elements):
            if n:
                units.extend(sep)
            units.extend(_units_of(element))
        return cls._shared(tuple(units))

    # -- access --------------------------------------------------------------

    def length(self) -> int:
        return len(self._value)

    def is_empty(self) -> bool:
        return len(self._value) == 0

    def char_at(self, index: CodeUnitIndex) -> str:
        """The code unit at ``index`` as a one-character string."""
        if index < 0 or index >= len(self._value):                # ACCESS-OUT-OF-RANGE
            raise IndexOutOfRangeError(index)
        return chr(self._value[index])

    def code_unit_at(self, index: CodeUnitIndex) -> int:
        if index < 0 or index >= len(self._value):
            raise IndexOutOfRangeError(index)
        return self._value[index]

    def code_point_at(self, index: CodeUnitIndex) -> int:
        if index < 0 or index >= len(self._value):
            raise IndexOutOfRangeError(index)
        return char_class.code_point_at(self._value, index, len(self._value))

    def code_point_before(self, index: CodeUnitIndex) -> int:
        i = index - 1
        if i < 0 or i >= len(self._value):
            raise IndexOutOfRangeError(index)
        return char_class.code_point_before(self._value, index, 0)

    def code_point_count(self, begin: CodeUnitIndex, end: CodeUnitIndex) -> int:
        if begin < 0 or end > len(self._value) or begin > end:
            raise IndexOutOfRangeError(
                begin, f"begin {begin}, end {end}, length {len(self._value)}"
            )
        return char_class.code_point_count(self._value, begin, end - begin)

    def offset_by_code_points(
        self, index: CodeUnitIndex, code_point_offset: int
    ) -> CodeUnitIndex:
        if index < 0 or index > len(self._value):
            raise IndexOutOfRangeError(index)
        return CodeUnitIndex(
            char_class.offset_by_code_points(
                self._value, 0, len(self._value), index, code_point_offset
            )
        )

    def to_unit_index(self, index: CodePointIndex) -> CodeUnitIndex:
        """Code-unit position of the ``index``-th code point."""
        return self.offset_by_code_points(CodeUnitIndex(0), index)

    def to_code_point_index(self, index: CodeUnitIndex) -> CodePointIndex:
        """Number of code points before code-unit position ``index``."""
        return CodePointIndex(self.code_point_count(CodeUnitIndex(0), index))

    def get_chars(
        self,
        src_begin: CodeUnitIndex,
        src_end: CodeUnitIndex,
        dst: MutableSequence[int],
        dst_begin: int,
    ) -> None:
        """Copy code units ``[src_begin, src_end)`` into ``dst`` at ``dst_begin``."""
        self._check_copy_range(src_begin, src_end)
        dst[dst_begin:dst_begin + (src_end - src_begin)] = self._value[src_begin:src_end]

    def get_low_bytes(
        self,
        src_begin: CodeUnitIndex,
        src_end: CodeUnitIndex,
        dst: MutableSequence[int],
        dst_begin: int,
    ) -> None:
        """Copy the low byte of each code unit in range into ``dst``."""
        self._check_copy_range(src_begin, src_end)
        dst[dst_begin:dst_begin + (src_end - src_begin)] = bytes(
            unit & 0xFF for unit in self._value[src_begin:src_end]
        )

    def _check_copy_range(self, src_begin: int, src_end: int) -> None:
        if src_begin < 0:
            raise IndexOutOfRangeError(src_begin)
        if src_end > len(self._value):
            raise IndexOutOfRangeError(src_end)
        if src_begin > src_end:
            raise IndexOutOfRangeError(src_end - src_begin)

    def get_bytes(self, charset: str = transcoding.DEFAULT_CHARSET) -> bytes:
        return transcoding.encode(self._value, charset)

    def chars(self) -> Iterator[int]:
        """Code units, in order."""
        return iter(self._value)

    def code_points(self) -> Iterator[int]:
        """Code points, in order; unpaired surrogates are yielded as-is."""
        value = self._value
        i = 0
        while i < len(value):
            cp = char_class.code_point_at(value, i, len(value))
            yield cp
            i += char_class.char_count(cp)

    # -- equality, hashing, ordering ----------------------------------------

    def equals(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Text):
            return False
        v1 = self._value
        v2 = other._value
        if len(v1) != len(v2):
            return False
        for c1, c2 in zip(v1, v2):
            if c1 != c2:
                return False
        return True

    def content_equals(self, cs: TextLike | Sequence[int]) -> bool:
        return self._value == _units_of(cs)

    def equals_ignore_case(self, other: TextLike | None) -> bool:
        if self is other:
            return True
        if other is None:
            return False
        units = _units_of(other)
        return (
            len(units) == len(self._value)
            and self.region_matches(0, units, 0, len(self._value), ignore_case=True)
        )

    def hash_code(self) -> int:
        """``31 * h + unit`` folded left to right, wrapped to 32 bits."""
        h = self._hash
        if h is None:
            h = 0
            for unit in self._value:
                h = (31 * h + unit) & 0xFFFFFFFF
            h = to_int32(h)
            object.__setattr__(self, "_hash", h)
        return h

    def compare_to(self, other: TextLike) -> int:
        """Difference of the first differing units, else of the lengths."""
        v1 = self._value
        v2 = _units_of(other)
        for k in range(min(len(v1), len(v2))):
            c1 = v1[k]
            c2 = v2[k]
            if c1 != c2:
                return c1 - c2
        return len(v1) - len(v2)

    def compare_to_ignore_case(self, other: TextLike) -> int:
        return compare_ignore_case(self, other)

    # -- regions -------------------------------------------------------------

    def region_matches(
        self,
        toffset: CodeUnitIndex,
        other: TextLike,
        ooffset: CodeUnitIndex,
        length: int,
        ignore_case: bool = False,
    ) -> bool:
        return text_search.region_matches(
            ignore_case, self._value, toffset, _units_of(other), ooffset, length
        )

    def starts_with(self, prefix: TextLike, toffset: CodeUnitIndex = CodeUnitIndex(0)) -> bool:
        return text_search.starts_with(self._value, _units_of(prefix), toffset)

    def ends_with(self, suffix: TextLike) -> bool:
        return text_search.ends_with(self._value, _units_of(suffix))

    # -- search --------------------------------------------------------------

    def index_of(self, target: TextLike | int, from_index: CodeUnitIndex = CodeUnitIndex(0)) -> int:
        """First code-unit index of ``target`` at or after ``from_index``, or -1.

        An integer target is a code point; a string or Text is a substring.
        """
        if isinstance(target, int):
            return text_search.index_of_char(self._value, target, from_index)
        units = _units_of(target)
        return text_search.index_of(
            self._value, 0, len(self._value), units, 0, len(units), from_index
        )

    def last_index_of(
        self, target: TextLike | int, from_index: CodeUnitIndex | None = None
    ) -> int:
        """Last code-unit index of ``target`` at or before ``from_index``, or -1."""
        if isinstance(target, int):
            return text_search.last_index_of_char(self._value, target, from_index)
        units = _units_of(target)
        if from_index is None:
            from_index = CodeUnitIndex(len(self._value))
        return text_search.last_index_of(
            self._value, 0, len(self._value), units, 0, len(units), from_index
        )

    def contains(self, s: TextLike) -> bool:
        return self.index_of(s) > -1

    # -- derived texts -------------------------------------------------------

    def substring(self, begin: CodeUnitIndex, end: CodeUnitIndex | None = None) -> Text:
        """Code units ``[begin, end)``; the full range returns this text.

        Branches: SUB-BEGIN-NEGATIVE, SUB-END-PAST-LENGTH, SUB-INVERTED,
                  SUB-WHOLE, SUB-COPY
        """
        length = len(self._value)
        if end is None:
            end = CodeUnitIndex(length)
        if begin < 0:                                             # SUB-BEGIN-NEGATIVE
            raise IndexOutOfRangeError(begin)
        if end > length:                                          # SUB-END-PAST-LENGTH
            raise IndexOutOfRangeError(end)
        sub_len = end - begin
        if sub_len < 0:                                           # SUB-INVERTED
            raise IndexOutOfRangeError(sub_len)
        if begin == 0 and end == length:                          # SUB-WHOLE
            return self
        return Text._shared(self._value[begin:end])               # SUB-COPY

    def sub_sequence(self, begin: CodeUnitIndex, end: CodeUnitIndex) -> Text:
        return self.substring(begin, end)

    def concat(self, other: TextLike) -> Text:
        units = _units_of(other)
        if not units:
            return self
        return Text._shared(self._value + units)

    def replace(self, old: TextLike | int, new: TextLike | int) -> Text:
        """Replace every occurrence of ``old`` with ``new``.

        Two single characters swap unit for unit; anything else is a
        literal (non-regex) substring replacement.
        """
        if _is_single_unit(old) and _is_single_unit(new):
            return self._replace_unit(_char_of(old), _char_of(new))
        return self._replace_literal(_units_of(_as_text(old)), _units_of(_as_text(new)))

    def _replace_unit(self, old_char: int, new_char: int) -> Text:
        if old_char == new_char:
            return self
        value = self._value
        i = text_search.index_of_char(value, old_char)
        if i < 0:
            return self
        buf = list(value[:i])
        buf.extend(new_char if c == old_char else c for c in value[i:])
        return Text._shared(tuple(buf))

    def _replace_literal(self, target: tuple[int, ...], replacement: tuple[int, ...]) -> Text:
        value = self._value
        if not target:
            spliced = list(replacement)
            for unit in value:
                spliced.append(unit)
                spliced.extend(replacement)
            return Text._shared(tuple(spliced))

        j = text_search.index_of(value, 0, len(value), target, 0, len(target), 0)
        if j < 0:
            return self
        buf: list[int] = []
        start = 0
        while j >= 0:
            buf.extend(value[start:j])
            buf.extend(replacement)
            start = j + len(target)
            j = text_search.index_of(value, 0, len(value), target, 0, len(target), start)
        buf.extend(value[start:])
        return Text._shared(tuple(buf))

    # -- regular expressions --------------------------------------------------

    def matches(self, regex: str) -> bool:
        return patterns.matches(regex, str(self))

    def replace_first(self, regex: str, replacement: str) -> Text:
        return Text(patterns.replace_first(regex, str(self), replacement))

    def replace_all(self, regex: str, replacement: str) -> Text:
        return Text(patterns.replace_all(regex, str(self), replacement))

    def split(self, regex: str, limit: int = 0) -> list[Text]:
        """Split around matches of ``regex``.

        A single literal character (or a backslash-escaped non-alphanumeric
        one) is split on directly with the character search; anything else
        goes through the regular-expression engine.

        Branches: SPLIT-FAST, SPLIT-REGEX, SPLIT-NO-MATCH, SPLIT-LIMIT,
                  SPLIT-TRIM-TRAILING
        """
        ch = _fast_split_char(regex)
        if ch is None:                                            # SPLIT-REGEX
            return [Text(piece) for piece in patterns.split(regex, str(self), limit)]

        # SPLIT-FAST
        value = self._value
        length = len(value)
        limited = limit > 0
        pieces: list[Text] = []
        off = 0
        nxt = text_search.index_of_char(value, ch, off)
        while nxt != -1:
            if not limited or len(pieces) < limit - 1:
                pieces.append(self.substring(off, nxt))
                off = nxt + 1
            else:                                                 # SPLIT-LIMIT
                pieces.append(self.substring(off, length))
                off = length
                break
            nxt = text_search.index_of_char(value, ch, off)

        if off == 0:                                              # SPLIT-NO-MATCH
            return [self]

        if not limited or len(pieces) < limit:
            pieces.append(self.substring(off, length))

        if limit == 0:                                            # SPLIT-TRIM-TRAILING
            while pieces and pieces[-1].is_empty():
                pieces.pop()
        return pieces

    # -- Python protocols ----------------------------------------------------

    def __len__(self) -> int:
        return len(self._value)

    def __getitem__(self, key: int | slice) -> str | Text:
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self._value))
            if step != 1:
                raise ValueError("Text slices must be contiguous")
            return self.substring(CodeUnitIndex(start), CodeUnitIndex(max(start, stop)))
        if key < 0:
            key += len(self._value)
        return self.char_at(CodeUnitIndex(key))

    def __iter__(self) -> Iterator[str]:
        return (chr(unit) for unit in self._value)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (Text, str)):
            return self.contains(item)
        return False

    def __add__(self, other: object) -> Text:
        if isinstance(other, (Text, str)):
            return self.concat(other)
        return NotImplemented

    def __radd__(self, other: object) -> Text:
        if isinstance(other, str):
            return Text(other).concat(self)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self.equals(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        return self.hash_code()

    def __str__(self) -> str:
        return transcoding.str_from_units(self._value)

    def __repr__(self) -> str:
        return f"Text({str(self)!r})"


EMPTY = Text._shared(())


# ---------------------------------------------------------------------------
# Case-insensitive ordering
# ---------------------------------------------------------------------------

def compare_ignore_case(s1: TextLike, s2: TextLike) -> int:
    """Compare unit by unit after upper- then lower-case folding."""
    v1 = _units_of(s1)
    v2 = _units_of(s2)
    for i in range(min(len(v1), len(v2))):
        c1 = v1[i]
        c2 = v2[i]
        if c1 != c2:
            c1 = char_class.to_upper_case(c1)
            c2 = char_class.to_upper_case(c2)
            if c1 != c2:
                c1 = char_class.to_lower_case(c1)
                c2 = char_class.to_lower_case(c2)
                if c1 != c2:
                    return c1 - c2
    return len(v1) - len(v2)


# Sort key: sorted(texts, key=CASE_INSENSITIVE_ORDER)
CASE_INSENSITIVE_ORDER = cmp_to_key(compare_ignore_case)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _as_text(value: TextLike | int) -> TextLike:
    if isinstance(value, int):
        return Text.from_code_points([value])
    return value


def _is_single_unit(value: TextLike | int) -> bool:
    if isinstance(value, int):
        return char_class.is_bmp_code_point(value)
    return len(_units_of(value)) == 1


def _fast_split_char(regex: str) -> int | None:
    """The literal split character ``regex`` stands for, or None."""
    ch = None
    if len(regex) == 1 and regex not in _REGEX_META:
        ch = ord(regex)
    elif (
        len(regex) == 2
        and regex[0] == "\\"
        and not ("0" <= regex[1] <= "9")
        and not ("a" <= regex[1] <= "z")
        and not ("A" <= regex[1] <= "Z")
    ):
        ch = ord(regex[1])
    if ch is None or ch > _MAX_UNIT or char_class.is_surrogate(ch):
        return None
    return ch
