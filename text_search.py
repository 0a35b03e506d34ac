"""Substring and character search over code-unit buffers.

Every function takes raw buffers (any indexable sequence of 16-bit code
units) plus explicit offset/count arithmetic, so callers can search a
window of a larger buffer without slicing it.  Indices in results are
code-unit indices relative to the window start; absence is
``NOT_FOUND`` (-1), never an exception.

The substring search is a first-unit skip search: scan for the next
occurrence of the target's first unit, then verify the rest unit by
unit, resuming the scan one position further on a mismatch.  The
backward search mirrors it, scanning for the target's last unit.
Worst case is O(n*m); typical text needs far fewer comparisons.

Decision branches are annotated with their contract branch-IDs (see
contract.py BranchSpec).
"""
from __future__ import annotations

from typing import Sequence

from char_class import (
    MIN_SUPPLEMENTARY_CODE_POINT,
    high_surrogate,
    is_valid_code_point,
    low_surrogate,
    to_lower_case,
    to_upper_case,
)

NOT_FOUND = -1


# ---------------------------------------------------------------------------
# Substring search
# ---------------------------------------------------------------------------

def index_of(
    source: Sequence[int],
    source_offset: int,
    source_count: int,
    target: Sequence[int],
    target_offset: int,
    target_count: int,
    from_index: int,
) -> int:
    """First match of the target window at or after ``from_index``.

    Branches: SEARCH-FROM-PAST-END, SEARCH-EMPTY-TARGET, SEARCH-SKIP,
              SEARCH-VERIFY-MISMATCH, SEARCH-FOUND, SEARCH-NOT-FOUND
    """
    if from_index >= source_count:                                # SEARCH-FROM-PAST-END
        return source_count if target_count == 0 else NOT_FOUND
    if from_index < 0:
        from_index = 0
    if target_count == 0:                                         # SEARCH-EMPTY-TARGET
        return from_index

    first = target[target_offset]
    last_start = source_offset + (source_count - target_count)

    i = source_offset + from_index
    while i <= last_start:
        # SEARCH-SKIP: look for the first unit
        if source[i] != first:
            i += 1
            while i <= last_start and source[i] != first:
                i += 1

        if i <= last_start:
            j = i + 1
            end = j + target_count - 1
            k = target_offset + 1
            while j < end and source[j] == target[k]:
                j += 1
                k += 1
            if j == end:                                          # SEARCH-FOUND
                return i - source_offset
            # SEARCH-VERIFY-MISMATCH: resume after this candidate
        i += 1

    return NOT_FOUND                                              # SEARCH-NOT-FOUND


def last_index_of(
    source: Sequence[int],
    source_offset: int,
    source_count: int,
    target: Sequence[int],
    target_offset: int,
    target_count: int,
    from_index: int,
) -> int:
    """Last match of the target window starting at or before ``from_index``.

    Branches: RSEARCH-NEGATIVE-FROM, RSEARCH-EMPTY-TARGET, RSEARCH-FOUND,
              RSEARCH-NOT-FOUND
    """
    right_index = source_count - target_count
    if from_index < 0:                                            # RSEARCH-NEGATIVE-FROM
        return NOT_FOUND
    if from_index > right_index:
        from_index = right_index
    if target_count == 0:                                         # RSEARCH-EMPTY-TARGET
        return from_index

    str_last_index = target_offset + target_count - 1
    str_last_char = target[str_last_index]
    lowest = source_offset + target_count - 1
    i = lowest + from_index

    while True:
        while i >= lowest and source[i] != str_last_char:
            i -= 1
        if i < lowest:                                            # RSEARCH-NOT-FOUND
            return NOT_FOUND

        j = i - 1
        start = j - (target_count - 1)
        k = str_last_index - 1
        while j > start and source[j] == target[k]:
            j -= 1
            k -= 1
        if j == start:                                            # RSEARCH-FOUND
            return start - source_offset + 1
        i -= 1


# ---------------------------------------------------------------------------
# Character search
# ---------------------------------------------------------------------------

def index_of_char(value: Sequence[int], ch: int, from_index: int = 0) -> int:
    """First index of code point ``ch`` at or after ``from_index``.

    Supplementary code points are searched as their surrogate pair.

    Branches: CHAR-BMP, CHAR-SUPPLEMENTARY
    """
    length = len(value)
    if from_index < 0:
        from_index = 0
    elif from_index >= length:
        return NOT_FOUND

    if ch < MIN_SUPPLEMENTARY_CODE_POINT:                         # CHAR-BMP
        for i in range(from_index, length):
            if value[i] == ch:
                return i
        return NOT_FOUND

    # CHAR-SUPPLEMENTARY
    if is_valid_code_point(ch):
        hi = high_surrogate(ch)
        lo = low_surrogate(ch)
        for i in range(from_index, length - 1):
            if value[i] == hi and value[i + 1] == lo:
                return i
    return NOT_FOUND


def last_index_of_char(value: Sequence[int], ch: int, from_index: int | None = None) -> int:
    """Last index of code point ``ch`` at or before ``from_index``."""
    length = len(value)
    if from_index is None:
        from_index = length - 1

    if ch < MIN_SUPPLEMENTARY_CODE_POINT:                         # CHAR-BMP
        for i in range(min(from_index, length - 1), -1, -1):
            if value[i] == ch:
                return i
        return NOT_FOUND

    # CHAR-SUPPLEMENTARY
    if is_valid_code_point(ch):
        hi = high_surrogate(ch)
        lo = low_surrogate(ch)
        for i in range(min(from_index, length - 2), -1, -1):
            if value[i] == hi and value[i + 1] == lo:
                return i
    return NOT_FOUND


# ---------------------------------------------------------------------------
# Region comparison
# ---------------------------------------------------------------------------

def region_matches(
    ignore_case: bool,
    ta: Sequence[int],
    toffset: int,
    pa: Sequence[int],
    ooffset: int,
    length: int,
) -> bool:
    """Compare ``length`` units of ``ta`` at ``toffset`` with ``pa`` at ``ooffset``.

    Out-of-range offsets fail closed (False).  A non-positive length
    with valid offsets matches trivially.  Ignoring case, units that
    differ are compared upper-cased and then, since some alphabets do
    not round-trip through upper case, lower-cased as well.

    Branches: REGION-OUT-OF-RANGE, REGION-EXACT, REGION-UPPER-FOLD,
              REGION-LOWER-FOLD, REGION-MISMATCH
    """
    if (
        ooffset < 0
        or toffset < 0
        or toffset > len(ta) - length
        or ooffset > len(pa) - length
    ):                                                            # REGION-OUT-OF-RANGE
        return False

    to = toffset
    po = ooffset
    while length > 0:
        length -= 1
        c1 = ta[to]
        c2 = pa[po]
        to += 1
        po += 1
        if c1 == c2:                                              # REGION-EXACT
            continue
        if ignore_case:
            u1 = to_upper_case(c1)
            u2 = to_upper_case(c2)
            if u1 == u2:                                          # REGION-UPPER-FOLD
                continue
            if to_lower_case(u1) == to_lower_case(u2):            # REGION-LOWER-FOLD
                continue
        return False                                              # REGION-MISMATCH
    return True


def starts_with(ta: Sequence[int], prefix: Sequence[int], toffset: int = 0) -> bool:
    """True if ``prefix`` occurs in ``ta`` at ``toffset``; bad offsets fail closed."""
    return region_matches(False, ta, toffset, prefix, 0, len(prefix))


def ends_with(ta: Sequence[int], suffix: Sequence[int]) -> bool:
    return starts_with(ta, suffix, len(ta) - len(suffix))
