"""Regular-expression operations used by the text value.

A thin layer over :mod:`re` (Python pattern and replacement syntax).
``split`` follows the limit rules of the text API: a positive limit caps
the number of pieces, zero drops trailing empty pieces, a negative limit
keeps everything; a zero-width match at position 0 never yields a
leading empty piece.
"""
from __future__ import annotations

import re


def matches(regex: str, s: str) -> bool:
    return re.fullmatch(regex, s) is not None


def replace_first(regex: str, s: str, replacement: str) -> str:
    return re.sub(regex, replacement, s, count=1)


def replace_all(regex: str, s: str, replacement: str) -> str:
    return re.sub(regex, replacement, s)


def split(regex: str, s: str, limit: int = 0) -> list[str]:
    index = 0
    limited = limit > 0
    pieces: list[str] = []

    for m in re.finditer(regex, s):
        if limited and len(pieces) >= limit - 1:
            break
        if index == 0 and m.start() == 0 and m.start() == m.end():
            continue
        pieces.append(s[index:m.start()])
        index = m.end()

    if index == 0:
        return [s]

    pieces.append(s[index:])

    if limit == 0:
        while pieces and pieces[-1] == "":
            pieces.pop()
    return pieces
