"""Exceptions raised by the integer codec and the text value.

Parse failures share the ``NumberFormatError`` base (itself a
``ValueError``) so callers can catch every parse problem at once, or a
single kind when they care which rule was broken.  Absence in a search
is never an exception; searches return -1.
"""
from __future__ import annotations


class IndexOutOfRangeError(IndexError):
    """Raised when an index or range falls outside a text buffer."""

    def __init__(self, index: int, message: str | None = None) -> None:
        self.index = index
        super().__init__(message or f"Index out of range: {index}")


class NumberFormatError(ValueError):
    """Base class for every integer parse failure."""

    def __init__(self, text: str | None, message: str | None = None) -> None:
        self.text = text
        super().__init__(message or f'For input string: "{text}"')


class MalformedInputError(NumberFormatError):
    """Bad digit, stray or misplaced sign, or a value that overflows."""


class EmptyInputError(MalformedInputError):
    """The text to parse had no characters at all."""

    def __init__(self, text: str | None = "", message: str | None = None) -> None:
        super().__init__(text, message or "Zero length string")


class InvalidRadixError(NumberFormatError):
    """Radix outside [2, 36] given to an operation that must reject it."""

    def __init__(self, radix: int, message: str) -> None:
        self.radix = radix
        super().__init__(None, message)


class IllegalSignError(NumberFormatError):
    """An unsigned parse saw a leading minus sign."""

    def __init__(self, text: str) -> None:
        super().__init__(
            text, f"Illegal leading minus sign on unsigned string {text}."
        )


class RangeExceededError(NumberFormatError):
    """An unsigned value does not fit in 32 bits."""

    def __init__(self, text: str) -> None:
        super().__init__(
            text, f"String value {text} exceeds range of unsigned int."
        )


class InvalidCodePointError(ValueError):
    """A value that is not a Unicode code point was given as one."""

    def __init__(self, code_point: int) -> None:
        self.code_point = code_point
        super().__init__(f"Invalid code point: {code_point}")
