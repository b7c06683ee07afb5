"""Scanning helpers for the format mini-language."""

from __future__ import annotations

from tsformat.lib.errors import ErrorCode, FormatSyntaxError

DIGITS = frozenset("0123456789")
POSITIVE_DIGITS = frozenset("123456789")

# Upper bounds of the fixed-width accumulators numbers are parsed into.
ARGNUM_LIMIT = 2**64 - 1
STREAMSIZE_LIMIT = 2**63 - 1


def is_positive_digit(char: str) -> bool:
    return char in POSITIVE_DIGITS


def end_number(text: str, start: int) -> int:
    """Return the index just past the digit run starting at `start`."""

    end = start + 1
    while end < len(text) and text[end] in DIGITS:
        end += 1
    return end


def end_argument_number(text: str, start: int) -> int | None:
    """Return the index past `[1-9][0-9]*$` at `start`, or None if absent."""

    if start >= len(text) or not is_positive_digit(text[start]):
        return None
    end = end_number(text, start)
    if end != len(text) and text[end] == "$":
        return end + 1
    return None


def parse_number(text: str, start: int, end: int, *, limit: int) -> int:
    """Parse the digits in `text[start:end]`, failing closed on overflow."""

    result = 0
    for index in range(start, end):
        result = result * 10 + (ord(text[index]) - ord("0"))
        if result > limit:
            raise FormatSyntaxError(ErrorCode.NUMBER_OVERFLOW, start)
    return result


def collapse_percent(text: str, index: int) -> str:
    """Drop the second `%` of a `%%` pair whose second sign sits at `index`."""

    return text[:index] + text[index + 1 :]
