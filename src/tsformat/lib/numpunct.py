"""Locale handle carrying the numeric punctuation used while rendering."""

from __future__ import annotations

import locale as c_locale
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import cast

# localeconv() reports CHAR_MAX for "no further grouping".
_NO_MORE_GROUPING = 127

_SETLOCALE_LOCK = threading.Lock()


def _group_sizes(grouping: tuple[int, ...]) -> Iterator[int]:
    last: int | None = None
    for size in grouping:
        if size == 0:
            break
        if size < 0 or size >= _NO_MORE_GROUPING:
            return
        last = size
        yield size
    if last is None:
        return
    while True:
        yield last


@dataclass(frozen=True, slots=True)
class Locale:
    """Numeric punctuation of one locale, isolated from the process locale."""

    name: str = "C"
    decimal_point: str = "."
    thousands_sep: str = ""
    grouping: tuple[int, ...] = ()

    @classmethod
    def classic(cls) -> Locale:
        return cls()

    @classmethod
    def from_conventions(cls, name: str, conventions: Mapping[str, object]) -> Locale:
        """Build a handle from a `locale.localeconv()`-shaped mapping."""

        decimal_point = str(conventions.get("decimal_point") or ".")
        thousands_sep = str(conventions.get("thousands_sep") or "")
        raw_grouping = conventions.get("grouping") or ()
        grouping = tuple(int(size) for size in cast("list[int]", raw_grouping))
        return cls(
            name=name,
            decimal_point=decimal_point,
            thousands_sep=thousands_sep,
            grouping=grouping,
        )

    @classmethod
    def named(cls, name: str) -> Locale:
        """Query the C library for a named locale without leaking it process-wide."""

        with _SETLOCALE_LOCK:
            previous = c_locale.setlocale(c_locale.LC_NUMERIC)
            try:
                c_locale.setlocale(c_locale.LC_NUMERIC, name)
            except c_locale.Error as error:
                raise ValueError(f"Unknown locale: {name!r}") from error
            try:
                conventions = c_locale.localeconv()
            finally:
                c_locale.setlocale(c_locale.LC_NUMERIC, previous)
        return cls.from_conventions(name, cast("Mapping[str, object]", conventions))

    def group(self, digits: str) -> str:
        """Insert the thousands separator into a run of integral digits."""

        if not self.thousands_sep:
            return digits
        groups: list[str] = []
        end = len(digits)
        for size in _group_sizes(self.grouping):
            if end <= size:
                break
            groups.append(digits[end - size : end])
            end -= size
        groups.append(digits[:end])
        return self.thousands_sep.join(reversed(groups))

    def localize(self, number: str, *, group: bool = True) -> str:
        """Apply grouping and the decimal point to an unsigned number body."""

        end = 0
        while end < len(number) and number[end] in "0123456789":
            end += 1
        head, tail = number[:end], number[end:]
        if group:
            head = self.group(head)
        if tail.startswith("."):
            tail = self.decimal_point + tail[1:]
        return head + tail
