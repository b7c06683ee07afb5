"""Output flags applied when the rendered text is produced."""

from __future__ import annotations

from enum import IntFlag


class Special(IntFlag):
    NONE = 0
    NEWLINE = 1 << 1
    FLUSH = 1 << 2
    ALL = NEWLINE | FLUSH

    @classmethod
    def none(cls) -> Special:
        return cls.NONE

    @classmethod
    def newline(cls) -> Special:
        return cls.NEWLINE

    @classmethod
    def flush(cls) -> Special:
        return cls.FLUSH

    @classmethod
    def newline_flush(cls) -> Special:
        return cls.NEWLINE | cls.FLUSH

    @classmethod
    def flush_newline(cls) -> Special:
        return cls.FLUSH | cls.NEWLINE
