"""Specifier parser: turns a format string into directives and references."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from tsformat.lib.engine.lexer import (
    ARGNUM_LIMIT,
    DIGITS,
    STREAMSIZE_LIMIT,
    collapse_percent,
    end_argument_number,
    end_number,
    parse_number,
)
from tsformat.lib.engine.manip import Extension, Manip, Need
from tsformat.lib.errors import ErrorCode, FormatSyntaxError
from tsformat.lib.render import Adjust, Notation

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Reference:
    """One use of an argument slot by a directive.

    `argnum` is the 0-based slot for explicitly numbered references and
    None for references waiting on the free-number allocator.
    """

    kinds: Need
    manip_index: int
    argnum: int | None = None

    @property
    def explicit(self) -> bool:
        return self.argnum is not None


@dataclass(slots=True)
class ParsedFormat:
    text: str
    borders: list[tuple[int, int]] = field(default_factory=list)
    manips: list[Manip] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class _SpecifierTraits:
    base: int | None = None
    notation: Notation | None = None
    uppercase: bool = False
    boolalpha: bool = False
    showpoint: bool = False
    extensions: Extension = Extension.NONE


_SPECIFIERS: dict[str, _SpecifierTraits] = {
    "s": _SpecifierTraits(),
    "S": _SpecifierTraits(boolalpha=True, showpoint=True, extensions=Extension.STRING_NPOS),
    "d": _SpecifierTraits(boolalpha=True, extensions=Extension.STRING_NPOS),
    "D": _SpecifierTraits(boolalpha=True, uppercase=True, extensions=Extension.STRING_NPOS),
    "x": _SpecifierTraits(base=16),
    "X": _SpecifierTraits(base=16, uppercase=True),
    "o": _SpecifierTraits(base=8),
    "O": _SpecifierTraits(base=8, uppercase=True),
    "f": _SpecifierTraits(notation=Notation.FIXED),
    "F": _SpecifierTraits(notation=Notation.FIXED, uppercase=True),
    "e": _SpecifierTraits(notation=Notation.SCIENTIFIC),
    "E": _SpecifierTraits(notation=Notation.SCIENTIFIC, uppercase=True),
    "a": _SpecifierTraits(notation=Notation.HEXFLOAT),
    "A": _SpecifierTraits(notation=Notation.HEXFLOAT, uppercase=True),
    "n": _SpecifierTraits(extensions=Extension.IGNORE),
}

SPECIFIERS: frozenset[str] = frozenset(_SPECIFIERS)


def _apply_specifier(manip: Manip, specifier: str) -> None:
    traits = _SPECIFIERS[specifier]
    config = manip.config
    if traits.base is not None:
        config.base = traits.base
    if traits.notation is not None:
        config.notation = traits.notation
    config.uppercase = config.uppercase or traits.uppercase
    config.boolalpha = config.boolalpha or traits.boolalpha
    config.showpoint = config.showpoint or traits.showpoint
    manip.extensions |= traits.extensions
    manip.specifier = specifier


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.result = ParsedFormat(text=text)

    def _missing_specifier(self, index: int) -> FormatSyntaxError:
        return FormatSyntaxError(ErrorCode.MISSING_SPECIFIER, index)

    def _reference(self, kinds: Need, manip_index: int, argnum: int | None) -> None:
        self.result.references.append(Reference(kinds, manip_index, argnum))

    def parse(self) -> ParsedFormat:
        index = 0
        while (index := self.text.find("%", index)) != -1:
            start = index
            index += 1
            if index == len(self.text):
                raise FormatSyntaxError(ErrorCode.TRAILING_PERCENTAGE, start)
            if self.text[index] == "%":
                self.text = collapse_percent(self.text, index)
                continue
            index = self._directive(start, index)
        self.result.text = self.text
        return self.result

    def _directive(self, start: int, index: int) -> int:
        text = self.text
        manip = Manip()
        manip_index = len(self.result.manips)
        self.result.manips.append(manip)
        config = manip.config

        numbered = False
        end = end_argument_number(text, index)
        if end is not None:
            if end == len(text):
                raise self._missing_specifier(end)
            argnum = parse_number(text, index, end - 1, limit=ARGNUM_LIMIT) - 1
            self._reference(Need.ARG, manip_index, argnum)
            numbered = True
            index = end

        while True:
            char = text[index]
            if char == "#":
                config.showbase = True
            elif char == " ":
                manip.extensions |= Extension.PLUS_SPACE
                config.showpos = True
            elif char == "+":
                config.showpos = True
            elif char == "0":
                config.fill = "0"
            elif char == "_":
                index += 1
                if index == len(text):
                    raise FormatSyntaxError(ErrorCode.MISSING_FILL_CHARACTER, index)
                config.fill = text[index]
            elif char == "/":
                index = self._indirect(Need.FILL, manip, manip_index, index)
                continue
            elif char == "-":
                config.adjust = Adjust.LEFT
            elif char == ":":
                config.adjust = Adjust.INTERNAL
            elif char == "*":
                index = self._indirect(Need.WIDTH, manip, manip_index, index)
                continue
            elif char == ".":
                index += 1
                if index == len(text):
                    raise self._missing_specifier(index)
                if text[index] in DIGITS:
                    end = end_number(text, index)
                    if end == len(text):
                        raise self._missing_specifier(end)
                    config.precision = parse_number(text, index, end, limit=STREAMSIZE_LIMIT)
                    index = end
                    continue
                if text[index] == "*":
                    index = self._indirect(Need.PRECISION, manip, manip_index, index)
                    continue
                # A bare "." means precision 0; the next character is parsed normally.
                config.precision = 0
                continue
            elif char == "~":
                index = self._indirect(Need.LOCALE, manip, manip_index, index)
                continue
            elif char in SPECIFIERS:
                _apply_specifier(manip, char)
                index += 1
                break
            else:
                if char not in DIGITS:
                    raise FormatSyntaxError(ErrorCode.UNKNOWN_SPECIFIER, index)
                end = end_number(text, index)
                if end == len(text):
                    raise self._missing_specifier(end)
                config.width = parse_number(text, index, end, limit=STREAMSIZE_LIMIT)
                index = end
                continue
            index += 1
            if index == len(text):
                raise self._missing_specifier(index)

        if not numbered:
            self._reference(Need.ARG, manip_index, None)
        self.result.borders.append((start, index))
        return index

    def _indirect(self, kind: Need, manip: Manip, manip_index: int, index: int) -> int:
        """Register a modifier fed from an argument; return the index after its reference."""

        text = self.text
        manip.require(kind)
        index += 1
        if index == len(text):
            raise self._missing_specifier(index)
        end = end_argument_number(text, index)
        if end is None:
            # Digits without `$` are parsed next as a literal width.
            self._reference(kind, manip_index, None)
            return index
        if end == len(text):
            raise self._missing_specifier(end)
        argnum = parse_number(text, index, end - 1, limit=ARGNUM_LIMIT) - 1
        self._reference(kind, manip_index, argnum)
        return end


def parse_format(text: str) -> ParsedFormat:
    """Parse `text`, collapsing `%%`; raise `FormatSyntaxError` on malformed input."""

    parsed = _Parser(text).parse()
    logger.debug(
        "Parsed format string.",
        directives=len(parsed.manips),
        references=len(parsed.references),
    )
    return parsed
