"""Value-to-text rendering under a per-directive configuration.

Each directive owns one `RenderConfig`. The configuration is a plain value,
so nothing leaks between directives: a locale or precision set for one
directive never affects another.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from functools import singledispatch
from typing import NamedTuple, Protocol, runtime_checkable

from tsformat.lib.errors import ErrorCode, NotRenderable, RenderError
from tsformat.lib.numpunct import Locale

DEFAULT_PRECISION = 6
NO_POSITION_LITERAL = "NO_POSITION"


class Notation(StrEnum):
    GENERAL = "general"
    FIXED = "fixed"
    SCIENTIFIC = "scientific"
    HEXFLOAT = "hexfloat"


class Adjust(StrEnum):
    RIGHT = "right"
    LEFT = "left"
    INTERNAL = "internal"


@dataclass(slots=True)
class RenderConfig:
    """Formatting state accumulated for one directive."""

    base: int = 10
    uppercase: bool = False
    showbase: bool = False
    showpos: bool = False
    showpoint: bool = False
    boolalpha: bool = False
    notation: Notation = Notation.GENERAL
    adjust: Adjust = Adjust.RIGHT
    fill: str = " "
    width: int = 0
    precision: int = DEFAULT_PRECISION
    locale: Locale = field(default_factory=Locale.classic)


class NoPosition(int):
    """The "no such position" sentinel, numerically the largest 64-bit unsigned value."""

    _instance: NoPosition | None = None

    def __new__(cls) -> NoPosition:
        if cls._instance is None:
            cls._instance = super().__new__(cls, 2**64 - 1)
        return cls._instance

    def __repr__(self) -> str:
        return NO_POSITION_LITERAL

    def __str__(self) -> str:
        return int.__repr__(self)

    def __reduce__(self) -> tuple[type[NoPosition], tuple[()]]:
        return (NoPosition, ())


NO_POSITION = NoPosition()


@runtime_checkable
class Renderable(Protocol):
    """Objects that render themselves; padding is still applied afterwards."""

    def __tsformat__(self, config: RenderConfig) -> str: ...


class _Pieces(NamedTuple):
    # prefix holds the sign and base marker; internal adjustment pads between them and body.
    prefix: str
    body: str


def _split_sign(text: str) -> tuple[str, str]:
    if text[:1] in {"-", "+"}:
        return text[0], text[1:]
    return "", text


def _hexfloat(value: float, *, showpoint: bool) -> str:
    if math.isinf(value) or math.isnan(value):
        return format(value, "g")
    raw = value.hex()
    sign = "-" if raw.startswith("-") else ""
    mantissa, _, exponent = raw.lstrip("-")[2:].partition("p")
    whole, _, fraction = mantissa.partition(".")
    fraction = fraction.rstrip("0")
    if fraction:
        whole = f"{whole}.{fraction}"
    elif showpoint:
        whole = f"{whole}."
    return f"{sign}0x{whole}p{exponent}"


_FLOAT_TYPES: dict[Notation, str] = {
    Notation.GENERAL: "g",
    Notation.FIXED: "f",
    Notation.SCIENTIFIC: "e",
}


def _float_pieces(value: float, config: RenderConfig) -> _Pieces:
    if config.notation is Notation.HEXFLOAT:
        text = _hexfloat(value, showpoint=config.showpoint)
    else:
        alternate = "#" if config.showpoint else ""
        text = format(value, f"{alternate}.{config.precision}{_FLOAT_TYPES[config.notation]}")
    sign, body = _split_sign(text)
    if not sign and config.showpos:
        sign = "+"
    if config.uppercase:
        body = body.upper()
    if config.notation is Notation.HEXFLOAT and body[:2] in {"0x", "0X"}:
        return _Pieces(sign + body[:2], config.locale.localize(body[2:], group=False))
    if math.isinf(value) or math.isnan(value):
        return _Pieces(sign, body)
    return _Pieces(sign, config.locale.localize(body))


def _int_pieces(value: int, config: RenderConfig) -> _Pieces:
    number = int(value)
    magnitude = -number if number < 0 else number
    if config.base == 16:
        digits = format(magnitude, "X" if config.uppercase else "x")
    elif config.base == 8:
        digits = format(magnitude, "o")
    else:
        digits = format(magnitude, "d")
    if number < 0:
        prefix = "-"
    elif config.showpos and config.base == 10:
        prefix = "+"
    else:
        prefix = ""
    if config.showbase and magnitude != 0:
        if config.base == 16:
            prefix += "0X" if config.uppercase else "0x"
        elif config.base == 8:
            prefix += "0"
    return _Pieces(prefix, config.locale.group(digits))


@singledispatch
def _pieces(value: object, config: RenderConfig) -> _Pieces:
    if isinstance(value, Renderable):
        return _Pieces("", value.__tsformat__(config))
    return _Pieces("", str(value))


@_pieces.register
def _(value: str, config: RenderConfig) -> _Pieces:
    return _Pieces("", value)


@_pieces.register
def _(value: bool, config: RenderConfig) -> _Pieces:
    if config.boolalpha:
        return _Pieces("", "true" if value else "false")
    return _int_pieces(int(value), config)


@_pieces.register
def _(value: numbers.Integral, config: RenderConfig) -> _Pieces:
    return _int_pieces(int(value), config)


@_pieces.register
def _(value: numbers.Real, config: RenderConfig) -> _Pieces:
    return _float_pieces(float(value), config)


@_pieces.register
def _(value: Decimal, config: RenderConfig) -> _Pieces:
    return _float_pieces(float(value), config)


@_pieces.register(bytes)
@_pieces.register(bytearray)
def _(value: bytes | bytearray, config: RenderConfig) -> _Pieces:
    raise NotRenderable("byte strings have no implicit text encoding")


@_pieces.register(type(None))
def _(value: None, config: RenderConfig) -> _Pieces:
    raise NotRenderable("None has no text form")


@_pieces.register(list)
@_pieces.register(tuple)
@_pieces.register(dict)
@_pieces.register(set)
@_pieces.register(frozenset)
def _(value: object, config: RenderConfig) -> _Pieces:
    if isinstance(value, Renderable):
        return _Pieces("", value.__tsformat__(config))
    raise NotRenderable(f"{type(value).__name__} values are not rendered implicitly")


@_pieces.register
def _(value: Locale, config: RenderConfig) -> _Pieces:
    raise RenderError(code=ErrorCode.LOCALE_MUST_NOT_BE_OUTPUT)


def _pad(pieces: _Pieces, config: RenderConfig) -> str:
    text = pieces.prefix + pieces.body
    missing = config.width - len(text)
    if missing <= 0:
        return text
    padding = config.fill * missing
    if config.adjust is Adjust.LEFT:
        return text + padding
    if config.adjust is Adjust.INTERNAL:
        return pieces.prefix + padding + pieces.body
    return padding + text


def render(value: object, config: RenderConfig, *, string_npos: bool = False) -> str:
    """Render one value; raise `RenderError` when the value cannot be shown."""

    if string_npos and isinstance(value, NoPosition):
        return _pad(_Pieces("", NO_POSITION_LITERAL), config)
    return _pad(_pieces(value, config), config)
