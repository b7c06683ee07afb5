"""Per-directive formatting descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag

from tsformat.lib.render import RenderConfig


class Need(IntFlag):
    """Kinds of value an argument can supply to a directive."""

    NONE = 0
    LOCALE = 1 << 1
    PRECISION = 1 << 2
    WIDTH = 1 << 3
    FILL = 1 << 4
    ARG = 1 << 5


# Modifiers are applied in this order, always before the main argument.
MODIFIER_ORDER: tuple[Need, ...] = (Need.LOCALE, Need.PRECISION, Need.WIDTH, Need.FILL)


class Extension(IntFlag):
    NONE = 0
    IGNORE = 1 << 1
    PLUS_SPACE = 1 << 2
    STRING_NPOS = 1 << 3


def need_names(kinds: Need) -> tuple[str, ...]:
    """Stable lowercase names of the kinds set in `kinds`, in application order."""

    ordered = (*MODIFIER_ORDER, Need.ARG)
    return tuple(str(kind.name).lower() for kind in ordered if kind in kinds)


def extension_names(extensions: Extension) -> tuple[str, ...]:
    ordered = (Extension.IGNORE, Extension.PLUS_SPACE, Extension.STRING_NPOS)
    return tuple(str(flag.name).lower() for flag in ordered if flag in extensions)


@dataclass(slots=True, eq=False)
class Manip:
    """One directive: its render configuration, pending modifiers and output."""

    config: RenderConfig = field(default_factory=RenderConfig)
    extensions: Extension = Extension.NONE
    need: Need = Need.NONE
    specifier: str = ""
    output: str = ""

    def require(self, kinds: Need) -> None:
        self.need |= kinds

    def satisfy(self, kind: Need) -> None:
        self.need &= ~kind

    @property
    def resolved(self) -> bool:
        return self.need == Need.NONE
