"""Text-rendering protocol for operation results.

Operation outputs live in lib/ and the CLI renders them, so the protocol sits
here where both layers can import it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class FormatContext:
    verbosity: int = 0  # -1 quiet, 0 normal, 1 verbose
    width: int = 80


@runtime_checkable
class TextFormattable(Protocol):
    """Results that know how to print themselves for humans."""

    def format_text(self, ctx: FormatContext | None = None) -> str: ...
