"""Splice rendered directives back into the literal text."""

from __future__ import annotations

from tsformat.lib.engine.manip import Extension, Manip


def assemble(text: str, borders: list[tuple[int, int]], manips: list[Manip]) -> str:
    parts: list[str] = []
    position = 0
    for (start, end), manip in zip(borders, manips, strict=True):
        parts.append(text[position:start])
        position = end
        if Extension.IGNORE in manip.extensions:
            continue
        output = manip.output
        if Extension.PLUS_SPACE in manip.extensions:
            output = output.replace("+", " ", 1)
        parts.append(output)
    parts.append(text[position:])
    return "".join(parts)
