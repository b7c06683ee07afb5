"""Free-number allocation for unnumbered argument references."""

from __future__ import annotations

from dataclasses import dataclass, replace

from tsformat.lib.engine.parser import Reference


@dataclass(frozen=True, slots=True)
class Allocation:
    references: tuple[Reference, ...]
    argument_count: int


def allocate(references: list[Reference]) -> Allocation:
    """Number every unnumbered reference with the next free slot.

    Slots named explicitly anywhere in the format are reserved up front, so
    moving an explicit directive around never shifts the slots handed out to
    the unnumbered ones. References are assigned in textual order, which the
    parser already arranges as modifiers first, then the main argument.
    """

    reserved = {ref.argnum for ref in references if ref.argnum is not None}
    highest = max(reserved, default=-1)
    cursor = 0
    numbered: list[Reference] = []
    for ref in references:
        if ref.explicit:
            numbered.append(ref)
            continue
        while cursor in reserved:
            cursor += 1
        numbered.append(replace(ref, argnum=cursor))
        highest = max(highest, cursor)
        cursor += 1
    return Allocation(references=tuple(numbered), argument_count=highest + 1)
