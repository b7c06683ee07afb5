"""Parse, allocate and bind one format string."""

from __future__ import annotations

from dataclasses import dataclass

from tsformat.lib.engine.allocate import Allocation, allocate
from tsformat.lib.engine.bindings import BindingTable
from tsformat.lib.engine.manip import Manip
from tsformat.lib.engine.parser import ParsedFormat, parse_format


@dataclass(slots=True)
class CompiledFormat:
    """Collapsed text, directive borders, directives and their argument bindings.

    The directives are mutated while arguments are dispatched, so a compiled
    format backs exactly one format object.
    """

    text: str
    borders: list[tuple[int, int]]
    manips: list[Manip]
    allocation: Allocation
    table: BindingTable

    @property
    def argument_count(self) -> int:
        return self.table.argument_count


def compile_parsed(parsed: ParsedFormat) -> CompiledFormat:
    allocation = allocate(parsed.references)
    return CompiledFormat(
        text=parsed.text,
        borders=parsed.borders,
        manips=parsed.manips,
        allocation=allocation,
        table=BindingTable.build(allocation, parsed.manips),
    )


def compile_format(fmt: str) -> CompiledFormat:
    """Compile `fmt`; raise `FormatSyntaxError` when it is malformed."""

    return compile_parsed(parse_format(fmt))
