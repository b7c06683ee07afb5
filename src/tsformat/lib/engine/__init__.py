"""Format-string compiler and argument dispatch engine."""

from tsformat.lib.engine.dispatch import DispatchResult, Dispatcher, DispatchState
from tsformat.lib.engine.manip import Extension, Manip, Need
from tsformat.lib.engine.parser import ParsedFormat, Reference, parse_format
from tsformat.lib.engine.program import CompiledFormat, compile_format

__all__ = [
    "CompiledFormat",
    "DispatchResult",
    "DispatchState",
    "Dispatcher",
    "Extension",
    "Manip",
    "Need",
    "ParsedFormat",
    "Reference",
    "compile_format",
    "parse_format",
]
