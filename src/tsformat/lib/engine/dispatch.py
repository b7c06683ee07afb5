"""Incremental argument dispatcher.

Arguments arrive one at a time in slot order. Each argument is applied to
every directive bound to its slot: modifiers first (locale, precision, width,
fill) and the main value last. Once the final slot has been fed, the
directives are spliced into the literal text.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

import structlog

from tsformat.lib.engine.allocate import allocate
from tsformat.lib.engine.assemble import assemble
from tsformat.lib.engine.bindings import Binding, BindingTable
from tsformat.lib.engine.manip import MODIFIER_ORDER, Extension, Manip, Need
from tsformat.lib.engine.parser import Reference
from tsformat.lib.engine.program import CompiledFormat
from tsformat.lib.errors import ErrorCode, RenderError
from tsformat.lib.numpunct import Locale
from tsformat.lib.render import DEFAULT_PRECISION, Adjust, render

logger = structlog.get_logger(__name__)

_MAX_CODEPOINT = 0x10FFFF


class DispatchState(StrEnum):
    IDLE = "idle"
    FAILED = "failed"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    state: DispatchState
    error: ErrorCode = ErrorCode.NONE
    cursor: int = 0

    @property
    def ok(self) -> bool:
        return self.error is ErrorCode.NONE


def _as_int(value: object) -> int | None:
    """Truncate a numeric argument; None when it is not a finite number."""

    if not isinstance(value, (numbers.Real, Decimal)):
        return None
    try:
        return int(value)
    except (OverflowError, ValueError):
        return None


def set_locale(manip: Manip, value: object) -> ErrorCode:
    if not isinstance(value, Locale):
        return ErrorCode.LOCALE_ARG_IS_NO_LOCALE
    manip.config.locale = value
    return ErrorCode.NONE


def set_precision(manip: Manip, value: object) -> ErrorCode:
    precision = _as_int(value)
    if precision is None:
        return ErrorCode.PRECISION_ARG_IS_NOT_NUMERIC
    manip.config.precision = precision if precision >= 0 else DEFAULT_PRECISION
    return ErrorCode.NONE


def set_width(manip: Manip, value: object) -> ErrorCode:
    width = _as_int(value)
    if width is None:
        return ErrorCode.WIDTH_ARG_IS_NOT_NUMERIC
    if width < 0:
        width = -width
        manip.config.adjust = Adjust.LEFT
    manip.config.width = width
    return ErrorCode.NONE


def set_fill(manip: Manip, value: object) -> ErrorCode:
    if isinstance(value, str):
        if len(value) != 1:
            return ErrorCode.FILL_ARG_IS_NOT_CHAR
        manip.config.fill = value
        return ErrorCode.NONE
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= _MAX_CODEPOINT:
        manip.config.fill = chr(value)
        return ErrorCode.NONE
    return ErrorCode.FILL_ARG_IS_NOT_CHAR


_SETTERS: dict[Need, Callable[[Manip, object], ErrorCode]] = {
    Need.LOCALE: set_locale,
    Need.PRECISION: set_precision,
    Need.WIDTH: set_width,
    Need.FILL: set_fill,
}


def apply_binding(binding: Binding, value: object) -> ErrorCode:
    """Apply one argument to one directive; return the first error, if any."""

    manip = binding.manip
    for kind in MODIFIER_ORDER:
        if kind not in binding.kinds:
            continue
        error = _SETTERS[kind](manip, value)
        if error is not ErrorCode.NONE:
            return error
        manip.satisfy(kind)
    if Need.ARG not in binding.kinds:
        return ErrorCode.NONE
    if not manip.resolved:
        return ErrorCode.TOO_EARLY_ARGUMENT
    if Extension.IGNORE in manip.extensions:
        return ErrorCode.NONE
    try:
        manip.output = render(
            value,
            manip.config,
            string_npos=Extension.STRING_NPOS in manip.extensions,
        )
    except RenderError as exc:
        return exc.code
    return ErrorCode.NONE


class Dispatcher:
    """State machine feeding arguments into a compiled format."""

    def __init__(self, program: CompiledFormat) -> None:
        self.program = program
        self.cursor = 0
        self.state = DispatchState.IDLE
        self.error = ErrorCode.NONE
        self.text: str | None = None
        if program.argument_count == 0:
            self._complete()

    @classmethod
    def implicit_string(cls) -> Dispatcher:
        """A dispatcher equivalent to the format `%s`, built without parsing."""

        manip = Manip(specifier="s")
        allocation = allocate([Reference(Need.ARG, 0, 0)])
        program = CompiledFormat(
            text="",
            borders=[(0, 0)],
            manips=[manip],
            allocation=allocation,
            table=BindingTable.build(allocation, [manip]),
        )
        return cls(program)

    @property
    def pending(self) -> int:
        """Number of arguments still expected."""

        if self.state is not DispatchState.IDLE:
            return 0
        return self.program.argument_count - self.cursor

    def _result(self) -> DispatchResult:
        return DispatchResult(self.state, self.error, self.cursor)

    def _fail(self, code: ErrorCode) -> DispatchResult:
        self.state = DispatchState.FAILED
        self.error = code
        logger.debug("Dispatch failed.", error=str(code), cursor=self.cursor)
        return self._result()

    def _complete(self) -> None:
        program = self.program
        self.text = assemble(program.text, program.borders, program.manips)
        self.state = DispatchState.COMPLETE

    def feed(self, value: object) -> DispatchResult:
        if self.state is DispatchState.FAILED:
            return self._result()
        if self.state is DispatchState.COMPLETE:
            return self._fail(ErrorCode.TOO_MANY_ARGUMENTS)
        for binding in self.program.table.bindings_for(self.cursor):
            error = apply_binding(binding, value)
            if error is not ErrorCode.NONE:
                return self._fail(error)
        self.cursor += 1
        if self.cursor >= self.program.argument_count:
            self._complete()
        return self._result()
