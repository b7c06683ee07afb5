"""Typesafe printf-style format objects.

A `Format` compiles its format string once, then accepts arguments one at a
time through `feed` (or the `%` operator). When the last required argument
arrives the text is assembled and, if a sink was given, written to it.
Errors go through the object's failure policy: the default aborts the
process, a `ReportPolicy` records the error and leaves the object inert.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import Self

import structlog

from tsformat.lib.engine.dispatch import Dispatcher, DispatchResult, DispatchState
from tsformat.lib.engine.program import compile_format
from tsformat.lib.errors import ErrorCode, FormatSyntaxError, SinkError
from tsformat.lib.policy import AbortPolicy, Policy
from tsformat.lib.sink import Sink, StreamSink, as_sink
from tsformat.lib.special import Special

logger = structlog.get_logger(__name__)

IMPLICIT_FORMAT = "%s"


class Format:
    def __init__(
        self,
        fmt: str | bool | None = None,
        special: Special = Special.NONE,
        *,
        sink: object = None,
        policy: Policy | None = None,
    ) -> None:
        self._policy: Policy = policy if policy is not None else AbortPolicy()
        self._special = Special(special)
        self._sink: Sink | None = as_sink(sink)
        self._error = ErrorCode.NONE
        self._count = 0
        self._text = ""
        self._completed = False
        self._dispatcher: Dispatcher | None = None

        if fmt is False:
            self._source = ""
            self._finish("")
            return
        if fmt is None or fmt is True:
            self._source = IMPLICIT_FORMAT
            dispatcher = Dispatcher.implicit_string()
        elif isinstance(fmt, str):
            self._source = fmt
            try:
                dispatcher = Dispatcher(compile_format(fmt))
            except FormatSyntaxError as exc:
                self._fail(exc.code)
                return
        else:
            raise TypeError(f"Format string must be str or bool, not {type(fmt).__name__}")

        if dispatcher.state is DispatchState.COMPLETE:
            self._finish(dispatcher.text or "")
            return
        self._dispatcher = dispatcher
        self._error = ErrorCode.TOO_FEW_ARGUMENTS
        self._policy.record(ErrorCode.TOO_FEW_ARGUMENTS)

    # -- state transitions -------------------------------------------------

    def _fail(self, code: ErrorCode) -> None:
        self._error = code
        self._dispatcher = None
        logger.debug("Format failed.", format=self._source, error=str(code))
        self._policy.fail(self._source, code)

    def _finish(self, text: str) -> None:
        self._dispatcher = None
        self._completed = True
        if Special.NEWLINE in self._special:
            text += "\n"
        self._text = text
        logger.debug("Format completed.", format=self._source, size=len(text))
        if self._sink is None:
            self._error = ErrorCode.NONE
            self._policy.record(ErrorCode.NONE)
            return
        self._write(self._sink)

    def _write(self, sink: Sink) -> bool:
        self._error = ErrorCode.NONE
        self._count = 0
        text = self._text
        if text:
            try:
                self._count = sink.write(text)
            except SinkError as exc:
                self._count = exc.written
                self._fail(exc.code)
                return False
            if self._count < len(text):
                self._fail(ErrorCode.WRITE_FAILED)
                return False
            if self.flush:
                try:
                    sink.flush()
                except SinkError as exc:
                    self._fail(exc.code)
                    return False
        self._policy.record(ErrorCode.NONE)
        return True

    def _check(self) -> bool:
        """Fail with TOO_FEW_ARGUMENTS if arguments are still expected."""

        if self._dispatcher is not None:
            self._fail(ErrorCode.TOO_FEW_ARGUMENTS)
            return False
        return True

    def _state(self) -> DispatchState:
        if self._dispatcher is not None:
            return self._dispatcher.state
        if self._completed and self._error is ErrorCode.NONE:
            return DispatchState.COMPLETE
        return DispatchState.FAILED

    # -- feeding -----------------------------------------------------------

    def feed(self, value: object) -> DispatchResult:
        """Supply the next argument."""

        dispatcher = self._dispatcher
        if dispatcher is None:
            if self._error is ErrorCode.NONE:
                self._fail(ErrorCode.TOO_MANY_ARGUMENTS)
            return DispatchResult(self._state(), self._error)
        result = dispatcher.feed(value)
        if result.state is DispatchState.FAILED:
            self._fail(result.error)
        elif result.state is DispatchState.COMPLETE:
            self._finish(dispatcher.text or "")
        return DispatchResult(self._state(), self._error, result.cursor)

    def feed_all(self, values: Iterable[object]) -> DispatchResult:
        result = DispatchResult(self._state(), self._error)
        for value in values:
            result = self.feed(value)
        return result

    def __mod__(self, value: object) -> Self:
        self.feed(value)
        return self

    # -- results -----------------------------------------------------------

    @property
    def text(self) -> str:
        """The rendered text; empty if the object failed before completing."""

        if not self._check() or not self._completed:
            return ""
        return self._text

    def __str__(self) -> str:
        return self.text

    @property
    def size(self) -> int:
        return len(self.text)

    @property
    def empty(self) -> bool:
        return not self.text

    def output(self, target: object) -> bool:
        """Write the rendered text to another sink; return whether it succeeded."""

        sink = as_sink(target)
        if sink is None:
            raise TypeError("output() needs a sink")
        if not self._check() or not self._completed:
            return False
        return self._write(sink)

    @property
    def error(self) -> ErrorCode:
        return self._error

    @property
    def ok(self) -> bool:
        return self._error is ErrorCode.NONE

    @property
    def state(self) -> DispatchState:
        return self._state()

    @property
    def count(self) -> int:
        """Characters accepted by the most recent sink write."""

        return self._count

    @property
    def pending(self) -> int:
        """Arguments still expected before the text is complete."""

        return self._dispatcher.pending if self._dispatcher is not None else 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def special(self) -> Special:
        return self._special

    @property
    def flush(self) -> bool:
        return Special.FLUSH in self._special

    @flush.setter
    def flush(self, enabled: bool) -> None:
        if enabled:
            self._special |= Special.FLUSH
        else:
            self._special &= ~Special.FLUSH

    def set_policy(self, policy: Policy) -> None:
        self._policy = policy

    # -- copying -----------------------------------------------------------

    def copy(self) -> Self:
        """Copy the result; an unfinished parse is never carried over."""

        clone = object.__new__(type(self))
        clone._policy = self._policy
        clone._special = self._special
        clone._sink = self._sink
        clone._error = self._error
        clone._count = self._count
        clone._text = self._text
        clone._completed = self._completed
        clone._source = self._source
        clone._dispatcher = None
        if self._dispatcher is not None:
            clone._error = ErrorCode.TOO_FEW_ARGUMENTS
        return clone

    def __copy__(self) -> Self:
        return self.copy()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._source!r}, state={self._state().value}, "
            f"error={self._error.value})"
        )


class Print(Format):
    """Format written to stdout when complete."""

    def __init__(
        self,
        fmt: str | bool | None = None,
        special: Special = Special.NONE,
        *,
        policy: Policy | None = None,
    ) -> None:
        super().__init__(fmt, special, sink=StreamSink(sys.stdout), policy=policy)


class PrintError(Format):
    """Format written to stderr when complete."""

    def __init__(
        self,
        fmt: str | bool | None = None,
        special: Special = Special.NONE,
        *,
        policy: Policy | None = None,
    ) -> None:
        super().__init__(fmt, special, sink=StreamSink(sys.stderr), policy=policy)


class Say(Print):
    """`Print` followed by a newline."""

    def __init__(
        self,
        fmt: str | bool | None = None,
        special: Special = Special.NONE,
        *,
        policy: Policy | None = None,
    ) -> None:
        super().__init__(fmt, special | Special.NEWLINE, policy=policy)


class SayError(PrintError):
    """`PrintError` followed by a newline."""

    def __init__(
        self,
        fmt: str | bool | None = None,
        special: Special = Special.NONE,
        *,
        policy: Policy | None = None,
    ) -> None:
        super().__init__(fmt, special | Special.NEWLINE, policy=policy)


def render(fmt: str | bool | None, *args: object, policy: Policy | None = None) -> str:
    """Format `args` with `fmt` in one call and return the text."""

    formatted = Format(fmt, policy=policy)
    formatted.feed_all(args)
    return formatted.text
