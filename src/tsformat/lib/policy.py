"""Failure policies: abort the process or report through a status slot."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import TextIO

from tsformat.lib.errors import ErrorCode, describe


@dataclass(slots=True)
class Status:
    """Caller-owned slot mirroring the state of one format object."""

    success: bool = True
    error: ErrorCode = ErrorCode.NONE

    def update(self, code: ErrorCode) -> None:
        self.error = code
        self.success = code is ErrorCode.NONE


@dataclass(frozen=True, slots=True)
class AbortPolicy:
    """Print a diagnostic and abort on the first error."""

    stream: TextIO | None = None

    def record(self, code: ErrorCode) -> None:
        return None

    def fail(self, source: str, code: ErrorCode) -> None:
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(f'tsformat "{source}": {describe(code)}\n')
        stream.flush()
        os.abort()


@dataclass(frozen=True, slots=True)
class ReportPolicy:
    """Record errors in an optional status slot and let the object go inert."""

    status: Status | None = None

    def record(self, code: ErrorCode) -> None:
        if self.status is not None:
            self.status.update(code)

    def fail(self, source: str, code: ErrorCode) -> None:
        self.record(code)


type Policy = AbortPolicy | ReportPolicy


def report(status: Status | None = None) -> ReportPolicy:
    """Shorthand for `ReportPolicy(status)`."""

    return ReportPolicy(status)
