"""Destinations the rendered text is written to."""

from __future__ import annotations

from typing import Protocol, TextIO, cast, runtime_checkable

from tsformat.lib.errors import ErrorCode, SinkError


@runtime_checkable
class Sink(Protocol):
    def write(self, text: str) -> int: ...

    def flush(self) -> None: ...


class StringSink:
    """Collect written text in a list, optionally one the caller owns."""

    def __init__(self, target: list[str] | None = None) -> None:
        self.parts: list[str] = target if target is not None else []

    def write(self, text: str) -> int:
        self.parts.append(text)
        return len(text)

    def flush(self) -> None:
        return None

    @property
    def value(self) -> str:
        return "".join(self.parts)

    def __repr__(self) -> str:
        return f"StringSink({self.value!r})"


class StreamSink:
    """Write to a text stream, translating stream failures into sink errors."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def write(self, text: str) -> int:
        try:
            written = self.stream.write(text)
        except (OSError, ValueError) as exc:
            raise SinkError(ErrorCode.WRITE_FAILED) from exc
        # Some file-like objects return None from write().
        return len(text) if written is None else written

    def flush(self) -> None:
        try:
            self.stream.flush()
        except (OSError, ValueError) as exc:
            raise SinkError(ErrorCode.FLUSH_FAILED) from exc

    def __repr__(self) -> str:
        return f"StreamSink({self.stream!r})"


def as_sink(target: object) -> Sink | None:
    """Adapt None, a list of strings, a sink, or a text stream."""

    if target is None:
        return None
    if isinstance(target, StringSink | StreamSink):
        return target
    if isinstance(target, list):
        return StringSink(target)
    if callable(getattr(target, "write", None)):
        return StreamSink(cast("TextIO", target))
    raise TypeError(f"Unsupported sink: {type(target).__name__}")
