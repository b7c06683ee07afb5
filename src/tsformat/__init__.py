"""Typesafe printf-style formatting with positional argument binding."""

from tsformat.lib.errors import ErrorCode, NotRenderable, RenderError, describe
from tsformat.lib.format import Format, Print, PrintError, Say, SayError, render
from tsformat.lib.numpunct import Locale
from tsformat.lib.policy import AbortPolicy, ReportPolicy, Status, report
from tsformat.lib.render import NO_POSITION, RenderConfig, Renderable
from tsformat.lib.sink import StreamSink, StringSink
from tsformat.lib.special import Special

__version__ = "0.1.0"

__all__ = [
    "NO_POSITION",
    "AbortPolicy",
    "ErrorCode",
    "Format",
    "Locale",
    "NotRenderable",
    "Print",
    "PrintError",
    "RenderConfig",
    "RenderError",
    "Renderable",
    "ReportPolicy",
    "Say",
    "SayError",
    "Special",
    "Status",
    "StreamSink",
    "StringSink",
    "__version__",
    "describe",
    "render",
    "report",
]
