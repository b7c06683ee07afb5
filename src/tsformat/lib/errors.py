"""Error taxonomy shared by the parser, dispatcher, renderer and sinks."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    NONE = "none"
    WRITE_FAILED = "write_failed"
    FLUSH_FAILED = "flush_failed"
    TOO_MANY_ARGUMENTS = "too_many_arguments"
    TOO_FEW_ARGUMENTS = "too_few_arguments"
    TOO_EARLY_ARGUMENT = "too_early_argument"
    LOCALE_ARG_IS_NO_LOCALE = "locale_arg_is_no_locale"
    LOCALE_MUST_NOT_BE_OUTPUT = "locale_must_not_be_output"
    PRECISION_ARG_IS_NOT_NUMERIC = "precision_arg_is_not_numeric"
    WIDTH_ARG_IS_NOT_NUMERIC = "width_arg_is_not_numeric"
    FILL_ARG_IS_NOT_CHAR = "fill_arg_is_not_char"
    TRAILING_PERCENTAGE = "trailing_percentage"
    NUMBER_WITHOUT_DOLLAR = "number_without_dollar"
    NUMBER_OVERFLOW = "number_overflow"
    MISSING_SPECIFIER = "missing_specifier"
    UNKNOWN_SPECIFIER = "unknown_specifier"
    MISSING_FILL_CHARACTER = "missing_fill_character"
    NOT_RENDERABLE = "not_renderable"


_DESCRIPTIONS: dict[ErrorCode, str] = {
    ErrorCode.NONE: "",
    ErrorCode.WRITE_FAILED: "not all data was properly written",
    ErrorCode.FLUSH_FAILED: "flush failed",
    ErrorCode.TOO_MANY_ARGUMENTS: "too many arguments passed (or too few specified)",
    ErrorCode.TOO_FEW_ARGUMENTS: "too few arguments passed (or too many specified)",
    ErrorCode.TOO_EARLY_ARGUMENT: (
        "too early argument, e.g. a width is passed only after the argument"
    ),
    ErrorCode.LOCALE_ARG_IS_NO_LOCALE: "argument for ~ is not a locale",
    ErrorCode.LOCALE_MUST_NOT_BE_OUTPUT: "locale argument must not be output",
    ErrorCode.PRECISION_ARG_IS_NOT_NUMERIC: "argument for . is not numeric",
    ErrorCode.WIDTH_ARG_IS_NOT_NUMERIC: "argument for width is not numeric",
    ErrorCode.FILL_ARG_IS_NOT_CHAR: "argument for fill is not a character",
    ErrorCode.TRAILING_PERCENTAGE: "trailing % sign",
    ErrorCode.NUMBER_WITHOUT_DOLLAR: "argument number without trailing $",
    ErrorCode.NUMBER_OVERFLOW: "number overflow",
    ErrorCode.MISSING_SPECIFIER: "missing specifier",
    ErrorCode.UNKNOWN_SPECIFIER: "unknown specifier",
    ErrorCode.MISSING_FILL_CHARACTER: "missing fill character",
    ErrorCode.NOT_RENDERABLE: "argument cannot be rendered as text",
}

SYNTAX_ERRORS: frozenset[ErrorCode] = frozenset(
    {
        ErrorCode.TRAILING_PERCENTAGE,
        ErrorCode.NUMBER_WITHOUT_DOLLAR,
        ErrorCode.NUMBER_OVERFLOW,
        ErrorCode.MISSING_SPECIFIER,
        ErrorCode.UNKNOWN_SPECIFIER,
        ErrorCode.MISSING_FILL_CHARACTER,
    }
)

OUTPUT_ERRORS: frozenset[ErrorCode] = frozenset(
    {ErrorCode.WRITE_FAILED, ErrorCode.FLUSH_FAILED}
)


def describe(code: ErrorCode) -> str:
    """Return the human-readable diagnostic for one error code."""

    return _DESCRIPTIONS[code]


class FormatSyntaxError(ValueError):
    """Raised by the parser when the format string itself is malformed."""

    def __init__(self, code: ErrorCode, offset: int) -> None:
        self.code = code
        self.offset = offset
        super().__init__(f"{describe(code)} at offset {offset}")


class RenderError(Exception):
    """Raised when a value cannot be turned into text."""

    code: ErrorCode = ErrorCode.NOT_RENDERABLE

    def __init__(self, message: str = "", *, code: ErrorCode | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(message or describe(self.code))


class NotRenderable(RenderError):
    """Raised by `__tsformat__` implementations that decline a configuration."""


class SinkError(OSError):
    """Raised by sinks when writing or flushing fails."""

    def __init__(self, code: ErrorCode, written: int = 0) -> None:
        self.code = code
        self.written = written
        super().__init__(describe(code))
