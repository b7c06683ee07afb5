"""Format operations: render, explain and the error catalogue."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from tsformat.lib.config._paths import resolve_project_root
from tsformat.lib.config.settings import TsformatConfig, load_config
from tsformat.lib.engine.dispatch import DispatchState
from tsformat.lib.engine.manip import extension_names, need_names
from tsformat.lib.engine.program import compile_format
from tsformat.lib.errors import (
    OUTPUT_ERRORS,
    SYNTAX_ERRORS,
    ErrorCode,
    FormatSyntaxError,
    describe,
)
from tsformat.lib.format import Format
from tsformat.lib.numpunct import Locale
from tsformat.lib.ops.registry import OperationSpec, operation
from tsformat.lib.policy import ReportPolicy, Status

if TYPE_CHECKING:
    from tsformat.lib.formatting import FormatContext

logger = structlog.get_logger(__name__)

LOCALE_PREFIX = "locale:"
_BOOL_WORDS = {"true": True, "false": False}


def coerce_argument(token: str, *, typed: bool = True, locale: str | None = None) -> object:
    """Turn one command-line token into a typed argument value.

    `true`/`false` become booleans, integer and float literals become numbers,
    and `locale:NAME` becomes a `Locale` (`locale:` alone uses `locale`, or the
    classic locale when that is unset). Everything else stays text. With
    `typed=False` every token stays text.
    """

    if not typed:
        return token
    lowered = token.strip().lower()
    if lowered in _BOOL_WORDS:
        return _BOOL_WORDS[lowered]
    if token.startswith(LOCALE_PREFIX):
        name = token[len(LOCALE_PREFIX) :] or locale
        return Locale.named(name) if name else Locale.classic()
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return float(token)
    except ValueError:
        return token


def coerce_arguments(
    tokens: Sequence[str], *, typed: bool = True, locale: str | None = None
) -> list[object]:
    return [coerce_argument(token, typed=typed, locale=locale) for token in tokens]


def _load_project_config(project_root: str | None) -> TsformatConfig:
    explicit = Path(project_root) if project_root else None
    return load_config(resolve_project_root(explicit))


@dataclass(frozen=True, slots=True)
class FeedOutcome:
    """What happened while feeding a sequence of values into a format."""

    formatted: Format
    required: int
    consumed: int


def feed_values(formatted: Format, values: Sequence[object]) -> FeedOutcome:
    """Feed `values` until the first failure; count what was accepted."""

    required = formatted.pending
    consumed = 0
    for value in values:
        result = formatted.feed(value)
        if result.state is DispatchState.FAILED:
            break
        consumed += 1
    return FeedOutcome(formatted=formatted, required=required, consumed=consumed)


# -- format.render ----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FormatRenderInput:
    format: str
    arguments: list[str] = field(default_factory=list)
    raw: bool = False
    project_root: str | None = None


@dataclass(frozen=True, slots=True)
class FormatRenderOutput:
    ok: bool
    text: str
    error: str
    message: str
    consumed: int
    required: int

    def format_text(self, ctx: FormatContext | None = None) -> str:
        _ = ctx
        if self.ok:
            return self.text
        return f"error: {self.message} ({self.error})"


def format_render_sync(payload: FormatRenderInput) -> FormatRenderOutput:
    config = _load_project_config(payload.project_root)
    values = coerce_arguments(
        payload.arguments,
        typed=config.typed_arguments and not payload.raw,
        locale=config.locale,
    )
    outcome = feed_values(Format(payload.format, policy=ReportPolicy(Status())), values)
    formatted = outcome.formatted
    text = formatted.text
    logger.debug(
        "Rendered format.",
        format=payload.format,
        error=str(formatted.error),
        consumed=outcome.consumed,
    )
    return FormatRenderOutput(
        ok=formatted.ok,
        text=text,
        error=str(formatted.error),
        message=describe(formatted.error),
        consumed=outcome.consumed,
        required=outcome.required,
    )


async def format_render(payload: FormatRenderInput) -> FormatRenderOutput:
    return await asyncio.to_thread(format_render_sync, payload)


# -- format.explain ---------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FormatExplainInput:
    format: str


@dataclass(frozen=True, slots=True)
class DirectiveInfo:
    index: int
    start: int
    end: int
    directive: str
    specifier: str
    extensions: tuple[str, ...]
    modifiers: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class BindingInfo:
    """Targets fed by one argument, numbered from 1 as in the format syntax."""

    argument: int
    targets: tuple[tuple[int, tuple[str, ...]], ...]


@dataclass(frozen=True, slots=True)
class FormatExplainOutput:
    ok: bool
    text: str
    required: int
    directives: tuple[DirectiveInfo, ...] = ()
    bindings: tuple[BindingInfo, ...] = ()
    error: str = str(ErrorCode.NONE)
    message: str = ""
    offset: int | None = None

    def format_text(self, ctx: FormatContext | None = None) -> str:
        from tsformat.cli.format_helpers import kv_block, tabular

        _ = ctx
        if not self.ok:
            return kv_block(
                [
                    ("error", f"{self.message} ({self.error})"),
                    ("offset", str(self.offset) if self.offset is not None else None),
                ]
            )
        lines = [kv_block([("text", repr(self.text)), ("arguments", str(self.required))])]
        if self.directives:
            rows = [["#", "directive", "specifier", "modifiers", "extensions"]]
            for item in self.directives:
                rows.append(
                    [
                        str(item.index),
                        item.directive,
                        item.specifier,
                        ",".join(item.modifiers) or "-",
                        ",".join(item.extensions) or "-",
                    ]
                )
            lines.append(tabular(rows))
        if self.bindings:
            rows = [["argument", "feeds"]]
            for binding in self.bindings:
                feeds = " ".join(
                    f"#{index}:{'+'.join(kinds)}" for index, kinds in binding.targets
                )
                rows.append([str(binding.argument), feeds])
            lines.append(tabular(rows))
        return "\n\n".join(lines)


def format_explain_sync(payload: FormatExplainInput) -> FormatExplainOutput:
    try:
        program = compile_format(payload.format)
    except FormatSyntaxError as exc:
        return FormatExplainOutput(
            ok=False,
            text="",
            required=0,
            error=str(exc.code),
            message=describe(exc.code),
            offset=exc.offset,
        )

    directives = tuple(
        DirectiveInfo(
            index=index,
            start=start,
            end=end,
            directive=program.text[start:end],
            specifier=manip.specifier,
            extensions=extension_names(manip.extensions),
            modifiers=need_names(manip.need),
        )
        for index, ((start, end), manip) in enumerate(
            zip(program.borders, program.manips, strict=True)
        )
    )
    bindings = tuple(
        BindingInfo(
            argument=slot + 1,
            targets=tuple((item.manip_index, need_names(item.kinds)) for item in bound),
        )
        for slot, bound in program.table
    )
    return FormatExplainOutput(
        ok=True,
        text=program.text,
        required=program.argument_count,
        directives=directives,
        bindings=bindings,
    )


async def format_explain(payload: FormatExplainInput) -> FormatExplainOutput:
    return await asyncio.to_thread(format_explain_sync, payload)


# -- format.errors ----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FormatErrorsInput:
    pass


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    code: str
    category: str
    description: str


@dataclass(frozen=True, slots=True)
class FormatErrorsOutput:
    errors: tuple[ErrorInfo, ...]

    def format_text(self, ctx: FormatContext | None = None) -> str:
        from tsformat.cli.format_helpers import tabular

        _ = ctx
        return tabular([[item.code, item.category, item.description] for item in self.errors])


def _category(code: ErrorCode) -> str:
    if code is ErrorCode.NONE:
        return "none"
    if code in SYNTAX_ERRORS:
        return "syntax"
    if code in OUTPUT_ERRORS:
        return "output"
    return "argument"


def format_errors_sync(payload: FormatErrorsInput) -> FormatErrorsOutput:
    _ = payload
    return FormatErrorsOutput(
        errors=tuple(
            ErrorInfo(code=str(code), category=_category(code), description=describe(code))
            for code in ErrorCode
        )
    )


async def format_errors(payload: FormatErrorsInput) -> FormatErrorsOutput:
    return await asyncio.to_thread(format_errors_sync, payload)


operation(
    OperationSpec[FormatRenderInput, FormatRenderOutput](
        name="format.render",
        handler=format_render,
        sync_handler=format_render_sync,
        input_type=FormatRenderInput,
        output_type=FormatRenderOutput,
        cli_group="format",
        cli_name="render",
        mcp_name="format_render",
        description="Render a format string with the given arguments.",
    )
)

operation(
    OperationSpec[FormatExplainInput, FormatExplainOutput](
        name="format.explain",
        handler=format_explain,
        sync_handler=format_explain_sync,
        input_type=FormatExplainInput,
        output_type=FormatExplainOutput,
        cli_group="format",
        cli_name="explain",
        mcp_name="format_explain",
        description="Show directives and argument bindings of a format string.",
    )
)

operation(
    OperationSpec[FormatErrorsInput, FormatErrorsOutput](
        name="format.errors",
        handler=format_errors,
        sync_handler=format_errors_sync,
        input_type=FormatErrorsInput,
        output_type=FormatErrorsOutput,
        cli_group="format",
        cli_name="errors",
        mcp_name="format_errors",
        description="List every error code with its description.",
    )
)
