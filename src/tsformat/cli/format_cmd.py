"""CLI command handlers for format.* operations."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from tsformat.cli._commands import Emitter, SyncHandler, register_group
from tsformat.lib.config import load_config, resolve_project_root
from tsformat.lib.errors import describe
from tsformat.lib.format import Format, Print, Say
from tsformat.lib.ops.format import (
    FormatErrorsInput,
    FormatExplainInput,
    FormatRenderInput,
    coerce_arguments,
)
from tsformat.lib.policy import AbortPolicy, Policy, ReportPolicy
from tsformat.lib.special import Special

if TYPE_CHECKING:
    from cyclopts import App

TextModeCheck = Callable[[], bool]


def _print_rendered(format_string: str, arguments: tuple[str, ...], *, raw: bool) -> None:
    """Render straight to stdout through the library's own stdout sink."""

    config = load_config(resolve_project_root())
    values = coerce_arguments(
        arguments,
        typed=config.typed_arguments and not raw,
        locale=config.locale,
    )
    policy: Policy = AbortPolicy() if config.policy == "abort" else ReportPolicy()
    special = Special.FLUSH if config.flush else Special.NONE
    sink_type: type[Format] = Say if config.newline else Print
    formatted = sink_type(format_string, special, policy=policy)
    formatted.feed_all(values)
    # Reading the text reports missing arguments through the policy.
    _ = formatted.text
    if not formatted.ok:
        raise ValueError(f"{describe(formatted.error)} ({formatted.error})")


def _format_render(
    emit: Emitter,
    run: SyncHandler,
    text_mode: TextModeCheck,
    format_string: str,
    /,
    *arguments: str,
    raw: Annotated[
        bool,
        Parameter(name="--raw", help="Pass every argument as text, without type coercion."),
    ] = False,
) -> None:
    if text_mode():
        _print_rendered(format_string, arguments, raw=raw)
        return
    emit(
        run(
            FormatRenderInput(format=format_string, arguments=list(arguments), raw=raw)
        )
    )


def _format_explain(emit: Emitter, run: SyncHandler, format_string: str) -> None:
    emit(run(FormatExplainInput(format=format_string)))


def _format_errors(emit: Emitter, run: SyncHandler) -> None:
    emit(run(FormatErrorsInput()))


def register_format_commands(
    app: App, emit: Emitter, text_mode: TextModeCheck
) -> tuple[set[str], dict[str, str]]:
    return register_group(
        app,
        "format",
        {
            "format.render": lambda run: partial(_format_render, emit, run, text_mode),
            "format.explain": lambda run: partial(_format_explain, emit, run),
            "format.errors": lambda run: partial(_format_errors, emit, run),
        },
    )
