"""Cyclopts CLI entry point for tsformat."""

from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Parameter

from tsformat import __version__
from tsformat.cli.config_cmd import register_config_commands
from tsformat.cli.format_cmd import register_format_commands
from tsformat.cli.output import OutputConfig, normalize_output_format
from tsformat.cli.output import emit as emit_output
from tsformat.lib.formatting import FormatContext
from tsformat.server.main import run_server

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Top-level options that apply to all commands."""

    output: OutputConfig
    verbosity: int = 0


_GLOBAL_OPTIONS: ContextVar[GlobalOptions | None] = ContextVar("_GLOBAL_OPTIONS", default=None)


def get_global_options() -> GlobalOptions:
    default = GlobalOptions(output=OutputConfig(format="text"))
    return _GLOBAL_OPTIONS.get() or default


def emit(payload: object) -> None:
    """Write command output using the current output mode."""

    emit_output(payload, get_global_options().output)


def text_mode() -> bool:
    return get_global_options().output.format == "text"


def _extract_global_options(argv: Sequence[str]) -> tuple[list[str], GlobalOptions]:
    json_mode = False
    porcelain_mode = False
    output_format: str | None = None
    verbosity = 0
    cleaned: list[str] = []

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            cleaned.extend(argv[i:])
            break
        if arg == "--json":
            json_mode = True
        elif arg == "--porcelain":
            porcelain_mode = True
        elif arg in {"--no-json", "--no-porcelain"}:
            pass
        elif arg in {"-v", "--verbose"}:
            verbosity += 1
        elif arg == "-vv":
            verbosity += 2
        elif arg == "--format":
            if i + 1 >= len(argv):
                raise SystemExit("--format requires a value")
            output_format = argv[i + 1]
            i += 1
        elif arg.startswith("--format="):
            output_format = arg.partition("=")[2]
        else:
            cleaned.append(arg)
        i += 1

    resolved = normalize_output_format(
        requested=output_format,
        json_mode=json_mode,
        porcelain_mode=porcelain_mode,
    )
    output = OutputConfig(format=resolved, context=FormatContext(verbosity=verbosity))
    return cleaned, GlobalOptions(output=output, verbosity=verbosity)


app = App(
    name="tsformat",
    help="Typesafe printf-style formatting",
    version=__version__,
    help_formatter="plain",
)


@app.default
def root(
    json_mode: Annotated[
        bool,
        Parameter(name="--json", help="Emit command output as JSON."),
    ] = False,
    output_format: Annotated[
        str | None,
        Parameter(name="--format", help="Set output format: text, json, or porcelain."),
    ] = None,
    porcelain: Annotated[
        bool,
        Parameter(name="--porcelain", help="Emit stable tab-separated key/value output."),
    ] = False,
) -> None:
    """tsformat root command with global options."""

    _ = (json_mode, output_format, porcelain)
    app.help_print()


@app.command(name="serve")
def serve() -> None:
    """Start the MCP server on stdio."""

    run_server()


format_app = App(name="format", help="Format string commands", help_formatter="plain")
config_app = App(name="config", help="Project config commands", help_formatter="plain")

app.command(format_app, name="format")
app.command(config_app, name="config")


_REGISTERED_CLI_COMMANDS: set[str] = set()
_REGISTERED_CLI_DESCRIPTIONS: dict[str, str] = {}


def _register_group_commands() -> None:
    modules = (
        register_format_commands(format_app, emit, text_mode),
        register_config_commands(config_app, emit),
    )
    for commands, descriptions in modules:
        _REGISTERED_CLI_COMMANDS.update(commands)
        _REGISTERED_CLI_DESCRIPTIONS.update(descriptions)


def get_registered_cli_commands() -> set[str]:
    """Expose CLI operation command names for parity tests."""

    return set(_REGISTERED_CLI_COMMANDS)


def get_registered_cli_descriptions() -> dict[str, str]:
    return dict(_REGISTERED_CLI_DESCRIPTIONS)


def _operation_error_message(exc: Exception) -> str:
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    message = str(exc).strip()
    return message or exc.__class__.__name__


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point used by `tsformat` and `python -m tsformat`."""

    from tsformat.lib.logging import configure_logging

    args = list(sys.argv[1:] if argv is None else argv)
    cleaned_args, options = _extract_global_options(args)
    # Logging goes to stderr before any command runs so stdout stays clean.
    configure_logging(json_mode=options.output.format == "json", verbosity=options.verbosity)

    token = _GLOBAL_OPTIONS.set(options)
    try:
        try:
            app(cleaned_args)
        except (KeyError, ValueError, OSError) as exc:
            print(f"error: {_operation_error_message(exc)}", file=sys.stderr)
            raise SystemExit(1) from None
    finally:
        _GLOBAL_OPTIONS.reset(token)


_register_group_commands()
