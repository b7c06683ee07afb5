"""CLI command handlers for config.* operations."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from tsformat.cli._commands import Emitter, SyncHandler, register_group
from tsformat.lib.ops.config import ConfigShowInput

if TYPE_CHECKING:
    from cyclopts import App


def _config_show(
    emit: Emitter,
    run: SyncHandler,
    *,
    project_root: Annotated[
        str | None,
        Parameter(name="--project-root", help="Read config from this project instead."),
    ] = None,
) -> None:
    emit(run(ConfigShowInput(project_root=project_root)))


def register_config_commands(app: App, emit: Emitter) -> tuple[set[str], dict[str, str]]:
    return register_group(
        app, "config", {"config.show": lambda run: partial(_config_show, emit, run)}
    )
