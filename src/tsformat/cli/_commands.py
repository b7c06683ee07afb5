"""Registry-driven wiring of operation handlers into cyclopts groups."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from tsformat.lib.ops.registry import get_cli_operations

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]
type SyncHandler = Callable[[Any], Any]
type HandlerFactory = Callable[[SyncHandler], Callable[..., None]]


def register_group(
    app: App, group: str, handlers: Mapping[str, HandlerFactory]
) -> tuple[set[str], dict[str, str]]:
    """Attach one command per registered operation of `group`.

    Each factory receives the operation's sync handler. Every CLI-visible
    operation needs a factory and a sync handler; the command's help text is
    the operation description so both surfaces read the same.
    """

    registered: set[str] = set()
    descriptions: dict[str, str] = {}
    for op in get_cli_operations(group):
        factory = handlers.get(op.name)
        if factory is None:
            raise ValueError(f"No CLI handler registered for operation '{op.name}'")
        if op.sync_handler is None:
            raise ValueError(f"Operation '{op.name}' has no sync handler for the CLI")
        handler = factory(op.sync_handler)
        handler.__name__ = f"cmd_{op.cli_group}_{op.cli_name}"
        app.command(handler, name=op.cli_name, help=op.description)
        registered.add(op.cli_command)
        descriptions[op.name] = op.description
    return registered, descriptions
