"""Registry bootstrap and CLI group wiring regression coverage."""

from __future__ import annotations

from typing import Any

import pytest

from tsformat.cli._commands import register_group
from tsformat.lib.ops.format import format_explain_sync
from tsformat.lib.ops.registry import get_all_operations, get_cli_operations


class _RecordingApp:
    def __init__(self) -> None:
        self.commands: dict[str, Any] = {}

    def command(self, handler: Any, *, name: str, help: str) -> None:
        self.commands[name] = handler


def test_get_all_operations_bootstraps_registry() -> None:
    operations = get_all_operations()
    assert operations, "Expected operation registry to bootstrap and register operations"
    assert [op.name for op in operations] == sorted(op.name for op in operations)


def test_cli_operations_are_grouped() -> None:
    names = [spec.cli_command for spec in get_cli_operations("format")]
    assert names == ["format.errors", "format.explain", "format.render"]
    assert get_cli_operations("nonexistent") == []


def test_register_group_passes_sync_handlers() -> None:
    received: dict[str, Any] = {}

    def factory_for(name: str) -> Any:
        def factory(run: Any) -> Any:
            received[name] = run
            return lambda: None

        return factory

    app: Any = _RecordingApp()
    names = ["format.errors", "format.explain", "format.render"]
    registered, descriptions = register_group(
        app,
        "format",
        {name: factory_for(name) for name in names},
    )

    assert registered == set(names)
    assert set(app.commands) == {"errors", "explain", "render"}
    assert received["format.explain"] is format_explain_sync
    assert app.commands["explain"].__name__ == "cmd_format_explain"
    assert descriptions.keys() == set(names)


def test_register_group_requires_every_handler() -> None:
    app: Any = _RecordingApp()
    partial_handlers = {
        "format.errors": lambda run: lambda: None,
        "format.explain": lambda run: lambda: None,
    }

    with pytest.raises(ValueError, match="format.render"):
        register_group(app, "format", partial_handlers)
