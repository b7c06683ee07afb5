"""Operation registry: one spec per operation, read by both the CLI and MCP."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


@dataclass(frozen=True, slots=True)
class OperationSpec(Generic[InputT, OutputT]):
    name: str
    handler: Callable[[InputT], Coroutine[Any, Any, OutputT]]
    input_type: type[InputT]
    output_type: type[OutputT]
    cli_group: str
    cli_name: str
    mcp_name: str
    description: str
    sync_handler: Callable[[InputT], OutputT] | None = None
    cli_only: bool = False
    mcp_only: bool = False

    @property
    def cli_command(self) -> str:
        """Dotted `group.command` name the CLI registers this operation under."""

        return f"{self.cli_group}.{self.cli_name}"

    @property
    def on_cli(self) -> bool:
        return not self.mcp_only

    @property
    def on_mcp(self) -> bool:
        return not self.cli_only


_REGISTRY: dict[str, OperationSpec[Any, Any]] = {}
_bootstrapped = False


def operation(spec: OperationSpec[InputT, OutputT]) -> OperationSpec[InputT, OutputT]:
    """Register an operation; names must be unique."""

    if spec.cli_only and spec.mcp_only:
        raise ValueError(f"Operation '{spec.name}' cannot be both cli_only and mcp_only")
    if spec.name in _REGISTRY:
        raise ValueError(f"Duplicate operation name '{spec.name}'")
    _REGISTRY[spec.name] = spec
    return spec


def get_all_operations() -> list[OperationSpec[Any, Any]]:
    """Return all registered operations sorted by name."""

    _ensure_bootstrapped()
    return [_REGISTRY[name] for name in sorted(_REGISTRY)]


def get_cli_operations(group: str) -> list[OperationSpec[Any, Any]]:
    """Operations shown under one CLI command group."""

    return [spec for spec in get_all_operations() if spec.cli_group == group and spec.on_cli]


def get_mcp_tool_names() -> frozenset[str]:
    """MCP tool names of every operation not restricted to the CLI."""

    return frozenset(spec.mcp_name for spec in get_all_operations() if spec.on_mcp)


def _ensure_bootstrapped() -> None:
    global _bootstrapped
    if _bootstrapped:
        return
    # Operation modules register themselves on import.
    import tsformat.lib.ops.config as config_ops
    import tsformat.lib.ops.format as format_ops

    _ = (config_ops, format_ops)
    _bootstrapped = True
