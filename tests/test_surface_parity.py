"""Surface parity checks between registry, CLI, and MCP server."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from tsformat.cli.main import get_registered_cli_commands, get_registered_cli_descriptions
from tsformat.lib.ops.registry import (
    OperationSpec,
    get_all_operations,
    get_mcp_tool_names,
    operation,
)
from tsformat.server.main import get_registered_mcp_descriptions, get_registered_mcp_tools


@dataclass(frozen=True, slots=True)
class _SampleInput:
    pass


@dataclass(frozen=True, slots=True)
class _SampleOutput:
    ok: bool


async def _sample_async(_: _SampleInput) -> _SampleOutput:
    return _SampleOutput(ok=True)


def _sample_spec(name: str, **overrides: bool) -> OperationSpec[_SampleInput, _SampleOutput]:
    return OperationSpec[_SampleInput, _SampleOutput](
        name=name,
        handler=_sample_async,
        input_type=_SampleInput,
        output_type=_SampleOutput,
        cli_group="sample",
        cli_name="sample",
        mcp_name="sample_sample",
        description="sample",
        **overrides,
    )


def test_every_operation_has_both_surfaces() -> None:
    cli_commands = get_registered_cli_commands()
    mcp_tools = get_registered_mcp_tools()

    for op in get_all_operations():
        if op.on_mcp:
            assert op.mcp_name in mcp_tools, (
                f"{op.name} missing MCP tool (set cli_only=True if intentional)"
            )
        if op.on_cli:
            assert op.cli_command in cli_commands, (
                f"{op.name} missing CLI command (set mcp_only=True if intentional)"
            )


def test_expected_operations_are_registered() -> None:
    assert {op.name for op in get_all_operations()} == {
        "config.show",
        "format.errors",
        "format.explain",
        "format.render",
    }
    assert get_mcp_tool_names() == frozenset(get_registered_mcp_tools())


def test_cli_help_matches_mcp_description() -> None:
    cli_descriptions = get_registered_cli_descriptions()
    mcp_descriptions = get_registered_mcp_descriptions()

    for op in get_all_operations():
        if op.on_cli and op.on_mcp:
            assert cli_descriptions[op.name] == mcp_descriptions[op.name]


def test_duplicate_operation_name_guard() -> None:
    with pytest.raises(ValueError, match="Duplicate operation name"):
        operation(_sample_spec("format.render"))


def test_operation_cannot_be_exclusive_to_both_surfaces() -> None:
    with pytest.raises(ValueError, match="cannot be both cli_only and mcp_only"):
        operation(_sample_spec("sample.both", cli_only=True, mcp_only=True))
