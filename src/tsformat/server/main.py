"""FastMCP server exposing the operation registry as tools."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, cast

from mcp.server.fastmcp import FastMCP

from tsformat.lib.logging import configure_logging
from tsformat.lib.ops import OperationSpec, get_all_operations
from tsformat.lib.ops.codec import coerce_input_payload, signature_from_dataclass
from tsformat.lib.serialization import to_jsonable

INSTRUCTIONS = (
    "Typesafe printf-style formatting. Directives look like "
    "%[N$][flags][width][.precision]specifier; arguments are numbered from 1. "
    "Call format_explain to see how arguments bind before calling format_render."
)

_REGISTERED_MCP_TOOLS: set[str] = set()
_REGISTERED_MCP_DESCRIPTIONS: dict[str, str] = {}


@asynccontextmanager
async def lifespan(_: FastMCP[Any]):
    # stdout carries the protocol; logs go to stderr as JSON.
    configure_logging(json_mode=True)
    yield {"ready": True}


mcp = FastMCP("tsformat", instructions=INSTRUCTIONS, lifespan=lifespan)


def _tool_for(op: OperationSpec[Any, Any]) -> Any:
    """Wrap an async operation handler as a keyword-argument MCP tool."""

    async def _tool(**kwargs: object) -> object:
        return to_jsonable(await op.handler(coerce_input_payload(op.input_type, kwargs)))

    _tool.__name__ = op.mcp_name
    _tool.__doc__ = op.description
    cast("Any", _tool).__signature__ = signature_from_dataclass(op.input_type)
    return _tool


def _register_operation_tools() -> None:
    for op in get_all_operations():
        if not op.on_mcp:
            continue
        mcp.tool(name=op.mcp_name, description=op.description)(_tool_for(op))
        _REGISTERED_MCP_TOOLS.add(op.mcp_name)
        _REGISTERED_MCP_DESCRIPTIONS[op.name] = op.description


def get_registered_mcp_tools() -> set[str]:
    return set(_REGISTERED_MCP_TOOLS)


def get_registered_mcp_descriptions() -> dict[str, str]:
    return dict(_REGISTERED_MCP_DESCRIPTIONS)


def run_server() -> None:
    """Serve the tools over stdio until the client disconnects."""

    mcp.run(transport="stdio")


_register_operation_tools()
