"""Operations shared by the command line and the MCP server."""

from tsformat.lib.ops.registry import (
    OperationSpec,
    get_all_operations,
    get_mcp_tool_names,
    operation,
)

__all__ = [
    "OperationSpec",
    "get_all_operations",
    "get_mcp_tool_names",
    "operation",
]
