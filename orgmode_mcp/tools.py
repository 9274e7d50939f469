"""
MCP tools module for the Org-mode MCP Server.

No tools are offered yet; every call is rejected as an unknown tool.
"""

from typing import Any

from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, ErrorData, TextContent, Tool


async def list_tools() -> list[Tool]:
    """List available tools."""
    return []


async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))
