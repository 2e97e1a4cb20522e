"""MCP server surface for the bridge."""

from ide_bridge.server.instructions import get_instructions
from ide_bridge.server.mcp_server import BridgeMcpServer, ToolCallFailed, create_mcp_server

__all__ = [
    "BridgeMcpServer",
    "ToolCallFailed",
    "create_mcp_server",
    "get_instructions",
]
