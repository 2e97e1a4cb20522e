"""MCP server exposing the tool registry over stdio.

Every call goes through `ToolInvoker`, so MCP clients see exactly the
envelopes the CLI sees: a success becomes a text content block, a failure
becomes an MCP error result carrying the error kind and message.
"""

from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from ide_bridge.telemetry import MCP_SERVER_STARTING, MCP_SERVER_STOPPED, TraceContext, get_logger
from ide_bridge.tools import SchemaStore, ToolFailure, ToolInvoker

log = get_logger(__name__)

SERVER_NAME = "ide-bridge"


class ToolCallFailed(Exception):
    """Raised inside the MCP handler so the SDK returns an error result."""

    def __init__(self, failure: ToolFailure) -> None:
        super().__init__(f"{failure.kind.value}: {failure.message}")
        self.failure = failure


class BridgeMcpServer:
    """Routes MCP `tools/list` and `tools/call` to the tool layer."""

    def __init__(
        self,
        invoker: ToolInvoker,
        store: SchemaStore,
        instructions: str | None = None,
        version: str | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            invoker: Dispatches tool calls.
            store: Supplies the input schemas advertised to clients.
            instructions: Text sent to the agent in the initialize response.
            version: Server version reported to clients.
        """
        self.invoker = invoker
        self.store = store
        self.server: Server = Server(SERVER_NAME, version=version, instructions=instructions)
        self._setup_routes()

    def _setup_routes(self) -> None:
        self.server.list_tools()(self.list_tools)
        # Arguments are normalized by the invoker, which also coerces loose types
        self.server.call_tool(validate_input=False)(self.call_tool)

    async def list_tools(self) -> list[types.Tool]:
        """List every registered tool with its declared schema."""
        tools = []
        for name in self.invoker.registry.list_tool_names():
            schema = self.store.get_schema(name)
            tools.append(
                types.Tool(
                    name=name,
                    description=schema.description,
                    inputSchema=schema.to_json_schema(),
                )
            )
        return tools

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        """Invoke a tool and return its payload as a single text block.

        Raises:
            ToolCallFailed: When the invoker returns a failure envelope.
        """
        result = await self.invoker.invoke(name, arguments or {}, trace_ctx=TraceContext.new_trace())
        if isinstance(result, ToolFailure):
            raise ToolCallFailed(result)
        return [types.TextContent(type="text", text=result.payload)]

    async def run_stdio(self) -> None:
        """Serve over stdin/stdout until the client disconnects."""
        log.info(MCP_SERVER_STARTING, transport="stdio", tools=self.invoker.registry.list_tool_names())
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            log.info(MCP_SERVER_STOPPED, transport="stdio")


def create_mcp_server(
    invoker: ToolInvoker,
    store: SchemaStore,
    instructions: str | None = None,
    version: str | None = None,
) -> BridgeMcpServer:
    """Build the MCP server for an invoker and its schema store."""
    return BridgeMcpServer(invoker, store, instructions=instructions, version=version)
