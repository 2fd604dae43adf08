"""MCP transport adapter.

Binds a Dispatcher to the MCP low-level server so that ``tools/list`` and
``tools/call`` requests arriving on stdin are answered on stdout.

Usage:
    server = build_server(dispatcher)
    await serve_stdio(server)
"""

import asyncio
import logging
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from tool_server.dispatcher import Dispatcher
from tool_server.execution import ToolCallRequest

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-server"
SERVER_VERSION = "1.0.0"


class ToolServer:
    """Serializes protocol requests onto a Dispatcher.

    Calls are handled one at a time, in arrival order.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        name: str = SERVER_NAME,
        version: str = SERVER_VERSION,
    ):
        self.dispatcher = dispatcher
        self.name = name
        self.version = version
        self._lock = asyncio.Lock()
        self.server: Server = Server(name, version=version)
        self._bind()

    def _bind(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [d.to_mcp() for d in self.dispatcher.descriptors()]

        # Arguments are validated once, by the dispatcher.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> types.CallToolResult:
            return await self.call_tool(name, arguments)

    async def call_tool(
        self, name: str, arguments: Optional[dict[str, Any]]
    ) -> types.CallToolResult:
        request = ToolCallRequest(name=name, arguments=arguments or {})
        async with self._lock:
            result = await self.dispatcher.dispatch(request)
        return result.to_mcp()

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=self.name,
            server_version=self.version,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

    async def serve_stdio(self) -> None:
        """Run until stdin is closed."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP 服务器正在运行...")
            await self.server.run(
                read_stream,
                write_stream,
                self.initialization_options(),
            )
        logger.info("stdin closed, shutting down")
