"""Stdio MCP server that re-exposes the upstream tool catalog.

The catalog is fetched once before the stdio transport is attached, so a
``BridgeServer`` only ever exists with a catalog in hand. ``tools/list`` is a
projection of that catalog; ``tools/call`` is forwarded to the upstream.
"""

import logging
from typing import Any

import httpx
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .config import Settings
from .errors import TransportError
from .models.tool import Catalog
from .services.catalog_fetcher import fetch_catalog
from .services.schema_translator import translate_catalog_schema
from .services.tool_invoker import ToolInvoker

logger = logging.getLogger(__name__)

SERVER_NAME = "speclan-mcp-bridge"


class BridgeServer:
    """Serves a fetched catalog over MCP and forwards calls upstream"""

    def __init__(self, base_url: str, catalog: Catalog, invoker: ToolInvoker | None = None):
        self.base_url = base_url.rstrip("/")
        self.catalog = catalog
        self.invoker = invoker or ToolInvoker(self.base_url)

    def list_tools(self) -> list[types.Tool]:
        """Project the cached catalog into MCP tool definitions."""
        return [
            types.Tool(
                name=tool.name,
                description=tool.description or "",
                inputSchema=translate_catalog_schema(tool.parameter_schema),
            )
            for tool in self.catalog.tools
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        """Forward a call to the upstream; unknown names are not rejected here."""
        logger.info(f"Calling tool: {name}")
        return await self.invoker.invoke(name, arguments or {})

    def build_server(self) -> Server:
        """Create the MCP server with handlers bound to this bridge."""
        server = Server(SERVER_NAME, version=__version__)

        @server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return self.list_tools()

        # Arguments are forwarded untyped; the upstream owns validation
        @server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
            return await self.call_tool(name, arguments)

        return server

    async def serve(self) -> None:
        """Attach the stdio transport and serve until the client disconnects."""
        server = self.build_server()
        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info("Bridge running on stdio")
                await server.run(
                    read_stream,
                    write_stream,
                    server.create_initialization_options(),
                )
        except OSError as e:
            raise TransportError(f"Failed to attach stdio transport: {e}") from e

    async def aclose(self) -> None:
        await self.invoker.aclose()


async def run_bridge(settings: Settings) -> None:
    """Fetch the catalog, then serve it on stdio.

    Raises:
        CatalogFetchError: If the catalog could not be fetched
        TransportError: If the stdio transport could not be attached
    """
    base_url = settings.base_url
    logger.info(f"Connecting to Speclan HTTP MCP at {base_url}")

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        catalog = await fetch_catalog(
            base_url,
            max_attempts=settings.fetch_max_attempts,
            delay_ms=settings.fetch_delay_ms,
            client=client,
        )
        logger.info(f"Loaded {len(catalog)} tools")

        bridge = BridgeServer(base_url, catalog, ToolInvoker(base_url, client))
        await bridge.serve()
