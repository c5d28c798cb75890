"""Forward tool calls to the upstream HTTP service and normalize the results"""

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx
from mcp import types
from pydantic import ValidationError

from ..models.tool import InvocationEnvelope

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


def error_result(message: str | None) -> types.CallToolResult:
    """Single-text error result; an empty message becomes the fallback."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=message or UNKNOWN_ERROR)],
        isError=True,
    )


def _coerce_text(item: Any) -> types.TextContent:
    # Only text content is representable; other item types are flattened
    if isinstance(item, dict):
        text = item.get("text")
        if isinstance(text, str):
            return types.TextContent(type="text", text=text)
        return types.TextContent(type="text", text=json.dumps(item))
    if isinstance(item, str):
        return types.TextContent(type="text", text=item)
    return types.TextContent(type="text", text=json.dumps(item))


def normalize_envelope(envelope: InvocationEnvelope) -> types.CallToolResult:
    """Map an upstream invocation envelope onto an MCP tool result."""
    if envelope.success and envelope.result is not None:
        content = [_coerce_text(item) for item in envelope.result.content]
        is_error = bool(envelope.result.isError)
        if is_error and not content:
            return error_result(None)
        return types.CallToolResult(content=content, isError=is_error)

    return error_result(envelope.error)


class ToolInvoker:
    """Invokes upstream tools over HTTP

    Failures never raise: transport errors and malformed bodies come back as
    an ``isError`` result so the MCP client sees a normal tool response.
    """

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=None)
        self._owns_client = client is None

    def tool_url(self, tool_name: str) -> str:
        return f"{self.base_url}/tools/{quote(tool_name, safe='')}"

    async def invoke(self, tool_name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        """Execute a tool on the upstream service

        Args:
            tool_name: Name of the tool, forwarded as-is
            arguments: Tool arguments, sent as the whole JSON body

        Returns:
            The normalized tool result
        """
        url = self.tool_url(tool_name)
        try:
            response = await self._client.post(url, json=arguments or {})
        except httpx.HTTPError as e:
            logger.error(f"Failed to execute tool {tool_name}: {e}")
            return error_result(f"Upstream request failed: {str(e) or type(e).__name__}")

        # The status code is not inspected; the envelope's success flag decides
        try:
            envelope = InvocationEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(
                f"Invalid response for tool {tool_name} (HTTP {response.status_code}): {e}"
            )
            return error_result(f"Invalid response from upstream: {e}")

        result = normalize_envelope(envelope)
        if result.isError:
            logger.info(f"Tool {tool_name} returned an error")
        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


async def invoke_tool(
    base_url: str,
    tool_name: str,
    arguments: dict[str, Any] | None,
    client: httpx.AsyncClient | None = None,
) -> types.CallToolResult:
    """One-shot invocation without keeping an invoker around."""
    invoker = ToolInvoker(base_url, client)
    try:
        return await invoker.invoke(tool_name, arguments)
    finally:
        await invoker.aclose()
