# Models package
# Wire models for the upstream HTTP MCP service

from .tool import Catalog, InvocationEnvelope, RemoteTool, UpstreamResult

__all__ = [
    "Catalog",
    "InvocationEnvelope",
    "RemoteTool",
    "UpstreamResult",
]
