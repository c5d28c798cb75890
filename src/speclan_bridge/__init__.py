# Speclan MCP bridge
# Re-exposes the Speclan HTTP MCP tools over the MCP stdio transport

import sys

__version__ = "1.0.0"


def main() -> None:
    """CLI entry point for the bridge."""
    from .cli import run

    sys.exit(run())
