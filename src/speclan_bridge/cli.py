# Command-line entry point
# Logging set-up, command-line overrides and exit status mapping

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from .config import Settings, get_config
from .errors import BridgeError, ConfigurationError
from .server import run_bridge

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("speclan_bridge")


def setup_logging(level: str = "INFO") -> None:
    """Route all logging to stderr; stdout carries MCP frames only."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="speclan-mcp-bridge",
        description="Expose the Speclan HTTP MCP tools over stdio",
    )
    parser.add_argument("--url", help="Upstream base URL (overrides SPECLAN_MCP_URL)")
    parser.add_argument("--max-attempts", type=int, help="Catalog fetch attempts")
    parser.add_argument("--retry-delay-ms", type=int, help="Delay between catalog fetch attempts")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command-line overrides applied.

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    try:
        settings = get_config()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    overrides = {
        "mcp_url": args.url,
        "fetch_max_attempts": args.max_attempts,
        "fetch_delay_ms": args.retry_delay_ms,
        "log_level": args.log_level,
    }
    updates = {key: value for key, value in overrides.items() if value is not None}
    return settings.model_copy(update=updates) if updates else settings


def run(argv: list[str] | None = None) -> int:
    """Run the bridge and return the process exit status."""
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except ConfigurationError as e:
        setup_logging()
        logger.error(f"Fatal: {e.message}")
        return 1
    setup_logging(settings.log_level)

    try:
        asyncio.run(run_bridge(settings))
    except KeyboardInterrupt:
        logger.info("Bridge interrupted")
        return 0
    except BridgeError as e:
        logger.error(f"Fatal: {e.message}")
        return 1
    except Exception as e:
        logger.exception(f"Fatal: {e}")
        return 1
    return 0
