"""Exception hierarchy for the Speclan MCP bridge."""

from typing import Any


class BridgeError(Exception):
    """Base exception class for bridge errors."""
    def __init__(self, message: str, error_code: str = "BRIDGE_ERROR", details: dict[str, Any] | None = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(BridgeError):
    """Exception for configuration-related errors."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, "CONFIG_ERROR", details)


class CatalogFetchError(BridgeError):
    """Raised when the tool catalog could not be fetched after all attempts."""
    def __init__(self, url: str, attempts: int, reason: str):
        self.url = url
        self.attempts = attempts
        self.reason = reason
        super().__init__(
            f"Cannot connect to Speclan HTTP MCP at {url}. Is the server running? ({reason})",
            "CATALOG_FETCH_ERROR",
            {"url": url, "attempts": attempts, "reason": reason},
        )


class TransportError(BridgeError):
    """Exception for stdio transport failures."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, "TRANSPORT_ERROR", details)
