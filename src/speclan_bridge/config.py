"""Configuration management for Speclan MCP Bridge"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MCP_URL = "http://localhost:8085"


class Settings(BaseSettings):
    """Bridge settings with environment variable support"""

    # Upstream HTTP MCP service
    mcp_url: str = DEFAULT_MCP_URL

    # Catalog discovery
    fetch_max_attempts: int = 3
    fetch_delay_ms: int = 1000

    # None disables httpx timeouts entirely
    http_timeout: float | None = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SPECLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def base_url(self) -> str:
        """Upstream URL without a trailing slash"""
        return self.mcp_url.rstrip("/")


def get_config() -> Settings:
    """Load settings from the environment."""
    return Settings()
