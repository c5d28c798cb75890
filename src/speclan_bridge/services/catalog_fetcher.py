"""Catalog discovery against the upstream ``GET /tools`` endpoint"""

import asyncio
import logging

import httpx
from pydantic import ValidationError

from ..errors import CatalogFetchError, ConfigurationError
from ..models.tool import Catalog

logger = logging.getLogger(__name__)


def _describe_failure(error: Exception) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return f"HTTP {response.status_code}: {response.reason_phrase}"
    return str(error) or type(error).__name__


async def _fetch_once(client: httpx.AsyncClient, url: str) -> Catalog:
    response = await client.get(url)
    response.raise_for_status()
    return Catalog.model_validate(response.json())


async def fetch_catalog(
    base_url: str,
    max_attempts: int = 3,
    delay_ms: int = 1000,
    client: httpx.AsyncClient | None = None,
) -> Catalog:
    """Fetch the tool catalog, retrying with a fixed delay.

    Non-2xx statuses, transport errors and unparseable bodies all count as a
    failed attempt. The delay between attempts does not grow.

    Args:
        base_url: Upstream base URL, without the ``/tools`` suffix
        max_attempts: Total number of GET attempts
        delay_ms: Pause between attempts in milliseconds
        client: Optional shared client; one is created (and closed) if omitted

    Returns:
        The parsed catalog from the first successful attempt

    Raises:
        CatalogFetchError: If every attempt failed
        ConfigurationError: If max_attempts is less than 1
    """
    if max_attempts < 1:
        raise ConfigurationError(f"max_attempts must be at least 1, got {max_attempts}")

    url = f"{base_url.rstrip('/')}/tools"

    if client is None:
        async with httpx.AsyncClient(timeout=None) as owned_client:
            return await _fetch_with_retry(owned_client, base_url, url, max_attempts, delay_ms)
    return await _fetch_with_retry(client, base_url, url, max_attempts, delay_ms)


async def _fetch_with_retry(
    client: httpx.AsyncClient,
    base_url: str,
    url: str,
    max_attempts: int,
    delay_ms: int,
) -> Catalog:
    last_reason = ""
    for attempt in range(1, max_attempts + 1):
        try:
            catalog = await _fetch_once(client, url)
            logger.debug(f"Fetched catalog from {url} on attempt {attempt}")
            return catalog
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            last_reason = _describe_failure(e)
            logger.warning(
                f"Failed to fetch tools (attempt {attempt}/{max_attempts}): {last_reason}"
            )
            if attempt < max_attempts:
                await asyncio.sleep(delay_ms / 1000)

    raise CatalogFetchError(base_url, max_attempts, last_reason)
