"""
Test configuration and shared fixtures for the Speclan MCP bridge tests.

The upstream HTTP service is faked with ``httpx.MockTransport`` so tests
exercise the real request/response handling without a network.
"""

from typing import Any, Callable

import httpx
import pytest

from speclan_bridge.models.tool import Catalog

BASE_URL = "http://upstream.test:8085"


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def make_client():
    """Factory for AsyncClients backed by a request handler"""
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def sample_schema() -> dict[str, Any]:
    """Source-dialect parameter map covering every known tag plus an unknown one"""
    return {
        "title": {"type": "string"},
        "priority": {"def": {"type": "number"}},
        "draft": {"type": "boolean"},
        "labels": {"type": "array", "def": {"type": "array", "element": {"type": "string"}}},
        "metadata": {"type": "object"},
        "status": {"type": "enum", "options": ["draft", "review", "approved"]},
        "parentId": {"type": "optional", "def": {"type": "optional", "innerType": {"type": "string"}}},
        "weird": {"type": "bigint"},
    }


@pytest.fixture
def catalog_payload(sample_schema) -> dict[str, Any]:
    """Body of a healthy ``GET /tools`` response"""
    return {
        "tools": [
            {
                "name": "create_feature",
                "description": "Create a new feature specification",
                "schema": sample_schema,
            },
            {
                "name": "list_specs",
                "description": "List all specifications",
            },
            {
                "name": "get_spec",
                "schema": {"id": {"type": "string"}},
            },
        ]
    }


@pytest.fixture
def catalog(catalog_payload) -> Catalog:
    return Catalog.model_validate(catalog_payload)
