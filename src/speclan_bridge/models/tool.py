# Upstream wire models
# Pydantic models for the Speclan HTTP MCP catalog and invocation envelopes

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RemoteTool(BaseModel):
    """Tool descriptor as published by the upstream ``GET /tools`` endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Unique tool name")
    description: str | None = Field(
        default=None, description="Tool description for LLM consumption"
    )
    # Left untyped; the schema translator degrades any shape it can't read
    parameter_schema: Any = Field(
        default=None,
        alias="schema",
        description="Serialized Zod parameter map (source dialect)",
    )

    @field_validator("description", mode="before")
    @classmethod
    def drop_non_string_description(cls, v: Any) -> str | None:
        """A malformed description is treated as missing."""
        return v if isinstance(v, str) else None


class Catalog(BaseModel):
    """Ordered tool catalog, fetched once at startup."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tools: list[RemoteTool] = Field(default_factory=list)

    @field_validator("tools")
    @classmethod
    def validate_unique_names(cls, v: list[RemoteTool]) -> list[RemoteTool]:
        """Tool names are catalog keys and must not repeat."""
        seen: set[str] = set()
        for tool in v:
            if tool.name in seen:
                raise ValueError(f"Duplicate tool name in catalog: {tool.name}")
            seen.add(tool.name)
        return v

    def __len__(self) -> int:
        return len(self.tools)


class UpstreamResult(BaseModel):
    """``result`` member of a successful invocation envelope."""

    model_config = ConfigDict(extra="ignore")

    content: list[Any] = Field(default_factory=list)
    isError: bool | None = None  # noqa: N815


class InvocationEnvelope(BaseModel):
    """Response body of ``POST /tools/<name>``."""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    result: UpstreamResult | None = None
    error: str | None = None
