"""Translate serialized Zod parameter maps into JSON Schema.

The upstream ``/tools`` endpoint publishes each tool's parameters as a map of
serialized Zod types. A type tag sits either directly on the descriptor
(``{"type": "string"}``) or one level down (``{"def": {"type": "string"}}``).
MCP clients expect a JSON Schema object in ``inputSchema`` instead.

Every descriptor is first normalized into a ``TypeDescriptor``; anything that
does not fit a known shape becomes ``SourceType.UNKNOWN`` and is rendered as
a plain string. Translation never raises.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SourceType(str, Enum):
    """Type tags understood in the source dialect."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ENUM = "enum"
    OPTIONAL = "optional"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: Any) -> "SourceType":
        if not isinstance(tag, str):
            return cls.UNKNOWN
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class TypeDescriptor:
    """Normalized form of one source-dialect descriptor."""

    kind: SourceType
    options: tuple[Any, ...] | None = None
    inner: Any = None

    @property
    def is_optional(self) -> bool:
        return self.kind is SourceType.OPTIONAL


_SIMPLE_TYPES = {
    SourceType.STRING: {"type": "string"},
    SourceType.NUMBER: {"type": "number"},
    SourceType.BOOLEAN: {"type": "boolean"},
    SourceType.OBJECT: {"type": "object"},
}


def normalize_descriptor(raw: Any) -> TypeDescriptor:
    """Reduce either encoding of a descriptor to a ``TypeDescriptor``."""
    if not isinstance(raw, Mapping):
        return TypeDescriptor(SourceType.UNKNOWN)

    definition = raw.get("def")
    if not isinstance(definition, Mapping):
        definition = {}

    tag = raw.get("type")
    if tag is None:
        tag = definition.get("type")
    kind = SourceType.from_tag(tag)

    if kind is SourceType.ENUM:
        options = raw.get("options")
        return TypeDescriptor(
            kind, options=tuple(options) if isinstance(options, list) else None
        )
    if kind is SourceType.OPTIONAL:
        inner = definition.get("innerType")
        return TypeDescriptor(kind, inner=inner if inner is not None else {})
    return TypeDescriptor(kind)


def translate_type(raw: Any) -> dict[str, Any]:
    """Translate a single descriptor into a JSON Schema property."""
    descriptor = normalize_descriptor(raw)

    if descriptor.kind is SourceType.OPTIONAL:
        return translate_type(descriptor.inner)
    if descriptor.kind is SourceType.ARRAY:
        # Element types are not introspected
        return {"type": "array", "items": {"type": "string"}}
    if descriptor.kind is SourceType.ENUM:
        if descriptor.options is None:
            return {"type": "string"}
        return {"type": "string", "enum": list(descriptor.options)}
    if descriptor.kind in _SIMPLE_TYPES:
        return dict(_SIMPLE_TYPES[descriptor.kind])
    return {"type": "string"}


def translate_catalog_schema(source: Mapping[str, Any] | None) -> dict[str, Any]:
    """Build a tool ``inputSchema`` from a source-dialect parameter map.

    Args:
        source: Parameter name to serialized Zod descriptor, or None

    Returns:
        ``{"type": "object", "properties": ...}`` with a ``required`` list of
        the non-optional parameters when there is at least one
    """
    if not isinstance(source, Mapping):
        return {"type": "object", "properties": {}}

    properties: dict[str, Any] = {}
    required: list[str] = []

    for key, raw in source.items():
        if not normalize_descriptor(raw).is_optional:
            required.append(key)
        properties[key] = translate_type(raw)

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema
