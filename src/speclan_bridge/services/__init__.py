# Services package
# Catalog discovery, schema translation and tool invocation

from .catalog_fetcher import fetch_catalog
from .schema_translator import translate_catalog_schema
from .tool_invoker import ToolInvoker, invoke_tool

__all__ = [
    "fetch_catalog",
    "translate_catalog_schema",
    "ToolInvoker",
    "invoke_tool",
]
