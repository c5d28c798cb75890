"""
Speclan MCP Bridge Test Suite

The upstream HTTP service is faked per test, so the suite covers catalog
discovery, schema translation, invocation mapping and server wiring
without a running Speclan instance.
"""
