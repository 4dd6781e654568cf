"""
Konnect MCP - read-only Kong Konnect analytics and inventory tools for AI agents.

Run the stdio MCP server with:
    python -m konnect_mcp
"""

__version__ = "1.0.0"

SERVER_NAME = "kong-konnect-mcp"

__all__ = ["__version__", "SERVER_NAME"]
