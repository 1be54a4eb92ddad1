"""IT Glue MCP Server Utilities

This package contains utility modules for the IT Glue MCP server.
"""

__all__ = [
    "errors",
    "payloads",
]
