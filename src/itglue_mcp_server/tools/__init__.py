"""IT Glue MCP Server Tools

This package contains all MCP tool implementations for IT Glue integration.
"""

__all__ = [
    "related_item_tools",
    "attachment_tools",
]
