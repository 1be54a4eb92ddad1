"""IT Glue MCP Server

Client and MCP tools for IT Glue related items and attachments.
"""

__version__ = "0.1.0"
