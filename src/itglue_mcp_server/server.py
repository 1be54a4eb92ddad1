import os
import sys
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
import logging

from mcp.server.fastmcp import FastMCP, Context
from .client import ITGlueClient
from .config import load_settings
from .utils.errors import CredentialsError
from .tools import attachment_tools, related_item_tools

# Configure basic logging FIRST
logging.basicConfig(level=logging.INFO, format='%(asctime)s - SERVER - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def itglue_lifespan(server: FastMCP) -> AsyncIterator[dict]:
    """
    Manages the ITGlueClient lifecycle, loading settings from the environment
    and closing the HTTP session on shutdown.
    """
    itglue_client = None
    try:
        settings = load_settings()
        itglue_client = ITGlueClient.from_settings(settings)
        logger.info("Successfully configured ITGlueClient.")

        yield {"itglue_client": itglue_client}

    except CredentialsError as e:
        logger.error(f"Failed to obtain IT Glue credentials: {e}")
        raise
    except Exception as e:
        logger.error(f"Failed during ITGlueClient initialization: {e}")
        raise
    finally:
        if itglue_client is not None:
            itglue_client.close()
        logger.info("IT Glue lifespan context manager exiting.")


# Instantiate the FastMCP server with the lifespan manager
mcp = FastMCP(
    "IT Glue Server",
    lifespan=itglue_lifespan,
)

# --- Related Items ---

@mcp.tool()
async def itglue_create_related_items(
    resource_type: str,
    resource_id: int,
    ctx: Context,
    destination_id: int | None = None,
    destination_type: str | None = None,
    notes: str | None = None,
    items: list[dict] | None = None
) -> dict | None:
    """Link an IT Glue resource to other resources.

    Args:
        resource_type: Source resource type (checklists, checklist_templates, configurations,
            contacts, documents, domains, locations, passwords, ssl_certificates,
            flexible_assets, tickets)
        resource_id: Source resource ID
        ctx: MCP context
        destination_id: Destination resource ID (single link)
        destination_type: Destination type, e.g. "Configuration" (single link)
        notes: Optional note (single link)
        items: List of {"destination_id", "destination_type", "notes"} (batch)

    Returns:
        IT Glue response, or None when the body is empty
    """
    return await related_item_tools.itglue_create_related_items(
        ctx, resource_type, resource_id,
        destination_id=destination_id,
        destination_type=destination_type,
        notes=notes,
        items=items
    )


@mcp.tool()
async def itglue_update_related_item(
    resource_type: str,
    resource_id: int,
    related_item_id: int,
    notes: str,
    ctx: Context
) -> dict | None:
    """Update the notes on a related item.

    Args:
        resource_type: Source resource type
        resource_id: Source resource ID
        related_item_id: Related item ID
        notes: New notes
        ctx: MCP context

    Returns:
        IT Glue response, or None when the body is empty
    """
    return await related_item_tools.itglue_update_related_item(
        ctx, resource_type, resource_id, related_item_id, notes
    )


@mcp.tool()
async def itglue_delete_related_items(
    resource_type: str,
    resource_id: int,
    ids: list[int],
    ctx: Context
) -> dict:
    """Delete related items from a resource.

    Args:
        resource_type: Source resource type
        resource_id: Source resource ID
        ids: Related item IDs
        ctx: MCP context

    Returns:
        Deletion confirmation
    """
    return await related_item_tools.itglue_delete_related_items(ctx, resource_type, resource_id, ids)


# --- Attachments ---

@mcp.tool()
async def itglue_create_attachments(
    resource_type: str,
    resource_id: int,
    ctx: Context,
    path: str | None = None,
    file_name: str | None = None,
    attachments: list[dict] | None = None
) -> dict | None:
    """Upload local files as attachments.

    Args:
        resource_type: Resource type
        resource_id: Resource ID
        ctx: MCP context
        path: Local file path (single upload)
        file_name: Name shown in IT Glue (single upload)
        attachments: List of {"path", "file_name"} (batch)

    Returns:
        IT Glue response, or None when the body is empty
    """
    return await attachment_tools.itglue_create_attachments(
        ctx, resource_type, resource_id,
        path=path,
        file_name=file_name,
        attachments=attachments
    )


@mcp.tool()
async def itglue_update_attachment(
    resource_type: str,
    resource_id: int,
    attachment_id: int,
    name: str,
    ctx: Context
) -> dict | None:
    """Rename an attachment.

    Args:
        resource_type: Resource type
        resource_id: Resource ID
        attachment_id: Attachment ID
        name: New name
        ctx: MCP context

    Returns:
        IT Glue response, or None when the body is empty
    """
    return await attachment_tools.itglue_update_attachment(
        ctx, resource_type, resource_id, attachment_id, name
    )


@mcp.tool()
async def itglue_delete_attachments(
    resource_type: str,
    resource_id: int,
    ids: list[int],
    ctx: Context
) -> dict:
    """Delete attachments from a resource.

    Args:
        resource_type: Resource type
        resource_id: Resource ID
        ids: Attachment IDs
        ctx: MCP context

    Returns:
        Deletion confirmation
    """
    return await attachment_tools.itglue_delete_attachments(ctx, resource_type, resource_id, ids)


def main():
    """Entry point for the itglue-mcp-server script."""
    logger.info("Starting IT Glue MCP server...")

    if not os.environ.get("ITGLUE_API_KEY"):
        logger.error("ITGLUE_API_KEY environment variable is not set.")
        print("\nERROR: ITGLUE_API_KEY environment variable is not set.")
        print("Please set ITGLUE_API_KEY and optionally ITGLUE_DATA_CENTER (US, EU, AU) or ITGLUE_BASE_URI.")
        sys.exit(1)

    mcp.run()

if __name__ == "__main__":
    # This allows running the server directly with `python -m itglue_mcp_server.server`
    main()
