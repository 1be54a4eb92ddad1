"""IT Glue MCP Server - Related Item Tools

This module contains the related item MCP tools for IT Glue:
- Create related items (single or batch)
- Update related item notes
- Delete related items
"""
from typing import Optional, Dict, Any, List
import logging

from mcp.server.fastmcp import Context
from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)


async def itglue_create_related_items(
    ctx: Context,
    resource_type: str,
    resource_id: int,
    destination_id: Optional[int] = None,
    destination_type: Optional[str] = None,
    notes: Optional[str] = None,
    items: Optional[List[Dict[str, Any]]] = None
) -> Optional[Dict[str, Any]]:
    """Link an IT Glue resource to one or more other resources.

    Pass either destination_id/destination_type (and optionally notes) for a
    single link, or items for a batch. Not both.

    Args:
        ctx: MCP context with IT Glue client
        resource_type: Source resource type (e.g., "passwords", "configurations")
        resource_id: Source resource ID
        destination_id: Destination resource ID (single mode)
        destination_type: Destination type, e.g. "Configuration" (single mode)
        notes: Optional note for the link (single mode)
        items: List of {"destination_id", "destination_type", "notes"?} (batch mode)

    Returns:
        Parsed IT Glue response, or None when the body is empty

    Raises:
        ValidationError: If both or neither input modes are used, or an entry is invalid
        requests.exceptions.RequestException: On transport or HTTP errors
    """
    single_given = destination_id is not None or destination_type is not None or notes is not None
    if items is not None and single_given:
        raise ValidationError(
            "Provide either destination_id/destination_type or items, not both",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )

    if items is not None:
        payload = items
    elif single_given:
        payload = {"destination_id": destination_id, "destination_type": destination_type}
        if notes is not None:
            payload["notes"] = notes
    else:
        raise ValidationError(
            "Either destination_id/destination_type or items must be provided",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )

    count = len(items) if items is not None else 1
    logger.info(f"Creating {count} related item(s) on {resource_type}/{resource_id}")
    itglue_client = ctx.request_context.lifespan_context["itglue_client"]

    try:
        result = itglue_client.create_related_items(resource_type, resource_id, payload)
        logger.info(f"Created related item(s) on {resource_type}/{resource_id}")
        return result
    except Exception as e:
        logger.error(f"Failed to create related items on {resource_type}/{resource_id}: {e}")
        raise


async def itglue_update_related_item(
    ctx: Context,
    resource_type: str,
    resource_id: int,
    related_item_id: int,
    notes: str
) -> Optional[Dict[str, Any]]:
    """Replace the notes on an existing related item.

    Args:
        ctx: MCP context with IT Glue client
        resource_type: Source resource type
        resource_id: Source resource ID
        related_item_id: Related item ID to update
        notes: New notes

    Returns:
        Parsed IT Glue response, or None when the body is empty
    """
    logger.info(f"Updating related item {related_item_id} on {resource_type}/{resource_id}")
    itglue_client = ctx.request_context.lifespan_context["itglue_client"]

    try:
        result = itglue_client.update_related_item(resource_type, resource_id, related_item_id, notes)
        logger.info(f"Updated related item successfully: related_item_id={related_item_id}")
        return result
    except Exception as e:
        logger.error(f"Failed to update related item {related_item_id}: {e}")
        raise


async def itglue_delete_related_items(
    ctx: Context,
    resource_type: str,
    resource_id: int,
    ids: List[int]
) -> Dict[str, Any]:
    """Delete one or more related items from a resource.

    Args:
        ctx: MCP context with IT Glue client
        resource_type: Source resource type
        resource_id: Source resource ID
        ids: Related item IDs to delete

    Returns:
        Deletion confirmation with the raw IT Glue result
    """
    logger.info(f"Deleting related items {ids} from {resource_type}/{resource_id}")
    itglue_client = ctx.request_context.lifespan_context["itglue_client"]

    try:
        result = itglue_client.delete_related_items(resource_type, resource_id, ids)
        logger.info(f"Deleted {len(ids)} related item(s) from {resource_type}/{resource_id}")
        return {
            "success": True,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "ids": ids,
            "result": result
        }
    except Exception as e:
        logger.error(f"Failed to delete related items {ids}: {e}")
        raise
