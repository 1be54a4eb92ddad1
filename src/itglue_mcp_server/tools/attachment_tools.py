"""IT Glue MCP Server - Attachment Tools

This module contains the attachment MCP tools for IT Glue:
- Upload attachments from local files (single or batch)
- Rename attachments
- Delete attachments
"""
from typing import Optional, Dict, Any, List
import logging

from mcp.server.fastmcp import Context
from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)


async def itglue_create_attachments(
    ctx: Context,
    resource_type: str,
    resource_id: int,
    path: Optional[str] = None,
    file_name: Optional[str] = None,
    attachments: Optional[List[Dict[str, Any]]] = None
) -> Optional[Dict[str, Any]]:
    """Upload local files as attachments on an IT Glue resource.

    Files are read and base64-encoded before the request is sent.

    Args:
        ctx: MCP context with IT Glue client
        resource_type: Resource type (e.g., "documents")
        resource_id: Resource ID
        path: Local file path (single mode)
        file_name: Name to show in IT Glue (single mode)
        attachments: List of {"path", "file_name"} (batch mode)

    Returns:
        Parsed IT Glue response, or None when the body is empty

    Raises:
        ValidationError: If both or neither input modes are used, or an entry is invalid
        FileReadError: If a file cannot be read
        requests.exceptions.RequestException: On transport or HTTP errors
    """
    single_given = path is not None or file_name is not None
    if attachments is not None and single_given:
        raise ValidationError(
            "Provide either path/file_name or attachments, not both",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )

    if attachments is not None:
        payload = attachments
    elif single_given:
        payload = {"path": path, "file_name": file_name}
    else:
        raise ValidationError(
            "Either path/file_name or attachments must be provided",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )

    count = len(attachments) if attachments is not None else 1
    logger.info(f"Uploading {count} attachment(s) to {resource_type}/{resource_id}")
    itglue_client = ctx.request_context.lifespan_context["itglue_client"]

    try:
        result = itglue_client.create_attachments(resource_type, resource_id, payload)
        logger.info(f"Uploaded attachment(s) to {resource_type}/{resource_id}")
        return result
    except Exception as e:
        logger.error(f"Failed to upload attachments to {resource_type}/{resource_id}: {e}")
        raise


async def itglue_update_attachment(
    ctx: Context,
    resource_type: str,
    resource_id: int,
    attachment_id: int,
    name: str
) -> Optional[Dict[str, Any]]:
    """Rename an attachment.

    Args:
        ctx: MCP context with IT Glue client
        resource_type: Resource type
        resource_id: Resource ID
        attachment_id: Attachment ID to rename
        name: New attachment name

    Returns:
        Parsed IT Glue response, or None when the body is empty
    """
    logger.info(f"Renaming attachment {attachment_id} on {resource_type}/{resource_id} to '{name}'")
    itglue_client = ctx.request_context.lifespan_context["itglue_client"]

    try:
        result = itglue_client.update_attachment(resource_type, resource_id, attachment_id, name)
        logger.info(f"Renamed attachment successfully: attachment_id={attachment_id}")
        return result
    except Exception as e:
        logger.error(f"Failed to rename attachment {attachment_id}: {e}")
        raise


async def itglue_delete_attachments(
    ctx: Context,
    resource_type: str,
    resource_id: int,
    ids: List[int]
) -> Dict[str, Any]:
    """Delete one or more attachments from a resource.

    Args:
        ctx: MCP context with IT Glue client
        resource_type: Resource type
        resource_id: Resource ID
        ids: Attachment IDs to delete

    Returns:
        Deletion confirmation with the raw IT Glue result
    """
    logger.info(f"Deleting attachments {ids} from {resource_type}/{resource_id}")
    itglue_client = ctx.request_context.lifespan_context["itglue_client"]

    try:
        result = itglue_client.delete_attachments(resource_type, resource_id, ids)
        logger.info(f"Deleted {len(ids)} attachment(s) from {resource_type}/{resource_id}")
        return {
            "success": True,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "ids": ids,
            "result": result
        }
    except Exception as e:
        logger.error(f"Failed to delete attachments {ids}: {e}")
        raise
