"""Unit tests for IT Glue attachment MCP tools."""
import pytest

from itglue_mcp_server.client import ITGlueClient
from itglue_mcp_server.tools.attachment_tools import (
    itglue_create_attachments,
    itglue_update_attachment,
    itglue_delete_attachments,
)
from itglue_mcp_server.utils.errors import FileReadError, ValidationError

from fixtures.conftest import TEST_API_KEY, TEST_BASE_URI


@pytest.mark.asyncio
async def test_create_single_attachment(mcp_context, sample_attachment_file):
    mock_client = mcp_context.request_context.lifespan_context["itglue_client"]

    result = await itglue_create_attachments(
        ctx=mcp_context,
        resource_type="documents",
        resource_id=22222222,
        path=str(sample_attachment_file),
        file_name="a.png"
    )

    mock_client.create_attachments.assert_called_once_with(
        "documents", 22222222, {"path": str(sample_attachment_file), "file_name": "a.png"}
    )
    assert result["data"]["type"] == "attachments"


@pytest.mark.asyncio
async def test_create_batch_attachments(mcp_context, tmp_path):
    mock_client = mcp_context.request_context.lifespan_context["itglue_client"]
    attachments = [
        {"path": str(tmp_path / "one.txt"), "file_name": "one.txt"},
        {"path": str(tmp_path / "two.txt"), "file_name": "two.txt"},
    ]

    await itglue_create_attachments(
        ctx=mcp_context, resource_type="configurations", resource_id=5, attachments=attachments
    )

    mock_client.create_attachments.assert_called_once_with("configurations", 5, attachments)


@pytest.mark.asyncio
async def test_create_rejects_both_modes(mcp_context, sample_attachment_file):
    with pytest.raises(ValidationError, match="not both"):
        await itglue_create_attachments(
            ctx=mcp_context,
            resource_type="documents",
            resource_id=1,
            path=str(sample_attachment_file),
            attachments=[{"path": str(sample_attachment_file), "file_name": "a.png"}]
        )


@pytest.mark.asyncio
async def test_create_rejects_neither_mode(mcp_context):
    with pytest.raises(ValidationError, match="must be provided"):
        await itglue_create_attachments(ctx=mcp_context, resource_type="documents", resource_id=1)


@pytest.mark.asyncio
async def test_file_read_error_surfaces_from_real_client(mcp_context, mock_session, tmp_path):
    """With a real client, an unreadable file fails before any request."""
    client = ITGlueClient(api_key=TEST_API_KEY, base_uri=TEST_BASE_URI, session=mock_session)
    mcp_context.request_context.lifespan_context["itglue_client"] = client

    with pytest.raises(FileReadError):
        await itglue_create_attachments(
            ctx=mcp_context,
            resource_type="documents",
            resource_id=1,
            path=str(tmp_path / "missing.pdf"),
            file_name="missing.pdf"
        )

    mock_session.request.assert_not_called()


@pytest.mark.asyncio
async def test_update_attachment(mcp_context):
    mock_client = mcp_context.request_context.lifespan_context["itglue_client"]

    result = await itglue_update_attachment(
        ctx=mcp_context,
        resource_type="documents",
        resource_id=22222222,
        attachment_id=900001,
        name="core-network.png"
    )

    mock_client.update_attachment.assert_called_once_with("documents", 22222222, 900001, "core-network.png")
    assert result["data"]["attributes"]["name"] == "core-network.png"


@pytest.mark.asyncio
async def test_delete_attachments_confirmation(mcp_context):
    mock_client = mcp_context.request_context.lifespan_context["itglue_client"]

    result = await itglue_delete_attachments(
        ctx=mcp_context, resource_type="documents", resource_id=22222222, ids=[900001]
    )

    mock_client.delete_attachments.assert_called_once_with("documents", 22222222, [900001])
    assert result["success"] is True
    assert result["ids"] == [900001]


@pytest.mark.asyncio
async def test_create_returns_none_for_empty_body(mcp_context, sample_attachment_file):
    mock_client = mcp_context.request_context.lifespan_context["itglue_client"]
    mock_client.create_attachments.return_value = None

    result = await itglue_create_attachments(
        ctx=mcp_context,
        resource_type="documents",
        resource_id=1,
        path=str(sample_attachment_file),
        file_name="a.png"
    )

    assert result is None
