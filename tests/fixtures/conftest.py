"""Pytest fixtures for IT Glue MCP Server tests.

Common fixtures for mocking the IT Glue client, HTTP responses and files.
"""

import json
import pytest
from unittest.mock import Mock, MagicMock

import requests
from requests.structures import CaseInsensitiveDict

from itglue_mcp_server.client import ITGlueClient
from . import itglue_responses


TEST_API_KEY = "ITG.test0123456789abcdef"
TEST_BASE_URI = "https://api.itglue.test"


def make_response(status_code: int = 200, body=None, prepared_headers=None) -> Mock:
    """Build a mock requests.Response with raise_for_status behaviour.

    prepared_headers, when given, become the headers of ``response.request``,
    the PreparedRequest requests attaches to every response.
    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.content = json.dumps(body).encode("utf-8") if body is not None else b""
    response.json.return_value = body
    if prepared_headers is not None:
        response.request = Mock(headers=CaseInsensitiveDict(prepared_headers))

    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error for url", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def mock_session():
    """Mock requests session recording a copy of the headers of each call.

    The client drops the API key from its per-call headers after the call,
    so the headers are copied at call time.
    """
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.sent_headers = []

    def request(method, url, headers=None, **kwargs):
        session.sent_headers.append(dict(headers or {}))
        return session.next_response

    session.request.side_effect = request
    session.next_response = make_response(200, itglue_responses.MOCK_RELATED_ITEM_CREATED)
    return session


@pytest.fixture
def itglue_client(mock_session):
    """ITGlueClient wired to the mock session."""
    return ITGlueClient(api_key=TEST_API_KEY, base_uri=TEST_BASE_URI, session=mock_session)


@pytest.fixture
def mock_itglue_client():
    """Mock IT Glue client with common methods."""
    client = MagicMock(spec=ITGlueClient)

    client.create_related_items.return_value = itglue_responses.MOCK_RELATED_ITEM_CREATED
    client.update_related_item.return_value = itglue_responses.MOCK_RELATED_ITEM_UPDATED
    client.delete_related_items.return_value = None
    client.create_attachments.return_value = itglue_responses.MOCK_ATTACHMENT_CREATED
    client.update_attachment.return_value = itglue_responses.MOCK_ATTACHMENT_RENAMED
    client.delete_attachments.return_value = None

    return client


@pytest.fixture
def sample_related_item_data():
    """Sample data for creating a related item."""
    return {
        "destination_id": 8765309,
        "destination_type": "Configuration",
        "notes": "Primary firewall"
    }


@pytest.fixture
def sample_attachment_file(tmp_path):
    """Small binary file to upload as an attachment."""
    path = tmp_path / "a.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    return path


@pytest.fixture(autouse=True)
def reset_environment_for_tests(monkeypatch):
    """Reset environment variables for each test.

    This fixture automatically runs before each test to ensure
    a clean environment state.
    """
    monkeypatch.setenv("ITGLUE_API_KEY", TEST_API_KEY)
    monkeypatch.delenv("ITGLUE_BASE_URI", raising=False)
    monkeypatch.delenv("ITGLUE_DATA_CENTER", raising=False)
    monkeypatch.delenv("ITGLUE_VERIFY_SSL", raising=False)
    monkeypatch.delenv("ITGLUE_TIMEOUT", raising=False)


@pytest.fixture
def mcp_context(mock_itglue_client):
    """Mock MCP context with IT Glue client."""
    context = MagicMock()
    context.request_context.lifespan_context = {"itglue_client": mock_itglue_client}
    return context
