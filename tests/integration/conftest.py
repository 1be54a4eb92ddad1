"""Integration test fixtures - use the real environment and a live client."""
import os

import pytest

from itglue_mcp_server.client import ITGlueClient
from itglue_mcp_server.config import load_settings


@pytest.fixture(autouse=True)
def reset_environment_for_tests():
    """Override the autouse fixture from root conftest to do nothing.

    Integration tests need to use real environment variables,
    not the mock values set by the root conftest fixture.
    """
    pass


@pytest.fixture
def live_client():
    """ITGlueClient built from the real environment."""
    if not os.getenv("ITGLUE_API_KEY"):
        pytest.skip("Missing required environment variable: ITGLUE_API_KEY")

    with ITGlueClient.from_settings(load_settings()) as client:
        yield client


@pytest.fixture
def live_target():
    """Resource and destination used for live tests, from ITGLUE_TEST_* variables."""
    required = [
        "ITGLUE_TEST_RESOURCE_TYPE",
        "ITGLUE_TEST_RESOURCE_ID",
        "ITGLUE_TEST_DESTINATION_ID",
        "ITGLUE_TEST_DESTINATION_TYPE",
    ]
    missing = [var for var in required if not os.getenv(var)]
    if missing:
        pytest.skip(f"Missing required environment variables: {missing}")

    return {
        "resource_type": os.environ["ITGLUE_TEST_RESOURCE_TYPE"],
        "resource_id": int(os.environ["ITGLUE_TEST_RESOURCE_ID"]),
        "destination_id": int(os.environ["ITGLUE_TEST_DESTINATION_ID"]),
        "destination_type": os.environ["ITGLUE_TEST_DESTINATION_TYPE"],
    }
