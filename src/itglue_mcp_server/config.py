"""IT Glue Connection Settings

Reads the API key, base URI and transport options from environment
variables:
- ITGLUE_API_KEY (required)
- ITGLUE_BASE_URI or ITGLUE_DATA_CENTER (US/EU/AU, default US)
- ITGLUE_VERIFY_SSL (default true)
- ITGLUE_TIMEOUT (seconds, optional)
"""

import os
import logging
from typing import Optional

from pydantic import BaseModel, Field

from .utils.errors import CredentialsError

logger = logging.getLogger(__name__)

DATA_CENTER_URIS = {
    "US": "https://api.itglue.com",
    "EU": "https://api.eu.itglue.com",
    "AU": "https://api.au.itglue.com",
}
DEFAULT_BASE_URI = DATA_CENTER_URIS["US"]


class ITGlueSettings(BaseModel):
    """Resolved connection settings for ITGlueClient."""

    api_key: str = Field(description="IT Glue API key (sent as x-api-key)")
    base_uri: str = Field(default=DEFAULT_BASE_URI, description="API base URI")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    timeout: Optional[float] = Field(default=None, description="Request timeout in seconds")

    def __repr__(self) -> str:
        # Keep the API key out of logs and tracebacks
        return (
            f"ITGlueSettings(base_uri={self.base_uri!r}, verify_ssl={self.verify_ssl}, "
            f"timeout={self.timeout})"
        )

    __str__ = __repr__


def get_api_key() -> str:
    """Return the API key from ITGLUE_API_KEY.

    Raises:
        CredentialsError: If the variable is missing or blank
    """
    api_key = os.environ.get("ITGLUE_API_KEY", "").strip()
    if not api_key:
        raise CredentialsError("ITGLUE_API_KEY environment variable is required.")
    return api_key


def resolve_base_uri(base_uri: Optional[str] = None, data_center: Optional[str] = None) -> str:
    """Pick the API base URI.

    An explicit base URI wins over a data center shortcut. With neither,
    the US endpoint is used.

    Raises:
        ValueError: If data_center is not one of US, EU, AU
    """
    if base_uri:
        return base_uri.rstrip("/")
    if data_center:
        key = data_center.strip().upper()
        if key not in DATA_CENTER_URIS:
            raise ValueError(
                f"Unknown IT Glue data center '{data_center}', expected one of {sorted(DATA_CENTER_URIS)}"
            )
        return DATA_CENTER_URIS[key]
    return DEFAULT_BASE_URI


def load_settings() -> ITGlueSettings:
    """Build ITGlueSettings from the environment."""
    base_uri = resolve_base_uri(
        os.environ.get("ITGLUE_BASE_URI"),
        os.environ.get("ITGLUE_DATA_CENTER"),
    )
    verify_ssl = os.environ.get("ITGLUE_VERIFY_SSL", "true").lower() in ("true", "1", "yes")

    timeout_raw = os.environ.get("ITGLUE_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else None
    except ValueError:
        raise ValueError(f"ITGLUE_TIMEOUT must be a number of seconds, got '{timeout_raw}'")

    settings = ITGlueSettings(
        api_key=get_api_key(),
        base_uri=base_uri,
        verify_ssl=verify_ssl,
        timeout=timeout,
    )
    logger.info(f"Loaded IT Glue settings: {settings}")
    return settings
