"""IT Glue Client

requests-based client for IT Glue relationship endpoints:
- Related items: create, update notes, delete
- Attachments: upload, rename, delete

Every call builds its JSON:API document first, so validation and file errors
abort before anything is sent. The x-api-key header lives only in a per-call
header mapping and is dropped once the call returns or fails.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Sequence, Union

import requests

from .config import DEFAULT_BASE_URI, ITGlueSettings
from .models.document import Relation, RequestDocument, ResourceType
from .utils.payloads import (
    AttachmentInput,
    RelatedItemInput,
    build_attachments_create,
    build_attachments_update,
    build_deletion,
    build_related_items_create,
    build_related_items_update,
    relationship_path,
)

logger = logging.getLogger(__name__)

JSONAPI_CONTENT_TYPE = "application/vnd.api+json"
API_KEY_HEADER = "x-api-key"


def _redact_api_key(prepared: Any) -> None:
    prepared_headers = getattr(prepared, "headers", None)
    if prepared_headers is not None:
        prepared_headers.pop(API_KEY_HEADER, None)


def _redact_response(response: Any) -> None:
    """Drop the API key from a response's request and any redirect hops."""
    _redact_api_key(getattr(response, "request", None))
    for hop in getattr(response, "history", None) or []:
        _redact_api_key(getattr(hop, "request", None))


class ITGlueClient:
    """IT Glue API client for related items and attachments.

    The session only carries the JSON:API content type. The API key is added
    per request and never stored in shared headers.
    """

    def __init__(
        self,
        api_key: str,
        base_uri: str = DEFAULT_BASE_URI,
        verify_ssl: bool = True,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """Initialize IT Glue client.

        Args:
            api_key: IT Glue API key
            base_uri: API base URI (default: https://api.itglue.com)
            verify_ssl: Whether to verify SSL certificates (default: True)
            timeout: Request timeout in seconds, passed to requests
            session: Optional pre-built requests session
        """
        self.base_uri = base_uri.rstrip('/')
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self._api_key = api_key
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': JSONAPI_CONTENT_TYPE})
        logger.info(f"Initialized IT Glue client for {self.base_uri} (SSL verify: {verify_ssl})")

    @classmethod
    def from_settings(cls, settings: ITGlueSettings) -> "ITGlueClient":
        return cls(
            api_key=settings.api_key,
            base_uri=settings.base_uri,
            verify_ssl=settings.verify_ssl,
            timeout=settings.timeout,
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ITGlueClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @contextmanager
    def _credential_headers(self) -> Iterator[Dict[str, str]]:
        """Yield request headers carrying the API key, then drop the key.

        requests copies these headers into the PreparedRequest it sends;
        _make_request strips that copy too.
        """
        headers = {API_KEY_HEADER: self._api_key}
        try:
            yield headers
        finally:
            headers.pop(API_KEY_HEADER, None)

    def _make_request(self, method: str, endpoint: str, document: RequestDocument) -> Any:
        """Send one JSON:API document and return the parsed response.

        The API key is removed from the prepared request(s) reachable from the
        returned response or the raised exception.

        Raises:
            requests.exceptions.RequestException: On network failures and
                non-2xx responses. Type and message are unchanged.
        """
        url = f"{self.base_uri}/{endpoint.lstrip('/')}"
        body = document.to_json().encode('utf-8')
        logger.debug(f"{method} {url} ({len(body)} bytes)")

        with self._credential_headers() as headers:
            try:
                response = self.session.request(
                    method,
                    url,
                    headers=headers,
                    data=body,
                    verify=self.verify_ssl,
                    timeout=self.timeout
                )
            except requests.exceptions.RequestException as e:
                _redact_api_key(getattr(e, "request", None))
                raise

            try:
                response.raise_for_status()
            finally:
                _redact_response(response)

        if response.content:
            return response.json()
        return None

    # Related items

    def create_related_items(
        self,
        resource_type: Union[str, ResourceType],
        resource_id: int,
        items: Union[RelatedItemInput, Sequence[RelatedItemInput]]
    ) -> Any:
        """Link a resource to one or more destinations."""
        document = build_related_items_create(items)
        endpoint = relationship_path(resource_type, resource_id, Relation.RELATED_ITEMS)
        return self._make_request('POST', endpoint, document)

    def update_related_item(
        self,
        resource_type: Union[str, ResourceType],
        resource_id: int,
        related_item_id: int,
        notes: str
    ) -> Any:
        """Replace the notes on a related item."""
        document = build_related_items_update(resource_id, related_item_id, notes)
        endpoint = relationship_path(resource_type, resource_id, Relation.RELATED_ITEMS, related_item_id)
        return self._make_request('PATCH', endpoint, document)

    def delete_related_items(
        self,
        resource_type: Union[str, ResourceType],
        resource_id: int,
        ids: Union[int, Sequence[int]]
    ) -> Any:
        """Delete related items by id."""
        document = build_deletion(resource_type, resource_id, ids, Relation.RELATED_ITEMS)
        endpoint = relationship_path(resource_type, resource_id, Relation.RELATED_ITEMS)
        return self._make_request('DELETE', endpoint, document)

    # Attachments

    def create_attachments(
        self,
        resource_type: Union[str, ResourceType],
        resource_id: int,
        attachments: Union[AttachmentInput, Sequence[AttachmentInput]]
    ) -> Any:
        """Upload one or more files as attachments."""
        document = build_attachments_create(attachments)
        endpoint = relationship_path(resource_type, resource_id, Relation.ATTACHMENTS)
        return self._make_request('POST', endpoint, document)

    def update_attachment(
        self,
        resource_type: Union[str, ResourceType],
        resource_id: int,
        attachment_id: int,
        new_name: str
    ) -> Any:
        """Rename an attachment."""
        document = build_attachments_update(resource_id, attachment_id, new_name)
        endpoint = relationship_path(resource_type, resource_id, Relation.ATTACHMENTS, attachment_id)
        return self._make_request('PATCH', endpoint, document)

    def delete_attachments(
        self,
        resource_type: Union[str, ResourceType],
        resource_id: int,
        ids: Union[int, Sequence[int]]
    ) -> Any:
        """Delete attachments by id."""
        document = build_deletion(resource_type, resource_id, ids, Relation.ATTACHMENTS)
        endpoint = relationship_path(resource_type, resource_id, Relation.ATTACHMENTS)
        return self._make_request('DELETE', endpoint, document)
