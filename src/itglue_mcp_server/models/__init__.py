"""IT Glue MCP Server Data Models

This package contains Pydantic models for IT Glue request inputs and the
JSON:API request envelope.
"""

from .attachment import AttachmentSpec
from .document import Relation, RequestDocument, ResourceObject, ResourceType
from .related_item import DestinationType, RelatedItemSpec

__all__ = [
    "AttachmentSpec",
    "DestinationType",
    "RelatedItemSpec",
    "Relation",
    "RequestDocument",
    "ResourceObject",
    "ResourceType",
]
