"""IT Glue JSON:API Document Models

Pydantic models for the JSON:API envelope sent to IT Glue relationship
endpoints, and the resource types those endpoints hang off.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field


class ResourceType(str, Enum):
    """Top-level IT Glue resources that carry related items and attachments."""

    CHECKLISTS = "checklists"
    CHECKLIST_TEMPLATES = "checklist_templates"
    CONFIGURATIONS = "configurations"
    CONTACTS = "contacts"
    DOCUMENTS = "documents"
    DOMAINS = "domains"
    LOCATIONS = "locations"
    PASSWORDS = "passwords"
    SSL_CERTIFICATES = "ssl_certificates"
    FLEXIBLE_ASSETS = "flexible_assets"
    TICKETS = "tickets"


class Relation(str, Enum):
    """Relationship collections under a resource."""

    RELATED_ITEMS = "related_items"
    ATTACHMENTS = "attachments"


class ResourceObject(BaseModel):
    """A single JSON:API resource object: ``{type, attributes}``."""

    type: str = Field(description="JSON:API resource type")
    attributes: Dict[str, Any] = Field(description="Resource attributes")


class RequestDocument(BaseModel):
    """JSON:API request envelope.

    ``data`` is one object for singleton input and a list of objects for
    batch input. Both shapes are sent under the same key.
    """

    data: Union[ResourceObject, List[ResourceObject]]

    @property
    def is_batch(self) -> bool:
        return isinstance(self.data, list)

    def to_payload(self) -> Dict[str, Any]:
        """Return the plain mapping sent on the wire."""
        return self.model_dump()

    def to_json(self) -> str:
        return json.dumps(self.to_payload())

    class Config:
        json_schema_extra = {
            "example": {
                "data": {
                    "type": "related_items",
                    "attributes": {
                        "destination_id": 8765309,
                        "destination_type": "Configuration",
                        "notes": "Primary firewall"
                    }
                }
            }
        }
