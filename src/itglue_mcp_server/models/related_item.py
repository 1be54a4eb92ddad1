"""IT Glue Related Item Data Model

Pydantic models for IT Glue related items (links between two resources)
"""

from enum import Enum
from pydantic import BaseModel, Field, StrictInt


class DestinationType(str, Enum):
    """Kinds of resource a related item can point at."""

    USER = "User"
    CHECKLIST = "Checklist"
    CHECKLIST_TEMPLATE = "Checklist Template"
    CONTACT = "Contact"
    CONFIGURATION = "Configuration"
    DATTO_DEVICE = "Datto Device"
    DOCUMENT = "Document"
    FOLDER = "Folder"
    DOMAIN = "Domain"
    LOCATION = "Location"
    ORGANIZATION = "Organization"
    PASSWORD = "Password"
    SSL_CERTIFICATE = "SSL Certificate"
    FLEXIBLE_ASSET = "Flexible Asset"
    TICKET = "Ticket"


class RelatedItemSpec(BaseModel):
    """Data required to link a source resource to a destination resource."""

    # Strict: bools, numeric strings and floats are rejected, not coerced
    destination_id: StrictInt = Field(description="ID of the destination resource")
    destination_type: DestinationType = Field(description="Type of the destination resource")
    notes: str = Field(default="", description="Optional note shown on the link")

    def to_attributes(self) -> dict:
        return {
            "destination_id": self.destination_id,
            "destination_type": self.destination_type.value,
            "notes": self.notes,
        }

    class Config:
        json_schema_extra = {
            "example": {
                "destination_id": 8765309,
                "destination_type": "Configuration",
                "notes": "Primary firewall"
            }
        }
