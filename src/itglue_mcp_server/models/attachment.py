"""IT Glue Attachment Data Model

Pydantic models for IT Glue attachments (files uploaded to a resource)
"""

from pydantic import BaseModel, Field, field_validator


class AttachmentSpec(BaseModel):
    """Data required to upload one attachment.

    The file at ``path`` is read and base64-encoded when the request
    document is built, not when the spec is created.
    """

    path: str = Field(description="Location of the source file")
    file_name: str = Field(description="File name shown in IT Glue")

    @field_validator('file_name')
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """Validate file name is not blank."""
        if not v or len(v.strip()) == 0:
            raise ValueError("File name cannot be empty")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "path": "/tmp/network-diagram.png",
                "file_name": "network-diagram.png"
            }
        }
