"""IT Glue Error Handling Utilities

Custom exception classes for IT Glue payload building and configuration.
Transport failures are not wrapped: they surface as the requests exceptions
raised by the HTTP session.
"""

from typing import Optional, Dict, Any

import requests


class ITGlueError(Exception):
    """Base exception for all IT Glue client errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize IT Glue error.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ITGlueError):
    """Raised when request input fails validation.

    Examples:
    - Batch entry missing destination_id/destination_type
    - Batch entry missing path/file_name
    - Deletion requested with no ids
    - Unknown resource type or destination type

    Always raised before any request is sent.
    """

    pass


class FileReadError(ITGlueError):
    """Raised when an attachment source file cannot be read.

    Always raised before any request is sent.
    """

    pass


class CredentialsError(ITGlueError):
    """Raised when no IT Glue API key is configured."""

    pass


# Network failures and non-2xx responses propagate unmodified from requests.
TransportError = requests.exceptions.RequestException
