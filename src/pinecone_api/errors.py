"""
Pinecone client exceptions

Raised errors are reserved for problems the caller must fix in code:
invalid arguments and missing configuration. Remote failures travel as
``Failure`` results instead.
"""

from typing import Any, Optional


class PineconeError(Exception):
    """Base class for all Pinecone client errors."""


class PineconeValidationError(PineconeError, ValueError):
    """An argument failed validation before any request was built."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class PineconeConfigError(PineconeError, ValueError):
    """Client configuration is missing or incomplete."""


class PineconeAPIError(PineconeError):
    """Raised by ``Failure.unwrap()`` for callers that prefer exceptions."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
