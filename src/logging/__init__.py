"""
Logging utilities for the Pinecone API client.
"""

from .pinecone_logger import (
    get_logger,
    set_operation_context,
    get_operation_context,
    redact_headers
)

__all__ = [
    'get_logger',
    'set_operation_context',
    'get_operation_context',
    'redact_headers'
]
