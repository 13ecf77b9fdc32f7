"""
Pinecone API client package

Async bindings for the Pinecone REST API: index and collection lifecycle on
the control plane, vector operations on each index's data-plane host.
Every operation returns a Success or a Failure; invalid arguments raise
PineconeValidationError before any request is sent.
"""

from .client import make_pinecone_request
from .collections import create_collection, delete_collection, describe_collection, list_collections
from .config import (
    PineconeConfig,
    get_pinecone_config,
    resolve_config,
    validate_pinecone_config,
    is_pinecone_configured
)
from .errors import PineconeAPIError, PineconeConfigError, PineconeError, PineconeValidationError
from .indexes import (
    IndexRef,
    configure_index,
    create_index,
    delete_index,
    describe_index,
    index,
    list_indices,
    whoami
)
from .results import Failure, Result, Success
from .vectors import (
    delete_all_vectors,
    delete_vectors,
    describe_index_stats,
    fetch_vectors,
    query,
    upsert_vectors
)

__all__ = [
    # Client functions
    'make_pinecone_request',

    # Configuration
    'PineconeConfig',
    'get_pinecone_config',
    'resolve_config',
    'validate_pinecone_config',
    'is_pinecone_configured',

    # Results and errors
    'Success',
    'Failure',
    'Result',
    'PineconeError',
    'PineconeValidationError',
    'PineconeConfigError',
    'PineconeAPIError',

    # Index operations
    'IndexRef',
    'index',
    'whoami',
    'list_indices',
    'describe_index',
    'create_index',
    'delete_index',
    'configure_index',

    # Vector operations
    'describe_index_stats',
    'upsert_vectors',
    'fetch_vectors',
    'delete_vectors',
    'delete_all_vectors',
    'query',

    # Collection operations
    'create_collection',
    'describe_collection',
    'list_collections',
    'delete_collection'
]
