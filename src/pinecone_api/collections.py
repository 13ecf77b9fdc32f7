"""
Pinecone collection operations

Collections are static copies of an index, managed on the control plane.
"""

from src.logging import set_operation_context

from .client import make_pinecone_request
from .config import ConfigOverride
from .results import Result
from .routing import ControlPlaneCollections, path_segment
from .validation import Kind, validate


async def create_collection(collection_name: str, index_name: str, config: ConfigOverride = None) -> Result:
    """Create a collection from the index named ``index_name``."""
    validate("collection_name", collection_name, Kind.NAME)
    validate("index_name", index_name, Kind.NAME)

    set_operation_context("create_collection", index_name)
    return await make_pinecone_request(
        method="POST",
        target=ControlPlaneCollections(),
        json_data={"name": collection_name, "source": index_name},
        config=config
    )


async def describe_collection(collection_name: str, config: ConfigOverride = None) -> Result:
    validate("collection_name", collection_name, Kind.NAME)

    set_operation_context("describe_collection")
    return await make_pinecone_request(
        method="GET",
        target=ControlPlaneCollections(),
        path=path_segment(collection_name),
        config=config
    )


async def list_collections(config: ConfigOverride = None) -> Result:
    set_operation_context("list_collections")
    return await make_pinecone_request(method="GET", target=ControlPlaneCollections(), config=config)


async def delete_collection(collection_name: str, config: ConfigOverride = None) -> Result:
    validate("collection_name", collection_name, Kind.NAME)

    set_operation_context("delete_collection")
    return await make_pinecone_request(
        method="DELETE",
        target=ControlPlaneCollections(),
        path=path_segment(collection_name),
        config=config
    )
