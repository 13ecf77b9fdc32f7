"""
Pinecone vector operations

Every operation first asks the control plane for the index host, then sends
the request to that host. Hosts are not cached: each call pays one extra
describe-index round trip and never acts on a stale host.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from src.logging import get_logger, set_operation_context

from .client import id_params, make_pinecone_request
from .config import ConfigOverride
from .indexes import IndexRef, describe_index
from .results import Failure, Result
from .routing import DataPlaneRoot, DataPlaneVector
from .validation import Kind, validate

logger = get_logger('PINECONE')

DEFAULT_TOP_K = 5

Vector = Mapping[str, Any]


def _is_bare_host(host: str) -> bool:
    """A host name with optional scheme and port, no path and no whitespace."""
    bare = host.split("://", 1)[-1].rstrip("/")
    return bool(bare) and "/" not in bare and not any(char.isspace() for char in bare)


async def index_host(index_name: str, config: ConfigOverride = None) -> Union[str, Failure]:
    """
    Discover the data-plane host of an index.

    Returns:
        The host string, or the Failure of the describe call. A successful
        description without a usable host is reported as a Failure as well.
    """
    result = await describe_index(index_name, config=config)
    if not result.ok:
        return result

    host = result.payload.get("host") if isinstance(result.payload, dict) else None
    if not host or not isinstance(host, str):
        logger.warning(f"index description has no host | index:{index_name}")
        return Failure(
            payload={"message": f"index {index_name!r} description has no host", "description": result.payload},
            status_code=result.status_code,
        )
    if not _is_bare_host(host):
        logger.warning(f"index description has a malformed host | index:{index_name} | host:{host!r}")
        return Failure(
            payload={"message": f"index {index_name!r} description has a malformed host", "description": result.payload},
            status_code=result.status_code,
        )
    return host


def _check_index(index: IndexRef) -> str:
    if not isinstance(index, IndexRef):
        validate("index", index, Kind.NAME)
        return index
    return index.name


async def _vector_request(
    operation: str,
    index: IndexRef,
    method: str,
    path: str,
    root: bool = False,
    params: Optional[List[Any]] = None,
    json_data: Optional[Dict[str, Any]] = None,
    config: ConfigOverride = None
) -> Result:
    name = _check_index(index)

    host = await index_host(name, config=config)
    if isinstance(host, Failure):
        return host

    # describe_index replaced the context, restore it for the data-plane call
    set_operation_context(operation, name)
    target = DataPlaneRoot(host) if root else DataPlaneVector(host)
    return await make_pinecone_request(
        method=method,
        target=target,
        path=path,
        params=params,
        json_data=json_data,
        config=config
    )


async def describe_index_stats(index: IndexRef, config: ConfigOverride = None) -> Result:
    """Describe vector counts per namespace and the index fullness."""
    return await _vector_request("describe_index_stats", index, "GET", "describe_index_stats", config=config)


async def upsert_vectors(
    index: IndexRef,
    vectors: Union[Vector, List[Vector]],
    namespace: Optional[str] = None,
    config: ConfigOverride = None
) -> Result:
    """
    Upsert vectors into an index.

    For more than 100 vectors, split the upsert into several calls and run
    them concurrently:

        batches = [vectors[i:i + 100] for i in range(0, len(vectors), 100)]
        results = await asyncio.gather(*(upsert_vectors(ref, b) for b in batches))

    Args:
        index: Index reference
        vectors: One vector or a list of vectors,
            e.g. ``{"id": "a", "values": [0.1, 0.2], "metadata": {...}}``
        namespace: Namespace to write to, the default namespace when omitted
        config: Per-call configuration override
    """
    if namespace is not None:
        validate("namespace", namespace, Kind.STRING)

    if isinstance(vectors, Mapping):
        vectors = [vectors]
    validate("vectors", vectors, Kind.LIST)

    body: Dict[str, Any] = {"vectors": list(vectors)}
    if namespace is not None:
        body["namespace"] = namespace

    return await _vector_request("upsert_vectors", index, "POST", "upsert", json_data=body, config=config)


async def fetch_vectors(
    index: IndexRef,
    ids: List[str],
    namespace: Optional[str] = None,
    config: ConfigOverride = None
) -> Result:
    """Fetch vectors by id. Each id is sent as its own ``ids`` query parameter."""
    validate("ids", ids, Kind.LIST)
    if namespace is not None:
        validate("namespace", namespace, Kind.STRING)

    return await _vector_request(
        "fetch_vectors", index, "GET", "fetch",
        params=id_params(ids, namespace),
        config=config
    )


async def delete_vectors(
    index: IndexRef,
    ids: List[str],
    namespace: Optional[str] = None,
    config: ConfigOverride = None
) -> Result:
    """Delete vectors by id."""
    validate("ids", ids, Kind.LIST)
    if namespace is not None:
        validate("namespace", namespace, Kind.STRING)

    return await _vector_request(
        "delete_vectors", index, "DELETE", "delete",
        params=id_params(ids, namespace),
        config=config
    )


async def delete_all_vectors(
    index: IndexRef,
    namespace: Optional[str] = None,
    filter: Optional[Mapping[str, Any]] = None,
    config: ConfigOverride = None
) -> Result:
    """
    Delete every vector of a namespace, or only those matching a filter.

    With ``filter`` the body carries the metadata filter and no
    ``deleteAll`` flag; without it the body is ``{"deleteAll": true}``.
    """
    if namespace is not None:
        validate("namespace", namespace, Kind.STRING)

    if filter is not None:
        validate("filter", filter, Kind.MAP)
        body: Dict[str, Any] = {"filter": dict(filter)}
    else:
        body = {"deleteAll": True}

    if namespace is not None:
        body["namespace"] = namespace

    return await _vector_request("delete_all_vectors", index, "POST", "delete", json_data=body, config=config)


async def query(
    index: IndexRef,
    vector: List[float],
    top_k: int = DEFAULT_TOP_K,
    include_values: bool = False,
    include_metadata: bool = False,
    namespace: Optional[str] = None,
    filter: Optional[Mapping[str, Any]] = None,
    config: ConfigOverride = None
) -> Result:
    """
    Query an index for the vectors nearest to ``vector``.

    Args:
        index: Index reference
        vector: Query vector
        top_k: Number of matches to return
        include_values: Return vector values with matches
        include_metadata: Return vector metadata with matches
        namespace: Namespace to query, the default namespace when omitted
        filter: Metadata filter, see https://docs.pinecone.io/docs/metadata-filtering
        config: Per-call configuration override
    """
    filter = {} if filter is None else filter

    validate("vector", vector, Kind.LIST)
    validate("top_k", top_k, Kind.POSITIVE_INTEGER)
    validate("include_values", include_values, Kind.BOOLEAN)
    validate("include_metadata", include_metadata, Kind.BOOLEAN)
    validate("filter", filter, Kind.MAP)
    if namespace is not None:
        validate("namespace", namespace, Kind.STRING)

    body: Dict[str, Any] = {
        "vector": list(vector),
        "topK": top_k,
        "includeValues": include_values,
        "includeMetadata": include_metadata,
        "filter": dict(filter),
    }
    if namespace is not None:
        body["namespace"] = namespace

    return await _vector_request("query", index, "POST", "query", root=True, json_data=body, config=config)
