"""
Pinecone index operations

Control-plane lifecycle of indexes, the ``whoami`` call of the legacy
controller, and construction of index references for vector operations.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from src.logging import get_logger, set_operation_context

from .client import make_pinecone_request
from .config import ConfigOverride, ENV_PROJECT_NAME
from .errors import PineconeConfigError
from .results import Result, Success
from .routing import ControlPlaneIndices, LegacyController, path_segment
from .validation import (
    Kind,
    VALID_CLOUDS,
    VALID_METRICS,
    validate,
    validate_options,
    validate_pod_type,
)

logger = get_logger('PINECONE')

DEFAULT_DIMENSION = 384
DEFAULT_METRIC = "euclidean"
DEFAULT_POD_TYPE = ("p1", "x1")

SERVERLESS_DEFAULTS = {"cloud": "aws", "region": "us-west-2"}
POD_DEFAULTS = {"pods": 1, "replicas": 1, "shards": 1, "pod_type": DEFAULT_POD_TYPE, "metadata": []}


@dataclass(frozen=True)
class IndexRef:
    """
    Local reference to a Pinecone index.

    Creating one does not contact the service; the index host is looked up
    by each vector operation.
    """

    name: str
    project_name: Optional[str] = None


def index(index_name: str, project_name: Optional[str] = None) -> IndexRef:
    """
    Construct an index reference for use in vector operations.

    Args:
        index_name: Name of the index
        project_name: Project name, defaults to PINECONE_PROJECT_NAME
    """
    validate("index_name", index_name, Kind.NAME)
    if project_name is not None:
        validate("project_name", project_name, Kind.STRING)
    return IndexRef(name=index_name, project_name=project_name or os.getenv(ENV_PROJECT_NAME) or None)


async def whoami(config: ConfigOverride = None) -> Result:
    """
    Identify the project behind the configured API key.

    Uses the environment-scoped controller host of the legacy API, so an
    environment must be resolvable.
    """
    set_operation_context("whoami")
    return await make_pinecone_request(
        method="GET",
        target=LegacyController(),
        path="actions/whoami",
        config=config
    )


async def list_indices(config: ConfigOverride = None) -> Result:
    """
    List all indexes.

    Returns:
        Success with the list of index descriptions when the response has an
        ``indexes`` array, otherwise the result unchanged
    """
    set_operation_context("list_indices")
    result = await make_pinecone_request(method="GET", target=ControlPlaneIndices(), config=config)

    if result.ok and isinstance(result.payload, dict) and "indexes" in result.payload:
        return Success(payload=result.payload["indexes"], status_code=result.status_code)
    return result


async def describe_index(index_name: str, config: ConfigOverride = None) -> Result:
    """Describe an index, including the data-plane ``host`` assigned to it."""
    validate("index_name", index_name, Kind.NAME)
    set_operation_context("describe_index", index_name)
    return await make_pinecone_request(
        method="GET",
        target=ControlPlaneIndices(),
        path=path_segment(index_name),
        config=config
    )


def _serverless_spec(options: Any) -> Dict[str, Any]:
    options = {**SERVERLESS_DEFAULTS, **validate_options("serverless", options, SERVERLESS_DEFAULTS)}
    validate("cloud", options["cloud"], Kind.ONE_OF, VALID_CLOUDS)
    validate("region", options["region"], Kind.STRING)
    return {"serverless": {"cloud": options["cloud"], "region": options["region"]}}


def _pod_spec(options: Any) -> Dict[str, Any]:
    options = {**POD_DEFAULTS, **validate_options("pod", options, POD_DEFAULTS)}
    for key in ("pods", "replicas", "shards"):
        validate(key, options[key], Kind.POSITIVE_INTEGER)
    pod_type = validate_pod_type("pod_type", options["pod_type"])
    validate("metadata", options["metadata"], Kind.LIST)

    pod = {
        "pods": options["pods"],
        "replicas": options["replicas"],
        "shards": options["shards"],
        "pod_type": pod_type,
    }
    if options["metadata"]:
        pod["metadata_config"] = {"indexed": list(options["metadata"])}
    return {"pod": pod}


def build_index_spec(spec: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Validate a deployment spec and return its wire form.

    ``spec`` must hold exactly one of ``serverless`` or ``pod``.

    Raises:
        PineconeConfigError: If neither or both deployment kinds are given
        PineconeValidationError: If an option is unknown or out of range
    """
    if not spec:
        raise PineconeConfigError("Must provide `serverless` or `pod` under the `spec` key when creating indexes")
    validate_options("spec", spec, ("serverless", "pod"))
    if len(spec) != 1:
        raise PineconeConfigError("Provide only one of `serverless` or `pod` under the `spec` key")

    if "serverless" in spec:
        return _serverless_spec(spec["serverless"])
    return _pod_spec(spec["pod"])


def build_create_index_body(
    index_name: str,
    dimension: int = DEFAULT_DIMENSION,
    metric: str = DEFAULT_METRIC,
    spec: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    validate("index_name", index_name, Kind.NAME)
    validate("dimension", dimension, Kind.POSITIVE_INTEGER)
    validate("metric", metric, Kind.ONE_OF, VALID_METRICS)

    return {
        "name": index_name,
        "dimension": dimension,
        "metric": metric,
        "spec": build_index_spec(spec),
    }


async def create_index(
    index_name: str,
    dimension: int = DEFAULT_DIMENSION,
    metric: str = DEFAULT_METRIC,
    spec: Optional[Mapping[str, Any]] = None,
    config: ConfigOverride = None
) -> Result:
    """
    Create an index.

    Args:
        index_name: Name of the new index
        dimension: Vector dimensionality, a positive integer
        metric: One of "euclidean", "cosine" or "dotproduct"
        spec: Deployment, either
            ``{"serverless": {"cloud": "aws", "region": "us-west-2"}}`` or
            ``{"pod": {"pods": 1, "replicas": 1, "shards": 1,
            "pod_type": ("p1", "x1"), "metadata": []}}``
        config: Per-call configuration override

    Raises:
        PineconeConfigError: If spec does not name exactly one deployment kind
        PineconeValidationError: If any option is invalid
    """
    body = build_create_index_body(index_name, dimension=dimension, metric=metric, spec=spec)
    set_operation_context("create_index", index_name)
    logger.debug(f"creating index | spec:{list(body['spec'])} | dimension:{dimension} | metric:{body['metric']}")

    return await make_pinecone_request(
        method="POST",
        target=ControlPlaneIndices(),
        json_data=body,
        config=config
    )


async def delete_index(index_name: str, config: ConfigOverride = None) -> Result:
    validate("index_name", index_name, Kind.NAME)
    set_operation_context("delete_index", index_name)
    return await make_pinecone_request(
        method="DELETE",
        target=ControlPlaneIndices(),
        path=path_segment(index_name),
        config=config
    )


async def configure_index(
    index_name: str,
    replicas: int = 1,
    pod_type: Tuple[str, str] = DEFAULT_POD_TYPE,
    config: ConfigOverride = None
) -> Result:
    """
    Change the replica count and pod type of a pod-based index.

    Both fields are always sent.
    """
    validate("index_name", index_name, Kind.NAME)
    validate("replicas", replicas, Kind.POSITIVE_INTEGER)
    body = {"replicas": replicas, "pod_type": validate_pod_type("pod_type", pod_type)}

    set_operation_context("configure_index", index_name)
    return await make_pinecone_request(
        method="PATCH",
        target=ControlPlaneIndices(),
        path=path_segment(index_name),
        json_data=body,
        config=config
    )
