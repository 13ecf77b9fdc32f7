"""
Endpoint routing

Maps an operation target and a path onto a fully qualified URL. Control-plane
targets live on fixed hosts; data-plane targets carry the host discovered for
an index.
"""

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import quote

from .errors import PineconeConfigError

CONTROL_PLANE_URL = "https://api.pinecone.io"
LEGACY_CONTROLLER_TEMPLATE = "https://controller.{environment}.pinecone.io"


@dataclass(frozen=True)
class ControlPlaneIndices:
    """Index lifecycle on the global API host."""


@dataclass(frozen=True)
class ControlPlaneCollections:
    """Collection lifecycle on the global API host."""


@dataclass(frozen=True)
class LegacyController:
    """Environment-scoped controller host of the previous API generation."""


@dataclass(frozen=True)
class DataPlaneVector:
    """Vector operations under ``/vectors`` on an index host."""

    host: str


@dataclass(frozen=True)
class DataPlaneRoot:
    """Operations addressed at the root of an index host (query)."""

    host: str


Target = Union[ControlPlaneIndices, ControlPlaneCollections, LegacyController, DataPlaneVector, DataPlaneRoot]


def path_segment(name: str) -> str:
    """Percent-encode a resource name as a single path segment, including any "/"."""
    return quote(name, safe="")


def _join(base: str, path: str) -> str:
    path = path.strip("/")
    return f"{base}/{path}" if path else base


def _host_base(host: str) -> str:
    host = host.rstrip("/")
    if host.startswith(("https://", "http://")):
        return host
    return f"https://{host}"


def route(target: Target, path: str = "", environment: Optional[str] = None) -> str:
    """
    Build the URL for a request.

    Args:
        target: Where the request goes
        path: Path below the target's base, e.g. an index name or "upsert"
        environment: Resolved environment, only used by LegacyController

    Returns:
        Fully qualified URL

    Raises:
        PineconeConfigError: LegacyController without an environment
        TypeError: Unknown target
    """
    if isinstance(target, ControlPlaneIndices):
        return _join(f"{CONTROL_PLANE_URL}/indexes", path)
    if isinstance(target, ControlPlaneCollections):
        return _join(f"{CONTROL_PLANE_URL}/collections", path)
    if isinstance(target, LegacyController):
        if not environment:
            raise PineconeConfigError(
                "Pinecone environment not configured. Please set the PINECONE_CLOUD_ENVIRONMENT "
                "environment variable or pass environment in config."
            )
        return _join(LEGACY_CONTROLLER_TEMPLATE.format(environment=environment), path)
    if isinstance(target, DataPlaneVector):
        return _join(f"{_host_base(target.host)}/vectors", path)
    if isinstance(target, DataPlaneRoot):
        return _join(_host_base(target.host), path)
    raise TypeError(f"unsupported request target: {target!r}")
