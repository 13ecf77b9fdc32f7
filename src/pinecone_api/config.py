"""
Pinecone API configuration

Handles environment variables and per-call configuration overrides for the
Pinecone REST API. Defaults are read from the environment on every call, so
changes made at runtime apply to the next request.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import load_dotenv

from .errors import PineconeConfigError, PineconeValidationError

# Load environment variables from .env file
load_dotenv()

ENV_API_KEY = "PINECONE_API_KEY"
ENV_ENVIRONMENT = "PINECONE_CLOUD_ENVIRONMENT"
ENV_PROJECT_NAME = "PINECONE_PROJECT_NAME"
ENV_REQUEST_TIMEOUT = "PINECONE_REQUEST_TIMEOUT"

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class PineconeConfig:
    """Client configuration. ``None`` fields are treated as absent."""

    api_key: Optional[str] = None
    environment: Optional[str] = None
    project_name: Optional[str] = None

    def __repr__(self) -> str:
        masked = "***" if self.api_key else None
        return (
            f"PineconeConfig(api_key={masked!r}, environment={self.environment!r}, "
            f"project_name={self.project_name!r})"
        )


ConfigOverride = Union[PineconeConfig, Mapping[str, Any], None]

_CONFIG_FIELDS = tuple(f.name for f in fields(PineconeConfig))


def get_pinecone_config() -> PineconeConfig:
    """
    Get the process-wide default configuration from environment variables.

    Returns:
        PineconeConfig with absent variables set to None
    """
    return PineconeConfig(
        api_key=os.getenv(ENV_API_KEY) or None,
        environment=os.getenv(ENV_ENVIRONMENT) or None,
        project_name=os.getenv(ENV_PROJECT_NAME) or None,
    )


def get_request_timeout() -> float:
    value = os.getenv(ENV_REQUEST_TIMEOUT)
    if not value:
        return DEFAULT_TIMEOUT
    try:
        return float(value)
    except ValueError:
        raise PineconeConfigError(f"{ENV_REQUEST_TIMEOUT} must be a number of seconds, got {value!r}")


def _override_values(override: ConfigOverride) -> Dict[str, Any]:
    if override is None:
        return {}
    if isinstance(override, PineconeConfig):
        return {name: getattr(override, name) for name in _CONFIG_FIELDS}
    if isinstance(override, Mapping):
        unknown = sorted(set(override) - set(_CONFIG_FIELDS))
        if unknown:
            raise PineconeValidationError(
                f"unknown config keys {unknown}, expected a subset of {list(_CONFIG_FIELDS)}",
                field="config",
                value=dict(override),
            )
        return dict(override)
    raise PineconeValidationError(
        f"expected config to be a PineconeConfig or a mapping, got {override!r}",
        field="config",
        value=override,
    )


def resolve_config(override: ConfigOverride = None) -> PineconeConfig:
    """
    Merge a per-call override over the environment defaults.

    Each field of the override that is not None wins; every other field
    comes from the environment as it is right now.

    Args:
        override: PineconeConfig, a dict with a subset of its fields, or None

    Returns:
        The resolved configuration
    """
    values = {k: v for k, v in _override_values(override).items() if v is not None}
    return replace(get_pinecone_config(), **values)


def validate_pinecone_config(config: Optional[PineconeConfig] = None) -> Optional[str]:
    """
    Validate Pinecone API configuration.

    Returns:
        Error message if configuration is invalid, None if valid
    """
    config = config if config is not None else get_pinecone_config()
    if not config.api_key:
        return f"Error: Pinecone API key not configured. Please set the {ENV_API_KEY} environment variable."
    return None


def is_pinecone_configured() -> bool:
    return validate_pinecone_config() is None


def get_pinecone_headers(config: PineconeConfig) -> Dict[str, str]:
    """
    Build request headers for the resolved configuration.

    Raises:
        PineconeConfigError: If no API key was resolved
    """
    error = validate_pinecone_config(config)
    if error:
        raise PineconeConfigError(error)

    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "api-key": config.api_key,
    }
