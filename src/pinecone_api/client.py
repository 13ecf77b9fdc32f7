"""
Pinecone API HTTP client

Builds and issues requests against the Pinecone control and data planes and
normalizes every outcome into a Success or Failure result.
"""

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import httpx

from src.logging import get_logger, redact_headers
from src.telemetry.decorators import trace_pinecone_api_call

from .config import ConfigOverride, get_pinecone_headers, get_request_timeout, resolve_config
from .results import Failure, Result, Success, TRANSPORT_FAILURE
from .routing import Target, route

logger = get_logger('HTTP')

QueryParams = Union[Dict[str, Any], Sequence[Tuple[str, Any]]]


def _build_client(timeout: float) -> httpx.AsyncClient:
    """Create the httpx client used for a single request."""
    return httpx.AsyncClient(timeout=timeout)


@trace_pinecone_api_call(operation="http_request")
async def make_pinecone_request(
    method: str,
    target: Target,
    path: str = "",
    params: Optional[QueryParams] = None,
    json_data: Optional[Any] = None,
    config: ConfigOverride = None,
    timeout: Optional[float] = None
) -> Result:
    """
    Make a request to the Pinecone API.

    Args:
        method: HTTP method (GET, POST, PATCH, DELETE)
        target: Routing target deciding the host
        path: Path below the target's base URL
        params: Query parameters; a list of pairs may repeat a key
        json_data: Body serialized as JSON for POST and PATCH
        config: Per-call configuration override
        timeout: Request timeout in seconds, defaults to PINECONE_REQUEST_TIMEOUT

    Returns:
        Success with the parsed body for 2xx responses, Failure otherwise

    Raises:
        PineconeConfigError: If no API key (or, for legacy routes, no
            environment) could be resolved
    """
    resolved = resolve_config(config)
    url = route(target, path, resolved.environment)
    headers = get_pinecone_headers(resolved)
    timeout = timeout if timeout is not None else get_request_timeout()

    content = json.dumps(json_data) if json_data is not None else None

    logger.debug(
        f"{method} {url} | params:{params} | headers:{redact_headers(headers)} "
        f"| data_size:{len(content) if content else 0}"
    )

    async with _build_client(timeout) as client:
        try:
            response = await client.request(
                method=method,
                url=url,
                params=params,
                content=content,
                headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"transport error | {method} {url} | {type(e).__name__}: {e}")
            return Failure(
                payload={
                    "error": "transport",
                    "type": type(e).__name__,
                    "message": str(e) or type(e).__name__,
                },
                kind=TRANSPORT_FAILURE,
            )

    return _process_response(method, url, response)


def _decode_body(response: httpx.Response) -> Any:
    """Parse a JSON body, falling back to the raw text."""
    # httpx decodes text with errors="replace", so undecodable bytes never raise here
    text = response.text
    if not text:
        return ""
    try:
        return json.loads(text)
    except ValueError:
        return text


def _process_response(method: str, url: str, response: httpx.Response) -> Result:
    """
    Process HTTP response and return the matching result.

    Args:
        method: Request method, for logging
        url: Request URL, for logging
        response: HTTP response object
    """
    payload = _decode_body(response)

    if 200 <= response.status_code <= 299:
        logger.debug(f"response {response.status_code} | size:{len(response.content)}")
        return Success(payload=payload, status_code=response.status_code)

    logger.warning(
        f"API error {response.status_code} | {method} {url} "
        f"| headers:{dict(response.headers)} | body:{payload}"
    )
    return Failure(payload=payload, status_code=response.status_code)


def id_params(ids: List[Any], namespace: Optional[str] = None) -> List[Tuple[str, Any]]:
    """Query parameters for batch id lookups: optional namespace, then one ``ids`` pair per id."""
    params = [("ids", vector_id) for vector_id in ids]
    if namespace is not None:
        params.insert(0, ("namespace", namespace))
    return params
