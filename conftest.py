"""
Shared fixtures: an isolated environment and a recording httpx transport.
"""

import json
from typing import Callable, List

import httpx
import pytest

from src.pinecone_api import client as client_module

INDEX_HOST = "docs-abc123.svc.us-east1-gcp.pinecone.io"


class RecordingTransport:
    """Answers requests through ``handler`` and remembers every request."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def urls(self) -> List[str]:
        return [f"{r.url.scheme}://{r.url.host}{r.url.path}" for r in self.requests]

    def body(self, position: int = -1):
        return json.loads(self.requests[position].content)


@pytest.fixture(autouse=True)
def pinecone_env(monkeypatch):
    monkeypatch.setenv("PINECONE_API_KEY", "test-key")
    monkeypatch.setenv("PINECONE_CLOUD_ENVIRONMENT", "us-east1-gcp")
    monkeypatch.delenv("PINECONE_PROJECT_NAME", raising=False)
    monkeypatch.delenv("PINECONE_REQUEST_TIMEOUT", raising=False)


@pytest.fixture
def mock_pinecone(monkeypatch):
    """
    Install a handler for outgoing requests.

    Usage: ``transport = mock_pinecone(handler)``, then assert on
    ``transport.requests``.
    """
    def install(handler: Callable[[httpx.Request], httpx.Response]) -> RecordingTransport:
        transport = RecordingTransport(handler)
        monkeypatch.setattr(
            client_module,
            "_build_client",
            lambda timeout: httpx.AsyncClient(transport=httpx.MockTransport(transport), timeout=timeout)
        )
        return transport

    return install


def describe_then(response: httpx.Response, host: str = INDEX_HOST):
    """Handler answering describe-index with ``host`` and everything else with ``response``."""
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.pinecone.io":
            return httpx.Response(200, json={"name": request.url.path.rsplit("/", 1)[-1], "host": host})
        return response
    return handler
