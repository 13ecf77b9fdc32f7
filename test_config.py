"""
Tests for configuration resolution.
"""

import pytest

from src.pinecone_api.config import (
    PineconeConfig,
    get_pinecone_config,
    get_pinecone_headers,
    get_request_timeout,
    is_pinecone_configured,
    resolve_config,
    validate_pinecone_config
)
from src.pinecone_api.errors import PineconeConfigError, PineconeValidationError


def test_defaults_come_from_environment(monkeypatch):
    monkeypatch.setenv("PINECONE_PROJECT_NAME", "proj")

    config = get_pinecone_config()

    assert config == PineconeConfig(api_key="test-key", environment="us-east1-gcp", project_name="proj")


def test_resolve_reads_environment_on_every_call(monkeypatch):
    assert resolve_config().api_key == "test-key"

    monkeypatch.setenv("PINECONE_API_KEY", "rotated-key")

    assert resolve_config().api_key == "rotated-key"


def test_override_fields_win_and_absent_fields_fall_back():
    resolved = resolve_config(PineconeConfig(environment="eu-west1-gcp"))

    assert resolved.environment == "eu-west1-gcp"
    assert resolved.api_key == "test-key"


def test_dict_override_is_merged():
    resolved = resolve_config({"api_key": "other", "environment": None})

    assert resolved.api_key == "other"
    assert resolved.environment == "us-east1-gcp"


def test_dict_override_rejects_unknown_keys():
    with pytest.raises(PineconeValidationError) as excinfo:
        resolve_config({"apikey": "typo"})

    assert excinfo.value.field == "config"


def test_override_of_wrong_type_is_rejected():
    with pytest.raises(PineconeValidationError):
        resolve_config("test-key")


def test_missing_api_key_is_reported(monkeypatch):
    monkeypatch.delenv("PINECONE_API_KEY")

    assert "PINECONE_API_KEY" in validate_pinecone_config()
    assert not is_pinecone_configured()
    with pytest.raises(PineconeConfigError):
        get_pinecone_headers(resolve_config())


def test_headers_carry_api_key():
    headers = get_pinecone_headers(resolve_config())

    assert headers == {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "api-key": "test-key",
    }


def test_repr_masks_api_key():
    assert "test-key" not in repr(resolve_config())


def test_request_timeout(monkeypatch):
    assert get_request_timeout() == 30.0

    monkeypatch.setenv("PINECONE_REQUEST_TIMEOUT", "2.5")
    assert get_request_timeout() == 2.5

    monkeypatch.setenv("PINECONE_REQUEST_TIMEOUT", "soon")
    with pytest.raises(PineconeConfigError):
        get_request_timeout()
