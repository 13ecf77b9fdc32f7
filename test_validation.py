"""
Tests for argument validation.
"""

import pytest

from src.pinecone_api.errors import PineconeValidationError
from src.pinecone_api.validation import (
    Kind,
    VALID_POD_TYPES,
    validate,
    validate_options,
    validate_pod_type
)


@pytest.mark.parametrize("kind,value", [
    (Kind.STRING, "docs"),
    (Kind.STRING, ""),
    (Kind.NAME, "docs"),
    (Kind.POSITIVE_INTEGER, 1),
    (Kind.BOOLEAN, False),
    (Kind.MAP, {}),
    (Kind.LIST, ["a"]),
])
def test_valid_values_pass_through(kind, value):
    assert validate("field", value, kind) == value


@pytest.mark.parametrize("kind,value", [
    (Kind.STRING, 3),
    (Kind.STRING, None),
    (Kind.NAME, ""),
    (Kind.NAME, None),
    (Kind.POSITIVE_INTEGER, 0),
    (Kind.POSITIVE_INTEGER, -4),
    (Kind.POSITIVE_INTEGER, 2.0),
    (Kind.POSITIVE_INTEGER, True),
    (Kind.BOOLEAN, "true"),
    (Kind.BOOLEAN, 1),
    (Kind.MAP, [("a", 1)]),
    (Kind.LIST, "abc"),
])
def test_invalid_values_raise(kind, value):
    with pytest.raises(PineconeValidationError) as excinfo:
        validate("field", value, kind)

    assert excinfo.value.field == "field"
    assert "field" in str(excinfo.value)


def test_one_of():
    assert validate("metric", "cosine", Kind.ONE_OF, ["cosine", "euclidean"]) == "cosine"

    with pytest.raises(PineconeValidationError, match="one of"):
        validate("metric", "manhattan", Kind.ONE_OF, ["cosine", "euclidean"])


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate("top_k", "5", Kind.POSITIVE_INTEGER)


def test_unknown_option_keys_are_rejected():
    assert validate_options("pod", {"pods": 2}, ["pods", "replicas"]) == {"pods": 2}

    with pytest.raises(PineconeValidationError, match="replicaz"):
        validate_options("pod", {"replicaz": 2}, ["pods", "replicas"])


@pytest.mark.parametrize("pod_type", VALID_POD_TYPES)
def test_every_pod_type_serializes(pod_type):
    assert validate_pod_type("pod_type", pod_type) == f"{pod_type[0]}.{pod_type[1]}"


def test_pod_type_accepts_list_form():
    assert validate_pod_type("pod_type", ["p2", "x8"]) == "p2.x8"


@pytest.mark.parametrize("pod_type", [("s2", "x1"), ("p1", "x3"), "p1.x1", None])
def test_invalid_pod_types(pod_type):
    with pytest.raises(PineconeValidationError):
        validate_pod_type("pod_type", pod_type)
