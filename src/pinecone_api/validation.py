"""
Argument validation

Checks run before any request is built. A failed check raises
PineconeValidationError naming the field and the offending value.
"""

from enum import Enum
from typing import Any, Iterable, Mapping, Tuple

from .errors import PineconeValidationError


class Kind(Enum):
    STRING = "string"
    NAME = "non_empty_string"
    POSITIVE_INTEGER = "positive_integer"
    BOOLEAN = "boolean"
    MAP = "map"
    LIST = "list"
    ONE_OF = "one_of"


VALID_METRICS = ("euclidean", "cosine", "dotproduct")
VALID_CLOUDS = ("gcp", "aws", "azure")
VALID_POD_CLASSES = ("s1", "p1", "p2")
VALID_POD_SIZES = ("x1", "x2", "x4", "x8")
VALID_POD_TYPES = tuple((pod_class, size) for pod_class in VALID_POD_CLASSES for size in VALID_POD_SIZES)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_positive_integer(value: Any) -> bool:
    # bool is an int subclass but never a count
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def _is_map(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


_PREDICATES = {
    Kind.STRING: _is_string,
    Kind.NAME: _is_name,
    Kind.POSITIVE_INTEGER: _is_positive_integer,
    Kind.BOOLEAN: _is_boolean,
    Kind.MAP: _is_map,
    Kind.LIST: _is_list,
}


def validate(field: str, value: Any, kind: Kind, allowed: Iterable[Any] = ()) -> Any:
    """
    Check a single value, returning it unchanged when valid.

    Args:
        field: Argument name used in the error message
        value: Value supplied by the caller
        kind: Expected kind of value
        allowed: Permitted values when kind is Kind.ONE_OF

    Raises:
        PineconeValidationError: If the value does not satisfy the kind
    """
    if kind is Kind.ONE_OF:
        allowed = list(allowed)
        if value not in allowed:
            raise PineconeValidationError(
                f"expected {field} to be one of {allowed!r}, got {value!r}",
                field=field,
                value=value,
            )
        return value

    if not _PREDICATES[kind](value):
        raise PineconeValidationError(
            f"expected {field} to be type {kind.value}, got {value!r}",
            field=field,
            value=value,
        )
    return value


def validate_options(field: str, options: Any, allowed_keys: Iterable[str]) -> Mapping[str, Any]:
    """
    Check that an option map only uses known keys.

    Raises:
        PineconeValidationError: If options is not a map or has unknown keys
    """
    validate(field, options, Kind.MAP)
    allowed_keys = list(allowed_keys)
    unknown = sorted(str(key) for key in options if key not in allowed_keys)
    if unknown:
        raise PineconeValidationError(
            f"unknown keys {unknown} in {field}, expected a subset of {allowed_keys}",
            field=field,
            value=dict(options),
        )
    return options


def to_pod_type(pod_type: Tuple[str, str]) -> str:
    """Serialize a validated (class, size) pair, e.g. ("p1", "x1") -> "p1.x1"."""
    pod_class, size = pod_type
    return f"{pod_class}.{size}"


def validate_pod_type(field: str, value: Any) -> str:
    """Validate a (class, size) pod type and return its wire form."""
    pod_type = tuple(value) if isinstance(value, list) else value
    validate(field, pod_type, Kind.ONE_OF, VALID_POD_TYPES)
    return to_pod_type(pod_type)
