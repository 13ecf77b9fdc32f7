"""
Operation results

Every façade operation returns exactly one of ``Success`` or ``Failure``.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .errors import PineconeAPIError

HTTP_FAILURE = "http"
TRANSPORT_FAILURE = "transport"


@dataclass(frozen=True)
class Success:
    """A 2xx response; ``payload`` is the parsed JSON body."""

    payload: Any
    status_code: Optional[int] = field(default=None, compare=False)

    ok = True

    def unwrap(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class Failure:
    """
    A rejected request.

    ``kind`` is ``"http"`` when the service answered with a non-2xx status
    (``payload`` is the parsed error body) and ``"transport"`` when no
    response was obtained (``payload`` describes the network fault).
    """

    payload: Any
    status_code: Optional[int] = field(default=None, compare=False)
    kind: str = field(default=HTTP_FAILURE, compare=False)

    ok = False

    @property
    def is_transport_error(self) -> bool:
        return self.kind == TRANSPORT_FAILURE

    def unwrap(self) -> Any:
        message = self.payload.get("message") if isinstance(self.payload, dict) else None
        raise PineconeAPIError(
            message=str(message or self.payload),
            status_code=self.status_code,
            payload=self.payload,
        )


Result = Union[Success, Failure]
