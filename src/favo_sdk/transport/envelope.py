"""Response envelope parsing.

Success: ``{"success": true, "data": ..., "timestamp": ...}``
Failure: ``{"success": false, "error": {"code", "message", "details"}, "timestamp": ...}``

Only ``data`` and ``error`` are interpreted; every other field is kept in
``Envelope.extra`` untouched.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .protocols import TransportResponse

_RESERVED_FIELDS = frozenset({"success", "data", "error", "timestamp", "message"})


@dataclass(frozen=True)
class Envelope:
    """A parsed API response envelope."""

    success: bool
    status: int
    data: Any = None
    error: Optional[Mapping[str, Any]] = None
    timestamp: Optional[str] = None
    message: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)


def parse_envelope(response: TransportResponse) -> Envelope:
    """Parse a transport response into an envelope.

    A response succeeds when its status is 2xx and its body does not say
    ``success: false``. Bodies that are not envelopes (empty 204 replies,
    plain JSON) are wrapped as-is: the whole body becomes ``data``.
    """
    body = response.body

    if not isinstance(body, Mapping) or ("success" not in body and "error" not in body):
        return Envelope(
            success=response.is_success,
            status=response.status,
            data=body if response.is_success else None,
            error=body if not response.is_success and isinstance(body, Mapping) else None,
        )

    error = body.get("error")
    success = response.is_success and body.get("success", True) is not False and not error
    extra: Dict[str, Any] = {k: v for k, v in body.items() if k not in _RESERVED_FIELDS}

    return Envelope(
        success=success,
        status=response.status,
        data=body.get("data"),
        error=error if isinstance(error, Mapping) else None,
        timestamp=body.get("timestamp"),
        message=body.get("message"),
        extra=extra,
    )
