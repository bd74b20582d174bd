"""Transport protocol contract."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class TransportResponse:
    """An HTTP response as seen by the SDK: status, decoded body and headers."""

    status: int
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class TransportClient(Protocol):
    """Protocol for HTTP transport implementations.

    Defines ONLY the contract for sending a request.
    Implementations return every HTTP response, including non-2xx ones, and
    raise ``TransportFailure`` only when no response was obtained.
    """

    async def send(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        timeout_ms: Optional[int] = None,
    ) -> TransportResponse:
        """Send a request.

        Args:
            method: HTTP method
            path: Path relative to the transport's base URL
            body: JSON body, or form fields when ``files`` is given
            headers: Request headers
            params: Query parameters
            files: Multipart files keyed by form field name
            timeout_ms: Per-request timeout override in milliseconds

        Returns:
            The HTTP response

        Raises:
            TransportFailure: If the request produced no response
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
