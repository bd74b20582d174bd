"""
httpx-based transport for the FavoTrust API.

Performs the actual HTTP calls for the auth and verification clients.
Every HTTP response is returned to the caller; only connectivity problems
and timeouts are raised, as ``TransportFailure``.
"""
import logging
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from ..config.constants import ContentTypes, HeaderNames
from ..config.settings import SDKSettings
from ..core.exceptions import TransportFailure
from .protocols import TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Async HTTP transport backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        timeout_ms: int = 30000,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: Service base URL all paths are relative to
            timeout_ms: Default request timeout in milliseconds
            verify_ssl: Whether to verify TLS certificates
            user_agent: User-Agent header value
            client: Pre-built client (tests inject one with a MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout_ms = timeout_ms
        self._owns_client = client is None

        headers = {HeaderNames.ACCEPT: ContentTypes.JSON}
        if user_agent:
            headers["User-Agent"] = user_agent

        self._client = client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout_ms / 1000),
            verify=verify_ssl,
            headers=headers,
        )

    @classmethod
    def from_settings(cls, settings: SDKSettings) -> "HttpxTransport":
        """Create a transport from SDK settings."""
        return cls(
            base_url=settings.base_url,
            timeout_ms=settings.timeout_ms,
            verify_ssl=settings.verify_ssl,
            user_agent=settings.user_agent,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

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
        """Send a request and return the decoded response."""
        request_headers = dict(headers or {})
        kwargs: Dict[str, Any] = {"headers": request_headers}

        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}

        if files:
            # httpx sets the multipart boundary itself
            request_headers.pop(HeaderNames.CONTENT_TYPE, None)
            kwargs["files"] = dict(files)
            if body:
                kwargs["data"] = body
        elif body is not None:
            kwargs["json"] = body

        if timeout_ms is not None:
            kwargs["timeout"] = httpx.Timeout(timeout_ms / 1000)

        start = time.monotonic()
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out after {self._elapsed_ms(start)}ms")
            raise TransportFailure(str(e) or "Request timed out", method=method, path=path, timeout=True) from e
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {type(e).__name__}: {e}")
            raise TransportFailure(str(e) or type(e).__name__, method=method, path=path) from e

        logger.debug(f"{method} {path} -> {response.status_code} in {self._elapsed_ms(start)}ms")
        return TransportResponse(
            status=response.status_code,
            body=self._decode_body(response),
            headers=dict(response.headers),
        )

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.monotonic() - start) * 1000)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
