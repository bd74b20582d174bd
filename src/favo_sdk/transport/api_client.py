"""Shared request mechanics for the SDK feature clients.

Builds headers (API key, content type, bearer credential, signature),
resolves logical endpoint names through the catalog, unwraps the response
envelope and funnels every failure through the error taxonomy so callers
only ever see ``SDKError``.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config.constants import ContentTypes, EndpointCatalog, HeaderNames
from ..core.exceptions import SDKError, normalize
from .envelope import Envelope, parse_envelope
from .protocols import TransportClient
from .signing import RequestSigner

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseApiClient:
    """Base class for clients that call the API through a ``TransportClient``.

    Subclasses provide the bearer token via ``_authorization_token``.
    """

    def __init__(
        self,
        transport: TransportClient,
        api_key: str = "",
        endpoints: Optional[EndpointCatalog] = None,
        signer: Optional[RequestSigner] = None,
    ):
        self._transport = transport
        self._api_key = api_key
        self._endpoints = endpoints or EndpointCatalog()
        self._signer = signer
        self._last_envelope: Optional[Envelope] = None

    @property
    def transport(self) -> TransportClient:
        return self._transport

    @property
    def endpoints(self) -> EndpointCatalog:
        return self._endpoints

    @property
    def last_envelope(self) -> Optional[Envelope]:
        """Envelope of the most recent successful response (timestamp, message, extra fields)."""
        return self._last_envelope

    def _authorization_token(self) -> Optional[str]:
        return None

    def _build_headers(self, method: str, path: str, body: Any, multipart: bool) -> Dict[str, str]:
        headers = {
            HeaderNames.API_KEY: self._api_key,
            HeaderNames.CONTENT_TYPE: ContentTypes.MULTIPART if multipart else ContentTypes.JSON,
        }

        token = self._authorization_token()
        if token:
            headers[HeaderNames.AUTHORIZATION] = f"Bearer {token}"

        if self._signer is not None:
            # Multipart requests sign the form fields only, not file contents
            headers.update(self._signer.sign(method, path, body))

        return headers

    async def _request(
        self,
        endpoint_name: str,
        body: Optional[Any] = None,
        *,
        path_params: Optional[Mapping[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        timeout_ms: Optional[int] = None,
    ) -> Any:
        """Call a catalog endpoint and return the envelope's ``data``.

        Raises:
            SDKError: For any failure: transport, HTTP error status or
                ``success: false`` envelope
        """
        try:
            endpoint = self._endpoints.get(endpoint_name)
            path = endpoint.format(**(path_params or {}))
            method = endpoint.method.value
            headers = self._build_headers(method, path, body, multipart=bool(files))
            response = await self._transport.send(
                method,
                path,
                body,
                headers,
                params=params,
                files=files,
                timeout_ms=timeout_ms,
            )
        except Exception as e:
            error = normalize(e)
            logger.warning(f"{endpoint_name} failed before a response: [{error.code}] {error.message}")
            raise SDKError(error) from e

        envelope = parse_envelope(response)
        if not envelope.success:
            error = normalize(response)
            logger.info(
                f"{endpoint_name} rejected with status {response.status}: "
                f"[{error.code}] {error.message} ({error.category.value})"
            )
            raise SDKError(error)

        self._last_envelope = envelope
        return envelope.data

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        """Validate response data into a model; malformed payloads become SYSTEM errors."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e.error_count()} validation errors")
            raise SDKError(normalize(e)) from e

    @staticmethod
    def _dump(data: Any) -> Dict[str, Any]:
        """Request body from a model (unset fields dropped) or a mapping."""
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_none=True)
        return dict(data)
