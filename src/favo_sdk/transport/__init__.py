"""Transport layer: HTTP client, envelope parsing and request signing."""

from .api_client import BaseApiClient
from .envelope import Envelope, parse_envelope
from .http_client import HttpxTransport
from .protocols import TransportClient, TransportResponse
from .signing import RequestSigner

__all__ = [
    "BaseApiClient",
    "Envelope",
    "parse_envelope",
    "HttpxTransport",
    "TransportClient",
    "TransportResponse",
    "RequestSigner",
]
