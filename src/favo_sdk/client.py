"""
FavoSDK facade.

Wires one transport, one auth session and one verification workflow from
``SDKSettings`` and keeps the workflow's bearer credential in step with the
session's access token.
"""
import logging
from typing import Any, Optional

from .config.constants import EndpointCatalog
from .config.settings import SDKSettings, get_settings
from .features.auth import AuthSession, TokenPair
from .features.verification import VerificationWorkflow
from .transport import HttpxTransport, RequestSigner, TransportClient
from .utils.datetime import Clock

logger = logging.getLogger(__name__)


class FavoSDK:
    """Entry point bundling the auth and verification clients.

    After every token change on ``auth`` (login, telegram auth, refresh,
    logout, invalidate) the new access token, or none, is pushed into
    ``verification`` before the auth call returns.

    Usage:
        async with FavoSDK(SDKSettings(api_key="...")) as sdk:
            await sdk.auth.telegram_auth(123456789, "example")
            await sdk.verification.start("email", {"email": "user@example.com"})
    """

    def __init__(
        self,
        settings: Optional[SDKSettings] = None,
        transport: Optional[TransportClient] = None,
        endpoints: Optional[EndpointCatalog] = None,
        auth_token: Optional[str] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the SDK.

        Args:
            settings: Connection settings; read from the environment when omitted
            transport: Transport to use instead of an ``HttpxTransport`` built
                from settings. An injected transport is not closed by ``aclose``
            endpoints: Endpoint catalog shared by both clients
            auth_token: Externally obtained access token for the workflow
            clock: Time source for expiry checks
        """
        self._settings = settings or get_settings()
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport.from_settings(self._settings)
        self._endpoints = endpoints or EndpointCatalog()

        signer = None
        if self._settings.signing_enabled:
            signer = RequestSigner(self._settings.signing_secret.get_secret_value())

        api_key = self._settings.api_key.get_secret_value()

        self.auth = AuthSession(
            self._transport,
            api_key=api_key,
            endpoints=self._endpoints,
            signer=signer,
            clock=clock,
        )
        self.verification = VerificationWorkflow(
            self._transport,
            api_key=api_key,
            endpoints=self._endpoints,
            signer=signer,
            auth_token=auth_token,
            clock=clock,
            upload_timeout_ms=self._settings.upload_timeout_ms,
            max_tracked=self._settings.max_tracked_verifications,
        )
        self.auth.add_token_listener(self._on_tokens_changed)

        logger.debug(f"FavoSDK initialized: {self._settings.to_safe_dict()}")

    @property
    def settings(self) -> SDKSettings:
        return self._settings

    @property
    def transport(self) -> TransportClient:
        return self._transport

    def _on_tokens_changed(self, tokens: TokenPair) -> None:
        self.verification.set_auth_token(tokens.access)

    def update_auth_token(self, token: Optional[str]) -> None:
        """Use an externally obtained access token for verification calls.

        The auth session's own tokens are not changed.
        """
        self.verification.set_auth_token(token)

    async def aclose(self) -> None:
        """Close the transport if this SDK created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "FavoSDK":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def create_sdk(
    transport: Optional[TransportClient] = None,
    endpoints: Optional[EndpointCatalog] = None,
    auth_token: Optional[str] = None,
    **overrides: Any,
) -> FavoSDK:
    """Create a FavoSDK whose settings are the environment plus ``overrides``.

    Example:
        sdk = create_sdk(base_url="https://api.favotrust.com", api_key="your-api-key")
    """
    settings = SDKSettings(**overrides)
    return FavoSDK(settings, transport=transport, endpoints=endpoints, auth_token=auth_token)
