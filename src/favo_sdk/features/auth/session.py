"""Authentication session: token acquisition, attachment, refresh and logout."""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, List, Mapping, Optional, Union

from jose import jwt
from jose.exceptions import JWTError
from pydantic import BaseModel, ValidationError

from ...config.constants import EndpointCatalog, ErrorCodes
from ...core.exceptions import SDKError, internal_error
from ...transport.api_client import BaseApiClient
from ...transport.protocols import TransportClient
from ...transport.signing import RequestSigner
from ...utils.datetime import Clock, timestamp_to_utc, utc_now
from .entities import AuthResult, CreateUserRequest, TelegramAuthRequest, User
from .tokens import TokenPair

logger = logging.getLogger(__name__)

TokenListener = Callable[[TokenPair], None]
Credentials = Union[Mapping[str, Any], BaseModel]


class AuthSession(BaseApiClient):
    """Owns the access/refresh token pair of one logical user session.

    Every call made through this session carries the access token as a
    bearer credential when one is present, and goes out unauthenticated
    otherwise. No locking: concurrent ``login``/``refresh`` calls on one
    instance must be serialized by the caller (last writer wins).
    """

    def __init__(
        self,
        transport: TransportClient,
        api_key: str = "",
        endpoints: Optional[EndpointCatalog] = None,
        signer: Optional[RequestSigner] = None,
        clock: Optional[Clock] = None,
    ):
        super().__init__(transport, api_key=api_key, endpoints=endpoints, signer=signer)
        self._tokens = TokenPair.empty()
        self._listeners: List[TokenListener] = []
        self._clock = clock or utc_now

    # Token state

    @property
    def tokens(self) -> TokenPair:
        return self._tokens

    @property
    def access_token(self) -> Optional[str]:
        return self._tokens.access

    @property
    def is_authenticated(self) -> bool:
        return self._tokens.has_access

    def add_token_listener(self, listener: TokenListener) -> None:
        """Register a callback run synchronously after every token change."""
        self._listeners.append(listener)

    def remove_token_listener(self, listener: TokenListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _set_tokens(self, tokens: TokenPair) -> None:
        self._tokens = tokens
        logger.debug(f"Token pair updated: {tokens.mask_for_logging()}")
        for listener in list(self._listeners):
            listener(tokens)

    def _clear_tokens(self) -> None:
        self._set_tokens(TokenPair.empty())

    def _authorization_token(self) -> Optional[str]:
        return self._tokens.access

    def invalidate(self) -> None:
        """Drop both tokens locally without contacting the service."""
        logger.info("Invalidating session tokens locally")
        self._clear_tokens()

    def access_token_expires_at(self) -> Optional[datetime]:
        """Expiry read from the access token's ``exp`` claim.

        The claim is read without verification and only for JWT access
        tokens; opaque tokens and tokens without ``exp`` return None.
        """
        if not self._tokens.access:
            return None
        try:
            claims = jwt.get_unverified_claims(self._tokens.access)
        except JWTError:
            return None
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            return None
        return timestamp_to_utc(exp)

    # Remote operations

    async def login(self, credentials: Credentials) -> AuthResult:
        """Log in with credentials and store the returned tokens.

        On failure previously stored tokens are left untouched.

        Raises:
            SDKError: If the service rejects the login or is unreachable
        """
        logger.info("Logging in")
        return await self._authenticate(EndpointCatalog.AUTH_LOGIN, self._dump(credentials))

    async def telegram_auth(self, telegram_id: int, username: str) -> AuthResult:
        """Log in with a Telegram identity and store the returned tokens."""
        logger.info(f"Logging in with Telegram id {telegram_id}")
        body = TelegramAuthRequest(telegram_id=telegram_id, username=username)
        return await self._authenticate(EndpointCatalog.AUTH_TELEGRAM, body.model_dump())

    async def refresh(self) -> AuthResult:
        """Exchange the stored refresh token for a new token pair.

        Without a stored refresh token this fails immediately with
        ``INVALID_REFRESH_TOKEN`` and makes no network call. Any failure
        clears both tokens; nothing is retried here.

        Raises:
            SDKError: AUTH error when no refresh token is stored, otherwise
                the normalized remote or transport error
        """
        refresh_token = self._tokens.refresh
        if not refresh_token:
            logger.warning("Refresh requested without a stored refresh token")
            raise SDKError.from_code(ErrorCodes.Auth.INVALID_REFRESH_TOKEN)

        logger.info("Refreshing session tokens")
        try:
            data = await self._request(
                EndpointCatalog.AUTH_REFRESH, {"refresh_token": refresh_token}
            )
            result = self._parse_auth_result(data)
        except SDKError as e:
            logger.warning(f"Token refresh failed, clearing session: [{e.code}] {e.message}")
            self._clear_tokens()
            raise

        self._store(result)
        logger.info("Session tokens refreshed")
        return result

    async def logout(self) -> None:
        """Invalidate the session remotely and clear tokens locally.

        Tokens are cleared even when the remote call fails; the remote error
        is raised after clearing.
        """
        logger.info("Logging out")
        try:
            await self._request(EndpointCatalog.AUTH_LOGOUT)
        finally:
            self._clear_tokens()

    async def current_user(self) -> User:
        """Fetch the authenticated user."""
        data = await self._request(EndpointCatalog.USERS_ME)
        return self._parse(User, data)

    async def create_user(self, data: Credentials) -> User:
        """Create a new user."""
        body = self._dump(data)
        try:
            CreateUserRequest.model_validate(body)
        except ValidationError as e:
            raise SDKError.from_code(
                ErrorCodes.INVALID_INPUT, details={"errors": e.errors(include_url=False)}
            ) from e
        response = await self._request(EndpointCatalog.USERS_CREATE, body)
        return self._parse(User, response)

    # Helpers

    async def _authenticate(self, endpoint_name: str, body: Mapping[str, Any]) -> AuthResult:
        data = await self._request(endpoint_name, body)
        result = self._parse_auth_result(data)
        self._store(result)
        return result

    def _store(self, result: AuthResult) -> None:
        self._set_tokens(TokenPair(access=result.token, refresh=result.refresh_token))

    def _parse_auth_result(self, data: Any) -> AuthResult:
        result = self._parse(AuthResult, data)
        if result.expires_in is not None and result.expires_at is None:
            try:
                result.expires_at = self._clock() + timedelta(seconds=result.expires_in)
            except (OverflowError, ValueError) as e:
                logger.error(f"Unusable expires_in from auth response: {result.expires_in}")
                raise SDKError(internal_error()) from e
        return result
