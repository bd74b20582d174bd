"""Constants and enums for favo-sdk.

This module defines the endpoint catalog, header names, verification enums
and error codes used throughout the SDK. These correspond to the contract
published by the FavoTrust API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Final, FrozenSet, Mapping, Optional
from urllib.parse import quote


class BaseUrls:
    """Default service base URLs."""

    FAVOTRUST: Final[str] = "https://api.favotrust.com"


class HttpMethod(str, Enum):
    """HTTP methods used by the endpoint catalog."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class HeaderNames:
    """Header names for the logical header roles."""

    AUTHORIZATION: Final[str] = "Authorization"
    CONTENT_TYPE: Final[str] = "Content-Type"
    ACCEPT: Final[str] = "Accept"
    API_KEY: Final[str] = "X-API-Key"
    SIGNATURE: Final[str] = "X-Signature"
    TIMESTAMP: Final[str] = "X-Timestamp"


class ContentTypes:
    """Content types sent by the SDK."""

    JSON: Final[str] = "application/json"
    FORM: Final[str] = "application/x-www-form-urlencoded"
    MULTIPART: Final[str] = "multipart/form-data"


class RequestTimeouts:
    """Request timeouts in milliseconds."""

    DEFAULT_MS: Final[int] = 30000
    UPLOAD_MS: Final[int] = 60000


class TrackingLimits:
    """Bounds on client-side state."""

    MAX_TRACKED_VERIFICATIONS: Final[int] = 256


@dataclass(frozen=True)
class Endpoint:
    """A single remote operation: path template and HTTP method."""

    path: str
    method: HttpMethod

    def format(self, **path_params: str) -> str:
        """Render the path template; each parameter is percent-encoded as one segment."""
        encoded = {name: quote(str(value), safe="") for name, value in path_params.items()}
        try:
            return self.path.format(**encoded)
        except KeyError as e:
            raise ValueError(f"Missing path parameter {e} for endpoint {self.path}") from e


class EndpointCatalog:
    """Mapping from logical operation name to endpoint.

    Components depend only on the logical names below, so a catalog with
    different paths can be swapped in without touching them.
    """

    AUTH_LOGIN: Final[str] = "auth.login"
    AUTH_TELEGRAM: Final[str] = "auth.telegram"
    AUTH_REFRESH: Final[str] = "auth.refresh"
    AUTH_LOGOUT: Final[str] = "auth.logout"
    USERS_CREATE: Final[str] = "users.create"
    USERS_ME: Final[str] = "users.me"
    USERS_VERIFICATIONS: Final[str] = "users.verifications"
    USERS_VERIFICATION_REQUIREMENTS: Final[str] = "users.verification_requirements"
    VERIFICATION_START: Final[str] = "verification.start"
    VERIFICATION_CONFIRM: Final[str] = "verification.confirm"
    VERIFICATION_DOCUMENTS: Final[str] = "verification.documents"
    VERIFICATION_UPDATE: Final[str] = "verification.update"
    VERIFICATION_GET: Final[str] = "verification.get"
    VERIFICATION_STATUS: Final[str] = "verification.status"
    VERIFICATION_CANCEL: Final[str] = "verification.cancel"

    def __init__(self, endpoints: Optional[Mapping[str, Endpoint]] = None):
        self._endpoints: Dict[str, Endpoint] = dict(DEFAULT_ENDPOINTS)
        if endpoints:
            self._endpoints.update(endpoints)

    def get(self, name: str) -> Endpoint:
        """Get endpoint by logical name."""
        try:
            return self._endpoints[name]
        except KeyError:
            raise KeyError(f"Unknown endpoint: {name}") from None

    def __contains__(self, name: str) -> bool:
        return name in self._endpoints

    def names(self) -> FrozenSet[str]:
        return frozenset(self._endpoints)


DEFAULT_ENDPOINTS: Final[Mapping[str, Endpoint]] = {
    EndpointCatalog.AUTH_LOGIN: Endpoint("/auth/login", HttpMethod.POST),
    EndpointCatalog.AUTH_TELEGRAM: Endpoint("/auth/telegram", HttpMethod.POST),
    EndpointCatalog.AUTH_REFRESH: Endpoint("/auth/refresh", HttpMethod.POST),
    EndpointCatalog.AUTH_LOGOUT: Endpoint("/auth/logout", HttpMethod.POST),
    EndpointCatalog.USERS_CREATE: Endpoint("/users", HttpMethod.POST),
    EndpointCatalog.USERS_ME: Endpoint("/users/me", HttpMethod.GET),
    EndpointCatalog.USERS_VERIFICATIONS: Endpoint(
        "/users/{user_id}/verifications", HttpMethod.GET
    ),
    EndpointCatalog.USERS_VERIFICATION_REQUIREMENTS: Endpoint(
        "/users/{user_id}/verification-requirements", HttpMethod.GET
    ),
    EndpointCatalog.VERIFICATION_START: Endpoint("/verification/start", HttpMethod.POST),
    EndpointCatalog.VERIFICATION_CONFIRM: Endpoint(
        "/verification/{verification_id}/confirm", HttpMethod.POST
    ),
    EndpointCatalog.VERIFICATION_DOCUMENTS: Endpoint(
        "/verification/{verification_id}/documents", HttpMethod.POST
    ),
    EndpointCatalog.VERIFICATION_UPDATE: Endpoint(
        "/verification/{verification_id}", HttpMethod.PUT
    ),
    EndpointCatalog.VERIFICATION_GET: Endpoint(
        "/verification/{verification_id}", HttpMethod.GET
    ),
    EndpointCatalog.VERIFICATION_STATUS: Endpoint(
        "/verification/{verification_id}/status", HttpMethod.GET
    ),
    EndpointCatalog.VERIFICATION_CANCEL: Endpoint(
        "/verification/{verification_id}/cancel", HttpMethod.POST
    ),
}


# Verification enums
class VerificationType(str, Enum):
    """Verification methods - fixed at creation of a record."""

    EMAIL = "email"
    PHONE = "phone"
    DOCUMENT = "document"
    VIDEO = "video"
    SOCIAL = "social"
    WALLET = "wallet"


class VerificationStatus(str, Enum):
    """Verification record status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES: Final[FrozenSet[VerificationStatus]] = frozenset({
    VerificationStatus.APPROVED,
    VerificationStatus.REJECTED,
    VerificationStatus.EXPIRED,
})


class VerificationSource(str, Enum):
    """Where a verification was initiated."""

    TELEGRAM = "telegram"
    WEBSITE = "website"
    API = "api"


class DocumentType(str, Enum):
    """Identity documents accepted for document verification."""

    PASSPORT = "passport"
    ID_CARD = "id_card"
    DRIVING_LICENSE = "driving_license"


class SocialPlatform(str, Enum):
    """Platforms accepted for social verification."""

    TWITTER = "twitter"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    GITHUB = "github"


# Error codes (first digit selects the error category)
class ErrorCodes:
    """Error codes returned by the API and raised locally by the SDK."""

    class Auth:
        INVALID_CREDENTIALS: Final[str] = "1001"
        TOKEN_EXPIRED: Final[str] = "1002"
        INVALID_TOKEN: Final[str] = "1003"
        INVALID_REFRESH_TOKEN: Final[str] = "1004"
        SESSION_EXPIRED: Final[str] = "1005"
        ACCOUNT_LOCKED: Final[str] = "1006"
        INVALID_2FA: Final[str] = "1007"

    class Verification:
        INVALID_CODE: Final[str] = "2001"
        EXPIRED_CODE: Final[str] = "2002"
        TOO_MANY_ATTEMPTS: Final[str] = "2003"
        ALREADY_VERIFIED: Final[str] = "2004"
        INVALID_DOCUMENT: Final[str] = "2005"
        VERIFICATION_FAILED: Final[str] = "2006"
        INSUFFICIENT_TRUST_LEVEL: Final[str] = "2007"

    class NFT:
        INVALID_CONTRACT: Final[str] = "3001"
        INVALID_TOKEN: Final[str] = "3002"
        TRANSFER_FAILED: Final[str] = "3003"
        MINT_FAILED: Final[str] = "3004"
        BURN_FAILED: Final[str] = "3005"
        ALREADY_MINTED: Final[str] = "3006"

    class Game:
        INVALID_ACTION: Final[str] = "4001"
        INSUFFICIENT_RESOURCES: Final[str] = "4002"
        COOLDOWN_ACTIVE: Final[str] = "4003"
        QUEST_UNAVAILABLE: Final[str] = "4004"
        INVALID_GAME_STATE: Final[str] = "4005"

    class System:
        INTERNAL_ERROR: Final[str] = "5001"
        DATABASE_ERROR: Final[str] = "5002"
        CACHE_ERROR: Final[str] = "5003"
        RATE_LIMIT_EXCEEDED: Final[str] = "5004"
        SERVICE_UNAVAILABLE: Final[str] = "5005"

    # Raised locally for malformed input; any code outside 1-5 is VALIDATION
    INVALID_INPUT: Final[str] = "0001"


ERROR_MESSAGES: Final[Mapping[str, str]] = {
    ErrorCodes.Auth.INVALID_CREDENTIALS: "Invalid username or password",
    ErrorCodes.Auth.TOKEN_EXPIRED: "Authentication token has expired",
    ErrorCodes.Auth.INVALID_TOKEN: "Invalid authentication token",
    ErrorCodes.Auth.INVALID_REFRESH_TOKEN: "Invalid refresh token",
    ErrorCodes.Auth.SESSION_EXPIRED: "Session has expired",
    ErrorCodes.Auth.ACCOUNT_LOCKED: "Account is locked",
    ErrorCodes.Auth.INVALID_2FA: "Invalid 2FA code",

    ErrorCodes.Verification.INVALID_CODE: "Invalid verification code",
    ErrorCodes.Verification.EXPIRED_CODE: "Verification code has expired",
    ErrorCodes.Verification.TOO_MANY_ATTEMPTS: "Too many verification attempts",
    ErrorCodes.Verification.ALREADY_VERIFIED: "Already verified",
    ErrorCodes.Verification.INVALID_DOCUMENT: "Invalid document provided",
    ErrorCodes.Verification.VERIFICATION_FAILED: "Verification process failed",
    ErrorCodes.Verification.INSUFFICIENT_TRUST_LEVEL: "Insufficient trust level for this operation",

    ErrorCodes.NFT.INVALID_CONTRACT: "Invalid NFT contract address",
    ErrorCodes.NFT.INVALID_TOKEN: "Invalid NFT token ID",
    ErrorCodes.NFT.TRANSFER_FAILED: "NFT transfer failed",
    ErrorCodes.NFT.MINT_FAILED: "NFT minting failed",
    ErrorCodes.NFT.BURN_FAILED: "NFT burning failed",
    ErrorCodes.NFT.ALREADY_MINTED: "NFT already minted",

    ErrorCodes.Game.INVALID_ACTION: "Invalid game action",
    ErrorCodes.Game.INSUFFICIENT_RESOURCES: "Insufficient resources",
    ErrorCodes.Game.COOLDOWN_ACTIVE: "Action is on cooldown",
    ErrorCodes.Game.QUEST_UNAVAILABLE: "Quest is not available",
    ErrorCodes.Game.INVALID_GAME_STATE: "Invalid game state",

    ErrorCodes.System.INTERNAL_ERROR: "Internal server error",
    ErrorCodes.System.DATABASE_ERROR: "Database error",
    ErrorCodes.System.CACHE_ERROR: "Cache error",
    ErrorCodes.System.RATE_LIMIT_EXCEEDED: "Rate limit exceeded",
    ErrorCodes.System.SERVICE_UNAVAILABLE: "Service is temporarily unavailable",

    ErrorCodes.INVALID_INPUT: "Invalid input",
}

# Error raised when a transition is attempted on a terminal record
TERMINAL_STATUS_ERRORS: Final[Mapping[VerificationStatus, str]] = {
    VerificationStatus.APPROVED: ErrorCodes.Verification.ALREADY_VERIFIED,
    VerificationStatus.EXPIRED: ErrorCodes.Verification.EXPIRED_CODE,
    VerificationStatus.REJECTED: ErrorCodes.Verification.VERIFICATION_FAILED,
}
