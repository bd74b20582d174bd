"""favo-sdk - Async Python client for the FavoTrust identity and verification API.

Provides an authentication session, a verification lifecycle client and a
unified error model shared by both. The package does not configure logging
on import; call ``setup_logging()`` from the application if wanted.
"""

from .__version__ import __version__

# Configuration
from .config import (
    EndpointCatalog,
    ErrorCodes,
    SDKSettings,
    VerificationStatus,
    VerificationType,
    get_settings,
    setup_logging,
)

from .core.exceptions import (
    ErrorCategory,
    SDKError,
    TransportFailure,
    UnifiedError,
    create_error,
    is_sdk_error,
    normalize,
)

# Transport
from .transport import (
    Envelope,
    HttpxTransport,
    RequestSigner,
    TransportClient,
    TransportResponse,
)

# Features
from .features.auth import AuthResult, AuthSession, TokenPair, User
from .features.verification import (
    CheckResult,
    PaginatedResult,
    PaginationParams,
    Verification,
    VerificationRequirements,
    VerificationWorkflow,
)

from .client import FavoSDK, create_sdk

__all__ = [
    "__version__",
    # Facade
    "FavoSDK",
    "create_sdk",
    # Configuration
    "SDKSettings",
    "get_settings",
    "setup_logging",
    "EndpointCatalog",
    "ErrorCodes",
    "VerificationStatus",
    "VerificationType",
    # Errors
    "ErrorCategory",
    "UnifiedError",
    "SDKError",
    "TransportFailure",
    "create_error",
    "normalize",
    "is_sdk_error",
    # Transport
    "Envelope",
    "HttpxTransport",
    "RequestSigner",
    "TransportClient",
    "TransportResponse",
    # Auth
    "AuthSession",
    "AuthResult",
    "TokenPair",
    "User",
    # Verification
    "VerificationWorkflow",
    "Verification",
    "VerificationRequirements",
    "CheckResult",
    "PaginatedResult",
    "PaginationParams",
]
