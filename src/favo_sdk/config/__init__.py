"""Configuration, constants and logging for favo-sdk."""

from .constants import (
    BaseUrls,
    ContentTypes,
    DEFAULT_ENDPOINTS,
    DocumentType,
    Endpoint,
    EndpointCatalog,
    ERROR_MESSAGES,
    ErrorCodes,
    HeaderNames,
    HttpMethod,
    RequestTimeouts,
    SocialPlatform,
    TERMINAL_STATUSES,
    TrackingLimits,
    VerificationSource,
    VerificationStatus,
    VerificationType,
)
from .logging_config import LoggingConfig, mask_secret, setup_logging
from .settings import SDKSettings, get_settings

__all__ = [
    "BaseUrls",
    "ContentTypes",
    "DEFAULT_ENDPOINTS",
    "DocumentType",
    "Endpoint",
    "EndpointCatalog",
    "ERROR_MESSAGES",
    "ErrorCodes",
    "HeaderNames",
    "HttpMethod",
    "RequestTimeouts",
    "SocialPlatform",
    "TERMINAL_STATUSES",
    "TrackingLimits",
    "VerificationSource",
    "VerificationStatus",
    "VerificationType",
    "LoggingConfig",
    "mask_secret",
    "setup_logging",
    "SDKSettings",
    "get_settings",
]
