"""Unified error model for favo-sdk.

Exports the error categories, the ``UnifiedError`` value, the ``SDKError``
exception raised by public operations, the transport failure type and the
normalization helpers.
"""

from .base import SDKError, UnifiedError
from .categories import ErrorCategory, classify
from .taxonomy import (
    INTERNAL_ERROR_MESSAGE,
    create_error,
    extract_error_payload,
    internal_error,
    normalize,
)
from .transport import TransportFailure


def is_sdk_error(error: object) -> bool:
    """Check whether an exception was raised by the SDK."""
    return isinstance(error, SDKError)


__all__ = [
    "ErrorCategory",
    "classify",
    "UnifiedError",
    "SDKError",
    "TransportFailure",
    "INTERNAL_ERROR_MESSAGE",
    "create_error",
    "extract_error_payload",
    "internal_error",
    "normalize",
    "is_sdk_error",
]
