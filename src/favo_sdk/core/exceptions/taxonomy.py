"""Normalization of heterogeneous failures into ``UnifiedError`` values.

``normalize`` is the last line of defense for every public SDK operation:
whatever it is handed, it returns a ``UnifiedError`` and never raises.
"""

import logging
from typing import Any, Mapping, Optional

from ...config.constants import ERROR_MESSAGES, ErrorCodes
from .base import SDKError, UnifiedError
from .transport import TransportFailure

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


def internal_error() -> UnifiedError:
    """The fixed fallback error used when a failure carries no usable payload."""
    return UnifiedError(ErrorCodes.System.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)


def create_error(code: str, details: Optional[Mapping[str, Any]] = None) -> UnifiedError:
    """Create an error from a catalog code with its default message."""
    return UnifiedError.from_code(code, details=details)


def extract_error_payload(payload: Any) -> Optional[UnifiedError]:
    """Read ``{code, message, details}`` from an error envelope or bare error object.

    Returns None when the payload does not carry a structured error. A
    missing or empty message is replaced with the catalog message for the
    code, or "Unknown error" for codes outside the catalog, so callers always
    have text to show.
    """
    if not isinstance(payload, Mapping):
        return None

    error = payload.get("error")
    if not isinstance(error, Mapping):
        # Bare error object without the envelope
        error = payload if "code" in payload else None
    if error is None or error.get("code") in (None, ""):
        return None

    code = str(error["code"])
    message = error.get("message")
    if not isinstance(message, str) or not message:
        # Catalog text stands in for a blank remote message
        message = ERROR_MESSAGES.get(code, "Unknown error")
    details = error.get("details")
    if not isinstance(details, Mapping):
        details = None

    return UnifiedError(code=code, message=message, details=details)


def normalize(failure: Any) -> UnifiedError:
    """Normalize any failure into a ``UnifiedError``.

    Accepts an ``SDKError`` or ``UnifiedError`` (returned as-is), a
    ``TransportFailure``, an HTTP response object exposing ``status`` and
    ``body``, an envelope/error mapping, or any other exception. Structured
    payloads are used verbatim; everything else becomes the fixed SYSTEM
    fallback.
    """
    try:
        return _normalize(failure)
    except Exception as e:  # noqa: BLE001 - must always return a value
        logger.error(f"Error normalization failed for {type(failure).__name__}: {e}")
        return internal_error()


def _normalize(failure: Any) -> UnifiedError:
    if isinstance(failure, UnifiedError):
        return failure
    if isinstance(failure, SDKError):
        return failure.error

    if isinstance(failure, TransportFailure):
        logger.warning(f"Normalizing transport failure: {failure}")
        return internal_error()

    payload = failure
    if hasattr(failure, "status") and hasattr(failure, "body"):
        payload = failure.body

    error = extract_error_payload(payload)
    if error is not None:
        return error

    if isinstance(failure, BaseException):
        logger.warning(f"Normalizing unexpected {type(failure).__name__}: {failure}")
    else:
        logger.debug(f"No structured error in {type(failure).__name__} payload")
    return internal_error()
