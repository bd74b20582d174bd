"""Base error types for favo-sdk.

Every failure surfaced by the SDK is described by a single immutable
``UnifiedError`` value whose category is derived from its code. Callers
receive it wrapped in ``SDKError``, the only exception type the SDK's public
operations raise.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ...config.constants import ERROR_MESSAGES
from .categories import ErrorCategory, classify


@dataclass(frozen=True)
class UnifiedError:
    """Normalized error value shared by the auth and verification clients."""

    code: str
    message: str
    details: Optional[Mapping[str, Any]] = None
    category: ErrorCategory = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", "" if self.code is None else str(self.code))
        object.__setattr__(self, "category", classify(self.code))
        if self.details is not None:
            object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @classmethod
    def from_code(
        cls,
        code: str,
        details: Optional[Mapping[str, Any]] = None,
        message: Optional[str] = None,
    ) -> "UnifiedError":
        """Create an error from a catalog code, using the catalog message."""
        return cls(
            code=code,
            message=message or ERROR_MESSAGES.get(code, "Unknown error"),
            details=details,
        )

    @property
    def is_retryable(self) -> bool:
        """Whether retrying the same call may succeed (transient failures)."""
        return self.category is ErrorCategory.SYSTEM

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details) if self.details is not None else None,
            "category": self.category.value,
        }


class SDKError(Exception):
    """Exception carrying a ``UnifiedError``.

    The category lives on the value, not in a subclass hierarchy, so callers
    branch on ``error.category`` to decide whether to retry, re-authenticate
    or show a message.
    """

    def __init__(self, error: UnifiedError):
        super().__init__(error.message)
        self.error = error

    @classmethod
    def from_code(
        cls,
        code: str,
        details: Optional[Mapping[str, Any]] = None,
        message: Optional[str] = None,
    ) -> "SDKError":
        return cls(UnifiedError.from_code(code, details=details, message=message))

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def details(self) -> Optional[Mapping[str, Any]]:
        return self.error.details

    @property
    def category(self) -> ErrorCategory:
        return self.error.category

    @property
    def is_retryable(self) -> bool:
        return self.error.is_retryable

    def to_dict(self) -> Dict[str, Any]:
        return self.error.to_dict()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"SDKError(code={self.code!r}, category={self.category.value!r}, message={self.message!r})"
