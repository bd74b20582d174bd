"""Transport-level failures.

Raised by transport implementations when no HTTP response was obtained
(connection refused, DNS failure, timeout). Never escapes an SDK component:
components normalize it into a SYSTEM ``UnifiedError``.
"""

from typing import Optional


class TransportFailure(Exception):
    """Raised when a request could not produce an HTTP response."""

    def __init__(
        self,
        message: str,
        *,
        method: Optional[str] = None,
        path: Optional[str] = None,
        timeout: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.method = method
        self.path = path
        self.timeout = timeout

    def __str__(self) -> str:
        target = f" {self.method} {self.path}" if self.method and self.path else ""
        kind = "timeout" if self.timeout else "failure"
        return f"Transport {kind}{target}: {self.message}"
