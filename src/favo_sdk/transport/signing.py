"""HMAC request signing for the signature/timestamp header pair."""

import hashlib
import hmac
import json
from typing import Any, Dict, Optional

from ..config.constants import HeaderNames
from ..utils.datetime import Clock, utc_now


class RequestSigner:
    """Signs outgoing requests with an HMAC over timestamp, method, path and body.

    The signed string is ``timestamp + METHOD + path + body`` where body is the
    JSON encoding with sorted keys and no whitespace (empty for bodiless
    requests). The timestamp is milliseconds since the epoch.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "sha256",
        clock: Optional[Clock] = None,
    ):
        if not secret:
            raise ValueError("Signing secret cannot be empty")
        self._secret = secret.encode("utf-8")
        self._algorithm = algorithm
        self._hash_func = self._resolve_hash(algorithm)
        self._clock = clock or utc_now

    @staticmethod
    def _resolve_hash(algorithm: str):
        if algorithm == "sha256":
            return hashlib.sha256
        elif algorithm == "sha512":
            return hashlib.sha512
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    @staticmethod
    def canonical_body(body: Any) -> str:
        if body is None:
            return ""
        return json.dumps(body, sort_keys=True, separators=(",", ":"), default=str)

    def signature(self, timestamp: str, method: str, path: str, body: Any = None) -> str:
        """Compute the hex signature for the given request parts."""
        message = f"{timestamp}{method.upper()}{path}{self.canonical_body(body)}"
        mac = hmac.new(self._secret, message.encode("utf-8"), self._hash_func)
        return mac.hexdigest()

    def sign(self, method: str, path: str, body: Any = None) -> Dict[str, str]:
        """Build the signature and timestamp headers for a request."""
        timestamp = str(int(self._clock().timestamp() * 1000))
        return {
            HeaderNames.SIGNATURE: self.signature(timestamp, method, path, body),
            HeaderNames.TIMESTAMP: timestamp,
        }

    def verify(self, signature: str, timestamp: str, method: str, path: str, body: Any = None) -> bool:
        """Constant-time check of a signature produced by ``sign``."""
        expected = self.signature(timestamp, method, path, body)
        return hmac.compare_digest(expected, signature)
