"""Access/refresh token pair value object."""

from dataclasses import dataclass
from typing import Optional

from ...config.logging_config import mask_secret


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh token held by an auth session.

    Immutable: the session replaces the whole pair, so both tokens always
    change together.
    """

    access: Optional[str] = None
    refresh: Optional[str] = None

    @classmethod
    def empty(cls) -> "TokenPair":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.access and not self.refresh

    @property
    def has_access(self) -> bool:
        return bool(self.access)

    @property
    def has_refresh(self) -> bool:
        return bool(self.refresh)

    def mask_for_logging(self) -> str:
        """Return masked tokens safe for logging."""
        return f"access={mask_secret(self.access or '') or '-'} refresh={mask_secret(self.refresh or '') or '-'}"

    def __repr__(self) -> str:
        return f"TokenPair({self.mask_for_logging()})"
