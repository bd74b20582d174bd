"""
SDK configuration for favo-sdk.

Settings are read from keyword arguments, environment variables prefixed with
``FAVO_`` and an optional ``.env`` file, in that order of precedence.
"""
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..__version__ import __version__
from .constants import BaseUrls, RequestTimeouts, TrackingLimits


class SDKSettings(BaseSettings):
    """Connection settings shared by the auth and verification clients."""

    model_config = SettingsConfigDict(
        env_prefix="FAVO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Service
    base_url: str = Field(default=BaseUrls.FAVOTRUST)
    api_key: SecretStr = Field(default=SecretStr(""))

    # Transport (millisecond budgets, passed through to the HTTP client)
    timeout_ms: int = Field(default=RequestTimeouts.DEFAULT_MS, gt=0)
    upload_timeout_ms: int = Field(default=RequestTimeouts.UPLOAD_MS, gt=0)
    verify_ssl: bool = Field(default=True)
    user_agent: str = Field(default=f"favo-sdk-python/{__version__}")

    # Verification records kept in memory for local terminal-state checks
    max_tracked_verifications: int = Field(default=TrackingLimits.MAX_TRACKED_VERIFICATIONS, gt=0)

    # Signed requests (X-Signature / X-Timestamp); disabled when unset
    signing_secret: Optional[SecretStr] = Field(default=None)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so path joins stay predictable."""
        if not v:
            raise ValueError("base_url cannot be empty")
        return v.rstrip("/")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def upload_timeout_seconds(self) -> float:
        return self.upload_timeout_ms / 1000

    @property
    def signing_enabled(self) -> bool:
        return bool(self.signing_secret and self.signing_secret.get_secret_value())

    def to_safe_dict(self) -> Dict[str, Any]:
        """Settings as a dict with secrets masked, for logging."""
        data = self.model_dump()
        data["api_key"] = "***" if self.api_key.get_secret_value() else ""
        data["signing_secret"] = "***" if self.signing_enabled else None
        return data


@lru_cache()
def get_settings() -> SDKSettings:
    """Get cached SDK settings built from the environment."""
    return SDKSettings()
