"""Auth payload models."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """User as returned by the identity service.

    Only ``id`` is required; every other field, known or not, passes through.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    telegram_id: Optional[int] = None
    username: Optional[str] = None
    status: Optional[str] = None
    trust_level: Optional[int] = None
    role: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_active: Optional[datetime] = None


class AuthResult(BaseModel):
    """Session payload returned by login, telegram auth and refresh."""

    model_config = ConfigDict(extra="allow")

    user: Optional[User] = None
    token: str = Field(min_length=1)
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

    # Derived locally from expires_in at the time the response was processed
    expires_at: Optional[datetime] = None


class TelegramAuthRequest(BaseModel):
    """Body of a Telegram login."""

    telegram_id: int
    username: str


class CreateUserRequest(BaseModel):
    """Body for creating a user."""

    model_config = ConfigDict(extra="allow")

    telegram_id: int
    username: str
    settings: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
