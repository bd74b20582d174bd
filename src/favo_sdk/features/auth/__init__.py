"""Authentication session feature."""

from .entities import AuthResult, CreateUserRequest, TelegramAuthRequest, User
from .session import AuthSession, TokenListener
from .tokens import TokenPair

__all__ = [
    "AuthResult",
    "AuthSession",
    "CreateUserRequest",
    "TelegramAuthRequest",
    "TokenListener",
    "TokenPair",
    "User",
]
