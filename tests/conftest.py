"""Pytest configuration and fixtures for favo-sdk tests."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from favo_sdk.transport.protocols import TransportResponse


FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable time source."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock frozen at FIXED_NOW until advanced."""
    return FakeClock()


@pytest.fixture
def mock_transport():
    """Mock transport; set ``send.return_value`` or ``send.side_effect`` per test."""
    transport = AsyncMock()
    transport.send = AsyncMock()
    transport.aclose = AsyncMock()
    return transport


@pytest.fixture
def success_response():
    """Factory for success envelopes."""
    def _make(data=None, status=200, **extra):
        body = {"success": True, "data": data, "timestamp": FIXED_NOW.isoformat()}
        body.update(extra)
        return TransportResponse(status=status, body=body)
    return _make


@pytest.fixture
def error_response():
    """Factory for failure envelopes."""
    def _make(code, message="Request failed", status=400, details=None):
        error = {"code": code, "message": message}
        if details is not None:
            error["details"] = details
        body = {"success": False, "error": error, "timestamp": FIXED_NOW.isoformat()}
        return TransportResponse(status=status, body=body)
    return _make


@pytest.fixture
def auth_payload():
    """Auth result payload as returned by login and refresh."""
    def _make(token="access-token-1", refresh_token="refresh-token-1", expires_in=3600):
        return {
            "user": {"id": "user-1", "telegram_id": 123456789, "username": "example"},
            "token": token,
            "refresh_token": refresh_token,
            "expires_in": expires_in,
        }
    return _make


@pytest.fixture
def verification_payload():
    """Verification record payload."""
    def _make(
        verification_id="ver-1",
        status="pending",
        verification_type="email",
        expires_at=FIXED_NOW + timedelta(minutes=15),
        **extra,
    ):
        payload = {
            "id": verification_id,
            "user_id": "user-1",
            "type": verification_type,
            "status": status,
            "data": {"email": "user@example.com"},
            "metadata": {"attempt_count": 0},
            "expires_at": expires_at.isoformat() if expires_at else None,
            "created_at": FIXED_NOW.isoformat(),
            "updated_at": FIXED_NOW.isoformat(),
        }
        payload.update(extra)
        return payload
    return _make


@pytest.fixture
def sent_request(mock_transport):
    """Unpack one recorded ``send`` call into (method, path, body, headers, kwargs)."""
    def _unpack(index=-1):
        call = mock_transport.send.call_args_list[index]
        args = list(call.args) + [None] * (4 - len(call.args))
        method, path, body, headers = args[:4]
        return method, path, body, headers or {}, call.kwargs
    return _unpack
