"""Tests for response envelope parsing."""

import pytest

from favo_sdk.transport.envelope import parse_envelope
from favo_sdk.transport.protocols import TransportResponse


class TestParseEnvelope:
    """Envelope success detection and pass-through fields."""

    def test_success_envelope(self):
        envelope = parse_envelope(TransportResponse(200, {
            "success": True,
            "data": {"id": "ver-1"},
            "timestamp": "2026-01-15T12:00:00Z",
            "message": "Created",
        }))
        assert envelope.success
        assert envelope.data == {"id": "ver-1"}
        assert envelope.timestamp == "2026-01-15T12:00:00Z"
        assert envelope.message == "Created"
        assert envelope.extra == {}

    def test_unknown_fields_are_kept(self):
        envelope = parse_envelope(TransportResponse(200, {
            "success": True,
            "data": [],
            "request_id": "req-42",
            "meta": {"region": "eu"},
        }))
        assert envelope.extra == {"request_id": "req-42", "meta": {"region": "eu"}}

    def test_failure_envelope(self):
        envelope = parse_envelope(TransportResponse(400, {
            "success": False,
            "error": {"code": "2001", "message": "Invalid code"},
        }))
        assert not envelope.success
        assert envelope.error["code"] == "2001"
        assert envelope.data is None

    def test_success_false_with_2xx_status_is_failure(self):
        envelope = parse_envelope(TransportResponse(200, {
            "success": False,
            "error": {"code": "2003", "message": "Too many attempts"},
        }))
        assert not envelope.success

    def test_error_status_with_success_flag_is_failure(self):
        envelope = parse_envelope(TransportResponse(500, {"success": True, "data": None}))
        assert not envelope.success

    @pytest.mark.parametrize("body", [None, [1, 2], {"id": "user-1"}, "plain"])
    def test_non_envelope_success_body_becomes_data(self, body):
        envelope = parse_envelope(TransportResponse(200, body))
        assert envelope.success
        assert envelope.data == body

    def test_non_envelope_error_body(self):
        envelope = parse_envelope(TransportResponse(404, {"code": "3001", "message": "Not found"}))
        assert not envelope.success
        assert envelope.error == {"code": "3001", "message": "Not found"}

    def test_no_content(self):
        envelope = parse_envelope(TransportResponse(204))
        assert envelope.success
        assert envelope.data is None
