"""Tests for the verification workflow."""

from datetime import timedelta

import pytest

from favo_sdk.config.constants import ErrorCodes, HeaderNames, VerificationStatus, VerificationType
from favo_sdk.core.exceptions import ErrorCategory, SDKError, TransportFailure
from favo_sdk.features.verification import PaginationParams, VerificationWorkflow


@pytest.fixture
def workflow(mock_transport, clock):
    return VerificationWorkflow(mock_transport, api_key="key-1", auth_token="access-1", clock=clock)


def check_result(status="pending", valid=True, **extra):
    result = {"valid": valid, "status": status}
    result.update(extra)
    return result


class TestStart:
    """Starting verifications."""

    @pytest.mark.asyncio
    async def test_start_tracks_record(self, workflow, mock_transport, success_response,
                                       verification_payload, sent_request):
        mock_transport.send.return_value = success_response(verification_payload())

        record = await workflow.start("email", {"email": "user@example.com"}, {"source": "api"})

        assert record.status is VerificationStatus.PENDING
        assert record.type is VerificationType.EMAIL
        assert workflow.tracked("ver-1") == record

        method, path, body, headers, _ = sent_request()
        assert (method, path) == ("POST", "/verification/start")
        assert body == {
            "type": "email",
            "data": {"email": "user@example.com"},
            "metadata": {"source": "api"},
        }
        assert headers[HeaderNames.AUTHORIZATION] == "Bearer access-1"

    @pytest.mark.asyncio
    async def test_start_body_omits_absent_metadata(self, workflow, mock_transport, success_response,
                                                    verification_payload, sent_request):
        mock_transport.send.return_value = success_response(verification_payload(verification_type="phone"))

        await workflow.start(VerificationType.PHONE, {"phone_number": "5550100", "country_code": "+1"})

        body = sent_request()[2]
        assert body == {"type": "phone", "data": {"phone_number": "5550100", "country_code": "+1"}}

    @pytest.mark.asyncio
    async def test_unknown_type_is_validation_error(self, workflow, mock_transport):
        with pytest.raises(SDKError) as exc_info:
            await workflow.start("fingerprint", {})

        assert exc_info.value.category is ErrorCategory.VALIDATION
        mock_transport.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_data_is_validation_error(self, workflow, mock_transport):
        with pytest.raises(SDKError) as exc_info:
            await workflow.start(VerificationType.DOCUMENT, {"document_type": "library_card"})

        assert exc_info.value.category is ErrorCategory.VALIDATION
        assert exc_info.value.details["field"] == "data"
        mock_transport.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_remote_rejection(self, workflow, mock_transport, error_response):
        mock_transport.send.return_value = error_response("2007", "Insufficient trust level", status=403)

        with pytest.raises(SDKError) as exc_info:
            await workflow.start("wallet", {"address": "0xabc"})

        assert exc_info.value.code == "2007"
        assert exc_info.value.category is ErrorCategory.BUSINESS


class TestConfirm:
    """Confirmation attempts."""

    @pytest.mark.asyncio
    async def test_confirm_approves(self, workflow, mock_transport, success_response,
                                    verification_payload, sent_request):
        mock_transport.send.return_value = success_response(verification_payload())
        await workflow.start("email", {"email": "user@example.com"})

        mock_transport.send.return_value = success_response(check_result("approved"))
        result = await workflow.confirm("ver-1", "123456")

        assert result.valid
        assert result.status is VerificationStatus.APPROVED
        _, path, body, _, _ = sent_request()
        assert path == "/verification/ver-1/confirm"
        assert body == {"code": "123456"}
        assert workflow.tracked("ver-1").status is VerificationStatus.APPROVED

    @pytest.mark.asyncio
    async def test_confirm_after_approval_fails_locally(self, workflow, mock_transport,
                                                        success_response, verification_payload):
        mock_transport.send.return_value = success_response(verification_payload())
        await workflow.start("email", {"email": "user@example.com"})
        mock_transport.send.return_value = success_response(check_result("approved"))
        await workflow.confirm("ver-1", "123456")
        mock_transport.send.reset_mock()

        with pytest.raises(SDKError) as exc_info:
            await workflow.confirm("ver-1", "123456")

        assert exc_info.value.code == ErrorCodes.Verification.ALREADY_VERIFIED
        assert exc_info.value.category is ErrorCategory.BUSINESS
        mock_transport.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_confirm_rejected_record_fails_locally(self, workflow, mock_transport,
                                                         success_response, verification_payload):
        mock_transport.send.return_value = success_response(verification_payload(status="rejected"))
        await workflow.get("ver-1")
        mock_transport.send.reset_mock()

        with pytest.raises(SDKError) as exc_info:
            await workflow.confirm("ver-1", "123456")

        assert exc_info.value.code == ErrorCodes.Verification.VERIFICATION_FAILED
        mock_transport.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_confirm_clock_expired_record_fails_locally(self, workflow, mock_transport,
                                                              success_response,
                                                              verification_payload, clock):
        mock_transport.send.return_value = success_response(verification_payload())
        await workflow.start("email", {"email": "user@example.com"})
        mock_transport.send.reset_mock()

        clock.advance(minutes=16)
        with pytest.raises(SDKError) as exc_info:
            await workflow.confirm("ver-1", "123456")

        assert exc_info.value.code == ErrorCodes.Verification.EXPIRED_CODE
        assert exc_info.value.category is ErrorCategory.BUSINESS
        mock_transport.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_every_attempt_is_counted(self, workflow, mock_transport, success_response,
                                            error_response, verification_payload, clock):
        mock_transport.send.return_value = success_response(verification_payload())
        await workflow.start("email", {"email": "user@example.com"})

        mock_transport.send.return_value = error_response("2001", "Invalid verification code")
        with pytest.raises(SDKError):
            await workflow.confirm("ver-1", "000000")

        mock_transport.send.side_effect = TransportFailure("connection reset")
        with pytest.raises(SDKError):
            await workflow.confirm("ver-1", "000001")

        mock_transport.send.side_effect = None
        mock_transport.send.return_value = success_response(check_result(valid=False))
        await workflow.confirm("ver-1", "000002")

        metadata = workflow.tracked("ver-1").metadata
        assert metadata.attempt_count == 3
        assert metadata.last_attempt == clock()

    @pytest.mark.asyncio
    async def test_confirm_untracked_record_goes_remote(self, workflow, mock_transport,
                                                        success_response):
        mock_transport.send.return_value = success_response(check_result("rejected", valid=False))

        result = await workflow.confirm("ver-unknown", "123456")

        assert result.status is VerificationStatus.REJECTED
        assert workflow.tracked("ver-unknown") is None


class TestCheckStatus:
    """Status reads and clock expiry."""

    @pytest.mark.asyncio
    async def test_start_then_check_status_pending(self, workflow, mock_transport,
                                                   success_response, verification_payload,
                                                   sent_request):
        mock_transport.send.return_value = success_response(verification_payload())
        await workflow.start("email", {"email": "user@example.com"})

        mock_transport.send.return_value = success_response(check_result())
        result = await workflow.check_status("ver-1")

        assert result.status is VerificationStatus.PENDING
        assert result.valid
        assert result.id == "ver-1"
        assert sent_request()[:2] == ("GET", "/verification/ver-1/status")

    @pytest.mark.asyncio
    async def test_elapsed_expiry_reads_expired(self, workflow, mock_transport, success_response,
                                                clock):
        expires_at = clock() - timedelta(seconds=1)
        mock_transport.send.return_value = success_response(
            check_result(expires_at=expires_at.isoformat())
        )

        result = await workflow.check_status("ver-1")

        assert result.status is VerificationStatus.EXPIRED
        assert not result.valid

    @pytest.mark.asyncio
    async def test_tracked_expiry_applies_when_result_has_none(self, workflow, mock_transport,
                                                               success_response,
                                                               verification_payload, clock):
        mock_transport.send.return_value = success_response(verification_payload())
        await workflow.start("email", {"email": "user@example.com"})

        clock.advance(hours=1)
        mock_transport.send.return_value = success_response(check_result())
        result = await workflow.check_status("ver-1")

        assert result.status is VerificationStatus.EXPIRED
        assert not result.valid

    @pytest.mark.asyncio
    async def test_check_status_is_repeatable(self, workflow, mock_transport, success_response):
        mock_transport.send.return_value = success_response(check_result())

        first = await workflow.check_status("ver-1")
        second = await workflow.check_status("ver-1")

        assert first == second
        assert mock_transport.send.call_count == 2


class TestCancel:
    """Cancellation."""

    @pytest.mark.asyncio
    async def test_cancel_untracks(self, workflow, mock_transport, success_response,
                                   verification_payload, sent_request):
        mock_transport.send.return_value = success_response(verification_payload())
        await workflow.start("email", {"email": "user@example.com"})

        mock_transport.send.return_value = success_response()
        await workflow.cancel("ver-1")

        assert sent_request()[:2] == ("POST", "/verification/ver-1/cancel")
        assert workflow.tracked("ver-1") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, code",
        [
            ("approved", ErrorCodes.Verification.ALREADY_VERIFIED),
            ("rejected", ErrorCodes.Verification.VERIFICATION_FAILED),
            ("expired", ErrorCodes.Verification.EXPIRED_CODE),
        ],
    )
    async def test_cancel_terminal_fails_locally(self, workflow, mock_transport, success_response,
                                                 verification_payload, status, code):
        mock_transport.send.return_value = success_response(verification_payload(status=status))
        await workflow.get("ver-1")
        mock_transport.send.reset_mock()

        with pytest.raises(SDKError) as exc_info:
            await workflow.cancel("ver-1")

        assert exc_info.value.code == code
        assert exc_info.value.category is ErrorCategory.BUSINESS
        assert exc_info.value.details["operation"] == "cancel"
        mock_transport.send.assert_not_called()
        assert workflow.tracked("ver-1").status.value == status


class TestTrackingBound:
    """In-memory record limit."""

    @pytest.mark.asyncio
    async def test_oldest_records_are_dropped(self, mock_transport, success_response,
                                              verification_payload, clock):
        workflow = VerificationWorkflow(mock_transport, clock=clock, max_tracked=3)

        for index in range(5):
            mock_transport.send.return_value = success_response(
                verification_payload(verification_id=f"ver-{index}")
            )
            await workflow.get(f"ver-{index}")

        assert workflow.tracked_count == 3
        assert workflow.tracked("ver-0") is None
        assert workflow.tracked("ver-1") is None
        for index in (2, 3, 4):
            assert workflow.tracked(f"ver-{index}").id == f"ver-{index}"

    @pytest.mark.asyncio
    async def test_recently_touched_record_survives(self, mock_transport, success_response,
                                                    verification_payload, clock):
        workflow = VerificationWorkflow(mock_transport, clock=clock, max_tracked=2)

        for verification_id in ("ver-0", "ver-1", "ver-0", "ver-2"):
            mock_transport.send.return_value = success_response(
                verification_payload(verification_id=verification_id)
            )
            await workflow.get(verification_id)

        assert workflow.tracked("ver-0") is not None
        assert workflow.tracked("ver-1") is None
        assert workflow.tracked("ver-2") is not None

    @pytest.mark.asyncio
    async def test_evicted_terminal_record_is_checked_remotely(self, mock_transport, success_response,
                                                               error_response, verification_payload,
                                                               clock):
        workflow = VerificationWorkflow(mock_transport, clock=clock, max_tracked=1)
        mock_transport.send.return_value = success_response(
            verification_payload(verification_id="ver-0", status="approved")
        )
        await workflow.get("ver-0")
        mock_transport.send.return_value = success_response(
            verification_payload(verification_id="ver-1")
        )
        await workflow.get("ver-1")
        mock_transport.send.reset_mock()

        mock_transport.send.return_value = error_response("2004", "Already verified")
        with pytest.raises(SDKError) as exc_info:
            await workflow.cancel("ver-0")

        assert exc_info.value.code == ErrorCodes.Verification.ALREADY_VERIFIED
        mock_transport.send.assert_called_once()

    @pytest.mark.parametrize("max_tracked", [0, -1])
    def test_non_positive_limit_rejected(self, mock_transport, max_tracked):
        with pytest.raises(ValueError):
            VerificationWorkflow(mock_transport, max_tracked=max_tracked)


class TestDocumentsAndUpdates:
    """Uploads and patches."""

    @pytest.mark.asyncio
    async def test_upload_uses_multipart_and_upload_timeout(self, mock_transport, success_response,
                                                            verification_payload, sent_request,
                                                            clock):
        workflow = VerificationWorkflow(mock_transport, clock=clock, upload_timeout_ms=90000)
        mock_transport.send.return_value = success_response(
            verification_payload(verification_type="document", data={"document_type": "passport"})
        )

        files = {"front": ("front.jpg", b"...", "image/jpeg")}
        record = await workflow.upload_documents("ver-1", files)

        method, path, _, headers, kwargs = sent_request()
        assert (method, path) == ("POST", "/verification/ver-1/documents")
        assert headers[HeaderNames.CONTENT_TYPE] == "multipart/form-data"
        assert kwargs["files"] == files
        assert kwargs["timeout_ms"] == 90000
        assert record.type is VerificationType.DOCUMENT

    @pytest.mark.asyncio
    async def test_upload_without_files_is_validation_error(self, workflow, mock_transport):
        with pytest.raises(SDKError) as exc_info:
            await workflow.upload_documents("ver-1", {})

        assert exc_info.value.category is ErrorCategory.VALIDATION
        mock_transport.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_sends_patch(self, workflow, mock_transport, success_response,
                                      verification_payload, sent_request):
        mock_transport.send.return_value = success_response(
            verification_payload(data={"email": "new@example.com"})
        )

        record = await workflow.update("ver-1", {"data": {"email": "new@example.com"}, "note": "x"})

        method, path, body, _, _ = sent_request()
        assert (method, path) == ("PUT", "/verification/ver-1")
        assert body == {"data": {"email": "new@example.com"}, "note": "x"}
        assert record.data == {"email": "new@example.com"}


class TestReads:
    """Single, list and requirement reads."""

    @pytest.mark.asyncio
    async def test_get_applies_clock_expiry(self, workflow, mock_transport, success_response,
                                            verification_payload, clock):
        mock_transport.send.return_value = success_response(
            verification_payload(expires_at=clock() - timedelta(minutes=1))
        )

        record = await workflow.get("ver-1")

        assert record.status is VerificationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_list_for_user(self, workflow, mock_transport, success_response,
                                 verification_payload, sent_request, clock):
        mock_transport.send.return_value = success_response({
            "data": [
                verification_payload("ver-1"),
                verification_payload("ver-2", expires_at=clock() - timedelta(minutes=1)),
                verification_payload("ver-3", status="approved"),
            ],
            "pagination": {"total": 3, "page": 2, "limit": 3, "total_pages": 2,
                           "has_next": False, "has_prev": True},
        })

        page = await workflow.list_for_user(
            "user-1", PaginationParams(page=2, limit=3, sort_order="desc")
        )

        _, path, _, _, kwargs = sent_request()
        assert path == "/users/user-1/verifications"
        assert kwargs["params"] == {"page": 2, "limit": 3, "sort_order": "desc"}
        assert [record.status for record in page.data] == [
            VerificationStatus.PENDING,
            VerificationStatus.EXPIRED,
            VerificationStatus.APPROVED,
        ]
        assert page.pagination.has_prev

    @pytest.mark.asyncio
    async def test_invalid_pagination_is_validation_error(self, workflow, mock_transport):
        with pytest.raises(SDKError) as exc_info:
            await workflow.list_for_user("user-1", {"page": 0})

        assert exc_info.value.category is ErrorCategory.VALIDATION
        mock_transport.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_requirements(self, workflow, mock_transport, success_response, sent_request):
        mock_transport.send.return_value = success_response(
            {"required": ["email", "phone"], "completed": ["email"], "pending": ["phone"]}
        )

        requirements = await workflow.get_requirements("user-1")

        assert sent_request()[1] == "/users/user-1/verification-requirements"
        assert requirements.pending == ["phone"]


class TestAuthToken:
    """Bearer credential handling."""

    @pytest.mark.asyncio
    async def test_cleared_token_sends_unauthenticated(self, workflow, mock_transport,
                                                       success_response, sent_request):
        mock_transport.send.return_value = success_response({"required": []})

        workflow.set_auth_token(None)
        await workflow.get_requirements("user-1")

        assert HeaderNames.AUTHORIZATION not in sent_request()[3]
