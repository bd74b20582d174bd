"""Verification lifecycle client.

A verification starts ``pending`` and ends in exactly one of ``approved``,
``rejected`` or ``expired``. The workflow keeps an in-memory copy of each
record it starts or loads, so calls against a record it already knows to
be terminal fail locally with a BUSINESS error and never reach the network.
"""

import logging
from collections import OrderedDict
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from ...config.constants import (
    TERMINAL_STATUS_ERRORS,
    EndpointCatalog,
    ErrorCodes,
    RequestTimeouts,
    TrackingLimits,
    VerificationType,
)
from ...core.exceptions import SDKError
from ...transport.api_client import BaseApiClient
from ...transport.protocols import TransportClient
from ...transport.signing import RequestSigner
from ...utils.datetime import Clock, utc_now
from .entities import (
    VERIFICATION_DATA_MODELS,
    CheckResult,
    CreateVerificationRequest,
    PaginatedResult,
    PaginationParams,
    UpdateVerificationRequest,
    Verification,
    VerificationRequirements,
)

logger = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], BaseModel]


class VerificationWorkflow(BaseApiClient):
    """Start, confirm, update, check and cancel verifications.

    The bearer credential is pushed in through ``set_auth_token``; the
    facade keeps it in step with the auth session.
    """

    def __init__(
        self,
        transport: TransportClient,
        api_key: str = "",
        endpoints: Optional[EndpointCatalog] = None,
        signer: Optional[RequestSigner] = None,
        auth_token: Optional[str] = None,
        clock: Optional[Clock] = None,
        upload_timeout_ms: Optional[int] = None,
        max_tracked: int = TrackingLimits.MAX_TRACKED_VERIFICATIONS,
    ):
        super().__init__(transport, api_key=api_key, endpoints=endpoints, signer=signer)
        if max_tracked <= 0:
            raise ValueError("max_tracked must be positive")
        self._auth_token = auth_token
        self._clock = clock or utc_now
        self._upload_timeout_ms = upload_timeout_ms or RequestTimeouts.UPLOAD_MS
        self._max_tracked = max_tracked
        self._records: "OrderedDict[str, Verification]" = OrderedDict()

    # Credential

    @property
    def auth_token(self) -> Optional[str]:
        return self._auth_token

    def set_auth_token(self, token: Optional[str]) -> None:
        """Replace the bearer credential; None sends requests unauthenticated."""
        self._auth_token = token or None

    def _authorization_token(self) -> Optional[str]:
        return self._auth_token

    # Tracked records

    def tracked(self, verification_id: str) -> Optional[Verification]:
        """Locally known copy of a record, with clock expiry applied."""
        record = self._records.get(verification_id)
        if record is None:
            return None
        return record.with_clock_expiry(self._clock())

    @property
    def tracked_count(self) -> int:
        return len(self._records)

    def _track(self, record: Verification) -> Verification:
        record = record.with_clock_expiry(self._clock())
        self._remember(record)
        return record

    def _remember(self, record: Verification) -> None:
        self._records[record.id] = record
        self._records.move_to_end(record.id)
        # Least recently touched records go first
        while len(self._records) > self._max_tracked:
            evicted, _ = self._records.popitem(last=False)
            logger.debug(f"Stopped tracking verification {evicted}")

    def _ensure_pending(self, verification_id: str, operation: str) -> None:
        record = self.tracked(verification_id)
        if record is None or not record.is_terminal:
            return
        logger.info(f"Refusing to {operation} verification {verification_id}: already {record.status.value}")
        raise SDKError.from_code(
            TERMINAL_STATUS_ERRORS[record.status],
            details={
                "verification_id": verification_id,
                "status": record.status.value,
                "operation": operation,
            },
        )

    def _record_attempt(self, verification_id: str) -> None:
        record = self._records.get(verification_id)
        if record is not None:
            self._remember(record.with_attempt(self._clock()))

    def _apply_result(self, verification_id: str, result: CheckResult) -> None:
        record = self._records.get(verification_id)
        if record is None:
            return
        update: Dict[str, Any] = {"status": result.status}
        if result.expires_at is not None:
            update["expires_at"] = result.expires_at
        self._remember(record.model_copy(update=update))

    # Remote operations

    async def start(
        self,
        verification_type: Union[VerificationType, str],
        data: Payload,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Verification:
        """Start a verification of the given type.

        Raises:
            SDKError: VALIDATION error for an unknown type or malformed data,
                otherwise the normalized remote or transport error
        """
        try:
            verification_type = VerificationType(verification_type)
        except ValueError as e:
            raise SDKError.from_code(
                ErrorCodes.INVALID_INPUT,
                details={"field": "type", "value": str(verification_type)},
            ) from e

        body_data = self._dump(data)
        try:
            VERIFICATION_DATA_MODELS[verification_type].model_validate(body_data)
        except ValidationError as e:
            raise SDKError.from_code(
                ErrorCodes.INVALID_INPUT,
                details={"field": "data", "errors": e.errors(include_url=False)},
            ) from e

        request = CreateVerificationRequest(type=verification_type, data=body_data)
        if metadata is not None:
            request.metadata = dict(metadata)
        body = request.model_dump(mode="json", exclude_unset=True)

        logger.info(f"Starting {verification_type.value} verification")
        response = await self._request(EndpointCatalog.VERIFICATION_START, body)
        record = self._track(self._parse(Verification, response))
        logger.info(f"Verification {record.id} started ({record.status.value})")
        return record

    async def confirm(self, verification_id: str, code: str) -> CheckResult:
        """Submit a confirmation code.

        Every attempt that reaches the service counts toward the tracked
        record's ``attempt_count``, whatever its outcome.
        """
        self._ensure_pending(verification_id, "confirm")
        try:
            response = await self._request(
                EndpointCatalog.VERIFICATION_CONFIRM,
                {"code": code},
                path_params={"verification_id": verification_id},
            )
        finally:
            self._record_attempt(verification_id)

        result = self._check_result(verification_id, response)
        self._apply_result(verification_id, result)
        logger.info(f"Confirmation for {verification_id}: {result.status.value} (valid={result.valid})")
        return result

    async def upload_documents(self, verification_id: str, files: Mapping[str, Any]) -> Verification:
        """Upload document images for a pending document verification.

        ``files`` maps form field names to anything httpx accepts as a file:
        bytes, a file object or a ``(filename, content, content_type)`` tuple.
        """
        self._ensure_pending(verification_id, "upload documents for")
        if not files:
            raise SDKError.from_code(
                ErrorCodes.INVALID_INPUT, details={"field": "files", "reason": "no files given"}
            )

        logger.info(f"Uploading {len(files)} document(s) for verification {verification_id}")
        response = await self._request(
            EndpointCatalog.VERIFICATION_DOCUMENTS,
            path_params={"verification_id": verification_id},
            files=files,
            timeout_ms=self._upload_timeout_ms,
        )
        return self._track(self._parse(Verification, response))

    async def update(self, verification_id: str, patch: Payload) -> Verification:
        """Patch a verification; the service decides which changes are valid."""
        body = self._dump(patch)
        try:
            UpdateVerificationRequest.model_validate(body)
        except ValidationError as e:
            raise SDKError.from_code(
                ErrorCodes.INVALID_INPUT, details={"errors": e.errors(include_url=False)}
            ) from e

        response = await self._request(
            EndpointCatalog.VERIFICATION_UPDATE,
            body,
            path_params={"verification_id": verification_id},
        )
        return self._track(self._parse(Verification, response))

    async def check_status(self, verification_id: str) -> CheckResult:
        """Read the current status without changing it.

        A pending record whose expiry has elapsed by the local clock is
        reported as ``expired`` with ``valid`` False.
        """
        response = await self._request(
            EndpointCatalog.VERIFICATION_STATUS,
            path_params={"verification_id": verification_id},
        )
        result = self._check_result(verification_id, response)
        self._apply_result(verification_id, result)
        return result

    async def cancel(self, verification_id: str) -> None:
        """Cancel a pending verification and stop tracking it."""
        self._ensure_pending(verification_id, "cancel")
        logger.info(f"Cancelling verification {verification_id}")
        await self._request(
            EndpointCatalog.VERIFICATION_CANCEL,
            path_params={"verification_id": verification_id},
        )
        self._records.pop(verification_id, None)

    async def get(self, verification_id: str) -> Verification:
        """Fetch a single verification and track it."""
        response = await self._request(
            EndpointCatalog.VERIFICATION_GET,
            path_params={"verification_id": verification_id},
        )
        return self._track(self._parse(Verification, response))

    async def list_for_user(
        self,
        user_id: str,
        pagination: Optional[Union[PaginationParams, Mapping[str, Any]]] = None,
    ) -> PaginatedResult[Verification]:
        """List a user's verifications, one page at a time."""
        if pagination is None:
            pagination = PaginationParams()
        elif not isinstance(pagination, PaginationParams):
            try:
                pagination = PaginationParams.model_validate(pagination)
            except ValidationError as e:
                raise SDKError.from_code(
                    ErrorCodes.INVALID_INPUT, details={"errors": e.errors(include_url=False)}
                ) from e

        response = await self._request(
            EndpointCatalog.USERS_VERIFICATIONS,
            path_params={"user_id": user_id},
            params=pagination.to_query(),
        )
        page = self._parse(PaginatedResult[Verification], response)
        now = self._clock()
        page.data = [record.with_clock_expiry(now) for record in page.data]
        return page

    async def get_requirements(self, user_id: str) -> VerificationRequirements:
        """Verification types required, completed and pending for a user."""
        response = await self._request(
            EndpointCatalog.USERS_VERIFICATION_REQUIREMENTS,
            path_params={"user_id": user_id},
        )
        return self._parse(VerificationRequirements, response)

    # Helpers

    def _check_result(self, verification_id: str, data: Any) -> CheckResult:
        result = self._parse(CheckResult, data)
        if result.id is None:
            result = result.model_copy(update={"id": verification_id})
        known = self._records.get(verification_id)
        return result.with_clock_expiry(
            self._clock(), expires_at=known.expires_at if known is not None else None
        )
