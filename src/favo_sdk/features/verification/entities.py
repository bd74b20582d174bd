"""Verification payload models."""

from datetime import datetime
from typing import Any, Dict, Generic, List, Literal, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ...config.constants import (
    DocumentType,
    SocialPlatform,
    VerificationSource,
    VerificationStatus,
    VerificationType,
)
from ...utils.datetime import is_expired


class VerificationMetadata(BaseModel):
    """Bookkeeping attached to a verification record."""

    model_config = ConfigDict(extra="allow")

    attempt_count: int = Field(default=0, ge=0)
    last_attempt: Optional[datetime] = None
    ip_address: Optional[str] = None
    source: Optional[VerificationSource] = None
    device_info: Optional[Dict[str, Any]] = None
    location: Optional[Dict[str, Any]] = None


# Per-type data shapes. Every field is optional: a start request may carry a
# partial payload and the service enforces completeness.

class _VerificationData(BaseModel):
    model_config = ConfigDict(extra="allow")


class EmailVerificationData(_VerificationData):
    email: Optional[str] = None
    code: Optional[str] = None
    confirmed: Optional[bool] = None
    confirmation_attempts: Optional[int] = None


class PhoneVerificationData(_VerificationData):
    phone_number: Optional[str] = None
    country_code: Optional[str] = None
    code: Optional[str] = None
    confirmed: Optional[bool] = None
    confirmation_attempts: Optional[int] = None
    provider_metadata: Optional[Dict[str, Any]] = None


class DocumentFiles(_VerificationData):
    front: Optional[str] = None
    back: Optional[str] = None
    selfie: Optional[str] = None


class DocumentVerificationData(_VerificationData):
    document_type: Optional[DocumentType] = None
    document_number: Optional[str] = None
    issuing_country: Optional[str] = None
    expiry_date: Optional[str] = None
    files: Optional[DocumentFiles] = None
    verification_provider: Optional[Dict[str, Any]] = None


class VideoVerificationData(_VerificationData):
    video_url: Optional[str] = None
    duration: Optional[float] = None
    file_size: Optional[int] = None
    gestures_completed: Optional[bool] = None
    face_matched: Optional[bool] = None
    provider_metadata: Optional[Dict[str, Any]] = None


class SocialVerificationData(_VerificationData):
    platform: Optional[SocialPlatform] = None
    profile_url: Optional[str] = None
    username: Optional[str] = None
    followers_count: Optional[int] = None
    account_age: Optional[int] = None
    verification_post_id: Optional[str] = None
    verified: Optional[bool] = None


class WalletVerificationData(_VerificationData):
    address: Optional[str] = None
    chain: Optional[str] = None
    balance: Optional[str] = None
    nft_count: Optional[int] = None
    signature: Optional[str] = None
    message: Optional[str] = None
    verified: Optional[bool] = None


VERIFICATION_DATA_MODELS: Mapping[VerificationType, Type[_VerificationData]] = {
    VerificationType.EMAIL: EmailVerificationData,
    VerificationType.PHONE: PhoneVerificationData,
    VerificationType.DOCUMENT: DocumentVerificationData,
    VerificationType.VIDEO: VideoVerificationData,
    VerificationType.SOCIAL: SocialVerificationData,
    VerificationType.WALLET: WalletVerificationData,
}


class Verification(BaseModel):
    """A verification record: one user completing one identity-proof method."""

    model_config = ConfigDict(extra="allow")

    id: str
    user_id: str
    type: VerificationType
    status: VerificationStatus
    data: Dict[str, Any] = Field(default_factory=dict)
    metadata: VerificationMetadata = Field(default_factory=VerificationMetadata)
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def is_expired_at(self, now: datetime) -> bool:
        """Whether ``expires_at`` has elapsed at ``now``."""
        return is_expired(self.expires_at, now=now)

    def effective_status(self, now: datetime) -> VerificationStatus:
        """Status as the client must read it: pending past its expiry is expired."""
        if self.status is VerificationStatus.PENDING and self.is_expired_at(now):
            return VerificationStatus.EXPIRED
        return self.status

    def with_clock_expiry(self, now: datetime) -> "Verification":
        """Copy with the clock-based expiry applied; the remote record is not touched."""
        status = self.effective_status(now)
        if status is self.status:
            return self
        return self.model_copy(update={"status": status})

    def with_attempt(self, now: datetime) -> "Verification":
        """Copy with one more confirmation attempt recorded."""
        metadata = self.metadata.model_copy(
            update={"attempt_count": self.metadata.attempt_count + 1, "last_attempt": now}
        )
        return self.model_copy(update={"metadata": metadata})


class CheckErrorInfo(BaseModel):
    """Error attached to a failed check result."""

    model_config = ConfigDict(extra="allow")

    code: str
    message: str


class CheckResult(BaseModel):
    """Outcome of a confirmation attempt or status check."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    valid: bool
    status: VerificationStatus
    expires_at: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None
    error: Optional[CheckErrorInfo] = None

    def with_clock_expiry(self, now: datetime, expires_at: Optional[datetime] = None) -> "CheckResult":
        """Copy reading ``expired`` when the known expiry has elapsed.

        ``expires_at`` is a fallback for results that do not carry one.
        """
        deadline = self.expires_at or expires_at
        if self.status is not VerificationStatus.PENDING or not is_expired(deadline, now=now):
            return self
        return self.model_copy(
            update={"status": VerificationStatus.EXPIRED, "valid": False, "expires_at": deadline}
        )


class CreateVerificationRequest(BaseModel):
    """Body of a start-verification call."""

    type: VerificationType
    data: Dict[str, Any] = Field(default_factory=dict)
    metadata: Optional[Dict[str, Any]] = None


class UpdateVerificationRequest(BaseModel):
    """Body of a verification patch. Unknown fields are forwarded as-is."""

    model_config = ConfigDict(extra="allow")

    status: Optional[VerificationStatus] = None
    data: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None


class PaginationParams(BaseModel):
    """Page selection for list calls."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    sort_by: Optional[str] = None
    sort_order: Optional[Literal["asc", "desc"]] = None

    def to_query(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PaginationInfo(BaseModel):
    """Pagination block of a paginated response."""

    model_config = ConfigDict(extra="allow")

    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False


T = TypeVar("T")


class PaginatedResult(BaseModel, Generic[T]):
    """One page of results."""

    data: List[T] = Field(default_factory=list)
    pagination: PaginationInfo = Field(default_factory=PaginationInfo)


class VerificationRequirements(BaseModel):
    """Verification types a user must, has, and is completing."""

    model_config = ConfigDict(extra="allow")

    required: List[str] = Field(default_factory=list)
    completed: List[str] = Field(default_factory=list)
    pending: List[str] = Field(default_factory=list)
