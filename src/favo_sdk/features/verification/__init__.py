"""Verification feature: lifecycle client and payload models."""

from .entities import (
    VERIFICATION_DATA_MODELS,
    CheckErrorInfo,
    CheckResult,
    CreateVerificationRequest,
    DocumentFiles,
    DocumentVerificationData,
    EmailVerificationData,
    PaginatedResult,
    PaginationInfo,
    PaginationParams,
    PhoneVerificationData,
    SocialVerificationData,
    UpdateVerificationRequest,
    Verification,
    VerificationMetadata,
    VerificationRequirements,
    VideoVerificationData,
    WalletVerificationData,
)
from .workflow import VerificationWorkflow

__all__ = [
    "VerificationWorkflow",
    "Verification",
    "VerificationMetadata",
    "VerificationRequirements",
    "CheckResult",
    "CheckErrorInfo",
    "CreateVerificationRequest",
    "UpdateVerificationRequest",
    "PaginationParams",
    "PaginationInfo",
    "PaginatedResult",
    "EmailVerificationData",
    "PhoneVerificationData",
    "DocumentFiles",
    "DocumentVerificationData",
    "VideoVerificationData",
    "SocialVerificationData",
    "WalletVerificationData",
    "VERIFICATION_DATA_MODELS",
]
