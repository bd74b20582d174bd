"""Error categories and code classification."""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """Category of a unified error, derived from the first digit of its code."""

    AUTH = "auth"
    VALIDATION = "validation"
    BUSINESS = "business"
    SYSTEM = "system"


_PREFIX_CATEGORIES = {
    "1": ErrorCategory.AUTH,
    "2": ErrorCategory.BUSINESS,
    "3": ErrorCategory.BUSINESS,
    "4": ErrorCategory.BUSINESS,
    "5": ErrorCategory.SYSTEM,
}


def classify(code: Optional[str]) -> ErrorCategory:
    """Classify an error code by its first character.

    Total over its input: empty, missing or unrecognized codes are
    VALIDATION errors.
    """
    if not code:
        return ErrorCategory.VALIDATION
    return _PREFIX_CATEGORIES.get(str(code)[0], ErrorCategory.VALIDATION)
