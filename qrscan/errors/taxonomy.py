"""Mini README: Closed error taxonomy for repository and auth failures.

Structure:
    * ErrorCategory - the fixed set of failure classes.
    * FailurePolicy - user message, retry offer and forced navigation.
    * ScanError - the single exception type surfaced by the core.
    * StoreError and subclasses - typed errors for store adapters to raise.
    * categorize - map any exception to exactly one category.

Failures are classified once, where the repository talks to the store, and
consumers only ever read ``ScanError.category``. Retries are manual: the
policy says whether a retry may be offered, the consumer decides when.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ..logging_utils import get_logger
from ..navigation import NavigationKind

LOGGER = get_logger(__name__)


class ErrorCategory(str, Enum):
    """Failure classes recognised by the capture and history flows."""

    AUTH = "auth"
    PERMISSION = "permission"
    NOT_FOUND = "not-found"
    NETWORK = "network"
    SERVICE = "service"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class FailurePolicy:
    """How a category is surfaced to the user."""

    message: str
    retryable: bool
    navigation: Optional[NavigationKind] = None


POLICIES: Dict[ErrorCategory, FailurePolicy] = {
    ErrorCategory.AUTH: FailurePolicy(
        "Please log in again to continue.", False, NavigationKind.GO_TO_LOGIN
    ),
    ErrorCategory.PERMISSION: FailurePolicy(
        "You do not have permission to access this scan.", False, NavigationKind.GO_BACK
    ),
    ErrorCategory.NOT_FOUND: FailurePolicy("Scan not found.", False, NavigationKind.GO_BACK),
    ErrorCategory.NETWORK: FailurePolicy(
        "Network error. Check your connection and try again.", True
    ),
    ErrorCategory.SERVICE: FailurePolicy(
        "The scan service is temporarily unavailable. Please try again.", True
    ),
    ErrorCategory.VALIDATION: FailurePolicy("Invalid QR code data detected.", False),
    ErrorCategory.UNKNOWN: FailurePolicy("An unexpected error occurred. Please try again.", True),
}


def policy_for(category: ErrorCategory) -> FailurePolicy:
    """Return the surfacing policy for a category."""

    return POLICIES[category]


class ScanError(Exception):
    """Classified failure raised by the repository and auth boundary."""

    def __init__(self, category: ErrorCategory, detail: Optional[str] = None) -> None:
        self.category = ErrorCategory(category)
        self.detail = detail
        super().__init__(detail or self.policy.message)

    @property
    def policy(self) -> FailurePolicy:
        return POLICIES[self.category]

    @property
    def message(self) -> str:
        """User-facing message for the category."""

        return self.policy.message

    @property
    def retryable(self) -> bool:
        return self.policy.retryable

    @property
    def navigation(self) -> Optional[NavigationKind]:
        return self.policy.navigation

    @classmethod
    def from_exception(cls, error: BaseException) -> "ScanError":
        """Wrap an arbitrary exception, keeping an existing classification."""

        if isinstance(error, ScanError):
            return error
        return cls(categorize(error), detail=str(error) or None)


class StoreError(Exception):
    """Base class for failures reported by a store adapter."""

    category = ErrorCategory.UNKNOWN


class StoreUnavailableError(StoreError):
    """The store is temporarily unable to serve requests."""

    category = ErrorCategory.SERVICE


class StoreTransportError(StoreError):
    """The request never reached the store or the response was lost."""

    category = ErrorCategory.NETWORK


class StoreAccessDeniedError(StoreError):
    """Store-level security rules rejected the request."""

    category = ErrorCategory.PERMISSION


class StoreUnauthenticatedError(StoreError):
    """The store did not recognise the caller's credentials."""

    category = ErrorCategory.AUTH


# Native status codes reported by document stores and auth SDKs.
_CODE_CATEGORIES: Dict[str, ErrorCategory] = {
    "unauthenticated": ErrorCategory.AUTH,
    "auth/user-not-authenticated": ErrorCategory.AUTH,
    "permission-denied": ErrorCategory.PERMISSION,
    "not-found": ErrorCategory.NOT_FOUND,
    "unavailable": ErrorCategory.SERVICE,
    "resource-exhausted": ErrorCategory.SERVICE,
    "internal": ErrorCategory.SERVICE,
    "deadline-exceeded": ErrorCategory.NETWORK,
    "network-request-failed": ErrorCategory.NETWORK,
    "auth/network-request-failed": ErrorCategory.NETWORK,
    "invalid-argument": ErrorCategory.VALIDATION,
    "validation/error": ErrorCategory.VALIDATION,
}


def categorize(error: BaseException) -> ErrorCategory:
    """Classify an exception into exactly one category."""

    if isinstance(error, ScanError):
        return error.category
    if isinstance(error, StoreError):
        return error.category

    code = getattr(error, "code", None)
    if isinstance(code, str):
        normalised = code.strip().lower()
        if normalised.startswith("firestore/"):
            normalised = normalised.split("/", 1)[1]
        if normalised in _CODE_CATEGORIES:
            return _CODE_CATEGORIES[normalised]

    if isinstance(error, PermissionError):
        return ErrorCategory.PERMISSION
    if isinstance(error, (ConnectionError, TimeoutError, asyncio.TimeoutError)):
        return ErrorCategory.NETWORK

    message = str(error).lower()
    if "network" in message:
        return ErrorCategory.NETWORK
    if "permission" in message:
        return ErrorCategory.PERMISSION

    LOGGER.debug("Unclassified failure %s: %s", type(error).__name__, error)
    return ErrorCategory.UNKNOWN
