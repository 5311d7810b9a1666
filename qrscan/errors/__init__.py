"""Mini README: Error taxonomy shared by the capture and history flows."""

from .taxonomy import (
    POLICIES,
    ErrorCategory,
    FailurePolicy,
    ScanError,
    StoreAccessDeniedError,
    StoreError,
    StoreTransportError,
    StoreUnauthenticatedError,
    StoreUnavailableError,
    categorize,
    policy_for,
)

__all__ = [
    "POLICIES",
    "ErrorCategory",
    "FailurePolicy",
    "ScanError",
    "StoreAccessDeniedError",
    "StoreError",
    "StoreTransportError",
    "StoreUnauthenticatedError",
    "StoreUnavailableError",
    "categorize",
    "policy_for",
]
