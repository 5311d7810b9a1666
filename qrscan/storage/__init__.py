"""Mini README: Scan persistence package.

The package is divided into ``models`` for the record types, ``base`` for
the abstract document store, ``memory`` for the in-process store and
``repository`` for the owner-scoped access layer the flows depend on.
"""

from .base import ScanStore
from .memory import InMemoryScanStore
from .models import Owner, ScanRecord, SortOrder, validate_payload
from .repository import ScanRepository

__all__ = [
    "InMemoryScanStore",
    "Owner",
    "ScanRecord",
    "ScanRepository",
    "ScanStore",
    "SortOrder",
    "validate_payload",
]
