"""Mini README: Data model for persisted scans.

Structure:
    * Owner - authenticated identity a scan belongs to.
    * SortOrder - history ordering by scan time.
    * ScanRecord - immutable record of one persisted scan.
    * validate_payload - local checks applied before any write.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..errors import ErrorCategory, ScanError

DEFAULT_MAX_PAYLOAD_LENGTH = 2000


@dataclass(frozen=True, slots=True)
class Owner:
    """Identity supplied by the authentication collaborator."""

    owner_id: str
    email: str = ""


class SortOrder(str, Enum):
    """Ordering of history results by ``scanned_at``."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    @classmethod
    def from_str(cls, value: str) -> "SortOrder":
        """Coerce user supplied spellings such as ``asc`` or ``DESC``."""

        try:
            normalised = value.strip().lower()
        except AttributeError as error:
            raise ValueError(f"Unsupported sort order: {value}") from error
        aliases = {"asc": cls.ASCENDING.value, "desc": cls.DESCENDING.value}
        try:
            return cls(aliases.get(normalised, normalised))
        except ValueError as error:
            raise ValueError(f"Unsupported sort order: {value}") from error

    def toggled(self) -> "SortOrder":
        return SortOrder.ASCENDING if self is SortOrder.DESCENDING else SortOrder.DESCENDING


@dataclass(frozen=True, slots=True)
class ScanRecord:
    """A persisted scan. Records are never mutated after creation."""

    record_id: str
    owner_id: str
    owner_email: str
    data: str
    raw_type: str
    scanned_at: Optional[datetime]

    @classmethod
    def from_document(cls, record_id: str, document: Mapping[str, Any]) -> "ScanRecord":
        """Build a record from a store document."""

        return cls(
            record_id=record_id,
            owner_id=str(document.get("owner_id", "")),
            owner_email=str(document.get("owner_email", "")),
            data=str(document.get("data", "")),
            raw_type=str(document.get("raw_type", "")),
            scanned_at=document.get("scanned_at"),
        )

    def as_dict(self) -> Dict[str, object]:
        """Export the record with serialisable values."""

        return {
            "record_id": self.record_id,
            "owner_id": self.owner_id,
            "owner_email": self.owner_email,
            "data": self.data,
            "raw_type": self.raw_type,
            "scanned_at": self.scanned_at.isoformat() if self.scanned_at else None,
        }


def validate_payload(data: object, max_length: int = DEFAULT_MAX_PAYLOAD_LENGTH) -> str:
    """Return the trimmed payload or raise a ``validation`` ScanError."""

    if not isinstance(data, str):
        raise ScanError(ErrorCategory.VALIDATION, "Invalid QR code data")
    trimmed = data.strip()
    if not trimmed:
        raise ScanError(ErrorCategory.VALIDATION, "Invalid QR code data")
    if len(trimmed) > max_length:
        raise ScanError(ErrorCategory.VALIDATION, "QR code data too long")
    return trimmed
