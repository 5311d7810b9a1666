"""Mini README: Scan repository enforcing owner-only access.

Structure:
    * ScanRepository - create / get_by_id / list on top of a ``ScanStore``.

This is the single place where store and auth failures are classified into
``ScanError``. Payloads are validated before any write and every read checks
that the record's ``owner_id`` matches the requesting owner.
"""

from __future__ import annotations

from typing import List, Optional

from ..errors import ErrorCategory, ScanError
from ..logging_utils import get_logger
from .base import ScanStore
from .models import DEFAULT_MAX_PAYLOAD_LENGTH, Owner, ScanRecord, SortOrder, validate_payload

LOGGER = get_logger(__name__)


def _require_owner(owner: Optional[Owner]) -> Owner:
    if owner is None or not owner.owner_id:
        raise ScanError(ErrorCategory.AUTH, "You must be logged in to access scans.")
    return owner


class ScanRepository:
    """Owner-scoped access to scan records."""

    def __init__(self, store: ScanStore, *, max_payload_length: int = DEFAULT_MAX_PAYLOAD_LENGTH) -> None:
        self.store = store
        self.max_payload_length = max_payload_length

    async def create_record(self, owner: Optional[Owner], data: object, raw_type: str) -> ScanRecord:
        """Validate and persist a scan, returning the stored record."""

        payload = validate_payload(data, self.max_payload_length)
        owner = _require_owner(owner)
        document = {
            "owner_id": owner.owner_id,
            "owner_email": owner.email,
            "data": payload,
            "raw_type": raw_type or "",
        }
        try:
            record_id, stored = await self.store.add(document)
        except Exception as error:
            scan_error = ScanError.from_exception(error)
            LOGGER.error("Saving scan failed (%s): %s", scan_error.category.value, error)
            raise scan_error from error
        LOGGER.info("Saved scan %s for owner %s", record_id, owner.owner_id)
        return ScanRecord.from_document(record_id, stored)

    async def create(self, owner: Optional[Owner], data: object, raw_type: str) -> str:
        """Persist a scan and return its store-assigned id."""

        record = await self.create_record(owner, data, raw_type)
        return record.record_id

    async def get_by_id(self, owner: Optional[Owner], record_id: str) -> ScanRecord:
        """Fetch one record, refusing records owned by someone else."""

        owner = _require_owner(owner)
        try:
            document = await self.store.get(record_id)
        except Exception as error:
            scan_error = ScanError.from_exception(error)
            LOGGER.error("Fetching scan %s failed (%s): %s", record_id, scan_error.category.value, error)
            raise scan_error from error
        if document is None:
            raise ScanError(ErrorCategory.NOT_FOUND, f"Scan {record_id} not found")
        record = ScanRecord.from_document(record_id, document)
        if record.owner_id != owner.owner_id:
            LOGGER.warning("Owner %s denied access to scan %s", owner.owner_id, record_id)
            raise ScanError(ErrorCategory.PERMISSION, f"Scan {record_id} belongs to another owner")
        return record

    async def list(self, owner: Optional[Owner], sort_order: SortOrder = SortOrder.DESCENDING) -> List[ScanRecord]:
        """Return the owner's records ordered by ``scanned_at``."""

        owner = _require_owner(owner)
        try:
            rows = await self.store.query(
                owner.owner_id, descending=sort_order is SortOrder.DESCENDING
            )
        except Exception as error:
            scan_error = ScanError.from_exception(error)
            LOGGER.error("Listing scans failed (%s): %s", scan_error.category.value, error)
            raise scan_error from error
        records = [ScanRecord.from_document(record_id, document) for record_id, document in rows]
        # Stores are trusted for ordering but not for visibility.
        visible = [record for record in records if record.owner_id == owner.owner_id]
        if len(visible) != len(records):
            LOGGER.warning(
                "Dropped %s foreign records from listing for owner %s",
                len(records) - len(visible),
                owner.owner_id,
            )
        LOGGER.debug("Listed %s scans for owner %s (%s)", len(visible), owner.owner_id, sort_order.value)
        return visible
