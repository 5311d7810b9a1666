"""Mini README: In-memory scan store.

Structure:
    * InMemoryScanStore - process-local ``ScanStore`` used by the HTTP facade
      and the test-suite.

The store assigns identifiers and ``scanned_at`` timestamps the way a remote
document store would. Timestamps are forced to increase strictly with
insertion order so ordering stays stable even when the clock stalls.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4

from ..logging_utils import get_logger
from .base import ScanStore

LOGGER = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryScanStore(ScanStore):
    """Keep scan documents in a dictionary keyed by id."""

    def __init__(self, *, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or _utcnow
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._last_timestamp: Optional[datetime] = None
        self.calls: List[str] = []

    def _next_timestamp(self) -> datetime:
        timestamp = self._clock()
        if self._last_timestamp is not None and timestamp <= self._last_timestamp:
            timestamp = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = timestamp
        return timestamp

    async def add(self, document: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        self.calls.append("add")
        record_id = uuid4().hex
        stored = dict(document)
        stored["scanned_at"] = self._next_timestamp()
        self._documents[record_id] = stored
        LOGGER.debug("Stored scan document %s for owner %s", record_id, stored.get("owner_id"))
        return record_id, dict(stored)

    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        self.calls.append("get")
        document = self._documents.get(record_id)
        return dict(document) if document is not None else None

    async def query(self, owner_id: str, *, descending: bool) -> List[Tuple[str, Dict[str, Any]]]:
        self.calls.append("query")
        matches = [
            (record_id, dict(document))
            for record_id, document in self._documents.items()
            if document.get("owner_id") == owner_id
        ]
        matches.sort(key=lambda item: item[1]["scanned_at"], reverse=descending)
        return matches

    def __len__(self) -> int:
        return len(self._documents)
