"""Mini README: Abstract document store behind the scan repository.

Structure:
    * ScanStore - async interface the remote store implementation provides.

Stores deal in plain documents: ``owner_id``, ``owner_email``, ``data``,
``raw_type`` and a server-assigned ``scanned_at``. Failures should be raised
as ``StoreError`` subclasses or exceptions carrying a native ``code`` so the
repository can classify them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple


class ScanStore(ABC):
    """Authenticated document store holding scan documents."""

    @abstractmethod
    async def add(self, document: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """Persist a document, returning its id and the stored copy."""

    @abstractmethod
    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Fetch a single document or ``None`` when absent."""

    @abstractmethod
    async def query(self, owner_id: str, *, descending: bool) -> List[Tuple[str, Dict[str, Any]]]:
        """Return ``(id, document)`` pairs owned by ``owner_id`` ordered by scan time."""
