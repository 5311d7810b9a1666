"""Mini README: History query engine for a single history screen.

Structure:
    * HistoryRow - display projection of a record (icon, label, time text).
    * filter_records - pure, case-insensitive substring filter.
    * HistoryEngine - fetch, sort, filter, refresh and manual retry.

Sorting is a fetch parameter handled by the store; filtering is a pure
projection over the fetched sequence and never mutates it. Every fetch is
stamped with a sequence number and only the newest fetch may update the
engine, so a slow response to an older sort order or refresh cannot
overwrite fresher results.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from ..auth import AuthContext
from ..classification import ClassifiedType, classify
from ..errors import ScanError
from ..logging_utils import get_logger
from ..navigation import NavigationKind, Navigator
from ..storage import ScanRecord, ScanRepository, SortOrder
from ..utils import format_timestamp

LOGGER = get_logger(__name__)

TimestampFormatter = Callable[[Optional[datetime]], str]


@dataclass(frozen=True, slots=True)
class HistoryRow:
    """A record prepared for list rendering."""

    record: ScanRecord
    classification: ClassifiedType
    scanned_at_text: str


def filter_records(
    records: Iterable[ScanRecord],
    query: str,
    formatter: TimestampFormatter = format_timestamp,
) -> Tuple[ScanRecord, ...]:
    """Keep records whose data, type or formatted time contains ``query``.

    Surrounding whitespace in ``query`` is ignored; a blank query keeps all.
    """

    needle = (query or "").strip().lower()
    if not needle:
        return tuple(records)
    return tuple(
        record
        for record in records
        if needle in record.data.lower()
        or needle in record.raw_type.lower()
        or needle in formatter(record.scanned_at).lower()
    )


class HistoryEngine:
    """Owner-scoped scan history with search, ordering and retry."""

    def __init__(
        self,
        repository: ScanRepository,
        auth: AuthContext,
        navigator: Navigator,
        *,
        sort_order: SortOrder = SortOrder.DESCENDING,
        timestamp_pattern: Optional[str] = None,
        login_redirect_delay: float = 2.0,
    ) -> None:
        self.repository = repository
        self.auth = auth
        self.navigator = navigator
        # Requested ordering; applied_sort_order is the ordering of ``records``.
        self.sort_order = SortOrder(sort_order)
        self.applied_sort_order: Optional[SortOrder] = None
        self.timestamp_pattern = timestamp_pattern
        self.login_redirect_delay = login_redirect_delay

        self.records: Tuple[ScanRecord, ...] = ()
        self.visible: Tuple[ScanRecord, ...] = ()
        self.query = ""
        self.loading = False
        self.error: Optional[ScanError] = None
        self._fetch_sequence = 0

    def _formatter(self, value: Optional[datetime]) -> str:
        return format_timestamp(value, self.timestamp_pattern)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    async def load(self) -> bool:
        """Initial fetch on mount."""

        return await self._fetch()

    async def refresh(self) -> bool:
        """Re-issue the list call with the current ordering."""

        return await self._fetch()

    async def retry(self) -> bool:
        """Manually repeat a failed fetch."""

        if self.error is None or not self.error.retryable:
            raise ValueError("There is no retryable history failure")
        LOGGER.info("Retrying history fetch after %s failure", self.error.category.value)
        return await self._fetch()

    async def set_sort_order(self, sort_order: SortOrder) -> bool:
        """Change ordering; refetches only when the order actually changes.

        If the fetch fails ``sort_order`` keeps the requested value while
        ``records`` stay in ``applied_sort_order``; ``retry()`` re-requests it.
        """

        sort_order = SortOrder(sort_order)
        if sort_order is self.sort_order:
            return False
        self.sort_order = sort_order
        return await self._fetch()

    async def toggle_sort_order(self) -> bool:
        return await self.set_sort_order(self.sort_order.toggled())

    async def _fetch(self) -> bool:
        self._fetch_sequence += 1
        ticket = self._fetch_sequence
        sort_order = self.sort_order
        self.loading = True
        LOGGER.debug("History fetch #%s (%s)", ticket, sort_order.value)
        try:
            owner = self.auth.current_user()
            records = await self.repository.list(owner, sort_order)
        except Exception as error:
            if ticket != self._fetch_sequence:
                LOGGER.debug("Discarding failure of superseded fetch #%s: %s", ticket, error)
                return False
            self.loading = False
            self._surface(ScanError.from_exception(error))
            return False

        if ticket != self._fetch_sequence:
            LOGGER.debug("Discarding superseded fetch #%s", ticket)
            return False
        self.loading = False
        self.error = None
        self.records = tuple(records)
        self.applied_sort_order = sort_order
        self._recompute()
        LOGGER.info("History loaded %s scans (%s)", len(self.records), sort_order.value)
        return True

    def _surface(self, error: ScanError) -> None:
        self.error = error
        LOGGER.warning("History fetch failed (%s): %s", error.category.value, error)
        if error.navigation is NavigationKind.GO_TO_LOGIN:
            self.navigator.go_to_login(delay_seconds=self.login_redirect_delay)
        elif error.navigation is NavigationKind.GO_BACK:
            self.navigator.go_back()

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------
    def set_query(self, query: str) -> Tuple[ScanRecord, ...]:
        """Update the search text and recompute the visible records."""

        self.query = query or ""
        return self._recompute()

    def _recompute(self) -> Tuple[ScanRecord, ...]:
        self.visible = filter_records(self.records, self.query, self._formatter)
        return self.visible

    def rows(self) -> List[HistoryRow]:
        """Visible records with icons and formatted times."""

        return [
            HistoryRow(
                record=record,
                classification=classify(record.data, record.raw_type),
                scanned_at_text=self._formatter(record.scanned_at),
            )
            for record in self.visible
        ]

    def open(self, record: ScanRecord) -> None:
        """Navigate to a record's detail view, handing over the cached copy."""

        self.navigator.go_to_detail(record.record_id, record)
