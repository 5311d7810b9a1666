"""Mini README: Detail view loader for a single scan.

Structure:
    * ScanDetailLoader - fetches one record by id unless the caller already
      supplied a copy, and exposes display fields for the detail screen.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..auth import AuthContext
from ..classification import ClassifiedType, classify
from ..errors import ScanError
from ..logging_utils import get_logger
from ..navigation import NavigationKind, Navigator
from ..storage import ScanRecord, ScanRepository
from ..utils import format_timestamp

LOGGER = get_logger(__name__)


class ScanDetailLoader:
    """Load and describe one scan for its owner."""

    def __init__(
        self,
        repository: ScanRepository,
        auth: AuthContext,
        navigator: Navigator,
        record_id: str,
        *,
        cached: Optional[ScanRecord] = None,
        timestamp_pattern: Optional[str] = None,
        login_redirect_delay: float = 2.0,
    ) -> None:
        self.repository = repository
        self.auth = auth
        self.navigator = navigator
        self.record_id = record_id
        self.cached = cached
        self.timestamp_pattern = timestamp_pattern
        self.login_redirect_delay = login_redirect_delay
        self.record: Optional[ScanRecord] = None
        self.error: Optional[ScanError] = None
        self.loading = False

    def _usable_cache(self) -> Optional[ScanRecord]:
        cached = self.cached
        if cached is None or cached.record_id != self.record_id:
            return None
        owner = self.auth.current_user()
        if owner is None or owner.owner_id != cached.owner_id:
            return None
        return cached

    async def load(self) -> Optional[ScanRecord]:
        """Resolve the record, fetching at most once per call."""

        cached = self._usable_cache()
        if cached is not None:
            LOGGER.debug("Using cached copy of scan %s", self.record_id)
            self.record = cached
            self.error = None
            return cached

        self.loading = True
        try:
            record = await self.repository.get_by_id(self.auth.current_user(), self.record_id)
        except Exception as error:
            self.loading = False
            self._surface(ScanError.from_exception(error))
            return None
        self.loading = False
        self.record = record
        self.error = None
        return record

    async def retry(self) -> Optional[ScanRecord]:
        if self.error is None or not self.error.retryable:
            raise ValueError("There is no retryable detail failure")
        return await self.load()

    def _surface(self, error: ScanError) -> None:
        self.error = error
        LOGGER.warning("Loading scan %s failed (%s)", self.record_id, error.category.value)
        if error.navigation is NavigationKind.GO_TO_LOGIN:
            self.navigator.go_to_login(delay_seconds=self.login_redirect_delay)
        elif error.navigation is NavigationKind.GO_BACK:
            self.navigator.go_back()

    @property
    def classification(self) -> Optional[ClassifiedType]:
        if self.record is None:
            return None
        return classify(self.record.data, self.record.raw_type)

    def fields(self) -> List[Tuple[str, str]]:
        """Label / value pairs for the detail card."""

        if self.record is None:
            return []
        return [
            ("QR Code Data", self.record.data),
            ("Scanned On", format_timestamp(self.record.scanned_at, self.timestamp_pattern)),
            ("Type", self.record.raw_type),
        ]
