"""Mini README: Shared fixtures and store doubles for the test-suite.

Structure:
    * SteppingClock - deterministic clock advancing one minute per call.
    * GatedStore - holds ``add`` calls until the test releases them.
    * ControlledStore - holds every ``query`` call on its own future.
    * FailingStore - raises a configured exception from every operation.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

import pytest

from qrscan.navigation import RecordingNavigator
from qrscan.storage import InMemoryScanStore, Owner, ScanRepository, ScanStore

START = datetime(2026, 10, 19, 15, 4, tzinfo=timezone.utc)


class SteppingClock:
    """Return ``START``, ``START + 1 min``, ... on successive calls."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


class GatedStore(InMemoryScanStore):
    """In-memory store whose writes wait for ``release``."""

    def __init__(self) -> None:
        super().__init__(clock=SteppingClock())
        self.add_attempts = 0
        self._gate = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def add(self, document: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        self.add_attempts += 1
        await self._gate.wait()
        return await super().add(document)


class ControlledStore(InMemoryScanStore):
    """In-memory store whose queries resolve only when the test says so."""

    def __init__(self) -> None:
        super().__init__(clock=SteppingClock())
        self.pending: List["asyncio.Future[None]"] = []

    async def query(self, owner_id: str, *, descending: bool) -> List[Tuple[str, Dict[str, Any]]]:
        result = await super().query(owner_id, descending=descending)
        gate = asyncio.get_running_loop().create_future()
        self.pending.append(gate)
        await gate
        return result

    def resolve(self, index: int) -> None:
        self.pending[index].set_result(None)


class FailingStore(ScanStore):
    """Store that raises ``error`` from every call."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    async def add(self, document: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        self.calls += 1
        raise self.error

    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        self.calls += 1
        raise self.error

    async def query(self, owner_id: str, *, descending: bool) -> List[Tuple[str, Dict[str, Any]]]:
        self.calls += 1
        raise self.error


async def settle() -> None:
    """Let pending tasks run up to their next suspension point."""

    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture
def owner() -> Owner:
    return Owner(owner_id="u1", email="jane@example.com")


@pytest.fixture
def other_owner() -> Owner:
    return Owner(owner_id="u2", email="sam@example.com")


@pytest.fixture
def store() -> InMemoryScanStore:
    return InMemoryScanStore(clock=SteppingClock())


@pytest.fixture
def repository(store: InMemoryScanStore) -> ScanRepository:
    return ScanRepository(store)


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()
