"""Mini README: Tests for the history query engine.

Structure:
    * fetching - owner scoping, ordering and refresh.
    * filtering - case-insensitive search over data, type and time text.
    * superseded fetches - late responses never overwrite newer ones.
    * failures - auth redirect and manual retry.
"""

from __future__ import annotations

import asyncio

import pytest

from conftest import ControlledStore, FailingStore, settle
from qrscan.auth import StaticAuthContext
from qrscan.classification import ContentType
from qrscan.errors import ErrorCategory, StoreUnavailableError
from qrscan.history import HistoryEngine, filter_records
from qrscan.navigation import NavigationKind, RecordingNavigator
from qrscan.storage import InMemoryScanStore, Owner, ScanRepository, SortOrder


async def seed(repository: ScanRepository, owner: Owner) -> None:
    await repository.create(owner, "https://a.example", "org.iso.QRCode")
    await repository.create(owner, "jane@example.com", "qr")
    await repository.create(owner, "Grocery list: milk", "QR")


def build_engine(repository, owner, navigator, **options) -> HistoryEngine:
    return HistoryEngine(repository, StaticAuthContext(owner), navigator, **options)


@pytest.mark.asyncio
async def test_load_returns_newest_first_by_default(
    repository: ScanRepository, owner: Owner, navigator: RecordingNavigator
) -> None:
    await seed(repository, owner)
    engine = build_engine(repository, owner, navigator)

    assert await engine.load() is True
    assert [record.data for record in engine.visible] == [
        "Grocery list: milk",
        "jane@example.com",
        "https://a.example",
    ]
    assert engine.loading is False
    assert engine.error is None


@pytest.mark.asyncio
async def test_other_owner_sees_empty_history(
    repository: ScanRepository, owner: Owner, other_owner: Owner, navigator: RecordingNavigator
) -> None:
    await seed(repository, owner)
    engine = build_engine(repository, other_owner, navigator)

    await engine.load()
    assert engine.records == ()
    assert engine.error is None


@pytest.mark.asyncio
async def test_sort_toggle_issues_exactly_one_fetch(
    repository: ScanRepository, store: InMemoryScanStore, owner: Owner, navigator: RecordingNavigator
) -> None:
    await seed(repository, owner)
    engine = build_engine(repository, owner, navigator)
    await engine.load()
    engine.set_query("example")
    before = store.calls.count("query")

    await engine.toggle_sort_order()

    assert store.calls.count("query") == before + 1
    assert engine.sort_order is SortOrder.ASCENDING
    assert [record.data for record in engine.visible] == ["https://a.example", "jane@example.com"]


@pytest.mark.asyncio
async def test_setting_same_order_does_not_refetch(
    repository: ScanRepository, store: InMemoryScanStore, owner: Owner, navigator: RecordingNavigator
) -> None:
    engine = build_engine(repository, owner, navigator)
    await engine.load()

    assert await engine.set_sort_order(SortOrder.DESCENDING) is False
    assert store.calls.count("query") == 1


@pytest.mark.asyncio
async def test_query_matches_data_type_and_time_case_insensitively(
    repository: ScanRepository, owner: Owner, navigator: RecordingNavigator
) -> None:
    await seed(repository, owner)
    engine = build_engine(repository, owner, navigator)
    await engine.load()

    assert [record.data for record in engine.set_query("GROCERY")] == ["Grocery list: milk"]
    assert len(engine.set_query("iso.qrcode")) == 1
    assert len(engine.set_query("qr")) == 3
    # Seeded records were stamped 3:04, 3:05 and 3:06 PM.
    assert [record.data for record in engine.set_query("3:05 pm")] == ["jane@example.com"]
    assert engine.set_query("nothing like this") == ()
    assert len(engine.set_query("")) == 3


@pytest.mark.asyncio
async def test_filter_is_idempotent_and_leaves_base_untouched(
    repository: ScanRepository, owner: Owner, navigator: RecordingNavigator
) -> None:
    await seed(repository, owner)
    engine = build_engine(repository, owner, navigator)
    await engine.load()
    base = engine.records

    once = engine.set_query("example")
    twice = filter_records(once, "example")

    assert twice == once
    assert engine.records == base
    assert len(engine.records) == 3


@pytest.mark.asyncio
async def test_refresh_replaces_base_and_filtered_views(
    repository: ScanRepository, owner: Owner, navigator: RecordingNavigator
) -> None:
    await seed(repository, owner)
    engine = build_engine(repository, owner, navigator)
    await engine.load()
    engine.set_query("example")
    assert len(engine.visible) == 2

    await repository.create(owner, "https://b.example", "qr")
    await engine.refresh()

    assert len(engine.records) == 4
    assert engine.visible[0].data == "https://b.example"
    assert len(engine.visible) == 3


@pytest.mark.asyncio
async def test_rows_carry_classification_and_time_text(
    repository: ScanRepository, owner: Owner, navigator: RecordingNavigator
) -> None:
    await repository.create(owner, "https://a.example", "qr")
    engine = build_engine(repository, owner, navigator)
    await engine.load()

    (row,) = engine.rows()
    assert row.classification.content_type is ContentType.URL
    assert row.scanned_at_text == "Oct 19, 2026, 3:04 PM"


@pytest.mark.asyncio
async def test_superseded_fetch_is_discarded(owner: Owner, navigator: RecordingNavigator) -> None:
    store = ControlledStore()
    repository = ScanRepository(store)
    await repository.create(owner, "older", "qr")
    await repository.create(owner, "newer", "qr")
    engine = build_engine(repository, owner, navigator)

    first = asyncio.ensure_future(engine.load())
    await settle()
    second = asyncio.ensure_future(engine.toggle_sort_order())
    await settle()
    assert len(store.pending) == 2

    store.resolve(1)
    assert await second is True
    assert [record.data for record in engine.visible] == ["older", "newer"]

    store.resolve(0)
    assert await first is False
    assert [record.data for record in engine.visible] == ["older", "newer"]
    assert engine.sort_order is SortOrder.ASCENDING


@pytest.mark.asyncio
async def test_signed_out_history_redirects_to_login(
    repository: ScanRepository, store: InMemoryScanStore, navigator: RecordingNavigator
) -> None:
    engine = build_engine(repository, None, navigator)

    assert await engine.load() is False
    assert engine.error.category is ErrorCategory.AUTH
    assert navigator.kinds == [NavigationKind.GO_TO_LOGIN]
    assert store.calls == []
    with pytest.raises(ValueError):
        await engine.retry()


@pytest.mark.asyncio
async def test_service_failure_is_retried_manually(owner: Owner, navigator: RecordingNavigator) -> None:
    failing = FailingStore(StoreUnavailableError("maintenance"))
    repository = ScanRepository(failing)
    engine = build_engine(repository, owner, navigator)

    await engine.load()
    assert engine.error.category is ErrorCategory.SERVICE
    assert engine.error.retryable is True
    assert failing.calls == 1

    await engine.retry()
    assert failing.calls == 2

    repository.store = InMemoryScanStore()
    assert await engine.retry() is True
    assert engine.error is None
    assert engine.records == ()


@pytest.mark.asyncio
async def test_retry_without_failure_is_rejected(
    repository: ScanRepository, owner: Owner, navigator: RecordingNavigator
) -> None:
    engine = build_engine(repository, owner, navigator)
    await engine.load()
    with pytest.raises(ValueError):
        await engine.retry()


@pytest.mark.asyncio
async def test_open_navigates_with_cached_record(
    repository: ScanRepository, owner: Owner, navigator: RecordingNavigator
) -> None:
    await repository.create(owner, "hello", "qr")
    engine = build_engine(repository, owner, navigator)
    await engine.load()

    engine.open(engine.visible[0])
    assert navigator.intents[0].kind is NavigationKind.GO_TO_DETAIL
    assert navigator.intents[0].record is engine.visible[0]


@pytest.mark.asyncio
async def test_failed_sort_change_keeps_applied_order(owner: Owner, navigator: RecordingNavigator) -> None:
    store = InMemoryScanStore()
    repository = ScanRepository(store)
    for payload in ("a", "b", "c"):
        await repository.create(owner, payload, "qr")
    engine = build_engine(repository, owner, navigator)
    await engine.load()
    assert engine.applied_sort_order is SortOrder.DESCENDING

    repository.store = FailingStore(StoreUnavailableError("maintenance"))
    assert await engine.toggle_sort_order() is False

    assert engine.sort_order is SortOrder.ASCENDING
    assert engine.applied_sort_order is SortOrder.DESCENDING
    assert [record.data for record in engine.visible] == ["c", "b", "a"]

    repository.store = store
    assert await engine.retry() is True
    assert engine.applied_sort_order is SortOrder.ASCENDING
    assert [record.data for record in engine.visible] == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_query_surrounding_whitespace_is_ignored(
    repository: ScanRepository, owner: Owner, navigator: RecordingNavigator
) -> None:
    await seed(repository, owner)
    engine = build_engine(repository, owner, navigator)
    await engine.load()

    assert [record.data for record in engine.set_query("milk ")] == ["Grocery list: milk"]
    assert [record.data for record in engine.set_query("  MILK")] == ["Grocery list: milk"]
    assert len(engine.set_query("   ")) == 3
    # Inner whitespace is part of the needle.
    assert engine.set_query("list:  milk") == ()
