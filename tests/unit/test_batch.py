# ABOUTME: Unit tests for BatchIdentifier.
# ABOUTME: Uses a scripted resolver and a real ItemStore to check ordering, outcomes, and progress snapshots.

import asyncio
from datetime import date
from unittest.mock import AsyncMock, call, patch

import pytest

from cratekeeper.core.batch import (
    DEFAULT_DELAY,
    BatchIdentifier,
    BatchItemState,
    BatchOutcome,
)
from cratekeeper.core.items import create_item
from cratekeeper.db.inventory import ItemStore
from cratekeeper.marketplace.errors import UpstreamError
from cratekeeper.marketplace.types import CandidateRelease

DAY = date(2024, 3, 15)

FOR_YOU = CandidateRelease(
    title="For You", artist="Tatsuro Yamashita", catalog_no="RAL-8801", release_id="1234567"
)
FOR_YOU_REISSUE = CandidateRelease(
    title="For You", artist="Tatsuro Yamashita", catalog_no="RAL-8801", release_id="1234568"
)


class ScriptedResolver:
    """Resolver that answers each catalog number from a script."""

    def __init__(self, script: dict[str, list[CandidateRelease] | Exception]) -> None:
        self._script = script
        self.searched: list[str | None] = []

    async def search(
        self,
        *,
        catalog_no: str | None = None,
        query: str | None = None,
        artist: str | None = None,
        title: str | None = None,
    ) -> list[CandidateRelease]:
        self.searched.append(catalog_no)
        answer = self._script.get(catalog_no or "", [])
        if isinstance(answer, Exception):
            raise answer
        return answer


def _add(store: ItemStore, catalog_no: str | None = None, title: str | None = None) -> int:
    return create_item(store, "VINYL", on=DAY, catalog_no=catalog_no, title=title).id


def _run(identifier: BatchIdentifier, ids: list[int]):  # type: ignore[no-untyped-def]
    return asyncio.run(identifier.run(ids))


class TestOutcomes:
    """Tests for per-item outcomes."""

    def test_not_found_not_found_found(self, store: ItemStore) -> None:
        """No catalog number, zero matches, and one match, in that order."""
        no_catno = _add(store, title="Handwritten label")
        unknown = _add(store, catalog_no="XXX-0000")
        known = _add(store, catalog_no="RAL-8801")
        resolver = ScriptedResolver({"RAL-8801": [FOR_YOU]})

        report = _run(BatchIdentifier(resolver, store, delay=0), [no_catno, unknown, known])

        assert [s.outcome for s in report.states] == [
            BatchOutcome.NOT_FOUND,
            BatchOutcome.NOT_FOUND,
            BatchOutcome.FOUND,
        ]
        assert report.found_count == 1
        assert resolver.searched == ["XXX-0000", "RAL-8801"]

        updated = store.get_by_id(known)
        assert updated is not None
        assert updated.title == "For You"
        assert updated.artist == "Tatsuro Yamashita"
        assert store.get_by_id(no_catno).title == "Handwritten label"  # type: ignore[union-attr]
        assert store.get_by_id(unknown).title is None  # type: ignore[union-attr]

    def test_found_keeps_status_and_catalog_number(self, store: ItemStore) -> None:
        item_id = _add(store, catalog_no="ral8801")
        resolver = ScriptedResolver({"ral8801": [FOR_YOU]})
        report = _run(BatchIdentifier(resolver, store, delay=0), [item_id])

        record = store.get_by_id(item_id)
        assert record is not None
        assert record.status == "UNPROCESSED"
        assert record.catalog_no == "ral8801"
        assert report.states[0].candidate == FOR_YOU

    def test_multiple_candidates_leave_item_untouched(self, store: ItemStore) -> None:
        item_id = _add(store, catalog_no="RAL-8801", title="Keep me")
        resolver = ScriptedResolver({"RAL-8801": [FOR_YOU, FOR_YOU_REISSUE]})

        report = _run(BatchIdentifier(resolver, store, delay=0), [item_id])

        assert report.states[0].outcome is BatchOutcome.MULTIPLE
        assert report.states[0].candidate is None
        assert store.get_by_id(item_id).title == "Keep me"  # type: ignore[union-attr]

    def test_error_is_recorded_and_run_continues(self, store: ItemStore) -> None:
        failing = _add(store, catalog_no="BAD-1")
        ok = _add(store, catalog_no="RAL-8801")
        resolver = ScriptedResolver(
            {"BAD-1": UpstreamError("HTTP 500", status_code=500), "RAL-8801": [FOR_YOU]}
        )

        report = _run(BatchIdentifier(resolver, store, delay=0), [failing, ok])

        assert report.states[0].outcome is BatchOutcome.ERROR
        assert report.states[0].error == "HTTP 500"
        assert report.states[1].outcome is BatchOutcome.FOUND
        assert report.count(BatchOutcome.ERROR) == 1

    def test_unexpected_resolver_exception_is_contained(self, store: ItemStore) -> None:
        failing = _add(store, catalog_no="BAD-1")
        ok = _add(store, catalog_no="RAL-8801")
        resolver = ScriptedResolver({"BAD-1": RuntimeError("boom"), "RAL-8801": [FOR_YOU]})

        report = _run(BatchIdentifier(resolver, store, delay=0), [failing, ok])

        assert [s.outcome for s in report.states] == [BatchOutcome.ERROR, BatchOutcome.FOUND]
        assert report.states[0].error == "boom"
        assert store.get_by_id(ok).title == "For You"  # type: ignore[union-attr]

    def test_missing_ids_are_skipped(self, store: ItemStore) -> None:
        item_id = _add(store, catalog_no="RAL-8801")
        resolver = ScriptedResolver({"RAL-8801": [FOR_YOU]})
        report = _run(BatchIdentifier(resolver, store, delay=0), [404, item_id])
        assert [s.item_id for s in report.states] == [item_id]

    def test_empty_batch(self, store: ItemStore) -> None:
        resolver = ScriptedResolver({})
        report = _run(BatchIdentifier(resolver, store, delay=0), [])
        assert report.states == []
        assert resolver.searched == []


class TestOrderingAndPacing:
    """Tests for sequential processing and the inter-item delay."""

    def test_processes_in_given_order(self, store: ItemStore) -> None:
        a = _add(store, catalog_no="A-1")
        b = _add(store, catalog_no="B-2")
        c = _add(store, catalog_no="C-3")
        resolver = ScriptedResolver({})
        _run(BatchIdentifier(resolver, store, delay=0), [c, a, b])
        assert resolver.searched == ["C-3", "A-1", "B-2"]

    def test_delay_between_items_only(self, store: ItemStore) -> None:
        ids = [_add(store, catalog_no=f"CAT-{n}") for n in range(3)]
        resolver = ScriptedResolver({})
        sleep = AsyncMock()
        with patch("cratekeeper.core.batch.asyncio.sleep", sleep):
            _run(BatchIdentifier(resolver, store), ids)
        assert sleep.await_args_list == [call(DEFAULT_DELAY), call(DEFAULT_DELAY)]

    def test_delay_applies_after_items_without_catalog_number(self, store: ItemStore) -> None:
        ids = [_add(store), _add(store, catalog_no="RAL-8801")]
        resolver = ScriptedResolver({"RAL-8801": [FOR_YOU]})
        sleep = AsyncMock()
        with patch("cratekeeper.core.batch.asyncio.sleep", sleep):
            _run(BatchIdentifier(resolver, store, delay=0.5), ids)
        assert sleep.await_args_list == [call(0.5)]


class TestProgress:
    """Tests for progress snapshots."""

    @pytest.fixture
    def snapshots(self) -> list[list[BatchItemState]]:
        return []

    def test_initial_snapshot_is_all_pending(
        self, store: ItemStore, snapshots: list[list[BatchItemState]]
    ) -> None:
        ids = [_add(store, catalog_no="RAL-8801"), _add(store)]
        resolver = ScriptedResolver({"RAL-8801": [FOR_YOU]})
        _run(BatchIdentifier(resolver, store, delay=0, on_progress=snapshots.append), ids)
        assert [s.outcome for s in snapshots[0]] == [BatchOutcome.PENDING, BatchOutcome.PENDING]

    def test_item_passes_through_searching(
        self, store: ItemStore, snapshots: list[list[BatchItemState]]
    ) -> None:
        item_id = _add(store, catalog_no="RAL-8801")
        resolver = ScriptedResolver({"RAL-8801": [FOR_YOU]})
        _run(BatchIdentifier(resolver, store, delay=0, on_progress=snapshots.append), [item_id])
        assert [snap[0].outcome for snap in snapshots] == [
            BatchOutcome.PENDING,
            BatchOutcome.SEARCHING,
            BatchOutcome.FOUND,
        ]

    def test_item_without_catalog_number_skips_searching(
        self, store: ItemStore, snapshots: list[list[BatchItemState]]
    ) -> None:
        item_id = _add(store)
        _run(
            BatchIdentifier(ScriptedResolver({}), store, delay=0, on_progress=snapshots.append),
            [item_id],
        )
        assert [snap[0].outcome for snap in snapshots] == [
            BatchOutcome.PENDING,
            BatchOutcome.NOT_FOUND,
        ]

    def test_snapshots_are_independent_copies(
        self, store: ItemStore, snapshots: list[list[BatchItemState]]
    ) -> None:
        ids = [_add(store, catalog_no="RAL-8801"), _add(store, catalog_no="XXX")]
        resolver = ScriptedResolver({"RAL-8801": [FOR_YOU]})
        report = _run(
            BatchIdentifier(resolver, store, delay=0, on_progress=snapshots.append), ids
        )
        assert snapshots[0][0].outcome is BatchOutcome.PENDING
        assert snapshots[0][0] is not report.states[0]
        assert [s.outcome for s in snapshots[-1]] == [s.outcome for s in report.states]

    def test_terminal_outcomes(self) -> None:
        assert not BatchOutcome.PENDING.is_terminal
        assert not BatchOutcome.SEARCHING.is_terminal
        assert all(
            outcome.is_terminal
            for outcome in (
                BatchOutcome.FOUND,
                BatchOutcome.MULTIPLE,
                BatchOutcome.NOT_FOUND,
                BatchOutcome.ERROR,
            )
        )
