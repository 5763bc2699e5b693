# ABOUTME: Batch identification of inventory items by catalog number.
# ABOUTME: Resolves items one at a time, auto-applies unambiguous matches, and reports live progress.

import asyncio
import logging
import sqlite3
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Protocol

from cratekeeper.db.mapping import ItemRecord
from cratekeeper.marketplace.errors import CatalogError
from cratekeeper.marketplace.types import CandidateRelease

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.3


class BatchOutcome(str, Enum):
    PENDING = "pending"
    SEARCHING = "searching"
    FOUND = "found"
    MULTIPLE = "multiple"
    NOT_FOUND = "not_found"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self not in (BatchOutcome.PENDING, BatchOutcome.SEARCHING)


@dataclass
class BatchItemState:
    """Progress of one item within a batch run."""

    item_id: int
    sku: str
    catalog_no: str | None = None
    outcome: BatchOutcome = BatchOutcome.PENDING
    candidate: CandidateRelease | None = None
    error: str | None = None


@dataclass
class BatchReport:
    """Final states of a batch run, in input order."""

    states: list[BatchItemState] = field(default_factory=list)

    @property
    def found_count(self) -> int:
        return self.count(BatchOutcome.FOUND)

    def count(self, outcome: BatchOutcome) -> int:
        return sum(1 for state in self.states if state.outcome is outcome)


class CatalogSearch(Protocol):
    async def search(
        self,
        *,
        catalog_no: str | None = None,
        query: str | None = None,
        artist: str | None = None,
        title: str | None = None,
    ) -> list[CandidateRelease]: ...


class ItemSource(Protocol):
    def list_by_ids(self, item_ids: list[int]) -> list[ItemRecord]: ...

    def update_fields(self, item_id: int, **fields: str | None) -> None: ...


ProgressFn = Callable[[list[BatchItemState]], None]


class BatchIdentifier:
    """Runs catalog-number identification over a list of items.

    Items are processed strictly one after another with a fixed pause in
    between, which keeps the upstream request rate bounded. Only a search
    that yields exactly one candidate writes to the item; zero or several
    candidates leave the item untouched. A failure on one item is recorded
    on that item's state and the run moves on.
    """

    def __init__(
        self,
        resolver: CatalogSearch,
        store: ItemSource,
        *,
        delay: float = DEFAULT_DELAY,
        on_progress: ProgressFn | None = None,
    ) -> None:
        self._resolver = resolver
        self._store = store
        self._delay = delay
        self._on_progress = on_progress

    async def run(self, item_ids: Sequence[int]) -> BatchReport:
        """Identify every item in item_ids, in order.

        IDs with no matching item are skipped.
        """
        items = self._store.list_by_ids(list(item_ids))
        missing = set(item_ids) - {item.id for item in items}
        for item_id in sorted(missing):
            logger.warning("Item %d not found, skipping", item_id)

        report = BatchReport(
            states=[
                BatchItemState(item_id=item.id, sku=item.sku, catalog_no=item.catalog_no)
                for item in items
            ]
        )
        self._emit(report)

        for index, state in enumerate(report.states):
            if index > 0 and self._delay > 0:
                await asyncio.sleep(self._delay)
            await self._identify(state, report)

        logger.info(
            "Batch finished: %d of %d item(s) updated", report.found_count, len(report.states)
        )
        return report

    async def _identify(self, state: BatchItemState, report: BatchReport) -> None:
        if not state.catalog_no:
            self._transition(state, BatchOutcome.NOT_FOUND, report)
            return

        self._transition(state, BatchOutcome.SEARCHING, report)
        try:
            candidates = await self._resolver.search(catalog_no=state.catalog_no)
        except CatalogError as exc:
            logger.warning("Search failed for %s (%s): %s", state.sku, state.catalog_no, exc)
            state.error = str(exc)
            self._transition(state, BatchOutcome.ERROR, report)
            return
        except Exception as exc:
            logger.exception("Unexpected failure searching %s (%s)", state.sku, state.catalog_no)
            state.error = str(exc) or type(exc).__name__
            self._transition(state, BatchOutcome.ERROR, report)
            return

        if len(candidates) == 1:
            candidate = candidates[0]
            try:
                self._store.update_fields(
                    state.item_id, title=candidate.title, artist=candidate.artist
                )
            except (ValueError, sqlite3.Error) as exc:
                logger.warning("Could not apply match to %s: %s", state.sku, exc)
                state.error = str(exc)
                self._transition(state, BatchOutcome.ERROR, report)
                return
            state.candidate = candidate
            self._transition(state, BatchOutcome.FOUND, report)
        elif candidates:
            self._transition(state, BatchOutcome.MULTIPLE, report)
        else:
            self._transition(state, BatchOutcome.NOT_FOUND, report)

    def _transition(
        self, state: BatchItemState, outcome: BatchOutcome, report: BatchReport
    ) -> None:
        logger.info("%s: %s -> %s", state.sku, state.outcome.value, outcome.value)
        state.outcome = outcome
        self._emit(report)

    def _emit(self, report: BatchReport) -> None:
        if self._on_progress is not None:
            self._on_progress([replace(state) for state in report.states])
