"""SelectionCoordinator: the single writer of selection state.

Owns the SelectionStore, the SpanningSelectionRequest and the current
RecordSet. On every page replacement it reconciles the page against the
store and then, if a spanning request is pending, drains it against the
same page snapshot. All user selection gestures are routed through here
so that every mutation goes through ``SelectionStore.apply_for_page``.
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable

from .core.record import Record, RecordSet
from .core.selection_store import SelectionStore
from .core.spanning import SpanningSelectionRequest, drain_page
from .core.validation import INVALID_COUNT_MESSAGE, InvalidSelectionCount, parse_selection_count

logger = logging.getLogger(__name__)


class SelectionCoordinator:
    """Session-scoped selection logic over a lazily paged dataset.

    Parameters
    ----------
    store : SelectionStore, optional
        Injected store; a fresh empty one is created when omitted.
    """

    def __init__(self, store: SelectionStore | None = None) -> None:
        self.store = store if store is not None else SelectionStore()
        self.request = SpanningSelectionRequest()
        self._record_set = RecordSet.empty()
        self._has_loaded = False
        self.status: str | None = None

    # ------------------------------------------------------------------
    # Queries (pure projections over store + current page)
    # ------------------------------------------------------------------

    @property
    def record_set(self) -> RecordSet:
        return self._record_set

    def current_page_records(self) -> list[Record]:
        return list(self._record_set.records)

    def selected_on_current_page(self) -> list[Record]:
        return self.store.selected_on(self._record_set)

    def all_on_current_page_selected(self) -> bool:
        return self.store.all_selected_on(self._record_set)

    @property
    def selected_count(self) -> int:
        return self.store.count()

    @property
    def pending_remaining(self) -> int:
        return self.request.remaining

    # ------------------------------------------------------------------
    # Page replacement
    # ------------------------------------------------------------------

    def replace_record_set(self, record_set: RecordSet) -> list[Record]:
        """Install a freshly fetched page, then drain any pending request.

        Both steps see the same ``record_set``. Returns the records that
        draining selected (empty when nothing was pending).
        """
        self._record_set = record_set
        self._has_loaded = True
        selected = self.store.selected_on(record_set)
        logger.debug(
            "Page %d loaded: %d records, %d already selected",
            record_set.page, len(record_set), len(selected),
        )

        if not self.request.is_pending:
            return []

        added = drain_page(record_set, self.store, self.request.remaining)
        if added:
            self.store.apply_for_page(record_set, self._in_page_order(selected + added))
            self.request.consume(len(added))
            logger.debug(
                "Drained %d rows from page %d, %d remaining",
                len(added), record_set.page, self.request.remaining,
            )

        if not self.request.is_pending:
            self.status = f"Selected {self.request.fulfilled} rows"
            logger.info("Spanning selection of %d rows complete", self.request.requested)
        elif self._dataset_exhausted(record_set):
            # Nothing left to select on any page.
            self._abandon()
        else:
            self.status = self._pending_message()
        return added

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def toggle_record(self, record_id: Hashable) -> bool:
        """Flip one record on the current page. Returns its new state.

        IDs that are not on the current page are ignored (returns False).
        """
        rs = self._record_set
        if rs.get(record_id) is None:
            return False
        was_selected = self.store.is_selected(record_id)
        next_selected = [
            r for r in rs
            if (r.id == record_id) != self.store.is_selected(r.id)
        ]
        self.store.apply_for_page(rs, next_selected)
        return not was_selected

    def select_all_on_page(self) -> None:
        self.store.apply_for_page(self._record_set, self._record_set.records)

    def clear_page(self) -> None:
        self.store.apply_for_page(self._record_set, [])

    def set_page_selection(self, record_ids: Iterable[Hashable]) -> None:
        """Make exactly ``record_ids`` the selection of the current page.

        IDs not present on the page are dropped.
        """
        self.store.apply_for_page(
            self._record_set, self._record_set.subset(list(record_ids)),
        )

    def request_spanning_selection(self, raw_count: Any) -> int:
        """Select ``raw_count`` rows starting from the current page.

        Rows available on the loaded page are selected immediately, the
        rest is left pending and drained as further pages load. Any
        pending request is superseded. Returns the shortfall left pending.

        Raises
        ------
        InvalidSelectionCount
            If the count is missing, non-numeric or < 1. Nothing changes.
        """
        try:
            count = parse_selection_count(raw_count)
        except InvalidSelectionCount:
            self.status = INVALID_COUNT_MESSAGE
            raise

        self.request.cancel()
        rs = self._record_set
        selected = self.store.selected_on(rs)
        added = drain_page(rs, self.store, count)
        if added:
            self.store.apply_for_page(rs, self._in_page_order(selected + added))

        cap = None
        if self._has_loaded:
            cap = rs.total_count - self.store.count()
        self.request.arm(count, len(added), cap=cap)
        logger.info(
            "Spanning selection of %d rows: %d selected now, %d pending",
            count, len(added), self.request.remaining,
        )

        if self.request.is_pending:
            self.status = self._pending_message()
        elif len(added) < count and self._has_loaded:
            self._report_short(count, len(added))
        else:
            self.status = None
        return self.request.remaining

    def cancel_spanning_selection(self) -> None:
        if self.request.is_pending:
            logger.info("Spanning selection cancelled, %d rows not selected", self.request.remaining)
        self.request.cancel()
        self.status = None

    def clear_all(self) -> None:
        """Deselect every record on every page and drop any pending request."""
        self.request.cancel()
        self.store.clear()
        self.status = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _in_page_order(self, records: list[Record]) -> list[Record]:
        ids = {r.id for r in records}
        return [r for r in self._record_set if r.id in ids]

    def _dataset_exhausted(self, record_set: RecordSet) -> bool:
        return self.store.count() >= record_set.total_count

    def _abandon(self) -> None:
        requested = self.request.requested
        fulfilled = self.request.fulfilled
        logger.info(
            "Spanning selection stopped at %d of %d rows; no more rows available",
            fulfilled, requested,
        )
        self.request.cancel()
        self._report_short(requested, fulfilled)

    def _report_short(self, requested: int, fulfilled: int) -> None:
        self.status = (
            f"Selected {fulfilled} of {requested} requested rows; "
            "no more rows available"
        )

    def _pending_message(self) -> str:
        return f"Selecting remaining rows ({self.request.remaining} left)"

    def __repr__(self) -> str:
        return (
            f"SelectionCoordinator(page={self._record_set.page}, "
            f"selected={self.store.count()}, pending={self.request.remaining})"
        )
