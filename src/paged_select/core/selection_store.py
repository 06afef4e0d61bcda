"""SelectionStore: session-wide set of selected record IDs.

The store is the single source of truth for "is this record selected".
It is mutated only through ``apply_for_page``, which rewrites the
selection of one page and leaves every other ID alone, so selections made
on pages that are no longer displayed survive page changes.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable

from .record import Record, RecordSet


SelectionChangeCallback = Callable[[frozenset, frozenset], Any]


class SelectionStore:
    """Holds selected IDs and notifies registered callbacks on change.

    Callbacks receive ``(added, removed)`` ID sets and are only called
    when a mutation actually changed the selection.
    """

    def __init__(self) -> None:
        self._ids: set = set()
        self._callbacks: list[SelectionChangeCallback] = []

    def is_selected(self, record_id: Hashable) -> bool:
        return record_id in self._ids

    def count(self) -> int:
        """Total selected IDs across every page seen this session."""
        return len(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, record_id: Hashable) -> bool:
        return record_id in self._ids

    @property
    def ids(self) -> frozenset:
        return frozenset(self._ids)

    def apply_for_page(
        self,
        page_records: Iterable[Record],
        next_selected: Iterable[Record],
    ) -> None:
        """Replace the selection of ``page_records`` with ``next_selected``.

        ``next_selected`` must be a subset of ``page_records``. IDs of
        records outside the page are never touched.
        """
        page_ids = {r.id for r in page_records}
        next_ids = {r.id for r in next_selected}

        removed = frozenset((self._ids & page_ids) - next_ids)
        added = frozenset(next_ids - self._ids)
        if not added and not removed:
            return

        self._ids -= removed
        self._ids |= added
        self._notify(added, removed)

    def clear(self) -> None:
        """Deselect everything, on every page."""
        if not self._ids:
            return
        removed = frozenset(self._ids)
        self._ids.clear()
        self._notify(frozenset(), removed)

    def selected_on(self, record_set: RecordSet) -> list[Record]:
        """Selected records of a page, in page order. Pure read."""
        return [r for r in record_set if r.id in self._ids]

    def unselected_on(self, record_set: RecordSet) -> list[Record]:
        return [r for r in record_set if r.id not in self._ids]

    def all_selected_on(self, record_set: RecordSet) -> bool:
        """True if the page is non-empty and every record on it is selected."""
        if len(record_set) == 0:
            return False
        return all(r.id in self._ids for r in record_set)

    def on_change(self, callback: SelectionChangeCallback) -> None:
        """Register a callback: fn(added_ids, removed_ids)."""
        self._callbacks.append(callback)

    def _notify(self, added: frozenset, removed: frozenset) -> None:
        for cb in self._callbacks:
            cb(added, removed)

    def __repr__(self) -> str:
        return f"SelectionStore(selected={len(self._ids)})"
