"""Spanning selection: "select N rows" requests that outlive the current page.

A request is armed with the shortfall the current page could not cover
and then drains as further pages arrive. Draining is a pure function of
the arriving page and the store, so it can be tested without a UI or a
network.
"""

from __future__ import annotations

import enum

from .record import Record, RecordSet
from .selection_store import SelectionStore


class SpanState(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"


class SpanningSelectionRequest:
    """Counter of rows still to be auto-selected as new pages load.

    ``remaining`` only goes down through ``consume`` or is reset by a new
    ``arm``/``cancel``. ``requested`` and ``fulfilled`` are kept for
    status reporting.
    """

    def __init__(self) -> None:
        self.remaining = 0
        self.requested = 0
        self.fulfilled = 0

    @property
    def state(self) -> SpanState:
        return SpanState.PENDING if self.remaining > 0 else SpanState.IDLE

    @property
    def is_pending(self) -> bool:
        return self.remaining > 0

    def arm(self, requested: int, fulfilled_now: int, cap: int | None = None) -> None:
        """Start a new request, superseding any pending one.

        Parameters
        ----------
        requested : rows the user asked for.
        fulfilled_now : rows already selected from the loaded page.
        cap : upper bound on the shortfall, e.g. the number of rows in the
              dataset that are not selected yet. ``None`` means no bound.
        """
        if requested < 1:
            raise ValueError(f"requested must be >= 1, got {requested}.")
        if not 0 <= fulfilled_now <= requested:
            raise ValueError(
                f"fulfilled_now must be within [0, {requested}], got {fulfilled_now}."
            )
        shortfall = requested - fulfilled_now
        if cap is not None:
            shortfall = min(shortfall, max(0, cap))
        self.requested = requested
        self.fulfilled = fulfilled_now
        self.remaining = shortfall

    def consume(self, count: int) -> None:
        """Record that ``count`` more rows were selected by draining."""
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}.")
        if count > self.remaining:
            raise ValueError(
                f"Cannot consume {count} rows; only {self.remaining} remaining."
            )
        self.remaining -= count
        self.fulfilled += count

    def cancel(self) -> None:
        """Drop the request. Counters of the finished request are kept."""
        self.remaining = 0

    def __repr__(self) -> str:
        return (
            f"SpanningSelectionRequest(state={self.state.value}, "
            f"remaining={self.remaining}, fulfilled={self.fulfilled}/{self.requested})"
        )


def drain_page(
    record_set: RecordSet,
    store: SelectionStore,
    limit: int,
) -> list[Record]:
    """Return up to ``limit`` unselected records of the page, in page order.

    Already-selected records are skipped and do not count against
    ``limit``. Does not mutate the store.
    """
    if limit <= 0:
        return []
    return store.unselected_on(record_set)[:limit]
