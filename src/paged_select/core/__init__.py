"""Selection-state core: records, selection store, spanning requests, paging."""

from .record import Record, RecordSet
from .selection_store import SelectionStore
from .spanning import SpanState, SpanningSelectionRequest, drain_page
from .pagination import PageRequest, PaginationController
from .validation import InvalidSelectionCount, parse_selection_count

__all__ = [
    "Record",
    "RecordSet",
    "SelectionStore",
    "SpanState",
    "SpanningSelectionRequest",
    "drain_page",
    "PageRequest",
    "PaginationController",
    "InvalidSelectionCount",
    "parse_selection_count",
]
