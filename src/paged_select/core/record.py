"""Record and RecordSet: one page of the remote dataset.

A RecordSet is immutable. Every fetch produces a new one and the old one
is dropped, so anything derived from it (the selected subset, the page
report) is recomputed rather than patched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator, Mapping, Sequence

import pandas as pd


@dataclass(frozen=True)
class Record:
    """One item of the dataset, identified by a stable id."""

    id: Hashable
    attributes: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)


@dataclass(frozen=True)
class RecordSet:
    """The records of the currently displayed page plus the dataset size.

    ``page`` is 1-based. ``page_size`` is the size that was requested,
    which can be larger than ``len(records)`` on the last page.
    """

    records: tuple[Record, ...] = ()
    total_count: int = 0
    page: int = 1
    page_size: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        ids = [r.id for r in self.records]
        if len(set(ids)) != len(ids):
            raise ValueError("Record IDs on a page must be unique.")
        if self.total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {self.total_count}.")
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}.")
        if self.page_size == 0:
            object.__setattr__(self, "page_size", len(self.records))

    @classmethod
    def empty(cls) -> RecordSet:
        """The state before the first page has loaded."""
        return cls()

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        total_count: int,
        page: int = 1,
        page_size: int = 0,
    ) -> RecordSet:
        """Build a RecordSet from a DataFrame indexed by record id."""
        records = tuple(
            Record(id=idx, attributes=row)
            for idx, row in zip(frame.index.tolist(), frame.to_dict("records"))
        )
        return cls(records=records, total_count=total_count, page=page, page_size=page_size)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    @property
    def ids(self) -> list:
        """Record IDs in page order."""
        return [r.id for r in self.records]

    @property
    def id_set(self) -> frozenset:
        return frozenset(r.id for r in self.records)

    def get(self, record_id: Hashable) -> Record | None:
        """Return the record with this id, or None if it is not on the page."""
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def subset(self, ids: Sequence[Hashable]) -> list[Record]:
        """Records of this page whose id is in ``ids``, in page order."""
        wanted = set(ids)
        return [r for r in self.records if r.id in wanted]

    @property
    def first_index(self) -> int:
        """1-based dataset position of the first record (0 if empty)."""
        if not self.records:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        """1-based dataset position of the last record (0 if empty)."""
        if not self.records:
            return 0
        return self.first_index + len(self.records) - 1

    @property
    def is_last_page(self) -> bool:
        """True when no records exist beyond this page."""
        if not self.records:
            return True
        return self.last_index >= self.total_count

    def page_report(self) -> str:
        """Human-readable range report for the paginator."""
        return (
            f"Showing {self.first_index} to {self.last_index} "
            f"of {self.total_count} entries"
        )

    def to_frame(self, columns: Sequence[str] | None = None) -> pd.DataFrame:
        """Tabular view for the table widget, indexed by record id."""
        rows = [dict(r.attributes) for r in self.records]
        frame = pd.DataFrame(rows, index=pd.Index(self.ids, name="id"))
        if columns is not None:
            frame = frame.reindex(columns=list(columns))
        return frame
