"""DataFrameProvider: serves pages from an in-memory pandas DataFrame."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable

import pandas as pd

from ..core.record import RecordSet
from .base import DataProvider, FetchFailure, check_page_args

logger = logging.getLogger(__name__)


class DataFrameProvider(DataProvider):
    """Page source backed by a DataFrame whose index holds the record IDs.

    Parameters
    ----------
    frame : pd.DataFrame
        One row per record. Index values must be unique.
    delay : float
        Seconds to sleep before answering, to emulate network latency.
    fail_pages : iterable of int, optional
        Pages that raise ``FetchFailure`` instead of answering.
    """

    def __init__(
        self,
        frame: pd.DataFrame,
        delay: float = 0.0,
        fail_pages: Iterable[int] | None = None,
    ) -> None:
        if not isinstance(frame, pd.DataFrame):
            raise TypeError(
                f"Expected a pandas DataFrame, got {type(frame).__name__}."
            )
        if frame.index.has_duplicates:
            dupes = frame.index[frame.index.duplicated()].unique().tolist()
            raise ValueError(f"Record IDs must be unique. Found duplicates: {dupes[:5]}")
        self.frame = frame
        self.delay = delay
        self.fail_pages = set(fail_pages or ())
        self.columns = tuple(str(c) for c in frame.columns)
        self.calls: list[tuple[int, int]] = []

    @classmethod
    def from_csv(cls, path, index_col: str = "id", **kwargs) -> DataFrameProvider:
        frame = pd.read_csv(path).set_index(index_col)
        return cls(frame, **kwargs)

    @property
    def total_count(self) -> int:
        return len(self.frame)

    async def fetch_page(self, page: int, page_size: int) -> RecordSet:
        check_page_args(page, page_size)
        self.calls.append((page, page_size))
        if self.delay:
            await asyncio.sleep(self.delay)
        if page in self.fail_pages:
            logger.warning("Simulated failure for page %d", page)
            raise FetchFailure(f"Page {page} is unavailable.", page=page)

        start = (page - 1) * page_size
        chunk = self.frame.iloc[start:start + page_size]
        # NaN is not a display value; the table shows blanks for None.
        chunk = chunk.astype(object).where(chunk.notna(), None)
        return RecordSet.from_frame(
            chunk, total_count=len(self.frame), page=page, page_size=page_size,
        )
