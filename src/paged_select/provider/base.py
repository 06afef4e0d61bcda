"""DataProvider: async page source consumed by the dashboard."""

from __future__ import annotations

import abc

from ..core.record import RecordSet


class FetchFailure(Exception):
    """A page could not be fetched (network error, bad status, bad payload)."""

    def __init__(self, message: str, page: int | None = None) -> None:
        self.page = page
        super().__init__(message)


class DataProvider(abc.ABC):
    """Fetches one page of the dataset at a time.

    Implementations raise ``FetchFailure`` for every failure so callers
    only need one ``except`` clause.
    """

    #: Attribute names shown as table columns, in display order.
    columns: tuple[str, ...] = ()

    @abc.abstractmethod
    async def fetch_page(self, page: int, page_size: int) -> RecordSet:
        """Return page ``page`` (1-based) of ``page_size`` records."""

    async def aclose(self) -> None:
        """Release any held resources."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


def check_page_args(page: int, page_size: int) -> None:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}.")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}.")
