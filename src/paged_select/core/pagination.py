"""PaginationController: offset/page-size state and fetch request tagging.

Every navigation issues a new ``PageRequest`` with a higher generation.
A fetch result is applied only if its request is still the latest one,
which is how responses that complete out of order are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageRequest:
    """Identity of one fetch: which page, at which size, issued when."""

    generation: int
    page: int
    page_size: int
    offset: int


class PaginationController:
    """Tracks the visible window of the dataset.

    ``current_page`` is 1-based: ``offset // page_size + 1``.
    """

    def __init__(self, page_size: int = 12, offset: int = 0) -> None:
        _check_page_size(page_size)
        _check_offset(offset)
        self.page_size = page_size
        # Keep the offset aligned to a page boundary.
        self.offset = (offset // page_size) * page_size
        self._generation = 0
        self._latest: PageRequest | None = None

    @property
    def current_page(self) -> int:
        return self.offset // self.page_size + 1

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def latest_request(self) -> PageRequest | None:
        return self._latest

    def go_to(self, new_offset: int, new_page_size: int | None = None) -> PageRequest:
        """Move to a new window and return the request to fetch it.

        A page-size change repartitions the same dataset: the new offset is
        the start of the page that contains ``new_offset``.
        """
        page_size = self.page_size if new_page_size is None else new_page_size
        _check_page_size(page_size)
        _check_offset(new_offset)

        self.page_size = page_size
        self.offset = (new_offset // page_size) * page_size
        self._generation += 1
        self._latest = PageRequest(
            generation=self._generation,
            page=self.current_page,
            page_size=self.page_size,
            offset=self.offset,
        )
        return self._latest

    def reload(self) -> PageRequest:
        """Re-issue the current window (e.g. retry after a failed fetch)."""
        return self.go_to(self.offset)

    def go_to_page(self, page: int) -> PageRequest:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}.")
        return self.go_to((page - 1) * self.page_size)

    def next_page(self) -> PageRequest:
        return self.go_to(self.offset + self.page_size)

    def previous_page(self) -> PageRequest:
        return self.go_to(max(0, self.offset - self.page_size))

    def first_page(self) -> PageRequest:
        return self.go_to(0)

    def last_page(self, total_count: int) -> PageRequest:
        return self.go_to_page(self.page_count(total_count) or 1)

    def set_page_size(self, page_size: int) -> PageRequest:
        return self.go_to(self.offset, page_size)

    def page_count(self, total_count: int) -> int:
        """Number of pages needed for ``total_count`` records."""
        if total_count <= 0:
            return 0
        return -(-total_count // self.page_size)

    def is_current(self, request: PageRequest) -> bool:
        """True only for the most recently issued request."""
        return self._latest is not None and request.generation == self._generation

    def __repr__(self) -> str:
        return (
            f"PaginationController(page={self.current_page}, "
            f"page_size={self.page_size}, generation={self._generation})"
        )


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}.")


def _check_offset(offset: int) -> None:
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}.")
