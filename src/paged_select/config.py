"""BrowserConfig: immutable settings for the browser and its default provider."""

from __future__ import annotations

import os
from dataclasses import dataclass

ARTIC_API_URL = "https://api.artic.edu/api/v1/artworks"

ARTWORK_FIELDS = (
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
)


@dataclass(frozen=True)
class BrowserConfig:
    """Configuration for the record browser (immutable).

    Attributes:
        api_url: Endpoint answering ``?page=&limit=`` with ``data`` and
            ``pagination.total``.
        fields: Record fields requested from the API. ``id`` is required.
        page_size: Rows per page on first load.
        page_size_options: Page sizes offered in the paginator.
        timeout_seconds: HTTP timeout per page fetch.
        title: Dashboard title.
        user_agent: Sent with every API request.

    Example:
        >>> config = BrowserConfig(page_size=24)
        >>> config.page_size
        24
    """

    api_url: str = ARTIC_API_URL
    fields: tuple[str, ...] = ARTWORK_FIELDS
    page_size: int = 12
    page_size_options: tuple[int, ...] = (12, 24, 48)
    timeout_seconds: float = 10.0
    title: str = "Artworks"
    user_agent: str = "paged-select"

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "page_size_options", tuple(self.page_size_options))
        if "id" not in self.fields:
            raise ValueError("fields must include 'id'.")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}.")
        if any(size < 1 for size in self.page_size_options):
            raise ValueError("page_size_options must all be >= 1.")
        if self.page_size not in self.page_size_options:
            object.__setattr__(
                self,
                "page_size_options",
                tuple(sorted({*self.page_size_options, self.page_size})),
            )
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be > 0, got {self.timeout_seconds}."
            )

    @property
    def display_fields(self) -> tuple[str, ...]:
        """Fields shown as table columns (everything except ``id``)."""
        return tuple(f for f in self.fields if f != "id")

    @classmethod
    def from_env(cls, **overrides) -> BrowserConfig:
        """Build a config from ``PAGED_SELECT_*`` environment variables.

        Explicit keyword overrides win over the environment.
        """
        values: dict = {}
        if "PAGED_SELECT_API_URL" in os.environ:
            values["api_url"] = os.environ["PAGED_SELECT_API_URL"]
        if "PAGED_SELECT_PAGE_SIZE" in os.environ:
            values["page_size"] = int(os.environ["PAGED_SELECT_PAGE_SIZE"])
        if "PAGED_SELECT_TIMEOUT" in os.environ:
            values["timeout_seconds"] = float(os.environ["PAGED_SELECT_TIMEOUT"])
        values.update(overrides)
        return cls(**values)
