"""BrowserState: centralized reactive state for the record browser."""

from __future__ import annotations

import logging
from typing import Any, Hashable

import param
import pandas as pd

from ..config import BrowserConfig
from ..coordinator import SelectionCoordinator
from ..core.pagination import PageRequest, PaginationController
from ..core.validation import InvalidSelectionCount
from ..provider.base import DataProvider, FetchFailure

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to load records. Please try again."


class BrowserState(param.Parameterized):
    """Centralized reactive state for the browser.

    Wraps a ``SelectionCoordinator`` (selection logic) and a
    ``PaginationController`` (which page to fetch). Widgets read the
    published params below and call the command methods; they never
    touch the coordinator directly.

    Fetches are tagged with the ``PageRequest`` that issued them. A
    response that arrives after a newer navigation is discarded.
    """

    # --- Pagination (the requested window) ---
    offset = param.Integer(default=0, bounds=(0, None))
    page_size = param.Integer(default=12, bounds=(1, None))
    current_page = param.Integer(default=1, bounds=(1, None))

    # --- Current page (the last successfully loaded window) ---
    records = param.DataFrame(default=None, allow_None=True)
    record_ids = param.List(default=[])
    total_count = param.Integer(default=0)
    page_count = param.Integer(default=0)
    page_report = param.String(default="")
    has_previous = param.Boolean(default=False)
    has_next = param.Boolean(default=False)

    # --- Selection (derived from the coordinator) ---
    selected_count = param.Integer(default=0)
    pending_remaining = param.Integer(default=0)
    selected_ids_on_page = param.List(default=[])
    all_on_page_selected = param.Boolean(default=False)

    # --- Status ---
    loading = param.Boolean(default=False)
    error_text = param.String(default="")
    status_text = param.String(default="")

    def __init__(
        self,
        provider: DataProvider,
        config: BrowserConfig | None = None,
        coordinator: SelectionCoordinator | None = None,
        **params,
    ) -> None:
        config = config or BrowserConfig()
        params.setdefault("page_size", config.page_size)
        super().__init__(**params)
        self.provider = provider
        self.config = config
        self.columns: tuple[str, ...] = tuple(provider.columns) or config.display_fields
        self.coordinator = coordinator or SelectionCoordinator()
        self.controller = PaginationController(page_size=self.page_size, offset=self.offset)
        self.records = self.coordinator.record_set.to_frame(self.columns)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def start(self) -> bool:
        """Load the initial page."""
        return await self.go_to(self.controller.offset)

    async def go_to(self, offset: int, page_size: int | None = None) -> bool:
        """Navigate to ``offset`` (and optionally a new page size), then load."""
        return await self._navigate(self.controller.go_to(offset, page_size))

    async def _navigate(self, request: PageRequest) -> bool:
        self.param.update(
            offset=request.offset,
            page_size=request.page_size,
            current_page=request.page,
        )
        return await self.load(request)

    async def load(self, request: PageRequest) -> bool:
        """Fetch the page for ``request`` and install it if still current.

        Returns True when the page was applied. Failures leave the
        current page and the selection untouched.
        """
        self.param.update(loading=True, error_text="")
        try:
            record_set = await self.provider.fetch_page(request.page, request.page_size)
        except FetchFailure as e:
            if self.controller.is_current(request):
                logger.warning("Page %d failed to load: %s", request.page, e)
                self.param.update(loading=False, error_text=FETCH_ERROR_MESSAGE)
            else:
                logger.debug("Ignoring failure of superseded page %d request", request.page)
            return False
        except Exception as e:
            logger.exception("Unexpected error loading page %d", request.page)
            if self.controller.is_current(request):
                self.param.update(loading=False, error_text=f"Error: {e}")
            return False

        if not self.controller.is_current(request):
            logger.debug(
                "Discarding stale page %d (generation %d, latest %d)",
                request.page, request.generation, self.controller.generation,
            )
            return False

        self.coordinator.replace_record_set(record_set)
        self._publish(records_changed=True)
        self.loading = False
        return True

    async def next_page(self) -> bool:
        return await self._navigate(self.controller.next_page())

    async def previous_page(self) -> bool:
        return await self._navigate(self.controller.previous_page())

    async def first_page(self) -> bool:
        return await self._navigate(self.controller.first_page())

    async def last_page(self) -> bool:
        return await self._navigate(self.controller.last_page(self.total_count))

    async def go_to_page(self, page: int) -> bool:
        return await self._navigate(self.controller.go_to_page(page))

    async def set_page_size(self, page_size: int) -> bool:
        return await self._navigate(self.controller.set_page_size(page_size))

    async def reload(self) -> bool:
        """Retry the current window, e.g. after a failed fetch."""
        return await self._navigate(self.controller.reload())

    # ------------------------------------------------------------------
    # Selection commands
    # ------------------------------------------------------------------

    def toggle_record(self, record_id: Hashable) -> bool:
        selected = self.coordinator.toggle_record(record_id)
        self._publish()
        return selected

    def select_all_on_page(self) -> None:
        self.coordinator.select_all_on_page()
        self._publish()

    def clear_page(self) -> None:
        self.coordinator.clear_page()
        self._publish()

    def set_page_selection(self, record_ids: list) -> None:
        self.coordinator.set_page_selection(record_ids)
        self._publish()

    def request_spanning_selection(self, raw_count: Any) -> bool:
        """Arm a "select N rows" request. Returns False if N was rejected."""
        try:
            self.coordinator.request_spanning_selection(raw_count)
        except InvalidSelectionCount:
            self._publish()
            return False
        self._publish()
        return True

    def cancel_spanning_selection(self) -> None:
        self.coordinator.cancel_spanning_selection()
        self._publish()

    def clear_all(self) -> None:
        self.coordinator.clear_all()
        self._publish()

    def is_selected(self, record_id: Hashable) -> bool:
        return self.coordinator.store.is_selected(record_id)

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def _publish(self, records_changed: bool = False) -> None:
        """Push coordinator state into params in one batch."""
        coord = self.coordinator
        rs = coord.record_set
        updates: dict[str, Any] = dict(
            selected_count=coord.selected_count,
            pending_remaining=coord.pending_remaining,
            selected_ids_on_page=[r.id for r in coord.selected_on_current_page()],
            all_on_page_selected=coord.all_on_current_page_selected(),
            status_text=coord.status or "",
        )
        if records_changed:
            page_count = self.controller.page_count(rs.total_count)
            updates.update(
                records=rs.to_frame(self.columns),
                record_ids=rs.ids,
                total_count=rs.total_count,
                page_count=page_count,
                page_report=rs.page_report(),
                has_previous=rs.page > 1,
                has_next=not rs.is_last_page,
            )
        self.param.update(**updates)

    def selected_label(self) -> str:
        n = self.selected_count
        return f"Selected: {n} row{'' if n == 1 else 's'}"

    def records_frame(self) -> pd.DataFrame:
        if self.records is None:
            return self.coordinator.record_set.to_frame(self.columns)
        return self.records
