"""RecordTable and PaginatorControls: the page grid and its navigation bar."""

from __future__ import annotations

import panel as pn

from ..display_utils import column_titles
from .state import BrowserState

# Number of numbered page buttons shown around the current page.
PAGE_LINK_WINDOW = 5


class RecordTable:
    """Tabulator grid showing the current page with checkbox selection.

    The grid holds only the loaded page; paging happens in
    ``PaginatorControls``. Checkbox changes are forwarded to the state as
    the exact selection of this page, and the state's derived selection
    is pushed back whenever the page or the selection changes.
    """

    def __init__(self, state: BrowserState) -> None:
        self.state = state
        self._syncing = False

        self.table = pn.widgets.Tabulator(
            value=state.records_frame(),
            titles=column_titles(state.columns),
            selectable="checkbox",
            show_index=False,
            disabled=True,
            pagination=None,
            layout="fit_data_stretch",
            sizing_mode="stretch_width",
            min_height=200,
            theme="simple",
        )

        self.table.param.watch(self._on_table_selection, "selection")
        state.param.watch(self._on_records, "records")
        state.param.watch(self._on_selection, "selected_ids_on_page")
        state.param.watch(self._on_loading, "loading")

    def _on_table_selection(self, event) -> None:
        """Widget → state: checkbox rows become the page selection."""
        if self._syncing:
            return
        ids = self.state.record_ids
        selected = [ids[i] for i in event.new if 0 <= i < len(ids)]
        self.state.set_page_selection(selected)

    def _on_records(self, event) -> None:
        self._syncing = True
        try:
            self.table.value = self.state.records_frame()
            self.table.selection = self._selected_positions()
        finally:
            self._syncing = False

    def _on_selection(self, event) -> None:
        """State → widget: reflect the derived selection of this page."""
        positions = self._selected_positions()
        if sorted(self.table.selection) == positions:
            return
        self._syncing = True
        try:
            self.table.selection = positions
        finally:
            self._syncing = False

    def _on_loading(self, event) -> None:
        self.table.loading = event.new

    def _selected_positions(self) -> list[int]:
        selected = set(self.state.selected_ids_on_page)
        return [i for i, rid in enumerate(self.state.record_ids) if rid in selected]

    def build_panel(self) -> pn.viewable.Viewable:
        return self.table


class PaginatorControls:
    """Previous / page links / Next bar with a page-size picker and report."""

    def __init__(self, state: BrowserState) -> None:
        self.state = state

        self.prev_button = pn.widgets.Button(name="Previous", width=90, disabled=True)
        self.next_button = pn.widgets.Button(name="Next", width=90, disabled=True)
        self.page_size_select = pn.widgets.Select(
            name="Rows per page",
            options=list(state.config.page_size_options),
            value=state.page_size,
            width=110,
        )
        self.report = pn.pane.Str("", styles={"color": "#5f6368", "font-size": "12px"})
        self.page_links = pn.Row(margin=0)

        self.prev_button.on_click(self._on_prev)
        self.next_button.on_click(self._on_next)
        self.page_size_select.param.watch(self._on_page_size, "value")
        state.param.watch(
            self._refresh,
            ["page_report", "has_previous", "has_next", "current_page", "page_count", "loading"],
        )

    async def _on_prev(self, event) -> None:
        await self.state.previous_page()

    async def _on_next(self, event) -> None:
        await self.state.next_page()

    async def _on_page_size(self, event) -> None:
        if event.new != self.state.page_size:
            await self.state.set_page_size(event.new)

    def _refresh(self, *events) -> None:
        state = self.state
        self.report.object = state.page_report
        self.prev_button.disabled = state.loading or not state.has_previous
        self.next_button.disabled = state.loading or not state.has_next
        self.page_links.objects = self._build_page_links()

    def _page_window(self) -> list[int]:
        """Page numbers to show as links, centred on the current page."""
        count = self.state.page_count
        if count <= 0:
            return []
        current = min(self.state.current_page, count)
        start = max(1, current - PAGE_LINK_WINDOW // 2)
        end = min(count, start + PAGE_LINK_WINDOW - 1)
        start = max(1, end - PAGE_LINK_WINDOW + 1)
        return list(range(start, end + 1))

    def _build_page_links(self) -> list[pn.widgets.Button]:
        buttons = []
        for number in self._page_window():
            button = pn.widgets.Button(
                name=str(number),
                width=40,
                button_type="primary" if number == self.state.current_page else "default",
                disabled=self.state.loading,
            )
            button.on_click(self._make_page_handler(number))
            buttons.append(button)
        return buttons

    def _make_page_handler(self, number: int):
        async def handler(event) -> None:
            await self.state.go_to_page(number)
        return handler

    def build_panel(self) -> pn.viewable.Viewable:
        return pn.Row(
            self.report,
            pn.layout.HSpacer(),
            self.prev_button,
            self.page_links,
            self.next_button,
            self.page_size_select,
            sizing_mode="stretch_width",
        )
