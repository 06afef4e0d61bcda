"""SelectionToolbar: page checkbox, "select N rows" popup and status line."""

from __future__ import annotations

import panel as pn

from .state import BrowserState


class SelectionToolbar:
    """Selection controls above the table.

    - "Select page" checkbox: select all / clear the current page
    - "Select multiple rows" card: text input + Select button that arms a
      spanning selection
    - Selected count, pending status, fetch errors with a retry button
    """

    def __init__(self, state: BrowserState) -> None:
        self.state = state
        self._syncing = False

        self.page_checkbox = pn.widgets.Checkbox(name="Select page", value=False, width=110)
        self.count_input = pn.widgets.TextInput(
            name="Rows to select", placeholder="e.g. 20", width=140,
        )
        self.select_button = pn.widgets.Button(name="Select", button_type="primary", width=90)
        self.stop_button = pn.widgets.Button(
            name="Stop", button_type="default", width=70, visible=False,
        )
        self.clear_all_button = pn.widgets.Button(
            name="Clear all", button_type="danger", width=90,
        )
        self.retry_button = pn.widgets.Button(name="Retry", width=70, visible=False)

        self.selected_label = pn.pane.Markdown(state.selected_label(), margin=(0, 10))
        self.status_alert = pn.pane.Alert("", alert_type="info", visible=False)
        self.error_alert = pn.pane.Alert("", alert_type="danger", visible=False)

        self.page_checkbox.param.watch(self._on_page_checkbox, "value")
        self.select_button.on_click(self._on_select)
        self.stop_button.on_click(lambda event: self.state.cancel_spanning_selection())
        self.clear_all_button.on_click(lambda event: self.state.clear_all())
        self.retry_button.on_click(self._on_retry)

        state.param.watch(self._on_all_selected, "all_on_page_selected")
        state.param.watch(self._on_counts, ["selected_count", "pending_remaining"])
        state.param.watch(self._on_status, "status_text")
        state.param.watch(self._on_error, "error_text")

    # --- widget → state ---

    def _on_page_checkbox(self, event) -> None:
        if self._syncing:
            return
        if event.new:
            self.state.select_all_on_page()
        else:
            self.state.clear_page()

    def _on_select(self, event) -> None:
        raw = self.count_input.value_input or self.count_input.value
        if self.state.request_spanning_selection(raw):
            self.count_input.value = ""

    async def _on_retry(self, event) -> None:
        await self.state.reload()

    # --- state → widget ---

    def _on_all_selected(self, event) -> None:
        self._syncing = True
        try:
            self.page_checkbox.value = event.new
        finally:
            self._syncing = False

    def _on_counts(self, *events) -> None:
        self.selected_label.object = self.state.selected_label()
        self.stop_button.visible = self.state.pending_remaining > 0

    def _on_status(self, event) -> None:
        self.status_alert.object = event.new
        self.status_alert.visible = bool(event.new)

    def _on_error(self, event) -> None:
        self.error_alert.object = event.new
        self.error_alert.visible = bool(event.new)
        self.retry_button.visible = bool(event.new)

    # --- layout ---

    def build_select_card(self) -> pn.Card:
        """Collapsible "Select Multiple Rows" popup."""
        return pn.Card(
            pn.Row(self.count_input, self.select_button, self.stop_button),
            title="Select Multiple Rows",
            collapsed=True,
            width=360,
            margin=0,
        )

    def build_panel(self) -> pn.viewable.Viewable:
        return pn.Column(
            pn.Row(
                self.page_checkbox,
                self.build_select_card(),
                pn.layout.HSpacer(),
                self.selected_label,
                self.clear_all_button,
                sizing_mode="stretch_width",
            ),
            self.status_alert,
            pn.Row(self.error_alert, self.retry_button, sizing_mode="stretch_width"),
            sizing_mode="stretch_width",
        )
