"""BrowserApp: assembles the Panel template and serves the record browser."""

from __future__ import annotations

import logging

import panel as pn

from ..config import BrowserConfig
from ..provider.base import DataProvider
from .state import BrowserState
from .table_pane import PaginatorControls, RecordTable
from .toolbar import SelectionToolbar

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Custom CSS
# ---------------------------------------------------------------------------

_BROWSER_CSS = """
:root, :host {
  --design-primary-color: #1a73e8;
  --panel-primary-color: #1a73e8;
  --mdc-theme-primary: #1a73e8;
}

/* ---- Pill buttons ---- */
.bk-btn-primary {
  border-radius: 24px !important;
  background-color: #1a73e8 !important;
  border-color: #1a73e8 !important;
  text-transform: none !important;
}
.bk-btn-danger {
  border-radius: 24px !important;
  background-color: transparent !important;
  border: 1px solid #d93025 !important;
  color: #d93025 !important;
  text-transform: none !important;
}

/* ---- Table ---- */
.tabulator .tabulator-row.tabulator-selected {
  background-color: #e8f0fe !important;
}
.tabulator .tabulator-header .tabulator-col-title {
  font-size: 11px;
  font-weight: 600;
  letter-spacing: 0.04em;
}
"""


def configure_panel() -> None:
    """Load the Tabulator extension and the app CSS once per process.

    Panel config is global, while a ``BrowserApp`` is built per session.
    """
    if _BROWSER_CSS in pn.config.raw_css:
        return
    pn.extension("tabulator", sizing_mode="stretch_width")
    pn.config.raw_css.append(_BROWSER_CSS)
    pn.config.loading_color = "#1a73e8"


class BrowserApp:
    """Record browser application for one session.

    Assembles a Panel MaterialTemplate with:
    - Toolbar: page checkbox, "select N rows" card, selected count
    - Main area: Tabulator grid of the current page
    - Paginator: page report, Previous / page links / Next, page size

    Each browser session gets its own ``BrowserApp`` (and therefore its
    own selection); the provider is shared.
    """

    def __init__(
        self,
        provider: DataProvider,
        config: BrowserConfig | None = None,
    ) -> None:
        configure_panel()

        self.provider = provider
        self.config = config or BrowserConfig()
        self.state = BrowserState(provider, config=self.config)
        self.table = RecordTable(self.state)
        self.paginator = PaginatorControls(self.state)
        self.toolbar = SelectionToolbar(self.state)

    def _build_template(self) -> pn.template.MaterialTemplate:
        """Build the Panel MaterialTemplate layout."""
        template = pn.template.MaterialTemplate(
            title=self.config.title,
            header_background="#fafafa",
            header_color="#202124",
        )
        template.main.append(pn.Column(
            self.toolbar.build_panel(),
            self.table.build_panel(),
            self.paginator.build_panel(),
            sizing_mode="stretch_width",
        ))
        return template

    def view(self) -> pn.template.MaterialTemplate:
        """Template for the current session; loads the first page on load."""
        template = self._build_template()
        pn.state.onload(self._on_session_load)
        return template

    def _on_session_load(self) -> None:
        logger.info("Session started, loading first page")
        pn.state.execute(self.state.start)

    @classmethod
    def serve(
        cls,
        provider: DataProvider,
        config: BrowserConfig | None = None,
        port: int = 0,
        show: bool = True,
        **kwargs,
    ) -> None:
        """Start the Panel server and optionally open the browser.

        Parameters
        ----------
        provider : DataProvider
            Page source shared by all sessions.
        config : BrowserConfig, optional
        port : int
            Port number. 0 = auto-assign.
        show : bool
            Whether to open the browser automatically.
        **kwargs
            Additional keyword arguments passed to pn.serve().
        """
        config = config or BrowserConfig()
        configure_panel()
        pn.serve(
            lambda: cls(provider, config).view(),
            port=port or 0,
            show=show,
            title=f"{config.title} Browser",
            **kwargs,
        )
