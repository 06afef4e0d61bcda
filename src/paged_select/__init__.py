"""paged-select: record selection that persists across a lazily paged dataset."""

from ._version import __version__
from .config import BrowserConfig
from .coordinator import SelectionCoordinator
from .core import (
    Record,
    RecordSet,
    SelectionStore,
    SpanningSelectionRequest,
    PaginationController,
    InvalidSelectionCount,
)
from .provider import DataProvider, FetchFailure, DataFrameProvider, ArticProvider


def browse(provider=None, config=None, port=0, show=True):
    """Launch the record browser in a web browser.

    Parameters
    ----------
    provider : DataProvider, optional
        Page source. Defaults to the Art Institute of Chicago artworks API.
    config : BrowserConfig, optional
        Defaults to ``BrowserConfig.from_env()``.
    port : int
        Port number. 0 = auto-assign.
    show : bool
        Whether to open the browser automatically.
    """
    from .dashboard.app import BrowserApp

    config = config or BrowserConfig.from_env()
    if provider is None:
        provider = ArticProvider(config)
    BrowserApp.serve(provider, config=config, port=port, show=show)


__all__ = [
    "__version__",
    "browse",
    "BrowserConfig",
    "SelectionCoordinator",
    "Record",
    "RecordSet",
    "SelectionStore",
    "SpanningSelectionRequest",
    "PaginationController",
    "InvalidSelectionCount",
    "DataProvider",
    "FetchFailure",
    "DataFrameProvider",
    "ArticProvider",
]
