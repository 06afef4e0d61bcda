"""Panel dashboard for browsing a paged dataset with persistent selection."""

from .state import BrowserState
from .app import BrowserApp

__all__ = ["BrowserState", "BrowserApp"]
