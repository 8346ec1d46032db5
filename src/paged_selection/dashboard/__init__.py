"""Panel rendering surface for the selection session."""

from .app import BrowserApp, serve
from .table_pane import PageTable

__all__ = ["BrowserApp", "PageTable", "serve"]
