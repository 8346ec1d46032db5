"""paged-selection: select "first N" rows across a lazily paged remote collection."""

from ._version import __version__
from .config import BrowserConfig
from .core import (
    CheckboxState,
    FirstN,
    InvalidRule,
    OverrideSets,
    Page,
    Row,
    global_position,
    is_selected,
    total_selected,
)
from .session import (
    ApplyRule,
    ChangePage,
    DeselectAllOnPage,
    ReplacePageSelection,
    SelectAllOnPage,
    SelectionSession,
    ToggleSelectAll,
)
from .source import ArtworkSource, FrameSource, PagedDataSource, PageFetchError


def explore(config=None, source=None, port=0, show=True):
    """Launch the paged table browser.

    Parameters
    ----------
    config : BrowserConfig, optional
        Endpoint and paging settings. Defaults to ``BrowserConfig.from_env()``.
    source : PagedDataSource, optional
        Where pages come from. Defaults to the artworks endpoint in ``config``.
    port : int
        Port number. 0 = auto-assign.
    show : bool
        Whether to open the browser automatically.
    """
    from .dashboard.app import serve

    serve(config=config, source=source, port=port, show=show)


__all__ = [
    "__version__",
    "explore",
    "BrowserConfig",
    "CheckboxState",
    "FirstN",
    "InvalidRule",
    "OverrideSets",
    "Page",
    "Row",
    "global_position",
    "is_selected",
    "total_selected",
    "ApplyRule",
    "ChangePage",
    "DeselectAllOnPage",
    "ReplacePageSelection",
    "SelectAllOnPage",
    "SelectionSession",
    "ToggleSelectAll",
    "ArtworkSource",
    "FrameSource",
    "PagedDataSource",
    "PageFetchError",
]
