"""SelectionSession and the command messages it consumes."""

from .commands import (
    ApplyRule,
    ChangePage,
    Command,
    DeselectAllOnPage,
    ReplacePageSelection,
    SelectAllOnPage,
    ToggleSelectAll,
)
from .notices import Notice, NoticeChannel
from .state import PageView, RowView, SelectionSession

__all__ = [
    "ApplyRule",
    "ChangePage",
    "Command",
    "DeselectAllOnPage",
    "ReplacePageSelection",
    "SelectAllOnPage",
    "ToggleSelectAll",
    "Notice",
    "NoticeChannel",
    "PageView",
    "RowView",
    "SelectionSession",
]
