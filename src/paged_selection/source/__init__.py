"""Paged data sources."""

from .base import PagedDataSource, PageFetchError
from .artic import ArtworkSource
from .frame import FrameSource

__all__ = ["PagedDataSource", "PageFetchError", "ArtworkSource", "FrameSource"]
