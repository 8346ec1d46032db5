"""PagedDataSource: base class for anything that serves one page at a time."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.page import Page


class PageFetchError(RuntimeError):
    """A page could not be loaded (transport error, bad status or bad payload)."""

    def __init__(self, page_number: int, message: str) -> None:
        super().__init__(f"Failed to fetch page {page_number}: {message}")
        self.page_number = page_number


class PagedDataSource(ABC):
    """Serves a remote collection one page at a time.

    Implementations never hold more than the requested page and must raise
    PageFetchError for every failure so callers have a single error type.
    """

    @abstractmethod
    async def fetch_page(self, page_number: int, page_size: int) -> Page:
        """Fetch one page (page numbers are one-based)."""
        ...

    async def aclose(self) -> None:
        """Release any resources held by the source."""
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
