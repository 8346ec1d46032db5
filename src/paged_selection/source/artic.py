"""ArtworkSource: the Art Institute of Chicago artworks endpoint over httpx."""

from __future__ import annotations

import logging

import httpx

from ..config import BrowserConfig
from ..core.page import Page
from ..core.validation import validate_page_size
from .base import PagedDataSource, PageFetchError


logger = logging.getLogger(__name__)


class ArtworkSource(PagedDataSource):
    """Fetches ``GET {api_url}?page=N&limit=SIZE&fields=...`` pages.

    The response is expected as ``{data: [...], pagination: {total, ...}}``.
    Creates and owns an ``httpx.AsyncClient`` unless one is passed in.
    """

    def __init__(
        self,
        config: BrowserConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config if config is not None else BrowserConfig()
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(
            timeout=self.config.timeout,
        )

    def _params(self, page_number: int, page_size: int) -> dict:
        params = {"page": page_number, "limit": page_size}
        if self.config.fields:
            params["fields"] = ",".join(self.config.fields)
        return params

    async def fetch_page(self, page_number: int, page_size: int) -> Page:
        validate_page_size(page_size)
        if page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {page_number}.")

        logger.debug("Requesting page %d (size %d) from %s",
                     page_number, page_size, self.config.api_url)
        try:
            response = await self._client.get(
                self.config.api_url,
                params=self._params(page_number, page_size),
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise PageFetchError(
                page_number, f"HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise PageFetchError(page_number, f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            raise PageFetchError(page_number, f"invalid JSON response ({exc})") from exc

        try:
            return Page.from_payload(payload, page_number, page_size)
        except (TypeError, ValueError) as exc:
            raise PageFetchError(page_number, f"malformed payload ({exc})") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
