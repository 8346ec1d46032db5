"""FrameSource: serve pages from an in-memory DataFrame (offline demo and tests)."""

from __future__ import annotations

import pandas as pd

from ..core.page import Page
from ..core.paging import page_count, page_offset
from ..core.validation import validate_page_size
from .base import PagedDataSource, PageFetchError


class FrameSource(PagedDataSource):
    """Pages over a DataFrame, producing the same payload shape as the API.

    Row IDs come from an ``id`` column when present, otherwise from the index.
    """

    def __init__(self, df: pd.DataFrame) -> None:
        if not isinstance(df, pd.DataFrame):
            raise TypeError(
                f"Expected a pandas DataFrame, got {type(df).__name__}."
            )
        if "id" not in df.columns:
            df = df.rename_axis("id").reset_index()
        if df["id"].duplicated().any():
            dupes = df.loc[df["id"].duplicated(), "id"].unique().tolist()
            raise ValueError(f"Row IDs must be unique. Found duplicates: {dupes[:5]}")
        self._df = df.reset_index(drop=True)

    @property
    def total_records(self) -> int:
        return len(self._df)

    def build_payload(self, page_number: int, page_size: int) -> dict:
        """Return ``{data, pagination}`` for one page, as the HTTP endpoint would."""
        validate_page_size(page_size)
        start = page_offset(page_number, page_size)
        chunk = self._df.iloc[start:start + page_size]
        # NaN → None so records look like decoded JSON
        chunk = chunk.astype(object).where(chunk.notna(), None)
        return {
            "data": chunk.to_dict(orient="records"),
            "pagination": {
                "total": self.total_records,
                "limit": page_size,
                "offset": start,
                "total_pages": page_count(self.total_records, page_size),
                "current_page": page_number,
            },
        }

    async def fetch_page(self, page_number: int, page_size: int) -> Page:
        if page_number < 1:
            raise PageFetchError(page_number, "page numbers start at 1")
        payload = self.build_payload(page_number, page_size)
        return Page.from_payload(payload, page_number, page_size)
