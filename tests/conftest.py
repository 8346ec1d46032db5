"""Shared test fixtures for paged-selection."""

import asyncio

import numpy as np
import pandas as pd
import pytest

from paged_selection.core.page import Page
from paged_selection.core.paging import global_position
from paged_selection.source.base import PagedDataSource, PageFetchError
from paged_selection.source.frame import FrameSource


PAGE_SIZE = 12


def make_record(i: int) -> dict:
    """Artwork-like record; IDs start at 1000 so they never equal positions."""
    return {
        "id": 1000 + i,
        "title": f"Artwork {i}",
        "place_of_origin": "France" if i % 2 else "Japan",
        "artist_display": f"Artist {i % 7}",
        "inscriptions": "signed" if i % 3 == 0 else None,
        "date_start": 1800 + i,
        "date_end": 1805 + i,
    }


def make_payload(page_number: int, page_size: int = PAGE_SIZE, total: int = 40) -> dict:
    """Page response in the artworks endpoint's shape."""
    start = global_position(page_number, 0, page_size)
    stop = min(total, start + page_size)
    return {
        "data": [make_record(i) for i in range(start, stop)],
        "pagination": {
            "total": total,
            "limit": page_size,
            "offset": start,
            "total_pages": max(1, -(-total // page_size)),
            "current_page": page_number,
        },
    }


def make_page(page_number: int, page_size: int = PAGE_SIZE, total: int = 40) -> Page:
    return Page.from_payload(make_payload(page_number, page_size, total), page_number, page_size)


def row_id(position: int):
    """ID of the row at a global position in the fixture collection."""
    return 1000 + position


@pytest.fixture
def page_one():
    """Page 1 of a 40-row collection (positions 0-11)."""
    return make_page(1)


@pytest.fixture
def page_two():
    """Page 2 of a 40-row collection (positions 12-23)."""
    return make_page(2)


@pytest.fixture
def collection_df():
    """40-row artworks DataFrame."""
    return pd.DataFrame([make_record(i) for i in range(40)])


@pytest.fixture
def frame_source(collection_df):
    return FrameSource(collection_df)


@pytest.fixture
def large_collection_df():
    """5000-row collection for memory-bound tests."""
    n = 5000
    rng = np.random.default_rng(42)
    return pd.DataFrame({
        "id": np.arange(n) + 1000,
        "title": [f"Artwork {i}" for i in range(n)],
        "date_start": rng.integers(1400, 1950, n),
    })


class ControlledSource(PagedDataSource):
    """Source whose responses are released (or failed) by the test."""

    def __init__(self, total: int = 40) -> None:
        self.total = total
        self.pending: dict[int, asyncio.Future] = {}
        self.requests: list[int] = []

    async def fetch_page(self, page_number, page_size):
        self.requests.append(page_number)
        fut = asyncio.get_running_loop().create_future()
        self.pending[page_number] = fut
        return await fut

    def release(self, page_number):
        self.pending.pop(page_number).set_result(
            make_page(page_number, PAGE_SIZE, self.total)
        )

    def fail(self, page_number, message="HTTP 503"):
        self.pending.pop(page_number).set_exception(PageFetchError(page_number, message))


async def settle():
    """Let pending tasks run up to their next await."""
    for _ in range(3):
        await asyncio.sleep(0)
