"""Row and Page: the only materialized slice of the virtual collection."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Iterable

import pandas as pd

from .paging import global_position
from .validation import validate_page_payload, validate_page_size


@dataclass(frozen=True)
class Row:
    """A loaded row with its position in the whole collection."""

    id: Hashable
    global_position: int
    record: Mapping = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class Page:
    """One loaded page. Superseded wholesale on every navigation."""

    page_number: int
    page_size: int
    rows: tuple[Row, ...] = ()
    total_records: int = 0

    @classmethod
    def empty(cls, page_number: int, page_size: int, total_records: int = 0) -> Page:
        """A page with no rows (used when a fetch fails)."""
        return cls(page_number=page_number, page_size=page_size, total_records=total_records)

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        page_number: int,
        page_size: int,
    ) -> Page:
        """Build a Page from a ``{data, pagination}`` response.

        Global positions come from the requested page number, not from the
        response, so the rows line up with the page the caller asked for.
        """
        validate_page_size(page_size)
        payload = validate_page_payload(payload)
        rows = tuple(
            Row(
                id=record["id"],
                global_position=global_position(page_number, i, page_size),
                record=dict(record),
            )
            for i, record in enumerate(payload["data"])
        )
        return cls(
            page_number=page_number,
            page_size=page_size,
            rows=rows,
            total_records=int(payload["pagination"]["total"]),
        )

    @property
    def ids(self) -> list:
        return [row.id for row in self.rows]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def to_frame(
        self,
        columns: list[str] | None = None,
        formatters: Mapping[str, Callable[[Any], Any]] | None = None,
    ) -> pd.DataFrame:
        """Return the page's records as a DataFrame in page order."""
        return records_frame(self.rows, columns, formatters)


def records_frame(
    rows: Iterable,
    columns: list[str] | None = None,
    formatters: Mapping[str, Callable[[Any], Any]] | None = None,
) -> pd.DataFrame:
    """Build a DataFrame from anything with ``id`` and ``record`` attributes.

    The ``id`` column is always first. Missing fields become None.
    ``formatters`` are applied per value before the frame is built, so they
    see the raw record value rather than pandas' missing-value marker.
    """
    columns = [c for c in (columns or []) if c != "id"]
    formatters = formatters or {}
    records = []
    for row in rows:
        record = {"id": row.id}
        for c in columns:
            value = row.record.get(c)
            record[c] = formatters[c](value) if c in formatters else value
        records.append(record)
    return pd.DataFrame(records, columns=["id", *columns])
