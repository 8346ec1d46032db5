"""Input validation with clear error messages for data source payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def validate_page_size(page_size: Any) -> int:
    """Validate that a page size is a positive integer.

    Returns the page size unchanged.
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise TypeError(
            f"page_size must be an integer, got {type(page_size).__name__}."
        )
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}.")
    return page_size


def validate_page_payload(payload: Any) -> Mapping:
    """Validate a page response of the form ``{data: [...], pagination: {...}}``.

    Every record must be a mapping carrying an ``id``; ids must be unique
    within the page and ``pagination.total`` must be a non-negative integer.
    Returns the payload unchanged.
    """
    if not isinstance(payload, Mapping):
        raise TypeError(
            f"Expected a JSON object for the page response, got {type(payload).__name__}."
        )
    data = payload.get("data")
    if not isinstance(data, list):
        raise ValueError(
            "Page response is missing a 'data' list. "
            f"Top-level keys present: {sorted(payload)[:5]}"
        )
    pagination = payload.get("pagination")
    if not isinstance(pagination, Mapping):
        raise ValueError("Page response is missing a 'pagination' object.")

    total = pagination.get("total")
    if isinstance(total, bool) or not isinstance(total, int):
        raise ValueError(
            f"pagination.total must be an integer, got {total!r}."
        )
    if total < 0:
        raise ValueError(f"pagination.total must be non-negative, got {total}.")

    seen = set()
    dupes = []
    for i, record in enumerate(data):
        if not isinstance(record, Mapping):
            raise TypeError(
                f"Record {i} in page data is a {type(record).__name__}, expected an object."
            )
        if record.get("id") is None:
            raise ValueError(f"Record {i} in page data has no 'id'.")
        rid = record["id"]
        if rid in seen:
            dupes.append(rid)
        seen.add(rid)
    if dupes:
        raise ValueError(
            f"Row IDs must be unique within a page. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    return payload
