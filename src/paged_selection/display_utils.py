"""Display utilities for column titles and cell values."""

from __future__ import annotations

from typing import Any

import pandas as pd

INSCRIPTIONS_NA = "N/A"

_ACRONYMS = {"id", "url", "api"}

# Titles that don't follow from the field name
_TITLE_OVERRIDES = {
    "artist_display": "Artist",
    "date_start": "Start Date",
    "date_end": "End Date",
}


def prettify_name(name: str) -> str:
    """Convert snake_case field names to Title Case with smart acronyms.

    Examples::

        prettify_name("place_of_origin")  # -> "Place Of Origin"
        prettify_name("image_id")         # -> "Image ID"
        prettify_name("artist_display")   # -> "Artist"
    """
    if name in _TITLE_OVERRIDES:
        return _TITLE_OVERRIDES[name]
    words = name.replace("_", " ").split()
    return " ".join(
        w.upper() if w.lower() in _ACRONYMS else w.capitalize()
        for w in words
    )


def format_inscriptions(value: Any) -> str:
    """Blank or missing (None, NaN, NA) inscriptions display as 'N/A'."""
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return INSCRIPTIONS_NA
    text = str(value).strip()
    return text or INSCRIPTIONS_NA
