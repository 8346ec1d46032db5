"""BrowserConfig: data source and paging settings, overridable from the environment."""

from __future__ import annotations

import os
from typing import Mapping

import param


DEFAULT_API_URL = "https://api.artic.edu/api/v1/artworks"
DEFAULT_PAGE_SIZE = 12

# Fields requested from the artworks endpoint (and shown in the table)
DEFAULT_FIELDS = [
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
]

ENV_PREFIX = "PAGED_SELECTION_"


class BrowserConfig(param.Parameterized):
    """Settings shared by the data source, the session and the dashboard."""

    api_url = param.String(default=DEFAULT_API_URL, doc="Paged collection endpoint")
    page_size = param.Integer(default=DEFAULT_PAGE_SIZE, bounds=(1, 100))
    timeout = param.Number(default=10.0, bounds=(0, None), doc="Request timeout (s)")
    fields = param.List(default=list(DEFAULT_FIELDS), item_type=str)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> BrowserConfig:
        """Build a config from ``PAGED_SELECTION_*`` environment variables.

        Explicit keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        params: dict = {}

        url = env.get(f"{ENV_PREFIX}API_URL", "").strip()
        if url:
            params["api_url"] = url

        raw_size = env.get(f"{ENV_PREFIX}PAGE_SIZE", "").strip()
        if raw_size:
            try:
                params["page_size"] = int(raw_size)
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}PAGE_SIZE must be an integer, got {raw_size!r}."
                ) from None

        raw_timeout = env.get(f"{ENV_PREFIX}TIMEOUT", "").strip()
        if raw_timeout:
            try:
                params["timeout"] = float(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}TIMEOUT must be a number of seconds, got {raw_timeout!r}."
                ) from None

        params.update(overrides)
        return cls(**params)
