"""Launch the paged-selection browser against the artworks API (or demo data)."""

import argparse
import logging

import numpy as np
import pandas as pd

import paged_selection as ps


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


def demo_frame(n_rows: int = 250) -> pd.DataFrame:
    """Synthetic artworks table for running without network access."""
    rng = np.random.default_rng(42)
    start = rng.integers(1400, 1950, n_rows)
    return pd.DataFrame({
        "id": np.arange(1000, 1000 + n_rows),
        "title": [f"Untitled {i}" for i in range(n_rows)],
        "place_of_origin": rng.choice(["France", "Japan", "United States", "Italy"], n_rows),
        "artist_display": rng.choice(["Unknown", "Workshop", "Anonymous"], n_rows),
        "inscriptions": rng.choice(["signed l.r.", "", None], n_rows),
        "date_start": start,
        "date_end": start + rng.integers(0, 10, n_rows),
    })


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--port", type=int, default=0, help="Port number (0 = auto).")
    parser.add_argument("--page-size", type=int, default=None, help="Rows per page.")
    parser.add_argument("--demo", action="store_true", help="Serve synthetic data offline.")
    parser.add_argument("--no-show", action="store_true", help="Don't open a browser.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    configure_logging(args.verbose)

    overrides = {"page_size": args.page_size} if args.page_size else {}
    config = ps.BrowserConfig.from_env(**overrides)
    source = ps.FrameSource(demo_frame()) if args.demo else None

    print("Launching paged-selection browser...")
    ps.explore(config=config, source=source, port=args.port, show=not args.no_show)


if __name__ == "__main__":
    main()
