"""Page arithmetic: (page number, in-page position) → global position.

Pages are one-based, positions inside a page are zero-based, and global
positions are zero-based offsets into the whole (never loaded) collection.
"""

from __future__ import annotations

from .validation import validate_page_size


def global_position(page_number: int, position_in_page: int, page_size: int) -> int:
    """Return the zero-based offset of a row within the virtual collection."""
    return (page_number - 1) * page_size + position_in_page


def page_offset(page_number: int, page_size: int) -> int:
    """Global position of the first row on a page."""
    return global_position(page_number, 0, page_size)


def page_count(total_records: int, page_size: int) -> int:
    """Number of pages needed for ``total_records`` rows (always at least 1)."""
    page_size = validate_page_size(page_size)
    if total_records <= 0:
        return 1
    return (total_records - 1) // page_size + 1
