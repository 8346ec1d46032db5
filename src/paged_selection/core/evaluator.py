"""SelectionEvaluator: derive selection state from rule + overrides + page.

Nothing here is cached. Every call recomputes from the rule and the two
override sets, which stay the single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Iterable

import numpy as np

from .overrides import OverrideSets
from .page import Row
from .rule import SelectionRule, in_rule_range


class CheckboxState(str, Enum):
    """Displayed value of the page-level select-all checkbox."""

    CHECKED = "checked"
    UNCHECKED = "unchecked"
    INDETERMINATE = "indeterminate"


def is_selected(
    rule: SelectionRule,
    overrides: OverrideSets,
    row_id: Hashable,
    position: int,
) -> bool:
    """Whether a row is currently selected.

    Selected when the rule covers its global position and the user has not
    excluded it, or when the user included it by hand.
    """
    if row_id in overrides.included:
        return True
    return in_rule_range(rule, position) and row_id not in overrides.excluded


def total_selected(
    rule: SelectionRule,
    overrides: OverrideSets,
    total_records: int,
) -> int:
    """Count selected rows across the whole collection without enumerating it.

    ``min(n, total_records)`` is the only place the rule is bounded by the
    real collection size.
    """
    if rule is None:
        return len(overrides.included)
    count = (
        min(rule.n, max(0, total_records))
        - len(overrides.excluded)
        + len(overrides.included)
    )
    return max(0, count)


def page_selection_mask(
    rule: SelectionRule,
    overrides: OverrideSets,
    rows: Iterable[Row],
) -> np.ndarray:
    """Boolean array, one entry per loaded row, in page order."""
    return np.array(
        [is_selected(rule, overrides, row.id, row.global_position) for row in rows],
        dtype=bool,
    )


@dataclass(frozen=True)
class PageSelectionSummary:
    """Tri-state of the loaded page."""

    n_rows: int
    n_selected: int

    @property
    def all_selected(self) -> bool:
        return self.n_rows > 0 and self.n_selected == self.n_rows

    @property
    def some_selected(self) -> bool:
        return self.n_selected > 0

    @property
    def state(self) -> CheckboxState:
        if self.all_selected:
            return CheckboxState.CHECKED
        if self.some_selected:
            return CheckboxState.INDETERMINATE
        return CheckboxState.UNCHECKED


def summarize_page(
    rule: SelectionRule,
    overrides: OverrideSets,
    rows: Iterable[Row],
) -> PageSelectionSummary:
    mask = page_selection_mask(rule, overrides, rows)
    return PageSelectionSummary(n_rows=int(mask.size), n_selected=int(mask.sum()))


def checkbox_state(
    rule: SelectionRule,
    overrides: OverrideSets,
    rows: Iterable[Row],
) -> CheckboxState:
    return summarize_page(rule, overrides, rows).state
