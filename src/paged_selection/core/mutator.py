"""SelectionMutator: turn page-level selection intents into override updates.

Every function only looks at the rows of the currently loaded page and
returns a new OverrideSets. Rows on other pages are never touched.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Sequence

from .overrides import OverrideSets
from .page import Row
from .rule import SelectionRule, in_rule_range


def _split_by_range(
    rule: SelectionRule,
    rows: Iterable[Row],
) -> tuple[list, list]:
    """Partition row IDs into (in rule range, outside rule range)."""
    inside: list = []
    outside: list = []
    for row in rows:
        if in_rule_range(rule, row.global_position):
            inside.append(row.id)
        else:
            outside.append(row.id)
    return inside, outside


def replace_page_selection(
    rule: SelectionRule,
    overrides: OverrideSets,
    rows: Sequence[Row],
    selected_ids: Iterable[Hashable],
) -> OverrideSets:
    """Reconcile overrides with the full set of IDs selected on this page.

    In-range rows leave the exclusion set when selected and join it
    otherwise. Out-of-range rows join the inclusion set when selected and
    leave it otherwise. IDs not on the page are ignored. Idempotent.
    """
    target = set(selected_ids)
    inside, outside = _split_by_range(rule, rows)

    return (
        overrides
        .unexclude(i for i in inside if i in target)
        .exclude(i for i in inside if i not in target)
        .include(i for i in outside if i in target)
        .uninclude(i for i in outside if i not in target)
    )


def select_all_on_page(
    rule: SelectionRule,
    overrides: OverrideSets,
    rows: Sequence[Row],
) -> OverrideSets:
    """Select every loaded row."""
    inside, outside = _split_by_range(rule, rows)
    return overrides.unexclude(inside).include(outside)


def deselect_all_on_page(
    rule: SelectionRule,
    overrides: OverrideSets,
    rows: Sequence[Row],
) -> OverrideSets:
    """Deselect every loaded row."""
    inside, _ = _split_by_range(rule, rows)
    return overrides.exclude(inside).uninclude(row.id for row in rows)


def toggle_page(
    rule: SelectionRule,
    overrides: OverrideSets,
    rows: Sequence[Row],
    checked: bool,
) -> OverrideSets:
    """Handle the page-level checkbox being checked or unchecked."""
    if checked:
        return select_all_on_page(rule, overrides, rows)
    return deselect_all_on_page(rule, overrides, rows)


def set_row_selected(
    rule: SelectionRule,
    overrides: OverrideSets,
    row: Row,
    selected: bool,
) -> OverrideSets:
    """Select or deselect a single loaded row."""
    if in_rule_range(rule, row.global_position):
        if selected:
            return overrides.unexclude([row.id])
        return overrides.exclude([row.id])
    if selected:
        return overrides.include([row.id])
    return overrides.uninclude([row.id])
