"""Selection-rule engine: paging arithmetic, rule, overrides, evaluation."""

from .paging import global_position, page_count, page_offset
from .rule import FirstN, InvalidRule, SelectionRule, in_rule_range, parse_rule_count
from .overrides import OverrideSets
from .page import Page, Row, records_frame
from .evaluator import (
    CheckboxState,
    PageSelectionSummary,
    checkbox_state,
    is_selected,
    page_selection_mask,
    summarize_page,
    total_selected,
)
from .mutator import (
    deselect_all_on_page,
    replace_page_selection,
    select_all_on_page,
    set_row_selected,
    toggle_page,
)

__all__ = [
    "global_position",
    "page_count",
    "page_offset",
    "FirstN",
    "InvalidRule",
    "SelectionRule",
    "in_rule_range",
    "parse_rule_count",
    "OverrideSets",
    "Page",
    "Row",
    "records_frame",
    "CheckboxState",
    "PageSelectionSummary",
    "checkbox_state",
    "is_selected",
    "page_selection_mask",
    "summarize_page",
    "total_selected",
    "deselect_all_on_page",
    "replace_page_selection",
    "select_all_on_page",
    "set_row_selected",
    "toggle_page",
]
