"""Command messages consumed by SelectionSession."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class ApplyRule:
    """Replace the rule with "first n" (raw input, validated on apply)."""

    n: Any


@dataclass(frozen=True)
class ReplacePageSelection:
    """The full set of IDs the user wants selected on the loaded page."""

    selected_ids: frozenset = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "selected_ids", frozenset(self.selected_ids))


@dataclass(frozen=True)
class SelectAllOnPage:
    pass


@dataclass(frozen=True)
class DeselectAllOnPage:
    pass


@dataclass(frozen=True)
class ToggleSelectAll:
    """The page-level checkbox was checked or unchecked."""

    checked: bool


@dataclass(frozen=True)
class ChangePage:
    """Navigate to another page (the only command that awaits I/O)."""

    page_number: int


Command = Union[
    ApplyRule,
    ReplacePageSelection,
    SelectAllOnPage,
    DeselectAllOnPage,
    ToggleSelectAll,
    ChangePage,
]
