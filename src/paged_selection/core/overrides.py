"""OverrideSets: per-row exceptions layered on top of the selection rule.

Immutable: each update returns a new OverrideSets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable


@dataclass(frozen=True)
class OverrideSets:
    """Two disjoint sets of row IDs.

    ``excluded`` holds IDs inside the rule's range that the user deselected.
    ``included`` holds IDs outside the range that the user selected by hand.
    Adding an ID to one set discards it from the other.
    """

    excluded: frozenset = field(default_factory=frozenset)
    included: frozenset = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> OverrideSets:
        return cls()

    @property
    def size(self) -> int:
        """Total number of overrides held (the engine's memory footprint)."""
        return len(self.excluded) + len(self.included)

    @property
    def is_empty(self) -> bool:
        return not self.excluded and not self.included

    def exclude(self, ids: Iterable[Hashable]) -> OverrideSets:
        ids = frozenset(ids)
        if not ids:
            return self
        return OverrideSets(
            excluded=self.excluded | ids,
            included=self.included - ids,
        )

    def unexclude(self, ids: Iterable[Hashable]) -> OverrideSets:
        ids = frozenset(ids)
        if not ids & self.excluded:
            return self
        return OverrideSets(excluded=self.excluded - ids, included=self.included)

    def include(self, ids: Iterable[Hashable]) -> OverrideSets:
        ids = frozenset(ids)
        if not ids:
            return self
        return OverrideSets(
            excluded=self.excluded - ids,
            included=self.included | ids,
        )

    def uninclude(self, ids: Iterable[Hashable]) -> OverrideSets:
        ids = frozenset(ids)
        if not ids & self.included:
            return self
        return OverrideSets(excluded=self.excluded, included=self.included - ids)

    def cleared(self) -> OverrideSets:
        return OverrideSets.empty()

    def __repr__(self) -> str:
        return (
            f"OverrideSets(excluded={len(self.excluded)}, "
            f"included={len(self.included)})"
        )
