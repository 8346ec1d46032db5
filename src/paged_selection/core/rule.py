"""SelectionRule: the declarative "first N rows" selection target."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np


class InvalidRule(ValueError):
    """Raised when a rule count is absent, non-integral or not positive."""


def _as_int(value: Any) -> int | None:
    """Plain int for any integer type (NumPy included), None otherwise.

    Booleans are not counts.
    """
    if isinstance(value, (bool, np.bool_)):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


@dataclass(frozen=True)
class FirstN:
    """Select the first ``n`` rows of the virtual collection.

    Immutable: a new rule replaces the old one wholesale.
    """

    n: int

    def __post_init__(self) -> None:
        n = _as_int(self.n)
        if n is None:
            raise InvalidRule(f"Rule count must be an integer, got {self.n!r}.")
        if n <= 0:
            raise InvalidRule(f"Rule count must be greater than 0, got {n}.")
        object.__setattr__(self, "n", n)

    def contains(self, position: int) -> bool:
        """True when a global position falls inside the rule's range."""
        return position < self.n

    def describe(self) -> str:
        return f"First {self.n} rows will be selected."


SelectionRule = Optional[FirstN]


def in_rule_range(rule: SelectionRule, position: int) -> bool:
    """True when a rule is active and covers the global position."""
    return rule is not None and rule.contains(position)


def parse_rule_count(value: Any) -> int:
    """Normalize raw rule input into a positive integer.

    Accepts integers (NumPy included), integral floats and numeric strings.
    Anything else (including ``None``, booleans, zero and negatives)
    raises InvalidRule.
    """
    if value is None:
        raise InvalidRule("Please enter a valid number greater than 0.")
    if isinstance(value, (bool, np.bool_)):
        raise InvalidRule(f"Rule count must be a number, got {value!r}.")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidRule("Please enter a valid number greater than 0.")
        try:
            value = float(text) if any(c in text for c in ".eE") else int(text)
        except ValueError:
            raise InvalidRule(f"Rule count must be a number, got {text!r}.") from None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidRule(f"Rule count must be a whole number, got {value!r}.")
        value = int(value)
    count = _as_int(value)
    if count is None:
        raise InvalidRule(
            f"Rule count must be a number, got {type(value).__name__}."
        )
    if count <= 0:
        raise InvalidRule(f"Rule count must be greater than 0, got {count}.")
    return count
