"""Score values and the floored score update."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class ScoreTable:
    waste_to_tableau: int = 5
    waste_to_foundation: int = 10
    tableau_to_foundation: int = 10
    flip_card: int = 5
    recycle_stock: int = -100


DEFAULT_SCORES = ScoreTable()


def apply_delta(score: int, delta: int) -> int:
    """Add ``delta`` and clamp at zero."""
    return max(0, score + delta)


def apply_deltas(score: int, deltas: Iterable[int]) -> int:
    """Apply each delta in order, flooring after every step.

    A penalty is never banked: from 30, ``[-100, +10]`` yields 10, not 0.
    """
    for delta in deltas:
        score = apply_delta(score, delta)
    return score
