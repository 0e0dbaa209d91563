"""Move legality predicates. Nothing here mutates the board."""

from __future__ import annotations

from typing import Sequence

from .board import FOUNDATION_SUITS, Board
from .cards import Card, Rank, Suit, is_red


def foundation_index_for(suit: Suit) -> int:
    return FOUNDATION_SUITS.index(suit)


def can_drop_on_foundation(board: Board, card: Card, index: int) -> bool:
    if card.suit is not FOUNDATION_SUITS[index]:
        return False
    top = board.top_of_foundation(index)
    if top is None:
        return card.rank is Rank.ACE
    return card.rank.value == top.rank.value + 1


def can_drop_on_tableau(board: Board, card: Card, index: int) -> bool:
    top = board.top_of_tableau(index)
    if top is None:
        return card.rank is Rank.KING
    if not top.face_up:
        return False
    return is_red(card.suit) != is_red(top.suit) and card.rank.value == top.rank.value - 1


def can_place_run_on_foundation(board: Board, run: Sequence[Card], index: int) -> bool:
    """Only a single card may go to a foundation."""
    return len(run) == 1 and can_drop_on_foundation(board, run[0], index)


def can_place_run_on_tableau(board: Board, run: Sequence[Card], index: int) -> bool:
    """A run lands on a tableau pile when its first (lowest) card does."""
    return bool(run) and can_drop_on_tableau(board, run[0], index)
