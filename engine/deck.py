"""Deck creation, shuffling and the Klondike deal."""

from __future__ import annotations

from random import Random
from typing import List, MutableSequence, Optional, Sequence, TypeVar

from .board import DECK_SIZE, TABLEAU_PILES, Board
from .cards import Card, RANK_ORDER, Suit

T = TypeVar("T")


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck, every card face-down."""
    return [Card(rank, suit) for suit in Suit for rank in RANK_ORDER]


def shuffle(cards: MutableSequence[T], rng: Optional[Random] = None) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place; returns ``cards`` for chaining."""
    if rng is None:
        rng = Random()
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randrange(i + 1)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def deal_klondike(deck: Sequence[Card]) -> Board:
    """Deal a shuffled deck into the triangular tableau and the stock.

    Column ``c`` hands one card to each pile ``r >= c``; the card landing on
    pile ``c`` itself is the only one turned face-up. The 24 cards left over
    become the stock in their existing order.
    """
    cards = list(deck)
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")

    board = Board()
    position = 0
    for column in range(TABLEAU_PILES):
        for row in range(column, TABLEAU_PILES):
            board.tableau[row].append(cards[position].turned(row == column))
            position += 1

    board.stock = [card.turned(False) for card in cards[position:]]
    return board


def new_board(rng: Optional[Random] = None) -> Board:
    deck = build_deck()
    shuffle(deck, rng)
    return deal_klondike(deck)
