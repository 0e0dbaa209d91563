"""Board aggregate holding the four Klondike zones."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from .cards import Card, Suit

FOUNDATION_SUITS: Tuple[Suit, ...] = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)
TABLEAU_PILES = 7
DECK_SIZE = 52
SUIT_SIZE = 13


class BoardInvariantError(ValueError):
    """Raised when a board breaks one of the structural Klondike invariants."""


def _empty_piles(count: int) -> List[List[Card]]:
    return [[] for _ in range(count)]


@dataclass
class Board:
    """Stock, waste, four foundations and seven tableau piles.

    Every pile is a list whose last element is the top card.
    """

    stock: List[Card] = field(default_factory=list)
    waste: List[Card] = field(default_factory=list)
    foundations: List[List[Card]] = field(default_factory=lambda: _empty_piles(len(FOUNDATION_SUITS)))
    tableau: List[List[Card]] = field(default_factory=lambda: _empty_piles(TABLEAU_PILES))

    def __post_init__(self) -> None:
        if len(self.foundations) != len(FOUNDATION_SUITS):
            raise ValueError(f"Board needs {len(FOUNDATION_SUITS)} foundations.")
        if len(self.tableau) != TABLEAU_PILES:
            raise ValueError(f"Board needs {TABLEAU_PILES} tableau piles.")
        self.stock = list(self.stock)
        self.waste = list(self.waste)
        self.foundations = [list(pile) for pile in self.foundations]
        self.tableau = [list(pile) for pile in self.tableau]

    def copy(self) -> Board:
        # Cards are frozen, so copying the pile lists is a full deep copy.
        return Board(
            stock=self.stock,
            waste=self.waste,
            foundations=self.foundations,
            tableau=self.tableau,
        )

    def top_of_waste(self) -> Optional[Card]:
        return self.waste[-1] if self.waste else None

    def top_of_foundation(self, index: int) -> Optional[Card]:
        pile = self.foundations[index]
        return pile[-1] if pile else None

    def top_of_tableau(self, index: int) -> Optional[Card]:
        pile = self.tableau[index]
        return pile[-1] if pile else None

    def all_cards(self) -> Iterator[Card]:
        yield from self.stock
        yield from self.waste
        for pile in self.foundations:
            yield from pile
        for pile in self.tableau:
            yield from pile

    def card_count(self) -> int:
        return sum(1 for _ in self.all_cards())

    def foundation_count(self) -> int:
        return sum(len(pile) for pile in self.foundations)

    def is_complete(self) -> bool:
        return all(len(pile) == SUIT_SIZE for pile in self.foundations)

    def check_invariants(self, *, full_deck: bool = True) -> None:
        """Raise ``BoardInvariantError`` if any zone is in an impossible state."""
        counts = Counter(self.all_cards())
        duplicates = [card for card, seen in counts.items() if seen > 1]
        if duplicates:
            raise BoardInvariantError(f"Duplicate cards on board: {duplicates}")
        if full_deck and len(counts) != DECK_SIZE:
            raise BoardInvariantError(f"Expected {DECK_SIZE} cards, found {len(counts)}.")

        if any(card.face_up for card in self.stock):
            raise BoardInvariantError("Stock holds a face-up card.")
        if any(not card.face_up for card in self.waste):
            raise BoardInvariantError("Waste holds a face-down card.")

        for index, pile in enumerate(self.foundations):
            _check_foundation(index, pile)
        for index, pile in enumerate(self.tableau):
            _check_tableau(index, pile)


def _check_foundation(index: int, pile: Sequence[Card]) -> None:
    suit = FOUNDATION_SUITS[index]
    for position, card in enumerate(pile):
        if card.suit is not suit:
            raise BoardInvariantError(f"Foundation {index} holds {card} outside suit {suit}.")
        if card.rank.value != position + 1:
            raise BoardInvariantError(f"Foundation {index} is not a contiguous run from the Ace.")
        if not card.face_up:
            raise BoardInvariantError(f"Foundation {index} holds a face-down card.")


def _check_tableau(index: int, pile: Sequence[Card]) -> None:
    first_up = next((pos for pos, card in enumerate(pile) if card.face_up), len(pile))
    if any(not card.face_up for card in pile[first_up:]):
        raise BoardInvariantError(f"Tableau {index} has a face-down card above a face-up one.")
    visible = pile[first_up:]
    for lower, upper in zip(visible, visible[1:]):
        if lower.color is upper.color or upper.rank.value != lower.rank.value - 1:
            raise BoardInvariantError(f"Tableau {index} breaks alternating descent at {upper}.")