"""Card-related data structures and helpers for Klondike."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Mapping


class Color(Enum):
    RED = auto()
    BLACK = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Suit(Enum):
    SPADES = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def color(self) -> Color:
        return SUIT_COLORS[self]

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


class Rank(Enum):
    """Card ranks; ``value`` gives the total order Ace=1 .. King=13."""

    ACE = auto()
    TWO = auto()
    THREE = auto()
    FOUR = auto()
    FIVE = auto()
    SIX = auto()
    SEVEN = auto()
    EIGHT = auto()
    NINE = auto()
    TEN = auto()
    JACK = auto()
    QUEEN = auto()
    KING = auto()

    def __str__(self) -> str:
        return self.name.lower()


SUIT_COLORS: dict[Suit, Color] = {
    Suit.SPADES: Color.BLACK,
    Suit.HEARTS: Color.RED,
    Suit.DIAMONDS: Color.RED,
    Suit.CLUBS: Color.BLACK,
}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}

# Rank order from lowest to highest.
RANK_ORDER: list[Rank] = list(Rank)

RANK_LABELS: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}


@dataclass(frozen=True)
class Card:
    """Immutable playing card.

    Equality and hashing only consider ``rank`` and ``suit``; ``face_up`` is the
    card's orientation and changes by swapping in a flipped copy.
    """

    rank: Rank
    suit: Suit
    face_up: bool = field(default=False, compare=False)

    @property
    def color(self) -> Color:
        return self.suit.color

    def turned(self, face_up: bool) -> Card:
        if self.face_up is face_up:
            return self
        return replace(self, face_up=face_up)


def is_red(suit: Suit) -> bool:
    return SUIT_COLORS[suit] is Color.RED


def rank_value(card: Card) -> int:
    return card.rank.value


def serialize_card(card: Card) -> dict[str, object]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower(), "face_up": card.face_up}


def deserialize_card(payload: Mapping[str, object]) -> Card:
    try:
        rank = Rank[str(payload["rank"]).upper()]
        suit = Suit[str(payload["suit"]).upper()]
    except KeyError as exc:
        raise ValueError(f"Malformed card payload: {dict(payload)!r}") from exc
    return Card(rank, suit, face_up=bool(payload.get("face_up", False)))


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"


def card_short_label(card: Card) -> str:
    rank = RANK_LABELS.get(card.rank, str(card.rank.value))
    return f"{rank}{card.suit.symbol}"
