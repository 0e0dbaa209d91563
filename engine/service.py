"""Convenience service layer for UI consumers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import FOUNDATION_SUITS
from .cards import Card, card_label, card_short_label
from .game import KlondikeGame
from .moves import MoveSource, MoveTarget, Zone

# Waste cards shown fanned out on the table.
WASTE_FAN_SIZE = 3


@dataclass
class CardView:
    rank: str
    suit: str
    face_up: bool
    color: str
    label: str
    short_label: str


@dataclass
class GameView:
    phase: str
    won: bool
    score: int
    move_count: int
    stock: list[CardView]
    waste: list[CardView]
    waste_fan: list[CardView]
    foundations: list[list[CardView]]
    foundation_suits: list[str]
    tableau: list[list[CardView]]
    can_undo: bool
    history_size: int
    last_move: Optional[str]


def card_view(card: Card) -> CardView:
    return CardView(
        rank=card.rank.name.lower(),
        suit=card.suit.name.lower(),
        face_up=card.face_up,
        color=str(card.color),
        label=card_label(card),
        short_label=card_short_label(card),
    )


def parse_zone(name: str) -> Zone:
    try:
        return Zone[name.upper()]
    except KeyError as exc:
        raise ValueError(f"Unknown zone: {name!r}") from exc


class GameService:
    """Facade around KlondikeGame for UI consumers."""

    def __init__(self, game: Optional[KlondikeGame] = None, *, seed: Optional[int] = None) -> None:
        self.game = game or KlondikeGame(seed=seed)

    # Session lifecycle -------------------------------------------------

    def new_game(self) -> GameView:
        self.game.new_game()
        return self.get_view()

    # Actions -----------------------------------------------------------

    def draw_stock(self) -> GameView:
        self.game.draw_stock()
        return self.get_view()

    def move(
        self,
        source_zone: str,
        source_pile: int,
        target_zone: str,
        target_pile: int,
        card_index: Optional[int] = None,
    ) -> GameView:
        source = MoveSource(parse_zone(source_zone), source_pile, card_index)
        self.game.attempt_move(source, MoveTarget(parse_zone(target_zone), target_pile))
        return self.get_view()

    def auto_send(self, source_zone: str, source_pile: int = 0, card_index: Optional[int] = None) -> GameView:
        self.game.auto_send_to_foundation(MoveSource(parse_zone(source_zone), source_pile, card_index))
        return self.get_view()

    def flip(self, pile_index: int) -> GameView:
        self.game.flip_top_card(pile_index)
        return self.get_view()

    def undo(self) -> tuple[GameView, bool]:
        undone = self.game.undo() is not None
        return self.get_view(), undone

    def can_move(
        self,
        source_zone: str,
        source_pile: int,
        target_zone: str,
        target_pile: int,
        card_index: Optional[int] = None,
    ) -> bool:
        source = MoveSource(parse_zone(source_zone), source_pile, card_index)
        return self.game.can_move(source, MoveTarget(parse_zone(target_zone), target_pile))

    # Views -------------------------------------------------------------

    def get_view(self) -> GameView:
        game = self.game
        board = game.board
        last_move = game.last_effect.move.kind.name.lower() if game.last_effect else None
        return GameView(
            phase=game.phase.name.lower(),
            won=game.is_won(),
            score=game.score,
            move_count=game.move_count,
            stock=[card_view(card) for card in board.stock],
            waste=[card_view(card) for card in board.waste],
            waste_fan=[card_view(card) for card in board.waste[-WASTE_FAN_SIZE:]],
            foundations=[[card_view(card) for card in pile] for pile in board.foundations],
            foundation_suits=[suit.name.lower() for suit in FOUNDATION_SUITS],
            tableau=[[card_view(card) for card in pile] for pile in board.tableau],
            can_undo=game.can_undo,
            history_size=len(game.history),
            last_move=last_move,
        )
