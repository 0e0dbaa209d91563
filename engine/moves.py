"""Move planning and execution.

Planning functions only read the board: they either return a validated
``Move`` or raise a ``MoveRejected`` subclass. ``execute`` then applies a
planned move, performs the auto-flip of a newly exposed tableau card and
reports the score deltas in the order they are earned.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

from .board import FOUNDATION_SUITS, TABLEAU_PILES, Board
from .cards import Card, card_short_label
from .rules import (
    can_place_run_on_foundation,
    can_place_run_on_tableau,
    foundation_index_for,
)
from .scoring import DEFAULT_SCORES, ScoreTable


class MoveRejected(RuntimeError):
    """Base class for rejected engine operations; the board is left untouched."""

    code = "rejected"


class InvalidMove(MoveRejected):
    """Raised when a move breaks the placement rules."""

    code = "invalid_move"


class EmptySource(MoveRejected):
    """Raised when the pile a move would take from is empty."""

    code = "empty_source"


class IllegalStateTransition(MoveRejected):
    """Raised when a mutating operation is attempted after the game is won."""

    code = "illegal_state"


class Zone(Enum):
    STOCK = auto()
    WASTE = auto()
    FOUNDATION = auto()
    TABLEAU = auto()

    def __str__(self) -> str:
        return self.name.lower()


class MoveKind(Enum):
    DRAW = auto()
    RECYCLE = auto()
    WASTE_TO_TABLEAU = auto()
    WASTE_TO_FOUNDATION = auto()
    TABLEAU_TO_TABLEAU = auto()
    TABLEAU_TO_FOUNDATION = auto()
    FLIP = auto()


@dataclass(frozen=True)
class MoveSource:
    zone: Zone
    pile_index: int = 0
    card_index: Optional[int] = None  # None selects the top card


@dataclass(frozen=True)
class MoveTarget:
    zone: Zone
    pile_index: int = 0


@dataclass(frozen=True)
class Move:
    kind: MoveKind
    source_index: int = 0
    start_index: int = 0
    target_index: int = 0
    cards: Tuple[Card, ...] = ()


@dataclass(frozen=True)
class MoveEffect:
    move: Move
    deltas: Tuple[int, ...]
    auto_flipped: bool = False


def plan_draw(board: Board) -> Move:
    if board.stock:
        return Move(kind=MoveKind.DRAW, cards=(board.stock[-1],))
    if board.waste:
        return Move(kind=MoveKind.RECYCLE)
    raise EmptySource("Stock and waste are both empty.")


def plan_flip(board: Board, pile_index: int) -> Move:
    _check_pile_index(pile_index, TABLEAU_PILES, "tableau")
    top = board.top_of_tableau(pile_index)
    if top is None:
        raise EmptySource(f"Tableau pile {pile_index} is empty.")
    if top.face_up:
        raise InvalidMove(f"Top card of tableau pile {pile_index} is already face-up.")
    return Move(kind=MoveKind.FLIP, source_index=pile_index, cards=(top,))


def plan_move(board: Board, source: MoveSource, target: MoveTarget) -> Move:
    if target.zone is Zone.FOUNDATION:
        _check_pile_index(target.pile_index, len(FOUNDATION_SUITS), "foundation")
    elif target.zone is Zone.TABLEAU:
        _check_pile_index(target.pile_index, TABLEAU_PILES, "tableau")
    else:
        raise InvalidMove(f"Cards cannot be placed on the {target.zone}.")

    start, run = _select_run(board, source)
    to_foundation = target.zone is Zone.FOUNDATION

    if source.zone is Zone.TABLEAU and not to_foundation and source.pile_index == target.pile_index:
        raise InvalidMove("Source and target are the same pile.")

    if to_foundation:
        legal = can_place_run_on_foundation(board, run, target.pile_index)
    else:
        legal = can_place_run_on_tableau(board, run, target.pile_index)
    if not legal:
        raise InvalidMove(
            f"{card_short_label(run[0])} cannot be placed on {target.zone} pile {target.pile_index}."
        )

    if source.zone is Zone.WASTE:
        kind = MoveKind.WASTE_TO_FOUNDATION if to_foundation else MoveKind.WASTE_TO_TABLEAU
    else:
        kind = MoveKind.TABLEAU_TO_FOUNDATION if to_foundation else MoveKind.TABLEAU_TO_TABLEAU
    return Move(
        kind=kind,
        source_index=source.pile_index,
        start_index=start,
        target_index=target.pile_index,
        cards=tuple(run),
    )


def plan_auto_send(board: Board, source: MoveSource) -> Move:
    """Send the top card of the waste or a tableau pile to its suit's foundation."""
    start, run = _select_run(board, source)
    if len(run) != 1:
        raise InvalidMove("Only the top card can be sent to a foundation.")
    target = MoveTarget(Zone.FOUNDATION, foundation_index_for(run[0].suit))
    return plan_move(board, MoveSource(source.zone, source.pile_index, start), target)


def execute(board: Board, move: Move, scores: ScoreTable = DEFAULT_SCORES) -> MoveEffect:
    """Apply a planned move to ``board``; the move must come from a plan_* call."""
    deltas: List[int] = []
    auto_flipped = False

    if move.kind is MoveKind.DRAW:
        board.waste.append(board.stock.pop().turned(True))
        deltas.append(0)
    elif move.kind is MoveKind.RECYCLE:
        board.stock = [card.turned(False) for card in reversed(board.waste)]
        board.waste = []
        deltas.append(scores.recycle_stock)
    elif move.kind is MoveKind.FLIP:
        _turn_top_up(board.tableau[move.source_index])
        deltas.append(scores.flip_card)
    elif move.kind in (MoveKind.WASTE_TO_TABLEAU, MoveKind.WASTE_TO_FOUNDATION):
        card = board.waste.pop()
        if move.kind is MoveKind.WASTE_TO_FOUNDATION:
            board.foundations[move.target_index].append(card)
            deltas.append(scores.waste_to_foundation)
        else:
            board.tableau[move.target_index].append(card)
            deltas.append(scores.waste_to_tableau)
    else:
        pile = board.tableau[move.source_index]
        run = pile[move.start_index:]
        del pile[move.start_index:]
        if pile and not pile[-1].face_up:
            _turn_top_up(pile)
            auto_flipped = True
            deltas.append(scores.flip_card)
        if move.kind is MoveKind.TABLEAU_TO_FOUNDATION:
            board.foundations[move.target_index].extend(run)
            deltas.append(scores.tableau_to_foundation)
        else:
            board.tableau[move.target_index].extend(run)
            deltas.append(0)

    return MoveEffect(move=move, deltas=tuple(deltas), auto_flipped=auto_flipped)


def _select_run(board: Board, source: MoveSource) -> Tuple[int, List[Card]]:
    if source.zone is Zone.WASTE:
        if not board.waste:
            raise EmptySource("Waste is empty.")
        top = len(board.waste) - 1
        if source.card_index is not None and source.card_index != top:
            raise InvalidMove("Only the top waste card can be moved.")
        return top, [board.waste[top]]

    if source.zone is Zone.TABLEAU:
        _check_pile_index(source.pile_index, TABLEAU_PILES, "tableau")
        pile = board.tableau[source.pile_index]
        if not pile:
            raise EmptySource(f"Tableau pile {source.pile_index} is empty.")
        start = len(pile) - 1 if source.card_index is None else source.card_index
        if not 0 <= start < len(pile):
            raise InvalidMove(f"Tableau pile {source.pile_index} has no card at {start}.")
        if not pile[start].face_up:
            raise InvalidMove("Face-down cards cannot be moved.")
        return start, pile[start:]

    raise InvalidMove(f"Cards cannot be taken from the {source.zone}.")


def _check_pile_index(index: int, count: int, name: str) -> None:
    if not 0 <= index < count:
        raise InvalidMove(f"There is no {name} pile {index}.")


def _turn_top_up(pile: List[Card]) -> None:
    pile[-1] = pile[-1].turned(True)
