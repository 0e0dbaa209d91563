"""High-level game orchestration for Klondike."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import Callable, Optional

from .board import Board
from .deck import new_board
from .history import History, Snapshot
from .moves import (
    IllegalStateTransition,
    Move,
    MoveEffect,
    MoveRejected,
    MoveSource,
    MoveTarget,
    execute,
    plan_auto_send,
    plan_draw,
    plan_flip,
    plan_move,
)
from .rules_schema import RuleSet
from .scoring import apply_deltas

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    PLAYING = auto()
    WON = auto()


@dataclass(frozen=True)
class GameSummary:
    won: bool
    score: int
    move_count: int
    foundation_cards: int


@dataclass
class KlondikeGame:
    """Own one board plus its score, move counter and undo history.

    Every mutating call either succeeds and counts as one move, or raises a
    ``MoveRejected`` subclass and leaves board, score, counter and history as
    they were.
    """

    seed: Optional[int] = None
    rules: RuleSet = field(default_factory=RuleSet)

    rng: Random = field(init=False)
    board: Board = field(init=False)
    score: int = field(init=False, default=0)
    move_count: int = field(init=False, default=0)
    phase: GamePhase = field(init=False, default=GamePhase.PLAYING)
    history: History = field(init=False)
    last_effect: Optional[MoveEffect] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)
        self.history = History(limit=self.rules.history_limit)
        self.new_game()

    @classmethod
    def from_board(
        cls,
        board: Board,
        *,
        score: int = 0,
        move_count: int = 0,
        rules: Optional[RuleSet] = None,
    ) -> KlondikeGame:
        """Start a session from an arranged board instead of a fresh deal."""
        game = cls(rules=rules or RuleSet())
        game.board = board
        game.score = score
        game.move_count = move_count
        game._update_phase()
        return game

    # Session lifecycle -------------------------------------------------

    def new_game(self) -> Board:
        self.board = new_board(self.rng)
        self.score = 0
        self.move_count = 0
        self.phase = GamePhase.PLAYING
        self.history.clear()
        self.last_effect = None
        logger.debug("Dealt new game (seed=%s)", self.seed)
        return self.board

    # Actions -----------------------------------------------------------

    def draw_stock(self) -> Board:
        """Turn the next stock card onto the waste, or recycle an exhausted stock."""
        return self._perform(plan_draw)

    def attempt_move(self, source: MoveSource, target: MoveTarget) -> Board:
        return self._perform(lambda board: plan_move(board, source, target))

    def auto_send_to_foundation(self, source: MoveSource) -> Board:
        return self._perform(lambda board: plan_auto_send(board, source))

    def flip_top_card(self, pile_index: int) -> Board:
        return self._perform(lambda board: plan_flip(board, pile_index))

    def undo(self) -> Optional[Board]:
        """Restore the state before the last successful move; None if there is none."""
        self._ensure_playing()
        snapshot = self.history.pop()
        if snapshot is None:
            return None
        self.board = snapshot.board.copy()
        self.score = snapshot.score
        self.move_count = snapshot.move_count
        self.last_effect = None
        self._update_phase()
        return self.board

    # Queries -----------------------------------------------------------

    def can_move(self, source: MoveSource, target: MoveTarget) -> bool:
        if self.phase is GamePhase.WON:
            return False
        try:
            plan_move(self.board, source, target)
        except MoveRejected:
            return False
        return True

    def is_won(self) -> bool:
        return self.phase is GamePhase.WON

    @property
    def can_undo(self) -> bool:
        return self.phase is GamePhase.PLAYING and bool(self.history)

    def summary(self) -> GameSummary:
        return GameSummary(
            won=self.is_won(),
            score=self.score,
            move_count=self.move_count,
            foundation_cards=self.board.foundation_count(),
        )

    # Helpers -----------------------------------------------------------

    def _perform(self, plan: Callable[[Board], Move]) -> Board:
        self._ensure_playing()
        move = plan(self.board)
        self.history.push(Snapshot.capture(self.board, self.score, self.move_count))
        effect = execute(self.board, move, self.rules.score_table())
        self.score = apply_deltas(self.score, effect.deltas)
        self.move_count += 1
        self.last_effect = effect
        self._update_phase()
        return self.board

    def _update_phase(self) -> None:
        won = self.board.is_complete()
        if won and self.phase is not GamePhase.WON:
            logger.debug("Game won with score %d after %d moves", self.score, self.move_count)
        self.phase = GamePhase.WON if won else GamePhase.PLAYING

    def _ensure_playing(self) -> None:
        if self.phase is GamePhase.WON:
            raise IllegalStateTransition("The game is already won; start a new game.")
