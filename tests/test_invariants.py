from random import Random

import pytest

from engine.board import FOUNDATION_SUITS, TABLEAU_PILES
from engine.cards import serialize_card
from engine.deck import build_deck
from engine.game import KlondikeGame
from engine.moves import MoveRejected, MoveSource, MoveTarget, Zone


def candidate_moves(game):
    """Every legal (source, target) pair on the current board."""
    sources = [MoveSource(Zone.WASTE)]
    for pile_index, pile in enumerate(game.board.tableau):
        for card_index in range(len(pile)):
            sources.append(MoveSource(Zone.TABLEAU, pile_index, card_index))
    targets = [MoveTarget(Zone.FOUNDATION, i) for i in range(len(FOUNDATION_SUITS))]
    targets += [MoveTarget(Zone.TABLEAU, i) for i in range(TABLEAU_PILES)]
    return [(s, t) for s in sources for t in targets if game.can_move(s, t)]


def random_step(game, rng):
    moves = candidate_moves(game)
    roll = rng.random()
    if moves and roll < 0.6:
        source, target = rng.choice(moves)
        game.attempt_move(source, target)
    elif roll < 0.7:
        game.flip_top_card(rng.randrange(TABLEAU_PILES))
    else:
        game.draw_stock()


def board_key(game):
    return (
        [serialize_card(c) for c in game.board.stock],
        [serialize_card(c) for c in game.board.waste],
        [[serialize_card(c) for c in p] for p in game.board.foundations],
        [[serialize_card(c) for c in p] for p in game.board.tableau],
        game.score,
        game.move_count,
    )


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_random_playout_keeps_invariants(seed):
    rng = Random(seed)
    game = KlondikeGame(seed=seed)
    deck = set(build_deck())
    foundation_sizes = [0, 0, 0, 0]

    for _ in range(300):
        if game.is_won():
            break
        try:
            random_step(game, rng)
        except MoveRejected:
            pass
        game.board.check_invariants()
        assert set(game.board.all_cards()) == deck
        assert game.board.card_count() == 52
        assert game.score >= 0
        sizes = [len(pile) for pile in game.board.foundations]
        # Foundations only shrink through undo, which this playout never uses.
        assert all(now >= prev for now, prev in zip(sizes, foundation_sizes))
        foundation_sizes = sizes


@pytest.mark.parametrize("seed", [7, 8])
def test_random_playout_undoes_to_start(seed):
    rng = Random(seed)
    game = KlondikeGame(seed=seed)
    start = board_key(game)

    applied = 0
    for _ in range(500):
        if applied == 40:
            break
        try:
            random_step(game, rng)
        except MoveRejected:
            continue
        applied += 1

    for _ in range(applied):
        game.undo()
        game.board.check_invariants()

    assert board_key(game) == start
