import json

import pytest
from pydantic import ValidationError

from engine.board import Board
from engine.cards import Card, Rank, Suit
from engine.game import KlondikeGame
from engine.moves import MoveSource, Zone
from engine.rules_schema import RuleSet, ScoringConfig, load_rules
from engine.scoring import DEFAULT_SCORES, apply_deltas


def test_default_rules_match_standard_scoring():
    rules = RuleSet()
    assert rules.history_limit == 50
    assert rules.score_table() == DEFAULT_SCORES


def test_invalid_rules_rejected():
    with pytest.raises(ValidationError):
        ScoringConfig(recycle_stock=20)
    with pytest.raises(ValidationError):
        ScoringConfig(flip_card=-5)
    with pytest.raises(ValidationError):
        RuleSet(history_limit=0)


def test_load_rules_from_json(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"scoring": {"waste_to_foundation": 15}, "history_limit": 10}))

    rules = load_rules(path)
    assert rules.history_limit == 10
    assert rules.score_table().waste_to_foundation == 15
    assert rules.score_table().recycle_stock == -100


def test_custom_scoring_applies_to_game():
    rules = RuleSet(scoring=ScoringConfig(waste_to_foundation=15))
    board = Board(waste=[Card(Rank.ACE, Suit.CLUBS, face_up=True)])
    game = KlondikeGame.from_board(board, rules=rules)
    game.auto_send_to_foundation(MoveSource(Zone.WASTE))
    assert game.score == 15


def test_deltas_floor_per_step():
    assert apply_deltas(30, [-100, 10]) == 10
    assert apply_deltas(120, [-100]) == 20
    assert apply_deltas(0, [5, 10]) == 15
