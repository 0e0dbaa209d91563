import pytest

from engine.board import Board
from engine.cards import Card, Rank, Suit
from engine.game import KlondikeGame
from engine.moves import InvalidMove
from engine.service import GameService


def test_service_initial_view():
    service = GameService(seed=4)
    view = service.get_view()

    assert view.phase == "playing"
    assert not view.won
    assert view.score == 0 and view.move_count == 0
    assert len(view.stock) == 24
    assert [len(pile) for pile in view.tableau] == [1, 2, 3, 4, 5, 6, 7]
    assert view.foundation_suits == ["spades", "hearts", "diamonds", "clubs"]
    assert not view.can_undo
    assert view.last_move is None


def test_service_updates_after_draws():
    service = GameService(seed=4)
    for _ in range(4):
        view = service.draw_stock()

    assert len(view.waste) == 4
    assert len(view.waste_fan) == 3
    assert view.waste_fan[-1] == view.waste[-1]
    assert all(card.face_up for card in view.waste)
    assert view.move_count == 4
    assert view.history_size == 4
    assert view.last_move == "draw"

    view, undone = service.undo()
    assert undone
    assert len(view.waste) == 3


def test_service_moves_by_zone_name():
    board = Board(
        waste=[Card(Rank.ACE, Suit.HEARTS, face_up=True)],
        tableau=[[Card(Rank.KING, Suit.CLUBS, face_up=True)], [], [], [], [], [], []],
    )
    service = GameService(KlondikeGame.from_board(board))

    assert service.can_move("tableau", 0, "tableau", 3)
    assert not service.can_move("tableau", 0, "foundation", 0)

    view = service.auto_send("waste")
    assert view.foundations[1][0].label == "Ace of Hearts"
    assert view.foundations[1][0].short_label == "A♥"
    assert view.score == 10

    view = service.move("tableau", 0, "tableau", 3, card_index=0)
    assert view.tableau[3][0].color == "black"

    with pytest.raises(InvalidMove):
        service.flip(3)
    with pytest.raises(ValueError):
        service.move("table", 0, "tableau", 1)
