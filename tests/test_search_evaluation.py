import pytest

from abalone.core import Board, Player
from abalone.search import ball_amount_value, edge_value, evaluate_board, win_bonus


def test_opening_board_score() -> None:
    board = Board()
    assert ball_amount_value(board) == pytest.approx(-7.0)
    # human: 4 balls one step in, 3 balls two steps in; machine mirrors it
    assert edge_value(board) == pytest.approx(10 - 1.5 * 10)
    assert win_bonus(board) == 0.0
    assert evaluate_board(board) == pytest.approx(-68.0)


def test_centre_balls_score_higher() -> None:
    edge = Board.from_positions(9, human=[(0, 0)], machine=[(8, 8)], ball_amount=1)
    centre = Board.from_positions(9, human=[(0, 0)], machine=[(4, 4)], ball_amount=1)
    assert edge_value(centre) - edge_value(edge) == pytest.approx(4.0)
    assert evaluate_board(centre) > evaluate_board(edge)


def test_human_balls_weigh_more_than_machine_balls() -> None:
    board = Board.from_positions(
        9, human=[(0, 0), (0, 1)], machine=[(8, 8)], ball_amount=3
    )
    assert ball_amount_value(board) == pytest.approx(1 - 1.5 * 2)


@pytest.mark.parametrize("level, expected", [(1, 50_000_000.0), (2, 25_000_000.0), (4, 12_500_000.0)])
def test_win_bonus_shrinks_with_level(level, expected) -> None:
    human = [(0, d) for d in range(5)] + [(1, d) for d in range(3)]
    human_wins = Board.from_positions(9, human=human, machine=[(8, 8)], ball_amount=8, level=level)
    machine_wins = Board.from_positions(9, human=[(0, 0)], machine=[(8, 8), (8, 7)], ball_amount=7, level=level)

    assert human_wins.winner() == Player.HUMAN
    assert machine_wins.winner() == Player.MACHINE
    assert win_bonus(human_wins) == pytest.approx(-expected)
    assert win_bonus(machine_wins) == pytest.approx(expected)
