import threading

import pytest

from abalone.core import Board, Player, board_to_dict
from abalone.search import (
    MinimaxSearch,
    SearchCancelled,
    SearchNode,
    choose_machine_move,
    successor_boards,
)


def winning_board(level: int) -> Board:
    """Machine to move; pushing (4, 6) -> (4, 7) drops the sixth human ball."""
    machine = [(4, 6), (4, 7), (8, 4), (8, 5), (8, 6), (8, 7), (8, 8), (7, 3), (7, 4)]
    human = [(4, 8), (0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (1, 0), (1, 1), (1, 2)]
    return Board.from_positions(
        9,
        human=human,
        machine=machine,
        level=level,
        last_player=Player.HUMAN,
        ball_amount=14,
    )


@pytest.mark.parametrize("level", [1, 2])
def test_machine_takes_the_winning_push(level) -> None:
    board = winning_board(level)
    assert board.next_player() == Player.MACHINE
    assert not board.is_game_over()

    result = board.machine_move()

    assert result is not board
    assert result.is_game_over()
    assert result.winner() == Player.MACHINE
    assert result.color_at(4, 8) == board.machine_color
    assert result.last_player == Player.MACHINE


def test_first_candidate_wins_ties() -> None:
    board = Board(9, machine_opens=True, level=1)
    expected = successor_boards(board)[0]

    result = choose_machine_move(board, evaluator=lambda _board: 0.0)

    assert board_to_dict(result) == board_to_dict(expected)


def test_search_reports_tree_size() -> None:
    board = Board(9, machine_opens=True, level=1)
    candidates = len(successor_boards(board))
    assert candidates > 0

    result = MinimaxSearch(lambda _board: 0.0).run(board)

    assert result.candidates == candidates
    assert result.nodes == candidates + 1
    assert result.value == 0.0


def test_tree_expands_to_the_level_depth() -> None:
    board = Board(7, machine_opens=True, level=2)
    root = MinimaxSearch().build_tree(board)
    assert root.has_children()
    for child in root.children:
        assert child.has_children()
        for grandchild in child.children:
            assert not grandchild.has_children()
    with pytest.raises(ValueError):
        MinimaxSearch().build_tree(board, depth=0)


def test_scores_accumulate_along_the_path() -> None:
    human_turn = Board(7)
    machine_turn = Board(7, machine_opens=True)
    assert human_turn.next_player() == Player.HUMAN
    assert machine_turn.next_player() == Player.MACHINE

    leaf_a, leaf_b = Board(7), Board(7)
    values = {id(human_turn): 1.0, id(machine_turn): 2.0, id(leaf_a): 3.0, id(leaf_b): 5.0}
    search = MinimaxSearch(lambda board: values[id(board)])

    maximising = SearchNode(human_turn)
    maximising.add_child(SearchNode(leaf_a))
    maximising.add_child(SearchNode(leaf_b))
    assert search.score_node(maximising) == 1.0 + 5.0

    minimising = SearchNode(machine_turn)
    minimising.add_child(SearchNode(leaf_a))
    minimising.add_child(SearchNode(leaf_b))
    assert search.score_node(minimising) == 2.0 + 3.0

    assert search.score_node(SearchNode(leaf_b)) == 5.0


def test_root_picks_highest_child_score() -> None:
    root_board = Board(7, machine_opens=True)
    low, high, also_high = Board(7), Board(7), Board(7)
    values = {id(low): -4.0, id(high): 7.0, id(also_high): 7.0}
    search = MinimaxSearch(lambda board: values[id(board)])

    root = SearchNode(root_board)
    for board in (low, high, also_high):
        root.add_child(SearchNode(board))

    best, value = search.select_best_child(root)

    assert best.board is high
    assert value == 7.0


def test_preset_cancel_event_stops_search() -> None:
    board = Board(9, machine_opens=True, level=2)
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(SearchCancelled):
        MinimaxSearch().run(board, cancel_event=cancel)
    with pytest.raises(SearchCancelled):
        board.machine_move(cancel_event=cancel)


def test_cancel_during_scoring() -> None:
    board = Board(7, machine_opens=True, level=1)
    cancel = threading.Event()
    calls = []

    def evaluator(candidate: Board) -> float:
        calls.append(candidate)
        if len(calls) == 3:
            cancel.set()
        return 0.0

    with pytest.raises(SearchCancelled):
        MinimaxSearch(evaluator).run(board, cancel_event=cancel)
    assert len(calls) == 3


def test_machine_does_not_move_out_of_turn() -> None:
    board = Board()
    assert board.next_player() == Player.HUMAN
    assert board.machine_move() is board


def test_machine_does_not_move_after_game_over() -> None:
    human = [(0, d) for d in range(5)] + [(1, d) for d in range(3)]
    board = Board.from_positions(
        9, human=human, machine=[(8, 8)], last_player=Player.HUMAN, ball_amount=8
    )
    assert board.is_game_over()
    assert board.machine_move() is board


def test_successors_follow_ball_then_direction_order() -> None:
    board = Board.from_positions(9, human=[(4, 4)], machine=[(8, 8)])
    boards = successor_boards(board)
    assert [b.positions(Player.HUMAN)[0] for b in boards] == [
        (5, 4),
        (4, 5),
        (5, 5),
        (3, 4),
        (4, 3),
        (3, 3),
    ]
