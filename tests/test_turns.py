from abalone.core import ELIMINATION, Board, Player
from abalone.validation import validate_board


def surrounded_machine_board() -> Board:
    human = [(5, 4), (4, 5), (5, 5), (3, 4), (4, 3), (3, 3), (0, 0), (0, 1)]
    return Board.from_positions(
        9,
        human=human,
        machine=[(4, 4)],
        last_player=Player.HUMAN,
        ball_amount=8,
    )


def test_players_alternate_from_the_opening_side() -> None:
    board = Board()
    assert board.next_player() == Player.HUMAN

    board = board.move(2, 2, 3, 2)
    assert board.last_player == Player.HUMAN
    assert board.next_player() == Player.MACHINE

    board = board.move(6, 4, 5, 4)
    assert board.last_player == Player.MACHINE
    assert board.next_player() == Player.HUMAN


def test_side_without_moves_passes() -> None:
    board = surrounded_machine_board()
    validate_board(board)
    assert not board.can_move(Player.MACHINE)
    assert board.can_move(Player.HUMAN)
    assert board.next_player() == Player.HUMAN


def test_engine_does_not_check_who_moves() -> None:
    board = Board()
    assert board.next_player() == Player.HUMAN

    moved = board.move(6, 4, 5, 4)

    assert moved is not None
    assert moved.last_player == Player.HUMAN


def test_game_over_after_six_losses() -> None:
    human = [(0, d) for d in range(5)] + [(1, d) for d in range(3)]
    machine = [(8, 8)]
    board = Board.from_positions(9, human=human, machine=machine, ball_amount=8)
    assert board.balls_lost(Player.MACHINE) == 7
    assert board.balls_lost(Player.HUMAN) == 0
    assert board.is_game_over()
    assert board.winner() == Player.HUMAN

    board = Board.from_positions(9, human=human[:2], machine=human[2:], ball_amount=8)
    assert board.balls_lost(Player.HUMAN) == ELIMINATION
    assert board.winner() == Player.MACHINE


def test_five_losses_is_not_the_end() -> None:
    human = [(0, d) for d in range(5)] + [(1, d) for d in range(3)]
    board = Board.from_positions(9, human=human, machine=[(8, 8), (8, 7), (8, 6)], ball_amount=8)
    assert board.balls_lost(Player.MACHINE) == 5
    assert not board.is_game_over()
    assert board.winner() is None


def test_pushing_sixth_ball_off_ends_the_game() -> None:
    board = Board.from_positions(
        9,
        human=[(4, 6), (4, 7), (0, 0), (0, 1)],
        machine=[(4, 8), (8, 8), (8, 7), (8, 6)],
        ball_amount=9,
    )
    assert board.balls_lost(Player.MACHINE) == 5
    assert not board.is_game_over()

    result = board.move(4, 6, 4, 7)

    assert result.balls_lost(Player.MACHINE) == ELIMINATION
    assert result.is_game_over()
    assert result.winner() == Player.HUMAN


def test_moves_still_play_after_game_over() -> None:
    human = [(0, d) for d in range(5)] + [(1, d) for d in range(3)]
    board = Board.from_positions(9, human=human, machine=[(8, 8)], ball_amount=8)
    assert board.is_game_over()
    assert board.move(1, 0, 2, 0) is not None


def test_move_that_blocks_the_opponent_keeps_the_turn() -> None:
    # (3, 3) is the only free neighbour of the machine ball at (4, 4)
    human = [(5, 4), (4, 5), (5, 5), (3, 4), (4, 3), (2, 2), (0, 0)]
    board = Board.from_positions(9, human=human, machine=[(4, 4)], ball_amount=7)
    assert board.next_player() == Player.HUMAN
    assert board.can_move(Player.MACHINE)

    result = board.move(2, 2, 3, 3)

    assert result is not None
    validate_board(result)
    assert result.last_player == Player.HUMAN
    assert not result.can_move(Player.MACHINE)
    assert result.next_player() == Player.HUMAN

    again = result.move(0, 0, 1, 0)
    assert again.last_player == Player.HUMAN
    assert again.next_player() == Player.HUMAN
