from __future__ import annotations

from functools import lru_cache

import numpy as np

from abalone.core import Board, Player
from abalone.core.geometry import distance_map

HUMAN_WEIGHT = 1.5
WIN_VALUE = 50_000_000.0


@lru_cache(maxsize=None)
def _distance_table(size: int) -> np.ndarray:
    table = distance_map(size)
    table.setflags(write=False)
    return table


def _edge_sum(board: Board, player: Player) -> int:
    """Sum of ``bucket * count`` over the distance-to-edge buckets of one side."""
    positions = board.positions(player)
    if not positions:
        return 0
    table = _distance_table(board.size)
    rows, diags = zip(*positions)
    counts = np.bincount(table[list(rows), list(diags)], minlength=board.size // 2 + 1)
    return int(np.dot(np.arange(len(counts)), counts))


def ball_amount_value(board: Board) -> float:
    machine = len(board.balls(Player.MACHINE))
    human = len(board.balls(Player.HUMAN))
    return machine - HUMAN_WEIGHT * human


def edge_value(board: Board) -> float:
    return _edge_sum(board, Player.MACHINE) - HUMAN_WEIGHT * _edge_sum(board, Player.HUMAN)


def win_bonus(board: Board) -> float:
    """Dominating bonus for a finished game, shrinking with the search level.

    Dividing by the level makes a win found by a shallow search worth more
    than one buried deep in the tree, so the fastest forced win is preferred.
    """
    winner = board.winner()
    if winner is None:
        return 0.0
    bonus = WIN_VALUE / float(board.level)
    return bonus if winner == Player.MACHINE else -bonus


def evaluate_board(board: Board) -> float:
    """Static score of a board from the machine's point of view."""
    return board.size * ball_amount_value(board) + edge_value(board) + win_bonus(board)
