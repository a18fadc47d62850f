from __future__ import annotations

import numpy as np

from abalone.core import Board, BoardInvariantError, Color, Player
from abalone.core.geometry import playable_mask


def validate_board(board: Board) -> None:
    """Check that grid and ball inventories describe the same position.

    Every inventoried ball must sit on a playable cell of its own colour and
    every occupied cell must be claimed by exactly one inventoried ball.
    """
    grid = board.to_array()
    mask = playable_mask(board.size)
    if not np.array_equal(grid >= 0, mask):
        raise BoardInvariantError("playable cells do not match the hex layout")

    claimed = np.zeros_like(mask)
    for player in Player:
        color = board.color_of(player)
        for ball in board.balls(player):
            if ball.color != color:
                raise BoardInvariantError(f"{player.name} inventory holds a {ball.color.name} ball")
            if ball.position is None:
                raise BoardInvariantError(f"{player.name} ball without a position")
            row, diag = ball.position
            if not mask[row, diag]:
                raise BoardInvariantError(f"ball at ({ball.position}) is off the board")
            if claimed[row, diag]:
                raise BoardInvariantError(f"two balls claim ({ball.position})")
            if grid[row, diag] != color:
                raise BoardInvariantError(f"slot ({ball.position}) does not hold the {color.name} ball")
            claimed[row, diag] = True

    occupied = (grid == Color.BLACK) | (grid == Color.WHITE)
    if not np.array_equal(occupied, claimed):
        raise BoardInvariantError("occupied slots without a ball in any inventory")

    for player in Player:
        if len(board.balls(player)) > board.ball_amount:
            raise BoardInvariantError(f"{player.name} has more balls than it started with")
