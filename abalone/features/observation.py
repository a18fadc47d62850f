from __future__ import annotations

from typing import Tuple

import numpy as np

from abalone.core import Board, Player

BOARD_CHANNELS = 3  # human balls, machine balls, playable cells
AUX_VECTOR_SIZE = 4  # next player one-hot (2) + remaining ball fraction per side (2)


def build_board_tensor(board: Board) -> np.ndarray:
    """Return board tensor with shape (3, size, size) channel-first."""
    grid = board.to_array()
    tensor = np.zeros((BOARD_CHANNELS, board.size, board.size), dtype=np.float32)
    tensor[0] = grid == int(board.human_color)
    tensor[1] = grid == int(board.machine_color)
    tensor[2] = grid >= 0
    return tensor


def build_aux_vector(board: Board) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[int(board.next_player())] = 1.0
    amount = max(1, board.ball_amount)
    aux[2] = len(board.balls(Player.HUMAN)) / amount
    aux[3] = len(board.balls(Player.MACHINE)) / amount
    return aux


def board_to_numpy(board: Board) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(board), build_aux_vector(board)
