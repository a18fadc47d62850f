"""Coordinate helpers for a hexagonal board stored in a square array.

A cell is addressed by ``(row, diag)``. The third hex axis is derived as
``other_diag = row - diag + size // 2``; a cell is playable when all three
coordinates lie inside ``[0, size)``.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (0, 1),
    (1, 1),
    (-1, 0),
    (0, -1),
    (-1, -1),
)


def is_inside_array(size: int, row: int, diag: int) -> bool:
    return 0 <= row < size and 0 <= diag < size


def distance_to_edge(size: int, row: int, diag: int) -> int:
    """Minimum distance to the hex boundary over all three axes.

    0 on the outer ring, growing towards the centre and ``-1`` for a cell one
    step beyond the playable region.
    """
    other_diag = row - diag + size // 2
    min_row = min(row, size - row - 1)
    min_diag = min(diag, size - diag - 1)
    min_other = min(other_diag, size - other_diag - 1)
    return min(min_row, min_diag, min_other)


def has_slot(size: int, row: int, diag: int) -> bool:
    return is_inside_array(size, row, diag) and distance_to_edge(size, row, diag) >= 0


def is_on_edge(size: int, row: int, diag: int) -> bool:
    """True for a coordinate just off the board, i.e. where a ball falls out."""
    return distance_to_edge(size, row, diag) == -1


def min_diag(row: int, size: int) -> int:
    return max(0, row - size // 2)


def max_diag(row: int, size: int) -> int:
    return min(row + size // 2, size - 1)


def is_adjacent_step(d_row: int, d_diag: int) -> bool:
    """Whether a displacement is one of the six hex neighbour steps."""
    distance_row = abs(d_row)
    distance_diag = abs(d_diag)
    distance_cross = abs(d_row - d_diag)
    return 0 < distance_row + distance_diag < 3 and distance_cross < 2


def playable_mask(size: int) -> np.ndarray:
    mask = np.zeros((size, size), dtype=bool)
    for row in range(size):
        mask[row, min_diag(row, size) : max_diag(row, size) + 1] = True
    return mask


def distance_map(size: int) -> np.ndarray:
    """Distance to the edge for every array cell (negative outside the hex)."""
    rows, diags = np.indices((size, size))
    other = rows - diags + size // 2
    stacked = np.stack(
        [rows, size - rows - 1, diags, size - diags - 1, other, size - other - 1]
    )
    return stacked.min(axis=0)
