from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board
from .geometry import DIRECTIONS
from .state import Player


@dataclass(frozen=True)
class Action:
    from_row: int
    from_diag: int
    to_row: int
    to_diag: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.from_row, self.from_diag, self.to_row, self.to_diag)


def action_vector_size(size: int) -> int:
    return size * size * len(DIRECTIONS)


@dataclass(frozen=True)
class ActionVector:
    origin: Tuple[int, int]
    direction_index: int

    def to_action(self) -> Action:
        d_row, d_diag = DIRECTIONS[self.direction_index]
        return Action(self.origin[0], self.origin[1], self.origin[0] + d_row, self.origin[1] + d_diag)

    @staticmethod
    def from_action(action: Action) -> "ActionVector":
        direction = (action.to_row - action.from_row, action.to_diag - action.from_diag)
        if direction not in DIRECTIONS:
            raise ValueError(f"Action {action.as_tuple()} is not a single hex step.")
        return ActionVector((action.from_row, action.from_diag), DIRECTIONS.index(direction))

    def to_index(self, size: int) -> int:
        row, diag = self.origin
        if not (0 <= row < size and 0 <= diag < size):
            raise ValueError("Action origin out of range.")
        return (row * size + diag) * len(DIRECTIONS) + self.direction_index

    @staticmethod
    def from_index(index: int, size: int) -> "ActionVector":
        if not 0 <= index < action_vector_size(size):
            raise ValueError("Action index out of range.")
        direction_index = index % len(DIRECTIONS)
        index //= len(DIRECTIONS)
        return ActionVector((index // size, index % size), direction_index)


def encode_action(action: Action, size: int) -> int:
    return ActionVector.from_action(action).to_index(size)


def decode_action(index: int, size: int) -> Action:
    return ActionVector.from_index(index, size).to_action()


def enumerate_legal_actions(board: Board, player: Optional[Player] = None) -> List[Action]:
    """All legal single-step moves for ``player`` (the side to move by default)."""
    if player is None:
        player = board.next_player()

    legal: List[Action] = []
    for ball in board.balls(player):
        row, diag = ball.position
        for d_row, d_diag in DIRECTIONS:
            if board.is_legal_move(row, diag, row + d_row, diag + d_diag):
                legal.append(Action(row, diag, row + d_row, diag + d_diag))
    return legal
