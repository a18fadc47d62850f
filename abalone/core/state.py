from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional


class Color(IntEnum):
    NONE = 0
    BLACK = 1
    WHITE = 2

    @property
    def symbol(self) -> str:
        return {Color.NONE: ".", Color.BLACK: "X", Color.WHITE: "O"}[self]


class Player(IntEnum):
    HUMAN = 0
    MACHINE = 1

    @property
    def opponent(self) -> "Player":
        return Player.MACHINE if self is Player.HUMAN else Player.HUMAN


class BoardInvariantError(RuntimeError):
    """Raised when the board reaches a state the move rules can never produce."""


class Position(NamedTuple):
    row: int
    diag: int

    def shifted(self, d_row: int, d_diag: int) -> "Position":
        return Position(self.row + d_row, self.diag + d_diag)

    def __str__(self) -> str:
        return f"{self.row}, {self.diag}"


class Ball:
    __slots__ = ("_color", "_position")

    def __init__(self, color: Color, position: Optional[Position] = None) -> None:
        if color == Color.NONE:
            raise ValueError("A ball needs a real colour.")
        self._color = Color(color)
        self._position: Optional[Position] = None
        if position is not None:
            self.change_position(position)

    @property
    def color(self) -> Color:
        return self._color

    @property
    def position(self) -> Optional[Position]:
        return self._position

    def change_position(self, position: Position) -> None:
        """Place a ball that has no position yet.

        Boards share placed balls, so a placed ball never moves; use ``moved_to``.
        """
        position = Position(*position)
        if self._position == position:
            raise ValueError(f"Ball is already at ({position}).")
        if self._position is not None:
            raise ValueError(f"Ball at ({self._position}) is already placed.")
        self._position = position

    def moved_to(self, position: Position) -> "Ball":
        """Return a copy of this ball placed at ``position``; the receiver is left untouched."""
        position = Position(*position)
        if self._position == position:
            raise ValueError(f"Ball is already at ({position}).")
        return Ball(self._color, position)

    def __repr__(self) -> str:
        return f"({self._position}, {self._color.symbol})"


@dataclass(frozen=True)
class Slot:
    ball: Optional[Ball] = None

    @property
    def is_empty(self) -> bool:
        return self.ball is None

    @property
    def color(self) -> Color:
        return Color.NONE if self.ball is None else self.ball.color

    def __str__(self) -> str:
        return self.color.symbol
