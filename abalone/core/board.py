from __future__ import annotations

import threading
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .geometry import (
    DIRECTIONS,
    distance_to_edge,
    is_adjacent_step,
    is_inside_array,
    is_on_edge,
    max_diag,
    min_diag,
    playable_mask,
)
from .state import Ball, BoardInvariantError, Color, Player, Position, Slot

MIN_SIZE = 7
DEFAULT_SIZE = 9
DEFAULT_LEVEL = 2
ELIMINATION = 6
OUTSIDE = -1

Inventory = Tuple[Ball, ...]


class _MovePlan(NamedTuple):
    kind: str
    destination: Optional[Position] = None


_OUT = "out"
_STEP = "step"
_PUSH = "push"


def _check_level(level: int) -> int:
    if int(level) < 1:
        raise ValueError(f"Search level must be at least 1, got {level}.")
    return int(level)


def _fill_row(
    grid: np.ndarray,
    row: int,
    color: Color,
    balls: List[Ball],
    *,
    skip_outer_slots: bool,
) -> None:
    size = grid.shape[0]
    diags = list(range(min_diag(row, size), max_diag(row, size) + 1))
    if skip_outer_slots:
        diags = diags[2:-2]
    for diag in diags:
        grid[row, diag] = color
        balls.append(Ball(color, Position(row, diag)))


def _initial_layout(size: int, colors: Tuple[Color, Color]) -> Tuple[np.ndarray, Tuple[Inventory, Inventory]]:
    grid = np.full((size, size), OUTSIDE, dtype=np.int8)
    grid[playable_mask(size)] = Color.NONE

    human: List[Ball] = []
    for row in (0, 1):
        _fill_row(grid, row, colors[Player.HUMAN], human, skip_outer_slots=False)
    _fill_row(grid, 2, colors[Player.HUMAN], human, skip_outer_slots=True)

    machine: List[Ball] = []
    _fill_row(grid, size - 3, colors[Player.MACHINE], machine, skip_outer_slots=True)
    for row in (size - 2, size - 1):
        _fill_row(grid, row, colors[Player.MACHINE], machine, skip_outer_slots=False)
    # The machine walks its balls from the far rows inwards.
    machine.reverse()
    return grid, (tuple(human), tuple(machine))


class Board:
    """Abalone position plus the rules that move from one position to the next.

    A Board is never modified after construction: ``move`` and the other
    commands hand back a new Board and leave the receiver as it was.

    The human's home rows are the lowest rows and the machine's the highest.
    The side that opens plays black. Compared to classic Abalone a side
    without a legal move passes, a push line may hold more than three own
    balls, broadside moves are not allowed and the game may never end.
    """

    __slots__ = (
        "_size",
        "_machine_opens",
        "_colors",
        "_level",
        "_ball_amount",
        "_grid",
        "_inventories",
        "_last_player",
        "_next_player",
    )

    def __init__(
        self,
        size: int = DEFAULT_SIZE,
        machine_opens: bool = False,
        level: int = DEFAULT_LEVEL,
    ) -> None:
        if size < MIN_SIZE or size % 2 == 0:
            raise ValueError(f"Invalid board size {size}: must be odd and at least {MIN_SIZE}.")
        self._size = int(size)
        self._machine_opens = bool(machine_opens)
        if self._machine_opens:
            self._colors = (Color.WHITE, Color.BLACK)
        else:
            self._colors = (Color.BLACK, Color.WHITE)
        self._level = _check_level(level)
        self._grid, self._inventories = _initial_layout(self._size, self._colors)
        self._ball_amount = len(self._inventories[Player.HUMAN])
        self._last_player: Optional[Player] = None
        self._next_player: Optional[Player] = None

    @classmethod
    def from_positions(
        cls,
        size: int = DEFAULT_SIZE,
        *,
        human: Sequence[Sequence[int]] = (),
        machine: Sequence[Sequence[int]] = (),
        machine_opens: bool = False,
        level: int = DEFAULT_LEVEL,
        last_player: Optional[Player] = None,
        ball_amount: Optional[int] = None,
    ) -> "Board":
        """Build a board holding balls at the given coordinates, in inventory order.

        ``ball_amount`` is the starting count used for the elimination rule and
        defaults to the count of the regular opening layout for ``size``.
        """
        template = cls(size, machine_opens, level)
        grid = np.full((template._size, template._size), OUTSIDE, dtype=np.int8)
        grid[playable_mask(template._size)] = Color.NONE
        inventories: List[Inventory] = []
        for player, coords in ((Player.HUMAN, human), (Player.MACHINE, machine)):
            color = template._colors[player]
            balls: List[Ball] = []
            for coord in coords:
                position = Position(*coord)
                if not template.is_valid_position(*position):
                    raise ValueError(f"({position}) is not on the board.")
                if grid[position] != Color.NONE:
                    raise ValueError(f"({position}) is occupied twice.")
                grid[position] = color
                balls.append(Ball(color, position))
            inventories.append(tuple(balls))
        amount = template._ball_amount if ball_amount is None else int(ball_amount)
        return template._derive(
            grid,
            (inventories[0], inventories[1]),
            None if last_player is None else Player(last_player),
            ball_amount=amount,
        )

    def _derive(
        self,
        grid: np.ndarray,
        inventories: Tuple[Inventory, Inventory],
        last_player: Optional[Player],
        *,
        level: Optional[int] = None,
        ball_amount: Optional[int] = None,
    ) -> "Board":
        board = object.__new__(Board)
        board._size = self._size
        board._machine_opens = self._machine_opens
        board._colors = self._colors
        board._level = self._level if level is None else level
        board._ball_amount = self._ball_amount if ball_amount is None else ball_amount
        board._grid = grid
        board._inventories = inventories
        board._last_player = last_player
        board._next_player = None
        return board

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self._size

    @property
    def level(self) -> int:
        return self._level

    @property
    def ball_amount(self) -> int:
        return self._ball_amount

    @property
    def machine_opens(self) -> bool:
        return self._machine_opens

    @property
    def opening_player(self) -> Player:
        return Player.MACHINE if self._machine_opens else Player.HUMAN

    @property
    def human_color(self) -> Color:
        return self._colors[Player.HUMAN]

    @property
    def machine_color(self) -> Color:
        return self._colors[Player.MACHINE]

    @property
    def last_player(self) -> Optional[Player]:
        return self._last_player

    def color_of(self, player: Player) -> Color:
        return self._colors[player]

    def player_of(self, color: Color) -> Player:
        if color == Color.NONE:
            raise ValueError("Empty slots belong to no player.")
        return Player.HUMAN if color == self._colors[Player.HUMAN] else Player.MACHINE

    def balls(self, player: Player) -> Inventory:
        return self._inventories[player]

    def positions(self, player: Player) -> List[Position]:
        return [ball.position for ball in self._inventories[player]]

    def number_of_balls(self, color: Color) -> int:
        return len(self._inventories[self.player_of(color)])

    def is_valid_position(self, row: int, diag: int) -> bool:
        return is_inside_array(self._size, row, diag) and self._grid[row, diag] != OUTSIDE

    def is_valid_target(self, row: int, diag: int) -> bool:
        return self.is_valid_position(row, diag) or is_on_edge(self._size, row, diag)

    def distance_to_edge(self, row: int, diag: int) -> int:
        return distance_to_edge(self._size, row, diag)

    def color_at(self, row: int, diag: int) -> Optional[Color]:
        """Colour of the ball at a slot, ``Color.NONE`` if empty, ``None`` off the board."""
        if not self.is_valid_position(row, diag):
            return None
        return Color(int(self._grid[row, diag]))

    def slot(self, row: int, diag: int) -> Optional[Slot]:
        if not self.is_valid_position(row, diag):
            return None
        value = self._grid[row, diag]
        if value == Color.NONE:
            return Slot()
        return Slot(self._ball_at(Position(row, diag)))

    def to_array(self) -> np.ndarray:
        """Copy of the backing grid: -1 outside the hex, 0 empty, else the ball colour."""
        return self._grid.copy()

    def _ball_at(self, position: Position) -> Ball:
        side, index = self._locate(self._grid, self._inventories, position)
        return self._inventories[side][index]

    # ------------------------------------------------------------------
    # Turn order and game end
    # ------------------------------------------------------------------
    def next_player(self) -> Player:
        if self._next_player is None:
            if self._last_player is None:
                self._next_player = self.opening_player
            else:
                other = self._last_player.opponent
                self._next_player = other if self.can_move(other) else self._last_player
        return self._next_player

    def can_move(self, player: Player) -> bool:
        for ball in self._inventories[player]:
            row, diag = ball.position
            for d_row, d_diag in DIRECTIONS:
                if self.is_legal_move(row, diag, row + d_row, diag + d_diag):
                    return True
        return False

    def balls_lost(self, player: Player) -> int:
        return self._ball_amount - len(self._inventories[player])

    def is_game_over(self) -> bool:
        return (
            self.balls_lost(Player.HUMAN) >= ELIMINATION
            or self.balls_lost(Player.MACHINE) >= ELIMINATION
        )

    def winner(self) -> Optional[Player]:
        if not self.is_game_over():
            return None
        if self.balls_lost(Player.HUMAN) >= ELIMINATION:
            return Player.MACHINE
        return Player.HUMAN

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def with_level(self, level: int) -> "Board":
        return self._derive(self._grid, self._inventories, self._last_player, level=_check_level(level))

    def is_legal_move(self, row_from: int, diag_from: int, row_to: int, diag_to: int) -> bool:
        return self._resolve_move(row_from, diag_from, row_to, diag_to) is not None

    def move(self, row_from: int, diag_from: int, row_to: int, diag_to: int) -> Optional["Board"]:
        """Play one ball from ``from`` to the neighbouring ``to`` cell.

        Returns the resulting Board, or ``None`` when the move is illegal. A
        target one step beyond the edge drops the ball off the board; a target
        holding a ball turns the move into a push of the whole line behind it.
        """
        plan = self._resolve_move(row_from, diag_from, row_to, diag_to)
        if plan is None:
            return None

        grid = self._grid.copy()
        inventories = list(self._inventories)
        origin = Position(row_from, diag_from)
        if plan.kind == _OUT:
            self._remove(grid, inventories, origin)
        elif plan.kind == _STEP:
            self._relocate(grid, inventories, origin, Position(row_to, diag_to))
        else:
            vector = (row_to - row_from, diag_to - diag_from)
            self._shift_line(grid, inventories, origin, vector, plan.destination)
        return self._derive(grid, (inventories[0], inventories[1]), self.next_player())

    def machine_move(self, cancel_event: Optional[threading.Event] = None) -> "Board":
        from abalone.search.minimax import choose_machine_move

        return choose_machine_move(self, cancel_event=cancel_event)

    # ------------------------------------------------------------------
    # Move rules
    # ------------------------------------------------------------------
    def _resolve_move(self, row_from: int, diag_from: int, row_to: int, diag_to: int) -> Optional[_MovePlan]:
        if not self.is_valid_position(row_from, diag_from):
            return None
        if self._grid[row_from, diag_from] == Color.NONE:
            return None
        if not self.is_valid_target(row_to, diag_to):
            return None
        d_row = row_to - row_from
        d_diag = diag_to - diag_from
        if not is_adjacent_step(d_row, d_diag):
            return None
        if is_on_edge(self._size, row_to, diag_to):
            return _MovePlan(_OUT)
        if self._grid[row_to, diag_to] == Color.NONE:
            return _MovePlan(_STEP, Position(row_to, diag_to))
        destination = self._sumito(row_from, diag_from, d_row, d_diag)
        if destination is None:
            return None
        return _MovePlan(_PUSH, destination)

    def _sumito(self, row: int, diag: int, d_row: int, d_diag: int) -> Optional[Position]:
        """Count the line starting at ``(row, diag)`` and return the cell it shifts into.

        Own balls are only counted before the first enemy ball; an own ball
        behind an enemy ball makes the push illegal. The push is legal when
        the own balls outnumber the enemy balls.
        """
        own = self._grid[row, diag]
        friendly = 0
        enemy = 0
        while self.is_valid_position(row, diag):
            value = self._grid[row, diag]
            if value == Color.NONE:
                break
            if value == own:
                if enemy > 0:
                    return None
                friendly += 1
            else:
                enemy += 1
            row += d_row
            diag += d_diag
        if friendly > enemy:
            return Position(row, diag)
        return None

    def _shift_line(
        self,
        grid: np.ndarray,
        inventories: List[Inventory],
        origin: Position,
        vector: Tuple[int, int],
        destination: Position,
    ) -> None:
        d_row, d_diag = vector
        current = destination
        before = current.shifted(-d_row, -d_diag)
        if not self.is_valid_position(*before):
            raise BoardInvariantError(f"Line move cannot end behind ({before}).")
        if is_on_edge(self._size, *current):
            # The last ball of the line is pushed off the board.
            self._remove(grid, inventories, before)
            current = before
            before = before.shifted(-d_row, -d_diag)
        elif not self.is_valid_position(*current):
            raise BoardInvariantError(f"Line move destination ({current}) is outside the board.")
        while current != origin:
            self._relocate(grid, inventories, before, current)
            current = before
            before = before.shifted(-d_row, -d_diag)

    def _locate(
        self,
        grid: np.ndarray,
        inventories: Sequence[Inventory],
        position: Position,
    ) -> Tuple[Player, int]:
        value = grid[position]
        if value == Color.NONE or value == OUTSIDE:
            raise BoardInvariantError(f"No ball at ({position}).")
        side = self.player_of(Color(int(value)))
        for index, ball in enumerate(inventories[side]):
            if ball.position == position:
                return side, index
        raise BoardInvariantError(f"Ball at ({position}) is missing from the {side.name} inventory.")

    def _remove(self, grid: np.ndarray, inventories: List[Inventory], position: Position) -> None:
        side, index = self._locate(grid, inventories, position)
        balls = inventories[side]
        inventories[side] = balls[:index] + balls[index + 1 :]
        grid[position] = Color.NONE

    def _relocate(
        self,
        grid: np.ndarray,
        inventories: List[Inventory],
        source: Position,
        target: Position,
    ) -> None:
        side, index = self._locate(grid, inventories, source)
        balls = inventories[side]
        inventories[side] = balls[:index] + (balls[index].moved_to(target),) + balls[index + 1 :]
        grid[target] = grid[source]
        grid[source] = Color.NONE

    # ------------------------------------------------------------------
    def __str__(self) -> str:
        middle = self._size // 2
        lines = []
        for row in range(self._size - 1, -1, -1):
            cells = [
                Color(int(self._grid[row, diag])).symbol
                for diag in range(min_diag(row, self._size), max_diag(row, self._size) + 1)
            ]
            lines.append(" " * abs(middle - row) + " ".join(cells))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"Board(size={self._size}, next={self.next_player().name}, "
            f"human={len(self._inventories[Player.HUMAN])}, "
            f"machine={len(self._inventories[Player.MACHINE])})"
        )
