from __future__ import annotations

from typing import Any, Dict

from .board import Board
from .state import Player


def board_to_dict(board: Board) -> Dict[str, Any]:
    last = board.last_player
    return {
        "size": board.size,
        "level": board.level,
        "machine_opens": board.machine_opens,
        "last_player": None if last is None else last.name,
        "ball_amount": board.ball_amount,
        "human": [list(position) for position in board.positions(Player.HUMAN)],
        "machine": [list(position) for position in board.positions(Player.MACHINE)],
    }


def board_from_dict(data: Dict[str, Any]) -> Board:
    last = data.get("last_player")
    return Board.from_positions(
        int(data["size"]),
        human=data.get("human", []),
        machine=data.get("machine", []),
        machine_opens=bool(data.get("machine_opens", False)),
        level=int(data.get("level", 2)),
        last_player=None if last is None else Player[last],
        ball_amount=data.get("ball_amount"),
    )
