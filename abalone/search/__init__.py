"""Machine move selection: board scoring and exhaustive lookahead."""

from .evaluation import ball_amount_value, edge_value, evaluate_board, win_bonus
from .minimax import (
    MinimaxSearch,
    SearchCancelled,
    SearchNode,
    SearchResult,
    choose_machine_move,
    successor_boards,
)
from .background import BackgroundSearch

__all__ = [
    "ball_amount_value",
    "edge_value",
    "evaluate_board",
    "win_bonus",
    "MinimaxSearch",
    "SearchCancelled",
    "SearchNode",
    "SearchResult",
    "choose_machine_move",
    "successor_boards",
    "BackgroundSearch",
]
