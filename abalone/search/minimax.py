from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from abalone.core import DIRECTIONS, Board, Player

from .evaluation import evaluate_board

logger = logging.getLogger(__name__)

EvaluationFn = Callable[[Board], float]


class SearchCancelled(RuntimeError):
    pass


class SearchNode:
    __slots__ = ("board", "children")

    def __init__(self, board: Board) -> None:
        self.board: Board = board
        self.children: List["SearchNode"] = []

    def add_child(self, child: "SearchNode") -> None:
        self.children.append(child)

    def has_children(self) -> bool:
        return bool(self.children)


@dataclass
class SearchResult:
    board: Optional[Board]
    value: float
    nodes: int
    candidates: int


def _check_cancel(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise SearchCancelled("Search cancelled.")


def successor_boards(board: Board) -> List[Board]:
    """Boards reachable by one legal move of the side to move, in ball then direction order."""
    player = board.next_player()
    boards: List[Board] = []
    for ball in board.balls(player):
        row, diag = ball.position
        for d_row, d_diag in DIRECTIONS:
            next_board = board.move(row, diag, row + d_row, diag + d_diag)
            if next_board is not None:
                boards.append(next_board)
    return boards


class MinimaxSearch:
    """Exhaustive fixed-depth lookahead for the machine.

    Every node adds its own static score to the min (machine to move) or max
    (human to move) of its children's scores, so a line is judged by the sum
    of the boards along it. No pruning is applied.
    """

    def __init__(self, evaluator: Optional[EvaluationFn] = None) -> None:
        self.evaluator = evaluator or evaluate_board

    # ------------------------------------------------------------------
    def run(
        self,
        board: Board,
        *,
        depth: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> SearchResult:
        root = self.build_tree(board, depth=depth, cancel_event=cancel_event)
        nodes = _count_nodes(root)
        best, value = self.select_best_child(root, cancel_event=cancel_event)
        logger.debug(
            "searched %d nodes at depth %d, %d candidate moves, best value %.1f",
            nodes,
            depth or board.level,
            len(root.children),
            value,
        )
        return SearchResult(
            board=None if best is None else best.board,
            value=value,
            nodes=nodes,
            candidates=len(root.children),
        )

    def build_tree(
        self,
        board: Board,
        *,
        depth: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> SearchNode:
        depth = board.level if depth is None else int(depth)
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}.")
        root = SearchNode(board)
        self._expand(root, depth, cancel_event)
        return root

    def _expand(self, node: SearchNode, depth: int, cancel_event: Optional[threading.Event]) -> None:
        _check_cancel(cancel_event)
        for child_board in successor_boards(node.board):
            node.add_child(SearchNode(child_board))
        depth -= 1
        if depth > 0:
            for child in node.children:
                self._expand(child, depth, cancel_event)

    def score_node(self, node: SearchNode, *, cancel_event: Optional[threading.Event] = None) -> float:
        own = self.evaluator(node.board)
        if not node.has_children():
            return own
        _check_cancel(cancel_event)
        scores = [self.score_node(child, cancel_event=cancel_event) for child in node.children]
        if node.board.next_player() == Player.MACHINE:
            return own + min(scores)
        return own + max(scores)

    def select_best_child(
        self,
        root: SearchNode,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Tuple[Optional[SearchNode], float]:
        best_node: Optional[SearchNode] = None
        best_value = float("-inf")
        for child in root.children:
            _check_cancel(cancel_event)
            value = self.score_node(child, cancel_event=cancel_event)
            if best_node is None or value > best_value:
                best_node = child
                best_value = value
        return best_node, best_value


def _count_nodes(node: SearchNode) -> int:
    return 1 + sum(_count_nodes(child) for child in node.children)


def choose_machine_move(
    board: Board,
    *,
    cancel_event: Optional[threading.Event] = None,
    evaluator: Optional[EvaluationFn] = None,
) -> Board:
    """Board after the machine's chosen move, or ``board`` itself when the machine cannot play."""
    if board.is_game_over():
        logger.debug("game is over, machine does not move")
        return board
    if board.next_player() != Player.MACHINE:
        logger.debug("machine is not to move, turn stays with %s", board.next_player().name)
        return board
    result = MinimaxSearch(evaluator).run(board, cancel_event=cancel_event)
    if result.board is None:
        logger.debug("machine has no legal move")
        return board
    return result.board
