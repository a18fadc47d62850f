from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from abalone.core import Board

from .minimax import EvaluationFn, SearchCancelled, choose_machine_move

logger = logging.getLogger(__name__)


class BackgroundSearch:
    """Runs the machine's move search off the caller's thread.

    One instance drives at most one search. ``cancel`` raises a flag the
    search checks between node expansions; a cancelled search ends without a
    result and the board it started from stays valid.
    """

    def __init__(
        self,
        board: Board,
        *,
        evaluator: Optional[EvaluationFn] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self.board = board
        self._evaluator = evaluator
        self._cancel_event = threading.Event()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="abalone-search")
        self._future: Optional[Future] = None

    def start(self) -> Future:
        if self._future is not None:
            raise RuntimeError("Search already started.")
        logger.info("starting machine search at level %d", self.board.level)
        self._future = self._executor.submit(self._run)
        return self._future

    def _run(self) -> Optional[Board]:
        try:
            return choose_machine_move(self.board, cancel_event=self._cancel_event, evaluator=self._evaluator)
        except SearchCancelled:
            logger.info("machine search cancelled")
            return None

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def result(self, timeout: Optional[float] = None) -> Optional[Board]:
        """Board after the machine's move, or ``None`` when the search was cancelled."""
        if self._future is None:
            raise RuntimeError("Search has not been started.")
        return self._future.result(timeout=timeout)

    def close(self) -> None:
        self.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "BackgroundSearch":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
