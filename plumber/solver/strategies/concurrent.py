"""
Concurrent Strategy - Speculative backtracking on a worker pool.

Every candidate move becomes its own task. Tasks clone their parent
board, so no board is ever shared between threads. Pending tasks wait on
a LIFO frontier, which keeps exploration close to depth first and the
frontier small. The first solved board raises a stop event for the whole
search; tasks check it when they start and before queueing children.
"""

import logging
import os
import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from ..base import SolverStrategy
from ..board import Board
from ..move import Move
from ..context import SolutionContext
from ..solution import SearchStats, Solution
from ..factory import register_strategy

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    """
    One board in the search tree, linked to its parent.

    Attributes:
        board: Board owned by this node
        move: Move that produced the board (None for the root)
        parent: Node the move was applied to
    """
    board: Board
    move: Optional[Move] = None
    parent: Optional["SearchNode"] = None

    def steps(self) -> List["SearchNode"]:
        """Nodes from the first move down to this one."""
        chain = []
        node = self
        while node is not None and node.move is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain


class PendingCounter:
    """Counts queued and running tasks; fires an event when none remain."""

    def __init__(self, idle: threading.Event):
        self._lock = threading.Lock()
        self._count = 0
        self._idle = idle

    def add(self, n: int = 1) -> None:
        with self._lock:
            self._count += n

    def done(self) -> None:
        with self._lock:
            self._count -= 1
            if self._count == 0:
                self._idle.set()


@register_strategy
class ConcurrentStrategy(SolverStrategy):
    """
    Parallel speculative exploration with cooperative cancellation.

    Finds a valid solution like the sequential strategy, though not
    necessarily the same one, and the one found may change between runs.

    Parameters:
        workers: Size of the thread pool (default: CPU count)
    """
    name = "concurrent"
    description = "Concurrent - speculative backtracking on a thread pool"
    aliases = ("parallel",)

    POLL_INTERVAL_SEC = 0.05
    PROGRESS_INTERVAL = 5000

    def __init__(self, canonical: bool = False, detect_dead: bool = False,
                 workers: Optional[int] = None):
        """
        Initialize concurrent strategy.

        Args:
            canonical: Skip moves that touch the color's own earlier path
            detect_dead: Skip moves that leave an unfillable neighbour
            workers: Thread pool size (None = os.cpu_count())
        """
        super().__init__(canonical=canonical, detect_dead=detect_dead)
        self.workers = workers or os.cpu_count() or 4

    def solve(self, context: SolutionContext) -> Solution:
        """
        Explore the search tree on a bounded thread pool.

        Args:
            context: Solution context with board and cancellation

        Returns:
            The first solution delivered, or an unsolved Solution once
            every task is exhausted or the context is cancelled
        """
        start_time = time.perf_counter()
        board = context.board
        stats = SearchStats()

        if board.solved():
            return self._build_solution(board, [], [], stats, start_time, was_cancelled=False)

        frontier: "queue.LifoQueue[SearchNode]" = queue.LifoQueue()
        results: "queue.Queue[SearchNode]" = queue.Queue(maxsize=1)
        stop = threading.Event()
        finished = threading.Event()
        pending = PendingCounter(finished)

        pending.add()
        frontier.put(SearchNode(board=board))

        logger.debug(f"[{self.name}] Starting {self.workers} workers")
        with ThreadPoolExecutor(max_workers=self.workers,
                                thread_name_prefix="backtrack") as pool:
            futures = [
                pool.submit(self._worker, frontier, results, stop, finished,
                            pending, context, stats)
                for _ in range(self.workers)
            ]
            while not finished.wait(self.POLL_INTERVAL_SEC):
                if self._check_cancelled(context):
                    logger.debug(f"[{self.name}] Cancelled by caller")
                    break
            stop.set()

        # Re-raise a worker failure (e.g. SearchInvariantError) here
        for future in futures:
            future.result()

        try:
            node = results.get_nowait()
        except queue.Empty:
            return self._build_solution(
                board, None, [], stats, start_time,
                was_cancelled=self._check_cancelled(context)
            )

        steps = node.steps()
        return self._build_solution(
            board,
            [step.board for step in steps],
            [step.move for step in steps],
            stats, start_time, was_cancelled=False
        )

    def _worker(
        self,
        frontier: "queue.LifoQueue[SearchNode]",
        results: "queue.Queue[SearchNode]",
        stop: threading.Event,
        finished: threading.Event,
        pending: PendingCounter,
        context: SolutionContext,
        stats: SearchStats
    ) -> None:
        """Pull tasks from the frontier until the search stops."""
        try:
            while not stop.is_set():
                try:
                    node = frontier.get(timeout=self.POLL_INTERVAL_SEC)
                except queue.Empty:
                    continue
                try:
                    self._expand(node, frontier, results, stop, finished,
                                 pending, context, stats)
                finally:
                    pending.done()
        except Exception:
            stop.set()
            finished.set()
            raise

    def _expand(
        self,
        node: SearchNode,
        frontier: "queue.LifoQueue[SearchNode]",
        results: "queue.Queue[SearchNode]",
        stop: threading.Event,
        finished: threading.Event,
        pending: PendingCounter,
        context: SolutionContext,
        stats: SearchStats
    ) -> None:
        """Apply every legal move of one node and queue the children."""
        if stop.is_set() or self._check_cancelled(context):
            return

        moves = self.next_moves(node.board)
        if not moves:
            stats.record_leaf()
            return

        children = []
        for move in moves:
            child = SearchNode(board=self.apply_move(node.board, move),
                               move=move, parent=node)
            nodes = stats.record_node(child.board)
            if nodes % self.PROGRESS_INTERVAL == 0:
                self._report_progress(context, stats)

            if child.board.solved():
                self._deliver(child, results, stop, finished)
                return
            children.append(child)

        if stop.is_set():
            return
        # Reversed so the first move is popped first
        pending.add(len(children))
        for child in reversed(children):
            frontier.put(child)

    def _deliver(
        self,
        node: SearchNode,
        results: "queue.Queue[SearchNode]",
        stop: threading.Event,
        finished: threading.Event
    ) -> None:
        try:
            results.put_nowait(node)
            logger.debug(f"[{self.name}] Solution delivered by {threading.current_thread().name}")
        except queue.Full:
            logger.debug(f"[{self.name}] Extra solution discarded")
        stop.set()
        finished.set()
