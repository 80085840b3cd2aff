"""
Sequential Strategy - Depth-first backtracking on a single thread.
"""

import logging
import sys
import time
from typing import List, Optional, Tuple

from ..base import SolverStrategy
from ..board import Board
from ..move import Move
from ..context import SolutionContext
from ..solution import SearchStats, Solution
from ..factory import register_strategy

logger = logging.getLogger(__name__)

Step = Tuple[Move, Board]


@register_strategy
class SequentialStrategy(SolverStrategy):
    """
    Classic recursive backtracking.

    Moves are tried in generator order on a clone of the current board.
    The first solved board ends the search, and the boards leading to
    it are collected while the recursion unwinds. Recursion depth is
    bounded by the number of cells.
    """
    name = "sequential"
    description = "Sequential - depth-first recursive backtracking"
    aliases = ("backtrack",)

    PROGRESS_INTERVAL = 5000

    def solve(self, context: SolutionContext) -> Solution:
        """
        Run the depth-first search.

        Args:
            context: Solution context with board and cancellation

        Returns:
            Solution with the boards from the first move to the solved board
        """
        start_time = time.perf_counter()
        board = context.board
        stats = SearchStats()

        if board.solved():
            return self._build_solution(board, [], [], stats, start_time, was_cancelled=False)

        previous_limit = sys.getrecursionlimit()
        limit = board.rows * board.cols + 100
        if previous_limit < limit:
            sys.setrecursionlimit(limit)
        try:
            steps = self._backtrack(board, context, stats)
        finally:
            sys.setrecursionlimit(previous_limit)

        if steps is None:
            return self._build_solution(
                board, None, [], stats, start_time,
                was_cancelled=self._check_cancelled(context)
            )
        return self._build_solution(
            board,
            [child for _, child in steps],
            [move for move, _ in steps],
            stats, start_time, was_cancelled=False
        )

    def _backtrack(
        self,
        board: Board,
        context: SolutionContext,
        stats: SearchStats
    ) -> Optional[List[Step]]:
        """
        Explore every move from board, depth first.

        Returns:
            Steps from board to a solved board, or None if exhausted
        """
        if self._check_cancelled(context):
            return None

        moves = self.next_moves(board)
        for move in moves:
            child = self.apply_move(board, move)
            nodes = stats.record_node(child)
            if nodes % self.PROGRESS_INTERVAL == 0:
                self._report_progress(context, stats)

            if child.solved():
                return [(move, child)]

            steps = self._backtrack(child, context, stats)
            if steps is not None:
                steps.insert(0, (move, child))
                return steps

        if not moves:
            stats.record_leaf()
        return None
