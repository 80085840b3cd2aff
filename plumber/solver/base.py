"""
Base Strategy Module - Abstract base class for search strategies.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .board import Board, BoardError
from .move import Move
from .moves import MoveGenerator
from .context import SolutionContext
from .solution import SearchStats, Solution, SolutionMetrics

logger = logging.getLogger(__name__)


class SearchInvariantError(RuntimeError):
    """A generated move was rejected by the board it was generated for."""


class SolverStrategy(ABC):
    """
    Abstract base class for all search strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
        aliases: Extra names accepted by the factory
        generator: Move generator shared by every search step
    """
    name: str = "base"
    description: str = "Base strategy"
    aliases: Tuple[str, ...] = ()

    def __init__(self, canonical: bool = False, detect_dead: bool = False):
        """
        Initialize strategy.

        Args:
            canonical: Skip moves that touch the color's own earlier path
            detect_dead: Skip moves that leave an unfillable neighbour
        """
        self.generator = MoveGenerator(canonical=canonical, detect_dead=detect_dead)

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for a solution of the context's board.

        Must periodically check context.is_cancelled() and stop
        descending if True.

        Args:
            context: Solution context with board, cancellation, progress

        Returns:
            Solution, solved or not, with metrics
        """
        pass

    def next_moves(self, board: Board) -> List[Move]:
        return self.generator.next_moves(board)

    def apply_move(self, board: Board, move: Move) -> Board:
        """
        Clone the board and apply a generated move to the clone.

        Args:
            board: Parent board (left unchanged)
            move: Move produced by the generator for this board

        Returns:
            Child board

        Raises:
            SearchInvariantError: If the board rejects the move, which
                means the generator offered an illegal move
        """
        child = board.clone()
        try:
            child.color_cell(move.color, move.point)
        except BoardError as e:
            logger.error(f"Backtrack ERROR applying move {move}: {e}")
            logger.error(f"Board:\n{board}")
            raise SearchInvariantError(f"Generated move {move} rejected: {e}") from e
        return child

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Solution context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()

    def _report_progress(self, context: SolutionContext, stats: SearchStats) -> None:
        total = context.board.rows * context.board.cols
        if total > 0:
            context.report_progress(
                min(0.99, stats.max_filled / total),
                f"{stats.nodes} states explored, {stats.max_filled}/{total} cells filled"
            )

    def _build_solution(
        self,
        initial: Board,
        path: Optional[List[Board]],
        moves: List[Move],
        stats: SearchStats,
        start_time: float,
        was_cancelled: bool
    ) -> Solution:
        """Build Solution object from computation results."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        solved = path is not None

        solution = Solution(
            moves=list(moves) if solved else [],
            board_states=[initial] + path if solved else [initial],
            is_solved=solved,
            was_cancelled=was_cancelled and not solved,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=stats.nodes,
                leaves=stats.leaves,
                strategy_name=self.name
            )
        )
        self._log_outcome(solution)
        return solution

    def _log_outcome(self, solution: Solution) -> None:
        metrics = solution.metrics
        logger.info(
            f"[{self.name}] Backtrack stats: {metrics.computation_time_ms:.1f}ms, "
            f"{metrics.states_explored} states explored, "
            f"{metrics.time_per_state_us:.1f}us per state, "
            f"got to {metrics.leaves} leaves"
        )
        if solution.is_solved:
            logger.info(
                f"[{self.name}] SOLVED in {metrics.computation_time_ms:.1f}ms, "
                f"{solution.move_count} steps and {metrics.states_explored} states explored"
            )
        else:
            logger.info(
                f"[{self.name}] Not solved: {solution.message} "
                f"(spent {metrics.computation_time_ms:.1f}ms)"
            )
