"""
Solution Module - Search statistics and the result of a strategy run.
"""

import threading
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board
from .move import Move


class SearchStats:
    """
    Node and leaf counters for one search run.

    Safe to update from several worker threads.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._nodes = 0
        self._leaves = 0
        self._max_filled = 0

    def record_node(self, board: Board) -> int:
        """
        Count one explored board.

        Args:
            board: Board produced by the move

        Returns:
            Total nodes explored so far
        """
        filled = board.filled_cells()
        with self._lock:
            self._nodes += 1
            if filled > self._max_filled:
                self._max_filled = filled
            return self._nodes

    def record_leaf(self) -> None:
        """Count one board with no legal moves."""
        with self._lock:
            self._leaves += 1

    @property
    def nodes(self) -> int:
        with self._lock:
            return self._nodes

    @property
    def leaves(self) -> int:
        with self._lock:
            return self._leaves

    @property
    def max_filled(self) -> int:
        """Most filled cells seen on any explored board."""
        with self._lock:
            return self._max_filled


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of boards produced by moves
        leaves: Number of boards with no legal moves
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    leaves: int = 0
    strategy_name: str = ""

    @property
    def time_per_state_us(self) -> float:
        """Average microseconds spent per explored state."""
        if self.states_explored == 0:
            return 0.0
        return self.computation_time_ms * 1000 / self.states_explored


@dataclass
class Solution:
    """
    Result of a strategy computation.

    Attributes:
        moves: Ordered moves from the initial board to the solved board
        board_states: Board after each move (first is the initial board)
        is_solved: True if the last board is solved
        was_cancelled: True if stopped before the search finished
        metrics: Performance statistics
    """
    moves: List[Move] = field(default_factory=list)
    board_states: List[Board] = field(default_factory=list)
    is_solved: bool = False
    was_cancelled: bool = False
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def move_count(self) -> int:
        """Number of moves in solution."""
        return len(self.moves)

    @property
    def path(self) -> List[Board]:
        """Boards produced by the moves, in order."""
        return self.board_states[1:]

    @property
    def final_board(self) -> Optional[Board]:
        """Last board of the solution, or None if there is none."""
        return self.board_states[-1] if self.board_states else None

    @property
    def message(self) -> str:
        """One-line outcome for logging."""
        explored = self.metrics.states_explored
        if self.is_solved:
            return f"Solved in {self.move_count} steps, {explored} states explored"
        if self.was_cancelled:
            return f"Search cancelled. Explored {explored} states"
        return f"No solution found. Explored {explored} states"
