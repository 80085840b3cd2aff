"""
Solver Package - Backtracking search for flow puzzles.

A board holds a grid and one path per color. The search extends one
path at a time, cloning the board for every move, until every cell is
filled and every path connects its two endpoints.

Public API:
    - Board: Grid and per-color paths
    - Move: Extension of one color into one cell
    - MoveGenerator: Legal moves with optional pruning
    - sort_colors(): Reorder colors by endpoint distance
    - Solution: Result of a search, with metrics
    - SolutionContext: Shared context for strategies
    - SolverStrategy: Abstract base for strategies
    - create_strategy(): Factory function

Usage:
    from plumber.reader import load_board
    from plumber.solver import create_strategy, sort_colors, SolutionContext

    board = sort_colors(load_board("board.txt"))
    strategy = create_strategy("sequential", canonical=True, detect_dead=True)
    solution = strategy.solve(SolutionContext(board=board))

    if solution.is_solved:
        print(solution.final_board)
"""

# Core data structures
from .board import (
    Board,
    Point,
    BoardError,
    ColorIndexError,
    OutOfGridError,
    OccupiedCellError,
    AdjacencyError,
    are_adjacent,
    all_adjacent,
)
from .move import Move
from .moves import MoveGenerator, find_dead_cell, surroundings
from .ordering import sort_colors
from .solution import Solution, SolutionMetrics, SearchStats
from .context import SolutionContext

# Strategy framework
from .base import SolverStrategy, SearchInvariantError
from .factory import (
    create_strategy,
    get_strategy_class,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "Board",
    "Point",
    "Move",
    "Solution",
    "SolutionMetrics",
    "SearchStats",
    "SolutionContext",
    # Errors
    "BoardError",
    "ColorIndexError",
    "OutOfGridError",
    "OccupiedCellError",
    "AdjacencyError",
    "SearchInvariantError",
    # Search
    "MoveGenerator",
    "find_dead_cell",
    "surroundings",
    "sort_colors",
    "are_adjacent",
    "all_adjacent",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_class",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
]
