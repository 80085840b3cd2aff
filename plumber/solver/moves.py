"""
Move Generator Module - Legal next moves with optional pruning.

Only one color is extended at a time: the first color whose path is not
yet connected. Candidates are the four neighbours of its growing end,
tried in the order up, down, left, right.
"""

import logging
from typing import List

from .board import Board, Point, adjacent_to_any, all_adjacent
from .move import Move

logger = logging.getLogger(__name__)


def surroundings(point: Point) -> List[Point]:
    """Orthogonal neighbours of a point: up, down, left, right."""
    row, col = point
    return [(row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)]


def find_dead_cell(board: Board, point: Point, color: int) -> bool:
    """
    Check if coloring a cell would leave a neighbouring cell unfillable.

    A cell with n neighbours inside the grid can be surrounded by at most
    n-1 distinct colors and still be crossed by a path. Each empty
    neighbour of point is checked as if point already held color.

    Args:
        board: Current board
        point: Cell about to be colored
        color: 1-based color value the cell would receive

    Returns:
        True if some neighbour of point would become dead
    """
    for p2 in surroundings(point):
        if not board.in_grid(p2) or board.get(p2) != 0:
            continue

        colors = [color]
        slots = 1  # point itself
        for p3 in surroundings(p2):
            if p3 == point or not board.in_grid(p3):
                continue
            slots += 1
            value = board.get(p3)
            if value == 0:
                continue
            if value not in colors and len(colors) < 4:
                colors.append(value)

        # Four distinct colors leave no free slot and are never reported
        if len(colors) < 4 and len(colors) >= slots:
            return True
    return False


class MoveGenerator:
    """
    Enumerates legal moves for the first unconnected color.

    Attributes:
        canonical: Reject cells touching the color's own earlier path
        detect_dead: Reject cells that would create a dead neighbour
    """

    def __init__(self, canonical: bool = False, detect_dead: bool = False):
        self.canonical = canonical
        self.detect_dead = detect_dead

    def next_moves(self, board: Board) -> List[Move]:
        """
        Find legal moves on the board.

        Assumes every stored endpoint lies inside the grid.

        Args:
            board: Current board

        Returns:
            Moves for a single color in direction order, or an empty
            list if every path is connected or the chosen one is stuck
        """
        for color_index, flow in enumerate(board.flows):
            if all_adjacent(flow):
                continue
            return self._moves_for(board, color_index, flow)
        return []

    def _moves_for(self, board: Board, color_index: int, flow: List[Point]) -> List[Move]:
        moves = []
        head = flow[-2]
        for p in surroundings(head):
            if not board.in_grid(p) or board.get(p) != 0:
                continue
            if self.canonical and len(flow) > 2 and adjacent_to_any(p, flow[:-3]):
                continue
            if self.detect_dead and find_dead_cell(board, p, color_index + 1):
                continue
            moves.append(Move(color=color_index, point=p))
        return moves
