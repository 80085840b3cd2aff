"""
Ordering Module - Reorder colors before the search starts.

Long flows constrain the board the most, so extending them first lets
the pruning rules cut branches earlier.
"""

import logging
from typing import List

from .board import Board, Flow, distance

logger = logging.getLogger(__name__)


def endpoint_distance(flow: Flow) -> float:
    """Euclidean distance between a path's first and last stored points."""
    return distance(flow[0], flow[-1])


def sort_colors(board: Board, reverse: bool = False) -> Board:
    """
    Build a new board with colors ordered by endpoint distance.

    Each color is inserted before the first entry that ranks strictly
    lower, so colors with equal distance keep their original order in
    both directions.

    Args:
        board: Board to reorder (left unchanged)
        reverse: Shortest flows first instead of longest first

    Returns:
        New board whose grid values match the new color indices
    """
    result = board.clone()

    ordered: List[Flow] = []
    for flow in result.flows:
        key = endpoint_distance(flow)
        for i, other in enumerate(ordered):
            other_key = endpoint_distance(other)
            if (key < other_key) if reverse else (key > other_key):
                ordered.insert(i, flow)
                break
        else:
            ordered.append(flow)

    result.flows = ordered
    for index, flow in enumerate(result.flows):
        for row, col in flow:
            result.grid[row, col] = index + 1

    direction = "ascending" if reverse else "descending"
    logger.debug(
        f"Colors ordered by {direction} distance: "
        f"{[round(endpoint_distance(flow), 2) for flow in ordered]}"
    )
    return result
