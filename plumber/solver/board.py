"""
Board Module - Grid and per-color path state for flow puzzles.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

Point = Tuple[int, int]
Flow = List[Point]


class BoardError(ValueError):
    """Base class for rejected board mutations."""


class ColorIndexError(BoardError):
    """Color index does not name a color on the board."""


class OutOfGridError(BoardError):
    """Point lies outside the grid."""


class OccupiedCellError(BoardError):
    """Target cell already holds a color."""


class AdjacencyError(BoardError):
    """Coloring would break the adjacency chain of a path."""


def are_adjacent(point: Point, next_point: Point) -> bool:
    """True if the points differ by exactly one step along one axis."""
    dx = point[0] - next_point[0]
    dy = point[1] - next_point[1]
    return dx * dx + dy * dy == 1


def all_adjacent(flow: Sequence[Point]) -> bool:
    """True if every consecutive pair of points is adjacent."""
    for point, next_point in zip(flow, flow[1:]):
        if not are_adjacent(point, next_point):
            return False
    return True


def adjacent_to_any(point: Point, flow: Sequence[Point]) -> bool:
    return any(are_adjacent(p, point) for p in flow)


def distance(point1: Point, point2: Point) -> float:
    """Euclidean distance between two points."""
    dx = point2[0] - point1[0]
    dy = point2[1] - point1[1]
    return math.sqrt(dx * dx + dy * dy)


class Board:
    """
    Mutable puzzle state: a grid of color values and one path per color.

    Grid cells hold 0 when empty, or the 1-based index of the color
    occupying them. Each path starts at the color's first endpoint and
    ends at its second endpoint; new points are inserted just before
    the second endpoint, so the path grows from the first one.

    Search branches never share a board: every speculative move works
    on a clone().

    Attributes:
        grid: numpy int array of shape (rows, cols)
        flows: One list of points per color
    """

    def __init__(self, grid: np.ndarray, flows: List[Flow]):
        self.grid = grid
        self.flows = flows

    @classmethod
    def empty(cls, rows: int, cols: int) -> 'Board':
        """
        Create a board with no colors.

        Args:
            rows: Number of grid rows
            cols: Number of grid columns

        Returns:
            Board with a zeroed grid
        """
        return cls(grid=np.zeros((rows, cols), dtype=int), flows=[])

    def add_color(self, start: Point, end: Point) -> int:
        """
        Register a new color from its two endpoints.

        Args:
            start: First endpoint (the end the path grows from)
            end: Second endpoint (stays fixed at the tail of the path)

        Returns:
            Index of the new color

        Raises:
            OutOfGridError: If an endpoint is outside the grid
            OccupiedCellError: If an endpoint cell is already used
        """
        for point in (start, end):
            if not self.in_grid(point):
                raise OutOfGridError(f"Endpoint {point} outside {self.rows}x{self.cols} grid")
            if self.get(point) != 0:
                raise OccupiedCellError(f"Endpoint {point} already occupied")
        if start == end:
            raise OccupiedCellError(f"Both endpoints at {start}")

        self.flows.append([tuple(start), tuple(end)])
        value = len(self.flows)
        self.grid[start[0], start[1]] = value
        self.grid[end[0], end[1]] = value
        return value - 1

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]

    @property
    def color_count(self) -> int:
        return len(self.flows)

    def get(self, point: Point) -> int:
        """Cell value at point (0 = empty)."""
        return int(self.grid[point[0], point[1]])

    def in_grid(self, point: Point) -> bool:
        return 0 <= point[0] < self.rows and 0 <= point[1] < self.cols

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def color_cell(self, color_index: int, point: Point) -> None:
        """
        Extend a color's path into an empty cell.

        The point is inserted just before the color's trailing endpoint.
        Everything but that endpoint must still form an adjacent chain,
        otherwise nothing is changed.

        Args:
            color_index: 0-based color index
            point: (row, col) of the cell to color

        Raises:
            ColorIndexError: If color_index is out of range
            OutOfGridError: If point is outside the grid
            OccupiedCellError: If the cell is not empty
            AdjacencyError: If the path would no longer be chained
        """
        if color_index < 0 or color_index >= len(self.flows):
            raise ColorIndexError(f"Color index {color_index} out of range")
        if not self.in_grid(point):
            raise OutOfGridError(f"Point {point} outside {self.rows}x{self.cols} grid")
        if self.get(point) != 0:
            raise OccupiedCellError(f"Cell {point} already occupied")

        flow = self.flows[color_index]
        updated = flow[:-1] + [tuple(point), flow[-1]]
        if not all_adjacent(updated[:-1]):
            raise AdjacencyError(f"Cells are not adjacent: {updated[:-1]}")

        self.grid[point[0], point[1]] = color_index + 1
        self.flows[color_index] = updated

    def is_complete(self, color_index: int) -> bool:
        """True if the color's path connects both endpoints."""
        return all_adjacent(self.flows[color_index])

    def solved(self) -> bool:
        """
        Check whether the puzzle is solved.

        Returns:
            True if no cell is empty and every path is fully chained
        """
        if not self.grid.all():
            return False
        return all(all_adjacent(flow) for flow in self.flows)

    def clone(self) -> 'Board':
        """Deep copy: the grid and every path list are owned by the clone."""
        return Board(grid=self.grid.copy(), flows=[list(flow) for flow in self.flows])

    def __eq__(self, other):
        if not isinstance(other, Board):
            return False
        return np.array_equal(self.grid, other.grid) and self.flows == other.flows

    def __repr__(self):
        return f"Board({self.rows}x{self.cols}, colors={self.color_count}, filled={self.filled_cells()})"

    def __str__(self):
        from ..render import board_string
        return board_string(self)

    def to_list(self) -> List[List[int]]:
        """
        Convert the grid to a nested list.

        Returns:
            2D list of cell values
        """
        return self.grid.tolist()
