"""
Move Module - Extends one color's path by one cell.
"""

from dataclasses import dataclass

from .board import Point


@dataclass(frozen=True)
class Move:
    """
    Extend a color's growing end into an empty cell.

    Attributes:
        color: 0-based color index
        point: (row, col) of the cell to color
    """
    color: int
    point: Point

    @property
    def row(self) -> int:
        return self.point[0]

    @property
    def col(self) -> int:
        return self.point[1]

    def __str__(self):
        return f"color {self.color + 1} -> ({self.row},{self.col})"
