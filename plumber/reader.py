"""
Board File Reader - Build a Board from the text board format.

Format:
    5,5          <- rows,cols
    0,0 4,1      <- one line per color: two endpoints as row,col
    0,2 3,1
    ...

Colors are numbered in file order, starting at 1 in the grid.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

from .solver.board import Board, BoardError, Point

logger = logging.getLogger(__name__)

SIZE_FORMAT_ERROR = "Bad format, first line should indicate the size of the board (e.g. '5,5')"
POINTS_FORMAT_ERROR = "Bad format, lines should indicate the positions of 2 points (e.g. '0,0 0,3')"


class BoardFormatError(ValueError):
    """Board file could not be parsed."""


def _parse_pair(text: str, message: str) -> Tuple[int, int]:
    parts = text.strip().split(",")
    if len(parts) != 2:
        raise BoardFormatError(f"{message}: got '{text.strip()}'")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise BoardFormatError(f"{message}: got '{text.strip()}'") from None


def parse_board(text: str) -> Board:
    """
    Parse board file contents.

    Args:
        text: Full file contents

    Returns:
        Board with endpoints placed and no other cell colored

    Raises:
        BoardFormatError: On a malformed line, bad coordinates, or a
            board without colors
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise BoardFormatError(SIZE_FORMAT_ERROR)

    rows, cols = _parse_pair(lines[0], SIZE_FORMAT_ERROR)
    if rows <= 0 or cols <= 0:
        raise BoardFormatError(f"{SIZE_FORMAT_ERROR}: size must be positive, got {rows},{cols}")

    board = Board.empty(rows, cols)
    for number, line in enumerate(lines[1:], start=2):
        points = line.split()
        if len(points) != 2:
            raise BoardFormatError(f"line {number}: {POINTS_FORMAT_ERROR}")
        start: Point = _parse_pair(points[0], f"line {number}: {POINTS_FORMAT_ERROR}")
        end: Point = _parse_pair(points[1], f"line {number}: {POINTS_FORMAT_ERROR}")
        try:
            board.add_color(start, end)
        except BoardError as e:
            raise BoardFormatError(f"line {number}: {e}") from e

    if board.color_count == 0:
        raise BoardFormatError("Board has no colors")

    logger.info(f"board of {rows} lines and {cols} cols, {board.color_count} colors")
    return board


def load_board(path: Union[str, Path]) -> Board:
    """
    Read and parse a board file.

    Args:
        path: Board file location

    Returns:
        Parsed Board

    Raises:
        OSError: If the file cannot be read
        BoardFormatError: If the contents are malformed
    """
    path = Path(path)
    logger.debug(f"Loading board from {path}")
    with open(path, 'r', encoding='utf-8') as f:
        return parse_board(f.read())
