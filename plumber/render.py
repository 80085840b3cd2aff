"""
Rendering Module - Colorized terminal output for boards and solutions.
"""

import logging
import time
from typing import Callable, List, Optional

from colorama import Back, Fore, Style

from .solver.board import Board, all_adjacent
from .solver.solution import Solution

logger = logging.getLogger(__name__)

# Indexed by cell value % 8; 0 (empty) renders on black
PALETTE: List[str] = [
    Back.BLACK + Fore.WHITE,
    Back.RED + Fore.WHITE,
    Back.GREEN + Fore.BLACK,
    Back.YELLOW + Fore.BLACK,
    Back.BLUE + Fore.WHITE,
    Back.MAGENTA + Fore.WHITE,
    Back.CYAN + Fore.BLACK,
    Back.WHITE + Fore.BLACK,
]

CLEAR_SCREEN = "\033[H\033[J"


def colorize(value: int, text: str) -> str:
    return f"{PALETTE[value % len(PALETTE)]}{text}{Style.RESET_ALL}"


def grid_string(board: Board, color: bool = True) -> str:
    """
    Draw the grid as a boxed table of cell values.

    Args:
        board: Board to draw
        color: Wrap each cell in its palette color

    Returns:
        Multi-line string, starting with a newline
    """
    delimiter = "+---" * board.cols + "+\n"
    out = "\n" + delimiter
    for row in board.to_list():
        for value in row:
            cell = f" {value} "
            out += "|" + (colorize(value, cell) if color else cell)
        out += "|\n" + delimiter
    return out


def colors_string(board: Board) -> str:
    """
    List every color's path, one per line.

    Paths still open show a '[???]' gap before their fixed endpoint.
    """
    out = ""
    for flow in board.flows:
        parts = [f"({row},{col})" for row, col in flow]
        if not all_adjacent(flow):
            parts.insert(len(parts) - 1, "[???]")
        out += "->".join(parts) + "\n"
    return out


def board_string(board: Board, color: bool = True) -> str:
    return grid_string(board, color=color) + colors_string(board)


def replay(
    solution: Solution,
    interval: float = 0.3,
    write: Optional[Callable[[str], None]] = None,
    sleep: Callable[[float], None] = time.sleep
) -> int:
    """
    Animate a solution, one board per frame.

    Args:
        solution: Solved result to replay
        interval: Seconds between frames
        write: Output function (defaults to print without newline)
        sleep: Delay function, replaceable in tests

    Returns:
        Number of frames shown
    """
    if write is None:
        def write(text: str) -> None:
            print(text, end="", flush=True)

    frames = 0
    for board in solution.path:
        sleep(interval)
        write(CLEAR_SCREEN)
        write(grid_string(board))
        frames += 1
    logger.debug(f"Replayed {frames} frames")
    return frames
