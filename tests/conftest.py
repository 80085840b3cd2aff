"""
Shared fixtures for solver tests.

Boards are written in the board file format and parsed with the reader.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from plumber.reader import parse_board
from plumber.solver import Board, Solution, are_adjacent


# Five straight rows: color k runs from (k,0) to (k,4)
ROWS_BOARD = """5,5
0,0 0,4
1,0 1,4
2,0 2,4
3,0 3,4
4,0 4,4
"""

# 5x5 with one known solution:
#   1 1 1 1 2
#   3 3 3 1 2
#   3 4 4 1 2
#   3 4 5 5 2
#   3 4 4 5 2
MIXED_BOARD = """5,5
0,0 2,3
0,4 4,4
1,2 4,0
2,2 4,2
3,2 4,3
"""

# Endpoints cross on a 2x2 grid; no path can be drawn
CROSSED_BOARD = """2,2
0,0 1,1
0,1 1,0
"""


@pytest.fixture
def rows_board() -> Board:
    return parse_board(ROWS_BOARD)


@pytest.fixture
def mixed_board() -> Board:
    return parse_board(MIXED_BOARD)


@pytest.fixture
def crossed_board() -> Board:
    return parse_board(CROSSED_BOARD)


def assert_valid_solution(initial: Board, solution: Solution) -> None:
    """Check a solved result move by move against its initial board."""
    assert solution.is_solved
    assert solution.board_states[0] is initial
    assert len(solution.board_states) == len(solution.moves) + 1

    final = solution.final_board
    assert final.solved()
    assert final.filled_cells() == final.rows * final.cols

    for index, move in enumerate(solution.moves):
        before = solution.board_states[index]
        after = solution.board_states[index + 1]
        assert before.get(move.point) == 0
        assert after.get(move.point) == move.color + 1
        assert after.filled_cells() == before.filled_cells() + 1

    for flow, original in zip(final.flows, initial.flows):
        assert flow[0] == original[0]
        assert flow[-1] == original[-1]
        assert all(are_adjacent(a, b) for a, b in zip(flow, flow[1:]))
