"""
Search strategy tests: sequential and concurrent backtracking.
"""

import queue
import sys
import threading
import time

import pytest

from conftest import assert_valid_solution
from plumber.reader import parse_board
from plumber.solver import (
    Board,
    Move,
    SearchInvariantError,
    SolutionContext,
    create_strategy,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
    sort_colors,
)
from plumber.solver.strategies import ConcurrentStrategy, SequentialStrategy
from plumber.solver.strategies.concurrent import SearchNode


STRATEGIES = [
    ("sequential", {}),
    ("concurrent", {"workers": 1}),
    ("concurrent", {"workers": 4}),
]


def _solve(board, name, canonical=False, detect_dead=False, **kwargs):
    strategy = create_strategy(name, canonical=canonical, detect_dead=detect_dead, **kwargs)
    return strategy.solve(SolutionContext(board=board))


def test_registry():
    assert set(get_strategy_names()) == {"sequential", "concurrent"}
    assert get_default_strategy_name() == "sequential"
    info = {entry["name"]: entry for entry in get_strategy_info()}
    assert "parallel" in info["concurrent"]["aliases"]


def test_aliases_and_unknown_names():
    assert isinstance(create_strategy("parallel"), ConcurrentStrategy)
    assert isinstance(create_strategy("backtrack"), SequentialStrategy)
    with pytest.raises(ValueError):
        create_strategy("breadth_first")


def test_concurrent_workers_option():
    assert create_strategy("concurrent", workers=3).workers == 3
    assert create_strategy("concurrent").workers >= 1


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
@pytest.mark.parametrize("canonical", [False, True])
@pytest.mark.parametrize("detect_dead", [False, True])
def test_rows_board_is_solved(rows_board, name, kwargs, canonical, detect_dead):
    solution = _solve(rows_board, name, canonical, detect_dead, **kwargs)

    assert_valid_solution(rows_board, solution)
    assert solution.final_board.filled_cells() == 25
    assert solution.move_count == 15
    assert solution.metrics.states_explored >= 15
    assert solution.metrics.strategy_name == name


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
@pytest.mark.parametrize("canonical", [False, True])
@pytest.mark.parametrize("detect_dead", [False, True])
def test_mixed_board_is_solved(mixed_board, name, kwargs, canonical, detect_dead):
    solution = _solve(mixed_board, name, canonical, detect_dead, **kwargs)
    assert_valid_solution(mixed_board, solution)
    assert solution.move_count == 15


def test_sequential_follows_generator_order(rows_board):
    solution = _solve(rows_board, "sequential")
    assert solution.moves[:3] == [
        Move(color=0, point=(0, 1)),
        Move(color=0, point=(0, 2)),
        Move(color=0, point=(0, 3)),
    ]
    # Going down first from (0,1) strands the lower colors
    assert solution.metrics.states_explored > 15
    assert solution.metrics.leaves > 0


def test_sequential_backtracks_out_of_dead_ends(mixed_board):
    solution = _solve(mixed_board, "sequential")
    assert solution.is_solved
    assert solution.metrics.states_explored > solution.move_count


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
def test_crossed_board_is_exhausted(crossed_board, name, kwargs):
    solution = _solve(crossed_board, name, **kwargs)

    assert not solution.is_solved
    assert not solution.was_cancelled
    assert solution.moves == []
    assert solution.board_states == [crossed_board]
    assert solution.metrics.states_explored == 0
    assert solution.metrics.leaves == 1
    assert solution.message == "No solution found. Explored 0 states"


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
def test_unsolvable_after_exploring(name, kwargs):
    """Color 1 must cross the column color 2 needs."""
    board = parse_board("3,3\n0,0 0,2\n0,1 2,1\n")
    solution = _solve(board, name, **kwargs)

    assert not solution.is_solved
    assert solution.metrics.states_explored > 0
    assert solution.metrics.leaves > 0


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
def test_already_solved_board(name, kwargs):
    board = parse_board("1,2\n0,0 0,1\n")
    solution = _solve(board, name, **kwargs)

    assert solution.is_solved
    assert solution.moves == []
    assert solution.final_board is board
    assert solution.metrics.states_explored == 0


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
def test_cancelled_before_start(mixed_board, name, kwargs):
    strategy = create_strategy(name, **kwargs)
    context = SolutionContext(board=mixed_board)
    context.cancel_flag.set()

    solution = strategy.solve(context)

    assert not solution.is_solved
    assert solution.was_cancelled
    assert solution.message.startswith("Search cancelled")


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
def test_sorted_board_is_solved(mixed_board, name, kwargs):
    board = sort_colors(mixed_board)
    solution = _solve(board, name, canonical=True, detect_dead=True, **kwargs)
    assert_valid_solution(board, solution)


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
def test_illegal_generated_move_is_fatal(rows_board, name, kwargs, monkeypatch):
    """A generator offering an occupied cell aborts the search."""
    strategy = create_strategy(name, **kwargs)
    monkeypatch.setattr(
        strategy.generator, "next_moves",
        lambda board: [Move(color=0, point=(1, 0))]
    )

    with pytest.raises(SearchInvariantError):
        strategy.solve(SolutionContext(board=rows_board))


def test_progress_reported(mixed_board, monkeypatch):
    monkeypatch.setattr(SequentialStrategy, "PROGRESS_INTERVAL", 1)
    updates = []
    context = SolutionContext(
        board=mixed_board,
        progress_callback=lambda percent, message: updates.append(percent)
    )

    solution = SequentialStrategy().solve(context)

    assert solution.is_solved
    assert updates
    assert all(0.0 <= percent < 1.0 for percent in updates)


def test_concurrent_discards_late_solutions(rows_board):
    """Several workers may solve at once; exactly one result is returned."""
    strategy = ConcurrentStrategy(workers=8)
    results = [strategy.solve(SolutionContext(board=rows_board)) for _ in range(5)]
    for solution in results:
        assert_valid_solution(rows_board, solution)


def test_concurrent_leaves_no_worker_threads(mixed_board):
    ConcurrentStrategy(workers=4).solve(SolutionContext(board=mixed_board))
    alive = [t.name for t in threading.enumerate() if t.name.startswith("backtrack")]
    assert alive == []


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
def test_deadline_stops_search(name, kwargs):
    """Corner-to-corner colors must cross, so only the deadline ends this search."""
    board = parse_board("7,7\n0,0 6,6\n0,6 6,0\n")
    strategy = create_strategy(name, **kwargs)

    started = time.perf_counter()
    solution = strategy.solve(SolutionContext(board=board, timeout_sec=0.3))

    assert time.perf_counter() - started < 10.0
    assert not solution.is_solved
    assert solution.was_cancelled
    assert solution.metrics.states_explored > 0
    assert solution.message.startswith("Search cancelled")


def test_concurrent_keeps_first_of_simultaneous_solutions(monkeypatch):
    """Two workers solve sibling branches at once; the extra board is dropped."""
    board = parse_board("3,3\n1,1 2,2\n")
    target = board.filled_cells() + 2
    barrier = threading.Barrier(2, timeout=5)
    solved_calls = []

    def solved(self):
        if self.filled_cells() != target:
            return False
        solved_calls.append(self)
        if len(solved_calls) <= 2:
            barrier.wait()
        return True

    monkeypatch.setattr(Board, "solved", solved)

    strategy = ConcurrentStrategy(workers=2)
    deliver = strategy._deliver
    delivered = []

    def counting_deliver(node, *args):
        delivered.append(node)
        deliver(node, *args)

    monkeypatch.setattr(strategy, "_deliver", counting_deliver)

    solution = strategy.solve(SolutionContext(board=board))

    assert len(delivered) == 2
    assert solution.is_solved
    assert solution.move_count == 2
    assert solution.final_board in [node.board for node in delivered]


def test_deliver_never_blocks_on_a_full_result_slot(rows_board):
    strategy = ConcurrentStrategy(workers=1)
    results = queue.Queue(maxsize=1)
    stop = threading.Event()
    finished = threading.Event()
    first = SearchNode(board=rows_board)
    second = SearchNode(board=rows_board.clone())

    strategy._deliver(first, results, stop, finished)
    strategy._deliver(second, results, stop, finished)

    assert stop.is_set() and finished.is_set()
    assert results.get_nowait() is first
    assert results.empty()


def test_sequential_restores_recursion_limit(monkeypatch):
    """Color 1 is walled in by color 2, so the search ends at the root."""
    board = parse_board("40,40\n0,0 39,39\n0,1 1,0\n")
    limits = []
    monkeypatch.setattr(sys, "getrecursionlimit", lambda: 1000)
    monkeypatch.setattr(sys, "setrecursionlimit", limits.append)

    solution = SequentialStrategy().solve(SolutionContext(board=board))

    assert not solution.is_solved
    assert limits == [40 * 40 + 100, 1000]


@pytest.mark.parametrize("name,kwargs", STRATEGIES)
def test_canonical_pruning_misses_hooked_path(name, kwargs):
    """The only cover turns back beside the start cell, which canonical mode forbids."""
    board = parse_board("2,3\n0,0 1,2\n")

    plain = _solve(board, name, **kwargs)
    assert_valid_solution(board, plain)
    assert [move.point for move in plain.moves] == [(1, 0), (1, 1), (0, 1), (0, 2)]

    assert not _solve(board, name, canonical=True, **kwargs).is_solved
