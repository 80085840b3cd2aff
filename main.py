"""
Plumber - Entry Point

Loads a board file, searches for a solution and prints the result.

Example:
    python main.py --file board.txt
    python main.py -f board.txt --canonical --detect-dead --sort
    python main.py -f board.txt --parallel --workers 8 --show-results
"""

import sys
import logging
import argparse
from typing import Any, Dict, Optional

import colorama

from plumber.reader import BoardFormatError, load_board
from plumber.render import board_string, replay
from plumber.settings import load_settings, save_settings
from plumber.solver import (
    SearchInvariantError,
    SolutionContext,
    get_default_strategy_name,
    get_strategy_class,
    get_strategy_info,
    get_strategy_names,
    sort_colors,
)
from plumber.solver.strategies import ConcurrentStrategy

logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_UNSOLVED = 1
EXIT_BAD_INPUT = 2


def setup_logging(debug: bool = False) -> None:
    """Configure console logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv: Optional[list] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Plumber - flow puzzle solver"
    )
    parser.add_argument(
        "--file", "-f",
        default="board.txt",
        help="Board file to solve (default: board.txt)"
    )
    parser.add_argument(
        "--strategy", "-s",
        help=f"Search strategy: {', '.join(get_strategy_names())} "
             f"(default: from config.json, else {get_default_strategy_name()})"
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Shorthand for --strategy concurrent"
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker threads for the concurrent strategy (default: CPU count)"
    )
    parser.add_argument(
        "--canonical",
        action="store_true",
        default=None,
        help="Skip moves that make a path touch itself"
    )
    parser.add_argument(
        "--detect-dead",
        action="store_true",
        default=None,
        help="Skip moves that leave a cell no color can fill"
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        default=None,
        help="Extend colors with distant endpoints first"
    )
    parser.add_argument(
        "--reverse",
        action="store_true",
        default=None,
        help="With --sort, extend colors with close endpoints first"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Give up after this many seconds"
    )
    parser.add_argument(
        "--show-results",
        action="store_true",
        default=None,
        help="Replay the solution step by step"
    )
    parser.add_argument(
        "--list-strategies",
        action="store_true",
        help="List available strategies and exit"
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective options to config.json before solving"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def resolve_options(args, settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge command line flags over saved settings.

    Args:
        args: Parsed arguments
        settings: Settings from config.json

    Returns:
        Effective options
    """
    options = dict(settings)
    overrides = {
        "strategy": "concurrent" if args.parallel else args.strategy,
        "canonical": args.canonical,
        "detect_dead": args.detect_dead,
        "sort_colors": args.sort,
        "reverse": args.reverse,
        "workers": args.workers,
        "timeout_sec": args.timeout,
        "show_results": args.show_results,
    }
    for key, value in overrides.items():
        if value is not None:
            options[key] = value
    if not options.get("strategy"):
        options["strategy"] = get_default_strategy_name()
    return options


def print_strategies() -> None:
    """Print every registered strategy with its aliases."""
    default = get_default_strategy_name()
    for info in get_strategy_info():
        marker = " (default)" if info["name"] == default else ""
        aliases = f" [aliases: {info['aliases']}]" if info["aliases"] else ""
        print(f"{info['name']}{marker}{aliases}: {info['description']}")


def run(options: Dict[str, Any], path: str) -> int:
    """
    Solve one board file.

    Returns:
        Exit code
    """
    try:
        board = load_board(path)
    except OSError as e:
        logger.error(f"can't open the file {path}, ERROR: {e}")
        return EXIT_BAD_INPUT
    except BoardFormatError as e:
        logger.error(f"can't parse the file {path}, ERROR: {e}")
        return EXIT_BAD_INPUT

    if options["sort_colors"]:
        board = sort_colors(board, reverse=options["reverse"])

    try:
        strategy_class = get_strategy_class(options["strategy"])
    except ValueError as e:
        logger.error(str(e))
        return EXIT_BAD_INPUT

    kwargs: Dict[str, Any] = {
        "canonical": options["canonical"],
        "detect_dead": options["detect_dead"],
    }
    if strategy_class is ConcurrentStrategy:
        kwargs["workers"] = options["workers"]
    strategy = strategy_class(**kwargs)

    logger.info(
        f"Solving with {strategy.name} (canonical={options['canonical']}, "
        f"detect_dead={options['detect_dead']}, sort={options['sort_colors']})"
    )
    logger.debug(f"Initial board:\n{board_string(board)}")

    context = SolutionContext(board=board, timeout_sec=options["timeout_sec"])
    try:
        solution = strategy.solve(context)
    except SearchInvariantError:
        logger.exception("Search aborted: a generated move was illegal")
        return EXIT_UNSOLVED

    if not solution.is_solved:
        logger.info(solution.message)
        return EXIT_UNSOLVED

    print(board_string(solution.final_board))
    if options["show_results"]:
        replay(solution, interval=options["replay_interval"])
    logger.info(solution.message)
    return EXIT_SOLVED


def main(argv: Optional[list] = None) -> int:
    """Parse arguments, solve the board and return the exit code."""
    args = parse_args(argv)
    setup_logging(args.debug)
    colorama.just_fix_windows_console()

    if args.list_strategies:
        print_strategies()
        return EXIT_SOLVED

    options = resolve_options(args, load_settings())
    if args.save_config:
        save_settings(options)
    return run(options, args.file)


if __name__ == "__main__":
    sys.exit(main())
