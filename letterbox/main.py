"""CLI entry point for the Letter Boxed solver."""

from __future__ import annotations

import argparse
import logging
import sys

from letterbox.board import Board, BoardError
from letterbox.constants import DEFAULT_MAX_SOLUTIONS, DEFAULT_TEXT_DICTIONARY
from letterbox.dictionary import DictionaryError, load_dictionary
from letterbox.display import format_digraphs, print_board, print_solutions
from letterbox.solver import Solver


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Letter Boxed Solver: find short word chains that use every letter",
    )
    parser.add_argument(
        "board_spec",
        nargs="?",
        help='Board as comma-separated sides, e.g. "VYQ,FIG,OTE,XLU"',
    )
    parser.add_argument(
        "--board", "-b",
        type=str,
        help="Path to a board file with one side per line",
    )
    parser.add_argument(
        "--dictionary", "-d",
        type=str,
        default=str(DEFAULT_TEXT_DICTIONARY),
        help="Dictionary file: 'word frequency' lines, or a .bin artifact",
    )
    parser.add_argument(
        "--max-solutions", "-n",
        type=int,
        default=DEFAULT_MAX_SOLUTIONS,
        help=f"Maximum number of solutions to print (default: {DEFAULT_MAX_SOLUTIONS})",
    )
    parser.add_argument(
        "--scores",
        action="store_true",
        help="Show each solution's score and word frequencies",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print board details and debug logging",
    )
    return parser.parse_args(argv)


def load_board(args: argparse.Namespace) -> Board:
    """Build the board from exactly one of the positional spec or --board."""
    if args.board_spec and args.board:
        print("Error: Cannot specify both a board specification and --board", file=sys.stderr)
        sys.exit(1)
    if not args.board_spec and not args.board:
        print("Error: Either a board specification or --board is required", file=sys.stderr)
        sys.exit(1)

    try:
        if args.board_spec:
            return Board.from_spec(args.board_spec)
        return Board.from_path(args.board)
    except BoardError as e:
        print(f"Error creating board: {e}", file=sys.stderr)
    except OSError as e:
        print(f"Error loading board: {e}", file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(message)s")

    # 1. Board
    board = load_board(args)

    if args.verbose:
        print_board(board)
        print(f"\n{len(board.digraphs)} legal digraphs:")
        print(format_digraphs(board.digraphs))

    # 2. Dictionary
    try:
        dictionary = load_dictionary(args.dictionary)
    except (OSError, DictionaryError) as e:
        print(f"Error loading dictionary: {e}", file=sys.stderr)
        sys.exit(1)

    # 3. Solve
    solver = Solver(board, dictionary, max_solutions=args.max_solutions)
    if args.verbose:
        print(f"\n{len(solver.words)} of {len(dictionary)} words are playable, "
              f"using {len(solver.dictionary.digraphs)} digraphs.\n")

    result = solver.solve()

    # 4. Display
    print_solutions(result, show_score=args.scores)


if __name__ == "__main__":
    main()
