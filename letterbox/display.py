"""Terminal rendering of boards and solutions."""

from __future__ import annotations

from typing import Iterable

from letterbox.board import Board
from letterbox.constants import SIDE_NAMES
from letterbox.solver import Solution, SolveResult


def format_digraphs(digraphs: Iterable[str]) -> str:
    """Sorted, space-separated digraphs."""
    return " ".join(sorted(digraphs))


def render_board(board: Board) -> str:
    """Render the board sides one per line."""
    lines: list[str] = []
    for name, side in zip(SIDE_NAMES, board.sides):
        lines.append(f"  {name:<7s} {' '.join(side.upper())}")
    return "\n".join(lines)


def format_solution(solution: Solution, show_score: bool = False) -> str:
    if show_score:
        frequencies = "-".join(str(w.frequency) for w in solution.words)
        return f"{solution}  (score {solution.score}; {frequencies})"
    return str(solution)


def print_board(board: Board) -> None:
    print("\n" + render_board(board))


def print_solutions(result: SolveResult, show_score: bool = False) -> None:
    """Print one solution per line, best first."""
    if not result.solutions:
        print("No solutions found.")
        return

    for solution in result.solutions:
        print(format_solution(solution, show_score=show_score))

    if result.cancelled:
        print(f"\n  ** Search cancelled: {len(result)} solutions found before stopping **")
