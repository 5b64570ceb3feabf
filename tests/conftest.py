"""Shared fixtures for Letter Boxed tests."""

from __future__ import annotations

import pytest

from letterbox.board import Board
from letterbox.dictionary import Dictionary

PUZZLE_SIDES = ["vyq", "fig", "ote", "xlu"]

PUZZLE_WORDS = [
    "foxglove", "equity", "eye", "golf", "flog",
    "glove", "exile", "exit", "tie", "yog",
]


@pytest.fixture
def puzzle_board() -> Board:
    """VYQ / FIG / OTE / XLU."""
    return Board.from_sides(PUZZLE_SIDES)


@pytest.fixture
def puzzle_dictionary() -> Dictionary:
    """Ten hand-picked words, all playable on puzzle_board. No file I/O."""
    return Dictionary.from_strings(PUZZLE_WORDS)


@pytest.fixture
def small_board() -> Board:
    """Two letters per side, eight letters in all."""
    return Board.from_sides(["ab", "cd", "ef", "gh"])


@pytest.fixture
def words_by_name(puzzle_dictionary: Dictionary) -> dict:
    return {w.word: w for w in puzzle_dictionary.words}
