"""Backtracking solver for Letter Boxed boards.

Solutions are searched shortest first: every chain of exactly one word, then
exactly two, and so on up to four. A chain is kept only if it covers every
letter on the board and no shorter admissible subsequence of it already does.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from letterbox.board import Board
from letterbox.constants import DEFAULT_MAX_SOLUTIONS, MAX_WORDS
from letterbox.dictionary import Dictionary, Word

logger = logging.getLogger(__name__)


class CancelSignal(Protocol):
    """Anything with ``is_set()``; a ``threading.Event`` in practice."""

    def is_set(self) -> bool: ...


def score_words(words: Sequence[Word]) -> int:
    """Weakest-link frequency, scaled by 10 and divided by chain length."""
    min_frequency = min(max(w.frequency, 0) for w in words)
    return (min_frequency * 10) // len(words)


@dataclass(frozen=True)
class Solution:
    words: tuple[Word, ...]
    score: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if not self.words:
            raise ValueError("A solution needs at least one word")
        object.__setattr__(self, "score", score_words(self.words))

    def __str__(self) -> str:
        return "-".join(w.word for w in self.words)

    def __len__(self) -> int:
        return len(self.words)

    def to_wire(self) -> str:
        """``word-word:score``, the form handed to host callers."""
        return f"{self}:{self.score}"

    def redactable_subsequences(self) -> list[tuple[int, ...]]:
        return redactable_subsequences(self.words)


def redactable_subsequences(words: Sequence[Word]) -> list[tuple[int, ...]]:
    """Index tuples of every shorter subsequence that could replace *words*.

    Dropping the first word is always allowed. A subsequence that keeps the
    first word must still chain: each kept word starts with the letter the
    previous kept word ends on.
    """
    n = len(words)
    if n <= 1:
        return []

    redactions: list[tuple[int, ...]] = []
    full = (1 << n) - 1
    for mask in range(1, full):
        indices = tuple(i for i in range(n) if mask & (1 << i))
        if mask & 1:
            chained = all(
                words[a].last == words[b].first
                for a, b in zip(indices, indices[1:])
            )
            if not chained:
                continue
        redactions.append(indices)
    return redactions


@dataclass
class SolveResult:
    solutions: list[Solution]
    cancelled: bool = False

    def __len__(self) -> int:
        return len(self.solutions)

    def __iter__(self):
        return iter(self.solutions)


class Solver:
    """Finds minimal word chains covering a board.

    The dictionary is filtered for the board once, here. Words are kept by
    reference and addressed by their position in the filtered tuple.
    """

    def __init__(self, board: Board, dictionary: Dictionary,
                 max_solutions: int = DEFAULT_MAX_SOLUTIONS) -> None:
        self.board = board
        self.max_solutions = max_solutions

        self.letter_bits: dict[str, int] = {
            ch: 1 << bit for bit, ch in enumerate(board.letters)
        }
        self.all_letters_mask = (1 << len(self.letter_bits)) - 1

        self.dictionary = board.playable_dictionary(dictionary)
        self.words: tuple[Word, ...] = self.dictionary.words
        self.word_bitmaps: list[int] = [self.coverage(w.word) for w in self.words]

        self.words_by_first_letter: dict[str, list[int]] = {}
        for idx, w in enumerate(self.words):
            self.words_by_first_letter.setdefault(w.first, []).append(idx)

        logger.debug("Solver ready: %d of %d words playable on %r",
                     len(self.words), len(dictionary), board)

    def coverage(self, word: str) -> int:
        """Bitmask of the board letters used by *word*."""
        mask = 0
        for ch in word:
            mask |= self.letter_bits.get(ch, 0)
        return mask

    def is_redundant(self, path: Sequence[int]) -> bool:
        """True if a shorter admissible subsequence of *path* covers the board."""
        words = [self.words[i] for i in path]
        for indices in redactable_subsequences(words):
            covered = 0
            for i in indices:
                covered |= self.word_bitmaps[path[i]]
            if covered == self.all_letters_mask:
                return True
        return False

    def solve(self, cancel: CancelSignal | None = None) -> SolveResult:
        """Search chain lengths 1 to 4, stopping at the cap or on cancel."""
        start = time.time()
        found: list[Solution] = []
        cancelled = False

        for target in range(1, MAX_WORDS + 1):
            if not self._search([], 0, None, target, found, cancel):
                cancelled = True
                break
            logger.debug("Length %d: %d solutions so far", target, len(found))
            if len(found) >= self.max_solutions:
                break

        found.sort(key=lambda s: s.score, reverse=True)
        del found[self.max_solutions:]

        logger.debug("Solve %s after %.3fs with %d solutions",
                     "cancelled" if cancelled else "finished",
                     time.time() - start, len(found))
        return SolveResult(found, cancelled)

    def _search(self, path: list[int], covered: int, last_char: str | None,
                target: int, found: list[Solution],
                cancel: CancelSignal | None) -> bool:
        """Depth-first search. Returns False if cancelled."""
        if cancel is not None and cancel.is_set():
            return False

        if len(found) >= self.max_solutions:
            return True

        if len(path) == target:
            if covered == self.all_letters_mask and not self.is_redundant(path):
                found.append(Solution(tuple(self.words[i] for i in path)))
            return True

        if last_char is None:
            candidates: Sequence[int] = range(len(self.words))
        else:
            candidates = self.words_by_first_letter.get(last_char, ())

        for idx in candidates:
            new_covered = covered | self.word_bitmaps[idx]
            # A word that adds no new letter can never be part of a minimal chain
            if new_covered == covered:
                continue
            path.append(idx)
            ok = self._search(path, new_covered, self.words[idx].last,
                              target, found, cancel)
            path.pop()
            if not ok:
                return False

        return True
