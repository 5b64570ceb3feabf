"""Solver session for host callers (the web app, or any embedding).

A session owns the loaded dictionary and at most one in-flight solve. A new
request with different parameters cancels the one in flight; an identical
request while one is running is rejected.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from letterbox.board import Board
from letterbox.constants import DEFAULT_MAX_SOLUTIONS
from letterbox.dictionary import Dictionary, load_dictionary
from letterbox.solver import Solver

logger = logging.getLogger(__name__)


class SolveInProgress(RuntimeError):
    """An identical solve is already running."""


class SolveCancelled(RuntimeError):
    """The solve was cancelled before it finished."""


@dataclass(frozen=True)
class SolveParams:
    sides: tuple[str, ...]
    max_solutions: int


@dataclass
class _SolveTask:
    params: SolveParams
    cancel: threading.Event


class SolverSession:
    def __init__(self, dictionary: Dictionary) -> None:
        self.dictionary = dictionary
        self._lock = threading.Lock()
        self._current: _SolveTask | None = None

    @classmethod
    def from_bytes(cls, data: bytes) -> SolverSession:
        """Create a session from the text dictionary format, as raw bytes."""
        logger.info("Initializing dictionary from %d bytes", len(data))
        dictionary = Dictionary.from_bytes(data)
        logger.info("Parsed dictionary with %d words", len(dictionary))
        return cls(dictionary)

    @classmethod
    def from_path(cls, path: str | Path) -> SolverSession:
        return cls(load_dictionary(path))

    @property
    def is_solving(self) -> bool:
        with self._lock:
            return self._current is not None

    def solve(self, sides: Iterable[str],
              max_solutions: int = DEFAULT_MAX_SOLUTIONS) -> list[str]:
        """Solve a board and return ``word-word:score`` strings, best first.

        Raises BoardError for an invalid board, SolveInProgress for a
        duplicate request and SolveCancelled if superseded or cancelled.
        """
        params = SolveParams(tuple(sides), max_solutions)
        task = self._start(params)

        try:
            board = Board.from_sides(params.sides)
            result = Solver(board, self.dictionary, max_solutions).solve(task.cancel)
        finally:
            self._finish(task)

        if result.cancelled or task.cancel.is_set():
            logger.info("Solve for %s was cancelled", ",".join(params.sides))
            raise SolveCancelled("Cancelled")

        logger.info("Found %d solutions for %s", len(result), ",".join(params.sides))
        return [s.to_wire() for s in result.solutions]

    def cancel_current(self) -> bool:
        """Cancel the in-flight solve, if any. Returns whether one was running."""
        with self._lock:
            if self._current is None:
                logger.debug("No solve in progress to cancel")
                return False
            logger.info("Cancelling current solve")
            self._current.cancel.set()
            self._current = None
            return True

    def _start(self, params: SolveParams) -> _SolveTask:
        with self._lock:
            current = self._current
            if current is not None:
                if current.params == params:
                    logger.info("Solve already in progress with same params, rejecting duplicate")
                    raise SolveInProgress("Solve already in progress")
                logger.info("Cancelling previous solve with different params")
                current.cancel.set()
            task = _SolveTask(params, threading.Event())
            self._current = task
            return task

    def _finish(self, task: _SolveTask) -> None:
        with self._lock:
            if self._current is task:
                self._current = None
