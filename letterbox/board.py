"""The four-sided letter board and the digraphs it allows."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator

from letterbox.constants import SIDE_COUNT, SIDE_NAMES
from letterbox.dictionary import Dictionary


class BoardError(ValueError):
    """Base class for every reason a board can be rejected."""


class InvalidSideCount(BoardError):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Game must contain exactly {SIDE_COUNT} sides, found {count}")


class EmptySide(BoardError):
    def __init__(self, side: str) -> None:
        self.side = side
        super().__init__(f"Empty sides are not allowed (the {side} side is empty)")


class UnequalSideLengths(BoardError):
    def __init__(self, side_a: str, len_a: int, side_b: str, len_b: int) -> None:
        self.side_a, self.len_a = side_a, len_a
        self.side_b, self.len_b = side_b, len_b
        super().__init__(
            f"All sides must have the same length. The {side_a} side has length "
            f"{len_a} but the {side_b} side has length {len_b}"
        )


class InvalidCharacter(BoardError):
    def __init__(self, char: str, side: str) -> None:
        self.char = char
        self.side = side
        super().__init__(
            f"Invalid character {char!r} on the {side} side. "
            "Only lowercase ASCII letters are allowed"
        )


class DuplicateLetter(BoardError):
    """``sides`` holds one name for a same-side repeat, two for a cross-side one."""

    def __init__(self, letter: str, sides: tuple[str, ...]) -> None:
        self.letter = letter
        self.sides = sides
        if len(sides) == 1:
            where = f"the {sides[0]} side"
        else:
            where = f"the {sides[0]} side and the {sides[1]} side"
        super().__init__(f"Duplicate letter {letter!r} found on {where}")


class BoardSpecError(BoardError):
    """A comma-separated board string contained something other than letters."""


_SPEC_RE = re.compile(r"^[A-Za-z,]*$")


def sides_from_spec(spec: str) -> list[str]:
    """Split a board string like ``"VYQ,FIG,OTE,XLU"`` into lowercase sides."""
    if not _SPEC_RE.match(spec):
        bad = next(ch for ch in spec if not (ch.isascii() and ch.isalpha()) and ch != ",")
        raise BoardSpecError(
            f"Invalid character {bad!r} in board specification. "
            "Only A-Z, a-z, and commas are allowed."
        )
    if not spec:
        raise BoardSpecError("Board specification cannot be empty")
    return [side.lower() for side in spec.split(",")]


class Board:
    """Validated board: four equal-length sides with no repeated letter."""

    def __init__(self, sides: tuple[str, ...], digraphs: frozenset[str]) -> None:
        self._sides = sides
        self._digraphs = digraphs

    @property
    def sides(self) -> tuple[str, ...]:
        return self._sides

    @property
    def digraphs(self) -> frozenset[str]:
        return self._digraphs

    @classmethod
    def from_sides(cls, sides: Iterable[str]) -> Board:
        """Validate *sides* and compute the legal digraphs."""
        sides = tuple(sides)
        _validate_structure(sides)
        _validate_content(sides)
        return cls(sides, _playable_digraphs(sides))

    @classmethod
    def from_spec(cls, spec: str) -> Board:
        return cls.from_sides(sides_from_spec(spec))

    @classmethod
    def from_path(cls, path: str | Path) -> Board:
        """Read one side per line from a file."""
        try:
            with open(path, encoding="utf-8") as f:
                lines = [line.strip().lower() for line in f]
        except UnicodeDecodeError as e:
            raise BoardError(f"Board file {path} is not valid UTF-8: {e}") from e
        while lines and not lines[-1]:
            lines.pop()
        return cls.from_sides(lines)

    @property
    def letters(self) -> Iterator[str]:
        """All letters, side by side in the order given."""
        for side in self._sides:
            yield from side

    def __repr__(self) -> str:
        return f"Board({','.join(self._sides)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._sides == other._sides

    def __hash__(self) -> int:
        return hash(self._sides)

    def playable_dictionary(self, dictionary: Dictionary) -> Dictionary:
        """Keep only words whose every digraph is legal on this board.

        The result shares the digraph table of *dictionary*; its ``digraphs``
        set holds only digraphs used by a surviving word.
        """
        usable = {
            idx for idx, digraph in enumerate(dictionary.digraph_strings)
            if digraph in self._digraphs
        }
        words = [w for w in dictionary.words if w.digraph_indices <= usable]

        used: set[str] = set()
        for w in words:
            used.update(dictionary.digraph_strings[idx] for idx in w.digraph_indices)

        return Dictionary(words, used, dictionary.digraph_strings,
                          dictionary.digraph_to_index)


def _validate_structure(sides: tuple[str, ...]) -> None:
    if len(sides) != SIDE_COUNT:
        raise InvalidSideCount(len(sides))

    for name, side in zip(SIDE_NAMES, sides):
        if not side:
            raise EmptySide(name)

    first_len = len(sides[0])
    for name, side in zip(SIDE_NAMES, sides):
        if len(side) != first_len:
            raise UnequalSideLengths(SIDE_NAMES[0], first_len, name, len(side))


def _validate_content(sides: tuple[str, ...]) -> None:
    seen: dict[str, int] = {}
    for side_num, side in enumerate(sides):
        for ch in side:
            if not ("a" <= ch <= "z"):
                raise InvalidCharacter(ch, SIDE_NAMES[side_num])
            previous = seen.get(ch)
            if previous is not None:
                if previous == side_num:
                    raise DuplicateLetter(ch, (SIDE_NAMES[side_num],))
                raise DuplicateLetter(ch, (SIDE_NAMES[previous], SIDE_NAMES[side_num]))
            seen[ch] = side_num


def _playable_digraphs(sides: tuple[str, ...]) -> frozenset[str]:
    digraphs: set[str] = set()
    for i, side in enumerate(sides):
        for j, other in enumerate(sides):
            if i == j:
                continue
            for c1 in side:
                for c2 in other:
                    digraphs.add(c1 + c2)
    return frozenset(digraphs)
