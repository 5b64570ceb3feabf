"""Digraph-indexed word dictionary.

Every word records the indices of its consecutive letter pairs in a shared,
sorted digraph table. Checking a word against a board then needs only
integer set lookups instead of re-slicing the word for every board.
"""

from __future__ import annotations

import logging
import pickle
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from letterbox.constants import (
    DEFAULT_BINARY_DICTIONARY,
    DEFAULT_FREQUENCY,
    DEFAULT_TEXT_DICTIONARY,
)

logger = logging.getLogger(__name__)

BINARY_MAGIC = b"LBXD"
BINARY_VERSION = 1


class DictionaryError(ValueError):
    """Raised when dictionary bytes or a binary artifact cannot be decoded."""


def extract_digraphs(word: str) -> list[str]:
    """Return the consecutive letter pairs of *word*, in order."""
    return [word[i:i + 2] for i in range(len(word) - 1)]


@dataclass(frozen=True)
class Word:
    """A dictionary word with its frequency score and digraph indices."""
    word: str
    frequency: int
    digraph_indices: frozenset[int] = frozenset()

    @property
    def first(self) -> str:
        return self.word[0]

    @property
    def last(self) -> str:
        return self.word[-1]

    def __str__(self) -> str:
        return self.word


def parse_word_line(line: str) -> tuple[str, int] | None:
    """Parse ``<word> <frequency>``. Returns None if the line doesn't fit."""
    parts = line.split()
    if len(parts) < 2:
        return None
    try:
        frequency = int(parts[1])
    except ValueError:
        return None
    return parts[0].lower(), frequency


class Dictionary:
    """Word list plus the digraph table its words index into.

    A dictionary filtered for a board shares ``digraph_strings`` and
    ``digraph_to_index`` with the dictionary it came from.
    """

    def __init__(self, words: Iterable[Word], digraphs: Iterable[str],
                 digraph_strings: tuple[str, ...],
                 digraph_to_index: dict[str, int]) -> None:
        self.words: tuple[Word, ...] = tuple(words)
        self.digraphs: frozenset[str] = frozenset(digraphs)
        self.digraph_strings = digraph_strings
        self.digraph_to_index = digraph_to_index

    @classmethod
    def from_words(cls, entries: Iterable[tuple[str, int]]) -> Dictionary:
        """Build a dictionary from ``(word, frequency)`` pairs."""
        pairs = [(word.lower(), frequency) for word, frequency in entries if word]

        all_digraphs: set[str] = set()
        for word, _ in pairs:
            all_digraphs.update(extract_digraphs(word))

        digraph_strings = tuple(sorted(all_digraphs))
        digraph_to_index = {d: i for i, d in enumerate(digraph_strings)}

        words = [
            Word(word, frequency,
                 frozenset(digraph_to_index[d] for d in extract_digraphs(word)))
            for word, frequency in pairs
        ]
        return cls(words, all_digraphs, digraph_strings, digraph_to_index)

    @classmethod
    def from_strings(cls, words: Iterable[str]) -> Dictionary:
        """Build from bare words, all given the default frequency."""
        return cls.from_words((w, DEFAULT_FREQUENCY) for w in words)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Dictionary:
        entries: list[tuple[str, int]] = []
        for line_num, line in enumerate(lines, start=1):
            if not line.strip():
                logger.debug("Skipping blank line %d", line_num)
                continue
            entry = parse_word_line(line)
            if entry is None:
                logger.warning("Invalid format on line %d: %s", line_num, line.rstrip("\n"))
                continue
            entries.append(entry)
        return cls.from_words(entries)

    @classmethod
    def from_text(cls, text: str) -> Dictionary:
        """Parse one ``word frequency`` entry per line, skipping bad lines."""
        return cls.from_lines(text.splitlines())

    @classmethod
    def from_bytes(cls, data: bytes) -> Dictionary:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DictionaryError(f"Invalid UTF-8 data: {e}") from e
        return cls.from_text(text)

    @classmethod
    def from_path(cls, path: str | Path) -> Dictionary:
        """Load a text dictionary file."""
        try:
            with open(path, encoding="utf-8") as f:
                return cls.from_lines(f)
        except UnicodeDecodeError as e:
            raise DictionaryError(f"Invalid UTF-8 data in {path}: {e}") from e

    # ------------------------------------------------------------------
    # Binary artifact
    # ------------------------------------------------------------------

    def to_binary(self) -> bytes:
        """Serialize the whole structure for fast loading later."""
        payload = {
            "version": BINARY_VERSION,
            "words": [
                (w.word, w.frequency, sorted(w.digraph_indices)) for w in self.words
            ],
            "digraphs": sorted(self.digraphs),
            "digraph_strings": list(self.digraph_strings),
            "digraph_to_index": dict(self.digraph_to_index),
        }
        try:
            return BINARY_MAGIC + pickle.dumps(payload, protocol=pickle.HIGHEST_PROTOCOL)
        except (pickle.PicklingError, TypeError) as e:
            raise DictionaryError(f"Failed to serialize dictionary: {e}") from e

    @classmethod
    def from_binary(cls, data: bytes) -> Dictionary:
        if not data.startswith(BINARY_MAGIC):
            raise DictionaryError(
                "Failed to deserialize dictionary: missing dictionary header"
            )
        try:
            payload = pickle.loads(data[len(BINARY_MAGIC):])
        except (pickle.UnpicklingError, EOFError, ValueError, TypeError,
                AttributeError, ImportError, IndexError) as e:
            raise DictionaryError(f"Failed to deserialize dictionary: {e}") from e

        if not isinstance(payload, dict) or payload.get("version") != BINARY_VERSION:
            raise DictionaryError(
                "Failed to deserialize dictionary: unsupported format version"
            )
        try:
            words = [
                Word(word, frequency, frozenset(indices))
                for word, frequency, indices in payload["words"]
            ]
            return cls(
                words,
                payload["digraphs"],
                tuple(payload["digraph_strings"]),
                dict(payload["digraph_to_index"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DictionaryError(f"Failed to deserialize dictionary: {e}") from e

    def __len__(self) -> int:
        return len(self.words)

    @property
    def word_count(self) -> int:
        return len(self.words)


def load_dictionary(path: str | Path) -> Dictionary:
    """Load a dictionary file, binary if it ends in ``.bin``, text otherwise."""
    path = Path(path)
    if path.suffix == ".bin":
        return Dictionary.from_binary(path.read_bytes())
    return Dictionary.from_path(path)


def load_default_dictionary() -> Dictionary:
    """Load the prebuilt dictionary from the data/ directory."""
    for path in (DEFAULT_BINARY_DICTIONARY, DEFAULT_TEXT_DICTIONARY):
        if path.exists():
            logger.debug("Loading dictionary from %s", path)
            return load_dictionary(path)
    raise FileNotFoundError(
        f"Dictionary not found at {DEFAULT_TEXT_DICTIONARY}. "
        "Build one with letterbox-build-dictionary and place it in data/"
    )
