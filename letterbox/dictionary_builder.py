"""Build the solver word list from a valid-word list and a frequency corpus.

Both inputs must be sorted. They are read side by side, so neither has to fit
in memory:

- the Collins Scrabble Words list, one word per line (``AAH``)
- a Google Books ngram dump, ``word<tab>count`` per line (``aback  1138210``)

Words in both files that are playable on a Letter Boxed board are written as
``word score``, most frequent first, where score is log2 of the count capped
at 31. With ``--binary`` the output is the prebuilt dictionary artifact.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator

from letterbox.constants import DATA_DIR, MAX_FREQUENCY, MINIMUM_WORD_LENGTH
from letterbox.dictionary import Dictionary

logger = logging.getLogger(__name__)


def is_playable_word(word: str) -> bool:
    """Long enough, only a-z, and no immediately doubled letter (BUT yes, BUTT no)."""
    if len(word) < MINIMUM_WORD_LENGTH:
        return False
    if not all("a" <= ch <= "z" for ch in word):
        return False
    return all(a != b for a, b in zip(word, word[1:]))


def frequency_score(count: int) -> int:
    """floor(log2(count)), capped at MAX_FREQUENCY. Counts below 1 score 0."""
    if count < 1:
        return 0
    return min(count.bit_length() - 1, MAX_FREQUENCY)


def _parse_frequency_line(line: str) -> tuple[str, int] | None:
    parts = line.split()
    if len(parts) < 2:
        return None
    try:
        return parts[0], int(parts[1])
    except ValueError:
        return None


def merge_wordlists(valid_words: Iterable[str],
                    frequencies: Iterable[str]) -> Iterator[tuple[str, int]]:
    """Yield ``(word, score)`` for words present in both sorted inputs."""
    valid_iter = iter(valid_words)
    freq_iter = enumerate(frequencies, start=1)

    valid = next(valid_iter, None)
    freq = next(freq_iter, None)

    while valid is not None and freq is not None:
        line_num, line = freq
        entry = _parse_frequency_line(line)
        if entry is None:
            logger.warning("Skipping frequency line %d: %s", line_num, line.rstrip("\n"))
            freq = next(freq_iter, None)
            continue

        freq_word, count = entry
        valid_word = valid.strip().lower()

        if freq_word == valid_word:
            if is_playable_word(freq_word):
                yield freq_word, frequency_score(count)
            valid = next(valid_iter, None)
            freq = next(freq_iter, None)
        elif freq_word < valid_word:
            freq = next(freq_iter, None)
        else:
            valid = next(valid_iter, None)


def build_entries(scrabble_path: str | Path,
                  frequencies_path: str | Path) -> list[tuple[str, int]]:
    """Merge both files and sort by score descending, then alphabetically."""
    with open(scrabble_path, encoding="utf-8") as valid, \
            open(frequencies_path, encoding="utf-8") as freqs:
        entries = list(merge_wordlists(valid, freqs))
    entries.sort(key=lambda e: (-e[1], e[0]))
    return entries


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the Letter Boxed word list from Google ngrams and the Scrabble dictionary",
    )
    parser.add_argument(
        "--frequencies",
        required=True,
        help="Sorted ngram frequency file, 'word count' per line",
    )
    parser.add_argument(
        "--scrabble",
        default=str(DATA_DIR / "collins-scrabble-words-2019.txt"),
        help="Sorted valid-word list, one word per line",
    )
    parser.add_argument(
        "--output", "-o",
        help="Write here instead of stdout",
    )
    parser.add_argument(
        "--binary",
        action="store_true",
        help="Write the binary dictionary artifact instead of text (requires --output)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    if args.binary and not args.output:
        print("Error: --binary requires --output", file=sys.stderr)
        sys.exit(1)

    try:
        entries = build_entries(args.scrabble, args.frequencies)
    except OSError as e:
        print(f"Error reading word lists: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Kept %d playable words", len(entries))

    if args.binary:
        data = Dictionary.from_words(entries).to_binary()
        Path(args.output).write_bytes(data)
        logger.info("Wrote %d bytes to %s", len(data), args.output)
        return

    lines = "".join(f"{word} {score}\n" for word, score in entries)
    if args.output:
        Path(args.output).write_text(lines, encoding="utf-8")
    else:
        sys.stdout.write(lines)


if __name__ == "__main__":
    main()
