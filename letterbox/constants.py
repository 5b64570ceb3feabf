"""Letter Boxed game constants: side names, search limits and frequency bounds."""

from pathlib import Path

# Display names for the four sides, in the order they are supplied
SIDE_NAMES: tuple[str, ...] = ("top", "right", "left", "bottom")

SIDE_COUNT = len(SIDE_NAMES)

# Longest chain of words the solver will try
MAX_WORDS = 4

# Frequency scores are log2 of the corpus count, capped so they fit in 5 bits
MAX_FREQUENCY = 31

# Used when a word list carries no frequencies (tests, ad-hoc lists)
DEFAULT_FREQUENCY = 15

DEFAULT_MAX_SOLUTIONS = 500

# Shortest word the dictionary builder keeps
MINIMUM_WORD_LENGTH = 3

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_TEXT_DICTIONARY = DATA_DIR / "dictionary.txt"
DEFAULT_BINARY_DICTIONARY = DATA_DIR / "dictionary.bin"
