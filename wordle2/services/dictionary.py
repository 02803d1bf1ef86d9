"""
Dictionary Service

Loads the list of guessable words from JSON files on disk, retrying over a
list of candidate locations and falling back to a small built-in list when
none can be read. The resulting Dictionary is read-only and shared by every
game session.
"""

import json
import logging
import time
from typing import Iterable, Iterator, List, Optional, Sequence

from ..config.game_settings import (
    FALLBACK_WORDS, WORD_LENGTH, get_word_statistics, validate_word_list_integrity
)

logger = logging.getLogger(__name__)


def normalize_words(raw_words: Iterable) -> List[str]:
    """
    Lowercases and length-filters raw words, dropping duplicates.

    Anything that is not WORD_LENGTH alphabetic characters after stripping
    is discarded. Order of first appearance is preserved.
    """
    seen = set()
    words = []
    for raw in raw_words:
        word = str(raw or "").strip().lower()
        if len(word) != WORD_LENGTH or not word.isalpha() or not word.isascii():
            continue
        if word in seen:
            continue
        seen.add(word)
        words.append(word)
    return words


class Dictionary:
    """Immutable set of valid guesses, with the ordered list used for selection."""

    def __init__(self, words: Iterable[str], source: str = "memory", is_fallback: bool = False):
        self.words = tuple(words)
        self._lookup = frozenset(self.words)
        self.source = source
        self.is_fallback = is_fallback

    def __contains__(self, word) -> bool:
        return word in self._lookup

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __repr__(self) -> str:
        return f"Dictionary({len(self.words)} words from {self.source!r})"

    def describe(self) -> dict:
        return {
            "word_count": len(self.words),
            "source": self.source,
            "fallback": self.is_fallback,
        }

    def statistics(self) -> dict:
        """Vowel and letter frequency figures for the word list."""
        stats = get_word_statistics(self.words)
        stats.pop("letter_frequency", None)
        return stats


def read_word_file(path: str) -> List[str]:
    """
    Reads and normalizes one JSON word file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        ValueError: If the file is not a JSON array or has no usable words
    """
    with open(path, 'r', encoding='utf-8') as f:
        raw_words = json.load(f)

    if not isinstance(raw_words, list):
        raise ValueError(f"{path} must contain a JSON array of words")

    words = normalize_words(raw_words)
    if not words:
        raise ValueError(f"{path} contains no {WORD_LENGTH}-letter words")
    dropped = len(raw_words) - len(words)
    if dropped:
        logger.warning(f"Dropped {dropped} unusable or duplicate entries from {path}")

    validate_word_list_integrity(words)
    return words


def fallback_dictionary() -> Dictionary:
    """Dictionary built from the built-in word list."""
    return Dictionary(normalize_words(FALLBACK_WORDS), source="built-in", is_fallback=True)


def load_dictionary(candidates: Sequence[str], attempts: int = 3,
                    retry_delay: float = 0.5,
                    sleep=time.sleep) -> Dictionary:
    """
    Loads the first readable candidate word file.

    Every candidate is tried in order on each attempt; attempts are separated
    by retry_delay seconds. If all attempts fail the built-in fallback list
    is returned instead of raising.

    Args:
        candidates: Paths to JSON word files, most preferred first
        attempts: Number of passes over the candidates
        retry_delay: Seconds to wait between passes
        sleep: Sleep function (injectable for tests)

    Returns:
        Dictionary
    """
    last_error: Optional[Exception] = None
    for attempt in range(1, attempts + 1):
        for path in candidates:
            try:
                logger.info(f"Loading dictionary from {path} (attempt {attempt})")
                words = read_word_file(path)
                logger.info(f"Loaded {len(words)} words from {path}")
                return Dictionary(words, source=path)
            except (OSError, ValueError) as e:
                last_error = e
        if attempt < attempts:
            sleep(retry_delay)

    logger.error(f"Failed to load dictionary, using built-in fallback: {last_error}")
    return fallback_dictionary()
