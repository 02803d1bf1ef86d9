"""
Game Configuration Constants Module

This module defines all game configuration constants. Rules of the game
(word length, number of guesses, daily epoch, reveal timing) live here so
the scoring engine, the solution selector and the session state machine
share a single source of truth.
"""

from datetime import datetime, timezone
from typing import Dict, Final, List, Sequence

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""
Number of letters in every guess and every solution.
Type: Final[int] - Immutable to prevent accidental modification
"""

MAX_GUESSES: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

ALPHABET: Final[str] = "abcdefghijklmnopqrstuvwxyz"

# Daily mode: whole UTC days elapsed since this instant seed the generator
DAILY_EPOCH: Final[datetime] = datetime(2022, 1, 1, tzinfo=timezone.utc)
MS_PER_DAY: Final[int] = 1000 * 60 * 60 * 24

# Reveal schedule: letter i waits REVEAL_BASE_DELAY_MS + i * REVEAL_STEP_MS
REVEAL_BASE_DELAY_MS: Final[int] = 60
REVEAL_STEP_MS: Final[int] = 220

# Built-in word list used when no dictionary file can be loaded
FALLBACK_WORDS: Final[List[str]] = [
    "apple", "other", "about", "farts", "cigar", "rebus", "gamer", "zesty",
]

# Pinned solution used by the server when selection gets an empty word list
FALLBACK_SOLUTION: Final[str] = "apple"


def validate_word_list_integrity(words: Sequence[str]) -> bool:
    """
    Validates the integrity and consistency of a word list.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly WORD_LENGTH characters
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate entries
    4. Format validation: Consistent lowercase formatting

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not words:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(words):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.islower():
            raise ValueError(f"Word at index {index} '{word}' is not in lowercase format")

    if len(words) != len(set(words)):
        duplicates = sorted({word for word in words if words.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_word_statistics(words: Sequence[str]) -> Dict:
    """
    Analyzes a word list and returns statistical information.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words in the list
            - avg_vowel_count: Average vowels per word
            - letter_frequency: Distribution of letters across all words
            - most_common_letters: Five most frequent letters
    """
    if not words:
        return {"error": "Word list is empty"}

    vowels = set("aeiou")
    total_vowels = sum(len([char for char in word if char in vowels]) for word in words)

    letter_frequency: Dict[str, int] = {}
    for word in words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(words),
        "avg_vowel_count": round(total_vowels / len(words), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
