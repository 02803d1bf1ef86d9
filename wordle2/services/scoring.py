"""
Scoring Engine

Implements the Wordle letter evaluation algorithm and the helpers built on
top of it (keyboard accumulation and the reveal schedule).
"""

from typing import Dict, List, Sequence

from ..config.game_settings import REVEAL_BASE_DELAY_MS, REVEAL_STEP_MS
from ..models.game import LetterStatus, RevealStep


def score_guess(guess: str, solution: str) -> List[LetterStatus]:
    """
    Scores a guess against the solution, one status per letter.

    Exact matches are allocated first so that a repeated guess letter never
    claims a solution letter that an exact match elsewhere needs.

    Args:
        guess: Candidate word
        solution: Hidden word, same length as guess

    Returns:
        List of LetterStatus, one per position

    Raises:
        ValueError: If guess and solution differ in length
    """
    if len(guess) != len(solution):
        raise ValueError(
            f"Guess '{guess}' and solution must have the same length "
            f"({len(guess)} != {len(solution)})"
        )

    result = [LetterStatus.ABSENT] * len(solution)

    # Remaining letter counts available for PRESENT matches
    remaining: Dict[str, int] = {}
    for letter in solution:
        remaining[letter] = remaining.get(letter, 0) + 1

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == solution[i]:
            result[i] = LetterStatus.CORRECT
            remaining[letter] -= 1

    # Second pass: right letter, wrong position
    for i, letter in enumerate(guess):
        if result[i] is LetterStatus.CORRECT:
            continue
        if remaining.get(letter, 0) > 0:
            result[i] = LetterStatus.PRESENT
            remaining[letter] -= 1

    return result


def is_solved(result: Sequence[LetterStatus]) -> bool:
    """Return True if every letter is correct."""
    return bool(result) and all(status is LetterStatus.CORRECT for status in result)


def update_keyboard(keyboard: Dict[str, LetterStatus], guess: str,
                    result: Sequence[LetterStatus]) -> None:
    """
    Updates keyboard letter status in place from a scored guess.

    Status can only progress in priority order (absent < present < correct);
    a letter that reached CORRECT never goes back.
    """
    for letter, new_status in zip(guess, result):
        current_status = keyboard.get(letter)
        if current_status is None or new_status.priority > current_status.priority:
            keyboard[letter] = new_status


def build_reveal_schedule(guess: str, result: Sequence[LetterStatus],
                          base_delay_ms: int = REVEAL_BASE_DELAY_MS,
                          step_ms: int = REVEAL_STEP_MS) -> List[RevealStep]:
    """
    Builds the ordered reveal steps for a scored guess.

    Step i waits base_delay_ms + i * step_ms after the previous step before
    its letter is shown.
    """
    return [
        RevealStep(index=i, letter=letter, status=status, delay_ms=base_delay_ms + i * step_ms)
        for i, (letter, status) in enumerate(zip(guess, result))
    ]
