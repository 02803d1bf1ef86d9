"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class LetterStatus(Enum):
    """Per-letter outcome of comparing a guess with the solution."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"

    @property
    def priority(self) -> int:
        """Keyboard upgrade order: absent < present < correct."""
        return _LETTER_PRIORITY[self]


_LETTER_PRIORITY = {
    LetterStatus.ABSENT: 0,
    LetterStatus.PRESENT: 1,
    LetterStatus.CORRECT: 2,
}


class GameStatus(Enum):
    """Overall status of a game session."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


class SelectionMode(Enum):
    """How the solution word is picked from the word list."""
    RANDOM = "random"
    DAILY = "daily"


@dataclass(frozen=True)
class GuessRecord:
    """A submitted guess together with its score."""
    guess: str
    result: Tuple[LetterStatus, ...]


@dataclass(frozen=True)
class RevealStep:
    """One step of the staggered reveal: wait delay_ms, then show the letter."""
    index: int
    letter: str
    status: LetterStatus
    delay_ms: int

    def to_dict(self) -> Dict:
        return {
            "index": self.index,
            "letter": self.letter,
            "status": self.status.value,
            "delay_ms": self.delay_ms,
        }


@dataclass
class TurnResult:
    """Everything the presentation layer needs to re-render after one operation."""
    accepted: bool
    buffer: str
    attempt_index: int
    status: GameStatus
    keyboard: Dict[str, LetterStatus]
    result: Optional[List[LetterStatus]] = None
    reveal: List[RevealStep] = field(default_factory=list)
    solution: Optional[str] = None  # Only set once the game is lost

    def to_dict(self) -> Dict:
        return {
            "accepted": self.accepted,
            "buffer": self.buffer,
            "attempt_index": self.attempt_index,
            "status": self.status.value,
            "keyboard": {letter: status.value for letter, status in self.keyboard.items()},
            "result": [status.value for status in self.result] if self.result is not None else None,
            "reveal": [step.to_dict() for step in self.reveal],
            "solution": self.solution,
        }


@dataclass
class GameState:
    """Server-side game state representation."""
    game_id: str
    mode: str
    attempt_index: int
    max_guesses: int
    word_length: int
    buffer: str
    status: str
    revealing: bool
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]  # Letter status as string for JSON serialization
    letter_status: Dict[str, str]
    answer: Optional[str] = None  # Only included when game is over
