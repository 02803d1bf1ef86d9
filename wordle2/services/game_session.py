"""
Game Session

Turn-by-turn state machine for a single game. A session owns its guess
buffer, history and keyboard state; the hosting server feeds it one input
at a time and re-renders from the returned TurnResult.
"""

from typing import Collection, Dict, List, Optional

from ..config.game_settings import (
    ALPHABET, MAX_GUESSES, REVEAL_BASE_DELAY_MS, REVEAL_STEP_MS, WORD_LENGTH
)
from ..models.errors import IncompleteGuess, NotInDictionary, SessionTerminal
from ..models.game import GameStatus, GuessRecord, LetterStatus, TurnResult
from .scoring import build_reveal_schedule, is_solved, score_guess, update_keyboard

ENTER_KEY = "Enter"
BACKSPACE_KEY = "Backspace"


class GameSession:
    """
    State machine for one game: IN_PROGRESS until the solution is guessed
    (WON) or MAX_GUESSES guesses have missed (LOST).

    After every accepted guess the session stays in its reveal phase until
    finish_reveal() is called; typing and submitting are ignored meanwhile.
    """

    def __init__(self, solution: str, dictionary: Collection[str],
                 reveal_base_delay_ms: int = REVEAL_BASE_DELAY_MS,
                 reveal_step_ms: int = REVEAL_STEP_MS):
        if len(solution) != WORD_LENGTH:
            raise ValueError(f"Solution '{solution}' is not {WORD_LENGTH} letters long")

        self.solution = solution
        self.dictionary = dictionary
        self.reveal_base_delay_ms = reveal_base_delay_ms
        self.reveal_step_ms = reveal_step_ms

        self.attempt_index = 0
        self.buffer = ""
        self.history: List[GuessRecord] = []
        self.keyboard: Dict[str, LetterStatus] = {}
        self.status = GameStatus.IN_PROGRESS
        self.revealing = False

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    def _ensure_active(self) -> None:
        if self.status.is_terminal:
            raise SessionTerminal()

    def _snapshot(self, accepted: bool) -> TurnResult:
        return TurnResult(
            accepted=accepted,
            buffer=self.buffer,
            attempt_index=self.attempt_index,
            status=self.status,
            keyboard=dict(self.keyboard),
        )

    def append_letter(self, letter: str) -> TurnResult:
        """
        Adds a letter to the guess buffer.

        Ignored while revealing, when the buffer is full, or when the input
        is not a single Latin letter.

        Raises:
            SessionTerminal: If the game is already over
        """
        self._ensure_active()
        if self.revealing or len(self.buffer) >= WORD_LENGTH:
            return self._snapshot(False)
        if not isinstance(letter, str) or len(letter) != 1 or letter.lower() not in ALPHABET:
            return self._snapshot(False)

        self.buffer += letter.lower()
        return self._snapshot(True)

    def delete_letter(self) -> TurnResult:
        """
        Removes the last letter from the guess buffer.

        Raises:
            SessionTerminal: If the game is already over
        """
        self._ensure_active()
        if self.revealing or not self.buffer:
            return self._snapshot(False)

        self.buffer = self.buffer[:-1]
        return self._snapshot(True)

    def submit(self) -> TurnResult:
        """
        Scores the buffered guess and advances the game.

        Returns:
            TurnResult with the score and the reveal schedule; when the game
            is lost it also carries the solution.

        Raises:
            SessionTerminal: If the game is already over
            IncompleteGuess: If the buffer is shorter than WORD_LENGTH
            NotInDictionary: If the buffered word is not in the word list
        """
        self._ensure_active()
        if self.revealing:
            return self._snapshot(False)
        guess = self.buffer
        if len(guess) != WORD_LENGTH:
            raise IncompleteGuess()
        if guess not in self.dictionary:
            raise NotInDictionary()

        result = score_guess(guess, self.solution)
        self.history.append(GuessRecord(guess=guess, result=tuple(result)))
        update_keyboard(self.keyboard, guess, result)
        self.revealing = True

        if is_solved(result):
            self.status = GameStatus.WON
        else:
            self.attempt_index += 1
            self.buffer = ""
            if self.attempt_index >= MAX_GUESSES:
                self.status = GameStatus.LOST

        turn = self._snapshot(True)
        turn.result = result
        turn.reveal = build_reveal_schedule(guess, result, self.reveal_base_delay_ms, self.reveal_step_ms)
        if self.status is GameStatus.LOST:
            turn.solution = self.solution
        return turn

    def finish_reveal(self) -> TurnResult:
        """Ends the reveal phase so input is accepted again."""
        was_revealing = self.revealing
        self.revealing = False
        return self._snapshot(was_revealing)

    def handle_key(self, key: str) -> TurnResult:
        """Dispatches a raw key name: Enter submits, Backspace deletes, letters append."""
        if key == ENTER_KEY:
            return self.submit()
        if key == BACKSPACE_KEY:
            return self.delete_letter()
        return self.append_letter(key)

    def revealed_solution(self) -> Optional[str]:
        """The solution, but only once the game is over."""
        return self.solution if self.is_over else None


def new_session(solution: str, dictionary: Collection[str], **kwargs) -> GameSession:
    """Starts a fresh game against the given solution."""
    return GameSession(solution, dictionary, **kwargs)
