"""
Game Service

Keeps the server's game sessions and turns session objects into
serializable game states.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, Iterator, Optional

from ..config.game_settings import FALLBACK_SOLUTION, MAX_GUESSES, REVEAL_BASE_DELAY_MS, REVEAL_STEP_MS, WORD_LENGTH
from ..models.errors import EmptyDictionary, GameNotFound
from ..models.game import GameState, SelectionMode, TurnResult
from .dictionary import Dictionary
from .game_session import GameSession, new_session
from .solution_selector import select_solution

logger = logging.getLogger(__name__)


class GameService:
    """
    Game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Solution selection (random or daily) and secure answer storage
    - Forwarding player input to the session state machine
    - Game state snapshots without exposing answers to clients
    """

    def __init__(self, dictionary: Dictionary,
                 rand: Optional[Callable[[], float]] = None,
                 now: Optional[Callable[[], datetime]] = None,
                 reveal_base_delay_ms: int = REVEAL_BASE_DELAY_MS,
                 reveal_step_ms: int = REVEAL_STEP_MS):
        self.dictionary = dictionary
        self.rand = rand
        self.now = now
        self.reveal_base_delay_ms = reveal_base_delay_ms
        self.reveal_step_ms = reveal_step_ms
        self.games: Dict[str, GameSession] = {}  # Store active games by game_id
        self.modes: Dict[str, SelectionMode] = {}
        self._session_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()  # Guards the three tables above

    def create_new_game(self, daily: bool = False) -> str:
        """
        Creates a new game session.

        Args:
            daily: Use the word of the day instead of a random word

        Returns:
            str: Unique game ID for this session
        """
        mode = SelectionMode.DAILY if daily else SelectionMode.RANDOM
        try:
            solution = select_solution(
                self.dictionary.words, mode,
                now=self.now() if self.now else None,
                rand=self.rand
            )
        except EmptyDictionary:
            logger.warning(f"Dictionary is empty, using pinned solution '{FALLBACK_SOLUTION}'")
            solution = FALLBACK_SOLUTION

        session = new_session(
            solution, self.dictionary,
            reveal_base_delay_ms=self.reveal_base_delay_ms,
            reveal_step_ms=self.reveal_step_ms
        )
        game_id = str(uuid.uuid4())
        with self._lock:
            self.games[game_id] = session
            self.modes[game_id] = mode
            self._session_locks[game_id] = threading.Lock()
        return game_id

    def get_session(self, game_id: str) -> GameSession:
        """
        Looks up a session.

        Raises:
            GameNotFound: If no game has this id
        """
        with self._lock:
            session = self.games.get(game_id)
        if session is None:
            raise GameNotFound()
        return session

    @contextmanager
    def locked_session(self, game_id: str) -> Iterator[GameSession]:
        """
        Holds the session's own lock for the duration of the block.

        HTTP requests and WebSocket events for one game may arrive on
        different threads; only one of them touches the session at a time.

        Raises:
            GameNotFound: If no game has this id
        """
        with self._lock:
            session = self.games.get(game_id)
            session_lock = self._session_locks.get(game_id)
        if session is None:
            raise GameNotFound()
        with session_lock:
            yield session

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a session (without revealing the answer).

        Args:
            game_id: Unique game identifier

        Returns:
            GameState object or None if game not found
        """
        with self._lock:
            mode = self.modes.get(game_id)
        try:
            with self.locked_session(game_id) as session:
                return self._snapshot(game_id, mode, session)
        except GameNotFound:
            return None

    @staticmethod
    def _snapshot(game_id: str, mode: SelectionMode, session: GameSession) -> GameState:
        return GameState(
            game_id=game_id,
            mode=mode.value,
            attempt_index=session.attempt_index,
            max_guesses=MAX_GUESSES,
            word_length=WORD_LENGTH,
            buffer=session.buffer,
            status=session.status.value,
            revealing=session.revealing,
            guesses=[record.guess for record in session.history],
            guess_results=[
                [(letter, status.value) for letter, status in zip(record.guess, record.result)]
                for record in session.history
            ],
            letter_status={letter: status.value for letter, status in session.keyboard.items()},
            answer=session.revealed_solution()
        )

    def append_letter(self, game_id: str, letter: str) -> TurnResult:
        with self.locked_session(game_id) as session:
            return session.append_letter(letter)

    def delete_letter(self, game_id: str) -> TurnResult:
        with self.locked_session(game_id) as session:
            return session.delete_letter()

    def submit_guess(self, game_id: str) -> TurnResult:
        with self.locked_session(game_id) as session:
            return session.submit()

    def finish_reveal(self, game_id: str) -> TurnResult:
        with self.locked_session(game_id) as session:
            return session.finish_reveal()

    def handle_key(self, game_id: str, key: str) -> TurnResult:
        with self.locked_session(game_id) as session:
            return session.handle_key(key)

    def guess_count(self, game_id: str) -> int:
        """Number of guesses submitted so far in a game."""
        with self.locked_session(game_id) as session:
            return len(session.history)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Args:
            game_id: Unique game identifier

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            if game_id in self.games:
                del self.games[game_id]
                del self.modes[game_id]
                del self._session_locks[game_id]
                return True
        return False

    def active_games(self) -> int:
        with self._lock:
            return len(self.games)


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(dictionary: Dictionary, **kwargs) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(dictionary, **kwargs)
    return _game_service
