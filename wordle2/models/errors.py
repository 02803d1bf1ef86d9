"""
Game Errors

All errors raised by the game core. Each one rejects a single operation and
leaves the session untouched, so the player can simply keep typing.
"""


class GameError(Exception):
    """Base class for user-facing, recoverable game errors."""

    error_code = "game_error"
    default_message = "Invalid move"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class IncompleteGuess(GameError):
    """Submit attempted before the guess buffer is full."""

    error_code = "incomplete_guess"
    default_message = "Not enough letters"


class NotInDictionary(GameError):
    """Submit attempted with a well-formed word that is not in the word list."""

    error_code = "not_in_dictionary"
    default_message = "Not in word list"


class SessionTerminal(GameError):
    """Mutation attempted after the game was won or lost."""

    error_code = "session_terminal"
    default_message = "Game is already over"


class EmptyDictionary(GameError):
    """Solution selection attempted with no candidate words."""

    error_code = "empty_dictionary"
    default_message = "Dictionary is empty"


class GameNotFound(GameError):
    """No game session is registered under the given id."""

    error_code = "game_not_found"
    default_message = "Game not found"
