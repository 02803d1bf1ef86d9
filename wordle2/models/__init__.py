"""
Data Models Package

Contains all data models and errors used throughout the application.
"""

from .errors import (
    GameError, IncompleteGuess, NotInDictionary, SessionTerminal,
    EmptyDictionary, GameNotFound
)
from .game import (
    GameState, GameStatus, GuessRecord, LetterStatus, RevealStep,
    SelectionMode, TurnResult
)

__all__ = [
    'GameError', 'IncompleteGuess', 'NotInDictionary', 'SessionTerminal',
    'EmptyDictionary', 'GameNotFound',
    'GameState', 'GameStatus', 'GuessRecord', 'LetterStatus', 'RevealStep',
    'SelectionMode', 'TurnResult'
]
