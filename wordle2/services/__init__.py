"""
Services Package

Contains all business logic and service classes.
"""

from .dictionary import Dictionary, load_dictionary, normalize_words
from .game_service import GameService, get_game_service, initialize_game_service
from .game_session import GameSession, new_session
from .scoring import score_guess, update_keyboard, build_reveal_schedule
from .solution_selector import select_solution, xorshift32, days_since_epoch

__all__ = [
    'Dictionary', 'load_dictionary', 'normalize_words',
    'GameService', 'get_game_service', 'initialize_game_service',
    'GameSession', 'new_session',
    'score_guess', 'update_keyboard', 'build_reveal_schedule',
    'select_solution', 'xorshift32', 'days_since_epoch'
]
