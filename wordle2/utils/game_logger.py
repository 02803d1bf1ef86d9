"""
Game Logger Module for Wordle2 Server

Writes one JSON record per player action, server reply and game event to a
dated log file. The handlers are attached to the `wordle2` package logger,
so the module loggers of the game core end up in the same file.
"""

import logging
import json
from collections import Counter
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config import Config
from .helpers import get_user_identity

PACKAGE_LOGGER = 'wordle2'

# Record kinds, stored under 'event_type' in every JSON entry
USER_ACTION = 'USER_ACTION'
RESPONSE_OK = 'SERVER_RESPONSE_SUCCESS'
RESPONSE_FAILED = 'SERVER_RESPONSE_ERROR'
GAME_EVENT = 'GAME_EVENT'
ERROR = 'ERROR'


def _summarize_state(state: Dict[str, Any]) -> Dict[str, Any]:
    # The answer itself never goes to the log, only whether it was sent
    return {
        'attempt_index': state.get('attempt_index'),
        'status': state.get('status'),
        'revealing': state.get('revealing'),
        'guesses_count': len(state.get('guesses', [])),
        'answer_revealed': state.get('answer') is not None
    }


def _summarize_turn(turn: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'accepted': turn.get('accepted'),
        'status': turn.get('status'),
        'result': turn.get('result')
    }


_SUMMARIZERS = {
    'state': _summarize_state,
    'turn': _summarize_turn,
}


class GameLogger:
    """
    Structured JSON logging for the Wordle2 server.

    Requests arrive over HTTP or over a WebSocket; both are recorded with
    the same shape, the transport being told apart by the socket id.
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, str(level).upper(), logging.INFO)
        self.logger = self._setup_logger()

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger(PACKAGE_LOGGER)
        logger.setLevel(self.level)

        if logger.handlers:
            logger.handlers.clear()

        file_handler = logging.FileHandler(self._log_file(), encoding='utf-8')
        file_handler.setLevel(self.level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

        # Console only shows warnings and errors
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
        return logger

    def _write(self, event_type: str, action: str, user: Dict[str, Any],
               details: Dict[str, Any], level: int = logging.INFO):
        entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user,
            'details': details
        }
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    @staticmethod
    def _origin(request) -> Dict[str, Any]:
        """Where a request came from: the socket event or the HTTP route."""
        if getattr(request, 'sid', None):
            return {'transport': 'websocket', 'event': getattr(request, 'event', None)}
        return {
            'transport': 'http',
            'method': getattr(request, 'method', None),
            'path': getattr(request, 'path', None)
        }

    def log_user_action(self, request, action: str, game_id: Optional[str] = None, **details):
        """
        Log one player input, e.g. 'new_game', 'key' or 'submit_guess'.

        Extra keyword arguments (the key pressed, the daily flag) are stored
        with the entry.
        """
        self._write(USER_ACTION, action, get_user_identity(request), {
            'game_id': game_id,
            **self._origin(request),
            **details
        })

    def log_server_response(self, request, action: str, success: bool,
                            response_data: Dict[str, Any],
                            game_id: Optional[str] = None, **details):
        """Log the reply sent for an action. Failed replies are logged at ERROR."""
        self._write(
            RESPONSE_OK if success else RESPONSE_FAILED,
            action,
            get_user_identity(request),
            {
                'game_id': game_id,
                'success': success,
                'response_data': self.summarize_response(response_data),
                **details
            },
            logging.INFO if success else logging.ERROR
        )

    def log_game_event(self, game_id: Optional[str], event: str, user_ip: str, **details):
        """Log a game milestone such as 'reveal_complete', 'game_won' or 'game_lost'."""
        user = {'user_ip': user_ip or 'unknown', 'session_id': None}
        self._write(GAME_EVENT, event, user, {'game_id': game_id, **details})

    def log_error(self, request, error: Exception, action: str, game_id: Optional[str] = None):
        """Log an unexpected exception raised while handling an action."""
        self._write(ERROR, action, get_user_identity(request), {
            'game_id': game_id,
            'error_type': type(error).__name__,
            'error_message': str(error)
        }, logging.ERROR)

    @staticmethod
    def summarize_response(data: Any) -> Dict[str, Any]:
        """Shrink game states and turns in a reply to the fields worth logging."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        summary = dict(data)
        for key, summarize in _SUMMARIZERS.items():
            if isinstance(summary.get(key), dict):
                summary[key] = summarize(summary[key])
        return summary

    def get_log_stats(self) -> Dict[str, Any]:
        """Count today's entries by event type, for the health endpoint."""
        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        counts = Counter()
        other_lines = 0
        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    # Lines are "time | level | logger | message"
                    message = line.rstrip('\n').split(' | ', 3)[-1]
                    try:
                        counts[json.loads(message)['event_type']] += 1
                    except (ValueError, KeyError, TypeError):
                        if line.strip():
                            other_lines += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': sum(counts.values()),
            'events': dict(counts),
            'plain_messages': other_lines
        }


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
