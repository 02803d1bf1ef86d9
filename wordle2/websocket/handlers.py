"""
WebSocket Event Handlers

Handles keyboard input over WebSocket and drives the staggered reveal of
each submitted guess in real time.
"""

from dataclasses import asdict
from flask import current_app, request
from flask_socketio import emit, join_room, leave_room
from ..models.errors import GameError
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger


def _room(game_id):
    return f"game_{game_id}"


def emit_game_error(error: GameError):
    emit('error', {'error': error.message, 'error_code': error.error_code})


def drive_reveal(socketio, game_service, game_id, turn):
    """
    Plays the reveal schedule of an accepted guess, one tile at a time.

    Input for the game is ignored by the session until the last tile has been
    shown and the reveal is finished.
    """
    row = game_service.guess_count(game_id) - 1
    for step in turn.reveal:
        socketio.sleep(step.delay_ms / 1000.0)
        emit('tile_revealed', {'game_id': game_id, 'row': row, **step.to_dict()})

    game_service.finish_reveal(game_id)
    state = game_service.get_game_state(game_id)
    emit('reveal_complete', {'success': True, 'turn': turn.to_dict(), 'state': asdict(state)})
    game_logger.log_game_event(game_id, 'reveal_complete', request.remote_addr, result=turn.to_dict()['result'])

    if turn.status.is_terminal:
        emit('game_over', {
            'game_id': game_id,
            'status': turn.status.value,
            'answer': state.answer
        })
        game_logger.log_game_event(
            game_id, f"game_{turn.status.value}", request.remote_addr,
            guesses_used=len(state.guesses), target_word=state.answer
        )


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.logger.info(f"WebSocket: client connected ({request.sid})")

    @socketio.on('new_game')
    def handle_new_game(data=None):
        """Start a new game and subscribe this client to it."""
        try:
            game_service = get_game_service()
            if not game_service:
                emit('error', {'error': 'Game service unavailable'})
                return

            daily = (data or {}).get('daily', current_app.config.get('DAILY_MODE_DEFAULT', False))
            if not isinstance(daily, bool):
                emit('error', {'error': '"daily" must be true or false', 'error_code': 'invalid_request'})
                return

            game_logger.log_user_action(request, 'new_game', daily=daily)

            game_id = game_service.create_new_game(daily=daily)
            join_room(_room(game_id))

            emit('game_state', {'success': True, 'game_id': game_id, 'state': asdict(game_service.get_game_state(game_id))})

        except Exception as e:
            game_logger.log_error(request, e, 'new_game')
            emit('error', {'error': str(e)})

    @socketio.on('join_game')
    def handle_join_game(data):
        """Subscribe to an existing game."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        game_id = (data or {}).get('game_id')
        state = game_service.get_game_state(game_id) if game_id else None
        if state is None:
            emit('error', {'error': 'Game not found', 'error_code': 'game_not_found'})
            return

        join_room(_room(game_id))
        emit('game_state', {'success': True, 'game_id': game_id, 'state': asdict(state)})

    @socketio.on('leave_game')
    def handle_leave_game(data):
        """Unsubscribe from a game."""
        game_id = (data or {}).get('game_id')
        if game_id:
            leave_room(_room(game_id))

    @socketio.on('key')
    def handle_key(data):
        """
        Apply one key press: a letter, "Backspace" or "Enter".

        An accepted "Enter" is followed by one tile_revealed event per letter,
        then reveal_complete (and game_over when the game ends).
        """
        game_id = (data or {}).get('game_id')
        key = (data or {}).get('key')
        try:
            game_service = get_game_service()
            if not game_service:
                emit('error', {'error': 'Game service unavailable'})
                return

            if not game_id or not isinstance(key, str):
                emit('error', {'error': 'game_id and key are required'})
                return

            game_logger.log_user_action(request, 'key', game_id, key=key)

            turn = game_service.handle_key(game_id, key)
            if turn.result is not None:
                drive_reveal(socketio, game_service, game_id, turn)
                return

            emit('game_state', {
                'success': True,
                'game_id': game_id,
                'turn': turn.to_dict(),
                'state': asdict(game_service.get_game_state(game_id))
            })

        except GameError as e:
            game_logger.log_server_response(
                request, 'key', False, {'error': e.message}, game_id,
                validation_error=e.error_code
            )
            emit_game_error(e)
        except Exception as e:
            game_logger.log_error(request, e, 'key', game_id)
            emit('error', {'error': str(e)})
