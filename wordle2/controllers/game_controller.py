"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from dataclasses import asdict
from flask import Blueprint, current_app, request, jsonify
from ..models.errors import GameError, GameNotFound
from ..models.game import GameStatus
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _game_error_response(action, game_id, error: GameError):
    """Turn a recoverable game error into a 4xx response."""
    error_response = {
        'success': False,
        'error': error.message,
        'error_code': error.error_code
    }
    game_logger.log_server_response(
        request, action, False, error_response, game_id,
        validation_error=error.error_code
    )
    status_code = 404 if isinstance(error, GameNotFound) else 400
    return jsonify(error_response), status_code


def _unexpected_error_response(action, game_id, error: Exception):
    game_logger.log_error(request, error, action, game_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 500


def _log_game_over(game_id, turn):
    """Log the terminal game events after an accepted guess."""
    if turn.status is GameStatus.WON:
        game_logger.log_game_event(
            game_id, 'game_won', request.remote_addr,
            guesses_used=turn.attempt_index + 1
        )
    elif turn.status is GameStatus.LOST:
        game_logger.log_game_event(
            game_id, 'game_lost', request.remote_addr,
            guesses_used=turn.attempt_index, target_word=turn.solution
        )


def _turn_response(action, game_id, operation, **log_details):
    """Run one session operation and build the response with the new state."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, action, game_id, **log_details)

        turn = operation(game_service)
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'turn': turn.to_dict(),
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, action, True, response_data, game_id,
            accepted=turn.accepted, status=turn.status.value
        )

        if turn.result is not None:
            _log_game_over(game_id, turn)

        return jsonify(response_data)

    except GameError as e:
        return _game_error_response(action, game_id, e)
    except Exception as e:
        return _unexpected_error_response(action, game_id, e)


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        daily = data.get('daily', current_app.config.get('DAILY_MODE_DEFAULT', False))
        if not isinstance(daily, bool):
            return jsonify({
                'success': False,
                'error': '"daily" must be true or false'
            }), 400

        game_logger.log_user_action(request, 'new_game', daily=daily)

        game_id = game_service.create_new_game(daily=daily)
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            mode=state.mode, max_guesses=state.max_guesses
        )

        return jsonify(response_data)

    except Exception as e:
        return _unexpected_error_response('new_game', None, e)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get current game state."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _game_error_response('get_state', game_id, GameNotFound())

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            attempt_index=state.attempt_index, status=state.status
        )

        return jsonify(response_data)

    except Exception as e:
        return _unexpected_error_response('get_state', game_id, e)


@game_bp.route('/game/<game_id>/letter', methods=['POST'])
def append_letter(game_id):
    """Type one letter into the current guess."""
    data = request.get_json(silent=True) or {}
    letter = data.get('letter')
    if not isinstance(letter, str):
        error_response = {
            'success': False,
            'error': 'Letter is required'
        }
        game_logger.log_server_response(request, 'append_letter', False, error_response, game_id)
        return jsonify(error_response), 400

    return _turn_response(
        'append_letter', game_id,
        lambda service: service.append_letter(game_id, letter),
        letter=letter
    )


@game_bp.route('/game/<game_id>/delete', methods=['POST'])
def delete_letter(game_id):
    """Remove the last letter of the current guess."""
    return _turn_response(
        'delete_letter', game_id,
        lambda service: service.delete_letter(game_id)
    )


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
def submit_guess(game_id):
    """Submit the current guess for evaluation."""
    return _turn_response(
        'submit_guess', game_id,
        lambda service: service.submit_guess(game_id)
    )


@game_bp.route('/game/<game_id>/reveal_complete', methods=['POST'])
def reveal_complete(game_id):
    """Signal that the client finished animating the last guess."""
    return _turn_response(
        'reveal_complete', game_id,
        lambda service: service.finish_reveal(game_id)
    )


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

        return jsonify(response_data), (200 if success else 404)

    except Exception as e:
        return _unexpected_error_response('delete_game', game_id, e)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy' if game_service else 'degraded',
            'active_games': game_service.active_games() if game_service else 0,
            'dictionary': game_service.dictionary.describe() if game_service else None,
            'word_statistics': game_service.dictionary.statistics() if game_service else None,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
