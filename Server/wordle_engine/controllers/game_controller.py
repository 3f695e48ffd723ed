"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, current_app, g, jsonify, request
from ..services.game_service import get_game_service
from ..services.notification_service import get_notifier
from ..services.word_service import get_word_service
from ..utils.decorators import optional_auth
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 503


def _current_user():
    """Return (user_id, username, token) of the verified caller, or Nones for guests."""
    user = g.get('user')
    if not user:
        return None, None, None
    return user['id'], user.get('username'), g.get('auth_token')


@game_bp.route('/game/new', methods=['POST'])
@optional_auth
def new_game():
    """Create a new game session."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    data = request.get_json(silent=True) or {}
    target_word = None
    if current_app.config.get('ALLOW_TARGET_OVERRIDE'):
        target_word = data.get('targetWord')

    game_logger.log_user_action(request, 'new_game', custom_target=target_word is not None)

    try:
        user_id, username, _ = _current_user()
        session_id, state = game_service.create_game(target_word, user_id, username)
    except ValueError as e:
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 400
    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        return jsonify({'success': False, 'error': 'Failed to create game'}), 500

    response_data = {
        'success': True,
        **state.to_dict()
    }

    game_logger.log_server_response(request, 'new_game', True, response_data, session_id)
    return jsonify(response_data), 201


@game_bp.route('/game/<session_id>', methods=['GET'])
def get_state(session_id):
    """Get current game state."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    game_logger.log_user_action(request, 'get_state', session_id)

    try:
        state = game_service.get_public_state(session_id)
    except Exception as e:
        game_logger.log_error(request, e, 'get_state', session_id)
        return jsonify({'success': False, 'error': 'Failed to get game state'}), 500

    if state is None:
        error_response = {
            'success': False,
            'error': 'Game not found'
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, session_id)
        return jsonify(error_response), 404

    response_data = {
        'success': True,
        **state.to_dict()
    }
    game_logger.log_server_response(
        request, 'get_state', True, response_data, session_id,
        current_row=state.current_row, game_over=state.game_over
    )
    return jsonify(response_data)


@game_bp.route('/game/<session_id>/guess', methods=['POST'])
@optional_auth
def submit_guess(session_id):
    """Submit a guess for validation and evaluation."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    data = request.get_json(silent=True)
    guess = data.get('guess') if isinstance(data, dict) else None
    if not guess or not isinstance(guess, str):
        error_response = {
            'success': False,
            'error': 'Guess is required and must be a string'
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, session_id)
        return jsonify(error_response), 400

    game_logger.log_user_action(request, 'submit_guess', session_id, guess_length=len(guess))

    user_id, username, token = _current_user()
    try:
        outcome = game_service.submit_guess(session_id, guess, user_id, username, token)
    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', session_id)
        return jsonify({'success': False, 'error': 'Failed to submit guess'}), 500

    if not outcome.valid:
        # Rejected guesses are part of normal play, not transport errors
        response_data = outcome.to_dict()
        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, session_id,
            rejection=outcome.rejection.name
        )
        return jsonify(response_data)

    response_data = {
        'success': True,
        **outcome.to_dict()
    }

    if outcome.game_over:
        if user_id:
            response_data['message'] = (
                'Congratulations! Game saved to your profile.' if outcome.won
                else 'Game over! Your progress has been saved.'
            )
        else:
            response_data['message'] = (
                'Congratulations! Login to save your progress.' if outcome.won
                else 'Game over! Login to track your statistics.'
            )

    game_logger.log_server_response(
        request, 'submit_guess', True, response_data, session_id,
        round=outcome.game_state.attempts, game_over=outcome.game_over
    )

    if outcome.game_over:
        game_logger.log_game_event(
            session_id, 'game_won' if outcome.won else 'game_lost', request.remote_addr,
            rounds_used=outcome.game_state.attempts, target_word=outcome.solution,
            user_id=user_id
        )

    return jsonify(response_data)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    game_service = get_game_service()
    word_service = get_word_service()
    notifier = get_notifier()

    if not game_service or not word_service:
        return jsonify({
            'status': 'unhealthy',
            'service': 'wordle-game-service',
            'error': 'Services not initialized'
        }), 503

    response_data = {
        **game_service.health_check(),
        'service': 'wordle-game-service',
        'wordService': {
            'initialized': word_service.initialized,
            'wordCount': word_service.get_word_count(),
            'source': word_service.source
        },
        'notifier': notifier.get_statistics() if notifier else None,
        'log_stats': game_logger.get_log_stats()
    }
    return jsonify(response_data)
