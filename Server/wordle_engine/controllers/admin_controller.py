"""
Admin Controller

Handles administrative endpoints: word list refresh, manual session
eviction and in-memory statistics.
"""

from flask import Blueprint, jsonify, request
from ..exceptions import WordSourceExhaustedError
from ..services.game_service import get_game_service
from ..services.word_service import get_word_service
from ..utils.game_logger import game_logger

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/refresh-words', methods=['POST'])
def refresh_words():
    """Reload the word list through the fallback chain."""
    word_service = get_word_service()
    if not word_service:
        return jsonify({'success': False, 'error': 'Word service unavailable'}), 503

    game_logger.log_user_action(request, 'refresh_words')

    try:
        stats = word_service.refresh_words()
    except WordSourceExhaustedError as e:
        game_logger.log_error(request, e, 'refresh_words')
        return jsonify({'success': False, 'error': 'Failed to refresh words'}), 500

    response_data = {
        'success': True,
        'message': 'Words refreshed successfully',
        'stats': stats
    }
    game_logger.log_server_response(request, 'refresh_words', True, response_data)
    return jsonify(response_data)


@admin_bp.route('/cleanup', methods=['POST'])
def cleanup():
    """Evict expired sessions now. Optional JSON body: {"maxAgeSeconds": <number>}."""
    game_service = get_game_service()
    if not game_service:
        return jsonify({'success': False, 'error': 'Game service unavailable'}), 503

    data = request.get_json(silent=True) or {}
    max_age = data.get('maxAgeSeconds')
    if max_age is not None and (isinstance(max_age, bool) or not isinstance(max_age, (int, float)) or max_age < 0):
        return jsonify({'success': False, 'error': 'maxAgeSeconds must be a non-negative number'}), 400

    game_logger.log_user_action(request, 'cleanup', max_age_seconds=max_age)

    evicted = game_service.evict_expired(max_age=max_age)

    response_data = {
        'success': True,
        'evicted': evicted,
        'remaining': game_service.get_game_count()
    }
    game_logger.log_server_response(request, 'cleanup', True, response_data)
    return jsonify(response_data)


@admin_bp.route('/stats', methods=['GET'])
def stats():
    """Game and word list statistics."""
    game_service = get_game_service()
    word_service = get_word_service()
    if not game_service or not word_service:
        return jsonify({'success': False, 'error': 'Game service unavailable'}), 503

    game_logger.log_user_action(request, 'stats')

    response_data = {
        'success': True,
        'games': game_service.get_statistics(),
        'words': word_service.get_statistics()
    }
    return jsonify(response_data)
