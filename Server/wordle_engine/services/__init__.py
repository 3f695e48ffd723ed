"""
Services Package

Contains all business logic and service classes.
"""

from .auth_service import AuthService, get_auth_service, initialize_auth_service
from .cleanup_service import CleanupWorker
from .game_service import GameService, evaluate_guess, get_game_service, initialize_game_service
from .notification_service import GameRecordNotifier, get_notifier, initialize_notifier
from .word_service import WordService, get_word_service, initialize_word_service

__all__ = [
    'AuthService', 'get_auth_service', 'initialize_auth_service',
    'CleanupWorker',
    'GameService', 'evaluate_guess', 'get_game_service', 'initialize_game_service',
    'GameRecordNotifier', 'get_notifier', 'initialize_notifier',
    'WordService', 'get_word_service', 'initialize_word_service'
]
