"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import optional_auth
from .helpers import get_bearer_token, get_user_identity
from .game_logger import game_logger

__all__ = ['optional_auth', 'get_bearer_token', 'get_user_identity', 'game_logger']
