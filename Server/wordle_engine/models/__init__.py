"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    GameRecord, GameSession, GameStatus, GuessOutcome, GuessRejection,
    LetterStatus, PublicGameState
)

__all__ = [
    'GameRecord', 'GameSession', 'GameStatus', 'GuessOutcome', 'GuessRejection',
    'LetterStatus', 'PublicGameState'
]
