"""
Game Data Models

Contains all game-related data structures and enums.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config.game_settings import MAX_ROUNDS, WORD_LENGTH


class LetterStatus(Enum):
    """Per-letter evaluation mark."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    UNSET = "unset"

    def to_json(self) -> Optional[str]:
        # Unwritten cells are null on the wire
        return None if self is LetterStatus.UNSET else self.value


class GameStatus(Enum):
    """Session lifecycle state. WON and LOST are terminal."""
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


class GuessRejection(Enum):
    """Soft failures of a guess submission. None of them mutate the session."""
    SESSION_NOT_FOUND = "Game not found"
    SESSION_ALREADY_OVER = "Game is already over"
    INVALID_GUESS = "Not a valid word"


def _empty_board() -> List[List[str]]:
    return [["" for _ in range(WORD_LENGTH)] for _ in range(MAX_ROUNDS)]


def _empty_evaluations() -> List[List[LetterStatus]]:
    return [[LetterStatus.UNSET for _ in range(WORD_LENGTH)] for _ in range(MAX_ROUNDS)]


@dataclass
class GameSession:
    """Server-side game session. The target word never leaves the server while active."""
    session_id: str
    target_word: str
    created_at: float
    owner_id: Optional[str] = None
    owner_username: Optional[str] = None
    board: List[List[str]] = field(default_factory=_empty_board)
    evaluations: List[List[LetterStatus]] = field(default_factory=_empty_evaluations)
    guesses: List[str] = field(default_factory=list)
    status: GameStatus = GameStatus.ACTIVE
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def attempts(self) -> int:
        return len(self.guesses)

    @property
    def current_row(self) -> int:
        return len(self.guesses)

    @property
    def game_over(self) -> bool:
        return self.status is not GameStatus.ACTIVE

    @property
    def won(self) -> bool:
        return self.status is GameStatus.WON


@dataclass
class PublicGameState:
    """Projection of a session that is safe to send to the player."""
    session_id: str
    board: List[List[str]]
    evaluations: List[List[LetterStatus]]
    current_row: int
    game_over: bool
    won: bool
    attempts: int
    guesses: List[str]
    target_word: Optional[str] = None  # Only included when game is over

    @classmethod
    def from_session(cls, session: GameSession) -> "PublicGameState":
        return cls(
            session_id=session.session_id,
            board=[row.copy() for row in session.board],
            evaluations=[row.copy() for row in session.evaluations],
            current_row=session.current_row,
            game_over=session.game_over,
            won=session.won,
            attempts=session.attempts,
            guesses=session.guesses.copy(),
            target_word=session.target_word if session.game_over else None
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'sessionId': self.session_id,
            'board': [row.copy() for row in self.board],
            'evaluations': [[mark.to_json() for mark in row] for row in self.evaluations],
            'currentRow': self.current_row,
            'gameOver': self.game_over,
            'won': self.won,
            'attempts': self.attempts,
            'guesses': self.guesses.copy()
        }
        if self.target_word is not None:
            data['targetWord'] = self.target_word
        return data


@dataclass
class GuessOutcome:
    """Result of a guess submission, accepted or softly rejected."""
    valid: bool
    result: Optional[List[LetterStatus]] = None
    game_over: Optional[bool] = None
    won: Optional[bool] = None
    solution: Optional[str] = None  # Only set on the guess that ends the game
    game_state: Optional[PublicGameState] = None
    rejection: Optional[GuessRejection] = None
    error: Optional[str] = None

    @classmethod
    def rejected(cls, rejection: GuessRejection, error: Optional[str] = None) -> "GuessOutcome":
        return cls(valid=False, rejection=rejection, error=error or rejection.value)

    def to_dict(self) -> Dict[str, Any]:
        if not self.valid:
            return {'valid': False, 'error': self.error}

        data = {
            'valid': True,
            'result': [mark.to_json() for mark in self.result],
            'gameOver': self.game_over,
            'won': self.won,
            'gameState': self.game_state.to_dict()
        }
        if self.solution is not None:
            data['solution'] = self.solution
        return data


@dataclass
class GameRecord:
    """Completed game as reported to the profile service."""
    session_id: str
    owner_id: str
    target_word: str
    guesses: List[str]
    won: bool
    attempts: int
    completed_at: str
    owner_username: Optional[str] = None
    auth_token: Optional[str] = field(default=None, repr=False)

    def to_payload(self) -> Dict[str, Any]:
        """Body accepted by the profile service's POST /api/games."""
        return {
            'gameId': self.session_id,
            'word': self.target_word,
            'guesses': self.guesses.copy(),
            'won': self.won,
            'attempts': self.attempts,
            'date': self.completed_at[:10],
            'completedAt': self.completed_at
        }

    def to_headers(self) -> Dict[str, str]:
        """Identity headers; the bearer token is forwarded when the caller sent one."""
        headers = {'X-User-ID': self.owner_id, 'X-Service': 'game-service'}
        if self.owner_username:
            headers['X-User-Username'] = self.owner_username
        if self.auth_token:
            headers['Authorization'] = f'Bearer {self.auth_token}'
        return headers
