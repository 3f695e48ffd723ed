"""
Game Service

Contains the core game logic: session lifecycle, guess evaluation, the
six-attempt state machine and expiry of abandoned sessions.
"""

import threading
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from ..config.game_settings import MAX_ROUNDS, WORD_LENGTH
from ..models.game import (
    GameRecord, GameSession, GameStatus, GuessOutcome, GuessRejection,
    LetterStatus, PublicGameState
)
from ..utils.game_logger import game_logger
from .notification_service import GameRecordNotifier
from .word_service import WORD_PATTERN, WordService


def evaluate_guess(guess: str, target: str) -> List[LetterStatus]:
    """
    Implements the Wordle letter evaluation algorithm.

    Both words must be uppercase and of equal length. Exact matches are
    resolved first so that a repeated guess letter can only be marked
    PRESENT while unmatched copies remain in the target.

    Example: target SPEED, guess ERASE gives
    PRESENT, ABSENT, ABSENT, PRESENT, PRESENT.
    """
    result: List[Optional[LetterStatus]] = [None] * len(guess)

    # Working copies; consumed letters are replaced with None
    target_chars: List[Optional[str]] = list(target)
    guess_chars: List[Optional[str]] = list(guess)

    # First pass: exact positions
    for i in range(len(guess)):
        if guess_chars[i] == target_chars[i]:
            result[i] = LetterStatus.CORRECT
            target_chars[i] = None
            guess_chars[i] = None

    # Second pass: remaining letters against the unconsumed target letters
    for i in range(len(guess)):
        if guess_chars[i] is None:
            continue
        letter = guess_chars[i]
        if letter in target_chars:
            result[i] = LetterStatus.PRESENT
            target_chars[target_chars.index(letter)] = None
        else:
            result[i] = LetterStatus.ABSENT

    return result


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Session management with unique session IDs
    - Word selection and secure answer storage
    - Guess validation and evaluation
    - Game state projection without exposing answers to clients
    - Expiry of old sessions

    The store lock only guards the session map itself. Each session carries
    its own lock, so guesses against one session are serialized while other
    sessions proceed independently.
    """

    def __init__(self,
                 word_service: WordService,
                 notifier: Optional[GameRecordNotifier] = None,
                 max_age_seconds: float = 60 * 60,
                 clock: Callable[[], float] = time.time):
        self.word_service = word_service
        self.notifier = notifier
        self.max_age_seconds = max_age_seconds
        self.clock = clock
        self.games: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create_game(self,
                    target_word: Optional[str] = None,
                    owner_id: Optional[str] = None,
                    owner_username: Optional[str] = None) -> Tuple[str, PublicGameState]:
        """
        Creates a new game session.

        Args:
            target_word: Word to guess; a random word is drawn when omitted
            owner_id: Identity of the authenticated creator, if any
            owner_username: Username of the authenticated creator, if any

        Returns:
            Tuple of (session_id, public state)

        Raises:
            ValueError: If an explicit target word is not 5 letters
            WordSourceExhaustedError: If no words are available
        """
        if target_word is None:
            target_word = self.word_service.get_random_word()

        normalized_target = target_word.strip().upper() if isinstance(target_word, str) else ""
        if not WORD_PATTERN.match(normalized_target):
            raise ValueError(f"Target word must be exactly {WORD_LENGTH} letters")

        session = GameSession(
            session_id=str(uuid.uuid4()),
            target_word=normalized_target,
            created_at=self.clock(),
            owner_id=owner_id,
            owner_username=owner_username
        )

        with self._lock:
            self.games[session.session_id] = session

        game_logger.logger.info(
            f"Created game {session.session_id}" + (f" for user {owner_id}" if owner_id else "")
        )
        return session.session_id, PublicGameState.from_session(session)

    def _get_session(self, session_id: str) -> Optional[GameSession]:
        with self._lock:
            return self.games.get(session_id)

    def get_public_state(self, session_id: str) -> Optional[PublicGameState]:
        """
        Returns the public state for a session (without the answer while active).

        Returns:
            PublicGameState or None if the session is not found
        """
        session = self._get_session(session_id)
        if session is None:
            return None

        with session.lock:
            return PublicGameState.from_session(session)

    def _validate_guess(self, guess) -> Tuple[Optional[str], str]:
        """Returns (normalized_guess, "") or (None, error_message)."""
        if not guess or not isinstance(guess, str):
            return None, "Guess must be a valid string"

        normalized_guess = guess.strip().upper()

        if len(normalized_guess) != WORD_LENGTH:
            return None, f"Guess must be exactly {WORD_LENGTH} letters"

        if not WORD_PATTERN.match(normalized_guess):
            return None, "Guess must contain only letters"

        if not self.word_service.is_valid_word(normalized_guess):
            return None, GuessRejection.INVALID_GUESS.value

        return normalized_guess, ""

    def submit_guess(self,
                     session_id: str,
                     guess,
                     owner_id: Optional[str] = None,
                     owner_username: Optional[str] = None,
                     auth_token: Optional[str] = None) -> GuessOutcome:
        """
        Processes a guess and updates game state.

        Rejected guesses leave the session untouched and do not consume an
        attempt.

        Args:
            session_id: Unique session identifier
            guess: The raw guess as received from the player
            owner_id: Identity of the caller; falls back to the session owner
            owner_username: Username of the caller
            auth_token: Bearer token of the caller, forwarded with the game record

        Returns:
            GuessOutcome describing the evaluation or the rejection
        """
        session = self._get_session(session_id)
        if session is None:
            return GuessOutcome.rejected(GuessRejection.SESSION_NOT_FOUND)

        record = None
        with session.lock:
            if session.game_over:
                return GuessOutcome.rejected(GuessRejection.SESSION_ALREADY_OVER)

            normalized_guess, error = self._validate_guess(guess)
            if normalized_guess is None:
                return GuessOutcome.rejected(GuessRejection.INVALID_GUESS, error)

            marks = evaluate_guess(normalized_guess, session.target_word)

            row = session.current_row
            session.board[row] = list(normalized_guess)
            session.evaluations[row] = marks
            session.guesses.append(normalized_guess)

            if normalized_guess == session.target_word:
                session.status = GameStatus.WON
            elif session.attempts >= MAX_ROUNDS:
                session.status = GameStatus.LOST

            game_over = session.game_over
            outcome = GuessOutcome(
                valid=True,
                result=marks,
                game_over=game_over,
                won=session.won,
                solution=session.target_word if game_over else None,
                game_state=PublicGameState.from_session(session)
            )

            if owner_id:
                recipient, username = owner_id, owner_username
            else:
                recipient, username = session.owner_id, session.owner_username
                auth_token = None

            if game_over and recipient:
                record = GameRecord(
                    session_id=session.session_id,
                    owner_id=recipient,
                    target_word=session.target_word,
                    guesses=session.guesses.copy(),
                    won=session.won,
                    attempts=session.attempts,
                    completed_at=datetime.now(timezone.utc).isoformat(),
                    owner_username=username,
                    auth_token=auth_token
                )

        if record is not None:
            self._notify_completion(record)

        return outcome

    def _notify_completion(self, record: GameRecord) -> None:
        if self.notifier is None:
            game_logger.logger.warning(
                f"No profile notifier configured; game {record.session_id} not recorded"
            )
            return
        self.notifier.notify(record)

    def evict_expired(self, now: Optional[float] = None, max_age: Optional[float] = None) -> int:
        """
        Removes every session older than max_age seconds, regardless of status.

        Returns:
            Number of sessions removed
        """
        now = self.clock() if now is None else now
        max_age = self.max_age_seconds if max_age is None else max_age

        with self._lock:
            snapshot = list(self.games.items())

        evicted = 0
        for session_id, session in snapshot:
            if now - session.created_at <= max_age:
                continue
            with self._lock:
                # Skip entries replaced or deleted since the snapshot
                if self.games.get(session_id) is session:
                    del self.games[session_id]
                    evicted += 1

        if evicted:
            game_logger.logger.info(f"Cleaned up {evicted} old games")
        return evicted

    def delete_game(self, session_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if the session was deleted, False if not found
        """
        with self._lock:
            return self.games.pop(session_id, None) is not None

    def get_game_count(self) -> int:
        with self._lock:
            return len(self.games)

    def get_statistics(self) -> Dict:
        """Aggregate figures over the sessions currently in memory."""
        with self._lock:
            sessions = list(self.games.values())

        completed = [s for s in sessions if s.game_over]
        won = [s for s in completed if s.won]

        return {
            "totalGames": len(sessions),
            "activeGames": len(sessions) - len(completed),
            "completedGames": len(completed),
            "wonGames": len(won),
            "winRate": (len(won) / len(completed)) * 100 if completed else 0,
            "averageAttempts": sum(s.attempts for s in won) / len(won) if won else 0
        }

    def health_check(self) -> Dict:
        return {
            "status": "healthy",
            "service": "game-service",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "stats": {
                "activeGames": self.get_game_count(),
                "availableWords": self.word_service.get_word_count()
            }
        }


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(word_service: Optional[WordService] = None,
                            notifier: Optional[GameRecordNotifier] = None,
                            config_class=None,
                            game_service: Optional[GameService] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    if game_service is None:
        max_age = config_class.SESSION_MAX_AGE_SECONDS if config_class else 60 * 60
        game_service = GameService(word_service, notifier=notifier, max_age_seconds=max_age)
    _game_service = game_service
    return _game_service
