"""
Session Cleanup Worker

Background thread that periodically evicts expired game sessions.
"""

import threading
from typing import Optional

from ..utils.game_logger import game_logger
from .game_service import GameService


class CleanupWorker:
    """Calls GameService.evict_expired every `interval_seconds` until stopped."""

    def __init__(self, game_service: GameService, interval_seconds: float = 60 * 60,
                 max_age_seconds: Optional[float] = None):
        self.game_service = game_service
        self.interval_seconds = interval_seconds
        self.max_age_seconds = max_age_seconds
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="session-cleanup", daemon=True)
        self._thread.start()
        game_logger.logger.info(
            f"Session cleanup worker started - checking every {self.interval_seconds} seconds"
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
        self._thread = None

    def run_once(self) -> int:
        evicted = self.game_service.evict_expired(max_age=self.max_age_seconds)
        if evicted:
            game_logger.log_game_event(None, 'sessions_evicted', 'system', evicted_count=evicted)
        return evicted

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.run_once()
            except Exception as e:
                # Keep sweeping; a failed pass is retried on the next tick
                game_logger.logger.error(f"Error in session cleanup worker: {e}")
