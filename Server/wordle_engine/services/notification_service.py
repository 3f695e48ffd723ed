"""
Game Record Notification Service

Reports completed games to the profile service. Delivery is best-effort and
at-most-once: records go through a bounded queue drained by a single worker
thread, so a slow or failing profile service never delays a guess response.
"""

import queue
import threading
from typing import Dict, Optional

import httpx

from ..models.game import GameRecord
from ..utils.game_logger import game_logger

_STOP = object()


class GameRecordNotifier:
    """One-way sender of completed games to the profile service."""

    def __init__(self,
                 profile_service_url: str,
                 timeout: float = 5.0,
                 queue_size: int = 1000,
                 http_client: Optional[httpx.Client] = None):
        self.endpoint = f"{profile_service_url.rstrip('/')}/api/games"
        self.timeout = timeout
        self.http_client = http_client or httpx.Client()
        self.queue: queue.Queue = queue.Queue(maxsize=queue_size)
        self._thread: Optional[threading.Thread] = None

        self._counter_lock = threading.Lock()
        self.sent_count = 0
        self.failed_count = 0
        self.dropped_count = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._thread = threading.Thread(target=self._run, name="game-record-notifier", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the worker after the records already queued have been attempted."""
        if self.running:
            try:
                self.queue.put(_STOP, timeout=timeout)
            except queue.Full:
                game_logger.logger.warning("Notification queue full while stopping; worker left running")
                return
            self._thread.join(timeout)
        self._thread = None

    def close(self) -> None:
        self.stop()
        self.http_client.close()

    def notify(self, record: GameRecord) -> bool:
        """Enqueue a record without blocking. Returns False if it had to be dropped."""
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            self._count("dropped_count")
            game_logger.logger.warning(
                f"Notification queue full, dropping record for game {record.session_id}"
            )
            return False
        return True

    def wait_until_idle(self) -> None:
        """Block until every queued record has been attempted."""
        self.queue.join()

    def _run(self) -> None:
        while True:
            record = self.queue.get()
            try:
                if record is _STOP:
                    return
                self._deliver(record)
            except Exception as e:
                self._count("failed_count")
                game_logger.logger.error(
                    f"Unexpected error recording game {record.session_id}: {e}", exc_info=True
                )
            finally:
                self.queue.task_done()

    def _deliver(self, record: GameRecord) -> None:
        game_logger.logger.info(
            f"Recording completed game {record.session_id} for user {record.owner_id}"
        )
        try:
            response = self.http_client.post(
                self.endpoint,
                json=record.to_payload(),
                headers=record.to_headers(),
                timeout=self.timeout
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            # Not retried: a completed game may go unrecorded
            self._count("failed_count")
            game_logger.logger.error(f"Failed to record game {record.session_id}: {e}")
            return

        self._count("sent_count")
        game_logger.logger.info(f"Successfully recorded game {record.session_id} for user {record.owner_id}")

    def _count(self, name: str) -> None:
        with self._counter_lock:
            setattr(self, name, getattr(self, name) + 1)

    def get_statistics(self) -> Dict:
        return {
            "running": self.running,
            "queued": self.queue.qsize(),
            "sent": self.sent_count,
            "failed": self.failed_count,
            "dropped": self.dropped_count
        }


# Global service instance
_notifier = None


def get_notifier() -> Optional[GameRecordNotifier]:
    """Get the global notifier instance."""
    return _notifier


def initialize_notifier(config_class=None, notifier: Optional[GameRecordNotifier] = None) -> GameRecordNotifier:
    """Initialize the global notifier instance. The worker is started by the caller."""
    global _notifier
    if notifier is None:
        notifier = GameRecordNotifier(
            profile_service_url=config_class.PROFILE_SERVICE_URL,
            timeout=config_class.NOTIFICATION_TIMEOUT_SECONDS,
            queue_size=config_class.NOTIFICATION_QUEUE_SIZE
        )
    _notifier = notifier
    return _notifier
