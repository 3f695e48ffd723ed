"""
Word Service

Supplies target words and answers "is this a legal guess" queries.

The word set is loaded through an ordered list of strategies tried in
sequence: the remote word list, the on-disk cache of the last successful
remote load, and finally the word list bundled with the package.
"""

import json
import os
import re
import secrets
import threading
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

import httpx

from ..config.game_settings import WORD_LENGTH, WORD_LIST
from ..exceptions import WordServiceNotInitializedError, WordSourceExhaustedError
from ..utils.game_logger import game_logger

WORD_PATTERN = re.compile(rf"^[A-Z]{{{WORD_LENGTH}}}$")
CACHE_FILE_NAME = "words.json"
CACHE_VERSION = "1.0"

WordStrategy = Tuple[str, Callable[[], List[str]]]


def normalize_words(words: Iterable) -> List[str]:
    """Uppercase, filter to well-formed words and de-duplicate, keeping order."""
    seen = set()
    result = []
    for word in words:
        if not isinstance(word, str):
            continue
        normalized = word.strip().upper()
        if WORD_PATTERN.match(normalized) and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def parse_word_list(content: str) -> List[str]:
    """Parse a JSON array or a whitespace/comma separated word list."""
    if not content or not isinstance(content, str):
        return []

    stripped = content.strip()
    if stripped.startswith("["):
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return normalize_words(parsed)

    return normalize_words(re.split(r"[\s,]+", stripped))


class WordService:
    """
    Word source with a remote -> cache -> bundled fallback chain.

    The active word set is replaced atomically, so a refresh never leaves
    callers with a partially loaded or empty dictionary.
    """

    def __init__(self,
                 word_list_url: Optional[str] = None,
                 cache_dir: str = "./cache",
                 fetch_timeout: float = 15.0,
                 cache_max_age_days: int = 7,
                 http_client: Optional[httpx.Client] = None,
                 strategies: Optional[List[WordStrategy]] = None):
        self.word_list_url = word_list_url
        self.cache_dir = cache_dir
        self.fetch_timeout = fetch_timeout
        self.cache_max_age = timedelta(days=cache_max_age_days)
        self.http_client = http_client

        self.initialized = False
        self.source: Optional[str] = None
        self.last_refresh: Optional[str] = None

        self._lock = threading.Lock()
        self._words: FrozenSet[str] = frozenset()
        self._word_list: Tuple[str, ...] = ()

        if strategies is not None:
            self.strategies = list(strategies)
        else:
            self.strategies = []
            if word_list_url:
                self.strategies.append(("Remote", self._load_from_remote))
            self.strategies.append(("Cache", self._load_from_cache))
            self.strategies.append(("Hardcoded", self._load_hardcoded_words))

    def initialize(self) -> None:
        """
        Load the word set from the first strategy that yields words.

        Raises:
            WordSourceExhaustedError: If no strategy produced any word
        """
        if self.initialized:
            return
        game_logger.logger.info("Initializing word service...")
        self._load()

    def refresh_words(self) -> Dict:
        """Re-run the fallback chain. The previous set stays active until a new one is ready."""
        game_logger.logger.info("Manually refreshing word list...")
        self._load()
        return self.get_statistics()

    def _load(self) -> None:
        for name, method in self.strategies:
            try:
                words = normalize_words(method())
            except (httpx.HTTPError, OSError, ValueError, KeyError) as e:
                game_logger.logger.warning(f"{name} word source failed: {e}")
                continue

            if not words:
                game_logger.logger.warning(f"{name} word source returned no words")
                continue

            with self._lock:
                self._words = frozenset(words)
                self._word_list = tuple(sorted(self._words))
                self.source = name
                self.last_refresh = datetime.now(timezone.utc).isoformat()
                self.initialized = True

            game_logger.logger.info(f"Word service loaded {len(words)} words from {name}")
            return

        raise WordSourceExhaustedError("Failed to load words from any word source")

    def _load_from_remote(self) -> List[str]:
        client = self.http_client or httpx.Client()
        try:
            response = client.get(
                self.word_list_url,
                headers={"User-Agent": "Wordle-Game-Service/1.0", "Accept": "text/plain"},
                timeout=self.fetch_timeout,
                follow_redirects=True
            )
            response.raise_for_status()
        finally:
            if client is not self.http_client:
                client.close()

        words = parse_word_list(response.text)
        if not words:
            raise ValueError("No valid words found in response")

        self._save_to_cache(words)
        return words

    def _cache_path(self) -> str:
        return os.path.join(self.cache_dir, CACHE_FILE_NAME)

    def _save_to_cache(self, words: List[str]) -> None:
        cache_data = {
            "words": words,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": CACHE_VERSION
        }
        try:
            os.makedirs(self.cache_dir, exist_ok=True)
            with open(self._cache_path(), "w", encoding="utf-8") as f:
                json.dump(cache_data, f, indent=2)
        except OSError as e:
            # The words are loaded either way; only the next cold start loses out
            game_logger.logger.error(f"Failed to save word cache: {e}")

    def _load_from_cache(self) -> List[str]:
        with open(self._cache_path(), "r", encoding="utf-8") as f:
            cached = json.load(f)

        if not isinstance(cached, dict) or not isinstance(cached.get("words"), list):
            raise ValueError("Invalid cache format")

        timestamp = cached.get("timestamp")
        if timestamp:
            cached_at = datetime.fromisoformat(timestamp)
            if cached_at.tzinfo is None:
                cached_at = cached_at.replace(tzinfo=timezone.utc)
            if datetime.now(timezone.utc) - cached_at > self.cache_max_age:
                game_logger.logger.warning("Word cache is old, but using anyway as fallback")

        return cached["words"]

    def _load_hardcoded_words(self) -> List[str]:
        return list(WORD_LIST)

    def _require_initialized(self) -> None:
        if not self.initialized:
            raise WordServiceNotInitializedError("WordService not initialized")

    def get_random_word(self) -> str:
        """Uniform draw from the word set using a cryptographically strong source."""
        self._require_initialized()
        word_list = self._word_list
        if not word_list:
            raise WordSourceExhaustedError("No words available")
        return secrets.choice(word_list)

    def is_valid_word(self, word) -> bool:
        self._require_initialized()
        if not word or not isinstance(word, str):
            return False

        normalized = word.strip().upper()
        if not WORD_PATTERN.match(normalized):
            return False

        return normalized in self._words

    def get_daily_word(self, day: Optional[date] = None) -> str:
        """Deterministic word for a calendar day. Placeholder for a future daily mode."""
        self._require_initialized()
        day = day or datetime.now(timezone.utc).date()
        seed = day.year + day.month + day.day
        word_list = self._word_list
        return word_list[seed % len(word_list)]

    def get_word_count(self) -> int:
        return len(self._words)

    def get_statistics(self) -> Dict:
        return {
            "totalWords": len(self._words),
            "initialized": self.initialized,
            "source": self.source,
            "lastRefresh": self.last_refresh,
            "cacheDir": self.cache_dir
        }


# Global service instance
_word_service = None


def get_word_service() -> Optional[WordService]:
    """Get the global word service instance."""
    return _word_service


def initialize_word_service(config_class=None, word_service: Optional[WordService] = None) -> WordService:
    """
    Initialize the global word service instance.

    Raises:
        WordSourceExhaustedError: If no words could be loaded. The service
        cannot operate without words, so startup must fail.
    """
    global _word_service
    if word_service is None:
        word_service = WordService(
            word_list_url=config_class.WORD_LIST_URL,
            cache_dir=config_class.WORD_CACHE_PATH,
            fetch_timeout=config_class.WORD_FETCH_TIMEOUT_SECONDS,
            cache_max_age_days=config_class.WORD_CACHE_MAX_AGE_DAYS
        )
    word_service.initialize()
    _word_service = word_service
    return _word_service
