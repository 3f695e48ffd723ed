import os
import tempfile

# Keep test log files out of the working tree; must run before the package is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='wordle-logs-'))

import httpx
import jwt
import pytest

from wordle_engine import create_app
from wordle_engine.config import TestingConfig
from wordle_engine.services.auth_service import initialize_auth_service
from wordle_engine.services.game_service import GameService, initialize_game_service
from wordle_engine.services.notification_service import GameRecordNotifier, initialize_notifier
from wordle_engine.services.word_service import WordService, initialize_word_service

TEST_WORDS = [
    "HELLO", "WORLD", "SPEED", "ERASE", "CRANE", "QUICK", "BROWN", "JUMPS",
    "FOXES", "LEMON", "PLANT", "GHOST", "MIGHT", "ABBEY", "KEEPS",
]


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class ProfileServiceStub:
    """Records requests made to the profile service and answers with `status_code`."""

    def __init__(self):
        self.requests = []
        self.status_code = 201
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json={"success": True})


@pytest.fixture()
def word_service():
    service = WordService(strategies=[("Test", lambda: list(TEST_WORDS))])
    service.initialize()
    return service


@pytest.fixture()
def profile_service():
    return ProfileServiceStub()


@pytest.fixture()
def notifier(profile_service):
    client = httpx.Client(transport=httpx.MockTransport(profile_service.handler))
    service = GameRecordNotifier("http://profile.test", timeout=1, queue_size=10, http_client=client)
    service.start()
    yield service
    service.close()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def game_service(word_service, notifier, clock):
    return GameService(word_service, notifier=notifier, max_age_seconds=3600, clock=clock)


@pytest.fixture()
def flask_app(word_service, notifier, game_service):
    initialize_word_service(word_service=word_service)
    initialize_notifier(notifier=notifier)
    initialize_auth_service(TestingConfig.JWT_SECRET)
    initialize_game_service(game_service=game_service)
    return create_app(TestingConfig)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_token():
    def _make_token(user_id="user-42", secret=TestingConfig.JWT_SECRET, **claims):
        payload = {"userId": user_id, "username": "tester", **claims}
        return jwt.encode(payload, secret, algorithm="HS256")
    return _make_token
