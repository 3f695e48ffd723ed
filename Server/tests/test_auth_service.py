import datetime

import jwt

from wordle_engine.services.auth_service import AuthService, initialize_auth_service

SECRET = "test-jwt-secret-for-the-wordle-game-service"


def test_verify_token_returns_user(make_token):
    result = AuthService(SECRET).verify_token(make_token("user-1"))
    assert result == {"success": True, "user": {"id": "user-1", "username": "tester"}}


def test_verify_token_accepts_snake_case_claim():
    token = jwt.encode({"user_id": 99}, SECRET, algorithm="HS256")
    assert AuthService(SECRET).verify_token(token)["user"]["id"] == "99"


def test_verify_token_rejects_bad_tokens(make_token):
    service = AuthService(SECRET)

    assert service.verify_token("")["error"] == "Token is required"
    assert service.verify_token("not-a-jwt")["error"] == "Invalid token"
    assert service.verify_token(make_token(secret="another-secret-that-is-also-long-enough"))["error"] == "Invalid token"

    expired = make_token(exp=datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(minutes=1))
    assert service.verify_token(expired)["error"] == "Token has expired"

    no_user = jwt.encode({"username": "x"}, SECRET, algorithm="HS256")
    assert service.verify_token(no_user)["error"] == "Invalid token payload"


def test_initialize_without_secret_disables_auth():
    assert initialize_auth_service(None) is None
    assert isinstance(initialize_auth_service(SECRET), AuthService)
