import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from wordle_engine.models.game import GuessRejection, LetterStatus

LOSING_GUESSES = ["WORLD", "QUICK", "BROWN", "JUMPS", "FOXES", "LEMON"]


def test_create_game_starts_empty_and_hides_target(game_service):
    session_id, state = game_service.create_game("hello")

    assert state.session_id == session_id
    assert state.board == [[""] * 5 for _ in range(6)]
    assert state.evaluations == [[LetterStatus.UNSET] * 5 for _ in range(6)]
    assert state.current_row == 0
    assert state.attempts == 0
    assert state.guesses == []
    assert not state.game_over
    assert state.target_word is None
    assert "targetWord" not in state.to_dict()
    assert game_service.games[session_id].target_word == "HELLO"


def test_create_game_draws_from_word_source(game_service):
    session_id, _ = game_service.create_game()
    assert game_service.word_service.is_valid_word(game_service.games[session_id].target_word)


def test_create_game_rejects_malformed_target(game_service):
    with pytest.raises(ValueError):
        game_service.create_game("TOOLONG")
    with pytest.raises(ValueError):
        game_service.create_game("AB3DE")


def test_session_ids_are_unique(game_service):
    ids = {game_service.create_game("HELLO")[0] for _ in range(50)}
    assert len(ids) == 50
    assert all(uuid.UUID(session_id).version == 4 for session_id in ids)


def test_hello_scenario(game_service):
    session_id, _ = game_service.create_game("HELLO")

    outcome = game_service.submit_guess(session_id, "world")
    assert outcome.valid
    assert outcome.result == [
        LetterStatus.ABSENT, LetterStatus.PRESENT, LetterStatus.ABSENT,
        LetterStatus.CORRECT, LetterStatus.ABSENT,
    ]
    assert outcome.game_state.attempts == 1
    assert outcome.game_state.current_row == 1
    assert outcome.game_over is False
    assert outcome.solution is None
    assert outcome.game_state.board[0] == list("WORLD")

    outcome = game_service.submit_guess(session_id, "HELLO")
    assert outcome.result == [LetterStatus.CORRECT] * 5
    assert outcome.game_over is True
    assert outcome.won is True
    assert outcome.solution == "HELLO"
    assert outcome.game_state.attempts == 2
    assert outcome.game_state.target_word == "HELLO"


def test_six_misses_lose_and_seventh_is_rejected(game_service):
    session_id, _ = game_service.create_game("HELLO")

    for index, guess in enumerate(LOSING_GUESSES):
        outcome = game_service.submit_guess(session_id, guess)
        assert outcome.valid
        assert outcome.game_over is (index == 5)

    assert outcome.won is False
    assert outcome.solution == "HELLO"
    before = game_service.get_public_state(session_id)
    assert before.attempts == 6

    rejected = game_service.submit_guess(session_id, "HELLO")
    assert not rejected.valid
    assert rejected.rejection is GuessRejection.SESSION_ALREADY_OVER
    assert game_service.get_public_state(session_id) == before


def test_guess_after_win_is_rejected(game_service):
    session_id, _ = game_service.create_game("HELLO")
    game_service.submit_guess(session_id, "HELLO")

    outcome = game_service.submit_guess(session_id, "WORLD")
    assert outcome.rejection is GuessRejection.SESSION_ALREADY_OVER
    assert game_service.get_public_state(session_id).guesses == ["HELLO"]


@pytest.mark.parametrize("guess, error", [
    ("ABCDE", "Not a valid word"),
    ("HELL", "Guess must be exactly 5 letters"),
    ("HELLOS", "Guess must be exactly 5 letters"),
    ("HE1LO", "Guess must contain only letters"),
    ("", "Guess must be a valid string"),
    (None, "Guess must be a valid string"),
    (12345, "Guess must be a valid string"),
])
def test_invalid_guesses_do_not_consume_attempts(game_service, guess, error):
    session_id, _ = game_service.create_game("HELLO")
    game_service.submit_guess(session_id, "WORLD")
    before = game_service.get_public_state(session_id)

    outcome = game_service.submit_guess(session_id, guess)

    assert not outcome.valid
    assert outcome.rejection is GuessRejection.INVALID_GUESS
    assert outcome.error == error
    assert game_service.get_public_state(session_id) == before


def test_guess_is_trimmed_and_uppercased(game_service):
    session_id, _ = game_service.create_game("HELLO")
    outcome = game_service.submit_guess(session_id, "  crane ")
    assert outcome.valid
    assert outcome.game_state.guesses == ["CRANE"]


def test_unknown_session(game_service):
    outcome = game_service.submit_guess("missing", "HELLO")
    assert outcome.rejection is GuessRejection.SESSION_NOT_FOUND
    assert outcome.to_dict() == {"valid": False, "error": "Game not found"}
    assert game_service.get_public_state("missing") is None


def test_read_is_idempotent(game_service):
    session_id, _ = game_service.create_game("HELLO")
    game_service.submit_guess(session_id, "WORLD")

    first = game_service.get_public_state(session_id)
    second = game_service.get_public_state(session_id)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_public_state_is_a_copy(game_service):
    session_id, _ = game_service.create_game("HELLO")
    state = game_service.get_public_state(session_id)
    state.board[0][0] = "X"
    state.guesses.append("XXXXX")

    fresh = game_service.get_public_state(session_id)
    assert fresh.board[0][0] == ""
    assert fresh.guesses == []


def test_projection_serializes_unset_marks_as_null(game_service):
    session_id, _ = game_service.create_game("HELLO")
    outcome = game_service.submit_guess(session_id, "WORLD")
    data = outcome.to_dict()

    assert data["result"] == ["absent", "present", "absent", "correct", "absent"]
    assert data["gameState"]["evaluations"][0] == data["result"]
    assert data["gameState"]["evaluations"][1] == [None] * 5
    assert "solution" not in data
    assert "targetWord" not in data["gameState"]


def test_expiry_boundary(game_service, clock):
    created_at = clock.now
    session_id, _ = game_service.create_game("HELLO")

    assert game_service.evict_expired(created_at + 3600, 3600) == 0
    assert game_service.get_public_state(session_id) is not None

    assert game_service.evict_expired(created_at + 3600.001, 3600) == 1
    assert game_service.get_public_state(session_id) is None


def test_expiry_ignores_status_and_keeps_young_sessions(game_service, clock):
    finished, _ = game_service.create_game("HELLO")
    game_service.submit_guess(finished, "HELLO")
    clock.advance(1800)
    young, _ = game_service.create_game("WORLD")
    clock.advance(1801)

    assert game_service.evict_expired() == 1
    assert game_service.get_public_state(finished) is None
    assert game_service.get_public_state(young) is not None


def test_delete_game(game_service):
    session_id, _ = game_service.create_game("HELLO")
    assert game_service.delete_game(session_id) is True
    assert game_service.delete_game(session_id) is False


def test_statistics(game_service):
    won, _ = game_service.create_game("HELLO")
    game_service.submit_guess(won, "WORLD")
    game_service.submit_guess(won, "HELLO")

    lost, _ = game_service.create_game("HELLO")
    for guess in LOSING_GUESSES:
        game_service.submit_guess(lost, guess)

    game_service.create_game("CRANE")

    stats = game_service.get_statistics()
    assert stats["totalGames"] == 3
    assert stats["activeGames"] == 1
    assert stats["completedGames"] == 2
    assert stats["wonGames"] == 1
    assert stats["winRate"] == 50
    assert stats["averageAttempts"] == 2


def test_concurrent_guesses_on_one_session_are_serialized(game_service):
    session_id, _ = game_service.create_game("HELLO")
    guesses = ["CRANE", "QUICK", "BROWN", "JUMPS", "FOXES", "LEMON", "PLANT", "GHOST", "MIGHT", "WORLD"]

    with ThreadPoolExecutor(max_workers=len(guesses)) as executor:
        outcomes = list(executor.map(lambda g: game_service.submit_guess(session_id, g), guesses))

    accepted = [o for o in outcomes if o.valid]
    rejected = [o for o in outcomes if not o.valid]
    assert len(accepted) == 6
    assert all(o.rejection is GuessRejection.SESSION_ALREADY_OVER for o in rejected)
    assert sorted(o.game_state.attempts for o in accepted) == [1, 2, 3, 4, 5, 6]

    state = game_service.get_public_state(session_id)
    assert state.attempts == 6
    assert [''.join(row) for row in state.board] == state.guesses
