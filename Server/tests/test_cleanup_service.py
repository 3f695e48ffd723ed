import time

from wordle_engine.services.cleanup_service import CleanupWorker


def test_run_once_evicts_with_configured_max_age(game_service, clock):
    old, _ = game_service.create_game("HELLO")
    clock.advance(120)
    fresh, _ = game_service.create_game("WORLD")

    worker = CleanupWorker(game_service, interval_seconds=3600, max_age_seconds=60)
    assert worker.run_once() == 1
    assert game_service.get_public_state(old) is None
    assert game_service.get_public_state(fresh) is not None


def test_worker_sweeps_periodically_and_stops(game_service, clock):
    session_id, _ = game_service.create_game("HELLO")
    clock.advance(7200)

    worker = CleanupWorker(game_service, interval_seconds=0.01)
    worker.start()
    try:
        deadline = time.monotonic() + 2
        while game_service.get_game_count() and time.monotonic() < deadline:
            time.sleep(0.01)
    finally:
        worker.stop(timeout=1)

    assert game_service.get_public_state(session_id) is None
    assert not worker.running


def test_worker_survives_failing_sweep(game_service):
    calls = []

    def failing_evict(now=None, max_age=None):
        calls.append(max_age)
        raise RuntimeError("boom")

    game_service.evict_expired = failing_evict
    worker = CleanupWorker(game_service, interval_seconds=0.01)
    worker.start()
    try:
        deadline = time.monotonic() + 2
        while len(calls) < 2 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert worker.running
    finally:
        worker.stop(timeout=1)

    assert len(calls) >= 2
