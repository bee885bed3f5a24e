import asyncio

from fastapi.testclient import TestClient

from services.rate_limiter import SlidingWindowRateLimiter
from services.session_store import InterviewSessionStore
from services.sweeper import BackgroundSweeper


def test_run_once_prunes_sessions_and_rate_windows(clock):
    sessions = InterviewSessionStore(clock=clock, ttl_seconds=1800)
    limiter = SlidingWindowRateLimiter()
    sweeper = BackgroundSweeper(sessions, limiter)

    sessions.create("React", "a", "Q1")
    limiter.hit("a")

    assert sweeper.run_once() == {"sessions": 0, "clients": 0}

    clock.advance(1801)
    assert sweeper.run_once() == {"sessions": 1, "clients": 1}
    assert len(sessions) == 0 and len(limiter) == 0


def test_loop_runs_until_stopped(clock):
    sessions = InterviewSessionStore(clock=clock, ttl_seconds=10)
    sweeper = BackgroundSweeper(sessions, SlidingWindowRateLimiter(), interval_seconds=0.01)

    async def scenario():
        sessions.create("React", "a", "Q1")
        clock.advance(11)
        sweeper.start()
        assert sweeper.running
        await asyncio.sleep(0.05)
        await sweeper.stop()
        assert not sweeper.running

    asyncio.run(scenario())
    assert len(sessions) == 0


def test_lifespan_starts_and_stops_sweeper(app):
    with TestClient(app):
        assert app.state.sweeper.running
    assert not app.state.sweeper.running
