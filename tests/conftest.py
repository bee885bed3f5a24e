import time

import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.interview_ai import InterviewAI
from services.rate_limiter import SlidingWindowRateLimiter
from services.session_store import InterviewSessionStore
from tests.fakes import FakeClock, FakeOpenAI, FakePayments


@pytest.fixture
def clock(monkeypatch):
    """A controllable clock. Also stands in for time.time(), which the rate limiter storage reads."""
    fake = FakeClock()
    monkeypatch.setattr(time, "time", fake)
    return fake


@pytest.fixture
def openai_client():
    return FakeOpenAI()


@pytest.fixture
def payments():
    return FakePayments()


@pytest.fixture
def sessions(clock):
    return InterviewSessionStore(clock=clock)


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(max_requests=1000)


@pytest.fixture
def app(openai_client, payments, sessions, limiter, clock):
    return create_app(
        interview_ai=InterviewAI(client=openai_client),
        payment_service=payments,
        sessions=sessions,
        limiter=limiter,
        clock=clock,
        production=False,
    )


@pytest.fixture
def client(app):
    return TestClient(app)
