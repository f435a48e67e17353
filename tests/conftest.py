"""
Shared fixtures for the coaching engine tests.
"""
import pytest

from app.core.config import settings
from app.engine.metrics import metrics
from app.engine.models import ExperienceLevel, UserProfile


@pytest.fixture(autouse=True)
def no_typing_delay(monkeypatch):
    """Replies are produced immediately under test."""
    monkeypatch.setattr(settings, "TYPING_DELAY_MIN_SECONDS", 0.0)
    monkeypatch.setattr(settings, "TYPING_DELAY_MAX_SECONDS", 0.0)


@pytest.fixture(autouse=True)
def fresh_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def beginner_profile():
    return UserProfile(
        name="Ana",
        age="26-35",
        experience=ExperienceLevel.BEGINNER,
        goals=["Create a Budget", "Start Investing", "Build Emergency Fund"],
        currency="USD",
        location="us",
        income="50000-75000",
        points=50,
        level=1,
        streak=1,
    )


@pytest.fixture
def profile_payload():
    return {
        "name": "Ana",
        "age": "26-35",
        "experience": "beginner",
        "goals": ["Create a Budget", "Start Investing"],
        "currency": "USD",
        "location": "us",
        "income": "50000-75000",
        "points": 50,
        "level": 1,
        "streak": 1,
    }
