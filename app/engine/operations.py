"""
Operations the presentation layer calls into.
"""

from app.engine.achievements import apply_achievement_event
from app.engine.goal_progress import compute_goal_progress
from app.engine.locale import resolve_locale
from app.engine.onboarding import advance_onboarding_step
from app.engine.session import classify_and_respond

__all__ = [
    "advance_onboarding_step",
    "apply_achievement_event",
    "classify_and_respond",
    "compute_goal_progress",
    "resolve_locale",
]
