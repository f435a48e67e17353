"""
Achievement Engine.

Each achievement in the fixed catalog is either locked or earned, and
only ever moves from locked to earned. Semantic events emitted by the
caller unlock achievements, award their points and recompute the level.
Replaying an event after its achievement is earned changes nothing.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from app.engine.metrics import metrics
from app.engine.models import Achievement, AchievementUnlock, UserProfile, level_for_points

logger = logging.getLogger(__name__)


PROFILE_COMPLETED = "profile-completed"
BUDGET_QUESTION_ASKED = "budget-question-asked"
INVESTMENT_BASICS_LEARNED = "investment-basics-learned"
DEBT_PLAN_CREATED = "debt-plan-created"
EMERGENCY_FUND_GOAL_SET = "emergency-fund-goal-set"

FIRST_STEPS = "first-steps"
BUDGET_MASTER = "budget-master"
INVESTMENT_EXPLORER = "investment-explorer"
DEBT_DESTROYER = "debt-destroyer"
EMERGENCY_FUND_HERO = "emergency-fund-hero"

EVENT_ACHIEVEMENTS: Dict[str, str] = {
    PROFILE_COMPLETED: FIRST_STEPS,
    BUDGET_QUESTION_ASKED: BUDGET_MASTER,
    INVESTMENT_BASICS_LEARNED: INVESTMENT_EXPLORER,
    DEBT_PLAN_CREATED: DEBT_DESTROYER,
    EMERGENCY_FUND_GOAL_SET: EMERGENCY_FUND_HERO,
}


class AchievementResult(BaseModel):
    profile: UserProfile
    catalog: List[Achievement]
    notification: Optional[AchievementUnlock] = None


def default_catalog() -> List[Achievement]:
    return [
        Achievement(
            id=FIRST_STEPS,
            title="First Steps",
            description="Complete your profile setup",
            points=50,
        ),
        Achievement(
            id=BUDGET_MASTER,
            title="Budget Master",
            description="Ask your first budget question",
            points=100,
        ),
        Achievement(
            id=INVESTMENT_EXPLORER,
            title="Investment Explorer",
            description="Learn about investment basics",
            points=150,
        ),
        Achievement(
            id=DEBT_DESTROYER,
            title="Debt Destroyer",
            description="Create a debt payment plan",
            points=200,
        ),
        Achievement(
            id=EMERGENCY_FUND_HERO,
            title="Emergency Fund Hero",
            description="Set up your emergency fund goal",
            points=175,
        ),
    ]


def apply_achievement_event(
    event_name: str,
    profile: UserProfile,
    catalog: Sequence[Achievement],
) -> AchievementResult:
    """
    Apply a semantic event to the profile and catalog.

    Returns the (possibly unchanged) profile and catalog, and a notification
    when the event earned a previously locked achievement.
    """
    catalog = list(catalog)
    achievement_id = EVENT_ACHIEVEMENTS.get(event_name)
    if achievement_id is None:
        logger.debug(f"No achievement mapped to event '{event_name}'")
        return AchievementResult(profile=profile, catalog=catalog)

    index = next((i for i, a in enumerate(catalog) if a.id == achievement_id), None)
    if index is None:
        logger.warning(f"Achievement '{achievement_id}' missing from catalog")
        return AchievementResult(profile=profile, catalog=catalog)

    achievement = catalog[index]
    if achievement.earned:
        return AchievementResult(profile=profile, catalog=catalog)

    catalog[index] = achievement.model_copy(update={"earned": True})
    points = profile.points + achievement.points
    updated = profile.model_copy(update={"points": points, "level": level_for_points(points)})

    logger.info(
        f"Achievement unlocked: {achievement.title} (+{achievement.points} pts, "
        f"level {profile.level} -> {updated.level})"
    )
    metrics.record_unlock(achievement.id, achievement.points)

    return AchievementResult(
        profile=updated,
        catalog=catalog,
        notification=AchievementUnlock(
            achievement_id=achievement.id,
            title=achievement.title,
            description=achievement.description,
            points_awarded=achievement.points,
        ),
    )


def record_activity(profile: UserProfile, day: date) -> UserProfile:
    """
    Update the daily streak for activity on ``day``.

    Activity on the same day keeps the streak, on the following day extends
    it, and after a gap restarts it at one.
    """
    last = profile.last_active
    if last is None:
        streak = max(profile.streak, 1)
    elif day <= last:
        return profile
    elif day - last == timedelta(days=1):
        streak = profile.streak + 1
    else:
        streak = 1
    return profile.model_copy(update={"streak": streak, "last_active": day})


def earned_achievements(catalog: Sequence[Achievement]) -> List[Achievement]:
    return [a for a in catalog if a.earned]


def next_achievements(catalog: Sequence[Achievement], limit: int = 3) -> List[Achievement]:
    return [a for a in catalog if not a.earned][:limit]
