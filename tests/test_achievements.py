"""
Tests for the achievement state machine.
"""
from datetime import date

import pytest

from app.engine.achievements import (
    BUDGET_MASTER,
    BUDGET_QUESTION_ASKED,
    DEBT_PLAN_CREATED,
    EVENT_ACHIEVEMENTS,
    apply_achievement_event,
    default_catalog,
    earned_achievements,
    level_for_points,
    next_achievements,
    record_activity,
)
from app.engine.metrics import metrics


def test_catalog_covers_every_event():
    ids = {a.id for a in default_catalog()}
    assert set(EVENT_ACHIEVEMENTS.values()) == ids
    assert not earned_achievements(default_catalog())


def test_budget_question_unlocks_budget_master_once(beginner_profile):
    catalog = default_catalog()

    first = apply_achievement_event(BUDGET_QUESTION_ASKED, beginner_profile, catalog)
    assert first.notification is not None
    assert first.notification.achievement_id == BUDGET_MASTER
    assert first.notification.title == "Budget Master"
    assert first.notification.points_awarded == 100
    assert first.profile.points == 150
    assert [a.id for a in earned_achievements(first.catalog)] == [BUDGET_MASTER]

    second = apply_achievement_event(BUDGET_QUESTION_ASKED, first.profile, first.catalog)
    assert second.notification is None
    assert second.profile == first.profile
    assert second.catalog == first.catalog


def test_inputs_are_not_mutated(beginner_profile):
    catalog = default_catalog()
    apply_achievement_event(BUDGET_QUESTION_ASKED, beginner_profile, catalog)

    assert beginner_profile.points == 50
    assert not any(a.earned for a in catalog)


def test_unknown_event_is_a_no_op(beginner_profile):
    catalog = default_catalog()
    result = apply_achievement_event("watched-a-video", beginner_profile, catalog)

    assert result.notification is None
    assert result.profile == beginner_profile
    assert result.catalog == catalog


def test_event_for_achievement_missing_from_catalog(beginner_profile):
    catalog = [a for a in default_catalog() if a.id != BUDGET_MASTER]
    result = apply_achievement_event(BUDGET_QUESTION_ASKED, beginner_profile, catalog)
    assert result.notification is None
    assert result.profile.points == 50


def test_level_follows_points(beginner_profile):
    profile, catalog = beginner_profile, default_catalog()
    for event in EVENT_ACHIEVEMENTS:
        result = apply_achievement_event(event, profile, catalog)
        profile, catalog = result.profile, result.catalog
        assert profile.level == level_for_points(profile.points)

    # 50 starting points plus every reward
    assert profile.points == 50 + sum(a.points for a in default_catalog())
    assert profile.level == 3
    assert not next_achievements(catalog)


@pytest.mark.parametrize("points, level", [(0, 1), (50, 1), (249, 1), (250, 2), (675, 3)])
def test_level_for_points(points, level):
    assert level_for_points(points) == level


def test_unlock_is_counted_in_metrics(beginner_profile):
    apply_achievement_event(DEBT_PLAN_CREATED, beginner_profile, default_catalog())
    stats = metrics.get_stats()
    assert stats["achievements_unlocked"] == {"debt-destroyer": 1}
    assert stats["points_awarded"] == 200


def test_next_achievements_limit():
    assert [a.title for a in next_achievements(default_catalog())] == [
        "First Steps",
        "Budget Master",
        "Investment Explorer",
    ]


def test_streak_extends_on_consecutive_days(beginner_profile):
    profile = beginner_profile.model_copy(update={"last_active": date(2026, 3, 1)})

    same_day = record_activity(profile, date(2026, 3, 1))
    assert same_day.streak == 1

    next_day = record_activity(profile, date(2026, 3, 2))
    assert next_day.streak == 2
    assert next_day.last_active == date(2026, 3, 2)


def test_streak_resets_after_gap(beginner_profile):
    profile = beginner_profile.model_copy(update={"streak": 6, "last_active": date(2026, 3, 1)})
    assert record_activity(profile, date(2026, 3, 5)).streak == 1


def test_first_activity_starts_streak(beginner_profile):
    profile = beginner_profile.model_copy(update={"streak": 0, "last_active": None})
    assert record_activity(profile, date(2026, 3, 1)).streak == 1
