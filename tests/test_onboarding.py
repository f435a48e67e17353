"""
Tests for the onboarding wizard.
"""
from datetime import date

import pytest
from pydantic import ValidationError

from app.core.exceptions import OnboardingValidationError
from app.engine.achievements import FIRST_STEPS
from app.engine.metrics import metrics
from app.engine.models import ExperienceLevel
from app.engine.onboarding import (
    STEPS,
    TOTAL_STEPS,
    OnboardingState,
    advance_onboarding_step,
    completion_percentage,
    income_options,
    on_country_changed,
    retreat_onboarding_step,
    toggle_accessibility,
    toggle_goal,
    update_field,
    validate_through,
)


@pytest.fixture
def basics():
    state = OnboardingState(name="Kenji", age="26-35")
    return on_country_changed(state, "japan")


@pytest.fixture
def complete_state(basics):
    return basics.model_copy(update={
        "step": 4,
        "goals": ["Start Investing", "Create a Budget"],
        "income": "3000000-6000000",
        "language": "en",
        "experience": "intermediate",
        "accessibility": ["Large text support"],
    })


def test_four_steps():
    assert TOTAL_STEPS == 4
    assert STEPS[0].required_fields == ("name", "age", "location")


@pytest.mark.parametrize("step", [0, 5, 7])
def test_step_out_of_range_is_rejected(step):
    with pytest.raises(ValidationError):
        OnboardingState(step=step)


def test_empty_name_blocks_first_step(basics):
    state = basics.model_copy(update={"name": "  "})
    result = advance_onboarding_step(state)

    assert result.step == 1
    assert result.state == state
    assert result.missing_fields == ["name"]
    assert "name" in result.validation_error
    assert not result.completed
    assert metrics.get_stats()["blocked_onboarding_steps"] == 1


def test_complete_first_step_advances(basics):
    result = advance_onboarding_step(basics)
    assert result.validation_error is None
    assert result.step == 2
    assert result.state.step == 2


def test_validate_through_reports_fields():
    with pytest.raises(OnboardingValidationError) as exc:
        validate_through(OnboardingState(age="90+"))
    assert exc.value.missing_fields == ["name", "location"]
    assert exc.value.invalid_fields == ["age"]


def test_japan_switches_currency_and_brackets(basics):
    assert basics.location == "japan"
    assert basics.currency == "JPY"
    options = income_options(basics)
    assert options[0].id == "under-3000000"
    assert options[0].label == "Under ¥3,000,000"


def test_country_change_clears_stale_income():
    state = OnboardingState(location="us", income="50000-75000")
    switched = on_country_changed(state, "japan")
    assert switched.currency == "JPY"
    assert switched.income == ""


def test_country_change_keeps_income_valid_in_new_currency():
    state = on_country_changed(OnboardingState(income="under-30000"), "canada")
    assert state.income == "under-30000"
    switched = on_country_changed(state, "singapore")
    assert switched.currency == "SGD"
    assert switched.income == "under-30000"


def test_update_field_routes_location_through_country_change():
    state = update_field(OnboardingState(), "location", "uk")
    assert state.currency == "GBP"
    with pytest.raises(ValueError):
        update_field(state, "currency", "EUR")
    with pytest.raises(ValueError):
        update_field(state, "favourite_colour", "blue")


def test_step_two_requires_goals_and_income(basics):
    state = basics.model_copy(update={"step": 2})
    result = advance_onboarding_step(state)
    assert result.missing_fields == ["goals", "income"]

    state = toggle_goal(state, "Buy a Home")
    state = update_field(state, "income", "50000-75000")  # a USD bracket
    result = advance_onboarding_step(state)
    assert result.invalid_fields == ["income"]

    state = update_field(state, "income", "6000000-9000000")
    assert advance_onboarding_step(state).step == 3


def test_step_three_requires_experience(basics):
    state = basics.model_copy(update={
        "step": 3,
        "goals": ["Buy a Home"],
        "income": "under-3000000",
    })
    assert advance_onboarding_step(state).missing_fields == ["experience"]
    state = update_field(state, "experience", "expert")
    assert advance_onboarding_step(state).invalid_fields == ["experience"]


def test_toggles():
    state = toggle_goal(OnboardingState(), "Pay Off Debt")
    state = toggle_goal(state, "Buy a Home")
    assert state.goals == ["Pay Off Debt", "Buy a Home"]
    assert toggle_goal(state, "Pay Off Debt").goals == ["Buy a Home"]

    state = toggle_accessibility(state, "High contrast mode")
    assert state.accessibility == ["High contrast mode"]
    assert toggle_accessibility(state, "High contrast mode").accessibility == []


def test_retreat():
    assert retreat_onboarding_step(OnboardingState(step=1)).step == 1
    assert retreat_onboarding_step(OnboardingState(step=3)).step == 2


def test_completion_emits_starting_profile(complete_state):
    result = advance_onboarding_step(complete_state, today=date(2026, 3, 1))

    assert result.completed
    profile = result.profile
    assert profile.name == "Kenji"
    assert profile.currency == "JPY"
    assert profile.experience == ExperienceLevel.INTERMEDIATE
    assert profile.goals == ["Start Investing", "Create a Budget"]
    assert (profile.points, profile.level, profile.streak) == (50, 1, 1)
    assert profile.last_active == date(2026, 3, 1)
    assert [a.id for a in result.catalog if a.earned] == [FIRST_STEPS]


def test_completion_percentage():
    assert completion_percentage(OnboardingState(step=1)) == 25
    assert completion_percentage(OnboardingState(step=4)) == 100


def test_jumping_to_last_step_does_not_skip_checks():
    """A caller-supplied final step still has to pass every earlier step."""
    result = advance_onboarding_step(OnboardingState(step=4, experience="beginner"))

    assert not result.completed
    assert result.profile is None
    assert result.step == 4
    assert result.failed_step == 1
    assert result.missing_fields == ["name", "age", "location"]


def test_last_step_without_experience_is_blocked(complete_state):
    state = complete_state.model_copy(update={"experience": ""})
    result = advance_onboarding_step(state)

    assert not result.completed
    assert result.failed_step == 3
    assert result.missing_fields == ["experience"]


def test_earlier_step_blocks_middle_advance(basics):
    state = basics.model_copy(update={"step": 3, "experience": "advanced"})
    result = advance_onboarding_step(state)
    assert result.step == 3
    assert result.failed_step == 2


def test_unknown_currency_falls_back():
    assert OnboardingState(currency="XYZ").currency == "USD"
    assert OnboardingState(currency="jpy").currency == "JPY"


def test_update_field_validates_value():
    with pytest.raises(ValueError):
        update_field(OnboardingState(), "name", ["not", "a", "name"])
