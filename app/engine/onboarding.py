"""
Onboarding Wizard.

A fixed sequence of four steps collects the profile:

1. basics (name, age group, country)
2. goals and income
3. language and experience
4. accessibility

Each step is gated by a validation predicate over the in-progress state.
Changing the country is an explicit transition that re-derives the
currency and the income brackets offered on step 2.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, validator

from app.core.config import settings
from app.core.exceptions import OnboardingValidationError
from app.engine.achievements import FIRST_STEPS, default_catalog
from app.engine.locale import COUNTRY_CURRENCY, income_brackets, normalize_currency, resolve_currency
from app.engine.metrics import metrics
from app.engine.models import Achievement, ExperienceLevel, IncomeBracket, UserProfile

logger = logging.getLogger(__name__)


AGE_GROUPS = ("18-25", "26-35", "36-45", "46-55", "56-65", "65+")

GOAL_CATALOG = (
    "Build Emergency Fund",
    "Pay Off Debt",
    "Save for Retirement",
    "Buy a Home",
    "Start Investing",
    "Improve Credit Score",
    "Create a Budget",
    "Start a Business",
)

LANGUAGES = {
    "en": "English",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "zh": "中文",
    "hi": "हिन्दी",
    "ar": "العربية",
}

ACCESSIBILITY_FEATURES = (
    "Large text support",
    "High contrast mode",
    "Screen reader support",
    "Simplified navigation",
    "Audio descriptions",
    "Keyboard navigation",
)


TOTAL_STEPS = 4


class OnboardingState(BaseModel):
    """In-progress wizard answers; not yet a profile."""
    step: int = Field(default=1, ge=1, le=TOTAL_STEPS)
    name: str = ""
    age: str = ""
    location: str = ""
    currency: str = "USD"
    language: str = "en"
    income: str = ""
    goals: List[str] = Field(default_factory=list)
    experience: str = ""
    accessibility: List[str] = Field(default_factory=list)

    @validator('currency', pre=True)
    def validate_currency(cls, v):
        return normalize_currency(v)

    class Config:
        frozen = True


class OnboardingResult(BaseModel):
    state: OnboardingState
    step: int
    completed: bool = False
    profile: Optional[UserProfile] = None
    catalog: Optional[List[Achievement]] = None
    validation_error: Optional[str] = None
    failed_step: Optional[int] = None
    missing_fields: List[str] = Field(default_factory=list)
    invalid_fields: List[str] = Field(default_factory=list)


# Each check returns (missing, invalid) field names
StepCheck = Callable[[OnboardingState], Tuple[List[str], List[str]]]


@dataclass(frozen=True)
class OnboardingStep:
    number: int
    title: str
    required_fields: Tuple[str, ...]
    check: StepCheck


def _check_basics(state: OnboardingState) -> Tuple[List[str], List[str]]:
    missing, invalid = [], []
    if not state.name.strip():
        missing.append("name")
    if not state.age:
        missing.append("age")
    elif state.age not in AGE_GROUPS:
        invalid.append("age")
    if not state.location:
        missing.append("location")
    elif state.location not in COUNTRY_CURRENCY:
        invalid.append("location")
    return missing, invalid


def _check_goals_and_income(state: OnboardingState) -> Tuple[List[str], List[str]]:
    missing, invalid = [], []
    if not state.goals:
        missing.append("goals")
    elif any(goal not in GOAL_CATALOG for goal in state.goals):
        invalid.append("goals")
    if not state.income:
        missing.append("income")
    elif state.income not in {b.id for b in income_brackets(state.currency)}:
        invalid.append("income")
    return missing, invalid


def _check_language_and_experience(state: OnboardingState) -> Tuple[List[str], List[str]]:
    missing, invalid = [], []
    if state.language not in LANGUAGES:
        invalid.append("language")
    if not state.experience:
        missing.append("experience")
    elif state.experience not in {level.value for level in ExperienceLevel}:
        invalid.append("experience")
    return missing, invalid


def _check_accessibility(state: OnboardingState) -> Tuple[List[str], List[str]]:
    invalid = []
    if any(feature not in ACCESSIBILITY_FEATURES for feature in state.accessibility):
        invalid.append("accessibility")
    return [], invalid


STEPS: Tuple[OnboardingStep, ...] = (
    OnboardingStep(1, "Tell us about yourself", ("name", "age", "location"), _check_basics),
    OnboardingStep(2, "Your financial goals", ("goals", "income"), _check_goals_and_income),
    OnboardingStep(3, "Language & experience", ("experience",), _check_language_and_experience),
    OnboardingStep(4, "Accessibility preferences", (), _check_accessibility),
)


def completion_percentage(state: OnboardingState) -> int:
    return round(state.step / TOTAL_STEPS * 100)


def validate_through(state: OnboardingState) -> None:
    """
    Raise ``OnboardingValidationError`` for the first incomplete step up to
    and including the current one.
    """
    for step in STEPS[:state.step]:
        missing, invalid = step.check(state)
        if missing or invalid:
            raise OnboardingValidationError(step.number, missing, invalid)


def on_country_changed(state: OnboardingState, country: str) -> OnboardingState:
    """
    Set the country and re-derive everything that depends on it.

    The currency follows the country, and an income selection that is not
    one of the new currency's brackets is cleared.
    """
    currency = resolve_currency(country)
    update: Dict[str, object] = {"location": country, "currency": currency}
    if state.income and state.income not in {b.id for b in income_brackets(currency)}:
        update["income"] = ""
    if currency != state.currency:
        logger.debug(f"Country '{country}' switched onboarding currency {state.currency} -> {currency}")
    return state.model_copy(update=update)


def income_options(state: OnboardingState) -> List[IncomeBracket]:
    return income_brackets(state.currency)


def update_field(state: OnboardingState, field: str, value) -> OnboardingState:
    if field == "location":
        return on_country_changed(state, value)
    if field in ("step", "currency"):
        raise ValueError(f"'{field}' is derived and cannot be set directly")
    if field not in OnboardingState.model_fields:
        raise ValueError(f"Unknown onboarding field '{field}'")
    return OnboardingState(**{**state.model_dump(), field: value})


def _toggle(items: List[str], item: str) -> List[str]:
    if item in items:
        return [i for i in items if i != item]
    return items + [item]


def toggle_goal(state: OnboardingState, goal: str) -> OnboardingState:
    return state.model_copy(update={"goals": _toggle(state.goals, goal)})


def toggle_accessibility(state: OnboardingState, feature: str) -> OnboardingState:
    return state.model_copy(update={"accessibility": _toggle(state.accessibility, feature)})


def finalize_profile(state: OnboardingState, today: Optional[date] = None) -> UserProfile:
    """Build the profile with the fixed starting allotment."""
    return UserProfile(
        name=state.name.strip(),
        age=state.age,
        experience=ExperienceLevel(state.experience),
        goals=list(state.goals),
        currency=state.currency,
        location=state.location,
        language=state.language,
        income=state.income,
        accessibility=list(state.accessibility),
        points=settings.STARTING_POINTS,
        streak=settings.STARTING_STREAK,
        last_active=today or date.today(),
    )


def advance_onboarding_step(state: OnboardingState, today: Optional[date] = None) -> OnboardingResult:
    """
    Move the wizard forward one step, or complete it from the last step.

    Every step up to the current one is checked, so a caller cannot skip
    ahead. A blocked advance leaves the state on the current step and
    reports the first incomplete step instead of raising.
    """
    try:
        validate_through(state)
    except OnboardingValidationError as e:
        logger.info(f"Onboarding advance blocked: {e.message}")
        metrics.record_blocked_step()
        return OnboardingResult(
            state=state,
            step=state.step,
            validation_error=e.message,
            failed_step=e.step,
            missing_fields=e.missing_fields,
            invalid_fields=e.invalid_fields,
        )

    if state.step < TOTAL_STEPS:
        next_state = state.model_copy(update={"step": state.step + 1})
        return OnboardingResult(state=next_state, step=next_state.step)

    profile = finalize_profile(state, today)
    # The starting points are the First Steps reward
    catalog = [
        a.model_copy(update={"earned": True}) if a.id == FIRST_STEPS else a
        for a in default_catalog()
    ]
    logger.info(f"Onboarding completed for {profile.name} ({profile.currency})")
    return OnboardingResult(
        state=state,
        step=state.step,
        completed=True,
        profile=profile,
        catalog=catalog,
    )


def retreat_onboarding_step(state: OnboardingState) -> OnboardingResult:
    if state.step <= 1:
        return OnboardingResult(state=state, step=state.step)
    previous = state.model_copy(update={"step": state.step - 1})
    return OnboardingResult(state=previous, step=previous.step)
