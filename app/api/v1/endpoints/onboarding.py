import logging
from fastapi import APIRouter, HTTPException, status as http_status
from typing import Dict, List, Any, Literal, Union
from pydantic import BaseModel, Field
from datetime import date

from app.engine.locale import COUNTRY_CURRENCY
from app.engine.models import ExperienceLevel, IncomeBracket
from app.engine.onboarding import (
    ACCESSIBILITY_FEATURES,
    AGE_GROUPS,
    GOAL_CATALOG,
    LANGUAGES,
    STEPS,
    OnboardingResult,
    OnboardingState,
    advance_onboarding_step,
    completion_percentage,
    income_options,
    on_country_changed,
    retreat_onboarding_step,
    toggle_accessibility,
    toggle_goal,
    update_field,
)

logger = logging.getLogger(__name__)
router = APIRouter()


class AdvanceRequest(BaseModel):
    state: OnboardingState
    today: date = Field(default_factory=date.today)


class CountryChangeRequest(BaseModel):
    state: OnboardingState
    country: str = Field(..., min_length=1)


class CountryChangeResponse(BaseModel):
    state: OnboardingState
    income_options: List[IncomeBracket]


class FieldUpdateRequest(BaseModel):
    state: OnboardingState
    field: str = Field(..., min_length=1)
    value: Union[str, List[str]]


class ToggleRequest(BaseModel):
    """Request model for selecting or deselecting a goal or accessibility feature."""
    state: OnboardingState
    kind: Literal["goal", "accessibility"]
    item: str = Field(..., min_length=1)


@router.get("/options", response_model=Dict[str, Any])
async def options():
    """Fixed choices offered by the wizard."""
    return {
        "steps": [
            {"number": s.number, "title": s.title, "required_fields": list(s.required_fields)}
            for s in STEPS
        ],
        "age_groups": list(AGE_GROUPS),
        "countries": list(COUNTRY_CURRENCY),
        "goals": list(GOAL_CATALOG),
        "languages": LANGUAGES,
        "experience_levels": [level.value for level in ExperienceLevel],
        "accessibility_features": list(ACCESSIBILITY_FEATURES),
    }


@router.post("/advance", response_model=OnboardingResult)
async def advance(request: AdvanceRequest):
    """
    Advance the wizard.
    
    A blocked step is not an HTTP error: the response carries
    ``validation_error`` and the unchanged state.
    """
    return advance_onboarding_step(request.state, today=request.today)


@router.post("/retreat", response_model=OnboardingResult)
async def retreat(state: OnboardingState):
    return retreat_onboarding_step(state)


@router.post("/country", response_model=CountryChangeResponse)
async def change_country(request: CountryChangeRequest):
    state = on_country_changed(request.state, request.country)
    return CountryChangeResponse(state=state, income_options=income_options(state))


@router.post("/progress", response_model=Dict[str, int])
async def progress(state: OnboardingState):
    return {"step": state.step, "percent_complete": completion_percentage(state)}


@router.post("/field", response_model=OnboardingState)
async def set_field(request: FieldUpdateRequest):
    """
    Set one wizard answer.
    
    Setting ``location`` re-derives the currency like ``/country``; derived
    and unknown fields are rejected.
    """
    try:
        return update_field(request.state, request.field, request.value)
    except ValueError as e:
        raise HTTPException(
            status_code=http_status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )


@router.post("/toggle", response_model=OnboardingState)
async def toggle(request: ToggleRequest):
    if request.kind == "goal":
        return toggle_goal(request.state, request.item)
    return toggle_accessibility(request.state, request.item)
