import logging
from fastapi import APIRouter
from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import date

from app.engine.achievements import (
    AchievementResult,
    EVENT_ACHIEVEMENTS,
    apply_achievement_event,
    default_catalog,
    record_activity,
)
from app.engine.models import Achievement, UserProfile

logger = logging.getLogger(__name__)
router = APIRouter()


class AchievementEventRequest(BaseModel):
    """Request model for a gamification event."""
    event: str = Field(..., min_length=1, description="Semantic event name, e.g. budget-question-asked")
    profile: UserProfile
    catalog: Optional[List[Achievement]] = None


class ActivityRequest(BaseModel):
    profile: UserProfile
    day: date


@router.get("/catalog", response_model=List[Achievement])
async def catalog():
    return default_catalog()


@router.get("/events", response_model=List[str])
async def known_events():
    return list(EVENT_ACHIEVEMENTS)


@router.post("/events", response_model=AchievementResult)
async def apply_event(request: AchievementEventRequest):
    """
    Apply an event to the caller's profile and catalog.
    
    Replaying an event whose achievement is already earned returns the
    state unchanged and no notification.
    """
    current = request.catalog if request.catalog is not None else default_catalog()
    return apply_achievement_event(request.event, request.profile, current)


@router.post("/activity", response_model=UserProfile)
async def activity(request: ActivityRequest):
    return record_activity(request.profile, request.day)
