import logging
from fastapi import APIRouter
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, validator
from datetime import date

from app.engine.metrics import metrics
from app.engine.models import Achievement, AchievementUnlock, Message, UserProfile
from app.engine.response_composer import QUICK_ACTIONS, greeting
from app.engine.session import CoachingSession, SessionTurn

logger = logging.getLogger(__name__)
router = APIRouter()


class RespondRequest(BaseModel):
    """Request model for one chat turn."""
    message: str = Field(..., min_length=1, max_length=2000, description="User's message")
    profile: UserProfile
    catalog: Optional[List[Achievement]] = Field(
        default=None,
        description="Current achievement catalog; the default catalog when omitted"
    )
    today: Optional[date] = Field(default=None, description="Activity date used for the streak")
    
    @validator('message')
    def validate_message(cls, v):
        """Reject messages that are only whitespace."""
        if not v.strip():
            raise ValueError('message must not be blank')
        return v


class GreetingRequest(BaseModel):
    profile: UserProfile


class ActionRequest(BaseModel):
    """Request model for a chosen suggested action."""
    action: str = Field(..., min_length=1)
    profile: UserProfile
    catalog: Optional[List[Achievement]] = None


class ActionResponse(BaseModel):
    action: str
    profile: UserProfile
    catalog: List[Achievement]
    notification: Optional[AchievementUnlock] = None


@router.post("/respond", response_model=SessionTurn)
async def respond(request: RespondRequest):
    """
    Classify the user's message and return the coach's reply.
    
    The reply is produced after the configured typing delay. Achievements
    earned by the question are applied to the returned profile and catalog.
    """
    session = CoachingSession(request.profile, catalog=request.catalog)
    turn = await session.send(request.message, today=request.today)
    
    logger.info(
        f"Coach reply: category={turn.reply.category.value}, "
        f"unlocked={[n.achievement_id for n in turn.notifications]}"
    )
    return turn


@router.post("/greeting", response_model=Message)
async def session_greeting(request: GreetingRequest):
    return greeting(request.profile)


@router.post("/actions", response_model=ActionResponse)
async def choose_action(request: ActionRequest):
    session = CoachingSession(request.profile, catalog=request.catalog)
    notification = session.choose_action(request.action)
    return ActionResponse(
        action=request.action,
        profile=session.profile,
        catalog=session.catalog,
        notification=notification,
    )


@router.get("/quick-actions", response_model=List[str])
async def quick_actions():
    return QUICK_ACTIONS


@router.get("/metrics", response_model=Dict[str, Any])
async def coaching_metrics():
    return metrics.get_stats()
