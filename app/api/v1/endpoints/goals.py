import logging
from fastapi import APIRouter
from typing import List
from pydantic import BaseModel, Field

from app.engine.goal_progress import GoalProgressView, default_goals, describe_progress
from app.engine.locale import normalize_currency
from app.engine.models import FinancialGoal

logger = logging.getLogger(__name__)
router = APIRouter()


class GoalProgressRequest(BaseModel):
    goal: FinancialGoal
    currency: str = Field(default="USD", description="Currency used for the progress label")


class GoalWithProgress(BaseModel):
    goal: FinancialGoal
    progress: GoalProgressView


@router.post("/progress", response_model=GoalProgressView)
async def goal_progress(request: GoalProgressRequest):
    """
    Progress of one goal.
    
    ``percentage`` is the raw value and may exceed 100; ``display_percentage``
    is clamped. A debt goal with a zero target and an outstanding balance
    has no percentage.
    """
    return describe_progress(request.goal, request.currency)


@router.get("/defaults/{currency}", response_model=List[GoalWithProgress])
async def baseline_goals(currency: str):
    code = normalize_currency(currency)
    return [
        GoalWithProgress(goal=goal, progress=describe_progress(goal, code))
        for goal in default_goals(code)
    ]
