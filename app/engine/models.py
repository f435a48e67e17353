"""
Domain models for the coaching engine.

Every model is an immutable snapshot: engine operations return new
instances instead of mutating the ones they receive.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator, validator

from app.core.config import settings


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Sender(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Category(str, Enum):
    BUDGETING = "budgeting"
    INVESTING = "investing"
    DEBT = "debt"
    SAVINGS = "savings"
    CREDIT = "credit"
    CLARIFICATION = "clarification"
    # Not produced by the classifier; tags the session-start message only
    GREETING = "greeting"


class GoalCategory(str, Enum):
    SAVINGS = "savings"
    DEBT = "debt"
    INVESTING = "investing"
    OTHER = "other"


class UserProfile(BaseModel):
    name: str
    age: str = ""
    experience: ExperienceLevel = ExperienceLevel.BEGINNER
    goals: List[str] = Field(default_factory=list)
    currency: str = "USD"
    location: str = "other"
    language: str = "en"
    income: str = ""
    accessibility: List[str] = Field(default_factory=list)
    points: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    streak: int = Field(default=0, ge=0)
    last_active: Optional[date] = None

    @validator('currency', pre=True)
    def validate_currency(cls, v):
        """Unsupported currency codes fall back to the default currency."""
        return normalize_currency(v)

    @model_validator(mode="before")
    @classmethod
    def derive_level(cls, data):
        """Level always follows points; a supplied level is ignored."""
        if isinstance(data, dict):
            data = dict(data)
            data["level"] = level_for_points(int(data.get("points") or 0))
        return data

    class Config:
        frozen = True


class Message(BaseModel):
    id: str
    content: str
    sender: Sender
    timestamp: datetime
    category: Optional[Category] = None
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    actions: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class FinancialGoal(BaseModel):
    id: str
    title: str
    category: GoalCategory = GoalCategory.OTHER
    current: float = Field(..., ge=0)
    target: float = Field(..., ge=0)
    deadline: Optional[date] = None

    class Config:
        frozen = True


class Achievement(BaseModel):
    id: str
    title: str
    description: str
    points: int = Field(..., gt=0)
    earned: bool = False

    class Config:
        frozen = True


class AchievementUnlock(BaseModel):
    """Notification payload for a newly earned achievement."""
    achievement_id: str
    title: str
    description: str
    points_awarded: int


class IncomeBracket(BaseModel):
    id: str
    lower_bound: int
    upper_bound: Optional[int] = None  # None means open-ended
    label: str


class GoalBaselines(BaseModel):
    emergency_fund_current: int
    emergency_fund_target: int
    debt_current: int
    investment_current: int
    investment_target: int


class LocalePresentation(BaseModel):
    currency_code: str
    symbol: str
    goal_baselines: GoalBaselines
    income_brackets: List[IncomeBracket]


def level_for_points(points: int) -> int:
    return 1 + max(points, 0) // settings.POINTS_PER_LEVEL


def normalize_currency(currency_code: Optional[str]) -> str:
    # locale imports the models above, so resolve it at call time
    from app.engine.locale import normalize_currency as normalize

    return normalize(currency_code)
