"""
Goal Progress Engine.

Debt goals measure reduction toward the target balance; every other
category measures accumulation toward the target amount.
"""

import logging
from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from app.core.exceptions import UndefinedProgressError
from app.engine.locale import format_amount, goal_baselines
from app.engine.models import FinancialGoal, GoalCategory

logger = logging.getLogger(__name__)

PAID_OFF_PERCENTAGE = 100.0

# Default deadlines for the baseline goal set
DEFAULT_DEADLINES = {
    "emergency-fund": date(2024, 12, 31),
    "credit-card-debt": date(2024, 8, 15),
    "investment-portfolio": date(2025, 6, 30),
}


class GoalProgressView(BaseModel):
    """Display-ready progress for one goal."""
    goal_id: str
    percentage: Optional[float] = None  # None when progress is undefined
    display_percentage: int
    paid_off: bool = False
    label: str


def progress(goal: FinancialGoal) -> float:
    """
    Completion percentage of a goal, not clamped.

    Raises:
        UndefinedProgressError: the target is zero and the formula cannot be
            evaluated (a debt goal with an outstanding balance, or any other
            goal with a zero target)
    """
    if goal.category == GoalCategory.DEBT:
        if goal.target == 0:
            if goal.current == 0:
                return PAID_OFF_PERCENTAGE
            raise UndefinedProgressError(goal.id, goal.current)
        return (goal.target - goal.current) / goal.target * 100

    if goal.target == 0:
        raise UndefinedProgressError(goal.id, goal.current)
    return goal.current / goal.target * 100


def clamp_percentage(value: float) -> float:
    return max(0.0, min(100.0, value))


def compute_goal_progress(goal: FinancialGoal) -> float:
    return progress(goal)


def describe_progress(goal: FinancialGoal, currency: str) -> GoalProgressView:
    """
    Progress of a goal as the dashboard shows it.

    Debt goals are labelled with the remaining balance; a debt goal whose
    target is zero and balance is outstanding has no percentage and is
    displayed at 0%.
    """
    try:
        raw = progress(goal)
    except UndefinedProgressError:
        logger.debug(f"Goal {goal.id} has undefined progress, showing balance only")
        raw = None

    if goal.category == GoalCategory.DEBT:
        label = f"{format_amount(goal.current, currency)} remaining"
    else:
        label = f"{format_amount(goal.current, currency)} of {format_amount(goal.target, currency)}"

    display = 0 if raw is None else int(round(clamp_percentage(raw)))
    return GoalProgressView(
        goal_id=goal.id,
        percentage=raw,
        display_percentage=display,
        paid_off=goal.category == GoalCategory.DEBT and goal.current <= goal.target,
        label=label,
    )


def default_goals(currency: str) -> List[FinancialGoal]:
    """Baseline goal set scaled to the user's currency."""
    amounts = goal_baselines(currency)
    return [
        FinancialGoal(
            id="emergency-fund",
            title="Emergency Fund",
            category=GoalCategory.SAVINGS,
            current=amounts.emergency_fund_current,
            target=amounts.emergency_fund_target,
            deadline=DEFAULT_DEADLINES["emergency-fund"],
        ),
        FinancialGoal(
            id="credit-card-debt",
            title="Credit Card Debt",
            category=GoalCategory.DEBT,
            current=amounts.debt_current,
            target=0,
            deadline=DEFAULT_DEADLINES["credit-card-debt"],
        ),
        FinancialGoal(
            id="investment-portfolio",
            title="Investment Portfolio",
            category=GoalCategory.INVESTING,
            current=amounts.investment_current,
            target=amounts.investment_target,
            deadline=DEFAULT_DEADLINES["investment-portfolio"],
        ),
    ]
