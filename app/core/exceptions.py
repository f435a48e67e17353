"""
Domain errors raised by the coaching engine.

All of them are local and recoverable; none ends a session.
"""

from typing import List, Optional


class CoachingError(Exception):
    """Base class for engine errors surfaced to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OnboardingValidationError(CoachingError):
    """A wizard step cannot be advanced because required fields are missing or invalid."""

    def __init__(self, step: int, missing_fields: List[str], invalid_fields: Optional[List[str]] = None):
        self.step = step
        self.missing_fields = list(missing_fields)
        self.invalid_fields = list(invalid_fields or [])
        parts = []
        if self.missing_fields:
            parts.append(f"missing {', '.join(self.missing_fields)}")
        if self.invalid_fields:
            parts.append(f"invalid {', '.join(self.invalid_fields)}")
        super().__init__(f"Step {step} is incomplete: {'; '.join(parts)}")


class UndefinedProgressError(CoachingError):
    """Goal progress cannot be expressed as a percentage (zero target)."""

    def __init__(self, goal_id: str, current: float):
        self.goal_id = goal_id
        self.current = current
        super().__init__(
            f"Goal {goal_id} has a zero target and a balance of {current}; progress is undefined"
        )


class ConversationOrderError(CoachingError):
    """A message was appended out of chronological order."""
