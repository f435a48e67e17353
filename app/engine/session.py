"""
Coaching session: the interactive chat loop for one user.

A session owns the authoritative profile, achievement catalog and
conversation for a single user and threads them through the pure engine
functions. It is not thread-safe; a host serving many users keeps one
session per user and drives each from a single task.
"""

import asyncio
import logging
import random
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from app.core.config import settings
from app.core.exceptions import CoachingError, ConversationOrderError
from app.engine import achievements
from app.engine.achievements import AchievementResult, apply_achievement_event, record_activity
from app.engine.intent_classifier import classify
from app.engine.metrics import metrics
from app.engine.models import (
    Achievement,
    AchievementUnlock,
    Category,
    Message,
    Sender,
    UserProfile,
)
from app.engine.response_composer import compose, greeting

logger = logging.getLogger(__name__)


CATEGORY_EVENTS = {
    Category.BUDGETING: achievements.BUDGET_QUESTION_ASKED,
    Category.INVESTING: achievements.INVESTMENT_BASICS_LEARNED,
}

ACTION_EVENTS = {
    "Create Budget": achievements.BUDGET_QUESTION_ASKED,
    "Learn Investment Types": achievements.INVESTMENT_BASICS_LEARNED,
    "Payment Plan": achievements.DEBT_PLAN_CREATED,
    "Debt Plan": achievements.DEBT_PLAN_CREATED,
    "Calculate Target": achievements.EMERGENCY_FUND_GOAL_SET,
    "Emergency Fund": achievements.EMERGENCY_FUND_GOAL_SET,
}


class EmptyMessageError(CoachingError):
    """The user submitted a blank message."""


class SessionTurn(BaseModel):
    user_message: Message
    reply: Message
    profile: UserProfile
    catalog: List[Achievement]
    notifications: List[AchievementUnlock] = Field(default_factory=list)


def append_message(messages: Sequence[Message], message: Message) -> Tuple[Message, ...]:
    """Append to a conversation, keeping it chronologically ordered."""
    if messages and message.timestamp < messages[-1].timestamp:
        raise ConversationOrderError(
            f"Message {message.id} at {message.timestamp.isoformat()} precedes "
            f"{messages[-1].id} at {messages[-1].timestamp.isoformat()}"
        )
    return tuple(messages) + (message,)


def user_message(text: str, timestamp: Optional[datetime] = None) -> Message:
    if not text or not text.strip():
        raise EmptyMessageError("Message is empty")
    return Message(
        id=uuid.uuid4().hex,
        content=text.strip(),
        sender=Sender.USER,
        timestamp=timestamp or datetime.now(timezone.utc),
    )


def classify_and_respond(user_text: str, profile: UserProfile) -> Message:
    """Classify a user message and compose the assistant's reply."""
    category = classify(user_text)
    metrics.record_classification(category.value)
    return compose(category, user_text, profile)


def event_for_category(category: Category) -> Optional[str]:
    return CATEGORY_EVENTS.get(category)


def event_for_action(action: str) -> Optional[str]:
    return ACTION_EVENTS.get(action)


async def typing_pause(rng: Optional[random.Random] = None) -> float:
    """
    Wait the simulated typing delay before a reply.

    Cancelling the awaiting task abandons the reply.
    """
    low = max(settings.TYPING_DELAY_MIN_SECONDS, 0.0)
    high = max(settings.TYPING_DELAY_MAX_SECONDS, low)
    delay = (rng or random).uniform(low, high)
    if delay > 0:
        await asyncio.sleep(delay)
    return delay


class CoachingSession:
    """
    Conversation state for one user.
    """

    def __init__(
        self,
        profile: UserProfile,
        catalog: Optional[Sequence[Achievement]] = None,
        messages: Sequence[Message] = (),
        rng: Optional[random.Random] = None,
    ):
        self.profile = profile
        self.catalog: List[Achievement] = list(catalog) if catalog is not None else achievements.default_catalog()
        self.messages: Tuple[Message, ...] = tuple(messages)
        self._rng = rng or random.Random()

    def start(self) -> Message:
        """Open the conversation with the greeting, once."""
        if self.messages:
            return self.messages[0]
        message = greeting(self.profile)
        self.messages = append_message(self.messages, message)
        return message

    def _apply(self, event_name: Optional[str]) -> Optional[AchievementUnlock]:
        if event_name is None:
            return None
        result: AchievementResult = apply_achievement_event(event_name, self.profile, self.catalog)
        self.profile = result.profile
        self.catalog = result.catalog
        return result.notification

    async def send(self, text: str, today: Optional[date] = None) -> SessionTurn:
        """
        Submit a user message and wait for the assistant's reply.

        The user message is part of the conversation as soon as it is
        submitted; the reply and any achievement it unlocks are applied only
        after the typing pause completes.
        """
        incoming = user_message(text)
        self.messages = append_message(self.messages, incoming)

        await typing_pause(self._rng)

        reply = classify_and_respond(incoming.content, self.profile)
        self.messages = append_message(self.messages, reply)
        self.profile = record_activity(self.profile, today or date.today())

        notifications = []
        unlocked = self._apply(event_for_category(reply.category))
        if unlocked:
            notifications.append(unlocked)

        return SessionTurn(
            user_message=incoming,
            reply=reply,
            profile=self.profile,
            catalog=self.catalog,
            notifications=notifications,
        )

    def choose_action(self, action: str) -> Optional[AchievementUnlock]:
        """Record that the user picked a suggested or quick action."""
        return self._apply(event_for_action(action))
