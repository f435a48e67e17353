"""
Response Composer for the coaching chat.

Turns a classified topic plus the user's profile into an assistant
message with suggested follow-up actions.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from app.engine.intent_classifier import CLASSIFICATION_CONFIDENCE
from app.engine.locale import format_amount, goal_baselines
from app.engine.models import Category, ExperienceLevel, Message, Sender, UserProfile

GREETING_CONFIDENCE = 1.0

BEGINNER_SUFFIX = (
    " Since you're new to this, I'll keep my explanations simple and provide "
    "step-by-step guidance."
)
ADVANCED_SUFFIX = (
    " I can see you have experience, so I can dive deeper into advanced strategies "
    "if you'd like."
)

EXPERIENCE_SUFFIXES: Dict[ExperienceLevel, str] = {
    ExperienceLevel.BEGINNER: BEGINNER_SUFFIX,
    ExperienceLevel.INTERMEDIATE: "",
    ExperienceLevel.ADVANCED: ADVANCED_SUFFIX,
}

# body template, suggested actions
TOPIC_TEMPLATES: Dict[Category, Tuple[str, List[str]]] = {
    Category.BUDGETING: (
        "Great question about budgeting! For someone at your {experience} level, I "
        "recommend starting with the 50/30/20 rule: 50% for needs, 30% for wants, and "
        "20% for savings. Would you like me to help you create a personalized budget "
        "based on your income?",
        ["Create Budget", "Track Expenses", "Set Alerts"],
    ),
    Category.INVESTING: (
        "Investing is one of your goals! Given your experience level, I'd suggest "
        "starting with low-cost index funds or ETFs. They're diversified and less risky "
        "for beginners. The key is to start early and be consistent. Would you like to "
        "learn about different investment types?",
        ["Learn Investment Types", "Risk Assessment", "Portfolio Builder"],
    ),
    Category.DEBT: (
        "Debt management is crucial for financial health. I recommend the debt "
        "avalanche method: pay minimums on all debts, then put extra money toward the "
        "highest interest rate debt first. This saves you the most money long-term. "
        "What types of debt are you dealing with?",
        ["Debt Calculator", "Payment Plan", "Debt Consolidation"],
    ),
    Category.SAVINGS: (
        "Building an emergency fund is excellent! Aim for 3-6 months of expenses. Start "
        "small - even {starter_amount} can help with minor emergencies. Set up automatic "
        "transfers to make saving easier. Based on your goals, this seems like a "
        "priority. Should we calculate your target amount?",
        ["Calculate Target", "Auto-Save Setup", "High-Yield Accounts"],
    ),
    Category.CREDIT: (
        "Credit scores are important for financial opportunities! Pay bills on time, "
        "keep credit utilization below 30%, and don't close old accounts. Check your "
        "credit report annually for errors. Improving credit takes time but is worth "
        "it. Want to know your current credit factors?",
        ["Credit Report", "Score Tracker", "Improvement Plan"],
    ),
    Category.CLARIFICATION: (
        "I understand you're asking about \"{user_message}\". As your financial coach, "
        "I'm here to help with budgeting, saving, investing, debt management, and "
        "credit improvement. Could you be more specific about which area you'd like "
        "to focus on?",
        ["Budget Help", "Investment Guide", "Debt Planning"],
    ),
}

QUICK_ACTIONS = ["Create Budget", "Investment Tips", "Emergency Fund", "Debt Plan"]


def _new_message_id() -> str:
    return uuid.uuid4().hex


def _starter_amount(currency: str) -> str:
    # One fifth of the local emergency-fund baseline, $500 for USD
    return format_amount(goal_baselines(currency).emergency_fund_current / 5, currency)


def compose(
    category: Category,
    user_message: str,
    profile: UserProfile,
    timestamp: Optional[datetime] = None,
) -> Message:
    """Compose the assistant reply for a classified user message."""
    if category not in TOPIC_TEMPLATES:
        category = Category.CLARIFICATION
    template, actions = TOPIC_TEMPLATES[category]

    content = template.format(
        experience=profile.experience.value,
        user_message=user_message.strip(),
        starter_amount=_starter_amount(profile.currency),
    )
    content += EXPERIENCE_SUFFIXES.get(profile.experience, "")

    return Message(
        id=_new_message_id(),
        content=content,
        sender=Sender.ASSISTANT,
        timestamp=timestamp or datetime.now(timezone.utc),
        category=category,
        confidence=CLASSIFICATION_CONFIDENCE,
        actions=list(actions),
    )


def greeting(profile: UserProfile, timestamp: Optional[datetime] = None) -> Message:
    """The fixed session-start message."""
    highlighted = ", ".join(profile.goals[:2])
    more = " and more" if len(profile.goals) > 2 else ""
    if highlighted:
        interests = f" Based on your profile, I see you're interested in: {highlighted}{more}."
    else:
        interests = ""

    return Message(
        id=_new_message_id(),
        content=(
            f"Hello {profile.name}! 👋 I'm your AI Financial Coach. I'm here to help you "
            f"achieve your financial goals.{interests} What would you like to discuss today?"
        ),
        sender=Sender.ASSISTANT,
        timestamp=timestamp or datetime.now(timezone.utc),
        category=Category.GREETING,
        confidence=GREETING_CONFIDENCE,
        actions=[],
    )
