"""
Intent Classifier for the coaching chat.

Maps free-text user input to one finance topic using an ordered list of
keyword rules. The first rule with any keyword contained in the
lower-cased text wins, so the rule order is the tie-break between
overlapping topics ("debt and savings" is a debt question).

This is an explainable decision table, not a statistical model.
"""

import logging
from typing import List, Sequence, Tuple

from app.engine.models import Category

logger = logging.getLogger(__name__)

CLASSIFICATION_CONFIDENCE = 0.85

KeywordRule = Tuple[Category, Tuple[str, ...]]

# Priority order matters: earlier rules win on overlapping input
KEYWORD_RULES: Tuple[KeywordRule, ...] = (
    (Category.BUDGETING, ("budget", "spending")),
    (Category.INVESTING, ("invest", "stock")),
    (Category.DEBT, ("debt", "loan")),
    (Category.SAVINGS, ("emergency", "savings")),
    (Category.CREDIT, ("credit", "score")),
)

RULE_PRIORITY: Tuple[Category, ...] = tuple(category for category, _ in KEYWORD_RULES)


class IntentClassifier:
    """
    Classifies a chat message into a finance topic.
    """

    def __init__(self, rules: Sequence[KeywordRule] = KEYWORD_RULES):
        self.rules: List[KeywordRule] = list(rules)

    def classify(self, text: str) -> Category:
        """
        Classify a message.

        Args:
            text: Raw user input

        Returns:
            The matched topic, or ``Category.CLARIFICATION`` when no rule matches
        """
        lowered = (text or "").lower()

        for category, keywords in self.rules:
            if any(keyword in lowered for keyword in keywords):
                logger.debug(f"Classified message as {category.value}")
                return category

        return Category.CLARIFICATION


_default_classifier = IntentClassifier()


def classify(text: str) -> Category:
    return _default_classifier.classify(text)
