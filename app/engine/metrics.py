"""
Metrics for the coaching loop.
"""

from collections import Counter
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)


class CoachingMetrics:
    """Track classification and gamification counters for this process."""
    
    def __init__(self):
        self.total_messages = 0
        self.categories = Counter()
        self.achievements_unlocked = Counter()
        self.points_awarded = 0
        self.blocked_onboarding_steps = 0
    
    def record_classification(self, category: str):
        """Record one classified user message."""
        self.total_messages += 1
        self.categories[category] += 1
        
        logger.debug(
            f"Metrics: messages={self.total_messages}, "
            f"{category}={self.categories[category]}"
        )
    
    def record_unlock(self, achievement_id: str, points: int):
        self.achievements_unlocked[achievement_id] += 1
        self.points_awarded += points
    
    def record_blocked_step(self):
        self.blocked_onboarding_steps += 1
    
    def get_clarification_rate(self) -> float:
        """Share of messages that matched no topic."""
        if self.total_messages == 0:
            return 0.0
        return self.categories["clarification"] / self.total_messages
    
    def get_stats(self) -> Dict[str, Any]:
        """Get current statistics."""
        return {
            'total_messages': self.total_messages,
            'categories': dict(self.categories),
            'clarification_rate': self.get_clarification_rate(),
            'achievements_unlocked': dict(self.achievements_unlocked),
            'points_awarded': self.points_awarded,
            'blocked_onboarding_steps': self.blocked_onboarding_steps,
        }
    
    def reset(self):
        self.__init__()


# Global metrics instance
metrics = CoachingMetrics()
