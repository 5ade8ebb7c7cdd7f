"""Personal dashboard: food, subscriptions, and academic deadlines in the terminal."""

from personal_dashboard.models import (
    FoodItem,
    Session,
    StudyItem,
    SubscriptionItem,
    UserConfig,
)

__all__ = [
    "FoodItem",
    "Session",
    "StudyItem",
    "SubscriptionItem",
    "UserConfig",
]
