from .cities import suggest_cities
from .profile_card import format_profile_card, format_user_label
from .stats import UserStats, collect_stats, format_stats

__all__ = [
    "suggest_cities",
    "format_profile_card",
    "format_user_label",
    "UserStats",
    "collect_stats",
    "format_stats",
]
