"""
Achievement system for FishFlow

This package turns the catch log into achievement progress and
bronze/silver/gold unlocks:
- Static achievement catalog
- Progress strategy registry
- Tier resolution
- Unlock detection and persistence
- Sequential unlock notifications
"""

from fishflow.gamification.catalog import DEFAULT_ACHIEVEMENTS, load_catalog, get_achievement
from fishflow.gamification.progress import PROGRESS_STRATEGIES, ProgressContext, calculate_progress
from fishflow.gamification.tiers import resolve_tier, tier_ordinal
from fishflow.gamification.notification_queue import UnlockNotificationQueue
from fishflow.gamification.notifiers import CallbackNotifier, LoggingNotifier, format_unlock_message
from fishflow.gamification.engine import AchievementEngine

__all__ = [
    "DEFAULT_ACHIEVEMENTS",
    "load_catalog",
    "get_achievement",
    "PROGRESS_STRATEGIES",
    "ProgressContext",
    "calculate_progress",
    "resolve_tier",
    "tier_ordinal",
    "UnlockNotificationQueue",
    "CallbackNotifier",
    "LoggingNotifier",
    "format_unlock_message",
    "AchievementEngine",
]
