"""Pydantic models for achievements and the catch log"""
from fishflow.models.achievement import (
    Achievement,
    AchievementCategory,
    AchievementTier,
    AchievementTiers,
    AchievementTrigger,
    AchievementUnlock,
    TierRequirement,
    UserAchievement,
)
from fishflow.models.catch import (
    CatchLocation,
    CatchRecord,
    Conditions,
    Equipment,
    Fish,
    FishRarity,
    Measurements,
    WaterType,
)

__all__ = [
    "Achievement",
    "AchievementCategory",
    "AchievementTier",
    "AchievementTiers",
    "AchievementTrigger",
    "AchievementUnlock",
    "TierRequirement",
    "UserAchievement",
    "CatchLocation",
    "CatchRecord",
    "Conditions",
    "Equipment",
    "Fish",
    "FishRarity",
    "Measurements",
    "WaterType",
]
