"""Achievement models for gamification"""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, model_validator


class AchievementCategory(str, Enum):
    """Achievement categories"""
    SPECIES = "species"
    QUANTITY = "quantity"
    SIZE = "size"
    STREAK = "streak"
    LOCATION = "location"
    SPECIAL = "special"


class AchievementTier(str, Enum):
    """Achievement tiers, lowest first"""
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


class AchievementTrigger(str, Enum):
    """Why an evaluation pass was started"""
    CATCH = "catch"
    EQUIPMENT = "equipment"
    LOGIN = "login"


class TierRequirement(BaseModel):
    """Threshold and optional reward text for one tier"""
    model_config = ConfigDict(frozen=True)

    requirement: float
    reward: Optional[str] = None


class AchievementTiers(BaseModel):
    """The three tier thresholds of an achievement"""
    model_config = ConfigDict(frozen=True)

    bronze: TierRequirement
    silver: TierRequirement
    gold: TierRequirement

    @model_validator(mode="after")
    def check_non_decreasing(self) -> "AchievementTiers":
        if not (self.bronze.requirement <= self.silver.requirement <= self.gold.requirement):
            raise ValueError(
                "tier requirements must satisfy bronze <= silver <= gold, got "
                f"{self.bronze.requirement}/{self.silver.requirement}/{self.gold.requirement}"
            )
        return self

    def requirement_for(self, tier: AchievementTier) -> float:
        return getattr(self, tier.value).requirement


class Achievement(BaseModel):
    """Achievement definition (catalog entry)"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    category: AchievementCategory
    tiers: AchievementTiers
    is_hidden: bool = False


class UserAchievement(BaseModel):
    """User's progress record for one achievement"""
    achievement_id: str
    progress: float = 0
    tier: Optional[AchievementTier] = None
    unlocked_at: Optional[datetime] = None
    is_viewed: bool = False


class AchievementUnlock(BaseModel):
    """A tier increase produced by an evaluation pass"""
    model_config = ConfigDict(frozen=True)

    achievement_id: str
    tier: AchievementTier
    is_new: bool  # first tier ever for this achievement
    is_upgrade: bool  # moved up from a lower tier
    previous_tier: Optional[AchievementTier] = None
