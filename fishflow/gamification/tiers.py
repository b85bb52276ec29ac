"""Tier resolution and ordering"""
from typing import Optional

from fishflow.models.achievement import AchievementTier, AchievementTiers

TIER_ORDINALS = {
    None: 0,
    AchievementTier.BRONZE: 1,
    AchievementTier.SILVER: 2,
    AchievementTier.GOLD: 3,
}

# Highest first: the first tier whose requirement is met wins
_RESOLUTION_ORDER = (AchievementTier.GOLD, AchievementTier.SILVER, AchievementTier.BRONZE)


def tier_ordinal(tier: Optional[AchievementTier]) -> int:
    """Fixed ordering: locked=0 < bronze=1 < silver=2 < gold=3"""
    return TIER_ORDINALS[AchievementTier(tier) if tier is not None else None]


def resolve_tier(tiers: AchievementTiers, progress: float) -> Optional[AchievementTier]:
    """
    Highest tier whose requirement is met (inclusive)

    Thresholds are assumed to be already validated as non-decreasing.

    Returns:
        The tier, or None if not even bronze is reached
    """
    for tier in _RESOLUTION_ORDER:
        if progress >= tiers.requirement_for(tier):
            return tier
    return None
