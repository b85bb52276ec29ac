"""Unit tests for catalog and models"""
import pytest
from datetime import datetime
from pydantic import ValidationError

from fishflow.gamification.catalog import DEFAULT_ACHIEVEMENTS, get_achievement, load_catalog
from fishflow.models.achievement import (
    Achievement,
    AchievementCategory,
    AchievementTier,
    AchievementTiers,
    UserAchievement,
)
from fishflow.models.catch import CatchRecord, WaterType


# ============================================================================
# Achievement Model Tests
# ============================================================================

def test_tiers_must_not_decrease():
    """Test bronze <= silver <= gold is enforced"""
    with pytest.raises(ValidationError):
        AchievementTiers.model_validate({
            "bronze": {"requirement": 10},
            "silver": {"requirement": 5},
            "gold": {"requirement": 30},
        })


def test_achievement_is_immutable():
    achievement = load_catalog()[0]
    with pytest.raises(ValidationError):
        achievement.name = "Renamed"


def test_unknown_category_rejected():
    definition = dict(DEFAULT_ACHIEVEMENTS[0], category="fashion")
    with pytest.raises(ValidationError):
        Achievement.model_validate(definition)


def test_user_achievement_defaults():
    record = UserAchievement(achievement_id="explorer")
    assert record.progress == 0
    assert record.tier is None
    assert record.unlocked_at is None
    assert record.is_viewed is False


def test_user_achievement_tier_from_string():
    record = UserAchievement(achievement_id="explorer", tier="silver")
    assert record.tier == AchievementTier.SILVER


# ============================================================================
# Catch Model Tests
# ============================================================================

def test_catch_without_fish_is_skunk():
    catch = CatchRecord(timestamp=datetime(2024, 1, 1))
    assert catch.is_skunked is True


def test_catch_with_fish_is_not_skunk():
    catch = CatchRecord(fish_id="bream", timestamp=datetime(2024, 1, 1))
    assert catch.is_skunked is False


def test_explicit_skunk_flag_wins():
    catch = CatchRecord(fish_id=None, timestamp=datetime(2024, 1, 1), is_skunked=False)
    assert catch.is_skunked is False


def test_optional_sections_default_empty():
    catch = CatchRecord(fish_id="bream", timestamp=datetime(2024, 1, 1))
    assert catch.measurements.weight_kg is None
    assert catch.location is None
    assert catch.equipment.rod is None
    assert catch.conditions.weather is None
    assert catch.photos == []


def test_water_type_parsed():
    catch = CatchRecord(fish_id="bream", timestamp=datetime(2024, 1, 1), location={"water_type": "estuary"})
    assert catch.location.water_type == WaterType.ESTUARY


# ============================================================================
# Catalog Tests
# ============================================================================

def test_default_catalog_loads_in_order():
    catalog = load_catalog()
    assert len(catalog) == len(DEFAULT_ACHIEVEMENTS)
    assert [a.id for a in catalog] == [d["id"] for d in DEFAULT_ACHIEVEMENTS]


def test_default_catalog_categories():
    catalog = load_catalog()
    assert get_achievement(catalog, "streak-keeper").category == AchievementCategory.STREAK
    assert get_achievement(catalog, "explorer").category == AchievementCategory.LOCATION


def test_species_collector_thresholds():
    tiers = get_achievement(load_catalog(), "species-collector").tiers
    assert (tiers.bronze.requirement, tiers.silver.requirement, tiers.gold.requirement) == (5, 15, 30)
    assert tiers.gold.reward == "Gold Collector"


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        load_catalog([DEFAULT_ACHIEVEMENTS[0], DEFAULT_ACHIEVEMENTS[0]])


def test_get_achievement_missing():
    assert get_achievement(load_catalog(), "nope") is None
