"""
Achievement Catalog

Static definitions of every achievement, loaded once at startup.
Order matters: evaluation passes and unlock notifications follow it.

Categories:
- species: collecting different fish
- quantity: total number of catches
- size: big fish
- streak: consecutive fishing days
- location: different waters
- special: everything else (time of day, weather, gear, ...)
"""

from typing import Optional
import logging

from fishflow.models.achievement import Achievement

logger = logging.getLogger(__name__)


def _tiers(bronze, silver, gold) -> dict:
    """Build a tiers mapping from (requirement, reward) pairs"""
    return {
        name: {"requirement": requirement, "reward": reward}
        for name, (requirement, reward) in (("bronze", bronze), ("silver", silver), ("gold", gold))
    }


DEFAULT_ACHIEVEMENTS: list[dict] = [
    {
        "id": "first-catch",
        "name": "First Cast",
        "description": "Log your very first catch",
        "category": "special",
        "icon": "fish.fill",
        "tiers": _tiers((1, "Fishdex unlocked"), (1, None), (1, None)),
    },
    {
        "id": "species-collector",
        "name": "Species Collector",
        "description": "Catch different kinds of fish",
        "category": "species",
        "icon": "fish.fill",
        "tiers": _tiers((5, "Bronze Collector"), (15, "Silver Collector"), (30, "Gold Collector")),
    },
    {
        "id": "quantity-master",
        "name": "Seasoned Angler",
        "description": "Log a large number of catches",
        "category": "quantity",
        "icon": "number",
        "tiers": _tiers((10, "Rookie Angler"), (50, "Veteran Angler"), (100, "Master Angler")),
    },
    {
        "id": "size-hunter",
        "name": "Big Fish Hunter",
        "description": "Land fish weighing 1kg or more",
        "category": "size",
        "icon": "ruler",
        "tiers": _tiers((1, "First Big One"), (3, "Big Fish Bane"), (5, "Giant Legend")),
    },
    {
        "id": "streak-keeper",
        "name": "Streak Keeper",
        "description": "Catch fish on consecutive days",
        "category": "streak",
        "icon": "flame.fill",
        "tiers": _tiers((3, "Three in a Row"), (7, "Full Week"), (30, "Month Champion")),
    },
    {
        "id": "explorer",
        "name": "Water Explorer",
        "description": "Fish in different types of water",
        "category": "location",
        "icon": "location.fill",
        "tiers": _tiers((2, "Explorer"), (4, "Pathfinder"), (6, "Master Explorer")),
    },
    {
        "id": "air-force",
        "name": "Skunk Squadron",
        "description": "Consecutive trips that ended without a fish",
        "category": "special",
        "icon": "wind",
        "tiers": _tiers((3, "Cadet"), (7, "Veteran"), (15, "Commander")),
    },
    {
        "id": "early-bird",
        "name": "Early Bird",
        "description": "Fish between 4 and 6 in the morning",
        "category": "special",
        "icon": "sun.min.fill",
        "tiers": _tiers((5, "Morning Angler"), (15, "Dawn Warrior"), (30, "Child of Sunrise")),
    },
    {
        "id": "night-owl",
        "name": "Night Owl",
        "description": "Fish after 10 at night",
        "category": "special",
        "icon": "moon.stars.fill",
        "tiers": _tiers((5, "Night Rookie"), (15, "Night Walker"), (30, "Moonlight Master")),
    },
    {
        "id": "weather-warrior",
        "name": "Weather Warrior",
        "description": "Fish in rain and storms",
        "category": "special",
        "icon": "cloud.bolt.rain.fill",
        "tiers": _tiers((3, "Brave Angler"), (10, "Iron Will"), (20, "Storm King")),
    },
    {
        "id": "small-fish-specialist",
        "name": "Small Fry Specialist",
        "description": "Catch fish shorter than 10cm",
        "category": "special",
        "icon": "fish",
        "tiers": _tiers((10, "Small Fry Slayer"), (25, "Mini Master"), (50, "Pocket King")),
    },
    {
        "id": "catch-and-release",
        "name": "Conservationist",
        "description": "Release the fish you catch",
        "category": "special",
        "icon": "heart.fill",
        "tiers": _tiers((10, "Kind Angler"), (30, "River Guardian"), (100, "Fish Protector")),
    },
    {
        "id": "lucky-fisherman",
        "name": "Lucky Angler",
        "description": "Catch rare, epic or legendary fish",
        "category": "species",
        "icon": "sparkles",
        "tiers": _tiers((1, "Beginner's Luck"), (3, "On a Roll"), (5, "Truly Blessed")),
    },
    {
        "id": "multi-species",
        "name": "Mixed Bag",
        "description": "Catch two or more species on the same day",
        "category": "species",
        "icon": "arrow.3.trianglepath",
        "tiers": _tiers((3, "Variety Hunter"), (5, "All-rounder"), (8, "Species Harvester")),
    },
    {
        "id": "equipment-hoarder",
        "name": "Gear Head",
        "description": "Log catches with different gear combinations",
        "category": "special",
        "icon": "wrench.and.screwdriver.fill",
        "tiers": _tiers((5, "Gear Fan"), (15, "Gear Collector"), (30, "Gear Maniac")),
    },
    {
        "id": "photo-enthusiast",
        "name": "Shutterbug",
        "description": "Add photos to your catches",
        "category": "special",
        "icon": "camera.fill",
        "tiers": _tiers((20, "Photo Rookie"), (50, "Lens Master"), (100, "Fishing Photographer")),
    },
    {
        "id": "season-master",
        "name": "Four Seasons",
        "description": "Fish in every season of the year",
        "category": "special",
        "icon": "calendar",
        "tiers": _tiers((2, "Season Hopper"), (3, "Three Season Warrior"), (4, "All Year Round")),
    },
    {
        "id": "persistent-angler",
        "name": "Persistent Angler",
        "description": "Log many catches in a single day",
        "category": "special",
        "icon": "timer",
        "tiers": _tiers((4, "Patient Angler"), (8, "Endurance Warrior"), (12, "Marathon Angler")),
    },
]


def load_catalog(definitions: Optional[list[dict]] = None) -> tuple[Achievement, ...]:
    """
    Build the immutable achievement catalog

    Args:
        definitions: Raw achievement dicts (defaults to DEFAULT_ACHIEVEMENTS)

    Returns:
        Tuple of Achievement in definition order

    Raises:
        ValueError: On duplicate ids
        pydantic.ValidationError: On malformed entries or out-of-order tiers
    """
    if definitions is None:
        definitions = DEFAULT_ACHIEVEMENTS

    catalog = tuple(Achievement.model_validate(definition) for definition in definitions)

    seen = set()
    for achievement in catalog:
        if achievement.id in seen:
            raise ValueError(f"Duplicate achievement id: {achievement.id}")
        seen.add(achievement.id)

    logger.debug(f"Loaded achievement catalog with {len(catalog)} entries")
    return catalog


def get_achievement(catalog: tuple[Achievement, ...], achievement_id: str) -> Optional[Achievement]:
    """Find a catalog entry by id"""
    for achievement in catalog:
        if achievement.id == achievement_id:
            return achievement
    return None
