"""
Progress Calculator

Turns the full catch log into one number per achievement. Every achievement
id maps to exactly one strategy in PROGRESS_STRATEGIES; unknown ids score 0.

Strategies are pure: same catches and context in, same number out. They
never raise on missing optional fields (no measurements, no location, no
weather): such catches just don't qualify.

Strategy families:
- simple count (first-catch, quantity-master, catch-and-release, photo-enthusiast)
- distinct count (species-collector, explorer, season-master)
- threshold count (size-hunter, small-fish-specialist)
- longest run of consecutive days (streak-keeper)
- longest run of a flag (air-force)
- per-day aggregate (multi-species)
- gear signature distinct count (equipment-hoarder)
- lookup-filtered count (lucky-fisherman)
- daily maximum (persistent-angler)
- time window count (early-bird, night-owl)
- membership count (weather-warrior)
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Hashable, Iterable, Optional, Sequence
from zoneinfo import ZoneInfo
import logging

from fishflow.models.catch import CatchRecord, Fish, FishRarity
from fishflow.utils.datetime_helpers import local_date, local_hour, sort_key

logger = logging.getLogger(__name__)

BIG_FISH_MIN_WEIGHT_KG = 1.0
SMALL_FISH_MAX_LENGTH_CM = 10.0
MIN_SPECIES_PER_DAY = 2
EARLY_BIRD_HOURS = (4, 6)
NIGHT_OWL_HOURS = (22, 4)  # wraps past midnight
BAD_WEATHER = frozenset({"rain", "storm", "heavy_rain", "thunderstorm"})
LUCKY_RARITIES = frozenset({FishRarity.RARE, FishRarity.EPIC, FishRarity.LEGENDARY})

SEASONS = {
    "spring": (3, 4, 5),
    "summer": (6, 7, 8),
    "autumn": (9, 10, 11),
    "winter": (12, 1, 2),
}


@dataclass(frozen=True)
class ProgressContext:
    """Read-only auxiliary data a strategy may need"""
    fish_by_id: Dict[str, Fish] = field(default_factory=dict)
    local_tz: Optional[ZoneInfo] = None

    @classmethod
    def from_fish(cls, fish: Iterable[Fish], local_tz: Optional[ZoneInfo] = None) -> "ProgressContext":
        return cls(fish_by_id={f.id: f for f in fish}, local_tz=local_tz)


ProgressStrategy = Callable[[Sequence[CatchRecord], ProgressContext], float]

PROGRESS_STRATEGIES: Dict[str, ProgressStrategy] = {}


def progress_strategy(achievement_id: str):
    """Register a function as the progress strategy for an achievement id"""
    def decorator(func: ProgressStrategy) -> ProgressStrategy:
        if achievement_id in PROGRESS_STRATEGIES:
            raise ValueError(f"Progress strategy already registered for {achievement_id}")
        PROGRESS_STRATEGIES[achievement_id] = func
        return func
    return decorator


def calculate_progress(
    achievement_id: str,
    catches: Sequence[CatchRecord],
    context: Optional[ProgressContext] = None,
    strategies: Optional[Dict[str, ProgressStrategy]] = None,
) -> float:
    """
    Calculate progress for one achievement from the full catch log

    Args:
        achievement_id: Catalog id
        catches: Complete catch log (any order)
        context: Auxiliary lookups (fish catalog, local timezone)
        strategies: Registry override (defaults to PROGRESS_STRATEGIES)

    Returns:
        Non-negative progress value, 0 for ids without a strategy
    """
    registry = PROGRESS_STRATEGIES if strategies is None else strategies
    strategy = registry.get(achievement_id)
    if strategy is None:
        logger.debug(f"No progress strategy for achievement {achievement_id}, using 0")
        return 0
    return strategy(catches, context or ProgressContext())


# ============================================
# Reusable algorithms
# ============================================

def count_matching(catches: Iterable[CatchRecord], predicate: Callable[[CatchRecord], bool]) -> int:
    """Number of catches satisfying predicate"""
    return sum(1 for c in catches if predicate(c))


def count_distinct(values: Iterable[Optional[Hashable]]) -> int:
    """Number of distinct non-None values"""
    return len({v for v in values if v is not None})


def longest_daily_streak(days: Iterable[date]) -> int:
    """
    Longest run of consecutive calendar days

    Duplicates are ignored. No days gives 0, a single day gives 1.
    Example: days 1, 2, 3 and 5 give 3.
    """
    ordered = sorted(set(days))
    if not ordered:
        return 0

    current = 1
    longest = 1
    for previous, day in zip(ordered, ordered[1:]):
        if (day - previous).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def longest_flag_run(flags: Iterable[bool]) -> int:
    """Longest run of consecutive True values"""
    current = 0
    longest = 0
    for flag in flags:
        if flag:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def group_by_day(catches: Iterable[CatchRecord], local_tz: Optional[ZoneInfo] = None) -> Dict[date, list]:
    """Catches bucketed by local calendar date"""
    by_day = defaultdict(list)
    for c in catches:
        by_day[local_date(c.timestamp, local_tz)].append(c)
    return dict(by_day)


def count_days_with_min_distinct(
    catches: Iterable[CatchRecord],
    value: Callable[[CatchRecord], Optional[Hashable]],
    minimum: int,
    local_tz: Optional[ZoneInfo] = None,
) -> int:
    """Number of days on which at least `minimum` distinct values were seen"""
    by_day = group_by_day(catches, local_tz)
    return sum(1 for day_catches in by_day.values() if count_distinct(value(c) for c in day_catches) >= minimum)


def max_per_day(catches: Iterable[CatchRecord], local_tz: Optional[ZoneInfo] = None) -> int:
    """Largest number of catches logged on a single day, 0 for an empty log"""
    return max((len(day_catches) for day_catches in group_by_day(catches, local_tz).values()), default=0)


def hour_in_window(hour: int, start: int, end: int) -> bool:
    """
    Whether hour lies in [start, end)

    A window with start > end wraps past midnight, so (22, 4) covers
    22, 23, 0, 1, 2 and 3.
    """
    if start <= end:
        return start <= hour < end
    return hour >= start or hour < end


def season_for_month(month: int) -> str:
    """Meteorological season of a month number (1-12)"""
    for season, months in SEASONS.items():
        if month in months:
            return season
    raise ValueError(f"Invalid month: {month}")


def equipment_signature(c: CatchRecord) -> tuple:
    """Canonical (rod, reel, bait) tuple; missing parts count as empty"""
    return (c.equipment.rod or "", c.equipment.reel or "", c.equipment.bait or "")


def _is_fish(c: CatchRecord) -> bool:
    return not c.is_skunked


def _is_identified_fish(c: CatchRecord) -> bool:
    return not c.is_skunked and bool(c.fish_id)


def _water_type(c: CatchRecord):
    if c.location is None:
        return None
    return c.location.water_type


# ============================================
# Registered strategies
# ============================================

@progress_strategy("first-catch")
def _first_catch(catches, context):
    return count_matching(catches, _is_fish)


@progress_strategy("species-collector")
def _species_collector(catches, context):
    return count_distinct(c.fish_id for c in catches if _is_identified_fish(c))


@progress_strategy("quantity-master")
def _quantity_master(catches, context):
    return count_matching(catches, _is_fish)


@progress_strategy("size-hunter")
def _size_hunter(catches, context):
    return count_matching(
        catches,
        lambda c: _is_fish(c)
        and c.measurements.weight_kg is not None
        and c.measurements.weight_kg >= BIG_FISH_MIN_WEIGHT_KG,
    )


@progress_strategy("streak-keeper")
def _streak_keeper(catches, context):
    return longest_daily_streak(local_date(c.timestamp, context.local_tz) for c in catches if _is_fish(c))


@progress_strategy("explorer")
def _explorer(catches, context):
    return count_distinct(_water_type(c) for c in catches)


@progress_strategy("air-force")
def _air_force(catches, context):
    ordered = sorted(catches, key=lambda c: sort_key(c.timestamp, context.local_tz))
    return longest_flag_run(bool(c.is_skunked) for c in ordered)


@progress_strategy("early-bird")
def _early_bird(catches, context):
    start, end = EARLY_BIRD_HOURS
    return count_matching(catches, lambda c: hour_in_window(local_hour(c.timestamp, context.local_tz), start, end))


@progress_strategy("night-owl")
def _night_owl(catches, context):
    start, end = NIGHT_OWL_HOURS
    return count_matching(catches, lambda c: hour_in_window(local_hour(c.timestamp, context.local_tz), start, end))


@progress_strategy("weather-warrior")
def _weather_warrior(catches, context):
    return count_matching(catches, lambda c: c.conditions.weather in BAD_WEATHER)


@progress_strategy("small-fish-specialist")
def _small_fish_specialist(catches, context):
    # A zero length means "not measured"
    return count_matching(
        catches,
        lambda c: _is_fish(c)
        and bool(c.measurements.length_cm)
        and c.measurements.length_cm < SMALL_FISH_MAX_LENGTH_CM,
    )


@progress_strategy("catch-and-release")
def _catch_and_release(catches, context):
    return count_matching(catches, lambda c: _is_fish(c) and c.is_released)


@progress_strategy("lucky-fisherman")
def _lucky_fisherman(catches, context):
    def is_lucky(c: CatchRecord) -> bool:
        if not _is_identified_fish(c):
            return False
        fish = context.fish_by_id.get(c.fish_id)
        return fish is not None and fish.rarity in LUCKY_RARITIES

    return count_matching(catches, is_lucky)


@progress_strategy("multi-species")
def _multi_species(catches, context):
    return count_days_with_min_distinct(
        [c for c in catches if _is_identified_fish(c)],
        lambda c: c.fish_id,
        MIN_SPECIES_PER_DAY,
        context.local_tz,
    )


@progress_strategy("equipment-hoarder")
def _equipment_hoarder(catches, context):
    return count_distinct(equipment_signature(c) for c in catches)


@progress_strategy("photo-enthusiast")
def _photo_enthusiast(catches, context):
    return count_matching(catches, lambda c: len(c.photos) > 0)


@progress_strategy("season-master")
def _season_master(catches, context):
    return count_distinct(season_for_month(local_date(c.timestamp, context.local_tz).month) for c in catches)


@progress_strategy("persistent-angler")
def _persistent_angler(catches, context):
    # Each logged catch stands in for roughly an hour on the water
    return max_per_day(catches, context.local_tz)
