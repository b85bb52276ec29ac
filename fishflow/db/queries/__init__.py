"""
Database queries - re-exported for convenience.

Module organization:
- achievements.py: Schema, achievement catalog, user achievement records
- catches.py: Catch log and fish catalog (read-only)
"""

# Achievement operations
from fishflow.db.queries.achievements import (
    ensure_schema,
    seed_achievements,
    get_user_achievements,
    get_user_achievement,
    upsert_user_achievement,
    delete_all_user_achievements,
)

# Catch log operations
from fishflow.db.queries.catches import (
    get_all_catches,
    get_all_fish,
)

__all__ = [
    "ensure_schema",
    "seed_achievements",
    "get_user_achievements",
    "get_user_achievement",
    "upsert_user_achievement",
    "delete_all_user_achievements",
    "get_all_catches",
    "get_all_fish",
]
