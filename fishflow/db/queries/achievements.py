"""Achievement database queries"""
import logging
from typing import Iterable, Optional
from psycopg.types.json import Jsonb
from fishflow.db.connection import db
from fishflow.models.achievement import Achievement

logger = logging.getLogger(__name__)


# ==========================================
# Schema
# ==========================================

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS achievements (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        description TEXT NOT NULL,
        icon TEXT NOT NULL,
        category TEXT NOT NULL CHECK (category IN ('species', 'quantity', 'size', 'streak', 'location', 'special')),
        tiers JSONB NOT NULL,
        is_hidden BOOLEAN NOT NULL DEFAULT FALSE,
        sort_order INTEGER NOT NULL DEFAULT 0,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_achievements (
        achievement_id TEXT PRIMARY KEY REFERENCES achievements (id),
        progress DOUBLE PRECISION NOT NULL DEFAULT 0,
        tier TEXT CHECK (tier IN ('bronze', 'silver', 'gold')),
        unlocked_at TIMESTAMPTZ,
        is_viewed BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
)


async def ensure_schema() -> None:
    """Create achievement tables if missing"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            for statement in SCHEMA_STATEMENTS:
                await cur.execute(statement)
            await conn.commit()


# ==========================================
# Achievement Catalog
# ==========================================

async def seed_achievements(catalog: Iterable[Achievement]) -> int:
    """
    Insert or refresh achievement definitions

    Args:
        catalog: Achievements in display order

    Returns:
        Number of definitions written
    """
    count = 0
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            for sort_order, achievement in enumerate(catalog):
                await cur.execute(
                    """
                    INSERT INTO achievements (id, name, description, icon, category, tiers, is_hidden, sort_order)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (id) DO UPDATE SET
                        name = EXCLUDED.name,
                        description = EXCLUDED.description,
                        icon = EXCLUDED.icon,
                        category = EXCLUDED.category,
                        tiers = EXCLUDED.tiers,
                        is_hidden = EXCLUDED.is_hidden,
                        sort_order = EXCLUDED.sort_order
                    """,
                    (
                        achievement.id,
                        achievement.name,
                        achievement.description,
                        achievement.icon,
                        achievement.category.value,
                        Jsonb(achievement.tiers.model_dump()),
                        achievement.is_hidden,
                        sort_order,
                    )
                )
                count += 1
            await conn.commit()

    logger.info(f"Seeded {count} achievement definitions")
    return count


# ==========================================
# User Achievements
# ==========================================

async def get_user_achievements() -> list[dict]:
    """
    Get every stored achievement progress record

    Returns:
        List of dicts with achievement_id, progress, tier, unlocked_at, is_viewed
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT achievement_id, progress, tier, unlocked_at, is_viewed
                FROM user_achievements
                """
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def get_user_achievement(achievement_id: str) -> Optional[dict]:
    """
    Get one achievement progress record

    Args:
        achievement_id: Catalog id

    Returns:
        Record dict or None
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT achievement_id, progress, tier, unlocked_at, is_viewed
                FROM user_achievements
                WHERE achievement_id = %s
                """,
                (achievement_id,)
            )
            row = await cur.fetchone()
            return dict(row) if row else None


async def upsert_user_achievement(
    achievement_id: str,
    progress: float,
    tier: Optional[str],
    unlocked_at,
    is_viewed: bool
) -> None:
    """
    Insert or replace the progress record for an achievement

    At most one record exists per achievement id.
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                INSERT INTO user_achievements (achievement_id, progress, tier, unlocked_at, is_viewed)
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (achievement_id) DO UPDATE SET
                    progress = EXCLUDED.progress,
                    tier = EXCLUDED.tier,
                    unlocked_at = EXCLUDED.unlocked_at,
                    is_viewed = EXCLUDED.is_viewed,
                    updated_at = NOW()
                """,
                (achievement_id, progress, tier, unlocked_at, is_viewed)
            )
            await conn.commit()


async def delete_all_user_achievements() -> int:
    """
    Remove all progress records (full data reset)

    Returns:
        Number of deleted records
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute("DELETE FROM user_achievements")
            deleted = cur.rowcount
            await conn.commit()

    logger.info(f"Deleted {deleted} user achievement records")
    return deleted
