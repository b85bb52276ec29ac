"""Catch log and fish catalog queries (read-only)"""
import logging
from fishflow.db.connection import db

logger = logging.getLogger(__name__)


async def get_all_catches() -> list[dict]:
    """
    Get the complete catch log, oldest first

    Returns:
        List of catch dicts; nested fields (measurements, location,
        equipment, conditions) come back as parsed JSONB
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id, fish_id, timestamp, photos, measurements, location,
                       equipment, conditions, notes, is_released, is_skunked, tags
                FROM catch_records
                ORDER BY timestamp
                """
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def get_all_fish() -> list[dict]:
    """
    Get the fish catalog

    Returns:
        List of fish dicts with id, name, scientific_name, family, rarity
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id, name, scientific_name, family, rarity
                FROM fish
                """
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]
