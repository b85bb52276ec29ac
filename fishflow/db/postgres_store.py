"""PostgreSQL-backed catch log and achievement store"""
import logging
from typing import Optional

import psycopg

from fishflow.db import queries
from fishflow.exceptions import wrap_external_exception
from fishflow.models.achievement import UserAchievement
from fishflow.models.catch import CatchRecord, Fish

logger = logging.getLogger(__name__)


class PostgresCatchLog:
    """Reads catches and fish through the shared connection pool"""

    async def get_catches(self) -> list[CatchRecord]:
        try:
            rows = await queries.get_all_catches()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="get_all_catches")

        catches = []
        for row in rows:
            row = {k: v for k, v in row.items() if v is not None}
            catches.append(CatchRecord.model_validate(row))
        return catches

    async def get_fish(self) -> list[Fish]:
        try:
            rows = await queries.get_all_fish()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="get_all_fish")
        return [Fish.model_validate({k: v for k, v in row.items() if v is not None}) for row in rows]


class PostgresAchievementStore:
    """Achievement progress records in the user_achievements table"""

    async def get_user_achievements(self) -> list[UserAchievement]:
        try:
            rows = await queries.get_user_achievements()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="get_user_achievements")
        return [UserAchievement.model_validate(row) for row in rows]

    async def get_user_achievement(self, achievement_id: str) -> Optional[UserAchievement]:
        try:
            row = await queries.get_user_achievement(achievement_id)
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="get_user_achievement",
                context={"achievement_id": achievement_id}
            )
        return UserAchievement.model_validate(row) if row else None

    async def upsert_user_achievement(self, user_achievement: UserAchievement) -> None:
        try:
            await queries.upsert_user_achievement(
                achievement_id=user_achievement.achievement_id,
                progress=user_achievement.progress,
                tier=user_achievement.tier.value if user_achievement.tier else None,
                unlocked_at=user_achievement.unlocked_at,
                is_viewed=user_achievement.is_viewed,
            )
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="upsert_user_achievement",
                context={"achievement_id": user_achievement.achievement_id}
            )

    async def reset(self) -> int:
        """Drop every achievement record (full data reset)"""
        try:
            return await queries.delete_all_user_achievements()
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="delete_all_user_achievements")
