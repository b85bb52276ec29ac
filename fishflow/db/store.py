"""
Storage contracts used by the achievement engine, plus an in-memory store

The engine reads the catch log and fish catalog through CatchLog and reads
and upserts progress records through AchievementStore. Anything that
implements these coroutines can back the engine; InMemoryStore implements
both and is used for tests and as the default when no database is set up.
"""

import logging
from typing import Iterable, Optional, Protocol

from fishflow.models.achievement import UserAchievement
from fishflow.models.catch import CatchRecord, Fish

logger = logging.getLogger(__name__)


class CatchLog(Protocol):
    """Read-only access to the catch log and fish catalog"""

    async def get_catches(self) -> list[CatchRecord]:
        ...

    async def get_fish(self) -> list[Fish]:
        ...


class AchievementStore(Protocol):
    """Read and upsert access to user achievement records"""

    async def get_user_achievements(self) -> list[UserAchievement]:
        ...

    async def get_user_achievement(self, achievement_id: str) -> Optional[UserAchievement]:
        ...

    async def upsert_user_achievement(self, user_achievement: UserAchievement) -> None:
        ...


class InMemoryStore:
    """In-memory catch log and achievement store (not persisted)"""

    def __init__(
        self,
        catches: Optional[Iterable[CatchRecord]] = None,
        fish: Optional[Iterable[Fish]] = None,
    ):
        self.catches: list[CatchRecord] = list(catches or [])
        self.fish: list[Fish] = list(fish or [])
        self._user_achievements: dict[str, UserAchievement] = {}

    # Catch log

    def add_catch(self, catch: CatchRecord) -> None:
        """Append a catch to the log"""
        self.catches.append(catch)

    def remove_catch(self, catch_id: str) -> None:
        """Delete a catch from the log"""
        self.catches = [c for c in self.catches if c.id != catch_id]

    async def get_catches(self) -> list[CatchRecord]:
        return list(self.catches)

    async def get_fish(self) -> list[Fish]:
        return list(self.fish)

    # Achievement records

    async def get_user_achievements(self) -> list[UserAchievement]:
        return [ua.model_copy() for ua in self._user_achievements.values()]

    async def get_user_achievement(self, achievement_id: str) -> Optional[UserAchievement]:
        user_achievement = self._user_achievements.get(achievement_id)
        return user_achievement.model_copy() if user_achievement else None

    async def upsert_user_achievement(self, user_achievement: UserAchievement) -> None:
        self._user_achievements[user_achievement.achievement_id] = user_achievement.model_copy()
        logger.debug(f"Saved user achievement {user_achievement.achievement_id} to memory store")

    def reset(self) -> None:
        """Drop every achievement record (full data reset)"""
        self._user_achievements.clear()
