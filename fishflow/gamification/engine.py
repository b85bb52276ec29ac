"""
Achievement Engine

Recomputes every achievement from the full catch log whenever something
happens (a catch was logged, gear changed, the app was opened), persists the
changes, and queues a notification for every tier that went up.

Per achievement, per pass:
- progress comes from the strategy registry (progress.py)
- the eligible tier comes from the thresholds (tiers.py)
- a higher tier than stored is an unlock: saved with is_viewed reset and
  queued for notification
- a changed progress value without a tier change is saved silently
- anything else is left alone, so a second pass over the same log writes
  nothing and unlocks nothing

Tiers only ever go up. Store failures are logged and skipped; they never
reach the caller.
"""

from contextlib import nullcontext
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Union
from zoneinfo import ZoneInfo
import asyncio
import logging
import time

from fishflow.db.store import AchievementStore, CatchLog
from fishflow.exceptions import ValidationError
from fishflow.gamification.catalog import load_catalog
from fishflow.gamification.notification_queue import UnlockNotificationQueue
from fishflow.gamification.progress import (
    PROGRESS_STRATEGIES,
    ProgressContext,
    ProgressStrategy,
    calculate_progress,
)
from fishflow.gamification.tiers import resolve_tier, tier_ordinal
from fishflow.models.achievement import (
    Achievement,
    AchievementTrigger,
    AchievementUnlock,
    UserAchievement,
)
from fishflow.models.catch import CatchRecord
from fishflow.observability.metrics import (
    achievement_evaluation_duration_seconds,
    achievement_evaluations_total,
    achievement_persistence_failures_total,
    achievement_unlocks_total,
)
from fishflow.utils.datetime_helpers import now_utc

logger = logging.getLogger(__name__)


class AchievementEngine:
    """
    Evaluates achievements and tracks their view state.

    Holds its catalog, strategy registry and notification queue as instance
    state; storage and notification delivery are injected.
    """

    def __init__(
        self,
        store: AchievementStore,
        catch_log: CatchLog,
        notification_queue: UnlockNotificationQueue,
        catalog: Optional[Sequence[Achievement]] = None,
        strategies: Optional[Dict[str, ProgressStrategy]] = None,
        local_tz: Optional[ZoneInfo] = None,
        serialize_evaluations: bool = True,
        clock: Callable[[], datetime] = now_utc,
    ):
        """
        Initialize the engine.

        Args:
            store: Reads and upserts user achievement records
            catch_log: Reads the catch log and fish catalog
            notification_queue: Receives each pass's unlocks
            catalog: Achievements to evaluate, in order (defaults to the built-in catalog)
            strategies: Progress strategy registry (defaults to PROGRESS_STRATEGIES)
            local_tz: Timezone for calendar days and hours
            serialize_evaluations: Run overlapping evaluate() calls one after another
            clock: Source of unlocked_at timestamps
        """
        self.store = store
        self.catch_log = catch_log
        self.notification_queue = notification_queue
        self.catalog = tuple(catalog) if catalog is not None else load_catalog()
        self.strategies = dict(strategies) if strategies is not None else dict(PROGRESS_STRATEGIES)
        self.local_tz = local_tz
        self._clock = clock
        self._evaluation_lock = asyncio.Lock() if serialize_evaluations else None
        logger.debug(f"AchievementEngine initialized with {len(self.catalog)} achievements")

    # ============================================
    # Trigger Dispatcher
    # ============================================

    async def evaluate(
        self,
        trigger: Union[AchievementTrigger, str],
        payload: Optional[Any] = None
    ) -> List[AchievementUnlock]:
        """
        Re-evaluate every achievement in the catalog

        Every trigger re-evaluates everything; the trigger and payload are
        only recorded for logging and metrics.

        Args:
            trigger: 'catch', 'equipment' or 'login'
            payload: Optional trigger data (e.g. the catch just logged)

        Returns:
            Unlocks of this pass in catalog order (already queued for notification)

        Raises:
            ValidationError: If trigger is not a known trigger. This is the
                only error that reaches the caller: it is a misuse of the
                API, raised before any data is read. Load, strategy and store
                failures during the pass are logged and never propagate.
        """
        try:
            trigger = AchievementTrigger(trigger)
        except ValueError:
            raise ValidationError(
                f"Unknown achievement trigger: {trigger}",
                field="trigger",
                value=trigger,
                operation="evaluate_achievements"
            )

        lock = self._evaluation_lock if self._evaluation_lock is not None else nullcontext()
        async with lock:
            started = time.perf_counter()
            unlocks = await self._evaluate_all(trigger, payload)
            achievement_evaluation_duration_seconds.labels(trigger=trigger.value).observe(
                time.perf_counter() - started
            )

        achievement_evaluations_total.labels(trigger=trigger.value).inc()

        if unlocks:
            self.notification_queue.enqueue(unlocks)
            logger.info(
                f"Achievement check ({trigger.value}) unlocked: "
                + ", ".join(f"{u.achievement_id}={u.tier.value}" for u in unlocks)
            )

        return unlocks

    async def check_after_catch(self, catch: CatchRecord) -> List[AchievementUnlock]:
        """Evaluate after a catch was logged"""
        return await self.evaluate(AchievementTrigger.CATCH, catch)

    async def check_after_equipment_change(self, payload: Optional[Any] = None) -> List[AchievementUnlock]:
        """Evaluate after gear was added or edited"""
        return await self.evaluate(AchievementTrigger.EQUIPMENT, payload)

    async def check_on_login(self) -> List[AchievementUnlock]:
        """Evaluate when the app starts"""
        return await self.evaluate(AchievementTrigger.LOGIN)

    async def manual_check(self) -> List[AchievementUnlock]:
        """Evaluate on demand (debug and settings screens)"""
        return await self.evaluate(AchievementTrigger.LOGIN)

    # ============================================
    # Unlock Detector & Updater
    # ============================================

    async def _evaluate_all(self, trigger: AchievementTrigger, payload: Optional[Any]) -> List[AchievementUnlock]:
        """One pass over the catalog"""
        try:
            catches = await self.catch_log.get_catches()
            fish = await self.catch_log.get_fish()
            stored = {ua.achievement_id: ua for ua in await self.store.get_user_achievements()}
        except Exception as e:
            logger.error(f"Achievement check ({trigger.value}) skipped, could not load data: {e}", exc_info=True)
            return []

        logger.debug(
            f"Evaluating {len(self.catalog)} achievements against {len(catches)} catches "
            f"(trigger={trigger.value}, payload={type(payload).__name__ if payload is not None else None})"
        )

        context = ProgressContext.from_fish(fish, self.local_tz)
        unlocks: List[AchievementUnlock] = []

        for achievement in self.catalog:
            unlock = await self._evaluate_one(achievement, catches, context, stored.get(achievement.id))
            if unlock is not None:
                unlocks.append(unlock)

        return unlocks

    async def _evaluate_one(
        self,
        achievement: Achievement,
        catches: Sequence[CatchRecord],
        context: ProgressContext,
        existing: Optional[UserAchievement]
    ) -> Optional[AchievementUnlock]:
        """Recompute one achievement, persist changes, return the unlock if any"""
        try:
            progress = calculate_progress(achievement.id, catches, context, self.strategies)
        except Exception as e:
            logger.error(f"Progress calculation failed for {achievement.id}: {e}", exc_info=True)
            return None

        current_tier = existing.tier if existing else None
        new_tier = resolve_tier(achievement.tiers, progress)

        if tier_ordinal(new_tier) > tier_ordinal(current_tier):
            unlock = AchievementUnlock(
                achievement_id=achievement.id,
                tier=new_tier,
                is_new=current_tier is None,
                is_upgrade=current_tier is not None,
                previous_tier=current_tier,
            )
            # First unlock time is kept across upgrades
            unlocked_at = existing.unlocked_at if existing and existing.unlocked_at else self._clock()
            record = UserAchievement(
                achievement_id=achievement.id,
                progress=progress,
                tier=new_tier,
                unlocked_at=unlocked_at,
                is_viewed=False,
            )
            if not await self._save(record, operation="unlock"):
                return None

            achievement_unlocks_total.labels(
                tier=new_tier.value,
                kind="upgrade" if unlock.is_upgrade else "new"
            ).inc()
            return unlock

        if existing is None:
            await self._save(UserAchievement(achievement_id=achievement.id, progress=progress), operation="progress")
        elif progress != existing.progress:
            await self._save(existing.model_copy(update={"progress": progress}), operation="progress")

        return None

    async def _save(self, record: UserAchievement, operation: str) -> bool:
        """Upsert one record; failures are logged and reported as False"""
        try:
            await self.store.upsert_user_achievement(record)
            return True
        except Exception as e:
            achievement_persistence_failures_total.labels(operation=operation).inc()
            logger.error(
                f"Failed to save achievement {record.achievement_id} ({operation}): {e}",
                exc_info=True
            )
            return False

    # ============================================
    # View-State Tracker
    # ============================================

    async def mark_as_viewed(self, achievement_id: str) -> bool:
        """
        Mark one achievement as seen

        Only is_viewed changes, and only on this achievement's record.

        Returns:
            True if the record was updated
        """
        try:
            record = await self.store.get_user_achievement(achievement_id)
        except Exception as e:
            logger.error(f"Failed to load achievement {achievement_id}: {e}", exc_info=True)
            return False

        if record is None:
            logger.debug(f"No progress record for {achievement_id}, nothing to mark as viewed")
            return False

        if record.is_viewed:
            return True

        return await self._save(record.model_copy(update={"is_viewed": True}), operation="viewed")
