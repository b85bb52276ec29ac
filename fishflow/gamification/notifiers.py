"""
Unlock notifiers

The notification queue only knows the AchievementNotifier port. The host
application plugs in its own presenter (a toast, a push message, ...);
LoggingNotifier is the fallback when nothing richer is available.
"""

from typing import Awaitable, Callable, Optional, Protocol, Union
import inspect
import logging

from fishflow.exceptions import NotificationError
from fishflow.gamification.catalog import get_achievement
from fishflow.models.achievement import Achievement, AchievementTier, AchievementUnlock

logger = logging.getLogger(__name__)

TIER_EMOJI = {
    AchievementTier.GOLD: "🥇",
    AchievementTier.SILVER: "🥈",
    AchievementTier.BRONZE: "🥉",
}


class AchievementNotifier(Protocol):
    """Presents one unlock to the user"""

    def present(
        self,
        achievement_id: str,
        tier: AchievementTier,
        is_upgrade: bool,
        previous_tier: Optional[AchievementTier] = None,
    ) -> Union[None, Awaitable[None]]:
        ...


async def deliver(notifier: AchievementNotifier, unlock: AchievementUnlock) -> None:
    """
    Call notifier.present for an unlock, awaiting it if it is async

    Raises:
        NotificationError: If the notifier fails
    """
    try:
        result = notifier.present(
            unlock.achievement_id,
            unlock.tier,
            unlock.is_upgrade,
            unlock.previous_tier,
        )
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        raise NotificationError(
            f"Failed to present unlock {unlock.achievement_id}: {e}",
            achievement_id=unlock.achievement_id,
            operation="present_unlock",
            cause=e
        ) from e


class CallbackNotifier:
    """Adapts a plain (sync or async) function to the notifier port"""

    def __init__(self, callback: Callable[..., Union[None, Awaitable[None]]]):
        self.callback = callback

    def present(self, achievement_id, tier, is_upgrade, previous_tier=None):
        return self.callback(achievement_id, tier, is_upgrade, previous_tier)


class LoggingNotifier:
    """Writes a formatted unlock message to the log"""

    def __init__(self, catalog: tuple[Achievement, ...]):
        self.catalog = catalog

    def present(self, achievement_id, tier, is_upgrade, previous_tier=None) -> None:
        achievement = get_achievement(self.catalog, achievement_id)
        if achievement is None:
            logger.warning(f"Unlock for unknown achievement {achievement_id}, not shown")
            return

        unlock = AchievementUnlock(
            achievement_id=achievement_id,
            tier=tier,
            is_new=not is_upgrade,
            is_upgrade=is_upgrade,
            previous_tier=previous_tier,
        )
        title, message = format_unlock_message(achievement, unlock)
        logger.info(f"{title} {message}")


def format_unlock_message(achievement: Achievement, unlock: AchievementUnlock) -> tuple[str, str]:
    """
    Format an unlock for display

    Args:
        achievement: Catalog entry that was unlocked
        unlock: Unlock from the engine

    Returns:
        (title, message) tuple
    """
    tier = AchievementTier(unlock.tier)
    tier_text = f"{TIER_EMOJI[tier]} {tier.value.capitalize()}"
    reward_text = getattr(achievement.tiers, tier.value).reward

    if unlock.is_upgrade and unlock.previous_tier is not None:
        previous = AchievementTier(unlock.previous_tier)
        title = f"⬆️ {tier.value.capitalize()} Unlocked!"
        message = f"{achievement.name}\n{TIER_EMOJI[previous]} {previous.value.capitalize()} → {tier_text}"
    else:
        title = "🏆 Achievement Unlocked!"
        message = f"{achievement.name}\n{tier_text}"

    if reward_text:
        message += f"\n🎁 {reward_text}"

    return title, message
