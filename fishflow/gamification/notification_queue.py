"""Sequential delivery of unlock notifications"""
import logging
import asyncio
from collections import deque
from typing import Awaitable, Callable, Iterable, Optional

from fishflow.exceptions import NotificationError
from fishflow.gamification.notifiers import AchievementNotifier, deliver
from fishflow.models.achievement import AchievementUnlock
from fishflow.observability.metrics import (
    achievement_notifications_total,
    achievement_notification_queue_depth,
)

logger = logging.getLogger(__name__)


class UnlockNotificationQueue:
    """
    FIFO of pending unlocks with a single consumer.

    enqueue() appends and starts a drain task if none is running. The drain
    task presents one unlock, waits `delay` seconds, and moves on to the
    next, so two notifications are never shown at the same time. Unlocks
    enqueued while a drain is running are picked up by that same task.
    """

    def __init__(
        self,
        notifier: AchievementNotifier,
        delay: float = 1.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the queue.

        Args:
            notifier: Presents each unlock
            delay: Seconds to wait after each notification (default: 1.5s)
            sleep: Awaitable sleep function, replaceable in tests
        """
        self.notifier = notifier
        self.delay = delay
        self._sleep = sleep
        self._pending: deque[AchievementUnlock] = deque()
        self._draining = False
        self._task: Optional[asyncio.Task] = None

    @property
    def is_draining(self) -> bool:
        return self._draining

    @property
    def pending(self) -> int:
        """Unlocks not yet handed to the notifier"""
        return len(self._pending)

    def enqueue(self, unlocks: Iterable[AchievementUnlock]) -> None:
        """Append unlocks in order; must be called from the running event loop"""
        self._pending.extend(unlocks)
        achievement_notification_queue_depth.set(len(self._pending))

        if self._draining or not self._pending:
            return

        # Flag is set before the task first runs, so a second enqueue in the
        # same tick cannot start another consumer
        self._draining = True
        self._task = asyncio.create_task(self._drain())

    async def _drain(self) -> None:
        """Deliver pending unlocks one by one until the queue is empty"""
        try:
            while self._pending:
                unlock = self._pending.popleft()
                achievement_notification_queue_depth.set(len(self._pending))

                try:
                    await deliver(self.notifier, unlock)
                    achievement_notifications_total.labels(status="success").inc()
                    logger.debug(f"Presented unlock {unlock.achievement_id} ({unlock.tier.value})")
                except NotificationError as e:
                    achievement_notifications_total.labels(status="error").inc()
                    logger.warning(f"Skipping unlock {e.achievement_id} after notifier failure (request_id={e.request_id})")

                # Wait before next notification so they don't overlap
                await self._sleep(self.delay)
        finally:
            self._draining = False

    async def wait_until_idle(self) -> None:
        """Wait for the running drain task, if any, to finish"""
        while self._task is not None and not self._task.done():
            await asyncio.shield(self._task)
