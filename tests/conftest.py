"""Global test fixtures and utilities for fishflow tests"""
import pytest
from unittest.mock import AsyncMock

from fishflow.db.store import InMemoryStore
from fishflow.gamification.engine import AchievementEngine
from fishflow.gamification.notification_queue import UnlockNotificationQueue
from fishflow.models.catch import Fish, FishRarity


# ============================================================================
# Catch Log Fixtures
# ============================================================================

@pytest.fixture
def fish_catalog():
    """Small fish catalog covering every rarity"""
    return [
        Fish(id="bream", name="Yellowfin Bream", rarity=FishRarity.COMMON),
        Fish(id="flathead", name="Dusky Flathead", rarity=FishRarity.COMMON),
        Fish(id="jewfish", name="Mulloway", rarity=FishRarity.RARE),
        Fish(id="cod", name="Murray Cod", rarity=FishRarity.EPIC),
        Fish(id="barra", name="Barramundi", rarity=FishRarity.LEGENDARY),
    ]


@pytest.fixture
def memory_store(fish_catalog):
    """Empty in-memory catch log and achievement store"""
    return InMemoryStore(fish=fish_catalog)


# ============================================================================
# Notification Fixtures
# ============================================================================

class RecordingNotifier:
    """Notifier that remembers every call"""

    def __init__(self):
        self.calls = []

    async def present(self, achievement_id, tier, is_upgrade, previous_tier=None):
        self.calls.append((achievement_id, tier, is_upgrade, previous_tier))


@pytest.fixture
def recording_notifier():
    return RecordingNotifier()


@pytest.fixture
def fake_sleep():
    """Stand-in for asyncio.sleep that returns immediately"""
    return AsyncMock()


@pytest.fixture
def notification_queue(recording_notifier, fake_sleep):
    """Queue delivering to recording_notifier without real delays"""
    return UnlockNotificationQueue(recording_notifier, delay=1.5, sleep=fake_sleep)


@pytest.fixture
def engine(memory_store, notification_queue):
    """Engine over the in-memory store with the default catalog"""
    return AchievementEngine(
        store=memory_store,
        catch_log=memory_store,
        notification_queue=notification_queue,
    )
