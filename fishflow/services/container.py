"""
Service Container - Dependency Injection Container

Simple DI container wiring the achievement engine to its collaborators.
Uses lazy loading to only instantiate services when first accessed.
The container is created explicitly by the host application; there is
no process-wide instance.
"""

from dataclasses import dataclass, field
from typing import Optional
from zoneinfo import ZoneInfo
import logging

from fishflow import config

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for the achievement engine.

    Services are lazy-loaded on first access via properties.
    Infrastructure dependencies (store, catch log, notifier) are injected.
    """

    # Infrastructure dependencies (injected)
    store: object  # AchievementStore implementation
    catch_log: object  # CatchLog implementation
    notifier: Optional[object] = None  # AchievementNotifier (defaults to LoggingNotifier)
    notification_delay: float = config.ACHIEVEMENT_NOTIFICATION_DELAY
    serialize_evaluations: bool = config.SERIALIZE_EVALUATIONS
    local_tz: Optional[ZoneInfo] = None

    # Services (lazy-loaded via properties)
    _catalog: Optional[tuple] = field(default=None, init=False, repr=False)
    _notification_queue: Optional[object] = field(default=None, init=False, repr=False)
    _achievement_engine: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def catalog(self):
        """Get the achievement catalog (lazy-loaded)"""
        if self._catalog is None:
            from fishflow.gamification.catalog import load_catalog
            self._catalog = load_catalog()
        return self._catalog

    @property
    def notification_queue(self):
        """Get UnlockNotificationQueue instance (lazy-loaded)"""
        if self._notification_queue is None:
            from fishflow.gamification.notification_queue import UnlockNotificationQueue
            from fishflow.gamification.notifiers import LoggingNotifier

            notifier = self.notifier or LoggingNotifier(self.catalog)
            self._notification_queue = UnlockNotificationQueue(notifier, delay=self.notification_delay)
            logger.debug("UnlockNotificationQueue instantiated")
        return self._notification_queue

    @property
    def achievement_engine(self):
        """Get AchievementEngine instance (lazy-loaded)"""
        if self._achievement_engine is None:
            from fishflow.gamification.engine import AchievementEngine
            self._achievement_engine = AchievementEngine(
                store=self.store,
                catch_log=self.catch_log,
                notification_queue=self.notification_queue,
                catalog=self.catalog,
                local_tz=self.local_tz,
                serialize_evaluations=self.serialize_evaluations,
            )
            logger.debug("AchievementEngine instantiated")
        return self._achievement_engine


def build_in_memory_container(catches=None, fish=None, notifier=None, **kwargs) -> ServiceContainer:
    """
    Build a container backed by an InMemoryStore

    Args:
        catches: Initial catch log
        fish: Fish catalog
        notifier: Optional notifier (defaults to LoggingNotifier)
        **kwargs: Extra ServiceContainer fields

    Returns:
        ServiceContainer whose store and catch_log are the same InMemoryStore
    """
    from fishflow.db.store import InMemoryStore

    store = InMemoryStore(catches=catches, fish=fish)
    return ServiceContainer(store=store, catch_log=store, notifier=notifier, **kwargs)


def build_postgres_container(notifier=None, **kwargs) -> ServiceContainer:
    """
    Build a container backed by PostgreSQL

    The caller must have initialized fishflow.db.connection.db first.
    """
    from fishflow.db.postgres_store import PostgresAchievementStore, PostgresCatchLog

    return ServiceContainer(
        store=PostgresAchievementStore(),
        catch_log=PostgresCatchLog(),
        notifier=notifier,
        **kwargs
    )
