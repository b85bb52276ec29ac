"""
Prometheus metrics definitions for the achievement engine.

Metrics are organized by category:
- Evaluation metrics: passes per trigger, pass duration
- Unlock metrics: unlocks by tier and kind (new/upgrade)
- Persistence metrics: failed writes
- Notification metrics: deliveries and queue depth

The host application decides whether and where to expose them.
"""

import logging
from prometheus_client import Counter, Gauge, Histogram

logger = logging.getLogger(__name__)

# =============================================================================
# Evaluation Metrics
# =============================================================================

achievement_evaluations_total = Counter(
    "achievement_evaluations_total",
    "Total achievement evaluation passes",
    ["trigger"],  # trigger: catch/equipment/login
)

achievement_evaluation_duration_seconds = Histogram(
    "achievement_evaluation_duration_seconds",
    "Time to evaluate every achievement once",
    ["trigger"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
)

# =============================================================================
# Unlock Metrics
# =============================================================================

achievement_unlocks_total = Counter(
    "achievement_unlocks_total",
    "Total achievement tier unlocks",
    ["tier", "kind"],  # kind: new/upgrade
)

# =============================================================================
# Persistence Metrics
# =============================================================================

achievement_persistence_failures_total = Counter(
    "achievement_persistence_failures_total",
    "Failed achievement store writes",
    ["operation"],  # operation: unlock/progress/viewed
)

# =============================================================================
# Notification Metrics
# =============================================================================

achievement_notifications_total = Counter(
    "achievement_notifications_total",
    "Unlock notifications handed to the notifier",
    ["status"],  # status: success/error
)

achievement_notification_queue_depth = Gauge(
    "achievement_notification_queue_depth",
    "Unlock notifications waiting to be delivered",
)
