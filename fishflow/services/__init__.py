"""
Service Layer Package

Wires the achievement engine to storage and notification delivery.
"""

from fishflow.services.container import ServiceContainer, build_in_memory_container, build_postgres_container

__all__ = [
    "ServiceContainer",
    "build_in_memory_container",
    "build_postgres_container",
]
