"""Collector interface and registry.

    from gitcollect.collectors import create_collector

    collector = create_collector("git")
    collector.collect("/path/to/repo")
"""

from .base import CollectorType, DataCollector
from .registry import (
    CollectorRegistry,
    UnknownCollectorError,
    create_collector,
    default_registry,
    registry,
)

__all__ = [
    "CollectorRegistry",
    "CollectorType",
    "DataCollector",
    "UnknownCollectorError",
    "create_collector",
    "default_registry",
    "registry",
]
