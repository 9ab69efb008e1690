"""Static registry of collector implementations.

Collectors are registered explicitly by type; nothing is discovered at
runtime. Built-in factories import their implementation lazily so that
creating a git collector does not import httpx, and vice versa.
"""

from collections.abc import Callable

import structlog

from .base import CollectorType, DataCollector

logger = structlog.get_logger(__name__)

CollectorFactory = Callable[[], DataCollector]


class UnknownCollectorError(LookupError):
    """No collector is registered under the requested type."""

    pass


class CollectorRegistry:
    """Maps collector types to factories producing fresh instances."""

    def __init__(self) -> None:
        self._factories: dict[CollectorType, CollectorFactory] = {}

    def register(self, collector_type: CollectorType, factory: CollectorFactory) -> None:
        """Register (or replace) the factory for a collector type."""
        if collector_type in self._factories:
            logger.debug("collector_replaced", type=collector_type.name)
        self._factories[collector_type] = factory

    def create(self, collector_type: CollectorType | str) -> DataCollector:
        """Create a new collector.

        Args:
            collector_type: A CollectorType or its name, case-insensitive

        Raises:
            UnknownCollectorError: If nothing is registered for the type
        """
        resolved = self._resolve(collector_type)
        factory = self._factories.get(resolved)
        if factory is None:
            raise UnknownCollectorError(f"No collector registered for {resolved.name}")
        return factory()

    def types(self) -> list[CollectorType]:
        return list(self._factories)

    @staticmethod
    def _resolve(collector_type: CollectorType | str) -> CollectorType:
        if isinstance(collector_type, CollectorType):
            return collector_type
        try:
            return CollectorType[collector_type.strip().upper()]
        except KeyError as e:
            raise UnknownCollectorError(
                f"Unknown collector type: {collector_type!r}"
            ) from e


def _create_git_collector() -> DataCollector:
    from gitcollect.git.collector import GitCollector

    return GitCollector()


def _create_github_collector() -> DataCollector:
    from gitcollect.github.collector import GitHubCollector

    return GitHubCollector()


def default_registry() -> CollectorRegistry:
    """Build a registry holding the built-in collectors."""
    registry = CollectorRegistry()
    registry.register(CollectorType.GIT, _create_git_collector)
    registry.register(CollectorType.GITHUB, _create_github_collector)
    return registry


# Module-level registry with the built-in collectors
registry = default_registry()


def create_collector(collector_type: CollectorType | str) -> DataCollector:
    """Create a collector from the module-level registry."""
    return registry.create(collector_type)
