"""Shared interface for collectors."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class CollectorType(Enum):
    """Kind of data source a collector reads from."""

    GIT = "git"
    GITHUB = "github"


class DataCollector(ABC):
    """A collector is pointed at a source by an identifying string, then
    exposes typed getters over what it read."""

    @abstractmethod
    def collect(self, identifier: str) -> Any:
        """Read the source named by ``identifier``, replacing prior data."""
        pass

    @property
    @abstractmethod
    def type(self) -> CollectorType:
        pass

    def __str__(self) -> str:
        return type(self).__name__
