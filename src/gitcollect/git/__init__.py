"""Git history collection.

Walks a repository's commit graph once, indexes every commit, caches each
commit's diff against its first parent, and resolves diffs between
arbitrary commit pairs.
"""

from .base import (
    NULL_SHA,
    ChangeKind,
    ChangeRecord,
    CollectionStats,
    CommitRecord,
    ComparisonError,
    ComparisonFailure,
    GitCollectorError,
    HistoryWalkError,
    RepositoryOpenError,
    VcsEngine,
)
from .collector import GitCollector
from .engine import GitPythonEngine
from .stores import AdjacentDiffCache, ChangeSetStore, CommitIndex, HistoryGeneration

__all__ = [
    # Classes
    "GitCollector",
    "GitPythonEngine",
    "VcsEngine",
    # Stores
    "AdjacentDiffCache",
    "ChangeSetStore",
    "CommitIndex",
    "HistoryGeneration",
    # Data classes
    "ChangeKind",
    "ChangeRecord",
    "CollectionStats",
    "CommitRecord",
    "ComparisonFailure",
    "NULL_SHA",
    # Errors
    "GitCollectorError",
    "RepositoryOpenError",
    "ComparisonError",
    "HistoryWalkError",
]
