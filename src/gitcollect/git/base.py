"""Base classes, dataclasses, and types for git history collection."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import git

# Post-change identifier git reports for a deleted file
NULL_SHA = "0" * 40

# Error classes


class GitCollectorError(Exception):
    """Base exception for git collection errors."""

    pass


class RepositoryOpenError(GitCollectorError):
    """Path does not contain a valid git repository."""

    pass


class ComparisonError(GitCollectorError):
    """Tree comparison between two commits failed."""

    pass


class HistoryWalkError(GitCollectorError):
    """Commit graph traversal failed after the repository was opened."""

    pass


# Data classes


class ChangeKind(Enum):
    """Kind of a file-level change, matching git's diff status letters."""

    ADD = "A"
    MODIFY = "M"
    DELETE = "D"
    RENAME = "R"
    COPY = "C"
    OTHER = "X"

    @classmethod
    def from_status(cls, status: str | None) -> "ChangeKind":
        """Map a git status letter to a kind; unknown letters become OTHER."""
        if not status:
            return cls.OTHER
        for kind in cls:
            if kind is not cls.OTHER and kind.value == status[0].upper():
                return kind
        return cls.OTHER


@dataclass(frozen=True)
class CommitRecord:
    """A commit as read from the repository."""

    sha: str
    timestamp: int  # Committer time, seconds since epoch
    parents: tuple[str, ...] = ()
    committer_name: str = ""
    committer_email: str = ""
    message: str = ""

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def first_parent(self) -> str | None:
        return self.parents[0] if self.parents else None


@dataclass(frozen=True)
class ChangeRecord:
    """A single file change between two tree snapshots.

    ``change_id`` is the blob SHA of the file after the change, or
    ``NULL_SHA`` for a deletion. ``path`` is empty for deletions and
    ``old_path`` is empty for additions.
    """

    change_id: str
    kind: ChangeKind
    path: str
    old_path: str = ""


@dataclass
class ComparisonFailure:
    """A commit whose adjacent diff could not be computed."""

    sha: str
    error_type: str
    message: str


@dataclass
class CollectionStats:
    """Statistics from one collection cycle."""

    commits_collected: int = 0
    changes_recorded: int = 0
    failures: list[ComparisonFailure] = field(default_factory=list)
    walk_completed: bool = True
    duration_ms: int = 0


# Abstract interfaces


class VcsEngine(ABC):
    """Narrow interface onto the version-control engine."""

    @abstractmethod
    def open_repository(self, path: str | Path) -> git.Repo:
        """Open the repository at a working-copy root or ``.git`` directory.

        Raises:
            RepositoryOpenError: If path is not a valid git repository
        """
        pass

    @abstractmethod
    def walk_commits(self, repo: git.Repo, rev: str = "HEAD") -> Iterator[CommitRecord]:
        """Lazily yield every commit reachable from ``rev``, newest first.

        An empty repository yields nothing.

        Raises:
            HistoryWalkError: If traversal fails part way through
        """
        pass

    @abstractmethod
    def diff_trees(
        self, repo: git.Repo, old_sha: str, new_sha: str
    ) -> list[ChangeRecord]:
        """Compare two commits' trees, old against new.

        Returns:
            Change records in the engine's order (sorted by path)

        Raises:
            ComparisonError: If either identifier does not resolve to a commit
                or the comparison fails
        """
        pass
