"""In-memory stores populated by one history walk.

The three stores are bundled in a ``HistoryGeneration`` so a collector can
swap the whole set in a single assignment once the walk has finished.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .base import ChangeRecord, CommitRecord


class ChangeSetStore:
    """Change records keyed by post-change content identifier.

    Backs the single-identifier lookups only; adjacent diffs are answered
    from ``AdjacentDiffCache``.
    """

    def __init__(self) -> None:
        self._changes: dict[str, ChangeRecord] = {}

    def add(self, change: ChangeRecord) -> None:
        # Identical content introduced by unrelated commits shares an id;
        # the record written last wins. The walk runs newest first, so that
        # is the oldest commit's record.
        self._changes[change.change_id] = change

    def add_all(self, changes: Iterable[ChangeRecord]) -> None:
        for change in changes:
            self.add(change)

    def get(self, change_id: str) -> ChangeRecord | None:
        return self._changes.get(change_id)

    def change_type(self, change_id: str) -> str:
        change = self._changes.get(change_id)
        return change.kind.name if change else ""

    def change_path(self, change_id: str) -> str:
        change = self._changes.get(change_id)
        return change.path if change else ""

    def __contains__(self, change_id: object) -> bool:
        return change_id in self._changes

    def __len__(self) -> int:
        return len(self._changes)


class CommitIndex:
    """Commit records keyed by SHA, with chronological extremum queries."""

    def __init__(self) -> None:
        self._commits: dict[str, CommitRecord] = {}
        self._chronological: list[CommitRecord] | None = None

    def add(self, commit: CommitRecord) -> None:
        self._commits[commit.sha] = commit
        self._chronological = None

    def get(self, sha: str) -> CommitRecord | None:
        return self._commits.get(sha)

    def ids(self) -> frozenset[str]:
        return frozenset(self._commits)

    def most_recent(self) -> CommitRecord | None:
        """Return the commit with the latest timestamp.

        Ties are broken by the greatest SHA.
        """
        ordered = self._ordered()
        return ordered[-1] if ordered else None

    def least_recent(self) -> CommitRecord | None:
        """Return the commit with the earliest timestamp.

        Ties are broken by the smallest SHA.
        """
        ordered = self._ordered()
        return ordered[0] if ordered else None

    def _ordered(self) -> list[CommitRecord]:
        if self._chronological is None:
            self._chronological = sorted(
                self._commits.values(), key=lambda c: (c.timestamp, c.sha)
            )
        return self._chronological

    def __contains__(self, sha: object) -> bool:
        return sha in self._commits

    def __iter__(self) -> Iterator[CommitRecord]:
        return iter(self._commits.values())

    def __len__(self) -> int:
        return len(self._commits)


class AdjacentDiffCache:
    """Each commit's change records against its first parent, in diff order.

    Records are kept per commit, so a blob id shared with another commit (or
    the null id shared by several deletions) never leaks across diffs.

    An empty tuple is a cached value (root commit, or a failed comparison);
    ``None`` from ``get`` means the commit was never walked.
    """

    def __init__(self) -> None:
        self._diffs: dict[str, tuple[ChangeRecord, ...]] = {}

    def put(self, sha: str, changes: Iterable[ChangeRecord]) -> None:
        self._diffs[sha] = tuple(changes)

    def get(self, sha: str) -> tuple[ChangeRecord, ...] | None:
        return self._diffs.get(sha)

    def __contains__(self, sha: object) -> bool:
        return sha in self._diffs

    def __len__(self) -> int:
        return len(self._diffs)


@dataclass
class HistoryGeneration:
    """One collection cycle's worth of commits, changes, and adjacent diffs."""

    commits: CommitIndex = field(default_factory=CommitIndex)
    changes: ChangeSetStore = field(default_factory=ChangeSetStore)
    adjacent_diffs: AdjacentDiffCache = field(default_factory=AdjacentDiffCache)
