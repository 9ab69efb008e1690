"""Commit history index and adjacent-diff cache for one git repository."""

from __future__ import annotations

import time
from pathlib import Path
from types import TracebackType

import git
import structlog

from gitcollect.collectors.base import CollectorType, DataCollector

from .base import (
    ChangeRecord,
    CollectionStats,
    ComparisonError,
    ComparisonFailure,
    HistoryWalkError,
    VcsEngine,
)
from .stores import HistoryGeneration

logger = structlog.get_logger(__name__)


class GitCollector(DataCollector):
    """Collects the commit history of a local git repository.

    ``collect`` walks the commit graph once, indexing every commit and
    precomputing its diff against its first parent. Queries afterwards are
    reads against that data, except comparisons between commits that are not
    parent and child, which are computed on demand and not memoized.

    The collector is reusable: each ``collect`` replaces all prior data. It is
    not safe to call ``collect`` concurrently with queries on the same
    instance.
    """

    def __init__(
        self,
        engine: VcsEngine | None = None,
        revision: str | None = None,
    ) -> None:
        from gitcollect.config import settings

        if engine is None:
            from .engine import GitPythonEngine

            engine = GitPythonEngine(detect_copies=settings.collector.detect_copies)

        self.engine = engine
        self.revision = revision or settings.collector.revision
        self._repo: git.Repo | None = None
        self._generation = HistoryGeneration()

    @property
    def type(self) -> CollectorType:
        return CollectorType.GIT

    def collect(self, identifier: str | Path) -> CollectionStats:
        """Walk the full history of the repository at ``identifier``.

        Args:
            identifier: Working-copy root or ``.git`` directory

        Returns:
            Statistics for the walk. Commits whose adjacent diff failed are
            listed in ``failures`` and recorded with an empty diff.

        Raises:
            RepositoryOpenError: If the path is not a valid repository. Prior
                data is left untouched.
        """
        repo = self.engine.open_repository(identifier)
        start_time = time.time()

        generation, stats = self._walk(repo)

        # Publish only once the walk is over
        previous_repo = self._repo
        self._repo = repo
        self._generation = generation
        if previous_repo is not None and previous_repo is not repo:
            previous_repo.close()

        stats.duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "collection_finished",
            repo_path=str(identifier),
            commits=stats.commits_collected,
            changes=stats.changes_recorded,
            failures=len(stats.failures),
            walk_completed=stats.walk_completed,
            duration_ms=stats.duration_ms,
        )
        return stats

    def _walk(self, repo: git.Repo) -> tuple[HistoryGeneration, CollectionStats]:
        generation = HistoryGeneration()
        stats = CollectionStats()

        try:
            for commit in self.engine.walk_commits(repo, self.revision):
                generation.commits.add(commit)
                stats.commits_collected += 1

                if commit.is_root:
                    generation.adjacent_diffs.put(commit.sha, ())
                    continue

                # Merge commits are compared against their first parent only
                try:
                    changes = self.engine.diff_trees(
                        repo, commit.parents[0], commit.sha
                    )
                except ComparisonError as e:
                    logger.warning(
                        "adjacent_diff_failed", sha=commit.sha, error=str(e)
                    )
                    stats.failures.append(
                        ComparisonFailure(
                            sha=commit.sha,
                            error_type=type(e).__name__,
                            message=str(e),
                        )
                    )
                    generation.adjacent_diffs.put(commit.sha, ())
                    continue

                generation.changes.add_all(changes)
                generation.adjacent_diffs.put(commit.sha, changes)
                stats.changes_recorded += len(changes)
        except HistoryWalkError as e:
            logger.error(
                "history_walk_failed",
                error=str(e),
                commits_walked=stats.commits_collected,
            )
            stats.walk_completed = False

        return generation, stats

    # Commit index queries

    def all_commit_ids(self) -> frozenset[str]:
        """Return the identifiers of every collected commit."""
        return self._generation.commits.ids()

    def most_recent_commit_id(self) -> str:
        """Return the SHA of the newest commit, or "" before any collect."""
        commit = self._generation.commits.most_recent()
        return commit.sha if commit else ""

    def least_recent_commit_id(self) -> str:
        """Return the SHA of the oldest commit, or "" before any collect."""
        commit = self._generation.commits.least_recent()
        return commit.sha if commit else ""

    def commit_time(self, commit_id: str) -> int | None:
        commit = self._generation.commits.get(commit_id)
        return commit.timestamp if commit else None

    def parent_ids(self, commit_id: str) -> tuple[str, ...]:
        commit = self._generation.commits.get(commit_id)
        return commit.parents if commit else ()

    def committer_name(self, commit_id: str) -> str:
        commit = self._generation.commits.get(commit_id)
        return commit.committer_name if commit else ""

    def committer_email(self, commit_id: str) -> str:
        commit = self._generation.commits.get(commit_id)
        return commit.committer_email if commit else ""

    def log_message(self, commit_id: str) -> str:
        """Return the full commit message, or "" for an unknown commit."""
        commit = self._generation.commits.get(commit_id)
        return commit.message if commit else ""

    # Change-set queries

    def file_change_type(self, change_id: str) -> str:
        """Return the change kind name (e.g. "MODIFY") or "" if unknown."""
        return self._generation.changes.change_type(change_id)

    def file_change_path(self, change_id: str) -> str:
        """Return the path after the change, or "" if unknown or deleted."""
        return self._generation.changes.change_path(change_id)

    # Diff resolution

    def changed_files_between_commits(
        self, new_commit_id: str, old_commit_id: str
    ) -> dict[str, str]:
        """Map each change identifier between two commits to its new path.

        Parent/child pairs are answered from the adjacent-diff cache; any
        other pair is compared on demand. Blank identifiers and failed
        comparisons yield an empty mapping.
        """
        changes = self.changes_between_commits(new_commit_id, old_commit_id)
        return {change.change_id: change.path for change in changes}

    def changes_between_commits(
        self, new_commit_id: str, old_commit_id: str
    ) -> list[ChangeRecord]:
        """Return the full change records between two commits, in diff order."""
        if not (new_commit_id or "").strip() or not (old_commit_id or "").strip():
            logger.warning(
                "blank_commit_id",
                new_commit_id=new_commit_id,
                old_commit_id=old_commit_id,
            )
            return []

        cached = self._cached_changes(new_commit_id, old_commit_id)
        if cached is not None:
            return cached

        if self._repo is None:
            logger.warning("comparison_before_collect", new_commit_id=new_commit_id)
            return []

        try:
            return self.engine.diff_trees(self._repo, old_commit_id, new_commit_id)
        except ComparisonError as e:
            logger.error(
                "comparison_failed",
                new_commit_id=new_commit_id,
                old_commit_id=old_commit_id,
                error=str(e),
            )
            return []

    def _cached_changes(
        self, new_commit_id: str, old_commit_id: str
    ) -> list[ChangeRecord] | None:
        commit = self._generation.commits.get(new_commit_id)
        if commit is None or old_commit_id not in commit.parents:
            return None

        return list(self._generation.adjacent_diffs.get(new_commit_id) or ())

    # Resource management

    def close(self) -> None:
        """Release the repository handle and its git subprocesses."""
        if self._repo is not None:
            self._repo.close()
            self._repo = None

    def __enter__(self) -> GitCollector:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
