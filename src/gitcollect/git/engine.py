"""GitPython-based implementation of VcsEngine."""

from collections.abc import Iterator
from pathlib import Path

import git
import structlog

from .base import (
    NULL_SHA,
    ChangeKind,
    ChangeRecord,
    CommitRecord,
    ComparisonError,
    HistoryWalkError,
    RepositoryOpenError,
    VcsEngine,
)

logger = structlog.get_logger(__name__)

# Errors GitPython and gitdb raise for unresolvable revisions or corrupt objects
_LOOKUP_ERRORS = (ValueError, git.exc.ODBError, git.exc.GitCommandError)


def _text(message: str | bytes) -> str:
    # GitPython leaves the message as bytes when its encoding is unknown
    if isinstance(message, bytes):
        return message.decode("utf-8", errors="replace")
    return message


class GitPythonEngine(VcsEngine):
    """GitPython-based implementation of VcsEngine.

    Renames are always detected (GitPython passes ``-M`` to ``diff-tree``).
    Copy detection is opt-in since it makes every comparison more expensive.
    """

    def __init__(self, detect_copies: bool = False) -> None:
        self.detect_copies = detect_copies

    def open_repository(self, path: str | Path) -> git.Repo:
        try:
            return git.Repo(path)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            raise RepositoryOpenError(f"Not a valid git repository: {path}") from e

    def walk_commits(self, repo: git.Repo, rev: str = "HEAD") -> Iterator[CommitRecord]:
        if rev == "HEAD" and not repo.head.is_valid():
            logger.info("empty_repository", repo_path=str(repo.git_dir))
            return

        try:
            for git_commit in repo.iter_commits(rev):
                yield CommitRecord(
                    sha=git_commit.hexsha,
                    timestamp=int(git_commit.committed_date),
                    parents=tuple(p.hexsha for p in git_commit.parents),
                    committer_name=git_commit.committer.name or "",
                    committer_email=git_commit.committer.email or "",
                    message=_text(git_commit.message),
                )
        except _LOOKUP_ERRORS as e:
            raise HistoryWalkError(f"Commit walk from {rev} failed: {e}") from e

    def diff_trees(
        self, repo: git.Repo, old_sha: str, new_sha: str
    ) -> list[ChangeRecord]:
        try:
            old_commit = repo.commit(old_sha)
            new_commit = repo.commit(new_sha)
            # Passing M stops GitPython appending its own -M after -C
            kwargs = {"M": True, "C": True} if self.detect_copies else {}
            diff_index = old_commit.diff(new_commit, **kwargs)
        except _LOOKUP_ERRORS as e:
            raise ComparisonError(
                f"Cannot compare {old_sha} with {new_sha}: {e}"
            ) from e

        return [self._to_change_record(diff_item) for diff_item in diff_index]

    @staticmethod
    def _to_change_record(diff_item: git.Diff) -> ChangeRecord:
        kind = ChangeKind.from_status(diff_item.change_type)
        if kind is ChangeKind.DELETE:
            return ChangeRecord(
                change_id=NULL_SHA,
                kind=kind,
                path="",
                old_path=diff_item.a_path or "",
            )

        change_id = diff_item.b_blob.hexsha if diff_item.b_blob else NULL_SHA
        return ChangeRecord(
            change_id=change_id,
            kind=kind,
            path=diff_item.b_path or diff_item.a_path or "",
            old_path="" if kind is ChangeKind.ADD else (diff_item.a_path or ""),
        )
