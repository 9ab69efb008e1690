"""History and diff commands."""

from pathlib import Path

import click

from gitcollect.config import settings
from gitcollect.git import GitCollector, RepositoryOpenError


def _resolve_repository(repository: str) -> Path:
    """Accept a path, or the name of a repository under repositories_dir."""
    path = Path(repository).expanduser()
    if path.exists():
        return path
    return settings.paths.repository_path(repository)


def _collect(collector: GitCollector, repository: str) -> None:
    try:
        stats = collector.collect(_resolve_repository(repository))
    except RepositoryOpenError as e:
        raise click.ClickException(str(e)) from e

    if stats.failures:
        click.echo(
            f"Warning: {len(stats.failures)} commit(s) could not be compared "
            "with their parent",
            err=True,
        )


@click.command()
@click.argument("repository")
def history(repository: str) -> None:
    """Summarise the commit history of REPOSITORY.

    REPOSITORY is a path or the name of a cloned repository.
    """
    with GitCollector() as collector:
        _collect(collector, repository)

        click.echo(f"Commits: {len(collector.all_commit_ids())}")
        click.echo(f"Least recent: {collector.least_recent_commit_id() or '-'}")
        click.echo(f"Most recent: {collector.most_recent_commit_id() or '-'}")


@click.command()
@click.argument("repository")
@click.argument("new_commit")
@click.argument("old_commit")
def diff(repository: str, new_commit: str, old_commit: str) -> None:
    """List files changed between OLD_COMMIT and NEW_COMMIT."""
    with GitCollector() as collector:
        _collect(collector, repository)

        for change in collector.changes_between_commits(new_commit, old_commit):
            click.echo(f"{change.kind.name:<8} {change.path or change.old_path}")
