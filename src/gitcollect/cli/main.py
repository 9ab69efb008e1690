"""gitcollect CLI main entry point."""

import click

from gitcollect import __version__
from gitcollect.config import LOG_FORMATS, LOG_LEVELS, settings
from gitcollect.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="gitcollect")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (defaults to GITCOLLECT_LOGGING__LEVEL).",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default=None,
    help="Log output format.",
)
def cli(log_level: str | None, log_format: str | None) -> None:
    """gitcollect - extract commit history and diffs from git repositories."""
    configure_logging(
        log_level=log_level or settings.logging.level,
        log_format=log_format or settings.logging.format,
    )


# Import and register subcommands
from gitcollect.cli.classify import classify  # noqa: E402
from gitcollect.cli.history import diff, history  # noqa: E402

cli.add_command(history)
cli.add_command(diff)
cli.add_command(classify)
