"""File classification command."""

import click

from gitcollect.file_types import SourceCodeFileType


@click.command()
@click.argument("files", nargs=-1, required=True)
def classify(files: tuple[str, ...]) -> None:
    """Print the source file type of each of FILES."""
    for file_name in files:
        click.echo(f"{SourceCodeFileType.from_path(file_name).name:<8} {file_name}")
